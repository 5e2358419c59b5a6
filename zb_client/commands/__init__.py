"""Fluent command builders for gateway requests."""

from zb_client.commands.base import Command
from zb_client.commands.create_instance import (
    LATEST_VERSION,
    CreateInstanceCommand,
    CreateInstanceWithResultCommand,
)

__all__ = [
    "Command",
    "CreateInstanceCommand",
    "CreateInstanceWithResultCommand",
    "LATEST_VERSION",
]
