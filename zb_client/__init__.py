"""Async Python client for a workflow engine's gateway API."""

from zb_client.client import ZeebeClient
from zb_client.commands import (
    LATEST_VERSION,
    CreateInstanceCommand,
    CreateInstanceWithResultCommand,
)
from zb_client.config import Settings, get_settings
from zb_client.errors import GatewayRequestError, InvalidVariablesError, ZeebeClientError
from zb_client.logs import configure_logging

__all__ = [
    "ZeebeClient",
    "CreateInstanceCommand",
    "CreateInstanceWithResultCommand",
    "LATEST_VERSION",
    "Settings",
    "get_settings",
    "configure_logging",
    "ZeebeClientError",
    "InvalidVariablesError",
    "GatewayRequestError",
]
