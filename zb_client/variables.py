"""Shaping of workflow variables into the JSON document the gateway expects."""

import dataclasses
import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from zb_client.errors import InvalidVariablesError


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are accepted by json.loads but are not JSON
    raise InvalidVariablesError(f"variables are not valid JSON: {name} is not allowed")


def validate_document(document: str) -> str:
    """Check that a string holds a JSON object and return it unchanged.

    Args:
        document: Raw JSON text

    Returns:
        The same text, as it will be sent to the gateway

    Raises:
        InvalidVariablesError: If the text is not valid JSON or not a JSON object
    """
    try:
        parsed = json.loads(document, parse_constant=_reject_constant)
    except (TypeError, json.JSONDecodeError) as e:
        raise InvalidVariablesError(f"variables are not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise InvalidVariablesError(
            f"variables must be a JSON object, got {type(parsed).__name__}"
        )
    return document


def _is_empty(value: Any) -> bool:
    # Mirrors JSON "omitempty": null, false, 0, "" and empty containers
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    if isinstance(value, (str, bytes, list, tuple, dict, set)):
        return len(value) == 0
    return False


def _to_mapping(obj: Any) -> dict[str, Any]:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, Mapping):
        return dict(obj)
    raise InvalidVariablesError(
        f"cannot serialize {type(obj).__name__} as variables; "
        "expected a pydantic model, dataclass or mapping"
    )


def dump_mapping(mapping: Mapping[str, Any]) -> str:
    """Serialize a mapping to a compact JSON object string."""
    if not isinstance(mapping, Mapping):
        raise InvalidVariablesError(
            f"variables must be a mapping, got {type(mapping).__name__}"
        )
    try:
        return json.dumps(dict(mapping), separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise InvalidVariablesError(f"variables are not JSON serializable: {e}") from e


def dump_object(obj: Any, omit_empty: bool = True) -> str:
    """Serialize an object's fields to a compact JSON object string.

    Args:
        obj: A pydantic model, dataclass instance or mapping
        omit_empty: Drop top-level fields holding empty values

    Returns:
        JSON object string
    """
    fields = _to_mapping(obj)
    if omit_empty:
        fields = {key: value for key, value in fields.items() if not _is_empty(value)}
    return dump_mapping(fields)
