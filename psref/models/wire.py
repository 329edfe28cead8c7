# psref/models/wire.py

"""Typed accessors for decoded JSON payloads.

Absent and ``null`` fields read as the zero value of their type.  A
field holding the wrong JSON type raises DecodeError, which the request
executor treats like any other bad response.
"""

from collections.abc import Callable
from datetime import date
from typing import Any, TypeVar

from psref.errors import DecodeError
from psref.models.dates import parse_date

T = TypeVar("T")


def require_object(payload: Any, what: str) -> dict[str, Any]:
    """Return *payload* if it is a JSON object, else raise DecodeError."""
    if not isinstance(payload, dict):
        raise DecodeError(
            f"{what}: expected an object, got {type(payload).__name__}"
        )
    return payload


def require_list(payload: Any, what: str) -> list[Any]:
    """Return *payload* as a list; ``null`` reads as empty."""
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise DecodeError(
            f"{what}: expected an array, got {type(payload).__name__}"
        )
    return payload


def get_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"{key}: expected a string, got {value!r}")
    return value


def get_int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{key}: expected an integer, got {value!r}")
    return value


def get_pid(data: dict[str, Any], key: str) -> int:
    """Read an unsigned product ID."""
    value = get_int(data, key)
    if value < 0:
        raise DecodeError(f"{key}: negative product id {value}")
    return value


def get_date(data: dict[str, Any], key: str) -> date | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(f"{key}: expected a date string, got {value!r}")
    try:
        return parse_date(value)
    except ValueError as exc:
        raise DecodeError(f"{key}: {exc}") from exc


def get_str_list(data: dict[str, Any], key: str) -> list[str]:
    items = require_list(data.get(key), key)
    for item in items:
        if not isinstance(item, str):
            raise DecodeError(f"{key}: expected strings, got {item!r}")
    return list(items)


def get_list(
    data: dict[str, Any],
    key: str,
    decode: Callable[[dict[str, Any]], T],
) -> list[T]:
    """Decode an array of objects, preserving wire order."""
    return [
        decode(require_object(item, key))
        for item in require_list(data.get(key), key)
    ]
