"""Driver result normalization.

Converts the wrapper types handed out by the driver (``RawBSONDocument``,
``SON``, cursors) into plain dicts and lists, and BSON datetimes into
``datetime`` objects.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from bson.datetime_ms import DatetimeMS

from doc_mapper.core.types import to_datetime


def _normalize_item(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize(value)
    if isinstance(value, list):
        return normalize_array(value)
    if isinstance(value, DatetimeMS):
        return to_datetime(value)
    return value


def normalize(document: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively convert a driver document to a plain dict."""
    return {key: _normalize_item(value) for key, value in document.items()}


def normalize_array(array: Iterable[Any]) -> list[Any]:
    """Recursively convert a driver array to a plain list."""
    return [_normalize_item(value) for value in array]


def normalize_iterable(iterable: Iterable[Any]) -> list[Any]:
    """Drain an iterable (e.g. a cursor) into a list of normalized values."""
    return normalize_array(iterable)


def normalize_generic(obj: Any) -> Any:
    """Normalize any supported driver value.

    Returns:
        A dict, list or datetime, or None when *obj* is empty or is not a
        driver wrapper type.
    """
    if not obj:
        return None
    if isinstance(obj, Mapping):
        return normalize(obj)
    if isinstance(obj, list):
        return normalize_array(obj)
    if isinstance(obj, Iterator):
        return normalize_iterable(obj)
    if isinstance(obj, DatetimeMS):
        return to_datetime(obj)
    return None
