"""Model -> document conversion.

Type-directed recursive conversion of model values into values the BSON
encoder accepts. Mapped objects become nested documents.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import date
from enum import Enum
from typing import Any

from doc_mapper.core.exceptions import CyclicStructureError, UnsupportedValueError
from doc_mapper.core.types import is_native, utc_datetime
from doc_mapper.mapping.fields import fields_of, is_mapped
from doc_mapper.mapping.protocol import BsonSerializable

_PRIMITIVES = (bool, int, float, str, bytes)

# ids of the objects on the current conversion path
_ACTIVE: ContextVar[frozenset[int]] = ContextVar("doc_mapper_active", default=frozenset())


@contextmanager
def _visiting(value: Any) -> Iterator[None]:
    active = _ACTIVE.get()
    key = id(value)
    if key in active:
        raise CyclicStructureError(type(value).__name__)
    token = _ACTIVE.set(active | {key})
    try:
        yield
    finally:
        _ACTIVE.reset(token)


def serialize_value(value: Any) -> Any:
    """Convert a model value to its document representation.

    Raises:
        UnsupportedValueError: If the value has no document representation.
        CyclicStructureError: If the value contains itself.
    """
    # Before primitives: IntEnum and StrEnum members are ints and strs too
    if isinstance(value, Enum):
        return serialize_value(value.value)

    if value is None or isinstance(value, _PRIMITIVES):
        return value

    if isinstance(value, date):
        return utc_datetime(value)

    if is_native(value):
        return value

    if isinstance(value, BsonSerializable):
        return value.bson_serialize()

    if is_mapped(type(value)):
        return to_document(value)

    if isinstance(value, Mapping):
        with _visiting(value):
            return {serialize_value(k): serialize_value(v) for k, v in value.items()}

    # Sets are written as lists, in iteration order
    if isinstance(value, (list, tuple, set, frozenset)):
        with _visiting(value):
            return [serialize_value(item) for item in value]

    raise UnsupportedValueError(type(value).__qualname__)


def to_document(instance: Any) -> dict[str, Any]:
    """Serialize the persisted fields of *instance* into a new document.

    Fields are written in field-list order. Attribute fields whose value is
    not set on this instance are skipped; errors raised by accessors
    propagate. The instance is not modified.
    """
    document: dict[str, Any] = {}
    with _visiting(instance):
        for field in fields_of(type(instance)):
            if not field.readable or not field.is_set(instance):
                continue
            document[field.document_name] = serialize_value(field.read(instance))
    return document
