"""Document -> model conversion.

Type-directed recursive conversion of decoded document values into model
values. The declared type hint of each field decides which class to build;
polymorphic classes are narrowed by the discriminator resolver.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any, TypeVar

from bson.datetime_ms import DatetimeMS

from doc_mapper.core.exceptions import InstantiationError, MappingError, UnmatchedEnumValueError
from doc_mapper.core.normalize import normalize
from doc_mapper.core.types import to_datetime
from doc_mapper.mapping.discriminator import resolve
from doc_mapper.mapping.fields import fields_of, is_mapped
from doc_mapper.mapping.hints import TypeHint
from doc_mapper.mapping.protocol import BsonSerializable, BsonUnserializable

T = TypeVar("T")

_TYPED_CONTAINERS = (tuple, set, frozenset)


def instantiate(cls: type[T]) -> T:
    """Construct an empty instance of *cls*.

    Raises:
        InstantiationError: If the constructor of *cls* requires arguments.
            Errors raised inside the constructor propagate unchanged.
    """
    try:
        signature = inspect.signature(cls)
    except ValueError:
        # No introspectable signature (some extension types)
        return cls()
    try:
        signature.bind()
    except TypeError as e:
        raise InstantiationError(cls.__qualname__, str(e)) from e
    return cls()


def _target_class(hint: TypeHint | None) -> type | None:
    """Return the hinted class when it can populate itself from a document."""
    if hint is None or not isinstance(hint.cls, type) or hint.is_collection or hint.is_mapping:
        return None
    if issubclass(hint.cls, BsonUnserializable) or is_mapped(hint.cls):
        return hint.cls
    return None


def _positional(values: list[Any] | tuple[Any, ...]) -> dict[str, Any]:
    """Treat a sequence as a record keyed by position."""
    return {str(index): value for index, value in enumerate(values)}


def _as_record(data: Any) -> Mapping[str, Any]:
    if isinstance(data, Mapping):
        return data
    if isinstance(data, (list, tuple)):
        return _positional(data)
    if isinstance(data, BsonSerializable):
        return data.bson_serialize()  # type: ignore[return-value]
    if hasattr(data, "__dict__"):
        return vars(data)
    raise MappingError(f"Cannot read document fields from '{type(data).__qualname__}'")


def _build(cls: type[T], data: Any) -> T:
    instance = instantiate(cls)
    if isinstance(instance, BsonUnserializable):
        instance.bson_unserialize(data)
    else:
        populate(instance, data)
    return instance


def _as_date(value: datetime, hint: TypeHint | None) -> date:
    if hint is not None and hint.cls is date:
        return value.date()
    return value


def _to_enum(enum_cls: type[Enum], value: Any) -> Enum:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        raise UnmatchedEnumValueError(enum_cls.__name__, value) from e


def _collect(items: list[Any], hint: TypeHint | None) -> Any:
    if hint is not None and hint.cls in _TYPED_CONTAINERS:
        return hint.cls(items)
    return items


def deserialize_value(value: Any, hint: TypeHint | None = None) -> Any:
    """Convert a decoded document value to its model representation.

    Args:
        value: Value as decoded by the driver.
        hint: Declared type of the target, if known.

    Raises:
        UnresolvableDiscriminatorError: If a polymorphic target cannot be
            narrowed to a concrete class.
        UnmatchedEnumValueError: If a scalar matches no member of the
            hinted enum.
        InstantiationError: If the target class needs constructor arguments.
    """
    if isinstance(value, DatetimeMS):
        converted = to_datetime(value)
        if isinstance(converted, DatetimeMS):
            # Out of datetime range: kept as the encoded value
            return converted
        return _as_date(converted, hint)

    if isinstance(value, datetime):
        return _as_date(value, hint)

    # Driver wrappers (RawBSONDocument and friends)
    if isinstance(value, Mapping) and not isinstance(value, dict):
        return deserialize_value(normalize(value), hint)

    # Objects decoded straight into a self-populating class
    if isinstance(value, BsonUnserializable) and not isinstance(value, type):
        return _build(type(value), _as_record(value))

    target = _target_class(hint)

    if isinstance(value, Mapping):
        if target is not None:
            return _build(resolve(value, target), value)
        # Generic mappings: values are converted without a type hint
        return {key: deserialize_value(item) for key, item in value.items()}

    if isinstance(value, (list, tuple)):
        if target is not None:
            record = _positional(value)
            return _build(resolve(record, target), record)
        element = hint.element if hint is not None and hint.is_collection else None
        return _collect([deserialize_value(item, element) for item in value], hint)

    if value is not None and hint is not None and isinstance(hint.cls, type):
        if issubclass(hint.cls, Enum):
            return _to_enum(hint.cls, value)

    return value


def populate(instance: Any, data: Any) -> None:
    """Populate the persisted fields of *instance* from document *data*.

    Keys missing from *data* leave the field at its constructed default.
    A None result is only written to nullable fields.
    """
    record = _as_record(data)
    for field in fields_of(type(instance)):
        if not field.writable or field.document_name not in record:
            continue
        value = deserialize_value(record[field.document_name], field.hint)
        if value is not None or field.nullable:
            field.write(instance, value)


def from_document(data: Any, cls: type[T]) -> T:
    """Build an instance of *cls* (or its resolved concrete subclass) from *data*."""
    record = _as_record(data)
    return _build(resolve(record, cls), record)
