"""Persisted field discovery.

Walks a class's inheritance chain, root ancestor first, and collects the
fields that carry a ``Persist`` marker (directly, through dataclass field
metadata, or through a marked accessor). Results are cached per class.
"""

from __future__ import annotations

import inspect
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import structlog

from doc_mapper.core.exceptions import FieldCollisionError
from doc_mapper.core.naming import accessor_name, to_snake_case
from doc_mapper.mapping.hints import TypeHint, parse_hints, strip_annotated
from doc_mapper.mapping.markers import PERSIST_METADATA_KEY, Persist, marker_of

logger = structlog.get_logger(__name__)

Reader = Callable[[Any], Any]
Writer = Callable[[Any, Any], None]


@dataclass(frozen=True)
class PersistedField:
    """A persisted field of a mapped class.

    Attributes:
        name: Declared attribute identifier.
        document_name: Key of the field in the document.
        owner: Class declaring the field.
        declared_types: All declared types, in declaration order.
        reader: Accessor used when serializing, None if not readable.
        writer: Accessor used when deserializing, None if not writable.
        accessor: Whether reader calls a getter method or property rather
            than reading the attribute directly.
    """

    name: str
    document_name: str
    owner: type
    declared_types: tuple[TypeHint, ...] = ()
    reader: Reader | None = None
    writer: Writer | None = None
    accessor: bool = False

    @property
    def hint(self) -> TypeHint | None:
        """The declared type used for deserialization (first declared wins)."""
        return self.declared_types[0] if self.declared_types else None

    @property
    def nullable(self) -> bool:
        hint = self.hint
        return hint is not None and hint.nullable

    @property
    def readable(self) -> bool:
        return self.reader is not None

    @property
    def writable(self) -> bool:
        return self.writer is not None

    def is_set(self, instance: Any) -> bool:
        """Check whether the field has a value on *instance* without running accessors.

        Fields read through an accessor always count as set.
        """
        if self.accessor:
            return True
        try:
            value = inspect.getattr_static(instance, self.name)
        except AttributeError:
            return False
        if isinstance(value, types.MemberDescriptorType):
            # Unassigned __slots__ entry
            return hasattr(instance, self.name)
        return True

    def read(self, instance: Any) -> Any:
        """Read the field value; raises AttributeError when unset."""
        if self.reader is None:
            raise AttributeError(f"Field '{self.name}' is not readable")
        return self.reader(instance)

    def write(self, instance: Any, value: Any) -> None:
        if self.writer is None:
            raise AttributeError(f"Field '{self.name}' is not writable")
        self.writer(instance, value)


def _field_marker(klass: type, name: str, extras: tuple[Any, ...]) -> Persist | None:
    for extra in extras:
        if isinstance(extra, Persist):
            return extra
    dc_fields = vars(klass).get("__dataclass_fields__")
    if dc_fields and name in dc_fields:
        marker = dc_fields[name].metadata.get(PERSIST_METADATA_KEY)
        if isinstance(marker, Persist):
            return marker
    return None


def _lookup(cls: type, name: str) -> Any:
    return inspect.getattr_static(cls, name, None)


def _getter(cls: type, name: str) -> tuple[Reader | None, Persist | None, bool]:
    """Find the read accessor: get_x() method, then x property, then public attribute.

    The last item tells whether the reader is an accessor call.
    """
    stem = accessor_name(name)

    method = _lookup(cls, f"get_{stem}")
    if callable(method):
        return (lambda obj: getattr(obj, f"get_{stem}")()), marker_of(method), True

    prop = _lookup(cls, stem)
    if isinstance(prop, property) and prop.fget is not None:
        return (lambda obj: getattr(obj, stem)), marker_of(prop.fget), True

    if not name.startswith("_"):
        return (lambda obj: getattr(obj, name)), None, False
    return None, None, False


def _setter(cls: type, name: str) -> tuple[Writer | None, Persist | None]:
    """Find the write accessor: set_x() method, then x property setter, then public attribute."""
    stem = accessor_name(name)

    method = _lookup(cls, f"set_{stem}")
    if callable(method):
        return (lambda obj, value: getattr(obj, f"set_{stem}")(value)), marker_of(method)

    prop = _lookup(cls, stem)
    if isinstance(prop, property):
        if prop.fset is None:
            return None, None
        return (lambda obj, value: setattr(obj, stem, value)), marker_of(prop.fset)

    if not name.startswith("_"):
        return (lambda obj, value: setattr(obj, name, value)), None
    return None, None


def _own_fields(cls: type, klass: type) -> list[PersistedField]:
    """Persisted fields declared by *klass*, with accessors resolved on *cls*."""
    names = inspect.get_annotations(klass)
    if not names:
        return []
    try:
        resolved = typing.get_type_hints(klass, include_extras=True)
    except (NameError, TypeError) as e:
        logger.warning("Unresolved annotations", type=klass.__qualname__, error=str(e))
        resolved = {}

    result: list[PersistedField] = []
    for name in names:
        annotation = resolved.get(name, Any)
        if typing.get_origin(annotation) is typing.ClassVar:
            continue
        base, extras = strip_annotated(annotation)
        marker = _field_marker(klass, name, extras)

        reader, read_marker, accessor = _getter(cls, name)
        writer, write_marker = _setter(cls, name)
        if marker is None:
            # Without a field marker, each direction needs its own marked accessor
            reader = reader if read_marker is not None else None
            writer = writer if write_marker is not None else None
            if reader is None and writer is None:
                continue
            marker = read_marker or write_marker

        document_name = marker.name if marker and marker.name else to_snake_case(name)
        result.append(
            PersistedField(
                name=name,
                document_name=document_name,
                owner=klass,
                declared_types=parse_hints(base),
                reader=reader,
                writer=writer,
                accessor=accessor,
            )
        )
    return result


@lru_cache(maxsize=None)
def fields_of(cls: type) -> tuple[PersistedField, ...]:
    """Return the persisted fields of *cls*, parent-declared fields first.

    A subclass redeclaring a parent field yields two entries; colliding
    document names are reported with a warning.
    """
    collected: list[PersistedField] = []
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        collected.extend(_own_fields(cls, klass))

    for document_name, names in _collisions(collected).items():
        logger.warning(
            "Duplicate document name",
            type=cls.__qualname__,
            document_name=document_name,
            fields=names,
        )
    return tuple(collected)


def _collisions(fields: typing.Iterable[PersistedField]) -> dict[str, list[str]]:
    seen: dict[str, list[str]] = {}
    for field in fields:
        seen.setdefault(field.document_name, []).append(f"{field.owner.__name__}.{field.name}")
    return {key: names for key, names in seen.items() if len(names) > 1}


def check_collisions(cls: type) -> None:
    """Raise FieldCollisionError if two persisted fields share a document name."""
    collisions = _collisions(fields_of(cls))
    if collisions:
        document_name, names = next(iter(collisions.items()))
        raise FieldCollisionError(cls.__name__, document_name, names)


def is_mapped(cls: Any) -> bool:
    """Check whether *cls* is a class with at least one persisted field."""
    return isinstance(cls, type) and bool(fields_of(cls))
