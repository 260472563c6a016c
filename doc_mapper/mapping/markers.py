"""Declarative persistence markers.

Field level::

    class Person(Document):
        id: Annotated[ObjectId, Persist("_id")]
        name: Annotated[str, Persist()]
        nickname: str | None = persisted(default=None)   # dataclass fields

Accessor level, for fields that carry no marker themselves::

    class Person(Document):
        _email: str

        @property
        @persist()
        def email(self) -> str: ...

Type level::

    @discriminator("kind", {"circle": Circle, "square": "Square"})
    class Shape(Document): ...
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

# Key under which persisted() stores its marker in dataclass field metadata
PERSIST_METADATA_KEY = "doc_mapper.persist"

# Attribute holding a marker on accessor functions
PERSIST_ATTRIBUTE = "__doc_mapper_persist__"

# Attribute holding a class's own discriminator map
DISCRIMINATOR_ATTRIBUTE = "__doc_mapper_discriminator__"

C = TypeVar("C", bound=type)
F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class Persist:
    """Marks a field as persisted, optionally under an explicit document name."""

    name: str | None = None


def persisted(name: str | None = None, **kwargs: Any) -> Any:
    """Declare a persisted dataclass field.

    Accepts the keyword arguments of ``dataclasses.field``.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[PERSIST_METADATA_KEY] = Persist(name)
    return dataclasses.field(metadata=metadata, **kwargs)


def persist(name: str | None = None) -> Callable[[F], F]:
    """Mark a getter or setter as the persisted accessor of its field."""

    def _mark(func: F) -> F:
        setattr(func, PERSIST_ATTRIBUTE, Persist(name))
        return func

    return _mark


def marker_of(obj: Any) -> Persist | None:
    """Return the marker attached to an accessor function, if any."""
    if isinstance(obj, property):
        obj = obj.fget
    return getattr(obj, PERSIST_ATTRIBUTE, None)


@dataclass(frozen=True)
class DiscriminatorMap:
    """Concrete type table of a polymorphic class.

    Attributes:
        type_property: Document key holding the discriminator value.
        mapping: Discriminator value -> concrete class or registered type name.
    """

    type_property: str
    mapping: Mapping[Any, type | str]

    def lookup(self, value: Any) -> type | str | None:
        try:
            return self.mapping.get(value)
        except TypeError:
            # Unhashable discriminator values match nothing
            return None


def discriminator(type_property: str, mapping: Mapping[Any, type | str]) -> Callable[[C], C]:
    """Attach a discriminator map to a polymorphic class."""
    table = DiscriminatorMap(type_property, dict(mapping))

    def _decorate(cls: C) -> C:
        setattr(cls, DISCRIMINATOR_ATTRIBUTE, table)
        return cls

    return _decorate


def discriminator_of(cls: type) -> DiscriminatorMap | None:
    """Return the discriminator map declared on *cls* itself (not inherited)."""
    return vars(cls).get(DISCRIMINATOR_ATTRIBUTE)
