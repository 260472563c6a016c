"""Declared type descriptors.

Resolved annotations are turned into ``TypeHint`` descriptors that guide
deserialization: the target class, nullability, and for collections the
element hint.
"""

from __future__ import annotations

import collections.abc
import types
import typing
from dataclasses import dataclass
from typing import Annotated, Any, Union, get_args, get_origin

_COLLECTION_ORIGINS: frozenset[Any] = frozenset(
    {
        list,
        tuple,
        set,
        frozenset,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
        collections.abc.Iterable,
        collections.abc.Collection,
    }
)

_MAPPING_ORIGINS: frozenset[Any] = frozenset(
    {
        dict,
        collections.abc.Mapping,
        collections.abc.MutableMapping,
    }
)

_UNION_ORIGINS: frozenset[Any] = frozenset({Union, types.UnionType})


@dataclass(frozen=True)
class TypeHint:
    """A single declared type of a persisted field.

    Attributes:
        cls: Runtime class of the declared type (the container class for
            collections and mappings). None when the type carries no class.
        nullable: Whether None is a declared alternative.
        is_collection: Whether the type is an ordered or set collection.
        is_mapping: Whether the type is a generic key/value mapping.
        element: Hint for collection elements, when declared.
    """

    cls: Any = None
    nullable: bool = False
    is_collection: bool = False
    is_mapping: bool = False
    element: TypeHint | None = None


def strip_annotated(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split ``Annotated[T, *extras]`` into ``(T, extras)``."""
    if get_origin(annotation) is Annotated:
        base, *extras = get_args(annotation)
        return base, tuple(extras)
    return annotation, ()


def _runtime_class(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is not None:
        return origin
    if isinstance(annotation, type):
        return annotation
    return None


def _single(annotation: Any, nullable: bool) -> TypeHint:
    annotation, _ = strip_annotated(annotation)
    origin = get_origin(annotation)

    if annotation in _COLLECTION_ORIGINS or origin in _COLLECTION_ORIGINS:
        args = [a for a in get_args(annotation) if a is not Ellipsis]
        element = first_hint(args[0]) if args else None
        return TypeHint(
            cls=origin or annotation,
            nullable=nullable,
            is_collection=True,
            element=element,
        )

    if annotation in _MAPPING_ORIGINS or origin in _MAPPING_ORIGINS:
        return TypeHint(cls=origin or annotation, nullable=nullable, is_mapping=True)

    return TypeHint(cls=_runtime_class(annotation), nullable=nullable)


def parse_hints(annotation: Any) -> tuple[TypeHint, ...]:
    """Parse an annotation into its declared types.

    ``X | Y | None`` declares two types, both nullable. ``Any`` and bare
    ``None`` declare nothing.
    """
    annotation, _ = strip_annotated(annotation)
    if annotation is Any or annotation is None or annotation is type(None):
        return ()

    if get_origin(annotation) in _UNION_ORIGINS:
        members = get_args(annotation)
        nullable = type(None) in members
        return tuple(
            _single(member, nullable)
            for member in members
            if member is not type(None) and member is not Any
        )

    if isinstance(annotation, typing.TypeVar):
        return ()

    return (_single(annotation, False),)


def first_hint(annotation: Any) -> TypeHint | None:
    """Return the first declared type of *annotation*, or None."""
    hints = parse_hints(annotation)
    return hints[0] if hints else None
