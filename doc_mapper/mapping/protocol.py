"""Mapper and capability protocols.

Mappers implement ``Mapper``; the Repository calls map_one for single
documents and map_many for cursor results.

Nested model objects take part in recursive conversion through the two
capability protocols: ``BsonSerializable`` produces a document from self,
``BsonUnserializable`` populates a fresh self from a document.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


class Mapper(Protocol[T]):
    """Base mapper protocol."""

    def map_one(self, row: Any) -> T:
        """Map a single document to a target object."""
        ...

    def map_many(self, rows: list[Any]) -> list[T]:
        """Map multiple documents to a list of target objects."""
        ...


@runtime_checkable
class BsonSerializable(Protocol):
    """Objects that can produce their own document representation."""

    def bson_serialize(self) -> dict[str, Any] | list[Any]:
        """Return a dict or list ready to be encoded to BSON."""
        ...


@runtime_checkable
class BsonUnserializable(Protocol):
    """Objects that can populate themselves from a document."""

    def bson_unserialize(self, data: Any) -> None:
        """Populate self from decoded document data."""
        ...
