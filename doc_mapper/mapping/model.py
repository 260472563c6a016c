"""Document model base class and mapper facade.

Supports ``Document`` subclasses, dataclasses, Pydantic models and plain
classes, as long as their persisted fields are declared with the markers
from ``doc_mapper.mapping.markers``.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from doc_mapper.mapping import deserialize, serialize
from doc_mapper.mapping.fields import check_collisions
from doc_mapper.mapping.registry import default_registry

T = TypeVar("T")


class Document:
    """Base class for mapped document models.

    Subclasses take part in recursive (de)serialization through
    ``bson_serialize``/``bson_unserialize`` and are registered by name so
    discriminator maps can refer to them as strings.

    Requirements for a subclass:
    * Persisted fields carry a ``Persist`` marker (or a marked accessor).
    * Serialized fields are readable (public, property, or ``get_x()``);
      deserialized fields are writable (public, property setter, or ``set_x()``).
    * Fields declare their types; only the first declared type guides
      deserialization.
    * The class can be constructed without arguments.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        default_registry.register(cls)

    def bson_serialize(self) -> dict[str, Any]:
        """Return the document for this instance."""
        return serialize.to_document(self)

    def bson_unserialize(self, data: Any) -> None:
        """Populate this instance from a decoded document."""
        deserialize.populate(self, data)


class DocumentMapper(Generic[T]):
    """Document <-> model mapper for one target class.

    Args:
        target_class: The (possibly polymorphic) class documents map to.
        strict: Fail at construction if two persisted fields of
            target_class share a document name.

    Raises:
        FieldCollisionError: In strict mode, on colliding document names.
    """

    def __init__(self, target_class: type[T], *, strict: bool = False) -> None:
        self._target_class = target_class
        self._strict = strict
        if strict:
            check_collisions(target_class)

    @property
    def target_class(self) -> type[T]:
        return self._target_class

    def to_document(self, instance: T) -> dict[str, Any]:
        """Serialize *instance* to a new document."""
        return serialize.to_document(instance)

    def from_document(self, data: Any) -> T:
        """Build a target instance (or resolved subclass) from *data*."""
        instance = deserialize.from_document(data, self._target_class)
        if self._strict and type(instance) is not self._target_class:
            check_collisions(type(instance))
        return instance

    def map_one(self, row: Any) -> T:
        """Map a single document to a target instance."""
        return self.from_document(row)

    def map_many(self, rows: list[Any]) -> list[T]:
        """Map all documents via map_one."""
        return [self.map_one(row) for row in rows]


def to_document(instance: Any) -> dict[str, Any]:
    """Serialize a mapped instance to a new document."""
    return serialize.to_document(instance)


def from_document(data: Any, cls: type[T]) -> T:
    """Build an instance of *cls* (or its resolved subclass) from *data*."""
    return deserialize.from_document(data, cls)
