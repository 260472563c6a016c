"""Repository base classes.

Thin wrappers over a pymongo collection + mapper for DDD-oriented usage.
Inserts and updates stamp creation and modification times.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

import structlog

from doc_mapper.aggregation.protocol import Aggregation
from doc_mapper.core.exceptions import MappingError
from doc_mapper.core.normalize import normalize, normalize_array
from doc_mapper.core.types import now
from doc_mapper.mapping.model import DocumentMapper
from doc_mapper.mapping.protocol import Mapper
from doc_mapper.mapping.serialize import serialize_value

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _as_document(entity: Any) -> dict[str, Any]:
    document = serialize_value(entity)
    if not isinstance(document, Mapping):
        raise MappingError(f"'{type(entity).__qualname__}' does not serialize to a document")
    return dict(document)


def stamp_insert(
    document: dict[str, Any],
    created_field: str = "created_at",
    updated_field: str = "updated_at",
) -> dict[str, Any]:
    """Set creation and modification times unless already present."""
    stamp = now()
    document.setdefault(created_field, stamp)
    document.setdefault(updated_field, stamp)
    return document


def stamp_update(document: dict[str, Any], updated_field: str = "updated_at") -> dict[str, Any]:
    """Set the modification time."""
    document[updated_field] = now()
    return document


class _RepositoryBase(Generic[T]):
    def __init__(
        self,
        collection: Any,
        target_class: type[T] | None = None,
        mapper: Mapper[T] | None = None,
        *,
        timestamps: bool = True,
        created_field: str = "created_at",
        updated_field: str = "updated_at",
    ) -> None:
        self.collection = collection
        # Accept either a target class (to build DocumentMapper) or a mapper directly
        if mapper is not None:
            self.mapper: Mapper[T] | None = mapper
        elif target_class is not None:
            self.mapper = DocumentMapper(target_class)
        else:
            self.mapper = None
        self.timestamps = timestamps
        self.created_field = created_field
        self.updated_field = updated_field

    def _insert_document(self, entity: Any) -> dict[str, Any]:
        document = _as_document(entity)
        if self.timestamps:
            stamp_insert(document, self.created_field, self.updated_field)
        return document

    def _update_spec(self, changes: Any) -> dict[str, Any]:
        document = _as_document(changes)
        document.pop("_id", None)
        if self.timestamps:
            stamp_update(document, self.updated_field)
        return {"$set": document}

    def _map_one(self, document: Any) -> Any:
        if document is None:
            return None
        if self.mapper is not None:
            return self.mapper.map_one(document)
        return normalize(document)

    def _map_many(self, documents: list[Any]) -> list[Any]:
        if self.mapper is not None:
            return self.mapper.map_many(documents)
        return normalize_array(documents)


class Repository(_RepositoryBase[T]):
    """Base repository over a ``pymongo.collection.Collection``.

    Subclasses add concrete data access methods on top of the generic
    ones below.
    """

    def insert(self, entity: Any) -> Any:
        """Insert *entity* (mapped object or dict) and return its ``_id``."""
        document = self._insert_document(entity)
        result = self.collection.insert_one(document)
        logger.debug("Inserted document", collection=self.collection.name, id=result.inserted_id)
        return result.inserted_id

    def update(self, filter: Mapping[str, Any], changes: Any, *, upsert: bool = False) -> int:  # noqa: A002
        """``$set`` the fields of *changes* on the first match; return the modified count."""
        result = self.collection.update_one(filter, self._update_spec(changes), upsert=upsert)
        logger.debug("Updated document", collection=self.collection.name, modified=result.modified_count)
        return result.modified_count

    def find_one(self, filter: Mapping[str, Any]) -> T | dict[str, Any] | None:  # noqa: A002
        return self._map_one(self.collection.find_one(filter))

    def find(self, filter: Mapping[str, Any] | None = None) -> list[Any]:  # noqa: A002
        return self._map_many(list(self.collection.find(filter or {})))

    def aggregate(self, aggregation: Aggregation) -> list[dict[str, Any]]:
        """Run *aggregation* and return normalized result documents."""
        return normalize_array(self.collection.aggregate(aggregation.pipeline()))


class AsyncRepository(_RepositoryBase[T]):
    """Async variant of Repository over a ``pymongo.asynchronous`` collection."""

    async def insert(self, entity: Any) -> Any:
        document = self._insert_document(entity)
        result = await self.collection.insert_one(document)
        logger.debug("Inserted document", collection=self.collection.name, id=result.inserted_id)
        return result.inserted_id

    async def update(self, filter: Mapping[str, Any], changes: Any, *, upsert: bool = False) -> int:  # noqa: A002
        result = await self.collection.update_one(filter, self._update_spec(changes), upsert=upsert)
        logger.debug("Updated document", collection=self.collection.name, modified=result.modified_count)
        return result.modified_count

    async def find_one(self, filter: Mapping[str, Any]) -> T | dict[str, Any] | None:  # noqa: A002
        return self._map_one(await self.collection.find_one(filter))

    async def find(self, filter: Mapping[str, Any] | None = None) -> list[Any]:  # noqa: A002
        documents = await self.collection.find(filter or {}).to_list(None)
        return self._map_many(documents)

    async def aggregate(self, aggregation: Aggregation) -> list[dict[str, Any]]:
        cursor = await self.collection.aggregate(aggregation.pipeline())
        return normalize_array(await cursor.to_list(None))
