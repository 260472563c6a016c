"""doc-mapper - declaration-driven object/document mapping for MongoDB."""

from __future__ import annotations

from doc_mapper.aggregation import AbstractAggregation, Aggregation
from doc_mapper.core.connection import (
    AsyncConnectionManager,
    ConnectionConfig,
    ConnectionManager,
)
from doc_mapper.core.enums import DateUnit
from doc_mapper.core.exceptions import (
    AdapterError,
    AmbiguousTypeError,
    ConnectionError,  # noqa: A004
    CyclicStructureError,
    DiscriminatorError,
    DocMapperError,
    DuplicateTypeError,
    FieldCollisionError,
    InstantiationError,
    InvalidIdentifierError,
    MappingError,
    RegistryError,
    TypeNotFoundError,
    UnmatchedEnumValueError,
    UnresolvableDiscriminatorError,
    UnsupportedValueError,
)
from doc_mapper.core.normalize import (
    normalize,
    normalize_array,
    normalize_generic,
    normalize_iterable,
)
from doc_mapper.core.types import now, oid, to_datetime, utc_datetime
from doc_mapper.mapping import (
    Document,
    DocumentMapper,
    Persist,
    TypeRegistry,
    discriminator,
    from_document,
    persist,
    persisted,
    register,
    to_document,
)
from doc_mapper.repository import AsyncRepository, Repository

__all__ = [
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    "AsyncConnectionManager",
    # Mapping
    "Document",
    "DocumentMapper",
    "to_document",
    "from_document",
    "Persist",
    "persist",
    "persisted",
    "discriminator",
    "register",
    "TypeRegistry",
    # Repository
    "Repository",
    "AsyncRepository",
    # Aggregation
    "Aggregation",
    "AbstractAggregation",
    # BSON helpers
    "oid",
    "now",
    "utc_datetime",
    "to_datetime",
    "normalize",
    "normalize_array",
    "normalize_iterable",
    "normalize_generic",
    # Enums
    "DateUnit",
    # Exceptions
    "DocMapperError",
    "MappingError",
    "UnsupportedValueError",
    "CyclicStructureError",
    "UnmatchedEnumValueError",
    "InstantiationError",
    "FieldCollisionError",
    "InvalidIdentifierError",
    "DiscriminatorError",
    "UnresolvableDiscriminatorError",
    "RegistryError",
    "TypeNotFoundError",
    "DuplicateTypeError",
    "AmbiguousTypeError",
    "AdapterError",
    "ConnectionError",
]
