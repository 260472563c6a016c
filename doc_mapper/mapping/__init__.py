"""Mapping layer - convert model objects to and from BSON documents."""

from __future__ import annotations

from doc_mapper.mapping.deserialize import deserialize_value, populate
from doc_mapper.mapping.discriminator import resolve
from doc_mapper.mapping.fields import PersistedField, check_collisions, fields_of
from doc_mapper.mapping.hints import TypeHint, parse_hints
from doc_mapper.mapping.markers import (
    DiscriminatorMap,
    Persist,
    discriminator,
    persist,
    persisted,
)
from doc_mapper.mapping.model import Document, DocumentMapper, from_document, to_document
from doc_mapper.mapping.protocol import BsonSerializable, BsonUnserializable, Mapper
from doc_mapper.mapping.registry import TypeRegistry, default_registry, register
from doc_mapper.mapping.serialize import serialize_value

__all__ = [
    "Document",
    "DocumentMapper",
    "to_document",
    "from_document",
    "serialize_value",
    "deserialize_value",
    "populate",
    "resolve",
    "fields_of",
    "check_collisions",
    "PersistedField",
    "TypeHint",
    "parse_hints",
    "Persist",
    "persist",
    "persisted",
    "discriminator",
    "DiscriminatorMap",
    "TypeRegistry",
    "default_registry",
    "register",
    "Mapper",
    "BsonSerializable",
    "BsonUnserializable",
]
