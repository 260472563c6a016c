"""doc-mapper exception hierarchy.

All exceptions are doc-mapper specific. Raw driver and ``bson`` exceptions
are wrapped before they reach callers.
"""

from __future__ import annotations

from typing import Any


class DocMapperError(Exception):
    """Base exception for all doc-mapper errors."""


# --- Mapping ---


class MappingError(DocMapperError):
    """Base for mapping errors."""


class UnsupportedValueError(MappingError):
    """Raised when a value has no known document representation."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"Type '{type_name}' cannot be serialized to a document")


class CyclicStructureError(MappingError):
    """Raised when serialization re-enters an object already being converted."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"Cyclic structure detected while serializing '{type_name}'")


class UnmatchedEnumValueError(MappingError):
    """Raised when a stored scalar matches no member of the declared enum."""

    def __init__(self, enum_name: str, value: Any) -> None:
        self.enum_name = enum_name
        self.value = value
        super().__init__(f"{value!r} is not a valid value for enum '{enum_name}'")


class InstantiationError(MappingError):
    """Raised when a mapped class cannot be constructed without arguments."""

    def __init__(self, target_class: str, detail: str) -> None:
        self.target_class = target_class
        super().__init__(f"Cannot instantiate '{target_class}': {detail}")


class FieldCollisionError(MappingError):
    """Raised in strict mode when two persisted fields share a document name."""

    def __init__(self, target_class: str, document_name: str, fields: list[str]) -> None:
        self.target_class = target_class
        self.document_name = document_name
        self.fields = fields
        super().__init__(
            f"Fields {fields} of '{target_class}' all map to document key '{document_name}'"
        )


class InvalidIdentifierError(MappingError):
    """Raised when a string is not a valid ObjectId."""

    def __init__(self, value: str, detail: str) -> None:
        self.value = value
        super().__init__(f"Invalid ObjectId {value!r}: {detail}")


class DiscriminatorError(MappingError):
    """Base for polymorphic type resolution errors."""


class UnresolvableDiscriminatorError(DiscriminatorError):
    """Raised when no concrete type can be resolved for a polymorphic class."""

    def __init__(self, type_name: str, detail: str) -> None:
        self.type_name = type_name
        super().__init__(f"Cannot resolve concrete type for '{type_name}': {detail}")


# --- Registry ---


class RegistryError(DocMapperError):
    """Base for type registry errors."""


class TypeNotFoundError(RegistryError):
    """Raised when a type name is not registered."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"Type not registered: '{type_name}'")


class DuplicateTypeError(RegistryError):
    """Raised when two classes resolve to the same dotted path."""

    def __init__(self, type_name: str, existing: str, incoming: str) -> None:
        self.type_name = type_name
        super().__init__(f"Duplicate type name '{type_name}': {existing} and {incoming}")


class AmbiguousTypeError(RegistryError):
    """Raised when a short type name matches several registered classes."""

    def __init__(self, type_name: str, candidates: list[str]) -> None:
        self.type_name = type_name
        self.candidates = candidates
        super().__init__(
            f"Type name '{type_name}' is ambiguous, use one of: {', '.join(candidates)}"
        )


# --- Adapter ---


class AdapterError(DocMapperError):
    """Base for driver adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection and client configuration failures."""
