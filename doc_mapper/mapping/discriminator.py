"""Polymorphic type resolution.

A class declaring a discriminator map is polymorphic: the concrete class to
build is chosen by the value stored under the map's type property. Resolved
classes may declare their own map, so resolution repeats until a class
without one is reached.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any

import structlog

from doc_mapper.core.exceptions import RegistryError, UnresolvableDiscriminatorError
from doc_mapper.mapping.markers import discriminator_of
from doc_mapper.mapping.registry import TypeRegistry, default_registry

logger = structlog.get_logger(__name__)

_MISSING = object()


def _read_type_property(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key, _MISSING)
    return getattr(value, key, _MISSING)


def resolve(value: Any, cls: type, registry: TypeRegistry | None = None) -> type:
    """Resolve the concrete class to build for *value* declared as *cls*.

    Args:
        value: Document data (mapping or attribute record).
        cls: Declared target class.
        registry: Registry used for string entries; defaults to the
            process-wide registry.

    Raises:
        UnresolvableDiscriminatorError: If the discriminator value matches no
            entry, or the class is abstract and declares no map.
    """
    registry = registry or default_registry
    visited: list[type] = []

    while True:
        table = discriminator_of(cls)
        if table is None:
            if inspect.isabstract(cls):
                raise UnresolvableDiscriminatorError(
                    cls.__name__, "abstract class declares no discriminator map"
                )
            return cls

        key = _read_type_property(value, table.type_property)
        if key is _MISSING:
            raise UnresolvableDiscriminatorError(
                cls.__name__, f"missing type property '{table.type_property}'"
            )

        target = table.lookup(key)
        if target is None:
            raise UnresolvableDiscriminatorError(
                cls.__name__, f"no entry for {table.type_property}={key!r}"
            )
        if isinstance(target, str):
            try:
                target = registry.get(target)
            except RegistryError as e:
                raise UnresolvableDiscriminatorError(cls.__name__, str(e)) from e

        logger.debug(
            "Resolved discriminator",
            type=cls.__name__,
            type_property=table.type_property,
            value=key,
            target=target.__name__,
        )
        if target is cls:
            return cls
        visited.append(cls)
        if target in visited:
            raise UnresolvableDiscriminatorError(
                target.__name__, "discriminator maps form a cycle"
            )
        cls = target
