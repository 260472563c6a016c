"""Type Registry - resolves type names used in discriminator maps.

Naming convention:
    app.models.Circle  -> dotted path, always unique
    Circle             -> short name, usable while unambiguous
    circle             -> explicit alias given at registration
"""

from __future__ import annotations

from doc_mapper.core.exceptions import AmbiguousTypeError, DuplicateTypeError, TypeNotFoundError


def dotted_path(cls: type) -> str:
    """Return the ``module.QualName`` path of a class."""
    return f"{cls.__module__}.{cls.__qualname__}"


class TypeRegistry:
    """Maps type names to mapped classes.

    Classes are registered as they are declared (``Document`` subclasses
    register themselves); lookups happen when documents are deserialized,
    so discriminator maps may name classes declared after them. A class
    redefined at the same dotted path replaces the previous definition.
    """

    def __init__(self) -> None:
        self._by_path: dict[str, type] = {}
        self._by_name: dict[str, list[str]] = {}
        self._aliases: dict[str, str] = {}

    def register(self, cls: type, name: str | None = None) -> type:
        """Register *cls* under its short name, dotted path and optional alias.

        Raises:
            DuplicateTypeError: If *name* is already an alias of another class.
        """
        path = dotted_path(cls)
        if name is not None:
            owner = self._aliases.get(name)
            if owner is not None and owner != path:
                raise DuplicateTypeError(name, owner, path)
            self._aliases[name] = path

        if path not in self._by_path:
            self._by_name.setdefault(cls.__name__, []).append(path)
        self._by_path[path] = cls
        return cls

    def get(self, type_name: str) -> type:
        """Look up a class by alias, dotted path or short name.

        Raises:
            TypeNotFoundError: If no class matches.
            AmbiguousTypeError: If a short name matches several classes.
        """
        if type_name in self._aliases:
            return self._by_path[self._aliases[type_name]]
        if type_name in self._by_path:
            return self._by_path[type_name]
        paths = self._by_name.get(type_name)
        if not paths:
            raise TypeNotFoundError(type_name)
        if len(paths) > 1:
            raise AmbiguousTypeError(type_name, sorted(paths))
        return self._by_path[paths[0]]

    def has(self, type_name: str) -> bool:
        """Check if a type name is registered."""
        return (
            type_name in self._aliases
            or type_name in self._by_path
            or type_name in self._by_name
        )

    @property
    def type_names(self) -> list[str]:
        """List all registered dotted paths, sorted alphabetically."""
        return sorted(self._by_path.keys())

    def __len__(self) -> int:
        """Number of registered classes."""
        return len(self._by_path)


default_registry = TypeRegistry()


def register(cls: type | None = None, *, name: str | None = None):  # type: ignore[no-untyped-def]
    """Register a class in the default registry.

    Usable bare (``@register``) or with an alias (``@register(name="circle")``).
    """

    def _register(target: type) -> type:
        return default_registry.register(target, name)

    if cls is None:
        return _register
    return _register(cls)
