"""Document key naming.

Identifiers are turned into document keys with a fixed transform:
    createdAt     -> created_at
    _created_at   -> created_at
    HTTPServerUrl -> http_server_url
"""

from __future__ import annotations

import re
from functools import lru_cache

# Uppercase run followed by a capitalized word: "HTTPServer" -> "HTTP_Server"
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")

# Lowercase letter or digit followed by an uppercase letter: "createdAt" -> "created_At"
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")

# Runs of separators collapse to a single underscore
_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")


@lru_cache(maxsize=1024)
def to_snake_case(name: str) -> str:
    """Convert a Python identifier to its snake_case document key.

    Leading and trailing underscores are dropped, so private attributes
    (``_name``) share the key of their public accessor (``name``).
    Identifiers already in snake_case are returned unchanged.
    """
    text = _SEPARATORS.sub("_", name).strip("_")
    text = _ACRONYM_BOUNDARY.sub(r"\1_\2", text)
    text = _WORD_BOUNDARY.sub(r"\1_\2", text)
    return text.lower()


def accessor_name(identifier: str) -> str:
    """Return the public accessor stem for an attribute identifier."""
    return identifier.lstrip("_")
