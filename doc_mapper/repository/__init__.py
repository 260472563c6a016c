"""Repository layer - DDD repository pattern."""

from __future__ import annotations

from doc_mapper.repository.base import AsyncRepository, Repository, stamp_insert, stamp_update

__all__ = [
    "Repository",
    "AsyncRepository",
    "stamp_insert",
    "stamp_update",
]
