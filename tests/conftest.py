"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from doc_mapper.core.connection import ConnectionConfig
from doc_mapper.mapping.registry import TypeRegistry


@pytest.fixture
def mongo_config() -> ConnectionConfig:
    """Local MongoDB connection config."""
    return ConnectionConfig(database="doc_mapper_test")


@pytest.fixture
def registry() -> TypeRegistry:
    """Empty, isolated type registry."""
    return TypeRegistry()


@pytest.fixture
def created_at() -> datetime:
    """A UTC timestamp with whole-second precision."""
    return datetime(2024, 3, 14, 15, 9, 26, tzinfo=timezone.utc)


@pytest.fixture
def collection() -> MagicMock:
    """Mock pymongo collection.

    Usage:
        collection.find_one.return_value = {"_id": ..., "name": "Alice"}
    """
    mock = MagicMock()
    mock.name = "people"
    return mock
