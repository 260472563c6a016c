"""Aggregation protocol.

Aggregations are built dynamically, with the fields and values each call
needs, and handed to the driver as a pipeline.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Aggregation(Protocol):
    """An object that produces an aggregation pipeline."""

    def pipeline(self) -> list[dict[str, Any]]:
        """Return the pipeline stages."""
        ...
