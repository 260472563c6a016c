"""Aggregation layer - pipeline expression helpers."""

from __future__ import annotations

from doc_mapper.aggregation.expressions import AbstractAggregation
from doc_mapper.aggregation.protocol import Aggregation

__all__ = [
    "Aggregation",
    "AbstractAggregation",
]
