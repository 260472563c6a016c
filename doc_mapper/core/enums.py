"""Date unit enumeration."""

from __future__ import annotations

from enum import Enum


class DateUnit(Enum):
    """Units accepted by the date aggregation operators."""

    YEAR = "year"
    QUARTER = "quarter"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    MILLISECOND = "millisecond"
