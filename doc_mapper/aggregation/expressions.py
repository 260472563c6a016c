"""Aggregation expression helpers.

Small builders for the pipeline operators used across aggregations. Each
helper returns the operator dict; date operators default to the class
timezone.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from doc_mapper.core.enums import DateUnit

Expression = Any
Unit = DateUnit | str


def _unit(unit: Unit) -> str:
    return unit.value if isinstance(unit, DateUnit) else unit


class AbstractAggregation(ABC):
    """Base class for aggregations built from expression helpers.

    Subclasses implement ``pipeline()`` using the helpers below.
    """

    timezone: str = "Europe/Madrid"

    @abstractmethod
    def pipeline(self) -> list[dict[str, Any]]:
        """Return the pipeline stages."""

    def _tz(self, tz: str | None) -> str:
        return tz if tz is not None else self.timezone

    # --- Logical and arithmetic ---

    def not_(self, expression: Expression) -> dict[str, Any]:
        return {"$not": expression}

    def and_(self, *expressions: Expression) -> dict[str, Any]:
        return {"$and": list(expressions)}

    def eq(self, left: Expression, right: Expression) -> dict[str, Any]:
        return {"$eq": [left, right]}

    def cond(self, if_: Expression, then: Expression, else_: Expression) -> dict[str, Any]:
        return {"$cond": {"if": if_, "then": then, "else": else_}}

    def mod(self, dividend: Expression, divisor: Expression) -> dict[str, Any]:
        return {"$mod": [dividend, divisor]}

    def add(self, left: Expression, right: Expression) -> dict[str, Any]:
        return {"$add": [left, right]}

    def subtract(self, left: Expression, right: Expression) -> dict[str, Any]:
        return {"$subtract": [left, right]}

    # --- Fields and arrays ---

    def get_field(self, field: Expression, input_: Expression) -> dict[str, Any]:
        return {"$getField": {"field": field, "input": input_}}

    def array_elem_at(self, array: Expression, index: Expression) -> dict[str, Any]:
        return {"$arrayElemAt": [array, index]}

    # --- Dates ---

    def date_add(
        self,
        date: Expression,
        amount: Expression,
        unit: Unit,
        tz: str | None = None,
    ) -> dict[str, Any]:
        return {
            "$dateAdd": {
                "startDate": date,
                "unit": _unit(unit),
                "amount": amount,
                "timezone": self._tz(tz),
            }
        }

    def date_diff(
        self,
        start_date: Expression,
        end_date: Expression,
        unit: Unit,
        start_of_week: str | None = None,
        tz: str | None = None,
    ) -> dict[str, Any]:
        """``$dateDiff``; startOfWeek is only emitted when given."""
        spec: dict[str, Any] = {
            "startDate": start_date,
            "endDate": end_date,
            "unit": _unit(unit),
            "timezone": self._tz(tz),
        }
        if start_of_week is not None:
            spec["startOfWeek"] = start_of_week
        return {"$dateDiff": spec}

    def date_trunc(
        self,
        date: Expression,
        unit: Unit,
        start_of_week: str | None = None,
        tz: str | None = None,
    ) -> dict[str, Any]:
        spec: dict[str, Any] = {"date": date, "unit": _unit(unit), "timezone": self._tz(tz)}
        if start_of_week is not None:
            spec["startOfWeek"] = start_of_week
        return {"$dateTrunc": spec}

    def first_day_of_month(self, date: Expression, tz: str | None = None) -> dict[str, Any]:
        return self.date_trunc(date, DateUnit.MONTH, tz=tz)

    def last_day_of_month(self, date: Expression) -> dict[str, Any]:
        """First day of the next month minus one day."""
        next_month = self.date_add(self.first_day_of_month(date), 1, DateUnit.MONTH)
        return self.date_add(next_month, -1, DateUnit.DAY)

    def remove_time(self, date: Expression, tz: str | None = None) -> dict[str, Any]:
        return self.date_trunc(date, DateUnit.DAY, tz=tz)

    def day_of_month(self, date: Expression, tz: str | None = None) -> dict[str, Any]:
        return {"$dayOfMonth": {"date": date, "timezone": self._tz(tz)}}

    def month(self, date: Expression, tz: str | None = None) -> dict[str, Any]:
        return {"$month": {"date": date, "timezone": self._tz(tz)}}

    def day_of_week(self, date: Expression, tz: str | None = None) -> dict[str, Any]:
        """ISO day of week, Monday is 1."""
        return {"$isoDayOfWeek": {"date": date, "timezone": self._tz(tz)}}

    def week(self, date: Expression, tz: str | None = None) -> dict[str, Any]:
        """ISO week number."""
        return {"$isoWeek": {"date": date, "timezone": self._tz(tz)}}
