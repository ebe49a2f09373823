from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from ..common.datetime_utils import coerce_date, minutes_since_midnight
from ..common.validators import require_iterable
from ..core.enums import SortDirection
from ..core.exceptions import ValidationError
from .statistics import score_value

DATE = "date"
NUMBER = "number"
TEXT = "text"


@dataclass(frozen=True)
class SortColumn:
    """How one table column reads and compares its values."""

    kind: str
    getter: Callable[[Any], Any]

    def key(self, item: Any):
        value = self.getter(item)
        if self.kind == DATE:
            day = value.date() if isinstance(value, datetime) else value
            if not isinstance(day, date):
                day = coerce_date(day)
            # Missing dates behave as "infinitely far in the future".
            return (1, 0) if day is None else (0, day.toordinal())
        if self.kind == NUMBER:
            return score_value(value)
        if value is None:
            return ""
        if isinstance(value, Enum):
            value = value.value
        return str(value).lower()


TASK_COLUMNS: Mapping[str, SortColumn] = {
    "title": SortColumn(TEXT, lambda v: v.task.title),
    "assignee": SortColumn(TEXT, lambda v: v.assignee_name),
    "department": SortColumn(TEXT, lambda v: v.department),
    "status": SortColumn(TEXT, lambda v: v.display_status),
    "deadline": SortColumn(DATE, lambda v: v.deadline),
    "completed_on": SortColumn(DATE, lambda v: v.completed_on),
    "created": SortColumn(DATE, lambda v: v.created_on),
    "score": SortColumn(NUMBER, lambda v: v.quality_score),
}

ATTENDANCE_COLUMNS: Mapping[str, SortColumn] = {
    "name": SortColumn(TEXT, lambda r: r.member_name),
    "department": SortColumn(TEXT, lambda r: r.department),
    "date": SortColumn(DATE, lambda r: r.date),
    "status": SortColumn(TEXT, lambda r: r.status),
    "punch_in": SortColumn(NUMBER, lambda r: minutes_since_midnight(r.punch_in) if r.punch_in else None),
}


RATING_COLUMNS: Mapping[str, SortColumn] = {
    "name": SortColumn(TEXT, lambda r: r.member_name),
    "department": SortColumn(TEXT, lambda r: r.department),
    "date": SortColumn(DATE, lambda r: r.date),
    "quality": SortColumn(NUMBER, lambda r: r.rating.quality),
    "punctuality": SortColumn(NUMBER, lambda r: r.rating.punctuality),
    "reliability": SortColumn(NUMBER, lambda r: r.rating.reliability),
    "deadlines": SortColumn(NUMBER, lambda r: r.rating.deadlines),
    "average": SortColumn(NUMBER, lambda r: r.average),
}


def parse_direction(direction: Union[SortDirection, str, None]) -> SortDirection:
    if direction is None:
        return SortDirection.ASC
    if isinstance(direction, SortDirection):
        return direction
    try:
        return SortDirection(str(direction).strip().lower())
    except ValueError:
        raise ValidationError(f"Invalid sort direction: {direction!r}")


def sort_items(
    items: Iterable[Any],
    column: str,
    direction: Union[SortDirection, str, None] = SortDirection.ASC,
    *,
    columns: Mapping[str, SortColumn] = TASK_COLUMNS,
) -> list:
    """Stable, type-aware sort; returns a new list.

    Ties keep their incoming order in both directions, so re-sorting an
    already sorted view never reshuffles equal rows.
    """
    values = require_iterable(items, "items")
    sort_column = columns.get(column)
    if sort_column is None:
        raise ValidationError(f"Unknown sort column: {column!r}")
    reverse = parse_direction(direction) == SortDirection.DESC
    return sorted(values, key=sort_column.key, reverse=reverse)


@dataclass(frozen=True)
class SortState:
    column: Optional[str] = None
    direction: SortDirection = SortDirection.ASC

    def toggle(self, column: str) -> "SortState":
        """Same column flips direction; a new column starts ascending."""
        if column == self.column:
            return SortState(column=column, direction=self.direction.flipped())
        return SortState(column=column, direction=SortDirection.ASC)

    def apply(self, items: Iterable[Any], *, columns: Mapping[str, SortColumn] = TASK_COLUMNS) -> list:
        if self.column is None:
            return require_iterable(items, "items")
        return sort_items(items, self.column, self.direction, columns=columns)
