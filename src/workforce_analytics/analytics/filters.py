"""Filter pipeline.

Each filter value that is None, empty or the dropdown sentinel ``"all"``
means "no constraint". Active constraints are combined with logical AND and
applied in a fixed order. Inputs are never mutated; the result is a new list
that keeps the relative order of the matches.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import coerce_date
from ..common.validators import require_iterable
from ..core.constants import RATING_HIGH_THRESHOLD, RATING_MEDIUM_THRESHOLD
from ..core.enums import ScoreBand
from ..core.exceptions import ValidationError
from ..members.directory import MemberDirectory
from ..ratings.model import Rating
from ..tasks.model import TaskView

ALL = "all"

Predicate = Callable[[Any], bool]

TASK_DATE_FIELDS = ("deadline", "completed_on", "created_on")


def _is_set(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        v = value.strip()
        return bool(v) and v.lower() != ALL
    return True


def _text(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    return str(value).strip()


def _contains(query: str, *fields: Optional[str]) -> bool:
    return any(query in (f or "").lower() for f in fields)


def _date_bounds(start: Any, end: Any) -> tuple[Optional[date], Optional[date]]:
    lo = coerce_date(start) if _is_set(start) else None
    hi = coerce_date(end) if _is_set(end) else None
    if _is_set(start) and lo is None:
        raise ValidationError(f"Invalid start date: {start!r}")
    if _is_set(end) and hi is None:
        raise ValidationError(f"Invalid end date: {end!r}")
    return lo, hi


def _in_range(value: Optional[date], lo: Optional[date], hi: Optional[date]) -> bool:
    if value is None:
        return False
    if lo is not None and value < lo:
        return False
    if hi is not None and value > hi:
        return False
    return True


def _run(items: list, predicates: list[Predicate]) -> list:
    if not predicates:
        return list(items)
    return [item for item in items if all(p(item) for p in predicates)]


@dataclass(frozen=True)
class TaskFilters:
    department: Optional[str] = None
    member_id: Optional[str] = None
    status: Any = None
    start: Any = None
    end: Any = None
    search: Optional[str] = None
    date_field: str = "deadline"

    def cleared(self) -> "TaskFilters":
        return TaskFilters(date_field=self.date_field)

    def with_values(self, **changes) -> "TaskFilters":
        return replace(self, **changes)


def task_predicates(filters: TaskFilters, directory: MemberDirectory) -> list[Predicate]:
    if filters.date_field not in TASK_DATE_FIELDS:
        raise ValidationError(f"Unknown task date field: {filters.date_field!r}")

    predicates: list[Predicate] = []

    if _is_set(filters.department):
        ids = directory.ids_in_department(_text(filters.department))
        predicates.append(lambda v: v.member_id in ids)

    if _is_set(filters.member_id):
        member_id = _text(filters.member_id)
        predicates.append(lambda v: v.member_id == member_id)

    if _is_set(filters.status):
        status = _text(filters.status)
        predicates.append(lambda v: v.display_status.value == status)

    lo, hi = _date_bounds(filters.start, filters.end)
    if lo is not None or hi is not None:
        field = filters.date_field
        predicates.append(lambda v: _in_range(getattr(v, field), lo, hi))

    if _is_set(filters.search):
        query = filters.search.strip().lower()

        def _matches(v: TaskView) -> bool:
            member = directory.get(v.member_id)
            return _contains(query, v.task.title, v.task.description, v.task.notes, member.name if member else None)

        predicates.append(_matches)

    return predicates


def apply_task_filters(
    tasks: Iterable[TaskView],
    filters: Optional[TaskFilters],
    directory: MemberDirectory,
) -> list[TaskView]:
    """Filter annotated tasks; status is matched against the derived status."""
    items = require_iterable(tasks, "tasks")
    if filters is None:
        return list(items)
    return _run(items, task_predicates(filters, directory))


@dataclass(frozen=True)
class AttendanceFilters:
    department: Optional[str] = None
    member_id: Optional[str] = None
    status: Any = None
    start: Any = None
    end: Any = None
    search: Optional[str] = None


def apply_attendance_filters(
    records: Iterable[AttendanceRecord],
    filters: Optional[AttendanceFilters],
    directory: MemberDirectory,
) -> list[AttendanceRecord]:
    items = require_iterable(records, "records")
    if filters is None:
        return list(items)

    predicates: list[Predicate] = []

    if _is_set(filters.department):
        dept = _text(filters.department)
        predicates.append(lambda r: directory.department_of(r.member_id) == dept or r.department == dept)

    if _is_set(filters.member_id):
        member_id = _text(filters.member_id)
        predicates.append(lambda r: r.member_id == member_id)

    if _is_set(filters.status):
        status = _text(filters.status)
        predicates.append(lambda r: r.status.value == status)

    lo, hi = _date_bounds(filters.start, filters.end)
    if lo is not None or hi is not None:
        predicates.append(lambda r: _in_range(r.date, lo, hi))

    if _is_set(filters.search):
        query = filters.search.strip().lower()

        def _matches(r: AttendanceRecord) -> bool:
            member = directory.get(r.member_id)
            return _contains(query, r.member_name or (member.name if member else None))

        predicates.append(_matches)

    return _run(items, predicates)


@dataclass(frozen=True)
class RatingFilters:
    department: Optional[str] = None
    member_id: Optional[str] = None
    score_band: Any = None
    search: Optional[str] = None


def score_band_of(average: float) -> ScoreBand:
    if average >= RATING_HIGH_THRESHOLD:
        return ScoreBand.HIGH
    if average >= RATING_MEDIUM_THRESHOLD:
        return ScoreBand.MEDIUM
    return ScoreBand.LOW


def apply_rating_filters(
    ratings: Iterable[Rating],
    filters: Optional[RatingFilters],
    directory: MemberDirectory,
) -> list[Rating]:
    items = require_iterable(ratings, "ratings")
    if filters is None:
        return list(items)

    predicates: list[Predicate] = []

    if _is_set(filters.department):
        ids = directory.ids_in_department(_text(filters.department))
        predicates.append(lambda r: r.member_id in ids)

    if _is_set(filters.member_id):
        member_id = _text(filters.member_id)
        predicates.append(lambda r: r.member_id == member_id)

    if _is_set(filters.score_band):
        try:
            band = ScoreBand(_text(filters.score_band).lower())
        except ValueError:
            raise ValidationError(f"Unknown score band: {filters.score_band!r}")
        predicates.append(lambda r: score_band_of(r.average_score()) == band)

    if _is_set(filters.search):
        query = filters.search.strip().lower()

        def _matches(r: Rating) -> bool:
            member = directory.get(r.member_id)
            return _contains(
                query,
                member.name if member else None,
                member.department if member else None,
                r.comments,
            )

        predicates.append(_matches)

    return _run(items, predicates)
