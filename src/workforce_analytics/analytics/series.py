"""Chart series over trailing calendar windows.

A window is always emitted in full (one label per day or month, oldest
first) so chart axes stay stable however sparse the data is. Every category
yields one value per bucket, aligned with ``labels``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Callable, Iterable, Optional, Sequence

from ..attendance.absence import DEFAULT_ABSENCE_POLICY, AbsencePolicy
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import coerce_date, month_key, shift_months
from ..common.validators import require_iterable, require_positive_int
from ..core.enums import AttendanceStatus
from ..ratings.model import Rating
from ..tasks.model import TaskView
from .statistics import PRESENT_STATUSES

DateOf = Callable[[Any], Optional[date]]


def _always(_item: Any) -> bool:
    return True


class SeriesCategory(ABC):
    """One named series: which date buckets an item and how a bucket is measured."""

    name: str

    @abstractmethod
    def date_of(self, item: Any) -> Optional[date]:
        raise NotImplementedError

    @abstractmethod
    def measure(self, bucket: Sequence[Any]) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class CountCategory(SeriesCategory):
    """Number of bucketed items matching ``predicate``."""

    name: str
    dated_by: DateOf
    predicate: Callable[[Any], bool] = _always

    def date_of(self, item: Any) -> Optional[date]:
        return coerce_date(self.dated_by(item))

    def measure(self, bucket: Sequence[Any]) -> int:
        return sum(1 for item in bucket if self.predicate(item))


@dataclass(frozen=True)
class AbsenceCategory(SeriesCategory):
    """Absent members per day, inferred from the day's records by ``policy``.

    Uses the headcount known at call time for every day of the window;
    headcount changes are not back-applied to past days.
    """

    total_active: int
    name: str = AttendanceStatus.ABSENT.value
    policy: AbsencePolicy = field(default=DEFAULT_ABSENCE_POLICY)

    def date_of(self, item: Any) -> Optional[date]:
        return item.date

    def measure(self, bucket: Sequence[Any]) -> int:
        return self.policy.absent_count(total_active=self.total_active, day_records=bucket)


@dataclass(frozen=True)
class AverageCategory(SeriesCategory):
    """Mean of ``value_of`` over the bucket; None for an empty bucket (a gap in the line)."""

    name: str
    dated_by: DateOf
    value_of: Callable[[Any], float]

    def date_of(self, item: Any) -> Optional[date]:
        return coerce_date(self.dated_by(item))

    def measure(self, bucket: Sequence[Any]) -> Optional[float]:
        if not bucket:
            return None
        return sum(self.value_of(item) for item in bucket) / len(bucket)


@dataclass(frozen=True)
class ChartSeries:
    labels: list[str]
    keys: list[str]
    series: dict[str, list]

    def as_dict(self) -> dict:
        return {"labels": list(self.labels), "keys": list(self.keys), "series": {k: list(v) for k, v in self.series.items()}}


def day_label(day: date) -> str:
    """``Mon 15`` style tick label."""
    return f"{day.strftime('%a')} {day.day}"


def month_label(first_day: date) -> str:
    """``Jan 2024`` style tick label."""
    return first_day.strftime("%b %Y")


def trailing_days(today: date, days: int) -> list[date]:
    days = require_positive_int(days, "days")
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def trailing_months(today: date, months: int) -> list[date]:
    """First day of each month in the window, oldest first, ending with today's month."""
    months = require_positive_int(months, "months")
    return [shift_months(today, -offset) for offset in range(months - 1, -1, -1)]


def _build(
    items: list,
    bucket_keys: list,
    labels: list[str],
    categories: Sequence[SeriesCategory],
    key_of: Callable[[date], Any],
) -> ChartSeries:
    wanted = set(bucket_keys)
    series: dict[str, list] = {}
    for category in categories:
        buckets: dict[Any, list] = {k: [] for k in bucket_keys}
        for item in items:
            day = category.date_of(item)
            if day is None:
                continue
            k = key_of(day)
            if k in wanted:
                buckets[k].append(item)
        series[category.name] = [category.measure(buckets[k]) for k in bucket_keys]
    return ChartSeries(labels=labels, keys=[str(k) for k in bucket_keys], series=series)


def build_daily_series(
    records: Iterable[Any],
    days: int,
    today: date,
    categories: Sequence[SeriesCategory],
    *,
    label_for: Callable[[date], str] = day_label,
) -> ChartSeries:
    """One bucket per calendar day over ``days`` days ending at ``today`` inclusive."""
    items = require_iterable(records, "records")
    categories = require_iterable(categories, "categories")
    window = trailing_days(today, days)
    return _build(items, window, [label_for(d) for d in window], categories, key_of=lambda d: d)


def build_monthly_series(
    items: Iterable[Any],
    months: int,
    today: date,
    categories: Sequence[SeriesCategory],
    *,
    label_for: Callable[[date], str] = month_label,
) -> ChartSeries:
    """One bucket per calendar month over ``months`` months ending with today's month.

    Months without any contributing item are still emitted (0 for counts,
    None for averages).
    """
    values = require_iterable(items, "items")
    categories = require_iterable(categories, "categories")
    window = trailing_months(today, months)
    keys = [month_key(d) for d in window]
    return _build(values, keys, [label_for(d) for d in window], categories, key_of=month_key)


def attendance_categories(total_active: int, policy: Optional[AbsencePolicy] = None) -> list[SeriesCategory]:
    """Present (On Time or Present) / Late / Absent-by-policy."""
    return [
        CountCategory(AttendanceStatus.PRESENT.value, lambda r: r.date, lambda r: r.status in PRESENT_STATUSES),
        CountCategory(AttendanceStatus.LATE.value, lambda r: r.date, lambda r: r.status == AttendanceStatus.LATE),
        AbsenceCategory(total_active=total_active, policy=policy or DEFAULT_ABSENCE_POLICY),
    ]


def attendance_trend(
    records: Iterable[AttendanceRecord],
    *,
    total_active: int,
    days: int,
    today: date,
    policy: Optional[AbsencePolicy] = None,
) -> ChartSeries:
    return build_daily_series(records, days, today, attendance_categories(total_active, policy))


def _created_or_deadline(view: TaskView) -> Optional[date]:
    return view.created_on or view.deadline


TASK_CATEGORIES: list[SeriesCategory] = [
    CountCategory("Created", _created_or_deadline),
    CountCategory("Completed", lambda v: v.completed_on),
]


def task_monthly_trend(views: Iterable[TaskView], *, months: int, today: date) -> ChartSeries:
    """Created (falls back to deadline) vs. completed tasks per month."""
    return build_monthly_series(views, months, today, TASK_CATEGORIES)


def rating_monthly_trend(
    ratings: Iterable[Rating],
    *,
    months: int,
    today: date,
    member_id: Optional[str] = None,
    name: str = "Team Average",
) -> ChartSeries:
    """Mean of per-rating averages per month, optionally for one member."""
    items = require_iterable(ratings, "ratings")
    if member_id is not None:
        items = [r for r in items if r.member_id == member_id]
    category = AverageCategory(name, lambda r: r.date, lambda r: r.average_score())
    return build_monthly_series(items, months, today, [category], label_for=lambda d: d.strftime("%b"))
