from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_clock_time
from ..core.constants import (
    DEFAULT_LATE_GRACE_MINUTES,
    DEFAULT_START_TIME,
    DEFAULT_WORKING_DAYS,
)

_WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _parse_working_days(value: Any) -> tuple[str, ...]:
    if not value:
        return DEFAULT_WORKING_DAYS
    if isinstance(value, str):
        parts = value.replace("|", ",").split(",")
    else:
        parts = list(value)
    days = tuple(str(p).strip()[:3].title() for p in parts if str(p).strip())
    return days or DEFAULT_WORKING_DAYS


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class OrgSettings:
    """Cấu hình toàn tổ chức (giờ vào ca, thời gian ân hạn, ngày làm việc)."""

    start_time: time = time(9, 0)
    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    working_days: tuple[str, ...] = DEFAULT_WORKING_DAYS

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "OrgSettings":
        """Build from the key/value sheet the data source exposes.

        Unknown keys are ignored; malformed values fall back to defaults.
        """
        raw = raw or {}
        start = parse_clock_time(raw.get("StartTime")) or parse_clock_time(DEFAULT_START_TIME)
        return cls(
            start_time=start,
            late_grace_minutes=max(_to_int(raw.get("LateGracePeriod"), DEFAULT_LATE_GRACE_MINUTES), 0),
            working_days=_parse_working_days(raw.get("WorkingDays")),
        )

    def is_working_day(self, day: date) -> bool:
        return _WEEKDAY_ABBR[day.weekday()] in self.working_days
