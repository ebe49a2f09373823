from __future__ import annotations

from datetime import time
from typing import Any, Optional

from ..common.datetime_utils import minutes_since_midnight, parse_clock_time
from ..core.enums import AttendanceStatus
from ..settings.model import OrgSettings
from .factory import PunchStrategyFactory
from .strategies.base import StatusDecision

_MINUTES_PER_DAY = 24 * 60

_default_factory = PunchStrategyFactory()


def _decide(punch_in: Any, settings: OrgSettings, factory: Optional[PunchStrategyFactory]) -> StatusDecision:
    factory = factory or _default_factory
    strategy = factory.for_punch(punch_in=punch_in, settings=settings)
    parsed = punch_in if isinstance(punch_in, time) else parse_clock_time(punch_in)
    return strategy.decide(punch_in=parsed, settings=settings)


def classify_punch(
    punch_in: Any,
    settings: OrgSettings,
    *,
    factory: Optional[PunchStrategyFactory] = None,
) -> AttendanceStatus:
    """Status for a punch-in against the organization start time and grace period.

    No punch-in -> Absent; unreadable punch-in -> Present;
    ``punch_in <= start + grace`` -> On Time; otherwise Late.
    """
    return _decide(punch_in, settings, factory).status


def late_minutes(
    punch_in: Any,
    settings: OrgSettings,
    *,
    factory: Optional[PunchStrategyFactory] = None,
) -> int:
    """Minutes past the start time for a late punch-in; 0 otherwise."""
    return _decide(punch_in, settings, factory).late_minutes


def worked_minutes(punch_in: Any, punch_out: Any) -> int:
    """Minutes between punches; a punch-out before punch-in wraps past midnight."""
    start = punch_in if isinstance(punch_in, time) else parse_clock_time(punch_in)
    end = punch_out if isinstance(punch_out, time) else parse_clock_time(punch_out)
    if start is None or end is None:
        return 0

    diff = minutes_since_midnight(end) - minutes_since_midnight(start)
    if diff < 0:
        diff += _MINUTES_PER_DAY
    return diff


def format_worked_hours(minutes: int) -> str:
    """``H:MM`` rendering of a minute count."""
    minutes = max(int(minutes), 0)
    return f"{minutes // 60}:{minutes % 60:02d}"
