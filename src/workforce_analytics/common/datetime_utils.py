from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Optional, Union

DateLike = Union[date, datetime, str, None]

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{1,2})(?::(\d{1,2}))?\s*([AaPp][Mm])?$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def coerce_date(value: DateLike) -> Optional[date]:
    """Best-effort conversion of a date-like value to a calendar date.

    Accepts ``date``/``datetime`` objects, ``YYYY-MM-DD`` strings and ISO
    timestamps (``2024-01-15T09:00:00Z``). Time-of-day is dropped. Returns
    None for empty or unparsable input.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    v = str(value).strip()
    if not v:
        return None
    try:
        return parse_iso_date(v[:10])
    except ValueError:
        return None


def parse_clock_time(value: Union[time, datetime, str, None]) -> Optional[time]:
    """Normalize a punch value to a time.

    Accepts ``H:MM``, ``HH:MM:SS``, single-digit minutes (``9:5``), a 12-hour
    suffix (``9:00 AM``, ``1:30 pm``) and ISO timestamps.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.time().replace(second=0, microsecond=0)
    if isinstance(value, time):
        return value
    v = str(value).strip()
    if not v:
        return None

    m = _CLOCK_RE.match(v)
    if m:
        hours, minutes, meridiem = int(m.group(1)), int(m.group(2)), m.group(4)
        if meridiem:
            if not 1 <= hours <= 12:
                return None
            hours = hours % 12 + (12 if meridiem.lower() == "pm" else 0)
        if hours > 23 or minutes > 59:
            return None
        return time(hours, minutes)

    if "T" in v:
        try:
            return datetime.fromisoformat(v.replace("Z", "+00:00")).time().replace(second=0, microsecond=0, tzinfo=None)
        except ValueError:
            return None
    return None


def minutes_since_midnight(value: time) -> int:
    return value.hour * 60 + value.minute


def month_key(value: date) -> str:
    """``YYYY-MM`` bucket key for a date."""
    return f"{value.year:04d}-{value.month:02d}"


def shift_months(value: date, months: int) -> date:
    """First day of the month ``months`` away from ``value``'s month."""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()
