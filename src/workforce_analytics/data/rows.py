"""Row mapping at the data-source boundary.

Raw rows use the sheet's camelCase columns. Everything is coerced here so
the engine only ever sees typed dataclasses: dates parsed, scores converted
to the canonical 0-100 scale, enum values validated.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.punch import classify_punch
from ..common.datetime_utils import coerce_date, parse_clock_time
from ..core.constants import QUALITY_SCORE_MAX
from ..core.enums import AttendanceStatus, MemberStatus, TaskStatus
from ..members.model import Member
from ..ratings.model import Rating
from ..settings.model import OrgSettings
from ..tasks.model import Task

logger = logging.getLogger(__name__)


def _str_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    v = str(value).strip()
    return v or None


def _number_or_none(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _datetime_or_none(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    v = _str_or_none(value)
    if not v:
        return None
    try:
        return datetime.fromisoformat(v.replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        day = coerce_date(v)
        return datetime.combine(day, datetime.min.time()) if day else None


def _row_id(row: Mapping[str, Any], key: str, kind: str) -> Optional[str]:
    value = _str_or_none(row.get(key))
    if value is None:
        logger.warning("Skipping %s row without %s: %r", kind, key, dict(row))
    return value


def to_quality_scale(value: Any, source_scale: float = QUALITY_SCORE_MAX) -> Optional[float]:
    """Convert a raw quality score from ``source_scale`` to the canonical 0-100 scale."""
    number = _number_or_none(value)
    if number is None:
        return None
    if source_scale and source_scale != QUALITY_SCORE_MAX:
        number = number * QUALITY_SCORE_MAX / float(source_scale)
    return number


def member_from_row(row: Mapping[str, Any]) -> Optional[Member]:
    member_id = _row_id(row, "memberId", "member")
    if member_id is None:
        return None

    raw_status = _str_or_none(row.get("status"))
    try:
        status = MemberStatus(raw_status) if raw_status else MemberStatus.ACTIVE
    except ValueError:
        logger.warning("Unknown member status %r for %r; treating as Inactive", raw_status, row.get("memberId"))
        status = MemberStatus.INACTIVE

    return Member(
        member_id=member_id,
        name=_str_or_none(row.get("name")) or "",
        department=_str_or_none(row.get("department")),
        status=status,
        photo_url=_str_or_none(row.get("photoURL")),
        email=_str_or_none(row.get("email")),
        role=_str_or_none(row.get("role")),
        join_date=coerce_date(row.get("joinDate")),
    )


def attendance_from_row(row: Mapping[str, Any], settings: OrgSettings) -> Optional[AttendanceRecord]:
    """Map one attendance row; returns None for rows that cannot be placed on a day.

    A row without a stored status gets one from its punch-in.
    """
    member_id = _row_id(row, "memberId", "attendance")
    if member_id is None:
        return None

    day = coerce_date(row.get("date"))
    if day is None:
        logger.warning("Skipping attendance row without a valid date: %r", row.get("memberId"))
        return None

    raw_status = _str_or_none(row.get("status"))
    if raw_status:
        try:
            status = AttendanceStatus(raw_status)
        except ValueError:
            logger.warning("Skipping attendance row with unknown status %r", raw_status)
            return None
    else:
        status = classify_punch(row.get("punchIn"), settings)

    return AttendanceRecord(
        member_id=member_id,
        date=day,
        status=status,
        punch_in=parse_clock_time(row.get("punchIn")),
        punch_out=parse_clock_time(row.get("punchOut")),
        member_name=_str_or_none(row.get("memberName")),
        department=_str_or_none(row.get("department")),
    )


def task_from_row(row: Mapping[str, Any], *, score_scale: float = QUALITY_SCORE_MAX) -> Optional[Task]:
    task_id = _row_id(row, "taskId", "task")
    if task_id is None:
        return None

    raw_status = _str_or_none(row.get("status"))
    try:
        status = TaskStatus(raw_status) if raw_status else TaskStatus.PENDING
    except ValueError:
        logger.warning("Unknown task status %r for %r; treating as Pending", raw_status, row.get("taskId"))
        status = TaskStatus.PENDING

    score = row.get("qualityScore")
    if _number_or_none(score) is None:
        score = row.get("score")

    return Task(
        task_id=task_id,
        member_id=_str_or_none(row.get("memberId")),
        title=_str_or_none(row.get("title")) or "",
        status=status,
        description=_str_or_none(row.get("description")),
        notes=_str_or_none(row.get("notes")),
        deadline=coerce_date(row.get("deadline")),
        quality_score=to_quality_scale(score, score_scale),
        completed_on=coerce_date(row.get("completedOn")),
        created_at=_datetime_or_none(row.get("createdAt")),
        updated_at=_datetime_or_none(row.get("updatedAt")),
    )


def rating_from_row(row: Mapping[str, Any]) -> Optional[Rating]:
    member_id = _row_id(row, "memberId", "rating")
    if member_id is None:
        return None

    return Rating(
        member_id=member_id,
        quality=_number_or_none(row.get("quality")),
        punctuality=_number_or_none(row.get("punctuality")),
        reliability=_number_or_none(row.get("reliability")),
        deadlines=_number_or_none(row.get("deadlines")),
        date=coerce_date(row.get("date")),
        comments=_str_or_none(row.get("comments")),
    )
