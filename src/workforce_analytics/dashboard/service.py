from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from typing import Optional

from ..analytics.series import ChartSeries, attendance_trend
from ..analytics.statistics import (
    DepartmentHeadcount,
    attendance_statistics,
    average_rating,
    department_distribution,
    latest_checkins,
    tasks_due_on,
    upcoming_tasks,
)
from ..attendance.absence import DEFAULT_ABSENCE_POLICY, AbsencePolicy
from ..attendance.model import AttendanceRecord, AttendanceSummary
from ..attendance.service import with_member_fields
from ..core.constants import DEFAULT_ATTENDANCE_TREND_DAYS, DEFAULT_UPCOMING_TASKS_LIMIT
from ..common.validators import require_positive_int
from ..data.source import DataSource
from ..members.directory import MemberDirectory
from ..tasks.model import TaskView
from ..tasks.status import annotate_tasks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardData:
    today: date
    total_members: int
    attendance: AttendanceSummary
    avg_rating: float
    tasks_due_today: int
    latest_checkins: list[AttendanceRecord]
    departments: list[DepartmentHeadcount]
    upcoming_tasks: list[TaskView]
    attendance_trend: ChartSeries

    def as_dict(self) -> dict:
        return {
            "today": self.today.isoformat(),
            "total_members": self.total_members,
            "attendance": self.attendance.as_dict(),
            "avg_rating": round(self.avg_rating, 1),
            "tasks_due_today": self.tasks_due_today,
            "latest_checkins": [
                {
                    "member_id": r.member_id,
                    "member_name": r.member_name,
                    "punch_in": r.punch_in.strftime("%H:%M") if r.punch_in else None,
                    "status": r.status.value,
                }
                for r in self.latest_checkins
            ],
            "departments": [asdict(d) for d in self.departments],
            "upcoming_tasks": [v.as_dict() for v in self.upcoming_tasks],
            "attendance_trend": self.attendance_trend.as_dict(),
        }


class DashboardService:
    """Use case: everything the overview page shows for one reference day."""

    def __init__(
        self,
        source: DataSource,
        *,
        trend_days: int = DEFAULT_ATTENDANCE_TREND_DAYS,
        upcoming_limit: int = DEFAULT_UPCOMING_TASKS_LIMIT,
        absence_policy: Optional[AbsencePolicy] = None,
    ):
        self._source = source
        self._trend_days = require_positive_int(trend_days, "trend_days")
        self._upcoming_limit = int(upcoming_limit)
        self._policy = absence_policy or DEFAULT_ABSENCE_POLICY

    def build(self, today: date) -> DashboardData:
        # Everything is loaded before any aggregation so member references resolve consistently.
        directory = MemberDirectory(self._source.list_members())
        window_start = today - timedelta(days=self._trend_days - 1)
        records = with_member_fields(self._source.list_attendance(start=window_start, end=today), directory)
        tasks = annotate_tasks(self._source.list_tasks(), today, directory)
        ratings = self._source.list_ratings()

        today_records = [r for r in records if r.date == today]
        total_active = directory.active_count()

        summary = attendance_statistics(today_records, total_active=total_active, policy=self._policy)
        logger.debug(
            "Dashboard %s: active=%d present=%d late=%d absent=%d",
            today, total_active, summary.present_count, summary.late_count, summary.absent_count,
        )

        return DashboardData(
            today=today,
            total_members=total_active,
            attendance=summary,
            avg_rating=average_rating(ratings),
            tasks_due_today=tasks_due_on(tasks, today),
            latest_checkins=latest_checkins(today_records),
            departments=department_distribution(directory, today_records),
            upcoming_tasks=upcoming_tasks(tasks, today, limit=self._upcoming_limit),
            attendance_trend=attendance_trend(
                records,
                total_active=total_active,
                days=self._trend_days,
                today=today,
                policy=self._policy,
            ),
        )
