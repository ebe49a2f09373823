from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .attendance.absence import DEFAULT_ABSENCE_POLICY, AbsencePolicy
from .attendance.service import AttendanceReportService
from .core.constants import (
    DEFAULT_ATTENDANCE_TREND_DAYS,
    DEFAULT_PER_PAGE,
    DEFAULT_TASK_TREND_MONTHS,
    DEFAULT_UPCOMING_TASKS_LIMIT,
    QUALITY_SCORE_MAX,
)
from .dashboard.service import DashboardService
from .data.json_source import JsonSnapshotDataSource
from .data.source import DataSource
from .performance.service import PerformanceService
from .ratings.service import RatingReportService


@dataclass(frozen=True)
class Container:
    source: DataSource
    per_page: int

    dashboard_service: DashboardService
    performance_service: PerformanceService
    attendance_service: AttendanceReportService
    rating_service: RatingReportService


def build_services(
    source: DataSource,
    *,
    per_page: int = DEFAULT_PER_PAGE,
    trend_days: int = DEFAULT_ATTENDANCE_TREND_DAYS,
    trend_months: int = DEFAULT_TASK_TREND_MONTHS,
    upcoming_limit: int = DEFAULT_UPCOMING_TASKS_LIMIT,
    absence_policy: AbsencePolicy = DEFAULT_ABSENCE_POLICY,
) -> Container:
    return Container(
        source=source,
        per_page=per_page,
        dashboard_service=DashboardService(
            source,
            trend_days=trend_days,
            upcoming_limit=upcoming_limit,
            absence_policy=absence_policy,
        ),
        performance_service=PerformanceService(source, per_page=per_page, trend_months=trend_months),
        attendance_service=AttendanceReportService(source, absence_policy=absence_policy),
        rating_service=RatingReportService(source, trend_months=trend_months),
    )


def build_container(
    *,
    data_file: Path | str,
    score_scale: float = QUALITY_SCORE_MAX,
    per_page: int = DEFAULT_PER_PAGE,
    trend_days: int = DEFAULT_ATTENDANCE_TREND_DAYS,
    trend_months: int = DEFAULT_TASK_TREND_MONTHS,
    upcoming_limit: int = DEFAULT_UPCOMING_TASKS_LIMIT,
) -> Container:
    source = JsonSnapshotDataSource(data_file, score_scale=score_scale)
    return build_services(
        source,
        per_page=per_page,
        trend_days=trend_days,
        trend_months=trend_months,
        upcoming_limit=upcoming_limit,
    )
