from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Iterable, Optional

from ..analytics.filters import AttendanceFilters, apply_attendance_filters
from ..analytics.pagination import Page
from ..analytics.sorting import ATTENDANCE_COLUMNS
from ..analytics.statistics import attendance_statistics
from ..analytics.view_state import ViewState, run_table_pipeline
from ..core.enums import AttendanceStatus
from ..data.source import DataSource
from ..members.directory import MemberDirectory
from ..settings.model import OrgSettings
from .absence import DEFAULT_ABSENCE_POLICY, AbsencePolicy
from .model import AttendanceRecord, AttendanceSummary
from .punch import format_worked_hours, late_minutes, worked_minutes


def with_member_fields(records: Iterable[AttendanceRecord], directory: MemberDirectory) -> list[AttendanceRecord]:
    """Fill display name/department from the member snapshot where the row lacks them."""
    out = []
    for r in records:
        if r.member_name and r.department:
            out.append(r)
            continue
        out.append(
            replace(
                r,
                member_name=r.member_name or directory.name_for(r.member_id),
                department=r.department or directory.department_of(r.member_id),
            )
        )
    return out


@dataclass(frozen=True)
class AttendanceDaySheet:
    day: date
    summary: AttendanceSummary
    page: Page
    settings: OrgSettings = OrgSettings()

    @property
    def working_day(self) -> bool:
        return self.settings.is_working_day(self.day)

    def as_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "working_day": self.working_day,
            "summary": self.summary.as_dict(),
            "page": self.page.page,
            "per_page": self.page.per_page,
            "total": self.page.total,
            "total_pages": self.page.total_pages,
            "showing": self.page.summary(),
            "records": [
                {
                    "member_id": r.member_id,
                    "member_name": r.member_name,
                    "department": r.department,
                    "status": r.status.value,
                    "punch_in": r.punch_in.strftime("%H:%M") if r.punch_in else None,
                    "punch_out": r.punch_out.strftime("%H:%M") if r.punch_out else None,
                    "hours": format_worked_hours(worked_minutes(r.punch_in, r.punch_out)),
                    "late_minutes": late_minutes(r.punch_in, self.settings) if r.status == AttendanceStatus.LATE else 0,
                }
                for r in self.page.items
            ],
        }


class AttendanceReportService:
    """Use case: the attendance sheet of one day (summary cards + filtered table)."""

    def __init__(self, source: DataSource, *, absence_policy: Optional[AbsencePolicy] = None):
        self._source = source
        self._policy = absence_policy or DEFAULT_ABSENCE_POLICY

    def day_sheet(self, day: date, state: Optional[ViewState] = None) -> AttendanceDaySheet:
        state = state or ViewState(filters=AttendanceFilters())
        directory = MemberDirectory(self._source.list_members())
        records = with_member_fields(self._source.list_attendance(start=day, end=day), directory)

        # Summary cards describe the whole day, not the filtered table.
        summary = attendance_statistics(records, total_active=directory.active_count(), policy=self._policy)
        page = run_table_pipeline(
            records,
            state,
            apply_filters=lambda items, filters: apply_attendance_filters(items, filters, directory),
            columns=ATTENDANCE_COLUMNS,
        )
        return AttendanceDaySheet(day=day, summary=summary, page=page, settings=self._source.get_settings())
