from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi chấm công của một nhân sự trong một ngày.

    Vắng mặt không được lưu thành bản ghi: không có bản ghi nghĩa là vắng.
    """

    member_id: str
    date: date
    status: AttendanceStatus
    punch_in: Optional[time] = None
    punch_out: Optional[time] = None
    member_name: Optional[str] = None
    department: Optional[str] = None


@dataclass(frozen=True)
class AttendanceSummary:
    """Read-model cho các thẻ tổng hợp chấm công trong một ngày."""

    total_active: int
    present_count: int
    late_count: int
    absent_count: int
    on_leave_count: int
    half_day_count: int
    attendance_rate: int

    def as_dict(self) -> dict:
        return asdict(self)
