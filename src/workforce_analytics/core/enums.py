from __future__ import annotations

from enum import Enum


class MemberStatus(str, Enum):
    """Trạng thái nhân sự. Chỉ ACTIVE được tính vào headcount."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ON_LEAVE = "On Leave"
    TERMINATED = "Terminated"


class AttendanceStatus(str, Enum):
    """Trạng thái chấm công như được lưu ở nguồn dữ liệu."""

    ON_TIME = "On Time"
    PRESENT = "Present"
    LATE = "Late"
    ABSENT = "Absent"
    ON_LEAVE = "On Leave"
    HALF_DAY = "Half Day"


class TaskStatus(str, Enum):
    """Trạng thái công việc. OVERDUE chỉ là trạng thái suy diễn, không lưu."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    OVERDUE = "Overdue"

    @property
    def is_terminal(self) -> bool:
        return self in {TaskStatus.COMPLETED, TaskStatus.CANCELLED}


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class ScoreBand(str, Enum):
    """Dải điểm đánh giá dùng cho bộ lọc ratings."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
