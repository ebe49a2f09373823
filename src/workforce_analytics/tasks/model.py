from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TaskStatus


@dataclass(frozen=True)
class Task:
    """Thực thể miền (domain): Công việc được giao cho một nhân sự.

    ``status`` là giá trị lưu trữ (nguồn sự thật) và không bao giờ là OVERDUE.
    ``quality_score`` dùng thang chuẩn 0-100.
    """

    task_id: str
    member_id: Optional[str]
    title: str
    status: TaskStatus = TaskStatus.PENDING
    description: Optional[str] = None
    notes: Optional[str] = None
    deadline: Optional[date] = None
    quality_score: Optional[float] = None
    completed_on: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class TaskView:
    """Read-model: a stored task plus its status as of a reference date.

    ``task.status`` stays untouched; filters, counters and sorting read
    ``display_status``.
    """

    task: Task
    display_status: TaskStatus
    assignee_name: str
    department: Optional[str] = None

    @property
    def task_id(self) -> str:
        return self.task.task_id

    @property
    def member_id(self) -> Optional[str]:
        return self.task.member_id

    @property
    def title(self) -> str:
        return self.task.title

    @property
    def deadline(self) -> Optional[date]:
        return self.task.deadline

    @property
    def completed_on(self) -> Optional[date]:
        return self.task.completed_on

    @property
    def quality_score(self) -> Optional[float]:
        return self.task.quality_score

    @property
    def created_on(self) -> Optional[date]:
        created = self.task.created_at
        return created.date() if created else None

    def as_dict(self) -> dict:
        t = self.task
        return {
            "task_id": t.task_id,
            "member_id": t.member_id,
            "assignee_name": self.assignee_name,
            "department": self.department,
            "title": t.title,
            "description": t.description,
            "notes": t.notes,
            "deadline": t.deadline.isoformat() if t.deadline else None,
            "status": t.status.value,
            "display_status": self.display_status.value,
            "quality_score": t.quality_score,
            "completed_on": t.completed_on.isoformat() if t.completed_on else None,
        }
