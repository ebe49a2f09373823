from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional, Sequence

import pytest

from workforce_analytics.attendance.model import AttendanceRecord
from workforce_analytics.core.enums import AttendanceStatus, MemberStatus, TaskStatus
from workforce_analytics.members.model import Member
from workforce_analytics.ratings.model import Rating
from workforce_analytics.settings.model import OrgSettings
from workforce_analytics.tasks.model import Task

TODAY = date(2024, 1, 15)
SNAPSHOT = Path(__file__).resolve().parent / "data" / "snapshot.json"


class InMemorySource:
    def __init__(self, *, members=(), attendance=(), tasks=(), ratings=(), settings: Optional[OrgSettings] = None):
        self.members = list(members)
        self.attendance = list(attendance)
        self.tasks = list(tasks)
        self.ratings = list(ratings)
        self.settings = settings or OrgSettings()
        self.attendance_calls: list[tuple] = []

    def list_members(self) -> Sequence[Member]:
        return list(self.members)

    def list_attendance(self, *, start=None, end=None) -> Sequence[AttendanceRecord]:
        self.attendance_calls.append((start, end))
        return [
            r for r in self.attendance
            if (start is None or r.date >= start) and (end is None or r.date <= end)
        ]

    def list_tasks(self) -> Sequence[Task]:
        return list(self.tasks)

    def list_ratings(self) -> Sequence[Rating]:
        return list(self.ratings)

    def get_settings(self) -> OrgSettings:
        return self.settings


def make_members(n: int, *, department: str = "Engineering", status: MemberStatus = MemberStatus.ACTIVE) -> list[Member]:
    return [Member(member_id=f"M{i:03d}", name=f"Member {i}", department=department, status=status) for i in range(1, n + 1)]


def make_task(task_id: str, *, member_id: str = "M001", status: TaskStatus = TaskStatus.PENDING, **kwargs) -> Task:
    return Task(task_id=task_id, member_id=member_id, title=kwargs.pop("title", f"Task {task_id}"), status=status, **kwargs)


def make_record(member_id: str, status: AttendanceStatus, *, day: date = TODAY, **kwargs) -> AttendanceRecord:
    return AttendanceRecord(member_id=member_id, date=day, status=status, **kwargs)


@pytest.fixture
def snapshot_path() -> Path:
    return SNAPSHOT
