from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..attendance.model import AttendanceRecord
from ..members.model import Member
from ..ratings.model import Rating
from ..settings.model import OrgSettings
from ..tasks.model import Task


class DataSource(Protocol):
    """Read side of the backing store, as consumed by the reporting services."""

    def list_members(self) -> Sequence[Member]:
        raise NotImplementedError

    def list_attendance(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[AttendanceRecord]:
        """Records dated within [start, end] inclusive (open bounds when None)."""

        raise NotImplementedError

    def list_tasks(self) -> Sequence[Task]:
        raise NotImplementedError

    def list_ratings(self) -> Sequence[Rating]:
        raise NotImplementedError

    def get_settings(self) -> OrgSettings:
        raise NotImplementedError
