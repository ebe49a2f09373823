"""Absence rules.

Attendance sheets only hold rows for members who punched in (or were marked
on leave/half day). How many members were absent on a day is therefore a
policy decision rather than a stored fact; the policies below make that
decision explicit and swappable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AbsencePolicy(ABC):
    """Strategy Pattern: decide how many members were absent on one day."""

    @abstractmethod
    def absent_count(self, *, total_active: int, day_records: Sequence[AttendanceRecord]) -> int:
        raise NotImplementedError


class OmissionAbsencePolicy(AbsencePolicy):
    """Closed-world rule: every active member without a record is absent.

    ``absent = max(0, total_active - len(day_records))``. Members that have no
    attendance policy applied yet are counted as absent too, and explicit
    ``Absent`` rows count as "has a record" (they reduce the inferred total).
    """

    def absent_count(self, *, total_active: int, day_records: Sequence[AttendanceRecord]) -> int:
        return max(0, int(total_active) - len(day_records))


class ExplicitAbsencePolicy(AbsencePolicy):
    """Only rows stored with status ``Absent`` count."""

    def absent_count(self, *, total_active: int, day_records: Sequence[AttendanceRecord]) -> int:
        return sum(1 for r in day_records if r.status == AttendanceStatus.ABSENT)


DEFAULT_ABSENCE_POLICY: AbsencePolicy = OmissionAbsencePolicy()
