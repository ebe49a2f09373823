from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from ...settings.model import OrgSettings
from .base import PunchStrategy, StatusDecision


class AbsentStrategy(PunchStrategy):
    """No punch-in at all (a punch-out alone does not count)."""

    def decide(self, *, punch_in: Optional[time], settings: OrgSettings) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)
