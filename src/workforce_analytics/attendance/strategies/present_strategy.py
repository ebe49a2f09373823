from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from ...settings.model import OrgSettings
from .base import PunchStrategy, StatusDecision


class PresentStrategy(PunchStrategy):
    """A punch-in exists but could not be read as a clock time."""

    def decide(self, *, punch_in: Optional[time], settings: OrgSettings) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
