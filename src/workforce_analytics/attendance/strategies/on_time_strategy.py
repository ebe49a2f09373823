from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from ...settings.model import OrgSettings
from .base import PunchStrategy, StatusDecision


class OnTimeStrategy(PunchStrategy):
    """Punch-in within start time + grace period."""

    def decide(self, *, punch_in: Optional[time], settings: OrgSettings) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)
