from __future__ import annotations

from datetime import time
from typing import Optional

from ...common.datetime_utils import minutes_since_midnight
from ...core.enums import AttendanceStatus
from ...settings.model import OrgSettings
from .base import PunchStrategy, StatusDecision


class LateStrategy(PunchStrategy):
    """Late punch-in; lateness is measured from the start time, not the grace end."""

    def decide(self, *, punch_in: Optional[time], settings: OrgSettings) -> StatusDecision:
        late = 0
        if punch_in is not None:
            late = max(minutes_since_midnight(punch_in) - minutes_since_midnight(settings.start_time), 0)
        return StatusDecision(status=AttendanceStatus.LATE, late_minutes=late)
