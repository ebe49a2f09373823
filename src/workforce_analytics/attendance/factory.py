from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Any

from ..common.datetime_utils import minutes_since_midnight, parse_clock_time
from ..settings.model import OrgSettings
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import PunchStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class PunchStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on the raw punch-in."""

    def for_punch(self, *, punch_in: Any, settings: OrgSettings) -> PunchStrategy:
        if punch_in is None or (isinstance(punch_in, str) and not punch_in.strip()):
            return AbsentStrategy()

        parsed = punch_in if isinstance(punch_in, time) else parse_clock_time(punch_in)
        if parsed is None:
            return PresentStrategy()

        grace_end = minutes_since_midnight(settings.start_time) + settings.late_grace_minutes
        if minutes_since_midnight(parsed) <= grace_end:
            return OnTimeStrategy()
        return LateStrategy()
