from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from ...settings.model import OrgSettings


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    late_minutes: int = 0


class PunchStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status from punches."""

    @abstractmethod
    def decide(self, *, punch_in: Optional[time], settings: OrgSettings) -> StatusDecision:
        raise NotImplementedError
