from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Rating:
    """Thực thể miền (domain): Đánh giá định kỳ của một nhân sự.

    Tối đa bốn điểm thành phần; mỗi điểm có thể trống.
    """

    member_id: str
    quality: Optional[float] = None
    punctuality: Optional[float] = None
    reliability: Optional[float] = None
    deadlines: Optional[float] = None
    date: Optional[date] = None
    comments: Optional[str] = None

    def sub_scores(self) -> list[float]:
        """Populated sub-scores in fixed order; empty values are skipped."""
        values = (self.quality, self.punctuality, self.reliability, self.deadlines)
        return [float(v) for v in values if v is not None]

    def average_score(self) -> float:
        """Mean of the positive sub-scores; a 0 means "not scored" here."""
        scores = [s for s in self.sub_scores() if s > 0]
        return sum(scores) / len(scores) if scores else 0.0


@dataclass(frozen=True)
class RatingView:
    """Read-model: a rating plus the member name/department it is listed under."""

    rating: Rating
    member_name: str
    department: Optional[str] = None

    @property
    def member_id(self) -> str:
        return self.rating.member_id

    @property
    def date(self) -> Optional[date]:
        return self.rating.date

    @property
    def average(self) -> float:
        return self.rating.average_score()

    def as_dict(self) -> dict:
        r = self.rating
        return {
            "member_id": r.member_id,
            "member_name": self.member_name,
            "department": self.department,
            "date": r.date.isoformat() if r.date else None,
            "quality": r.quality,
            "punctuality": r.punctuality,
            "reliability": r.reliability,
            "deadlines": r.deadlines,
            "average": round(self.average, 1),
            "comments": r.comments,
        }
