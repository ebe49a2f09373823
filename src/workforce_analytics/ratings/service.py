from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Iterable, Optional

from ..analytics.filters import RatingFilters, apply_rating_filters
from ..analytics.pagination import Page, paginate
from ..analytics.series import ChartSeries, rating_monthly_trend
from ..analytics.sorting import RATING_COLUMNS, sort_items
from ..analytics.statistics import (
    DepartmentRatingAverage,
    RatingSummary,
    average_rating,
    department_rating_averages,
    rating_summary,
)
from ..analytics.view_state import ViewState
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_PER_PAGE, DEFAULT_TASK_TREND_MONTHS
from ..core.enums import SortDirection
from ..data.source import DataSource
from ..members.directory import MemberDirectory
from .model import Rating, RatingView


def rating_views(ratings: Iterable[Rating], directory: MemberDirectory) -> list[RatingView]:
    return [
        RatingView(
            rating=r,
            member_name=directory.name_for(r.member_id),
            department=directory.department_of(r.member_id),
        )
        for r in ratings
    ]


def default_rating_order(views: Iterable[RatingView]) -> list[RatingView]:
    """Newest first; ratings on the same date by member name."""
    by_name = sort_items(views, "name", SortDirection.ASC, columns=RATING_COLUMNS)
    return sort_items(by_name, "date", SortDirection.DESC, columns=RATING_COLUMNS)


@dataclass(frozen=True)
class RatingsOverview:
    average: float
    summary: RatingSummary
    departments: list[DepartmentRatingAverage]
    page: Page
    trend: ChartSeries

    def as_dict(self) -> dict:
        return {
            "average": round(self.average, 1),
            "summary": self.summary.as_dict(),
            "departments": [
                {**asdict(d), "average": round(d.average, 1)} for d in self.departments
            ],
            "page": self.page.page,
            "total": self.page.total,
            "total_pages": self.page.total_pages,
            "showing": self.page.summary(),
            "ratings": [v.as_dict() for v in self.page.items],
            "trend": self.trend.as_dict(),
        }


class RatingReportService:
    """Use case: ratings table, summary cards, department chart and monthly trend."""

    def __init__(self, source: DataSource, *, trend_months: int = DEFAULT_TASK_TREND_MONTHS):
        self._source = source
        self._trend_months = require_positive_int(trend_months, "trend_months")

    def overview(self, today: date, state: Optional[ViewState] = None, *, trend_member_id: Optional[str] = None) -> RatingsOverview:
        state = state or ViewState(filters=RatingFilters(), per_page=DEFAULT_PER_PAGE)
        directory = MemberDirectory(self._source.list_members())
        ratings = list(self._source.list_ratings())

        filtered = apply_rating_filters(ratings, state.filters, directory)
        views = rating_views(filtered, directory)
        if state.sort.column is None:
            ordered = default_rating_order(views)
        else:
            ordered = state.sort.apply(views, columns=RATING_COLUMNS)

        return RatingsOverview(
            average=average_rating(filtered),
            summary=rating_summary(filtered),
            departments=department_rating_averages(filtered, directory),
            page=paginate(ordered, state.page, state.per_page),
            trend=rating_monthly_trend(ratings, months=self._trend_months, today=today, member_id=trend_member_id),
        )
