from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date
from typing import Optional

from ..analytics.filters import TaskFilters, apply_task_filters
from ..analytics.pagination import Page, paginate
from ..analytics.series import ChartSeries, task_monthly_trend
from ..analytics.sorting import TASK_COLUMNS
from ..analytics.statistics import (
    DepartmentProductivity,
    TaskStatistics,
    completion_breakdown,
    department_productivity,
    task_statistics,
)
from ..analytics.view_state import ViewState
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_PER_PAGE, DEFAULT_TASK_TREND_MONTHS
from ..data.source import DataSource
from ..members.directory import MemberDirectory
from ..tasks.model import TaskView
from ..tasks.status import annotate_tasks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskTable:
    page: Page
    summary: TaskStatistics
    state: ViewState

    def as_dict(self) -> dict:
        return {
            "page": self.page.page,
            "per_page": self.page.per_page,
            "total": self.page.total,
            "total_pages": self.page.total_pages,
            "showing": self.page.summary(),
            "sort": {"column": self.state.sort.column, "direction": self.state.sort.direction.value},
            "summary": self.summary.as_dict(),
            "tasks": [v.as_dict() for v in self.page.items],
        }


@dataclass(frozen=True)
class PerformanceCharts:
    completion: dict[str, int]
    departments: list[DepartmentProductivity]
    monthly: ChartSeries
    completion_rate: int
    on_time_rate: int

    def as_dict(self) -> dict:
        return {
            "completion": dict(self.completion),
            "departments": [asdict(d) for d in self.departments],
            "monthly": self.monthly.as_dict(),
            "completion_rate": self.completion_rate,
            "on_time_rate": self.on_time_rate,
        }


class PerformanceService:
    """Use case: task table and charts of the performance page."""

    def __init__(
        self,
        source: DataSource,
        *,
        per_page: int = DEFAULT_PER_PAGE,
        trend_months: int = DEFAULT_TASK_TREND_MONTHS,
    ):
        self._source = source
        self._per_page = require_positive_int(per_page, "per_page")
        self._trend_months = require_positive_int(trend_months, "trend_months")

    def default_state(self) -> ViewState:
        return ViewState(filters=TaskFilters(), per_page=self._per_page)

    def _load(self, today: date) -> tuple[MemberDirectory, list[TaskView]]:
        directory = MemberDirectory(self._source.list_members())
        return directory, annotate_tasks(self._source.list_tasks(), today, directory)

    def task_table(self, today: date, state: Optional[ViewState] = None) -> TaskTable:
        """Filtered, sorted, paginated tasks; the summary cards follow the filters."""
        state = state or self.default_state()
        directory, views = self._load(today)

        filtered = apply_task_filters(views, state.filters, directory)
        page = paginate(state.sort.apply(filtered, columns=TASK_COLUMNS), state.page, state.per_page)
        logger.debug("Task table: %d of %d tasks match, page %d/%d", len(filtered), len(views), page.page, page.total_pages)
        return TaskTable(page=page, summary=task_statistics(filtered), state=state)

    def charts(self, today: date) -> PerformanceCharts:
        """Charts and headline rates over all tasks (filters do not apply)."""
        directory, views = self._load(today)
        stats = task_statistics(views)
        return PerformanceCharts(
            completion=completion_breakdown(views),
            departments=department_productivity(views, directory),
            monthly=task_monthly_trend(views, months=self._trend_months, today=today),
            completion_rate=stats.completion_rate,
            on_time_rate=stats.on_time_rate,
        )
