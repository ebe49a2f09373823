from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, Mapping

from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_PER_PAGE
from .pagination import Page, paginate
from .sorting import TASK_COLUMNS, SortColumn, SortState


@dataclass(frozen=True)
class ViewState:
    """Filter/sort/page selection for one table, owned by the caller.

    Every transition returns a new value. Changing filters or page size
    resets to page 1 because pages are not stable across those changes.
    """

    filters: Any = None
    sort: SortState = field(default_factory=SortState)
    page: int = 1
    per_page: int = DEFAULT_PER_PAGE

    def with_filters(self, filters: Any) -> "ViewState":
        return replace(self, filters=filters, page=1)

    def with_sort(self, column: str) -> "ViewState":
        return replace(self, sort=self.sort.toggle(column))

    def with_page(self, page: int) -> "ViewState":
        return replace(self, page=require_positive_int(page, "page"))

    def with_per_page(self, per_page: int) -> "ViewState":
        return replace(self, per_page=require_positive_int(per_page, "per_page"), page=1)

    def next_page(self, total_pages: int) -> "ViewState":
        return self.with_page(self.page + 1) if self.page < total_pages else self

    def prev_page(self) -> "ViewState":
        return self.with_page(self.page - 1) if self.page > 1 else self


def run_table_pipeline(
    items: Iterable[Any],
    state: ViewState,
    *,
    apply_filters: Callable[[Iterable[Any], Any], list],
    columns: Mapping[str, SortColumn] = TASK_COLUMNS,
) -> Page:
    """filter -> sort -> paginate for one table view."""
    filtered = apply_filters(items, state.filters)
    ordered = state.sort.apply(filtered, columns=columns)
    return paginate(ordered, state.page, state.per_page)
