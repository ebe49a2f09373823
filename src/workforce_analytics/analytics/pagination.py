from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Generic, Iterable, TypeVar

from ..common.validators import require_iterable, require_positive_int

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    per_page: int
    total: int
    total_pages: int
    start: int
    end: int

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def summary(self) -> str:
        return f"Showing {self.start} - {self.end} of {self.total}"


def total_pages_for(total: int, per_page: int) -> int:
    return max(math.ceil(total / per_page), 1)


def paginate(items: Iterable[T], page: Any, per_page: Any) -> Page[T]:
    """Slice ``items`` into page ``page`` (1-based) of size ``per_page``.

    The page number is not clamped: a page past the end yields an empty
    slice while ``total_pages`` still reports the real count. ``start``/``end``
    are 1-based display bounds (both 0 when the slice is empty).
    """
    values = require_iterable(items, "items")
    page = require_positive_int(page, "page")
    per_page = require_positive_int(per_page, "per_page")

    offset = (page - 1) * per_page
    chunk = values[offset: offset + per_page]
    return Page(
        items=chunk,
        page=page,
        per_page=per_page,
        total=len(values),
        total_pages=total_pages_for(len(values), per_page),
        start=offset + 1 if chunk else 0,
        end=offset + len(chunk) if chunk else 0,
    )
