from __future__ import annotations

from datetime import date
from typing import Any, Callable, Mapping, Optional

from ..analytics.sorting import SortState, parse_direction
from ..analytics.view_state import ViewState
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, today_local


def date_arg(args: Mapping[str, str], name: str, default: Optional[date] = None) -> Optional[date]:
    raw = (args.get(name) or "").strip()
    if not raw:
        return default
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a YYYY-MM-DD date, got {raw!r}")


def int_arg(args: Mapping[str, str], name: str, default: int) -> int:
    raw = (args.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer, got {raw!r}")


def reference_day(args: Mapping[str, str]) -> date:
    """``?today=`` pins the reference day (reproducible reports); defaults to the local date."""
    return date_arg(args, "today") or today_local()


def view_state_from_args(
    args: Mapping[str, str],
    *,
    filters_from: Callable[[Mapping[str, str]], Any],
    per_page: int,
) -> ViewState:
    """Build the table view state from query parameters.

    ``sort``/``direction`` select the ordering; ``page``/``per_page`` the
    window. Validation of page numbers happens in ``ViewState`` itself.
    """
    column = (args.get("sort") or "").strip() or None
    sort = SortState(column=column, direction=parse_direction(args.get("direction")))
    state = ViewState(filters=filters_from(args), sort=sort)
    return state.with_per_page(int_arg(args, "per_page", per_page)).with_page(int_arg(args, "page", 1))
