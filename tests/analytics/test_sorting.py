from datetime import date

import pytest

from conftest import TODAY, make_task

from workforce_analytics.analytics.sorting import SortState, parse_direction, sort_items
from workforce_analytics.core.enums import SortDirection, TaskStatus
from workforce_analytics.core.exceptions import ValidationError
from workforce_analytics.tasks.status import annotate_tasks


def _ids(items):
    return [v.task_id for v in items]


def test_missing_dates_sort_last_ascending_and_first_descending():
    views = annotate_tasks(
        [
            make_task("NONE"),
            make_task("LATE", deadline=date(2024, 1, 5)),
            make_task("EARLY", deadline=date(2024, 1, 3)),
        ],
        TODAY,
    )

    assert _ids(sort_items(views, "deadline", "asc")) == ["EARLY", "LATE", "NONE"]
    assert _ids(sort_items(views, "deadline", "desc")) == ["NONE", "LATE", "EARLY"]


def test_sort_is_stable_for_equal_keys():
    views = annotate_tasks(
        [make_task(f"T{i}", deadline=date(2024, 1, 10)) for i in range(5)] + [make_task("FIRST", deadline=date(2024, 1, 1))],
        TODAY,
    )

    assert _ids(sort_items(views, "deadline", SortDirection.ASC)) == ["FIRST", "T0", "T1", "T2", "T3", "T4"]
    assert _ids(sort_items(views, "deadline", SortDirection.DESC)) == ["T0", "T1", "T2", "T3", "T4", "FIRST"]


def test_text_sort_is_case_insensitive():
    views = annotate_tasks([make_task("1", title="beta"), make_task("2", title="Alpha"), make_task("3", title="alpha two")], TODAY)
    assert _ids(sort_items(views, "title")) == ["2", "3", "1"]


def test_numeric_sort_treats_missing_as_zero():
    views = annotate_tasks(
        [make_task("A", quality_score=50), make_task("B"), make_task("C", quality_score=90)],
        TODAY,
    )
    assert _ids(sort_items(views, "score", "desc")) == ["C", "A", "B"]


def test_status_sort_uses_display_status():
    views = annotate_tasks(
        [make_task("P"), make_task("O", deadline=date(2024, 1, 1)), make_task("C", status=TaskStatus.COMPLETED)],
        TODAY,
    )
    assert _ids(sort_items(views, "status")) == ["C", "O", "P"]


def test_sort_does_not_mutate_input():
    views = annotate_tasks([make_task("B", title="b"), make_task("A", title="a")], TODAY)
    sort_items(views, "title")
    assert _ids(views) == ["B", "A"]


def test_unknown_column_and_direction_raise():
    with pytest.raises(ValidationError):
        sort_items([], "salary")
    with pytest.raises(ValidationError):
        parse_direction("sideways")


def test_sort_state_toggle():
    state = SortState()
    state = state.toggle("deadline")
    assert (state.column, state.direction) == ("deadline", SortDirection.ASC)

    state = state.toggle("deadline")
    assert state.direction == SortDirection.DESC

    state = state.toggle("title")
    assert (state.column, state.direction) == ("title", SortDirection.ASC)


def test_sort_state_without_column_keeps_order():
    views = annotate_tasks([make_task("B", title="b"), make_task("A", title="a")], TODAY)
    assert _ids(SortState().apply(views)) == ["B", "A"]
