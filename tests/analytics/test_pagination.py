import pytest

from workforce_analytics.analytics.pagination import paginate, total_pages_for
from workforce_analytics.core.exceptions import ValidationError


def test_twenty_three_items_ten_per_page():
    items = list(range(23))

    last = paginate(items, 3, 10)
    assert last.total_pages == 3
    assert last.items == [20, 21, 22]
    assert last.summary() == "Showing 21 - 23 of 23"
    assert last.has_prev and not last.has_next

    past_end = paginate(items, 4, 10)
    assert past_end.items == []
    assert past_end.total_pages == 3
    assert (past_end.start, past_end.end) == (0, 0)


def test_pages_reconstruct_input():
    items = [f"item-{i}" for i in range(37)]
    first = paginate(items, 1, 8)

    rebuilt = []
    for n in range(1, first.total_pages + 1):
        rebuilt.extend(paginate(items, n, 8).items)
    assert rebuilt == items


def test_empty_collection_has_one_page():
    page = paginate([], 1, 10)
    assert page.total_pages == 1
    assert page.items == []
    assert page.summary() == "Showing 0 - 0 of 0"


def test_total_pages_minimum_is_one():
    assert total_pages_for(0, 10) == 1
    assert total_pages_for(10, 10) == 1
    assert total_pages_for(11, 10) == 2


@pytest.mark.parametrize("page, per_page", [(0, 10), (1, 0), (-1, 10), (1, -5), ("x", 10)])
def test_invalid_page_arguments_raise(page, per_page):
    with pytest.raises(ValidationError):
        paginate([1, 2, 3], page, per_page)
