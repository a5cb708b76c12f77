import pytest

from Logbook.models import ViewState
from Logbook.view.pagination import (
    ELLIPSIS,
    clamp_page,
    go_to_page,
    next_page,
    page_bounds,
    page_slice,
    page_window,
    paginate,
    previous_page,
    select_window_item,
    total_pages,
)


@pytest.mark.parametrize("count, per_page, expected", [
    (0, 10, 0),
    (1, 10, 1),
    (10, 10, 1),
    (11, 10, 2),
    (97, 10, 10),
    (5, 1, 5),
])
def test_total_pages(count, per_page, expected):
    assert total_pages(count, per_page) == expected


def test_total_pages_rejects_non_positive_page_size():
    with pytest.raises(ValueError):
        total_pages(3, 0)


@pytest.mark.parametrize("count, per_page", [(0, 3), (1, 3), (9, 3), (10, 3), (23, 7), (100, 10)])
def test_pages_cover_every_item_once(count, per_page):
    items = list(range(count))
    pages = total_pages(count, per_page)
    chunks = [page_slice(items, p, per_page) for p in range(1, pages + 1)]
    assert sum(len(c) for c in chunks) == count
    assert [i for c in chunks for i in c] == items
    if pages:
        expected_last = count - (pages - 1) * per_page if count % per_page else per_page
        assert len(chunks[-1]) == expected_last


def test_page_bounds():
    assert page_bounds(1, 10, 25) == (0, 10)
    assert page_bounds(3, 10, 25) == (20, 25)
    assert page_bounds(1, 10, 0) == (0, 0)


@pytest.mark.parametrize("pages, current, expected", [
    (0, 1, []),
    (3, 1, [1, 2, 3]),
    (5, 4, [1, 2, 3, 4, 5]),
    (10, 1, [1, 2, 3, 4, ELLIPSIS, 10]),
    (10, 3, [1, 2, 3, 4, ELLIPSIS, 10]),
    (10, 4, [1, ELLIPSIS, 3, 4, 5, ELLIPSIS, 10]),
    (10, 5, [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10]),
    (10, 8, [1, ELLIPSIS, 7, 8, 9, 10]),
    (10, 10, [1, ELLIPSIS, 7, 8, 9, 10]),
    (6, 4, [1, ELLIPSIS, 3, 4, 5, 6]),
])
def test_page_window(pages, current, expected):
    assert page_window(pages, current) == expected


@pytest.mark.parametrize("current, pages, expected", [(1, 0, 1), (3, 5, 3), (6, 5, 1), (2, 1, 1)])
def test_clamp_page(current, pages, expected):
    assert clamp_page(current, pages) == expected


def test_previous_page_stops_at_first():
    state = ViewState(current_page=2)
    assert previous_page(state) is True
    assert state.current_page == 1
    assert previous_page(state) is False
    assert state.current_page == 1


def test_next_page_stops_at_last():
    state = ViewState(current_page=2)
    assert next_page(state, 3) is True
    assert state.current_page == 3
    assert next_page(state, 3) is False
    assert state.current_page == 3


@pytest.mark.parametrize("target, changed, result", [(4, True, 4), (0, False, 2), (6, False, 2), (2, False, 2)])
def test_go_to_page(target, changed, result):
    state = ViewState(current_page=2)
    assert go_to_page(state, target, 5) is changed
    assert state.current_page == result


def test_selecting_ellipsis_is_a_no_op():
    state = ViewState(current_page=5)
    window = page_window(10, 5)
    assert select_window_item(state, window[1], 10) is False
    assert state.current_page == 5
    assert select_window_item(state, window[-1], 10) is True
    assert state.current_page == 10


def test_paginate_slices_current_page():
    state = ViewState(current_page=2, items_per_page=4)
    page = paginate(list(range(10)), state)
    assert page.items == [4, 5, 6, 7]
    assert page.total_pages == 3
    assert page.total_items == 10
    assert page.window == [1, 2, 3]
    assert page.has_previous and page.has_next
    assert page.showing == "Showing 5-8 of 10"


def test_paginate_resets_page_that_no_longer_exists():
    state = ViewState(current_page=3, items_per_page=4)
    page = paginate(list(range(5)), state)
    assert state.current_page == 1
    assert page.current_page == 1
    assert page.items == [0, 1, 2, 3]


def test_paginate_empty():
    state = ViewState(current_page=2, items_per_page=4)
    page = paginate([], state)
    assert page.items == []
    assert page.total_pages == 0
    assert page.window == []
    assert state.current_page == 1
    assert page.showing == "Showing 0 of 0"
    assert not page.has_next
