from __future__ import annotations

import pytest

from modules.vehicles.services.pagination import (
    clamp_page,
    next_page,
    paginate,
    previous_page,
    should_show_controls,
    total_pages,
)


def test_twelve_items_make_three_pages():
    items = list(range(12))
    page = paginate(items, 3)
    assert page.total_pages == 3
    assert page.visible == (10, 11)
    assert page.start_index == 10
    assert page.end_index == 15
    assert page.summary() == "Showing 11 to 12 of 12"


@pytest.mark.parametrize("count", [0, 1, 4, 5, 6, 10, 11, 23])
def test_slices_cover_every_item_once(count):
    items = list(range(count))
    pages = total_pages(count)
    slices = [paginate(items, n).visible for n in range(1, pages + 1)]
    assert sum(len(s) for s in slices) == count
    assert all(len(s) == 5 for s in slices[:-1])
    assert [x for s in slices for x in s] == items


def test_empty_list_has_one_page_and_no_controls():
    page = paginate([], 1)
    assert page.total_pages == 1
    assert page.visible == ()
    assert not page.show_controls
    assert page.summary() == "Showing 0 of 0"


def test_controls_only_shown_for_more_than_one_page():
    assert not should_show_controls(1)
    assert should_show_controls(2)
    assert not paginate(list(range(5)), 1).show_controls
    assert paginate(list(range(6)), 1).show_controls


def test_navigation_clamps_at_bounds():
    assert previous_page(1, 3) == 1
    assert next_page(3, 3) == 3
    assert next_page(1, 3) == 2
    assert clamp_page(9, 3) == 3
    assert clamp_page(-2, 3) == 1
    assert paginate(list(range(7)), 5).current_page == 2


def test_page_size_must_be_positive():
    with pytest.raises(ValueError):
        total_pages(3, 0)
