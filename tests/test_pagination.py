"""
tests/test_pagination.py — Page Slicing Tests
==============================================
"""

from __future__ import annotations

import pytest

from debtcollector.engine.pagination import page_count, paginate


class TestPageCount:
    def test_empty_list_has_one_page(self):
        assert page_count(0) == 1

    def test_exact_fit(self):
        assert page_count(20, 10) == 2

    def test_partial_last_page(self):
        assert page_count(21, 10) == 3

    def test_rejects_zero_per_page(self):
        with pytest.raises(ValueError):
            page_count(5, 0)


class TestPaginate:
    ITEMS = list(range(25))

    def test_first_page(self):
        page = paginate(self.ITEMS, 0, 10)
        assert page.items == list(range(10))
        assert page.start_index == 0
        assert page.total_pages == 3
        assert not page.has_previous
        assert page.has_next

    def test_last_page_is_short(self):
        page = paginate(self.ITEMS, 2, 10)
        assert page.items == [20, 21, 22, 23, 24]
        assert page.start_index == 20
        assert page.has_previous
        assert not page.has_next

    def test_page_past_the_end_is_clamped(self):
        page = paginate(self.ITEMS, 9, 10)
        assert page.page == 2
        assert page.items == [20, 21, 22, 23, 24]

    def test_negative_page_is_clamped(self):
        assert paginate(self.ITEMS, -3, 10).page == 0

    def test_empty_input(self):
        page = paginate([], 0, 10)
        assert page.items == []
        assert page.total_pages == 1
        assert not page.has_next

    def test_pages_cover_every_item_once(self):
        seen = []
        for number in range(page_count(len(self.ITEMS), 7)):
            seen.extend(paginate(self.ITEMS, number, 7).items)
        assert seen == self.ITEMS
