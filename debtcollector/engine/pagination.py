"""
debtcollector.engine.pagination — Page Slicing
===============================================

Splits a transaction list into fixed-size pages.  Out-of-range page numbers
are clamped rather than rejected, which is what the ``/transactions``
command needs after a settlement shrinks the list underneath the page the
user was looking at.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_PER_PAGE = 10


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    items: list[T]
    page: int          # zero-based
    total_pages: int   # always >= 1
    start_index: int   # index of items[0] in the full list

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages - 1


def page_count(total_items: int, per_page: int = DEFAULT_PER_PAGE) -> int:
    """Number of pages needed for *total_items*; an empty list has one page."""
    if per_page < 1:
        raise ValueError("per_page must be >= 1")
    return max(1, math.ceil(total_items / per_page))


def paginate(
    items: Sequence[T], page: int, per_page: int = DEFAULT_PER_PAGE
) -> Page[T]:
    """Return page *page* (zero-based) of *items*, clamped into range."""
    total_pages = page_count(len(items), per_page)
    page = min(max(page, 0), total_pages - 1)
    start = page * per_page
    return Page(
        items=list(items[start:start + per_page]),
        page=page,
        total_pages=total_pages,
        start_index=start,
    )
