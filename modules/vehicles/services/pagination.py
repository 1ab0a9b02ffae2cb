"""Client-side pagination helpers (pure functions, no Qt)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, Tuple, TypeVar

from utils.app_settings import DEFAULT_PAGE_SIZE


T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    visible: Tuple[T, ...]
    current_page: int
    total_pages: int
    start_index: int
    end_index: int
    total_items: int

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def show_controls(self) -> bool:
        return should_show_controls(self.total_pages)

    def summary(self) -> str:
        if not self.total_items:
            return "Showing 0 of 0"
        last = min(self.end_index, self.total_items)
        return f"Showing {self.start_index + 1} to {last} of {self.total_items}"


def total_pages(count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, pages: int) -> int:
    return min(max(1, page), max(1, pages))


def should_show_controls(pages: int) -> bool:
    """Pagination UI is only rendered when more than one page exists."""

    return pages > 1


def paginate(items: Sequence[T], current_page: int, page_size: int = DEFAULT_PAGE_SIZE) -> Page[T]:
    """Return the slice of ``items`` shown on ``current_page`` (1-based).

    ``current_page`` is clamped into ``[1, total_pages]``; ``end_index`` is the
    exclusive upper bound of the slice before truncation to the list length.
    """

    pages = total_pages(len(items), page_size)
    page = clamp_page(current_page, pages)
    start = (page - 1) * page_size
    end = start + page_size
    return Page(
        visible=tuple(items[start:end]),
        current_page=page,
        total_pages=pages,
        start_index=start,
        end_index=end,
        total_items=len(items),
    )


def next_page(current_page: int, pages: int) -> int:
    return clamp_page(current_page + 1, pages)


def previous_page(current_page: int, pages: int) -> int:
    return clamp_page(current_page - 1, pages)


__all__ = [
    "Page",
    "clamp_page",
    "next_page",
    "paginate",
    "previous_page",
    "should_show_controls",
    "total_pages",
]
