# src/tablesrv/paginator.py
from __future__ import annotations

import math
from dataclasses import dataclass

from .config import DEFAULT_PAGER_WINDOW_SIZE


@dataclass(frozen=True, slots=True)
class PageWindow:
    total_results: int
    page_size: int
    current_page: int
    total_pages: int
    window_start: int
    window_end: int

    @property
    def pages(self) -> range:
        return range(self.window_start, self.window_end + 1)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def first_item(self) -> int:
        """1-based index of the first row on the current page (0 if none)."""
        if self.total_results == 0:
            return 0
        return (self.current_page - 1) * self.page_size + 1

    @property
    def last_item(self) -> int:
        return min(self.total_results, self.current_page * self.page_size)


def total_pages(total_results: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be > 0")
    return max(1, math.ceil(max(0, total_results) / page_size))


def build_page_window(
    total_results: int,
    page_size: int,
    window_size: int = DEFAULT_PAGER_WINDOW_SIZE,
    current_page: int = 1,
) -> PageWindow:
    """
    Work out which page links a pager should show.

    The current page is clamped into [1, total_pages] for display only.
    The window is centred on it and shifted away from either edge so it
    stays `window_size` long whenever there are enough pages.
    """
    if window_size <= 0:
        raise ValueError("window_size must be > 0")

    pages = total_pages(total_results, page_size)
    current = min(max(1, current_page), pages)

    start = current - (window_size - 1) // 2
    end = start + window_size - 1
    if end > pages:
        end = pages
        start = end - window_size + 1
    if start < 1:
        start = 1
        end = min(pages, window_size)

    return PageWindow(
        total_results=max(0, total_results),
        page_size=page_size,
        current_page=current,
        total_pages=pages,
        window_start=start,
        window_end=end,
    )
