"""Pagination calculator.

Out-of-range pages are clamped and never raise. The only rejected input is a
negative page size, which indicates a bug in the caller.
"""

from __future__ import annotations

import math

from collections.abc import Sequence
from typing import TypeVar

from evote_query.domain.exceptions import InvalidPageSizeError
from evote_query.domain.value_objects.pagination_info import (
    ELLIPSIS,
    PageToken,
    PaginationInfo,
)


T = TypeVar("T")

DEFAULT_MAX_VISIBLE_PAGES = 5


def _as_int(value: object, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return default


class PaginationService:
    """Computes page boundaries and the visible page-number window."""

    def paginate(
        self, total_items: int, items_per_page: int, current_page: int = 1
    ) -> PaginationInfo:
        """Compute the page view for a result set.

        Args:
            total_items: Size of the filtered/searched result
            items_per_page: Page size; 0 is treated as 1
            current_page: Requested 1-based page, clamped into range

        Returns:
            PaginationInfo. With no items both start and end item are 0.

        Raises:
            InvalidPageSizeError: ``items_per_page`` is negative
        """
        per_page = self.normalize_page_size(items_per_page)
        total = max(0, _as_int(total_items, 0))
        total_pages = self.total_pages(total, per_page)
        page = self.clamp_page(current_page, total_pages)

        if total == 0:
            start_item = 0
            end_item = 0
        else:
            start_item = (page - 1) * per_page + 1
            end_item = min(page * per_page, total)

        return PaginationInfo(
            current_page=page,
            total_pages=total_pages,
            total_items=total,
            items_per_page=per_page,
            start_item=start_item,
            end_item=end_item,
        )

    @staticmethod
    def normalize_page_size(items_per_page: object) -> int:
        if isinstance(items_per_page, (int, float)) and not isinstance(items_per_page, bool):
            if items_per_page < 0:
                raise InvalidPageSizeError(items_per_page)
        return max(1, _as_int(items_per_page, 1))

    @staticmethod
    def total_pages(total_items: int, items_per_page: int) -> int:
        return max(1, math.ceil(total_items / items_per_page))

    @staticmethod
    def clamp_page(page: object, total_pages: int) -> int:
        return min(max(1, _as_int(page, 1)), max(1, total_pages))

    def page_containing_item(
        self, item_number: int, items_per_page: int, total_items: int
    ) -> int:
        """1-based page on which the given 1-based item appears, clamped."""
        per_page = self.normalize_page_size(items_per_page)
        total_pages = self.total_pages(max(0, total_items), per_page)
        if item_number < 1:
            return 1
        return self.clamp_page((item_number - 1) // per_page + 1, total_pages)

    def get_visible_page_window(
        self,
        current_page: int,
        total_pages: int,
        max_visible: int = DEFAULT_MAX_VISIBLE_PAGES,
    ) -> list[PageToken]:
        """Page numbers for pagination controls, with ``"..."`` for gaps.

        A window of ``max_visible`` pages is centred on the current page and
        shifted to stay inside ``[1, total_pages]``. Page 1 and the last page
        are always present; an ellipsis replaces any skipped run of pages
        between them and the window.
        """
        last = max(1, _as_int(total_pages, 1))
        width = max(1, _as_int(max_visible, DEFAULT_MAX_VISIBLE_PAGES))
        page = self.clamp_page(current_page, last)
        half = width // 2

        start = page - half
        end = start + width - 1
        if start < 1:
            start = 1
            end = min(last, width)
        if end > last:
            end = last
            start = max(1, last - width + 1)

        pages: list[PageToken] = []
        if start > 1:
            pages.append(1)
            if start > 2:
                pages.append(ELLIPSIS)

        pages.extend(range(start, end + 1))

        if end < last:
            if end < last - 1:
                pages.append(ELLIPSIS)
            pages.append(last)

        return pages

    def get_page_window(
        self, info: PaginationInfo, max_visible: int = DEFAULT_MAX_VISIBLE_PAGES
    ) -> list[PageToken]:
        """Window for a computed page; empty when there is nothing to page."""
        if info.total_items == 0:
            return []
        return self.get_visible_page_window(info.current_page, info.total_pages, max_visible)

    @staticmethod
    def get_page_items(items: Sequence[T], info: PaginationInfo) -> list[T]:
        """Slice of ``items`` shown on the page described by ``info``."""
        if info.total_items == 0:
            return []
        return list(items[info.start_index : info.end_index])
