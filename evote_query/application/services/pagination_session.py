"""Mutable pagination state for one list view session."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

from evote_query.domain.services.pagination_service import (
    DEFAULT_MAX_VISIBLE_PAGES,
    PaginationService,
)
from evote_query.domain.value_objects.pagination_info import PageToken, PaginationInfo


T = TypeVar("T")

DEFAULT_ITEMS_PER_PAGE = 10
ALLOWED_ITEMS_PER_PAGE = (5, 10, 25, 50, 100)


@dataclass
class PaginationState:
    current_page: int = 1
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE
    total_items: int = 0


class PaginationSession:
    """Keeps ``current_page`` inside ``[1, total_pages]`` across every change.

    ``allowed_sizes`` are the page sizes offered to the user. Any size from 1
    up to ``max_items_per_page`` (the largest allowed size by default) is
    accepted; larger sizes are capped and zero or negative sizes become 1.
    """

    def __init__(
        self,
        total_items: int = 0,
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
        allowed_sizes: Sequence[int] = ALLOWED_ITEMS_PER_PAGE,
        max_visible_pages: int = DEFAULT_MAX_VISIBLE_PAGES,
        max_items_per_page: int | None = None,
        pagination_service: PaginationService | None = None,
    ) -> None:
        sizes = sorted({s for s in allowed_sizes if s > 0})
        if not sizes:
            msg = "allowed_sizes must contain at least one positive size"
            raise ValueError(msg)
        self.allowed_sizes: tuple[int, ...] = tuple(sizes)
        self.max_items_per_page = max(1, max_items_per_page or sizes[-1])
        self.max_visible_pages = max_visible_pages
        self.pagination_service = pagination_service or PaginationService()
        self._default_size = self.clamp_page_size(items_per_page)
        self.state = PaginationState(
            current_page=1,
            items_per_page=self._default_size,
            total_items=max(0, total_items),
        )

    @property
    def info(self) -> PaginationInfo:
        return self.pagination_service.paginate(
            self.state.total_items, self.state.items_per_page, self.state.current_page
        )

    @property
    def current_page(self) -> int:
        return self.state.current_page

    @property
    def total_pages(self) -> int:
        return self.info.total_pages

    def clamp_page_size(self, items_per_page: int) -> int:
        """Requested page size limited to ``[1, max_items_per_page]``."""
        return min(max(1, items_per_page), self.max_items_per_page)

    def go_to_page(self, page: int) -> PaginationInfo:
        self.state.current_page = page
        return self._reclamp()

    def next_page(self) -> PaginationInfo:
        return self.go_to_page(self.state.current_page + 1)

    def previous_page(self) -> PaginationInfo:
        return self.go_to_page(self.state.current_page - 1)

    def first_page(self) -> PaginationInfo:
        return self.go_to_page(1)

    def last_page(self) -> PaginationInfo:
        return self.go_to_page(self.total_pages)

    def set_items_per_page(self, items_per_page: int) -> PaginationInfo:
        """Change the page size, staying on the page that shows the first
        item of the current page."""
        current = self.info
        new_size = self.clamp_page_size(items_per_page)
        first_item = max(1, current.start_item)
        self.state.items_per_page = new_size
        self.state.current_page = self.pagination_service.page_containing_item(
            first_item, new_size, self.state.total_items
        )
        return self._reclamp()

    def set_total_items(self, total_items: int) -> PaginationInfo:
        """Update the result size, e.g. after filters change."""
        self.state.total_items = max(0, total_items)
        return self._reclamp()

    def reset(self) -> PaginationInfo:
        self.state.current_page = 1
        self.state.items_per_page = self._default_size
        return self._reclamp()

    def visible_pages(self) -> list[PageToken]:
        return self.pagination_service.get_page_window(self.info, self.max_visible_pages)

    def page_items(self, items: Sequence[T]) -> list[T]:
        """Items of the current page; ``items`` is the full result list."""
        if len(items) != self.state.total_items:
            self.set_total_items(len(items))
        return self.pagination_service.get_page_items(items, self.info)

    def _reclamp(self) -> PaginationInfo:
        info = self.info
        self.state.current_page = info.current_page
        return info
