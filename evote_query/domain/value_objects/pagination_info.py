"""Pagination value objects."""

from dataclasses import dataclass


ELLIPSIS = "..."

PageToken = int | str


@dataclass(frozen=True)
class PaginationInfo:
    """Derived view of one page over a result set."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    start_item: int
    end_item: int

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    @property
    def is_paginated(self) -> bool:
        return self.total_pages > 1

    @property
    def start_index(self) -> int:
        """Zero-based slice start for the current page."""
        return (self.current_page - 1) * self.items_per_page

    @property
    def end_index(self) -> int:
        """Zero-based exclusive slice end for the current page."""
        return self.end_item
