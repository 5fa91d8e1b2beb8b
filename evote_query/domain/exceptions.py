"""Exceptions raised at the query engine boundary.

User-input conditions (unknown filter values, out-of-range pages, blank
queries) never raise. These exceptions signal a programming error in the host
application.
"""

from typing import Any


class EngineError(Exception):
    """Base class for query engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidCollectionError(EngineError):
    """The supplied election collection is not a usable sequence of records."""


class InvalidPageSizeError(EngineError):
    """A negative page size was passed to the pagination calculator."""

    def __init__(self, items_per_page: Any):
        super().__init__(
            f"items_per_page must not be negative, got {items_per_page!r}",
            {"items_per_page": items_per_page},
        )
        self.items_per_page = items_per_page
