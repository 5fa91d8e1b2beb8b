"""DTOs for election list queries.

Output DTOs are immutable snapshots; presentation code re-renders from them
and never mutates them in place.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime

from evote_query.domain.entities.election_record import ElectionRecord
from evote_query.domain.value_objects.election_stats import FilterStats
from evote_query.domain.value_objects.filter_state import FilterChip, FilterState
from evote_query.domain.value_objects.pagination_info import PageToken, PaginationInfo
from evote_query.domain.value_objects.search import (
    SearchField,
    SearchHistoryEntry,
    SearchResult,
    SearchSuggestion,
)
from evote_query.domain.value_objects.sort_order import ElectionSort


# =============================================================================
# Input DTOs
# =============================================================================


@dataclass
class QueryElectionsInputDto:
    """Input for one list-view query over a collection snapshot."""

    records: Sequence[ElectionRecord]
    filters: FilterState | None = None
    query: str = ""
    scope: Iterable[SearchField | str] | None = None
    sort: ElectionSort | None = None
    page: int = 1
    items_per_page: int = 10
    max_visible_pages: int = 5


@dataclass
class SearchElectionsInputDto:
    """Input for an asynchronous search against the collection provider."""

    query: str
    scope: Iterable[SearchField | str] | None = None
    filters: FilterState | None = None
    record_history: bool = True


# =============================================================================
# Output DTOs
# =============================================================================


@dataclass(frozen=True)
class ElectionListItem:
    """One row of the election list."""

    id: str
    title: str
    category: str
    location: str
    status: str
    priority: str
    start_date: datetime
    end_date: datetime
    has_voted: bool
    is_bookmarked: bool
    is_starred: bool
    participation_rate: float
    matched_fields: tuple[str, ...] = ()
    relevance_score: int = 0
    highlights: dict[str, object] = field(default_factory=dict)

    @classmethod
    def from_entity(cls, entity: ElectionRecord) -> ElectionListItem:
        """Build a list item from a record."""
        return cls(
            id=entity.id,
            title=entity.title,
            category=entity.category,
            location=entity.location,
            status=entity.status.value,
            priority=entity.priority.value,
            start_date=entity.start_date,
            end_date=entity.end_date,
            has_voted=entity.has_voted,
            is_bookmarked=entity.is_bookmarked,
            is_starred=entity.is_starred,
            participation_rate=entity.participation_rate,
        )

    @classmethod
    def from_search_result(cls, result: SearchResult) -> ElectionListItem:
        """Build a list item carrying match details."""
        return replace(
            cls.from_entity(result.record),
            matched_fields=tuple(f.value for f in result.matched_fields),
            relevance_score=result.relevance_score,
            highlights=dict(result.highlights),
        )


@dataclass(frozen=True)
class QueryElectionsOutputDto:
    """Everything the list view renders for one query."""

    items: tuple[ElectionListItem, ...]
    pagination: PaginationInfo
    page_window: tuple[PageToken, ...]
    stats: FilterStats
    chips: tuple[FilterChip, ...] = ()
    suggestions: tuple[SearchSuggestion, ...] = ()
    query: str = ""
    search_applied: bool = False
    total_results: int = 0


@dataclass(frozen=True)
class SearchElectionsOutputDto:
    """Outcome of an asynchronous search.

    ``committed`` is False when a newer query was issued before this one
    finished; such outputs must not be shown.
    """

    query: str
    committed: bool
    results: tuple[ElectionListItem, ...] = ()
    suggestions: tuple[SearchSuggestion, ...] = ()
    history: tuple[SearchHistoryEntry, ...] = ()
    success: bool = True
    error_message: str | None = None

    @property
    def total_results(self) -> int:
        return len(self.results)
