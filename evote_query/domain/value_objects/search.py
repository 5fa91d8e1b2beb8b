"""Search value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from evote_query.domain.entities.election_record import ElectionRecord


class SearchField(Enum):
    """Record fields a query can be matched against."""

    TITLE = "title"
    DESCRIPTION = "description"
    CATEGORY = "category"
    LOCATION = "location"
    TAGS = "tags"
    CANDIDATES = "candidates"


DEFAULT_SEARCH_SCOPE: frozenset[SearchField] = frozenset(
    {
        SearchField.TITLE,
        SearchField.DESCRIPTION,
        SearchField.CATEGORY,
        SearchField.LOCATION,
        SearchField.TAGS,
    }
)


class SuggestionType(Enum):
    """Where a suggestion was derived from."""

    ELECTION = "election"
    CATEGORY = "category"
    LOCATION = "location"
    TAG = "tag"


@dataclass(frozen=True)
class SearchSuggestion:
    """A query completion derived from values present in the collection."""

    id: str
    text: str
    type: SuggestionType
    count: int
    election_id: str | None = None


@dataclass(frozen=True)
class SearchHistoryEntry:
    """One remembered query.

    ``to_dict``/``from_dict`` use the camelCase layout the host application
    persists: ``{id, query, timestamp, resultCount}``.
    """

    id: str
    query: str
    timestamp: datetime
    result_count: int

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "query": self.query,
            "timestamp": self.timestamp.isoformat(),
            "resultCount": self.result_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> SearchHistoryEntry:
        timestamp = data["timestamp"]
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        return cls(
            id=str(data["id"]),
            query=str(data["query"]),
            timestamp=timestamp,  # type: ignore[arg-type]
            result_count=int(data["resultCount"]),  # type: ignore[call-overload]
        )


@dataclass(frozen=True)
class SearchResult:
    """A matched record with the fields that matched it.

    ``relevance_score`` is informational; result order is decided by the
    ranking rules of the search service, not by this number.
    """

    record: ElectionRecord
    matched_fields: tuple[SearchField, ...]
    relevance_score: int = 0
    highlights: dict[str, object] = field(default_factory=dict)

    @property
    def matches_title(self) -> bool:
        return SearchField.TITLE in self.matched_fields


@dataclass(frozen=True)
class SearchOutcome:
    """Result of one search call."""

    query: str
    results: tuple[SearchResult, ...] = ()
    suggestions: tuple[SearchSuggestion, ...] = ()
    applied: bool = False

    @property
    def records(self) -> list[ElectionRecord]:
        return [result.record for result in self.results]

    @property
    def total_results(self) -> int:
        return len(self.results)
