"""Bounded, session-scoped search history."""

from __future__ import annotations

import uuid

from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from evote_query.domain.services.election_search_service import normalize_query
from evote_query.domain.value_objects.search import SearchHistoryEntry


DEFAULT_HISTORY_LIMIT = 20
TREND_DAYS = 30


class SearchHistory:
    """Most-recent-first query history, deduplicated by normalized query.

    Re-running a query replaces its old entry so it floats to the front with
    the latest result count. Nothing is persisted; hosts that want to keep
    history across sessions serialize ``to_list()`` and feed it back through
    ``load``.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.max_entries = max(0, max_entries)
        self._clock = clock or (lambda: datetime.now(UTC))
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._entries: list[SearchHistoryEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[SearchHistoryEntry, ...]:
        return tuple(self._entries)

    @property
    def queries(self) -> list[str]:
        return [entry.query for entry in self._entries]

    def add(self, query: str, result_count: int) -> SearchHistoryEntry | None:
        """Push a query to the front, replacing any earlier entry for it.

        Blank queries are ignored and return None.
        """
        key = normalize_query(query)
        if not key:
            return None

        entry = SearchHistoryEntry(
            id=self._id_factory(),
            query=" ".join(query.split()),
            timestamp=self._clock(),
            result_count=max(0, int(result_count)),
        )
        remaining = [e for e in self._entries if normalize_query(e.query) != key]
        self._entries = [entry, *remaining][: self.max_entries]
        return entry

    def clear(self) -> None:
        self._entries = []

    def load(self, entries: Iterable[SearchHistoryEntry | dict[str, object]]) -> None:
        """Replace the history with externally supplied entries.

        Entries are trusted as-is; the list is only truncated to
        ``max_entries``.
        """
        loaded = [
            e if isinstance(e, SearchHistoryEntry) else SearchHistoryEntry.from_dict(e)
            for e in entries
        ]
        self._entries = loaded[: self.max_entries]

    def to_list(self) -> list[dict[str, object]]:
        return [entry.to_dict() for entry in self._entries]

    def recent(self, limit: int = 10) -> list[SearchHistoryEntry]:
        return self._entries[: max(0, limit)]

    def average_result_count(self) -> int:
        if not self._entries:
            return 0
        total = sum(entry.result_count for entry in self._entries)
        return round(total / len(self._entries))

    def trends(self) -> list[tuple[str, int]]:
        """Searches per calendar day (UTC), oldest first, last 30 days with data."""
        per_day: dict[str, int] = {}
        for entry in self._entries:
            stamp = entry.timestamp
            if stamp.tzinfo is not None:
                stamp = stamp.astimezone(UTC)
            day = stamp.date().isoformat()
            per_day[day] = per_day.get(day, 0) + 1
        return sorted(per_day.items())[-TREND_DAYS:]
