"""Election search domain service.

Free-text search always runs inside the filtered subset: filters are applied
first, then the query narrows what is left. Suggestions are the exception and
are drawn from the whole collection so users can discover values outside the
current filter.
"""

from __future__ import annotations

import re

from collections.abc import Iterable, Sequence
from typing import ClassVar

from evote_query.domain.entities.election_record import ElectionRecord
from evote_query.domain.services.collection_validator import validate_collection
from evote_query.domain.services.election_filter_service import ElectionFilterService
from evote_query.domain.value_objects.filter_state import FilterState
from evote_query.domain.value_objects.search import (
    DEFAULT_SEARCH_SCOPE,
    SearchField,
    SearchOutcome,
    SearchResult,
    SearchSuggestion,
    SuggestionType,
)


DEFAULT_SUGGESTION_LIMIT = 8
MIN_SUGGESTION_QUERY_LENGTH = 2

DEFAULT_SUGGESTION_SOURCES: tuple[SuggestionType, ...] = (
    SuggestionType.ELECTION,
    SuggestionType.CATEGORY,
    SuggestionType.LOCATION,
    SuggestionType.TAG,
)


def normalize_query(query: object) -> str:
    """Trim, lower-case and collapse internal whitespace.

    Anything that is not a string normalizes to the empty query.
    """
    if not isinstance(query, str):
        return ""
    return " ".join(query.split()).lower()


def _normalize_text(value: str | None) -> str:
    if not value:
        return ""
    return " ".join(value.split()).lower()


def _highlight_pattern(normalized: str) -> re.Pattern[str]:
    # Fields are matched whitespace-collapsed but highlighted raw.
    return re.compile(r"\s+".join(map(re.escape, normalized.split())), re.IGNORECASE)


class ElectionSearchService:
    """Matches, ranks and highlights records for a query."""

    FIELD_WEIGHTS: ClassVar[dict[SearchField, int]] = {
        SearchField.TITLE: 10,
        SearchField.CATEGORY: 8,
        SearchField.LOCATION: 6,
        SearchField.DESCRIPTION: 5,
        SearchField.TAGS: 4,
        SearchField.CANDIDATES: 3,
    }
    EXACT_TITLE_BONUS = 20

    def __init__(
        self,
        filter_service: ElectionFilterService | None = None,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
        suggestion_sources: Iterable[SuggestionType] = DEFAULT_SUGGESTION_SOURCES,
        highlight_open: str = "<mark>",
        highlight_close: str = "</mark>",
    ) -> None:
        """Initialize the service.

        Args:
            filter_service: Filter engine applied before matching
            suggestion_limit: Maximum number of suggestions returned
            suggestion_sources: Which values suggestions are drawn from
            highlight_open: Marker inserted before a highlighted match
            highlight_close: Marker inserted after a highlighted match
        """
        self.filter_service = filter_service or ElectionFilterService()
        self.suggestion_limit = max(0, suggestion_limit)
        self.suggestion_sources = tuple(suggestion_sources)
        self.highlight_open = highlight_open
        self.highlight_close = highlight_close

    def search(
        self,
        records: Sequence[ElectionRecord],
        query: str,
        scope: Iterable[SearchField | str] | None = None,
        filters: FilterState | None = None,
    ) -> SearchOutcome:
        """Filter, then match and rank records against a query.

        Ranking: more distinct matched fields first, then title matches
        before records matched only elsewhere, then original order.

        Args:
            records: Election collection snapshot
            query: Raw user query
            scope: Fields to match; None uses title, description, category,
                location and tags
            filters: Applied before the query

        Returns:
            SearchOutcome. For a blank query the filtered records are
            returned unranked with no suggestions and ``applied`` False.

        Raises:
            InvalidCollectionError: ``records`` is not a record sequence
        """
        validate_collection(records)
        filtered = self.filter_service.apply_filters(records, filters)
        normalized = normalize_query(query)

        if not normalized:
            return SearchOutcome(
                query="",
                results=tuple(SearchResult(record=r, matched_fields=()) for r in filtered),
                suggestions=(),
                applied=False,
            )

        fields = self.resolve_scope(scope)
        pattern = _highlight_pattern(normalized)

        ranked: list[tuple[int, SearchResult]] = []
        for index, record in enumerate(filtered):
            matched = tuple(f for f in fields if self._field_matches(record, f, normalized))
            if not matched:
                continue
            ranked.append(
                (
                    index,
                    SearchResult(
                        record=record,
                        matched_fields=matched,
                        relevance_score=self._relevance_score(record, matched, normalized),
                        highlights=self._highlights(record, matched, pattern),
                    ),
                )
            )

        ranked.sort(
            key=lambda item: (
                -len(item[1].matched_fields),
                0 if item[1].matches_title else 1,
                item[0],
            )
        )

        return SearchOutcome(
            query=normalized,
            results=tuple(result for _, result in ranked),
            suggestions=tuple(self.get_suggestions(records, normalized)),
            applied=True,
        )

    def get_suggestions(
        self, records: Sequence[ElectionRecord], query: str
    ) -> list[SearchSuggestion]:
        """Query completions from the full collection.

        One suggestion per distinct matching value; when the same text comes
        from several sources the first source in ``suggestion_sources`` wins.
        Sorted by count descending, then alphabetically, and capped.
        """
        normalized = normalize_query(query)
        if len(normalized) < MIN_SUGGESTION_QUERY_LENGTH or not records:
            return []

        candidates: dict[str, SearchSuggestion] = {}
        for source in self.suggestion_sources:
            for suggestion in self._suggestions_from(records, source, normalized):
                candidates.setdefault(suggestion.text, suggestion)

        ordered = sorted(
            candidates.values(), key=lambda s: (-s.count, s.text.lower(), s.text)
        )
        return ordered[: self.suggestion_limit]

    @staticmethod
    def resolve_scope(scope: Iterable[SearchField | str] | None) -> tuple[SearchField, ...]:
        """Scope as SearchFields in declaration order; unknown names are dropped."""
        if scope is None:
            wanted = set(DEFAULT_SEARCH_SCOPE)
        else:
            wanted = set()
            for item in scope:
                if isinstance(item, SearchField):
                    wanted.add(item)
                    continue
                try:
                    wanted.add(SearchField(str(item).strip().lower()))
                except ValueError:
                    continue
        return tuple(f for f in SearchField if f in wanted)

    @staticmethod
    def _field_matches(record: ElectionRecord, search_field: SearchField, query: str) -> bool:
        if search_field is SearchField.TAGS:
            return any(query in _normalize_text(tag) for tag in record.tags)
        if search_field is SearchField.CANDIDATES:
            return any(query in _normalize_text(name) for name in record.candidates)
        return query in _normalize_text(getattr(record, search_field.value))

    def _relevance_score(
        self, record: ElectionRecord, matched: tuple[SearchField, ...], query: str
    ) -> int:
        score = sum(self.FIELD_WEIGHTS[f] for f in matched)
        if SearchField.TITLE in matched and _normalize_text(record.title) == query:
            score += self.EXACT_TITLE_BONUS
        return score

    def _highlights(
        self,
        record: ElectionRecord,
        matched: tuple[SearchField, ...],
        pattern: re.Pattern[str],
    ) -> dict[str, object]:
        def mark(text: str) -> str:
            return pattern.sub(
                lambda m: f"{self.highlight_open}{m.group(0)}{self.highlight_close}", text
            )

        highlights: dict[str, object] = {}
        for search_field in matched:
            if search_field is SearchField.TAGS:
                highlights["tags"] = tuple(mark(tag) for tag in sorted(record.tags))
            elif search_field is SearchField.CANDIDATES:
                highlights["candidates"] = tuple(mark(name) for name in record.candidates)
            else:
                highlights[search_field.value] = mark(getattr(record, search_field.value))
        return highlights

    @staticmethod
    def _suggestions_from(
        records: Sequence[ElectionRecord], source: SuggestionType, query: str
    ) -> list[SearchSuggestion]:
        counts: dict[str, int] = {}
        first_ids: dict[str, str] = {}

        for record in records:
            if source is SuggestionType.ELECTION:
                values: Iterable[str] = (record.title,)
            elif source is SuggestionType.CATEGORY:
                values = (record.category,)
            elif source is SuggestionType.LOCATION:
                values = (record.location,)
            else:
                values = record.tags
            for value in values:
                if not value:
                    continue
                counts[value] = counts.get(value, 0) + 1
                first_ids.setdefault(value, record.id)

        suggestions: list[SearchSuggestion] = []
        for value, count in counts.items():
            if query not in _normalize_text(value):
                continue
            is_election = source is SuggestionType.ELECTION
            suggestions.append(
                SearchSuggestion(
                    id=(
                        f"election-{first_ids[value]}"
                        if is_election
                        else f"{source.value}-{value}"
                    ),
                    text=value,
                    type=source,
                    count=count,
                    election_id=first_ids[value] if is_election else None,
                )
            )
        return suggestions
