"""Asynchronous election search with stale-response discard."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from evote_query.application.dtos.election_query_dto import (
    ElectionListItem,
    SearchElectionsInputDto,
    SearchElectionsOutputDto,
)
from evote_query.common.logging import get_logger
from evote_query.domain.exceptions import EngineError
from evote_query.domain.services.election_search_service import (
    ElectionSearchService,
    normalize_query,
)
from evote_query.domain.services.interfaces.election_collection_provider import (
    IElectionCollectionProvider,
)
from evote_query.domain.services.search_history import SearchHistory
from evote_query.domain.value_objects.filter_state import FilterState
from evote_query.domain.value_objects.search import (
    DEFAULT_SEARCH_SCOPE,
    SearchField,
    SearchResult,
    SearchSuggestion,
)


logger = get_logger(__name__)


@dataclass
class SearchState:
    """Visible search state of one list view session."""

    query: str = ""
    scope: tuple[SearchField, ...] = tuple(
        f for f in SearchField if f in DEFAULT_SEARCH_SCOPE
    )
    filters: FilterState = field(default_factory=FilterState)
    results: tuple[SearchResult, ...] = ()
    suggestions: tuple[SearchSuggestion, ...] = ()
    is_searching: bool = False
    error_message: str | None = None


@dataclass(frozen=True)
class SavedSearch:
    """A named query kept for the lifetime of the session."""

    query: str
    scope: tuple[SearchField, ...]
    filters: FilterState
    saved_at: datetime


class SearchElectionsUseCase:
    """Search use case whose visible state follows the latest query only.

    Every call to ``search`` takes a new request number. When the collection
    provider answers, the result is committed only if no newer request was
    issued in the meantime; otherwise it is discarded and reported with
    ``committed=False``. In-flight provider calls are not cancelled.
    """

    def __init__(
        self,
        collection_provider: IElectionCollectionProvider,
        search_service: ElectionSearchService | None = None,
        history: SearchHistory | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            collection_provider: Source of election snapshots
            search_service: Search engine
            history: Session search history
            clock: Time source for saved searches
        """
        self.collection_provider = collection_provider
        self.search_service = search_service or ElectionSearchService()
        self.history = history if history is not None else SearchHistory()
        self.state = SearchState()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._latest_request = 0
        self._saved: dict[str, SavedSearch] = {}

    @property
    def latest_request(self) -> int:
        return self._latest_request

    async def search(self, input_dto: SearchElectionsInputDto) -> SearchElectionsOutputDto:
        """Run a search; only the most recently issued one may commit.

        Raises:
            EngineError: The provider returned something that is not a valid
                record collection. Errors from superseded requests are logged
                and discarded instead.
        """
        self._latest_request += 1
        request_id = self._latest_request

        scope = self.search_service.resolve_scope(input_dto.scope)
        filters = (
            input_dto.filters.copy() if input_dto.filters is not None else FilterState()
        )
        self.state.query = input_dto.query
        self.state.scope = scope
        self.state.filters = filters
        self.state.is_searching = True

        try:
            records = await self.collection_provider.fetch_elections()
            outcome = self.search_service.search(records, input_dto.query, scope, filters)
        except EngineError as e:
            if request_id != self._latest_request:
                logger.warning(
                    "stale_search_error_discarded", query=input_dto.query, error=str(e)
                )
                return self._discarded(input_dto.query, request_id)
            self.state.is_searching = False
            raise
        except Exception as e:
            if request_id != self._latest_request:
                return self._discarded(input_dto.query, request_id)
            logger.error("election_search_failed", query=input_dto.query, error=str(e))
            self.state.results = ()
            self.state.suggestions = ()
            self.state.is_searching = False
            self.state.error_message = str(e)
            return SearchElectionsOutputDto(
                query=normalize_query(input_dto.query),
                committed=True,
                success=False,
                error_message=str(e),
                history=self.history.entries,
            )

        if request_id != self._latest_request:
            return self._discarded(outcome.query, request_id)

        self.state.results = outcome.results
        self.state.suggestions = outcome.suggestions
        self.state.is_searching = False
        self.state.error_message = None

        if outcome.applied and input_dto.record_history:
            self.history.add(input_dto.query, outcome.total_results)

        logger.info(
            "election_search_committed",
            query=outcome.query,
            results=outcome.total_results,
            request_id=request_id,
        )
        return SearchElectionsOutputDto(
            query=outcome.query,
            committed=True,
            results=tuple(ElectionListItem.from_search_result(r) for r in outcome.results),
            suggestions=outcome.suggestions,
            history=self.history.entries,
        )

    async def suggest(self, query: str) -> list[SearchSuggestion]:
        """Suggestions for a partially typed query, from the full collection."""
        records = await self.collection_provider.fetch_elections()
        return self.search_service.get_suggestions(records, query)

    def clear_search(self) -> None:
        """Reset the visible state; anything still in flight is discarded."""
        self._latest_request += 1
        self.state = SearchState()

    def clear_history(self) -> None:
        self.history.clear()

    def save_search(self, name: str) -> SavedSearch:
        saved = SavedSearch(
            query=self.state.query,
            scope=self.state.scope,
            filters=self.state.filters.copy(),
            saved_at=self._clock(),
        )
        self._saved[name] = saved
        return saved

    async def load_search(self, name: str) -> SearchElectionsOutputDto | None:
        """Re-run a saved search. Unknown names return None."""
        saved = self._saved.get(name)
        if saved is None:
            return None
        return await self.search(
            SearchElectionsInputDto(
                query=saved.query, scope=saved.scope, filters=saved.filters
            )
        )

    def saved_search_names(self) -> list[str]:
        return list(self._saved)

    def delete_saved_search(self, name: str) -> bool:
        return self._saved.pop(name, None) is not None

    def get_search_analytics(self) -> dict[str, Any]:
        return {
            "total_searches": len(self.history),
            "average_results": self.history.average_result_count(),
            "recent_searches": [e.query for e in self.history.recent()],
            "search_trends": self.history.trends(),
            "current_query": self.state.query,
            "current_results": len(self.state.results),
        }

    def _discarded(self, query: str, request_id: int) -> SearchElectionsOutputDto:
        logger.debug(
            "stale_search_discarded",
            query=query,
            request_id=request_id,
            latest_request=self._latest_request,
        )
        return SearchElectionsOutputDto(query=query, committed=False)
