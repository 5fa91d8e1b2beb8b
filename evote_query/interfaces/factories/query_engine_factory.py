"""Query engine factory.

Builds collection providers, services and session objects from Settings so
the CLI and host applications share one wiring.
"""

import logging

from pathlib import Path

from evote_query.application.services.pagination_session import PaginationSession
from evote_query.application.usecases.query_elections_usecase import (
    QueryElectionsUseCase,
)
from evote_query.application.usecases.search_elections_usecase import (
    SearchElectionsUseCase,
)
from evote_query.domain.services.election_filter_service import ElectionFilterService
from evote_query.domain.services.election_search_service import ElectionSearchService
from evote_query.domain.services.interfaces.election_collection_provider import (
    IElectionCollectionProvider,
)
from evote_query.domain.services.search_history import SearchHistory
from evote_query.infrastructure.config import Settings, get_settings
from evote_query.infrastructure.external.election_api import ElectionApiClient
from evote_query.infrastructure.importers.json_election_source import (
    JsonElectionSource,
)


logger = logging.getLogger(__name__)


class QueryEngineFactory:
    """Creates engine components configured from Settings."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def create_provider(self, source: str | Path | None = None) -> IElectionCollectionProvider:
        """Pick a collection provider for a source.

        Args:
            source: JSON file path, an ``http(s)://`` base URL, or None for
                the configured listing service

        Returns:
            JsonElectionSource for paths, ElectionApiClient for URLs
        """
        if source is None:
            logger.info("Using election API at %s", self.settings.election_api_base_url)
            return ElectionApiClient(
                self.settings.election_api_base_url,
                timeout=self.settings.election_api_timeout,
            )

        text = str(source)
        if text.startswith(("http://", "https://")):
            logger.info("Using election API at %s", text)
            return ElectionApiClient(text, timeout=self.settings.election_api_timeout)

        return JsonElectionSource(text)

    def create_search_service(
        self, filter_service: ElectionFilterService | None = None
    ) -> ElectionSearchService:
        return ElectionSearchService(
            filter_service=filter_service,
            suggestion_limit=self.settings.suggestion_limit,
            highlight_open=self.settings.highlight_open,
            highlight_close=self.settings.highlight_close,
        )

    def create_query_usecase(self) -> QueryElectionsUseCase:
        filter_service = ElectionFilterService()
        return QueryElectionsUseCase(
            filter_service=filter_service,
            search_service=self.create_search_service(filter_service),
        )

    def create_search_usecase(
        self, provider: IElectionCollectionProvider
    ) -> SearchElectionsUseCase:
        return SearchElectionsUseCase(
            provider,
            search_service=self.create_search_service(),
            history=SearchHistory(max_entries=self.settings.history_limit),
        )

    def create_pagination_session(self, total_items: int = 0) -> PaginationSession:
        return PaginationSession(
            total_items=total_items,
            items_per_page=self.settings.default_items_per_page,
            allowed_sizes=self.settings.allowed_items_per_page,
            max_visible_pages=self.settings.max_visible_pages,
        )
