"""Election list query use case."""

from evote_query.application.dtos.election_query_dto import (
    ElectionListItem,
    QueryElectionsInputDto,
    QueryElectionsOutputDto,
)
from evote_query.common.logging import get_logger
from evote_query.domain.services.collection_validator import validate_collection
from evote_query.domain.services.election_filter_service import ElectionFilterService
from evote_query.domain.services.election_search_service import ElectionSearchService
from evote_query.domain.services.election_sort_service import ElectionSortService
from evote_query.domain.services.election_stats_service import ElectionStatsService
from evote_query.domain.services.pagination_service import PaginationService
from evote_query.domain.value_objects.filter_state import FilterState


logger = get_logger(__name__)


class QueryElectionsUseCase:
    """Runs filter, search, sort and pagination over one collection snapshot.

    The order is fixed: filters first, then the search query inside the
    filtered subset, then the optional sort, then pagination. Stats compare
    the full collection with the combined result.
    """

    def __init__(
        self,
        filter_service: ElectionFilterService | None = None,
        search_service: ElectionSearchService | None = None,
        sort_service: ElectionSortService | None = None,
        pagination_service: PaginationService | None = None,
        stats_service: ElectionStatsService | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            filter_service: Filter engine
            search_service: Search engine (shares the filter engine by default)
            sort_service: Sorting service
            pagination_service: Pagination calculator
            stats_service: Stats aggregator
        """
        self.filter_service = filter_service or ElectionFilterService()
        self.search_service = search_service or ElectionSearchService(
            filter_service=self.filter_service
        )
        self.sort_service = sort_service or ElectionSortService()
        self.pagination_service = pagination_service or PaginationService()
        self.stats_service = stats_service or ElectionStatsService(
            filter_service=self.filter_service
        )

    def execute(self, input_dto: QueryElectionsInputDto) -> QueryElectionsOutputDto:
        """Run the query.

        Raises:
            InvalidCollectionError: ``records`` is not a record sequence
            InvalidPageSizeError: ``items_per_page`` is negative
        """
        records = validate_collection(input_dto.records)
        filters = input_dto.filters or FilterState()

        outcome = self.search_service.search(
            records, input_dto.query, input_dto.scope, filters
        )
        results = list(outcome.results)

        if input_dto.sort is not None:
            by_id = {r.record.id: r for r in results}
            ordered = self.sort_service.sort([r.record for r in results], input_dto.sort)
            results = [by_id[record.id] for record in ordered]

        matched_records = [r.record for r in results]
        pagination = self.pagination_service.paginate(
            len(results), input_dto.items_per_page, input_dto.page
        )
        page_results = self.pagination_service.get_page_items(results, pagination)

        stats = self.stats_service.get_stats(records, matched_records, filters)

        logger.debug(
            "elections_queried",
            total=stats.total_elections,
            matched=len(results),
            page=pagination.current_page,
            search_applied=outcome.applied,
        )

        return QueryElectionsOutputDto(
            items=tuple(ElectionListItem.from_search_result(r) for r in page_results),
            pagination=pagination,
            page_window=tuple(
                self.pagination_service.get_page_window(
                    pagination, input_dto.max_visible_pages
                )
            ),
            stats=stats,
            chips=tuple(self.filter_service.get_filter_chips(filters)),
            suggestions=outcome.suggestions,
            query=outcome.query,
            search_applied=outcome.applied,
            total_results=len(results),
        )
