"""Election query commands."""

import asyncio

import click

from evote_query.application.dtos.election_query_dto import QueryElectionsInputDto
from evote_query.domain.entities.election_record import ElectionRecord
from evote_query.domain.services.election_stats_service import ElectionStatsService
from evote_query.domain.value_objects.filter_state import DateRange, FilterState
from evote_query.domain.value_objects.search import SearchField
from evote_query.domain.value_objects.sort_order import (
    ElectionSort,
    SortDirection,
    SortField,
)
from evote_query.interfaces.cli.base import with_error_handling
from evote_query.interfaces.cli.presenters.election_table_presenter import (
    ElectionTablePresenter,
)
from evote_query.interfaces.factories.query_engine_factory import QueryEngineFactory


_SOURCE = click.argument("source")


def _load_records(factory: QueryEngineFactory, source: str) -> list[ElectionRecord]:
    provider = factory.create_provider(source)
    return asyncio.run(provider.fetch_elections())


@click.command()
@_SOURCE
@click.option("--status", multiple=True, help="Status to include (repeatable)")
@click.option("--category", multiple=True, help="Category to include (repeatable)")
@click.option("--location", multiple=True, help="Location to include (repeatable)")
@click.option("--method", "voting_method", multiple=True, help="Voting method")
@click.option("--security", "security_level", multiple=True, help="Security level")
@click.option("--priority", multiple=True, help="Priority")
@click.option("--tag", "tags", multiple=True, help="Tag (any selected tag matches)")
@click.option("--voted/--not-voted", "has_voted", default=None, help="Voted state")
@click.option("--bookmarked/--not-bookmarked", "is_bookmarked", default=None)
@click.option("--starred/--not-starred", "is_starred", default=None)
@click.option("--from", "date_from", default=None, help="Start date lower bound (YYYY-MM-DD)")
@click.option("--to", "date_to", default=None, help="Start date upper bound (YYYY-MM-DD)")
@click.option("--q", "search_query", default="", help="Free-text search query")
@click.option(
    "--in",
    "scope",
    multiple=True,
    type=click.Choice([f.value for f in SearchField]),
    help="Restrict search to these fields (repeatable)",
)
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--per-page", type=int, default=None, help="Items per page")
@click.option(
    "--sort",
    "sort_field",
    type=click.Choice([f.value for f in SortField]),
    default=None,
    help="Sort field (default keeps search ranking)",
)
@click.option("--desc", is_flag=True, help="Sort descending")
@with_error_handling
def query(
    source: str,
    status: tuple[str, ...],
    category: tuple[str, ...],
    location: tuple[str, ...],
    voting_method: tuple[str, ...],
    security_level: tuple[str, ...],
    priority: tuple[str, ...],
    tags: tuple[str, ...],
    has_voted: bool | None,
    is_bookmarked: bool | None,
    is_starred: bool | None,
    date_from: str | None,
    date_to: str | None,
    search_query: str,
    scope: tuple[str, ...],
    page: int,
    per_page: int | None,
    sort_field: str | None,
    desc: bool,
):
    """Filter, search and paginate elections from SOURCE.

    SOURCE is a JSON snapshot file or an http(s) URL of the listing service.
    """
    factory = QueryEngineFactory()
    settings = factory.settings
    records = _load_records(factory, source)

    filters = FilterState(
        status=set(status),
        category=set(category),
        location=set(location),
        voting_method=set(voting_method),
        security_level=set(security_level),
        priority=set(priority),
        tags=set(tags),
        has_voted=has_voted,
        is_bookmarked=is_bookmarked,
        is_starred=is_starred,
        date_range=DateRange(start=date_from, end=date_to),
    )
    sort = None
    if sort_field is not None:
        sort = ElectionSort(
            field=SortField(sort_field),
            direction=SortDirection.DESC if desc else SortDirection.ASC,
        )

    usecase = factory.create_query_usecase()
    output = usecase.execute(
        QueryElectionsInputDto(
            records=records,
            filters=filters,
            query=search_query,
            scope=scope or None,
            sort=sort,
            page=page,
            items_per_page=per_page if per_page is not None else settings.default_items_per_page,
            max_visible_pages=settings.max_visible_pages,
        )
    )

    click.echo(ElectionTablePresenter().render(output))


@click.command()
@_SOURCE
@with_error_handling
def options(source: str):
    """List filter options with counts for the elections in SOURCE."""
    records = _load_records(QueryEngineFactory(), source)
    available = ElectionStatsService().get_available_options(records)
    click.echo(ElectionTablePresenter().render_options(available))


@click.command()
@_SOURCE
@click.argument("text")
@with_error_handling
def suggest(source: str, text: str):
    """Show search suggestions for TEXT."""
    factory = QueryEngineFactory()
    records = _load_records(factory, source)
    suggestions = factory.create_search_service().get_suggestions(records, text)
    click.echo(ElectionTablePresenter().render_suggestions(suggestions))
