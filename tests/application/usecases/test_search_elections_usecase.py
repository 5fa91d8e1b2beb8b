"""Tests for SearchElectionsUseCase."""

import asyncio

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from evote_query.application.dtos.election_query_dto import SearchElectionsInputDto
from evote_query.application.usecases.search_elections_usecase import (
    SearchElectionsUseCase,
)
from evote_query.domain.exceptions import InvalidCollectionError
from evote_query.domain.services.search_history import SearchHistory
from evote_query.domain.value_objects.filter_state import FilterState
from evote_query.domain.value_objects.search import SearchField
from tests.fixtures.election_record_factories import make_election


@pytest.fixture
def records():
    return [
        make_election(id="lagos-gov", title="Lagos Governorship", location="Lagos"),
        make_election(id="abuja-council", title="Abuja Area Council", location="Abuja"),
        make_election(id="kano-rerun", title="Kano Rerun", location="Kano"),
    ]


@pytest.fixture
def provider(records):
    mock = AsyncMock()
    mock.fetch_elections.return_value = records
    return mock


class _GatedProvider:
    """Provider whose calls complete only when their gate is opened."""

    def __init__(self, records, responses=None) -> None:
        self.records = records
        self.responses = responses
        self.gates: list[asyncio.Event] = []

    async def fetch_elections(self):
        call = len(self.gates)
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        if self.responses is not None:
            return self.responses[call]
        return self.records


class TestSearch:
    @pytest.mark.asyncio
    async def test_commits_results_and_records_history(self, provider):
        usecase = SearchElectionsUseCase(provider)

        output = await usecase.search(SearchElectionsInputDto(query="Lagos"))

        assert output.committed is True
        assert output.success is True
        assert [item.id for item in output.results] == ["lagos-gov"]
        assert usecase.history.queries == ["Lagos"]
        assert usecase.state.query == "Lagos"
        assert usecase.state.is_searching is False
        assert [r.record.id for r in usecase.state.results] == ["lagos-gov"]

    @pytest.mark.asyncio
    async def test_blank_query_does_not_touch_history(self, provider):
        usecase = SearchElectionsUseCase(provider)
        output = await usecase.search(SearchElectionsInputDto(query="  "))
        assert len(output.results) == 3
        assert len(usecase.history) == 0

    @pytest.mark.asyncio
    async def test_filters_and_scope_are_applied(self, provider):
        usecase = SearchElectionsUseCase(provider)
        output = await usecase.search(
            SearchElectionsInputDto(
                query="a",
                scope=[SearchField.LOCATION],
                filters=FilterState(location={"Abuja", "Kano"}),
                record_history=False,
            )
        )
        assert [item.id for item in output.results] == ["abuja-council", "kano-rerun"]
        assert usecase.state.scope == (SearchField.LOCATION,)
        assert len(usecase.history) == 0

    @pytest.mark.asyncio
    async def test_history_dedupes_repeated_queries(self, provider):
        usecase = SearchElectionsUseCase(provider)
        for query in ["lagos", "abuja", "lagos"]:
            await usecase.search(SearchElectionsInputDto(query=query))
        assert usecase.history.queries == ["lagos", "abuja"]


class TestStaleRequestDiscard:
    """Only the most recently issued query may commit."""

    @pytest.mark.asyncio
    async def test_older_response_arriving_last_is_discarded(self, records):
        provider = _GatedProvider(records)
        usecase = SearchElectionsUseCase(provider)

        first = asyncio.create_task(usecase.search(SearchElectionsInputDto(query="lagos")))
        await asyncio.sleep(0)
        second = asyncio.create_task(usecase.search(SearchElectionsInputDto(query="kano")))
        await asyncio.sleep(0)
        assert len(provider.gates) == 2

        provider.gates[1].set()
        newer = await second
        provider.gates[0].set()
        older = await first

        assert newer.committed is True
        assert older.committed is False
        assert older.results == ()
        assert usecase.state.query == "kano"
        assert [r.record.id for r in usecase.state.results] == ["kano-rerun"]
        assert usecase.history.queries == ["kano"]

    @pytest.mark.asyncio
    async def test_in_order_completion_commits_latest_only(self, records):
        provider = _GatedProvider(records)
        usecase = SearchElectionsUseCase(provider)

        first = asyncio.create_task(usecase.search(SearchElectionsInputDto(query="lagos")))
        await asyncio.sleep(0)
        second = asyncio.create_task(usecase.search(SearchElectionsInputDto(query="abuja")))
        await asyncio.sleep(0)

        provider.gates[0].set()
        older = await first
        assert older.committed is False
        assert usecase.state.is_searching is True

        provider.gates[1].set()
        newer = await second
        assert newer.committed is True
        assert usecase.state.query == "abuja"

    @pytest.mark.asyncio
    async def test_clear_search_discards_in_flight_request(self, records):
        provider = _GatedProvider(records)
        usecase = SearchElectionsUseCase(provider)

        pending = asyncio.create_task(usecase.search(SearchElectionsInputDto(query="lagos")))
        await asyncio.sleep(0)
        usecase.clear_search()
        provider.gates[0].set()

        output = await pending
        assert output.committed is False
        assert usecase.state.query == ""
        assert usecase.state.results == ()


class TestFailures:
    @pytest.mark.asyncio
    async def test_provider_error_is_reported(self):
        provider = AsyncMock()
        provider.fetch_elections.side_effect = RuntimeError("backend down")
        usecase = SearchElectionsUseCase(provider)

        output = await usecase.search(SearchElectionsInputDto(query="lagos"))

        assert output.committed is True
        assert output.success is False
        assert output.error_message == "backend down"
        assert usecase.state.error_message == "backend down"
        assert usecase.state.is_searching is False

    @pytest.mark.asyncio
    async def test_invalid_collection_propagates(self):
        provider = AsyncMock()
        provider.fetch_elections.return_value = {"not": "a list"}
        usecase = SearchElectionsUseCase(provider)

        with pytest.raises(InvalidCollectionError):
            await usecase.search(SearchElectionsInputDto(query="lagos"))
        assert usecase.state.is_searching is False

    @pytest.mark.asyncio
    async def test_invalid_collection_from_superseded_request_is_discarded(self, records):
        provider = _GatedProvider(records, responses=[{"not": "a list"}, records])
        usecase = SearchElectionsUseCase(provider)

        first = asyncio.create_task(usecase.search(SearchElectionsInputDto(query="lagos")))
        await asyncio.sleep(0)
        second = asyncio.create_task(usecase.search(SearchElectionsInputDto(query="kano")))
        await asyncio.sleep(0)

        provider.gates[0].set()
        older = await first
        assert older.committed is False
        assert usecase.state.is_searching is True

        provider.gates[1].set()
        newer = await second
        assert newer.committed is True
        assert [r.record.id for r in usecase.state.results] == ["kano-rerun"]


class TestSuggestAndSavedSearches:
    @pytest.mark.asyncio
    async def test_suggest(self, provider):
        usecase = SearchElectionsUseCase(provider)
        suggestions = await usecase.suggest("lag")
        assert [s.text for s in suggestions] == ["Lagos", "Lagos Governorship"]

    @pytest.mark.asyncio
    async def test_save_and_load_search(self, provider):
        usecase = SearchElectionsUseCase(
            provider, clock=lambda: datetime(2023, 3, 1, tzinfo=UTC)
        )
        await usecase.search(
            SearchElectionsInputDto(query="kano", filters=FilterState(location={"Kano"}))
        )
        saved = usecase.save_search("kano only")
        assert saved.saved_at == datetime(2023, 3, 1, tzinfo=UTC)

        usecase.clear_search()
        output = await usecase.load_search("kano only")

        assert output is not None
        assert [item.id for item in output.results] == ["kano-rerun"]
        assert usecase.state.filters.location == {"Kano"}
        assert usecase.saved_search_names() == ["kano only"]
        assert await usecase.load_search("missing") is None
        assert usecase.delete_saved_search("kano only") is True
        assert usecase.saved_search_names() == []

    @pytest.mark.asyncio
    async def test_analytics(self, provider):
        usecase = SearchElectionsUseCase(provider, history=SearchHistory(max_entries=5))
        await usecase.search(SearchElectionsInputDto(query="lagos"))
        await usecase.search(SearchElectionsInputDto(query="council"))

        analytics = usecase.get_search_analytics()

        assert analytics["total_searches"] == 2
        assert analytics["recent_searches"] == ["council", "lagos"]
        assert analytics["average_results"] == 1
        assert analytics["current_query"] == "council"
        assert analytics["current_results"] == 1

    def test_clear_history(self, provider):
        usecase = SearchElectionsUseCase(provider)
        usecase.history.add("lagos", 1)
        usecase.clear_history()
        assert len(usecase.history) == 0
