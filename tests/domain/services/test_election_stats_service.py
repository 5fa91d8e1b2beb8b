"""Tests for ElectionStatsService."""

import pytest

from evote_query.domain.entities.election_record import ElectionStatus, VotingMethod
from evote_query.domain.exceptions import InvalidCollectionError
from evote_query.domain.services.election_filter_service import ElectionFilterService
from evote_query.domain.services.election_stats_service import ElectionStatsService
from evote_query.domain.value_objects.filter_state import FilterField, FilterState
from tests.fixtures.election_record_factories import (
    make_election,
    make_sample_collection,
)


@pytest.fixture
def service() -> ElectionStatsService:
    return ElectionStatsService()


class TestGetStats:
    def test_counts(self, service):
        collection = make_sample_collection()
        state = FilterState(status={"active"}, location={"Lagos"})
        filtered = ElectionFilterService().apply_filters(collection, state)

        stats = service.get_stats(collection, filtered, state)

        assert stats.total_elections == 12
        assert stats.filtered_elections == len(filtered)
        assert stats.active_filters == 2
        assert stats.filtered_elections <= stats.total_elections

    def test_breakdown_is_over_full_collection(self, service):
        collection = make_sample_collection()
        stats = service.get_stats(collection, [], FilterState(status={"cancelled"}))
        assert stats.breakdown[FilterField.STATUS] == {
            "active": 5,
            "upcoming": 3,
            "completed": 3,
            "cancelled": 1,
        }

    def test_no_filter_state(self, service):
        stats = service.get_stats([], [], None)
        assert (stats.total_elections, stats.filtered_elections, stats.active_filters) == (
            0,
            0,
            0,
        )

    def test_rejects_invalid_collection(self, service):
        with pytest.raises(InvalidCollectionError):
            service.get_stats("not a list", [], None)  # type: ignore[arg-type]


class TestAvailableOptions:
    def test_ordered_by_count_then_value(self, service):
        options = service.get_available_options(make_sample_collection())
        assert [(o.value, o.count) for o in options.status] == [
            ("active", 5),
            ("completed", 3),
            ("upcoming", 3),
            ("cancelled", 1),
        ]

    def test_labels_and_colors(self, service):
        options = service.get_available_options(
            [make_election(voting_method=VotingMethod.HYBRID, category="Senate")]
        )
        (method,) = options.voting_method
        assert (method.label, method.color) == ("Hybrid", "green")
        (category,) = options.category
        assert (category.label, category.color) == ("Senate", "blue")
        assert method.display == "Hybrid (1)"

    def test_tags_counted_individually(self, service):
        records = [
            make_election(id="a", tags={"state", "governor"}),
            make_election(id="b", tags={"state"}),
        ]
        options = service.get_available_options(records)
        assert [(o.value, o.count) for o in options.tags] == [
            ("state", 2),
            ("governor", 1),
        ]

    def test_options_ignore_current_filters(self, service):
        collection = make_sample_collection()
        options = service.get_available_options(collection)
        assert sum(o.count for o in options.status) == len(collection)

    def test_scoped_options_apply_other_dimensions_only(self, service):
        records = [
            make_election(id="a", status=ElectionStatus.ACTIVE, location="Lagos"),
            make_election(id="b", status=ElectionStatus.UPCOMING, location="Lagos"),
            make_election(id="c", status=ElectionStatus.ACTIVE, location="Kano"),
        ]
        state = FilterState(status={"active"}, location={"Lagos"})
        options = service.get_scoped_options(records, state)
        assert {(o.value, o.count) for o in options.status} == {
            ("active", 1),
            ("upcoming", 1),
        }
        assert {(o.value, o.count) for o in options.location} == {
            ("Lagos", 1),
            ("Kano", 1),
        }
