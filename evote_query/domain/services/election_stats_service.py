"""Statistics over election collections."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from evote_query.domain.entities.election_record import ElectionRecord
from evote_query.domain.services.collection_validator import validate_collection
from evote_query.domain.services.election_display_service import ElectionDisplayService
from evote_query.domain.services.election_filter_service import (
    ElectionFilterService,
    value_of,
)
from evote_query.domain.value_objects.election_stats import (
    AvailableOptions,
    FilterOption,
    FilterStats,
)
from evote_query.domain.value_objects.filter_state import (
    MULTI_VALUE_FIELDS,
    FilterField,
    FilterState,
)


class ElectionStatsService:
    """Counts behind the list header, the filter badge and option labels.

    Option counts are taken from the unfiltered collection by default so a
    user can see how many results a value would add.
    """

    def __init__(
        self,
        filter_service: ElectionFilterService | None = None,
        display_service: ElectionDisplayService | None = None,
    ) -> None:
        self.filter_service = filter_service or ElectionFilterService()
        self.display_service = display_service or ElectionDisplayService()

    def get_stats(
        self,
        all_records: Sequence[ElectionRecord],
        filtered_records: Sequence[ElectionRecord],
        filter_state: FilterState | None,
    ) -> FilterStats:
        validate_collection(all_records)
        validate_collection(filtered_records)
        active = (
            self.filter_service.get_active_filter_count(filter_state)
            if filter_state is not None
            else 0
        )
        return FilterStats(
            total_elections=len(all_records),
            filtered_elections=len(filtered_records),
            active_filters=active,
            breakdown={
                f: dict(self.count_values(all_records, f)) for f in MULTI_VALUE_FIELDS
            },
        )

    def get_available_options(self, all_records: Sequence[ElectionRecord]) -> AvailableOptions:
        """Options for every dimension, counted over the whole collection."""
        validate_collection(all_records)
        return AvailableOptions(
            **{
                f.value: self._to_options(f, self.count_values(all_records, f))
                for f in MULTI_VALUE_FIELDS
            }
        )

    def get_scoped_options(
        self, all_records: Sequence[ElectionRecord], filter_state: FilterState
    ) -> AvailableOptions:
        """Faceted options: each dimension counted under every *other* active filter.

        This is the explicitly scoped variant; a dimension's own selection
        never hides its sibling values.
        """
        validate_collection(all_records)
        options: dict[str, tuple[FilterOption, ...]] = {}
        for filter_field in MULTI_VALUE_FIELDS:
            others = filter_state.copy()
            setattr(others, filter_field.value, set())
            scoped = self.filter_service.apply_filters(all_records, others)
            options[filter_field.value] = self._to_options(
                filter_field, self.count_values(scoped, filter_field)
            )
        return AvailableOptions(**options)

    @staticmethod
    def count_values(
        records: Iterable[ElectionRecord], filter_field: FilterField
    ) -> Counter[str]:
        counts: Counter[str] = Counter()
        for record in records:
            if filter_field is FilterField.TAGS:
                counts.update(tag for tag in record.tags if tag)
                continue
            value = getattr(record, filter_field.value)
            if value:
                counts[value_of(value)] += 1
        return counts

    def _to_options(
        self, filter_field: FilterField, counts: Counter[str]
    ) -> tuple[FilterOption, ...]:
        ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return tuple(
            FilterOption(
                value=value,
                label=self.display_service.label_for(filter_field, value),
                count=count,
                color=self.display_service.color_for(filter_field, value),
            )
            for value, count in ordered
        )
