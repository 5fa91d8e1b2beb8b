"""Election filter domain service.

Evaluates a FilterState against election records. Selections within one
dimension are OR-ed, dimensions are AND-ed. A selection that cannot be
interpreted makes its dimension match nothing instead of raising.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import ClassVar

from evote_query.domain.entities.election_record import ElectionRecord
from evote_query.domain.services.collection_validator import validate_collection
from evote_query.domain.utils.datetime_utils import coerce_bound, format_bound, to_utc
from evote_query.domain.value_objects.filter_state import (
    BOOLEAN_FIELDS,
    MULTI_VALUE_FIELDS,
    DateRange,
    FilterChip,
    FilterField,
    FilterState,
)


RecordPredicate = Callable[[ElectionRecord], bool]

DATE_FIELDS: frozenset[str] = frozenset(
    {"start_date", "end_date", "created_at", "updated_at"}
)


class MalformedSelection(Exception):
    """Raised internally when a filter value cannot be interpreted."""


def _never(_: ElectionRecord) -> bool:
    return False


def value_of(value: object) -> str:
    """String form of a filter or record value (enum members use ``.value``)."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def normalize_selection(selection: object) -> frozenset[str]:
    """Turn a multi-value selection into a frozenset of strings.

    Raises:
        MalformedSelection: The selection is not a collection of scalars
    """
    if selection is None or selection in ("", b""):
        return frozenset()
    if isinstance(selection, (str, bytes)) or not isinstance(selection, Iterable):
        raise MalformedSelection(repr(selection))
    values: set[str] = set()
    for item in selection:
        if isinstance(item, (str, Enum)):
            values.add(value_of(item))
        else:
            raise MalformedSelection(repr(item))
    return frozenset(values)


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


class ElectionFilterService:
    """Applies filter selections and derives chips and counts from them."""

    DEFAULT_DATE_FIELD = "start_date"

    # field -> (chip key prefix, label prefix, capitalize value in label)
    CHIP_FORMATS: ClassVar[dict[FilterField, tuple[str, str, bool]]] = {
        FilterField.STATUS: ("status", "Status", True),
        FilterField.CATEGORY: ("category", "Category", False),
        FilterField.LOCATION: ("location", "Location", False),
        FilterField.VOTING_METHOD: ("method", "Method", True),
        FilterField.SECURITY_LEVEL: ("security", "Security", True),
        FilterField.PRIORITY: ("priority", "Priority", True),
        FilterField.TAGS: ("tag", "Tag", False),
    }

    BOOLEAN_CHIP_FORMATS: ClassVar[dict[FilterField, tuple[str, str]]] = {
        FilterField.HAS_VOTED: ("hasVoted", "Voted"),
        FilterField.IS_BOOKMARKED: ("isBookmarked", "Bookmarked"),
        FilterField.IS_STARRED: ("isStarred", "Starred"),
    }

    def apply_filters(
        self,
        records: Sequence[ElectionRecord],
        filter_state: FilterState | None,
        date_field: str = DEFAULT_DATE_FIELD,
    ) -> list[ElectionRecord]:
        """Return the records that satisfy every active dimension.

        Args:
            records: Election collection snapshot
            filter_state: Current selection; None means no filtering
            date_field: Record timestamp compared against the date range

        Returns:
            Matching records in their original order

        Raises:
            InvalidCollectionError: ``records`` is not a record sequence
        """
        validate_collection(records)
        if filter_state is None:
            return list(records)

        predicates = self._build_predicates(filter_state, date_field)
        if not predicates:
            return list(records)
        return [r for r in records if all(p(r) for p in predicates)]

    def matches(
        self,
        record: ElectionRecord,
        filter_state: FilterState,
        date_field: str = DEFAULT_DATE_FIELD,
    ) -> bool:
        """Whether a single record passes the filter."""
        return all(p(record) for p in self._build_predicates(filter_state, date_field))

    def get_filter_chips(self, filter_state: FilterState) -> list[FilterChip]:
        """One chip per selected value plus one per active scalar field.

        Values inside a dimension are ordered alphabetically so repeated calls
        produce identical lists.
        """
        chips: list[FilterChip] = []

        for filter_field in MULTI_VALUE_FIELDS:
            try:
                values = normalize_selection(filter_state.get(filter_field))
            except MalformedSelection:
                continue
            key_prefix, label_prefix, capitalize = self.CHIP_FORMATS[filter_field]
            for value in sorted(values):
                shown = _capitalize(value) if capitalize else value
                chips.append(
                    FilterChip(
                        key=f"{key_prefix}-{value}",
                        label=f"{label_prefix}: {shown}",
                        value=value,
                        source_field=filter_field,
                    )
                )

        for filter_field in BOOLEAN_FIELDS:
            flag = filter_state.get(filter_field)
            if not isinstance(flag, bool):
                continue
            key, label_prefix = self.BOOLEAN_CHIP_FORMATS[filter_field]
            chips.append(
                FilterChip(
                    key=key,
                    label=f"{label_prefix}: {'Yes' if flag else 'No'}",
                    value=str(flag).lower(),
                    source_field=filter_field,
                )
            )

        date_range = filter_state.date_range
        if isinstance(date_range, DateRange) and date_range.is_active:
            start = format_bound(date_range.start)
            end = format_bound(date_range.end)
            chips.append(
                FilterChip(
                    key="dateRange",
                    label=f"Date: {start or 'Start'} - {end or 'End'}",
                    value=f"{start}-{end}",
                    source_field=FilterField.DATE_RANGE,
                )
            )

        return chips

    def remove_chip(self, filter_state: FilterState, chip: FilterChip) -> FilterState:
        """Return a copy of the state without the value the chip represents.

        Multi-value fields lose exactly that value; scalar fields are cleared.
        """
        updated = filter_state.copy()
        source = chip.source_field

        if source.is_multi_value:
            current = updated.get(source)
            if isinstance(current, Iterable) and not isinstance(current, (str, bytes)):
                remaining = {v for v in current if value_of(v) != chip.value}
                setattr(updated, source.value, remaining)
        elif source.is_boolean:
            setattr(updated, source.value, None)
        elif source is FilterField.DATE_RANGE:
            updated.date_range = DateRange()

        return updated

    def is_filter_active(self, filter_state: FilterState, filter_field: FilterField) -> bool:
        """Whether one field contributes to filtering."""
        value = filter_state.get(filter_field)
        if filter_field.is_multi_value:
            if value is None or isinstance(value, (str, bytes)):
                return bool(value)
            try:
                return len(value) > 0  # type: ignore[arg-type]
            except TypeError:
                # Malformed but present: it still narrows the result to nothing.
                return True
        if filter_field.is_boolean:
            return value is not None
        if value is None:
            return False
        if not isinstance(value, DateRange):
            return True
        return value.is_active

    def get_active_filter_count(self, filter_state: FilterState) -> int:
        """Number of active fields (not the number of selected values)."""
        return sum(1 for f in FilterField if self.is_filter_active(filter_state, f))

    def _build_predicates(
        self, filter_state: FilterState, date_field: str
    ) -> list[RecordPredicate]:
        predicates: list[RecordPredicate] = []

        for filter_field in MULTI_VALUE_FIELDS:
            raw = filter_state.get(filter_field)
            try:
                selected = normalize_selection(raw)
            except MalformedSelection:
                predicates.append(_never)
                continue
            if not selected:
                continue
            if filter_field is FilterField.TAGS:
                predicates.append(self._tags_predicate(selected))
            else:
                predicates.append(self._membership_predicate(filter_field.value, selected))

        for filter_field in BOOLEAN_FIELDS:
            flag = filter_state.get(filter_field)
            if flag is None:
                continue
            if not isinstance(flag, bool):
                predicates.append(_never)
                continue
            predicates.append(self._boolean_predicate(filter_field.value, flag))

        date_predicate = self._date_predicate(filter_state.date_range, date_field)
        if date_predicate is not None:
            predicates.append(date_predicate)

        return predicates

    @staticmethod
    def _membership_predicate(attr: str, selected: frozenset[str]) -> RecordPredicate:
        def predicate(record: ElectionRecord) -> bool:
            return value_of(getattr(record, attr)) in selected

        return predicate

    @staticmethod
    def _tags_predicate(selected: frozenset[str]) -> RecordPredicate:
        def predicate(record: ElectionRecord) -> bool:
            return not selected.isdisjoint(record.tags)

        return predicate

    @staticmethod
    def _boolean_predicate(attr: str, expected: bool) -> RecordPredicate:
        def predicate(record: ElectionRecord) -> bool:
            return getattr(record, attr) is expected

        return predicate

    @staticmethod
    def _date_predicate(date_range: object, date_field: str) -> RecordPredicate | None:
        if date_range is None:
            return None
        if not isinstance(date_range, DateRange):
            return _never
        if not date_range.is_active:
            return None
        if date_field not in DATE_FIELDS:
            return _never
        try:
            start = coerce_bound(date_range.start)
            end = coerce_bound(date_range.end, end_of_day=True)
        except ValueError:
            return _never

        def predicate(record: ElectionRecord) -> bool:
            stamp = getattr(record, date_field)
            if stamp is None:
                return False
            stamp = to_utc(stamp)
            if start is not None and stamp < start:
                return False
            return not (end is not None and stamp > end)

        return predicate
