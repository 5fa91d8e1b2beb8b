"""Election list ordering."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, ClassVar

from evote_query.domain.entities.election_record import ElectionRecord, Priority
from evote_query.domain.utils.datetime_utils import to_utc
from evote_query.domain.value_objects.sort_order import ElectionSort, SortField


_EPOCH = datetime(1970, 1, 1)


def _timestamp(value: datetime | None) -> datetime:
    return to_utc(value if value is not None else _EPOCH)


class ElectionSortService:
    """Sorts records by one field; ties keep their incoming order."""

    PRIORITY_RANK: ClassVar[dict[Priority, int]] = {
        Priority.HIGH: 3,
        Priority.MEDIUM: 2,
        Priority.LOW: 1,
    }

    def sort(
        self, records: Sequence[ElectionRecord], order: ElectionSort | None = None
    ) -> list[ElectionRecord]:
        order = order or ElectionSort()
        key = self._key_for(order.field)
        # sorted() is stable in both directions when reverse= is used.
        return sorted(records, key=key, reverse=order.descending)

    def _key_for(self, sort_field: SortField) -> Callable[[ElectionRecord], Any]:
        if sort_field is SortField.TITLE:
            return lambda r: r.title.lower()
        if sort_field is SortField.PARTICIPATION:
            return lambda r: r.participation_rate
        if sort_field is SortField.PRIORITY:
            return lambda r: self.PRIORITY_RANK[r.priority]
        if sort_field is SortField.CREATED_AT:
            return lambda r: _timestamp(r.created_at)
        return lambda r: _timestamp(r.start_date)
