"""Filter state holder for one list view session."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from evote_query.domain.services.election_filter_service import (
    ElectionFilterService,
    value_of,
)
from evote_query.domain.value_objects.filter_state import (
    DateBound,
    DateRange,
    FilterChip,
    FilterField,
    FilterState,
)


@dataclass(frozen=True)
class SavedFilterPreset:
    filters: FilterState
    saved_at: datetime


class FilterSession:
    """Owns a mutable FilterState and the named presets saved from it.

    Created with defaults when a list view mounts and discarded when it
    unmounts. Presets live only in memory.
    """

    def __init__(
        self,
        initial: FilterState | None = None,
        filter_service: ElectionFilterService | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.filter_service = filter_service or ElectionFilterService()
        self._initial = initial.copy() if initial is not None else FilterState()
        self.filters = self._initial.copy()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._presets: dict[str, SavedFilterPreset] = {}

    def toggle_value(self, filter_field: FilterField, value: object) -> None:
        """Add the value to a multi-value field, or remove it if present."""
        if not filter_field.is_multi_value:
            msg = f"{filter_field.value} is not a multi-value filter"
            raise ValueError(msg)
        selected = getattr(self.filters, filter_field.value)
        text = value_of(value)
        if any(value_of(v) == text for v in selected):
            selected.difference_update({v for v in selected if value_of(v) == text})
        else:
            selected.add(text)

    def set_values(self, filter_field: FilterField, values: set[str]) -> None:
        if not filter_field.is_multi_value:
            msg = f"{filter_field.value} is not a multi-value filter"
            raise ValueError(msg)
        setattr(self.filters, filter_field.value, set(values))

    def set_flag(self, filter_field: FilterField, flag: bool | None) -> None:
        """Set a boolean filter; None unsets it."""
        if not filter_field.is_boolean:
            msg = f"{filter_field.value} is not a boolean filter"
            raise ValueError(msg)
        setattr(self.filters, filter_field.value, flag)

    def set_date_range(self, start: DateBound = None, end: DateBound = None) -> None:
        self.filters.date_range = DateRange(start=start, end=end)

    def clear(self) -> None:
        """Drop every selection."""
        self.filters = FilterState()

    def reset(self) -> None:
        """Return to the state the session was created with."""
        self.filters = self._initial.copy()

    def chips(self) -> list[FilterChip]:
        return self.filter_service.get_filter_chips(self.filters)

    def remove_chip(self, chip: FilterChip) -> None:
        self.filters = self.filter_service.remove_chip(self.filters, chip)

    @property
    def active_count(self) -> int:
        return self.filter_service.get_active_filter_count(self.filters)

    def is_active(self, filter_field: FilterField) -> bool:
        return self.filter_service.is_filter_active(self.filters, filter_field)

    def save(self, name: str) -> None:
        self._presets[name] = SavedFilterPreset(
            filters=self.filters.copy(), saved_at=self._clock()
        )

    def load(self, name: str) -> bool:
        """Replace the current filters with a preset. Unknown names are ignored."""
        preset = self._presets.get(name)
        if preset is None:
            return False
        self.filters = preset.filters.copy()
        return True

    def saved_names(self) -> list[str]:
        return list(self._presets)

    def delete(self, name: str) -> bool:
        return self._presets.pop(name, None) is not None
