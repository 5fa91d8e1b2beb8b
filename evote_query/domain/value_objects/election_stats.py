"""Statistics value objects consumed by the list view."""

from dataclasses import dataclass, field

from evote_query.domain.value_objects.filter_state import FilterField


@dataclass(frozen=True)
class FilterOption:
    """One selectable value of a filter dimension, e.g. ``Active (12)``."""

    value: str
    label: str
    count: int
    color: str = "gray"

    @property
    def display(self) -> str:
        return f"{self.label} ({self.count})"


@dataclass(frozen=True)
class FilterStats:
    """Counts for the list header and the ``N filters active`` badge."""

    total_elections: int
    filtered_elections: int
    active_filters: int
    breakdown: dict[FilterField, dict[str, int]] = field(default_factory=dict)


@dataclass(frozen=True)
class AvailableOptions:
    """Per-dimension options with occurrence counts from the full collection."""

    status: tuple[FilterOption, ...] = ()
    category: tuple[FilterOption, ...] = ()
    location: tuple[FilterOption, ...] = ()
    voting_method: tuple[FilterOption, ...] = ()
    security_level: tuple[FilterOption, ...] = ()
    priority: tuple[FilterOption, ...] = ()
    tags: tuple[FilterOption, ...] = ()

    def for_field(self, filter_field: FilterField) -> tuple[FilterOption, ...]:
        if not filter_field.is_multi_value:
            return ()
        return getattr(self, filter_field.value)
