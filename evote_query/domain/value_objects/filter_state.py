"""Filter state value objects."""

from __future__ import annotations

import copy

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class FilterField(Enum):
    """Filterable fields, in the order chips are rendered."""

    STATUS = "status"
    CATEGORY = "category"
    LOCATION = "location"
    VOTING_METHOD = "voting_method"
    SECURITY_LEVEL = "security_level"
    PRIORITY = "priority"
    TAGS = "tags"
    HAS_VOTED = "has_voted"
    IS_BOOKMARKED = "is_bookmarked"
    IS_STARRED = "is_starred"
    DATE_RANGE = "date_range"

    @property
    def is_multi_value(self) -> bool:
        return self in MULTI_VALUE_FIELDS

    @property
    def is_boolean(self) -> bool:
        return self in BOOLEAN_FIELDS


MULTI_VALUE_FIELDS: tuple[FilterField, ...] = (
    FilterField.STATUS,
    FilterField.CATEGORY,
    FilterField.LOCATION,
    FilterField.VOTING_METHOD,
    FilterField.SECURITY_LEVEL,
    FilterField.PRIORITY,
    FilterField.TAGS,
)

BOOLEAN_FIELDS: tuple[FilterField, ...] = (
    FilterField.HAS_VOTED,
    FilterField.IS_BOOKMARKED,
    FilterField.IS_STARRED,
)

DateBound = datetime | date | str | None


@dataclass(frozen=True)
class DateRange:
    """Inclusive date window. A ``None`` or empty bound is unbounded."""

    start: DateBound = None
    end: DateBound = None

    @property
    def is_active(self) -> bool:
        return bool(self.start) or bool(self.end)


@dataclass
class FilterState:
    """Mutable filter selection for one list view session.

    An empty set leaves the dimension inactive; ``None`` leaves a boolean
    field unset.
    """

    status: set[str] = field(default_factory=set)
    category: set[str] = field(default_factory=set)
    location: set[str] = field(default_factory=set)
    voting_method: set[str] = field(default_factory=set)
    security_level: set[str] = field(default_factory=set)
    priority: set[str] = field(default_factory=set)
    tags: set[str] = field(default_factory=set)
    has_voted: bool | None = None
    is_bookmarked: bool | None = None
    is_starred: bool | None = None
    date_range: DateRange = field(default_factory=DateRange)

    def get(self, filter_field: FilterField) -> object:
        return getattr(self, filter_field.value)

    def copy(self) -> FilterState:
        return copy.deepcopy(self)


@dataclass(frozen=True)
class FilterChip:
    """A removable token for one selected filter value."""

    key: str
    label: str
    value: str
    source_field: FilterField
