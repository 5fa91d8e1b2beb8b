"""Display lookups for filter options and badges.

Closed dimensions are keyed by their enums and checked for completeness at
import time, so adding an enum member without a colour fails immediately.
Free-text dimensions (category, location, tags) use known values with a grey
fallback.
"""

from enum import Enum

from evote_query.domain.entities.election_record import (
    ElectionStatus,
    Priority,
    SecurityLevel,
    VotingMethod,
)
from evote_query.domain.value_objects.filter_state import FilterField


DEFAULT_COLOR = "gray"

STATUS_COLORS: dict[ElectionStatus, str] = {
    ElectionStatus.ACTIVE: "green",
    ElectionStatus.UPCOMING: "blue",
    ElectionStatus.COMPLETED: "gray",
    ElectionStatus.CANCELLED: "red",
}

VOTING_METHOD_COLORS: dict[VotingMethod, str] = {
    VotingMethod.ONLINE: "blue",
    VotingMethod.HYBRID: "green",
    VotingMethod.OFFLINE: "gray",
}

SECURITY_LEVEL_COLORS: dict[SecurityLevel, str] = {
    SecurityLevel.STANDARD: "gray",
    SecurityLevel.ENHANCED: "yellow",
    SecurityLevel.MAXIMUM: "red",
}

PRIORITY_COLORS: dict[Priority, str] = {
    Priority.HIGH: "red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}

CATEGORY_COLORS: dict[str, str] = {
    "Presidential": "purple",
    "Senate": "blue",
    "House of Reps": "green",
    "Governor": "yellow",
    "State Assembly": "orange",
}

LOCATION_COLORS: dict[str, str] = {
    "Nigeria": "purple",
    "Lagos State": "blue",
    "Abuja": "green",
    "Kano State": "yellow",
}

TAG_COLORS: dict[str, str] = {
    "presidential": "purple",
    "national": "blue",
    "state": "green",
    "local": "orange",
}

_ENUM_TABLES: dict[FilterField, tuple[type[Enum], dict]] = {
    FilterField.STATUS: (ElectionStatus, STATUS_COLORS),
    FilterField.VOTING_METHOD: (VotingMethod, VOTING_METHOD_COLORS),
    FilterField.SECURITY_LEVEL: (SecurityLevel, SECURITY_LEVEL_COLORS),
    FilterField.PRIORITY: (Priority, PRIORITY_COLORS),
}

_TEXT_TABLES: dict[FilterField, dict[str, str]] = {
    FilterField.CATEGORY: CATEGORY_COLORS,
    FilterField.LOCATION: LOCATION_COLORS,
    FilterField.TAGS: TAG_COLORS,
}


def _assert_exhaustive() -> None:
    for enum_type, table in _ENUM_TABLES.values():
        missing = [member for member in enum_type if member not in table]
        if missing:
            msg = f"No colour defined for {enum_type.__name__}: {missing}"
            raise RuntimeError(msg)


_assert_exhaustive()


class ElectionDisplayService:
    """Colours and labels for filter values."""

    def color_for(self, filter_field: FilterField, value: object) -> str:
        if filter_field in _ENUM_TABLES:
            enum_type, table = _ENUM_TABLES[filter_field]
            try:
                member = value if isinstance(value, enum_type) else enum_type(value)
            except ValueError:
                return DEFAULT_COLOR
            return table[member]
        table = _TEXT_TABLES.get(filter_field, {})
        return table.get(str(value), DEFAULT_COLOR)

    def label_for(self, filter_field: FilterField, value: object) -> str:
        """Enum values are capitalised; free text is shown as-is."""
        text = str(value.value) if isinstance(value, Enum) else str(value)
        if filter_field in _ENUM_TABLES:
            return text[:1].upper() + text[1:]
        return text
