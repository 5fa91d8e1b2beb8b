"""Sort order value objects."""

from dataclasses import dataclass
from enum import Enum


class SortField(Enum):
    DATE = "date"
    TITLE = "title"
    PARTICIPATION = "participation"
    PRIORITY = "priority"
    CREATED_AT = "createdAt"


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ElectionSort:
    """Requested ordering of a result list."""

    field: SortField = SortField.DATE
    direction: SortDirection = SortDirection.DESC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC
