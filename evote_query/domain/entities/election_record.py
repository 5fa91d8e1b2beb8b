"""Election record entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ElectionStatus(str, Enum):
    """Lifecycle status of an election."""

    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class VotingMethod(str, Enum):
    """How ballots are cast."""

    ONLINE = "online"
    HYBRID = "hybrid"
    OFFLINE = "offline"


class SecurityLevel(str, Enum):
    """Verification level applied to the ballot."""

    STANDARD = "standard"
    ENHANCED = "enhanced"
    MAXIMUM = "maximum"


class Priority(str, Enum):
    """Display priority of an election on the voter dashboard."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class ElectionRecord:
    """A read-only snapshot of one election as supplied by the listing service.

    The query engine never mutates records. Collections are supplied fresh on
    every query and the engine holds no reference to them afterwards.
    """

    id: str
    title: str
    description: str
    category: str
    location: str
    status: ElectionStatus
    voting_method: VotingMethod
    security_level: SecurityLevel
    priority: Priority
    start_date: datetime
    end_date: datetime
    tags: frozenset[str] = field(default_factory=frozenset)
    has_voted: bool = False
    is_bookmarked: bool = False
    is_starred: bool = False
    total_candidates: int = 0
    total_voters: int = 0
    participation_rate: float = 0.0
    results_available: bool = False
    requirements: tuple[str, ...] = ()
    candidates: tuple[str, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            msg = (
                f"Election {self.id}: start_date ({self.start_date.isoformat()}) "
                f"is after end_date ({self.end_date.isoformat()})"
            )
            raise ValueError(msg)
        # Accept any iterable of tags from callers; store as frozenset.
        if not isinstance(self.tags, frozenset):
            object.__setattr__(self, "tags", frozenset(self.tags))

    def __str__(self) -> str:
        return f"{self.title} ({self.status.value})"
