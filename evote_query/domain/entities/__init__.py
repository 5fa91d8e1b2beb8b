"""Domain entities."""

from evote_query.domain.entities.election_record import (
    ElectionRecord,
    ElectionStatus,
    Priority,
    SecurityLevel,
    VotingMethod,
)


__all__ = [
    "ElectionRecord",
    "ElectionStatus",
    "Priority",
    "SecurityLevel",
    "VotingMethod",
]
