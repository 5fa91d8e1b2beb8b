from datetime import UTC, datetime
from typing import Any

from evote_query.domain.entities.election_record import (
    ElectionRecord,
    ElectionStatus,
    Priority,
    SecurityLevel,
    VotingMethod,
)


def make_election(
    id: str = "e1",
    title: str = "Presidential Election 2023",
    description: str = "Nationwide vote for the office of President",
    category: str = "Presidential",
    location: str = "Nigeria",
    status: ElectionStatus = ElectionStatus.ACTIVE,
    voting_method: VotingMethod = VotingMethod.ONLINE,
    security_level: SecurityLevel = SecurityLevel.STANDARD,
    priority: Priority = Priority.MEDIUM,
    start_date: datetime = datetime(2023, 2, 25, 8, 0, tzinfo=UTC),
    end_date: datetime = datetime(2023, 2, 25, 18, 0, tzinfo=UTC),
    tags: frozenset[str] | set[str] | tuple[str, ...] = (),
    **overrides: Any,
) -> ElectionRecord:
    return ElectionRecord(
        id=id,
        title=title,
        description=description,
        category=category,
        location=location,
        status=status,
        voting_method=voting_method,
        security_level=security_level,
        priority=priority,
        start_date=start_date,
        end_date=end_date,
        tags=frozenset(tags),
        **overrides,
    )


def make_election_row(**overrides: Any) -> dict[str, Any]:
    """camelCase JSON row as served by the listing service."""
    row: dict[str, Any] = {
        "id": "e1",
        "title": "Lagos Governorship Election",
        "description": "Election of the Governor of Lagos State",
        "category": "Gubernatorial",
        "location": "Lagos",
        "status": "active",
        "votingMethod": "online",
        "securityLevel": "enhanced",
        "priority": "high",
        "startDate": "2023-03-18T08:00:00Z",
        "endDate": "2023-03-18T18:00:00Z",
        "tags": ["state", "governor"],
        "hasVoted": False,
        "isBookmarked": True,
        "isStarred": False,
        "totalCandidates": 4,
        "totalVoters": 7000000,
        "participationRate": 41.5,
        "resultsAvailable": False,
        "requirements": ["PVC"],
        "createdAt": "2023-01-01T00:00:00Z",
        "updatedAt": "2023-01-02T00:00:00Z",
    }
    row.update(overrides)
    return row


def make_sample_collection() -> list[ElectionRecord]:
    """Twelve elections, five of them active."""
    statuses = [
        ElectionStatus.ACTIVE,
        ElectionStatus.UPCOMING,
        ElectionStatus.ACTIVE,
        ElectionStatus.COMPLETED,
        ElectionStatus.ACTIVE,
        ElectionStatus.CANCELLED,
        ElectionStatus.UPCOMING,
        ElectionStatus.ACTIVE,
        ElectionStatus.COMPLETED,
        ElectionStatus.UPCOMING,
        ElectionStatus.ACTIVE,
        ElectionStatus.COMPLETED,
    ]
    locations = ["Lagos", "Abuja", "Kano", "Rivers"]
    return [
        make_election(
            id=f"e{i + 1}",
            title=f"Election {i + 1:02d}",
            location=locations[i % len(locations)],
            status=status,
            start_date=datetime(2023, 1, i + 1, tzinfo=UTC),
            end_date=datetime(2023, 1, i + 2, tzinfo=UTC),
        )
        for i, status in enumerate(statuses)
    ]
