"""Validation model for election rows from the listing service.

The listing service and exported snapshots share the same camelCase JSON
shape. Rows are validated one at a time so a single bad row does not drop the
whole collection.
"""

from __future__ import annotations

import logging

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from evote_query.domain.entities.election_record import (
    ElectionRecord,
    ElectionStatus,
    Priority,
    SecurityLevel,
    VotingMethod,
)


logger = logging.getLogger(__name__)


class ElectionRow(BaseModel):
    """One election as serialized by the listing service."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    id: str = Field(min_length=1)
    title: str
    description: str = ""
    category: str = ""
    location: str = ""
    status: ElectionStatus
    voting_method: VotingMethod = VotingMethod.ONLINE
    security_level: SecurityLevel = SecurityLevel.STANDARD
    priority: Priority = Priority.MEDIUM
    start_date: datetime
    end_date: datetime
    tags: list[str] = Field(default_factory=list)
    has_voted: bool = False
    is_bookmarked: bool = False
    is_starred: bool = False
    total_candidates: int = 0
    total_voters: int = 0
    participation_rate: float = 0.0
    results_available: bool = False
    requirements: list[str] = Field(default_factory=list)
    candidates: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("status", "voting_method", "security_level", "priority", mode="before")
    @classmethod
    def _lower_enum(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("candidates", mode="before")
    @classmethod
    def _candidate_names(cls, value: Any) -> Any:
        # Candidates arrive either as names or as contestant objects.
        if not isinstance(value, list):
            return value
        return [c.get("name", "") if isinstance(c, dict) else c for c in value]

    def to_entity(self) -> ElectionRecord:
        return ElectionRecord(
            id=self.id,
            title=self.title,
            description=self.description,
            category=self.category,
            location=self.location,
            status=self.status,
            voting_method=self.voting_method,
            security_level=self.security_level,
            priority=self.priority,
            start_date=self.start_date,
            end_date=self.end_date,
            tags=frozenset(self.tags),
            has_voted=self.has_voted,
            is_bookmarked=self.is_bookmarked,
            is_starred=self.is_starred,
            total_candidates=self.total_candidates,
            total_voters=self.total_voters,
            participation_rate=self.participation_rate,
            results_available=self.results_available,
            requirements=tuple(self.requirements),
            candidates=tuple(c for c in self.candidates if c),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


def parse_election_rows(rows: Any, source: str) -> list[ElectionRecord]:
    """Convert raw rows into records, skipping invalid and duplicate rows.

    Args:
        rows: Decoded JSON list
        source: Where the rows came from, for log messages

    Returns:
        Valid records in input order; the first row wins on duplicate ids
    """
    if not isinstance(rows, list):
        logger.warning("%s: expected a list of elections, got %s", source, type(rows).__name__)
        return []

    records: list[ElectionRecord] = []
    seen: set[str] = set()
    for index, row in enumerate(rows):
        try:
            record = ElectionRow.model_validate(row).to_entity()
        except (ValidationError, ValueError, TypeError) as e:
            logger.warning("%s: skipping invalid election row %d: %s", source, index, e)
            continue
        if record.id in seen:
            logger.warning("%s: skipping duplicate election id %s", source, record.id)
            continue
        seen.add(record.id)
        records.append(record)

    skipped = len(rows) - len(records)
    if skipped:
        logger.info("%s: loaded %d elections, skipped %d", source, len(records), skipped)
    return records
