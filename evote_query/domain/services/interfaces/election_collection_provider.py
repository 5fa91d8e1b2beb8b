"""Election collection provider interface."""

from typing import Protocol

from evote_query.domain.entities.election_record import ElectionRecord


class IElectionCollectionProvider(Protocol):
    """Supplies election snapshots to the query engine.

    Implementations fetch from a backend listing service or a file. The
    engine reads the returned list once per query and keeps no reference to
    where it came from.
    """

    async def fetch_elections(self) -> list[ElectionRecord]:
        """Return the current election collection.

        Returns:
            Election records; ids are unique within the list
        """
        ...
