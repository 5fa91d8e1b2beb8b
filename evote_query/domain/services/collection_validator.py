"""Boundary checks for election collections supplied by the host."""

from collections.abc import Sequence

from evote_query.domain.entities.election_record import ElectionRecord
from evote_query.domain.exceptions import InvalidCollectionError


def validate_collection(records: object) -> Sequence[ElectionRecord]:
    """Fail fast when the host passes something other than a record sequence.

    Args:
        records: Collection handed to the engine

    Returns:
        The same object, typed as a record sequence

    Raises:
        InvalidCollectionError: Not a list/tuple, contains non-records, or
            repeats an id
    """
    if not isinstance(records, (list, tuple)):
        raise InvalidCollectionError(
            f"Election collection must be a list or tuple, got {type(records).__name__}",
            {"type": type(records).__name__},
        )

    seen: set[str] = set()
    for index, record in enumerate(records):
        if not isinstance(record, ElectionRecord):
            raise InvalidCollectionError(
                f"Item {index} is not an ElectionRecord: {type(record).__name__}",
                {"index": index},
            )
        if record.id in seen:
            raise InvalidCollectionError(
                f"Duplicate election id in collection: {record.id}",
                {"id": record.id},
            )
        seen.add(record.id)
    return records
