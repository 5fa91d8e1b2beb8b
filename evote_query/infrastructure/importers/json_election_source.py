"""Election collection read from a JSON snapshot file."""

from __future__ import annotations

import json
import logging

from pathlib import Path

from evote_query.domain.entities.election_record import ElectionRecord
from evote_query.infrastructure.importers.election_row import parse_election_rows


logger = logging.getLogger(__name__)


class ElectionSourceError(Exception):
    """The snapshot file cannot be read or decoded."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class JsonElectionSource:
    """Collection provider backed by a JSON file.

    The file holds either a list of elections or an object with an
    ``elections`` list, the shape returned by the listing service. The file is
    re-read on every fetch so edits show up in the next query.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load_json(self) -> object:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ElectionSourceError(f"File not found: {self.path}", self.path) from e
        except json.JSONDecodeError as e:
            raise ElectionSourceError(
                f"Invalid JSON in {self.path}: {e.msg} (line {e.lineno})", self.path
            ) from e
        except UnicodeDecodeError as e:
            raise ElectionSourceError(
                f"{self.path} is not valid UTF-8: {e.reason}", self.path
            ) from e
        except OSError as e:
            raise ElectionSourceError(f"Cannot read {self.path}: {e}", self.path) from e

        if isinstance(data, dict):
            return data.get("elections", [])
        return data

    def load(self) -> list[ElectionRecord]:
        """Read and validate the snapshot synchronously."""
        records = parse_election_rows(self.load_json(), str(self.path))
        logger.debug("Loaded %d elections from %s", len(records), self.path)
        return records

    async def fetch_elections(self) -> list[ElectionRecord]:
        return self.load()
