"""Tests for JsonElectionSource and row validation."""

import json
import logging

from datetime import UTC, datetime

import pytest

from evote_query.domain.entities.election_record import (
    Priority,
    SecurityLevel,
    VotingMethod,
)
from evote_query.infrastructure.importers.election_row import (
    ElectionRow,
    parse_election_rows,
)
from evote_query.infrastructure.importers.json_election_source import (
    ElectionSourceError,
    JsonElectionSource,
)
from tests.fixtures.election_record_factories import make_election_row


def _write(tmp_path, payload) -> str:
    path = tmp_path / "elections.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


class TestElectionRow:
    def test_camel_case_fields(self):
        record = ElectionRow.model_validate(make_election_row()).to_entity()
        assert record.voting_method is VotingMethod.ONLINE
        assert record.security_level is SecurityLevel.ENHANCED
        assert record.priority is Priority.HIGH
        assert record.start_date == datetime(2023, 3, 18, 8, tzinfo=UTC)
        assert record.is_bookmarked is True
        assert record.requirements == ("PVC",)

    def test_defaults_for_optional_fields(self):
        row = {
            "id": "min",
            "title": "Minimal",
            "status": "active",
            "startDate": "2023-01-01",
            "endDate": "2023-01-02",
        }
        record = ElectionRow.model_validate(row).to_entity()
        assert record.voting_method is VotingMethod.ONLINE
        assert record.tags == frozenset()
        assert record.created_at is None

    def test_contestant_objects_become_names(self):
        row = make_election_row(
            candidates=[{"name": "Ada Okafor", "party": "APC"}, "Tunde Bello"]
        )
        record = ElectionRow.model_validate(row).to_entity()
        assert record.candidates == ("Ada Okafor", "Tunde Bello")


class TestParseElectionRows:
    def test_invalid_rows_are_logged_and_skipped(self, caplog):
        rows = [make_election_row(id="ok"), {"id": "broken"}, "not a row"]
        with caplog.at_level(logging.WARNING):
            records = parse_election_rows(rows, "test")
        assert [r.id for r in records] == ["ok"]
        assert "skipping invalid election row 1" in caplog.text

    def test_non_list_payload(self):
        assert parse_election_rows({"oops": 1}, "test") == []


class TestJsonElectionSource:
    def test_reads_plain_list(self, tmp_path):
        source = JsonElectionSource(_write(tmp_path, [make_election_row(id="a")]))
        assert [r.id for r in source.load()] == ["a"]

    def test_reads_wrapped_object(self, tmp_path):
        payload = {"elections": [make_election_row(id="a"), make_election_row(id="b")]}
        source = JsonElectionSource(_write(tmp_path, payload))
        assert [r.id for r in source.load()] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_fetch_elections(self, tmp_path):
        source = JsonElectionSource(_write(tmp_path, [make_election_row(id="a")]))
        records = await source.fetch_elections()
        assert len(records) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(ElectionSourceError, match="File not found"):
            JsonElectionSource(tmp_path / "missing.json").load()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ElectionSourceError, match="Invalid JSON") as exc_info:
            JsonElectionSource(path).load()
        assert exc_info.value.path == path

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes('[{"id": "e1", "title": "Élection"}]'.encode("latin-1"))
        with pytest.raises(ElectionSourceError, match="not valid UTF-8") as exc_info:
            JsonElectionSource(path).load()
        assert exc_info.value.path == path
