"""Tests for the election query CLI commands."""

import json

from unittest.mock import patch

import pytest

from click.testing import CliRunner

from evote_query.infrastructure.external.election_api import ElectionApiError
from evote_query.interfaces.cli.main import cli
from tests.fixtures.election_record_factories import make_election_row


@pytest.fixture
def snapshot(tmp_path):
    rows = [
        make_election_row(
            id="lagos-gov",
            title="Lagos Governorship",
            location="Lagos",
            status="active",
            tags=["state"],
        ),
        make_election_row(
            id="abuja-council",
            title="Abuja Area Council",
            category="Local",
            location="Abuja",
            status="upcoming",
            priority="low",
            tags=["local"],
        ),
        make_election_row(
            id="kano-gov",
            title="Kano Governorship",
            location="Kano",
            status="completed",
            tags=["state"],
        ),
    ]
    path = tmp_path / "elections.json"
    path.write_text(json.dumps(rows), encoding="utf-8")
    return str(path)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestQueryCommand:
    def test_lists_all_elections(self, runner, snapshot):
        result = runner.invoke(cli, ["query", snapshot])

        assert result.exit_code == 0, result.output
        assert "3 of 3 elections (0 filters active)" in result.output
        assert "Lagos Governorship" in result.output
        assert "Showing 1-3 of 3 | Page 1 of 1" in result.output

    def test_filters_and_chips(self, runner, snapshot):
        result = runner.invoke(
            cli, ["query", snapshot, "--status", "active", "--status", "completed"]
        )

        assert result.exit_code == 0, result.output
        assert "2 of 3 elections (1 filters active)" in result.output
        assert "Filters: Status: Active, Status: Completed" in result.output
        assert "Abuja Area Council" not in result.output

    def test_search_and_pagination(self, runner, snapshot):
        result = runner.invoke(
            cli, ["query", snapshot, "--q", "governorship", "--per-page", "1", "--page", "2"]
        )

        assert result.exit_code == 0, result.output
        assert 'Search: "governorship" (2 results)' in result.output
        assert "Kano Governorship" in result.output
        assert "Page 2 of 2" in result.output
        assert "Pages: 1 [2]" in result.output

    def test_sort(self, runner, snapshot):
        result = runner.invoke(cli, ["query", snapshot, "--sort", "title"])

        assert result.exit_code == 0, result.output
        abuja = result.output.index("Abuja Area Council")
        lagos = result.output.index("Lagos Governorship")
        assert abuja < lagos

    def test_no_matches(self, runner, snapshot):
        result = runner.invoke(cli, ["query", snapshot, "--location", "Atlantis"])

        assert result.exit_code == 0
        assert "No elections found." in result.output

    def test_invalid_snapshot_exits_with_error(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[", encoding="utf-8")

        result = runner.invoke(cli, ["query", str(path)])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_negative_page_size_exits_with_error(self, runner, snapshot):
        result = runner.invoke(cli, ["query", snapshot, "--per-page", "-1"])

        assert result.exit_code == 1
        assert "items_per_page must not be negative" in result.output


class TestOptionsCommand:
    def test_lists_options_with_counts(self, runner, snapshot):
        result = runner.invoke(cli, ["options", snapshot])

        assert result.exit_code == 0, result.output
        assert "Gubernatorial" in result.output
        assert "Upcoming" in result.output


class TestSuggestCommand:
    def test_suggestions(self, runner, snapshot):
        result = runner.invoke(cli, ["suggest", snapshot, "gov"])

        assert result.exit_code == 0, result.output
        assert "Kano Governorship (election, 1)" in result.output
        assert "Lagos Governorship (election, 1)" in result.output

    def test_short_text(self, runner, snapshot):
        result = runner.invoke(cli, ["suggest", snapshot, "g"])

        assert result.exit_code == 0
        assert "No suggestions." in result.output


class TestErrorHandling:
    def test_api_errors_are_reported(self, runner, snapshot):
        with patch(
            "evote_query.interfaces.factories.query_engine_factory.JsonElectionSource.fetch_elections",
            side_effect=ElectionApiError("Request failed with status 502", 502),
        ):
            result = runner.invoke(cli, ["options", snapshot])

        assert result.exit_code == 1
        assert "Error: Request failed with status 502" in result.output

    def test_missing_file_is_reported(self, runner, tmp_path):
        result = runner.invoke(cli, ["options", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_url_source_uses_api_client(self, runner):
        with patch(
            "evote_query.interfaces.factories.query_engine_factory.ElectionApiClient.fetch_elections",
            side_effect=ElectionApiError("Request timed out"),
        ) as fetch:
            result = runner.invoke(cli, ["options", "https://elections.example.org/api"])

        assert fetch.await_count == 1
        assert result.exit_code == 1
        assert "Error: Request timed out" in result.output

    def test_non_utf8_snapshot_is_reported(self, runner, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'[{"id": "e1", "title": "\xc9lection"}]')

        result = runner.invoke(cli, ["options", str(path)])

        assert result.exit_code == 1
        assert "not valid UTF-8" in result.output
        assert "Unexpected error" not in result.output
