"""
Tests for configuration lookup, fetching and the load boundary.

No network access: fetches go through a stub session.
"""

from datetime import datetime

import pytest
import requests

from leaderboard import cli
from leaderboard.config import CSV_URL_ENV_VAR
from leaderboard.errors import ConfigurationMissing, EmptyDataError, FetchFailed, LeaderboardError
from leaderboard.ingestion import sheet_source
from leaderboard.ingestion.sheet_source import (
    fetch_csv_text,
    load_into_state,
    load_leaderboard,
    resolve_csv_url,
)
from leaderboard.ranking.records import Record
from leaderboard.state import DashboardState

URL = "https://docs.example.com/sheet/pub?output=csv"

CSV_TEXT = """Player,Matches Won,Matches Lost,Total Points,Win Rate,Balance
Alice,5,1,300,83%,$100
"Smith, J.",10,2,300,75%,$50
,0,0,0,0%,0
"""


class StubResponse:
    """Mimics requests: .text uses ISO-8859-1 when the charset is missing."""

    def __init__(self, text="", status_code=200, reason="OK", content=None):
        self.content = text.encode("utf-8") if content is None else content
        self.text = self.content.decode("iso-8859-1")
        self.status_code = status_code
        self.reason = reason
        self.headers = {"Content-Type": "text/csv"}


class StubSession:
    """Records requests and replays a canned response or error."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error:
            raise self.error
        return self.response

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class TestResolveCsvUrl:
    """Tests for resolve_csv_url."""

    def test_explicit_url(self):
        assert resolve_csv_url(f"  {URL} ") == URL

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv(CSV_URL_ENV_VAR, URL)
        assert resolve_csv_url() == URL

    def test_missing_raises(self, monkeypatch):
        monkeypatch.delenv(CSV_URL_ENV_VAR, raising=False)
        with pytest.raises(ConfigurationMissing):
            resolve_csv_url()

    def test_blank_raises(self):
        with pytest.raises(ConfigurationMissing):
            resolve_csv_url("   ")


class TestFetchCsvText:
    """Tests for fetch_csv_text."""

    def test_returns_body(self):
        session = StubSession(StubResponse(CSV_TEXT))
        assert fetch_csv_text(URL, session=session, timeout=3) == CSV_TEXT
        assert session.calls == [(URL, 3)]

    def test_non_success_status_raises(self):
        session = StubSession(StubResponse(status_code=404, reason="Not Found"))
        with pytest.raises(FetchFailed) as exc_info:
            fetch_csv_text(URL, session=session)
        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == "Failed to fetch data: 404 Not Found"

    def test_fetch_failed_is_leaderboard_error(self):
        assert issubclass(FetchFailed, LeaderboardError)

    def test_utf8_body_without_charset(self):
        body = "Player,Wins\nJosé,3\n".encode("utf-8")
        session = StubSession(StubResponse(content=body))
        assert fetch_csv_text(URL, session=session) == "Player,Wins\nJosé,3\n"

    def test_utf8_byte_order_mark_dropped(self):
        body = "\ufeffPlayer,Wins\nAlice,3".encode("utf-8")
        session = StubSession(StubResponse(content=body))
        assert fetch_csv_text(URL, session=session).startswith("Player")

    def test_own_session_closed_after_success(self, monkeypatch):
        session = StubSession(StubResponse(CSV_TEXT))
        monkeypatch.setattr(sheet_source, "create_session", lambda: session)
        fetch_csv_text(URL)
        assert session.calls == [(URL, sheet_source.REQUEST_TIMEOUT)]
        assert session.closed

    def test_own_session_closed_after_failure(self, monkeypatch):
        session = StubSession(StubResponse(status_code=503, reason="Service Unavailable"))
        monkeypatch.setattr(sheet_source, "create_session", lambda: session)
        with pytest.raises(FetchFailed):
            fetch_csv_text(URL)
        assert session.closed

    def test_caller_session_left_open(self):
        session = StubSession(StubResponse(CSV_TEXT))
        fetch_csv_text(URL, session=session)
        assert not session.closed


class TestLoadLeaderboard:
    """Tests for load_leaderboard."""

    def test_parses_records(self):
        records = load_leaderboard(URL, session=StubSession(StubResponse(CSV_TEXT)))
        assert [r.name for r in records] == ["Alice", "Smith, J."]

    def test_non_ascii_name_preserved(self):
        body = "Player,Wins,Losses,Total Points,Win Rate,Balance\nJosé,3,1,10,75%,$5\n".encode("utf-8")
        records = load_leaderboard(URL, session=StubSession(StubResponse(content=body)))
        assert records[0].name == "José"

    def test_header_only_raises(self):
        session = StubSession(StubResponse("Player,Wins\n"))
        with pytest.raises(EmptyDataError):
            load_leaderboard(URL, session=session)


class TestLoadIntoState:
    """Tests for the load boundary."""

    def test_success_replaces_records(self):
        now = datetime(2025, 1, 25, 9, 0, 0)
        prior = DashboardState(error="Error: old")
        state = load_into_state(prior, URL, session=StubSession(StubResponse(CSV_TEXT)), now=now)
        assert len(state.records) == 2
        assert state.error is None
        assert state.last_loaded == now
        assert state.sort == prior.sort

    def test_fetch_failure_keeps_previous_records(self):
        loaded = datetime(2025, 1, 24, 9, 0, 0)
        prior = DashboardState(records=(Record("Alice"),), last_loaded=loaded)
        session = StubSession(StubResponse(status_code=500, reason="Internal Server Error"))
        state = load_into_state(prior, URL, session=session)
        assert state.records == prior.records
        assert state.last_loaded == loaded
        assert state.error == "Error: Failed to fetch data: 500 Internal Server Error"

    def test_transport_error_reported(self):
        session = StubSession(error=requests.ConnectionError("connection refused"))
        state = load_into_state(DashboardState(), URL, session=session)
        assert state.error == "Error: connection refused"
        assert state.records == ()

    def test_missing_configuration_reported(self, monkeypatch):
        monkeypatch.delenv(CSV_URL_ENV_VAR, raising=False)
        state = load_into_state(DashboardState())
        assert state.error.startswith("Error: Missing CSV URL")

    def test_empty_data_reported(self):
        state = load_into_state(DashboardState(), URL, session=StubSession(StubResponse("Player\n")))
        assert state.error == "Error: No data found in the CSV"

    def test_unexpected_errors_propagate(self):
        session = StubSession(error=RuntimeError("boom"))
        with pytest.raises(RuntimeError):
            load_into_state(DashboardState(), URL, session=session)


class TestCli:
    """Tests for the command-line entry point."""

    def test_prints_ranked_table(self, monkeypatch, capsys, tmp_path):
        monkeypatch.setattr(sheet_source, "create_session", lambda: StubSession(StubResponse(CSV_TEXT)))
        out_csv = tmp_path / "ranked.csv"

        exit_code = cli.main(["--url", URL, "--sort", "wins", "--csv", str(out_csv)])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert output.index("Smith, J.") < output.index("Alice")
        assert "Remaining pool: $350.00" in output
        assert out_csv.exists()

    def test_error_exit_code(self, monkeypatch, capsys):
        monkeypatch.delenv(CSV_URL_ENV_VAR, raising=False)
        assert cli.main([]) == 1
        assert "Missing CSV URL" in capsys.readouterr().err
