"""
Published-Sheet Source

Fetches the leaderboard CSV from its published URL and loads it into
dashboard state. Loading is user-triggered only: there is no polling,
caching or retry, and a failed load keeps the previous records.

Usage:
    from leaderboard.ingestion.sheet_source import load_into_state
    state = load_into_state(DashboardState(), url)
"""

import os
from dataclasses import replace
from datetime import datetime

import requests

from leaderboard.config import CSV_URL_ENV_VAR, REQUEST_TIMEOUT, USER_AGENT
from leaderboard.errors import ConfigurationMissing, FetchFailed, LeaderboardError
from leaderboard.ranking.records import Record, parse_leaderboard
from leaderboard.state import DashboardState
from leaderboard.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def resolve_csv_url(url: str | None = None) -> str:
    """
    Resolve the CSV source URL.

    Args:
        url: Explicit URL; falls back to the LEADERBOARD_CSV_URL env var

    Returns:
        The URL, stripped of surrounding whitespace

    Raises:
        ConfigurationMissing: If no URL is configured or it is blank
    """
    if url is None:
        url = os.environ.get(CSV_URL_ENV_VAR)

    if not url or not url.strip():
        raise ConfigurationMissing(
            f"Missing CSV URL. Set {CSV_URL_ENV_VAR} to the sheet's published CSV link"
        )
    return url.strip()


def create_session() -> requests.Session:
    """Create a requests session that identifies the leaderboard client."""
    s = requests.Session()
    s.headers.update({"User-Agent": USER_AGENT})
    return s


def _get_csv_text(session, url: str, timeout: float) -> str:
    resp = session.get(url, timeout=timeout)

    if not 200 <= resp.status_code < 300:
        raise FetchFailed(resp.status_code, resp.reason or "")

    # Published sheets often omit the charset; always decode as UTF-8
    return resp.content.decode("utf-8-sig", errors="replace")


def fetch_csv_text(url: str, session=None, timeout: float = REQUEST_TIMEOUT) -> str:
    """
    Download the CSV document.

    The body is decoded as UTF-8 regardless of the Content-Type charset.

    Args:
        url: Published CSV URL
        session: requests.Session (or compatible), left open for the caller;
            if None a new session is created and closed after the request
        timeout: Request timeout in seconds

    Returns:
        Response body as text

    Raises:
        FetchFailed: If the server answers with a non-2xx status
        requests.RequestException: On transport errors
    """
    if session is None:
        with create_session() as own_session:
            return _get_csv_text(own_session, url, timeout)
    return _get_csv_text(session, url, timeout)


def load_leaderboard(url: str | None = None, session=None) -> list[Record]:
    """
    Resolve, fetch and parse the leaderboard.

    Raises:
        ConfigurationMissing, FetchFailed, EmptyDataError,
        requests.RequestException
    """
    csv_url = resolve_csv_url(url)
    logger.info(f"Fetching leaderboard CSV from {csv_url}")
    text = fetch_csv_text(csv_url, session=session)
    records = parse_leaderboard(text)
    logger.info(f"  Parsed {len(records)} players")
    return records


def load_into_state(
    state: DashboardState,
    url: str | None = None,
    session=None,
    now: datetime | None = None,
) -> DashboardState:
    """
    Load the leaderboard and fold the outcome into dashboard state.

    On success the records are replaced, the error cleared and the load
    time stamped. On failure the previous records and load time are kept
    and a single message is set for display.

    Args:
        state: Current dashboard state
        url: Explicit CSV URL (default: environment)
        session: Optional requests.Session
        now: Load timestamp (default: datetime.now())

    Returns:
        New DashboardState
    """
    try:
        records = load_leaderboard(url, session=session)
    except (LeaderboardError, requests.RequestException) as e:
        logger.warning(f"Error loading leaderboard: {e}")
        return replace(state, error=f"Error: {e}")

    return replace(
        state,
        records=tuple(records),
        error=None,
        last_loaded=now or datetime.now(),
    )
