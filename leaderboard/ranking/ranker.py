"""
Leaderboard Ranking

Sorts records by a selectable key and derives the display aids shown
next to each row: 1-based rank, win-rate tier, and the remaining pool
(a fixed total minus every participant's balance).

All functions here are pure; sort state is passed in explicitly.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

import pandas as pd

from leaderboard.config import (
    DEFAULT_SORT_DIRECTION,
    DEFAULT_SORT_KEY,
    POOL_TOTAL,
    TIER_HIGH_THRESHOLD,
    TIER_MEDIUM_THRESHOLD,
    TIMESTAMP_FORMAT,
)
from leaderboard.ranking.records import Record
from leaderboard.utils import escape_html, name_sort_key


class SortKey(str, Enum):
    NAME = "name"
    WINS = "wins"
    LOSSES = "losses"
    TOTAL_SCORE = "total_score"
    WIN_RATE = "win_rate"
    BALANCE = "balance"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


# Sort value extractors; text and money columns compare on parsed values
SORT_VALUES = {
    SortKey.NAME: lambda r: name_sort_key(r.name),
    SortKey.WINS: lambda r: r.wins,
    SortKey.LOSSES: lambda r: r.losses,
    SortKey.TOTAL_SCORE: lambda r: r.total_score,
    SortKey.WIN_RATE: lambda r: r.win_rate_value,
    SortKey.BALANCE: lambda r: r.balance_value,
}


@dataclass(frozen=True)
class SortState:
    key: SortKey = SortKey(DEFAULT_SORT_KEY)
    direction: SortDirection = SortDirection(DEFAULT_SORT_DIRECTION)


def toggle_sort(state: SortState, key: SortKey | str) -> SortState:
    """
    Select a sort column.

    Selecting the active column flips the direction; selecting another
    column starts it in descending order.
    """
    key = SortKey(key)
    if key == state.key:
        return SortState(key, state.direction.flipped())
    return SortState(key, SortDirection.DESC)


def sort_records(records: list[Record], state: SortState) -> list[Record]:
    """
    Return a new list of records ordered by the given sort state.

    The sort is stable in both directions: equal values keep sheet order.
    """
    return sorted(
        records,
        key=SORT_VALUES[state.key],
        reverse=state.direction is SortDirection.DESC,
    )


def rank_by_total_score(records: list[Record]) -> list[Record]:
    """Fixed ranking: total score, highest first."""
    return sort_records(records, SortState(SortKey.TOTAL_SCORE, SortDirection.DESC))


def win_rate_tier(win_rate: float) -> str:
    """Classify a numeric win rate (percent) as 'high', 'medium' or 'low'."""
    if win_rate >= TIER_HIGH_THRESHOLD:
        return "high"
    if win_rate >= TIER_MEDIUM_THRESHOLD:
        return "medium"
    return "low"


def remaining_pool(records: list[Record], total: float = POOL_TOTAL) -> float:
    """Pool left after subtracting every parsed balance from the fixed total."""
    return round(total - sum(r.balance_value for r in records), 2)


def format_currency(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


@dataclass(frozen=True)
class DisplayRow:
    rank: int
    name: str  # HTML-escaped
    wins: int
    losses: int
    total_score: int
    win_rate: str
    tier: str
    balance: str  # HTML-escaped


@dataclass(frozen=True)
class LeaderboardView:
    rows: list[DisplayRow]
    remaining_pool: float
    remaining_pool_text: str
    last_updated: str | None = None


def build_display_rows(ranked: list[Record]) -> list[DisplayRow]:
    """
    Turn already-sorted records into display rows.

    Args:
        ranked: Records in display order

    Returns:
        One DisplayRow per record, rank starting at 1
    """
    return [
        DisplayRow(
            rank=rank,
            name=escape_html(record.name),
            wins=record.wins,
            losses=record.losses,
            total_score=record.total_score,
            win_rate=record.win_rate,
            tier=win_rate_tier(record.win_rate_value),
            balance=escape_html(record.balance),
        )
        for rank, record in enumerate(ranked, start=1)
    ]


def build_view(
    records: list[Record],
    state: SortState,
    loaded_at: datetime | None = None,
) -> LeaderboardView:
    """Sort records and assemble everything the presentation layer shows."""
    ranked = sort_records(records, state)
    pool = remaining_pool(ranked)
    last_updated = None
    if loaded_at is not None:
        last_updated = f"Last updated: {loaded_at.strftime(TIMESTAMP_FORMAT)}"

    return LeaderboardView(
        rows=build_display_rows(ranked),
        remaining_pool=pool,
        remaining_pool_text=format_currency(pool),
        last_updated=last_updated,
    )


def to_frame(records: list[Record], state: SortState | None = None) -> pd.DataFrame:
    """
    Build a ranked DataFrame for tables and CSV export.

    Args:
        records: Records to rank
        state: Sort state (default: SortState())

    Returns:
        DataFrame with columns: rank, name, wins, losses, total_score,
        win_rate, win_rate_value, tier, balance, balance_value
    """
    ranked = sort_records(records, state or SortState())
    rows = [
        {
            'rank': rank,
            'name': r.name,
            'wins': r.wins,
            'losses': r.losses,
            'total_score': r.total_score,
            'win_rate': r.win_rate,
            'win_rate_value': r.win_rate_value,
            'tier': win_rate_tier(r.win_rate_value),
            'balance': r.balance,
            'balance_value': r.balance_value,
        }
        for rank, r in enumerate(ranked, start=1)
    ]
    columns = [
        'rank', 'name', 'wins', 'losses', 'total_score',
        'win_rate', 'win_rate_value', 'tier', 'balance', 'balance_value',
    ]
    return pd.DataFrame(rows, columns=columns)
