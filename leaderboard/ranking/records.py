"""
Leaderboard Records

Maps parsed CSV rows to typed Record objects through an explicit column
schema. The position of each ColumnSpec in RECORD_SCHEMA is the column
index it reads, so the sheet layout assumption lives in one place.
"""

from dataclasses import dataclass
from typing import Callable, NamedTuple

from leaderboard.config import FALLBACK_BALANCE, FALLBACK_NAME, FALLBACK_WIN_RATE
from leaderboard.ingestion.csv_parser import parse_csv_rows
from leaderboard.utils import parse_currency, parse_float, parse_int


@dataclass(frozen=True)
class Record:
    """One participant's row of leaderboard data."""
    name: str
    wins: int = 0
    losses: int = 0
    total_score: int = 0
    win_rate: str = FALLBACK_WIN_RATE
    balance: str = FALLBACK_BALANCE

    @property
    def win_rate_value(self) -> float:
        return parse_float(self.win_rate)

    @property
    def balance_value(self) -> float:
        return parse_currency(self.balance)


class ColumnSpec(NamedTuple):
    field: str
    coerce: Callable[[str | None], object]


def _text(fallback: str) -> Callable[[str | None], str]:
    def coerce(value: str | None) -> str:
        return value.strip() if value and value.strip() else fallback
    return coerce


def _count(value: str | None) -> int:
    # Wins/losses cannot go negative
    return max(parse_int(value), 0)


RECORD_SCHEMA: tuple[ColumnSpec, ...] = (
    ColumnSpec("name", _text(FALLBACK_NAME)),
    ColumnSpec("wins", _count),
    ColumnSpec("losses", _count),
    ColumnSpec("total_score", parse_int),
    ColumnSpec("win_rate", _text(FALLBACK_WIN_RATE)),
    ColumnSpec("balance", _text(FALLBACK_BALANCE)),
)


def build_record(row: list[str]) -> Record | None:
    """
    Build a Record from one parsed CSV row.

    Missing trailing columns fall back to their defaults.

    Args:
        row: Field strings in sheet column order

    Returns:
        Record, or None when the row has no usable name
    """
    values = {}
    for index, column in enumerate(RECORD_SCHEMA):
        raw = row[index] if index < len(row) else None
        values[column.field] = column.coerce(raw)

    name = values["name"]
    if name == FALLBACK_NAME or not name.strip():
        return None

    return Record(**values)


def build_records(rows: list[list[str]]) -> list[Record]:
    """Build records for all rows, discarding blank or unnamed ones."""
    records = []
    for row in rows:
        record = build_record(row)
        if record is not None:
            records.append(record)
    return records


def parse_leaderboard(text: str) -> list[Record]:
    """
    Parse raw CSV text straight into records, in sheet order.

    Raises:
        EmptyDataError: If the CSV has no data rows
    """
    return build_records(parse_csv_rows(text))
