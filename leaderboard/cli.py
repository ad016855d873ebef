"""
Command-line leaderboard.

Usage:
    sheet-leaderboard --url <published csv url> [--sort win_rate] [--asc]
    python -m leaderboard --csv ranked.csv
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from leaderboard.config import TIMESTAMP_FORMAT
from leaderboard.ingestion.sheet_source import load_into_state
from leaderboard.ranking.ranker import (
    SortDirection,
    SortKey,
    SortState,
    format_currency,
    remaining_pool,
    to_frame,
)
from leaderboard.state import DashboardState


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="sheet-leaderboard",
        description="Ranked leaderboard from a published spreadsheet CSV",
    )
    parser.add_argument(
        "--url",
        help="Published CSV URL (default: $LEADERBOARD_CSV_URL)",
    )
    parser.add_argument(
        "--sort",
        choices=[k.value for k in SortKey],
        default=SortState().key.value,
        help="Column to rank by (default: %(default)s)",
    )
    parser.add_argument(
        "--asc",
        action="store_true",
        help="Sort ascending instead of descending",
    )
    parser.add_argument(
        "--csv",
        type=Path,
        help="Also write the ranked table to this CSV file",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = create_parser().parse_args(argv)

    direction = SortDirection.ASC if args.asc else SortDirection.DESC
    state = DashboardState(sort=SortState(SortKey(args.sort), direction))
    state = load_into_state(state, url=args.url)

    if state.error:
        print(state.error, file=sys.stderr)
        return 1

    df = to_frame(list(state.records), state.sort)
    print(df.to_string(index=False))
    print()
    print(f"Remaining pool: {format_currency(remaining_pool(list(state.records)))}")
    print(f"Last updated: {state.last_loaded.strftime(TIMESTAMP_FORMAT)}")

    if args.csv:
        args.csv.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(args.csv, index=False)
        print(f"Saved to {args.csv}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
