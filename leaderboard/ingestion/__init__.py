"""
Data Ingestion

Modules:
- csv_parser: Tokenize published-sheet CSV text into rows
- sheet_source: Fetch the CSV feed and load it into dashboard state
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "parse_csv_rows":
        from leaderboard.ingestion.csv_parser import parse_csv_rows
        return parse_csv_rows
    if name == "load_leaderboard":
        from leaderboard.ingestion.sheet_source import load_leaderboard
        return load_leaderboard
    if name == "load_into_state":
        from leaderboard.ingestion.sheet_source import load_into_state
        return load_into_state
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
