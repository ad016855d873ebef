"""
Leaderboard Ranking

Modules:
- records: Column schema and Record construction
- ranker: Sorting, rank/tier/pool derivation and display rows
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "parse_leaderboard":
        from leaderboard.ranking.records import parse_leaderboard
        return parse_leaderboard
    if name == "sort_records":
        from leaderboard.ranking.ranker import sort_records
        return sort_records
    if name == "build_view":
        from leaderboard.ranking.ranker import build_view
        return build_view
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
