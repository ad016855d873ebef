"""
Dashboard state.

Everything the presentation layer remembers between interactions:
current sort, the last loaded records, the last error and when data was
last loaded. Transitions return a new state.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime

from leaderboard.ranking.ranker import LeaderboardView, SortKey, SortState, build_view, toggle_sort
from leaderboard.ranking.records import Record


@dataclass(frozen=True)
class DashboardState:
    sort: SortState = field(default_factory=SortState)
    records: tuple[Record, ...] = ()
    error: str | None = None
    last_loaded: datetime | None = None

    def view(self) -> LeaderboardView:
        return build_view(list(self.records), self.sort, self.last_loaded)


def select_sort(state: DashboardState, key: SortKey | str) -> DashboardState:
    """Apply a column selection to the dashboard's sort state."""
    return replace(state, sort=toggle_sort(state.sort, key))
