"""
Leaderboard exceptions.

Every failure the load boundary knows how to report derives from
LeaderboardError; the message is what the user sees.
"""


class LeaderboardError(Exception):
    """Base exception for leaderboard loading errors"""
    pass


class ConfigurationMissing(LeaderboardError):
    """Raised when no CSV source URL is configured"""
    pass


class FetchFailed(LeaderboardError):
    """Raised when the CSV source answers with a non-success status"""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Failed to fetch data: {status_code} {reason}".rstrip())


class EmptyDataError(LeaderboardError):
    """Raised when the CSV has no data rows after the header"""
    pass
