"""
Central configuration for the Sheet Leaderboard.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

# --- Data Source Configuration ---
# Published CSV URL (e.g. Google Sheets: File > Share > Publish to web > CSV)
CSV_URL_ENV_VAR = "LEADERBOARD_CSV_URL"
REQUEST_TIMEOUT = 10  # seconds
USER_AGENT = "sheet-leaderboard/1.0"

# --- Sheet Layout ---
# Columns: Name, Wins, Losses, Total Points, Win Rate, Balance (optional)

# Fallback literals for missing text fields
FALLBACK_NAME = "Unknown"
FALLBACK_WIN_RATE = "0%"
FALLBACK_BALANCE = "0"

# --- Ranking Configuration ---
DEFAULT_SORT_KEY = "wins"
DEFAULT_SORT_DIRECTION = "desc"

# Win rate tier thresholds (percent)
TIER_HIGH_THRESHOLD = 60
TIER_MEDIUM_THRESHOLD = 40

# Remaining pool = POOL_TOTAL - sum(balances)
POOL_TOTAL = 500

# --- Display ---
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
