"""
Sheet Leaderboard - Core Package

This package contains the core modules for:
- CSV ingestion from a published spreadsheet (leaderboard.ingestion)
- Record building and ranking (leaderboard.ranking)
- Shared configuration, errors and utilities
"""

from leaderboard.config import *
