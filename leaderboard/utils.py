"""
Shared utilities for the Sheet Leaderboard.

This module provides common functions used across multiple modules
to avoid code duplication.
"""

import html
import logging
import re
import unicodedata

# --- Shared Regex Patterns for Field Coercion ---
# Leading integer: "12", "-3", " 7 pts", "12.9" (stops at the dot)
INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")

# Leading decimal: "75%", "62.5 %", ".5", "-1.25e2"
FLOAT_PREFIX_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Currency symbols and thousands separators dropped before parsing balances
CURRENCY_NOISE_RE = re.compile(r"[$€£¥,\s]")


def parse_int(value: str | None, default: int = 0) -> int:
    """
    Best-effort integer parse of the leading digits of a string.

    Args:
        value: Raw field text (may be None)
        default: Value returned when no leading integer is found

    Returns:
        Parsed integer or default
    """
    if not value:
        return default
    m = INT_PREFIX_RE.match(value)
    return int(m.group(1)) if m else default


def parse_float(value: str | None, default: float = 0.0) -> float:
    """Best-effort float parse of the leading number of a string ("75%" -> 75.0)."""
    if not value:
        return default
    m = FLOAT_PREFIX_RE.match(value)
    return float(m.group(1)) if m else default


def parse_currency(value: str | None, default: float = 0.0) -> float:
    """Parse a money string such as "$1,250.50" or "-$5" into a float."""
    if not value:
        return default
    return parse_float(CURRENCY_NOISE_RE.sub("", value), default)


def name_sort_key(name: str) -> tuple[str, str]:
    """
    Case- and accent-insensitive sort key for player names.

    Accents only break ties, so "Émile" sorts between "adam" and "Zoe".
    Ordering is still code-point based, not locale collation.
    """
    folded = name.casefold()
    base = "".join(
        c for c in unicodedata.normalize("NFKD", folded)
        if not unicodedata.combining(c)
    )
    return base, folded


def escape_html(text: str) -> str:
    """Escape text for safe inclusion in HTML markup."""
    return html.escape(text, quote=True)


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__ from the calling module)
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


__all__ = [
    # Logging
    'setup_logging',
    # Field coercion
    'parse_int',
    'parse_float',
    'parse_currency',
    'escape_html',
    'name_sort_key',
    'INT_PREFIX_RE',
    'FLOAT_PREFIX_RE',
    'CURRENCY_NOISE_RE',
]
