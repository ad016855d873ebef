"""
Published-Sheet CSV Parser

Tokenizes the CSV text served by a published spreadsheet into rows of
field strings. Quoted fields may contain commas; a double quote always
toggles quoted mode, so embedded (doubled) quotes are not supported.

Usage:
    from leaderboard.ingestion.csv_parser import parse_csv_rows
    rows = parse_csv_rows(text)
"""

import re

from leaderboard.errors import EmptyDataError

LINE_BREAK_RE = re.compile(r"\r?\n")


def parse_csv_line(line: str) -> list[str]:
    """
    Split one CSV line into stripped field values.

    Args:
        line: A single line of CSV text (no line break)

    Returns:
        List of field strings, always at least one element
    """
    fields = []
    current = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def parse_csv_rows(text: str) -> list[list[str]]:
    """
    Parse CSV text into data rows, dropping the header line.

    Args:
        text: Raw CSV document

    Returns:
        One list of fields per data line, in source order

    Raises:
        EmptyDataError: If there is no data line after the header
    """
    lines = LINE_BREAK_RE.split(text.strip())

    if len(lines) < 2:
        raise EmptyDataError("No data found in the CSV")

    # Skip header row
    return [parse_csv_line(line) for line in lines[1:]]
