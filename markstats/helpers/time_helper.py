"""Time and date utility helpers."""

from __future__ import annotations

from datetime import date, datetime


def parse_calendar_date(value: str) -> date:
    """
    Parse a catalog date string into a calendar date.

    Accepts a plain ISO date ("2020-05-01") first, then a full ISO datetime
    ("2020-05-01T10:00:00Z").

    Args:
        value: Raw date string from the catalog

    Returns:
        Parsed date

    Raises:
        ValueError: If the value matches neither format
    """
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    # fromisoformat only learned the "Z" suffix in 3.11
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text).date()
