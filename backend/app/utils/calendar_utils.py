"""
Calendar day helpers.

All days are plain ``date`` values (local-midnight anchored, no time of day).
"""

from datetime import date, datetime, timedelta
from typing import Iterable

DATE_KEY_FORMAT = "%Y-%m-%d"


def enumerate_days(start: date, end: date) -> list[date]:
    """
    List every calendar day in [start, end].

    Returns an empty list when end is before start.
    """
    if end < start:
        return []
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def date_key(day: date) -> str:
    """Canonical YYYY-MM-DD key for a day."""
    if isinstance(day, datetime):
        day = day.date()
    return day.strftime(DATE_KEY_FORMAT)


def parse_date_key(value: str) -> date:
    """
    Parse a YYYY-MM-DD key (a trailing time part is ignored).

    Raises:
        ValueError: If the string is not a calendar date
    """
    return datetime.strptime(value[:10], DATE_KEY_FORMAT).date()


def is_weekend_day(day: date) -> bool:
    """Saturday or Sunday."""
    return day.weekday() >= 5


def unique_days(days: Iterable[date]) -> list[date]:
    """Deduplicate days keeping first-seen order."""
    seen: set[date] = set()
    result = []
    for day in days:
        if day in seen:
            continue
        seen.add(day)
        result.append(day)
    return result
