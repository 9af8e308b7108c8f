"""
Datetime utilities.

Calendar days are naive local dates; timestamps are timezone-aware UTC.
"Today" is read through a Clock so callers (and tests) can pin it.
"""

from datetime import date, datetime, timezone

# UTC timezone constant
UTC = timezone.utc


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Replaces datetime.utcnow() which is deprecated in Python 3.12+.

    Returns:
        datetime: Current UTC time with tzinfo set to UTC
    """
    return datetime.now(UTC)


class Clock:
    """Wall-clock time provider."""

    def today(self) -> date:
        """Local calendar day."""
        return date.today()

    def now(self) -> datetime:
        return now_utc()


class FixedClock(Clock):
    """Clock pinned to a given day."""

    def __init__(self, today: date, now: datetime | None = None):
        self._today = today
        self._now = now or datetime(today.year, today.month, today.day, 12, 0, tzinfo=UTC)

    def today(self) -> date:
        return self._today

    def now(self) -> datetime:
        return self._now
