"""
Whole-day arithmetic shared by the engines and dashboard metrics.
"""

from datetime import datetime
from typing import Optional

SECONDS_PER_DAY = 24 * 60 * 60


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Return the injected reference time, or the wall clock when omitted."""
    return now if now is not None else datetime.now()


def days_between(start: datetime, end: datetime) -> int:
    """
    Count whole days elapsed from start to end.

    Partial days are truncated toward zero, so 12 hours is 0 days and
    -36 hours is -1 day. Negative when end precedes start.
    """
    seconds = (end - start).total_seconds()
    return int(seconds / SECONDS_PER_DAY)


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 string, treating empty values as absent.

    Values carrying a UTC offset are converted to naive local time so
    they compare with datetime.now().
    """
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
