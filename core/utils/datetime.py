"""Datetime utilities for common operations."""

from datetime import datetime, timedelta, timezone
from typing import Optional


def now() -> datetime:
    """Get current datetime in UTC."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Attach UTC to naive datetimes.

    Some database drivers (SQLite) hand back naive values for
    timezone-aware columns; everything stored by this app is UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def add_minutes(dt: datetime, minutes: int) -> datetime:
    """
    Add minutes to datetime.

    Args:
        dt: Base datetime
        minutes: Number of minutes to add (can be negative)

    Returns:
        New datetime
    """
    return dt + timedelta(minutes=minutes)


def is_past(dt: Optional[datetime]) -> bool:
    """Check if datetime is in the past. A missing value counts as past."""
    if dt is None:
        return True
    return ensure_utc(dt) <= now()
