"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime, time, timedelta


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository/persistence boundaries to normalize datetimes
    (SQLite hands back naive values).
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def start_of_day(dt: datetime) -> datetime:
    """Midnight at the start of dt's day (dt's timezone)."""
    return datetime.combine(dt.date(), time.min, tzinfo=dt.tzinfo)


def end_of_day(dt: datetime) -> datetime:
    """Last representable instant of dt's day (dt's timezone)."""
    return datetime.combine(dt.date(), time.max, tzinfo=dt.tzinfo)


def start_of_week(dt: datetime) -> datetime:
    """Start of the Sunday-based week containing dt."""
    # weekday(): Monday=0 .. Sunday=6
    days_since_sunday = (dt.weekday() + 1) % 7
    return start_of_day(dt - timedelta(days=days_since_sunday))


def end_of_week(dt: datetime) -> datetime:
    """End of the Sunday-based week containing dt (Saturday, end of day)."""
    return end_of_day(start_of_week(dt) + timedelta(days=6))
