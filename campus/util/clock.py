"""Time helpers.

All timestamps in the domain are timezone-aware UTC.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
