"""
Timestamp helpers shared by the analytics and storage layers.

All timestamps are kept timezone-aware. Naive values are read as UTC.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; leave aware ones untouched."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, accepting a trailing 'Z'."""
    return as_utc(datetime.fromisoformat(value.replace('Z', '+00:00')))


def minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60


def to_local(value: datetime, tz=None) -> datetime:
    """Convert to the given zone, or keep the timestamp's own wall clock when tz is None."""
    if tz is None:
        return value
    return as_utc(value).astimezone(tz)


def resolve_timezone(name: Optional[str]):
    """Turn an IANA zone name from config into a tzinfo (None passes through)."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        raise ValueError(f"Invalid timezone '{name}'. Use IANA timezone identifiers.")


def local_day_bounds(now: datetime, tz=None, days_ago: int = 0):
    """Return (start, end) of the local calendar day `days_ago` days before `now`."""
    local_now = to_local(as_utc(now), tz)
    # Wall-clock arithmetic: zoneinfo recomputes the offset, so DST days stay aligned
    day_start = local_now.replace(hour=0, minute=0, second=0, microsecond=0) - timedelta(days=days_ago)
    return day_start, day_start + timedelta(days=1)
