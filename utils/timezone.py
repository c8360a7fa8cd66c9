"""UTC-everywhere time handling. Convert to store-local time only for display."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def now_utc() -> datetime:
    """
    Current time in UTC.

    Use this instead of datetime.now() everywhere.
    """
    return datetime.now(timezone.utc)


def to_local(dt: datetime, tz_name: str) -> datetime:
    """
    Convert UTC datetime to the store's local timezone.

    ONLY use this at display boundaries (greetings, "due by" call-outs).
    Everything stored stays in UTC.

    Args:
        dt: UTC datetime
        tz_name: IANA timezone name (e.g., "America/Los_Angeles")

    Raises:
        ValueError: If datetime is naive or timezone name is invalid
    """
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot convert naive datetime. Datetime must be timezone-aware."
        )

    try:
        local_tz = ZoneInfo(tz_name)
    except (KeyError, ZoneInfoNotFoundError):
        raise ValueError(f"Unknown timezone: {tz_name}")

    return dt.astimezone(local_tz)


def days_ago(days: int, now: datetime | None = None) -> datetime:
    """UTC timestamp `days` days before now. Used for sample records."""
    return (now or now_utc()) - timedelta(days=days)


def today_at(hour: int, minute: int = 0, now: datetime | None = None) -> datetime:
    """Today's date (UTC) at the given wall-clock time."""
    base = now or now_utc()
    return base.replace(hour=hour, minute=minute, second=0, microsecond=0)
