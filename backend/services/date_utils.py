"""
date_utils.py — Calendar-day bucketing helpers
Shared by the streak and calendar services. Instants are stored in UTC;
day boundaries are local midnight in the configured zone.
"""

import calendar
from datetime import datetime, date, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo


def resolve_timezone(name: str | None) -> tzinfo | None:
    """IANA zone name to tzinfo. Empty/None means the server's local zone."""
    if not name:
        return None
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def as_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on the way back)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def to_local(dt: datetime, tz: tzinfo | None = None) -> datetime:
    return as_utc(dt).astimezone(tz)


def local_day(dt: datetime, tz: tzinfo | None = None) -> date:
    """Calendar date of an instant, with the day starting at local midnight."""
    return to_local(dt, tz).date()


def to_iso_instant(dt: datetime) -> str:
    """ISO-8601 UTC string with milliseconds, e.g. 2024-03-10T08:00:00.000Z"""
    utc = as_utc(dt).astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _local_midnight(d: date, tz: tzinfo | None) -> datetime:
    naive = datetime.combine(d, time.min)
    if tz is None:
        return naive.astimezone()
    return naive.replace(tzinfo=tz)


def month_bounds(month: int, year: int, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """
    First and last instant of (month, year) in the given zone, as UTC datetimes.
    The last instant is one microsecond before the next month's local midnight.
    """
    last_day = calendar.monthrange(year, month)[1]
    start = _local_midnight(date(year, month, 1), tz)
    end = _local_midnight(date(year, month, last_day) + timedelta(days=1), tz) - timedelta(microseconds=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)
