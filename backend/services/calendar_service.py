"""
calendar_service.py — Monthly calendar view of journal entries
Buckets one user's entries by local day-of-month for the calendar UI.
Days without entries are absent from the mapping; `CalendarMonth.get_day`
returns None for them.
"""

from datetime import datetime, tzinfo
from typing import Iterable, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

from services.date_utils import as_utc, to_local, to_iso_instant

MIN_YEAR = 1900
MAX_YEAR = 2100
PREVIEW_LENGTH = 100


class InvalidRangeError(ValueError):
    """Month or year outside the accepted bounds."""


class EntryRecord(NamedTuple):
    """Plain stand-in for a JournalEntry row (same attribute names)."""
    id: int
    created_at: datetime
    mood: Optional[str] = None
    anxiety_level: Optional[int] = None
    content: Optional[str] = None


class EntrySummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    time: str
    mood: str = "Unknown"
    anxiety_level: int = Field(default=0, alias="anxietyLevel")
    preview: str = ""


class DayBucket(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: int
    has_entry: bool = Field(default=True, alias="hasEntry")
    entries: list[EntrySummary] = []


class CalendarMonth(BaseModel):
    month: int
    year: int
    data: dict[int, DayBucket] = {}

    def get_day(self, day: int) -> Optional[DayBucket]:
        return self.data.get(day)


def validate_month(month: int, year: int):
    if not 1 <= month <= 12 or not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidRangeError("Invalid month or year")


def summarize_entry(entry) -> EntrySummary:
    content = entry.content or ""
    return EntrySummary(
        id=entry.id,
        time=to_iso_instant(entry.created_at),
        mood=entry.mood or "Unknown",
        anxiety_level=entry.anxiety_level or 0,
        preview=content[:PREVIEW_LENGTH],
    )


class CalendarService:
    @staticmethod
    def aggregate_month(entries: Iterable, month: int, year: int, tz: tzinfo | None = None) -> CalendarMonth:
        """
        Group entries falling in (month, year) by local day-of-month.

        `entries` are JournalEntry rows or EntryRecord tuples. Entries outside
        the month are dropped, so the caller may pass a wider range.
        Raises InvalidRangeError for month outside 1-12 or year outside 1900-2100.
        """
        validate_month(month, year)

        in_month = []
        for entry in entries:
            local = to_local(entry.created_at, tz)
            if local.year == year and local.month == month:
                in_month.append((local.day, entry))

        in_month.sort(key=lambda pair: as_utc(pair[1].created_at))

        buckets: dict[int, DayBucket] = {}
        for day, entry in in_month:
            if day not in buckets:
                buckets[day] = DayBucket(date=day, has_entry=True, entries=[])
            buckets[day].entries.append(summarize_entry(entry))

        return CalendarMonth(month=month, year=year, data=buckets)
