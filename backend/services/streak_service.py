"""
streak_service.py — Journaling streaks
Counts consecutive local calendar days with at least one journal entry.
The run is anchored at the most recent entry's day, so a user who last wrote
yesterday keeps full credit until today ends.
"""

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from services.date_utils import as_utc, local_day, to_iso_instant


class StreakResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    streak: int = 0
    last_check_in: Optional[datetime] = Field(default=None, alias="lastCheckIn")
    total_entries: int = Field(default=0, alias="totalEntries")

    @field_serializer("last_check_in", when_used="json")
    def _serialize_last_check_in(self, value: Optional[datetime]):
        return to_iso_instant(value) if value else None


class StreakService:
    @staticmethod
    def calculate_streak(
        timestamps: Iterable[datetime],
        now: datetime | None = None,
        tz: tzinfo | None = None,
    ) -> StreakResult:
        """Streak for one user's entry timestamps, in any order."""
        stamps = [as_utc(ts) for ts in timestamps]
        if not stamps:
            return StreakResult(streak=0, last_check_in=None, total_entries=0)

        latest = max(stamps)
        today = local_day(now or datetime.now(timezone.utc), tz)
        latest_day = local_day(latest, tz)

        # Missed both yesterday and today
        if (today - latest_day).days > 1:
            return StreakResult(streak=0, last_check_in=latest, total_entries=len(stamps))

        days = sorted({local_day(ts, tz) for ts in stamps}, reverse=True)
        streak = 0
        for offset, day in enumerate(days):
            if day != latest_day - timedelta(days=offset):
                break
            streak += 1

        return StreakResult(streak=streak, last_check_in=latest, total_entries=len(stamps))
