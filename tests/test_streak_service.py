import random
from datetime import datetime, timedelta, timezone

from services.streak_service import StreakService, StreakResult

UTC = timezone.utc


def at(day: str, hour: int = 9) -> datetime:
    return datetime.fromisoformat(day).replace(hour=hour, tzinfo=UTC)


def streak(stamps, now):
    return StreakService.calculate_streak(stamps, now=now, tz=UTC)


def test_empty_entries():
    result = streak([], at("2024-03-10"))
    assert result == StreakResult(streak=0, last_check_in=None, total_entries=0)
    assert result.model_dump(by_alias=True, mode="json") == {
        "streak": 0, "lastCheckIn": None, "totalEntries": 0,
    }


def test_gap_breaks_continuation():
    stamps = [at("2024-03-10"), at("2024-03-09", 8), at("2024-03-09", 20), at("2024-03-07")]
    result = streak(stamps, at("2024-03-10", 22))
    assert result.streak == 2
    assert result.total_entries == 4
    assert result.last_check_in == at("2024-03-10")


def test_stale_latest_entry_resets_streak():
    result = streak([at("2024-03-05", 14)], at("2024-03-10"))
    assert result.streak == 0
    assert result.last_check_in == at("2024-03-05", 14)
    assert result.total_entries == 1


def test_long_history_still_broken_when_two_days_missed():
    stamps = [at("2024-03-08") - timedelta(days=i) for i in range(30)]
    assert streak(stamps, at("2024-03-10")).streak == 0


def test_anchor_is_latest_entry_not_today():
    stamps = [at("2024-03-10"), at("2024-03-09"), at("2024-03-08"), at("2024-03-06")]
    assert streak(stamps, at("2024-03-10", 23)).streak == 3
    assert streak(stamps, at("2024-03-11", 7)).streak == 3


def test_same_day_entries_count_once():
    base = [at("2024-03-10"), at("2024-03-09")]
    dup = base + [at("2024-03-10", 12), at("2024-03-10", 18)]
    assert streak(base, at("2024-03-10")).streak == streak(dup, at("2024-03-10")).streak == 2
    assert streak(dup, at("2024-03-10")).total_entries == 4


def test_input_order_does_not_matter():
    stamps = [at("2024-03-10"), at("2024-03-09"), at("2024-03-08", 23), at("2024-03-01")]
    shuffled = stamps[:]
    random.Random(7).shuffle(shuffled)
    assert streak(shuffled, at("2024-03-10")) == streak(stamps, at("2024-03-10"))


def test_naive_timestamps_are_read_as_utc():
    result = streak([datetime(2024, 3, 10, 9), datetime(2024, 3, 9, 9)], at("2024-03-10"))
    assert result.streak == 2
    assert result.last_check_in == at("2024-03-10")


def test_day_boundaries_follow_the_given_zone():
    jakarta = timezone(timedelta(hours=7))
    # 20:00 UTC on the 9th is already the 10th in UTC+7
    stamps = [datetime(2024, 3, 9, 20, tzinfo=UTC), datetime(2024, 3, 9, 1, tzinfo=UTC)]
    now = datetime(2024, 3, 10, 2, tzinfo=UTC)
    assert StreakService.calculate_streak(stamps, now=now, tz=UTC).streak == 1
    assert StreakService.calculate_streak(stamps, now=now, tz=jakarta).streak == 2


def test_last_check_in_serializes_as_iso_instant():
    result = streak([at("2024-03-10", 8)], at("2024-03-10"))
    assert result.model_dump(by_alias=True, mode="json")["lastCheckIn"] == "2024-03-10T08:00:00.000Z"
