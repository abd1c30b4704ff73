from datetime import datetime, date, timedelta, timezone

from services.date_utils import as_utc, local_day, month_bounds, resolve_timezone, to_iso_instant

UTC = timezone.utc


def test_resolve_timezone():
    assert resolve_timezone("") is None
    assert resolve_timezone(None) is None
    assert resolve_timezone("utc") is UTC


def test_as_utc_keeps_aware_values():
    aware = datetime(2024, 3, 10, 8, tzinfo=timezone(timedelta(hours=2)))
    assert as_utc(aware) is aware
    assert as_utc(datetime(2024, 3, 10, 8)).tzinfo is UTC


def test_local_day_crosses_midnight():
    instant = datetime(2024, 3, 9, 23, 30, tzinfo=UTC)
    assert local_day(instant, UTC) == date(2024, 3, 9)
    assert local_day(instant, timezone(timedelta(hours=1))) == date(2024, 3, 10)


def test_to_iso_instant():
    assert to_iso_instant(datetime(2024, 3, 10, 8, 5, 1, 123456, tzinfo=UTC)) == "2024-03-10T08:05:01.123Z"
    plus_two = timezone(timedelta(hours=2))
    assert to_iso_instant(datetime(2024, 3, 10, 8, tzinfo=plus_two)) == "2024-03-10T06:00:00.000Z"


def test_month_bounds_utc():
    start, end = month_bounds(2, 2024, UTC)
    assert start == datetime(2024, 2, 1, tzinfo=UTC)
    assert end == datetime(2024, 2, 29, 23, 59, 59, 999999, tzinfo=UTC)


def test_month_bounds_december_and_offset_zone():
    plus_seven = timezone(timedelta(hours=7))
    start, end = month_bounds(12, 2023, plus_seven)
    assert start == datetime(2023, 11, 30, 17, tzinfo=UTC)
    assert end == datetime(2023, 12, 31, 16, 59, 59, 999999, tzinfo=UTC)
