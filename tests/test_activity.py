from datetime import date, datetime, timezone
from types import SimpleNamespace
from zoneinfo import ZoneInfo

from medtrack.scheduling import is_active_on


def _course(start, end):
    return SimpleNamespace(start_date=start, end_date=end)


COURSE = _course(datetime(2024, 1, 1, tzinfo=timezone.utc), datetime(2024, 1, 10, tzinfo=timezone.utc))


def test_active_inside_range_including_ends():
    assert is_active_on(COURSE, date(2024, 1, 1))
    assert is_active_on(COURSE, date(2024, 1, 5))
    assert is_active_on(COURSE, date(2024, 1, 10))


def test_inactive_outside_range():
    assert not is_active_on(COURSE, date(2023, 12, 31))
    assert not is_active_on(COURSE, date(2024, 1, 11))


def test_time_of_day_is_ignored():
    assert is_active_on(COURSE, datetime(2024, 1, 10, 23, 59, tzinfo=timezone.utc))
    assert is_active_on(COURSE, '2024-01-10')


def test_without_dates_always_active():
    assert is_active_on(_course(None, None), date(1999, 1, 1))
    assert is_active_on(SimpleNamespace(), date(2030, 6, 1))


def test_incomplete_range_is_always_active():
    only_start = _course(datetime(2024, 1, 1, tzinfo=timezone.utc), None)
    assert is_active_on(only_start, date(2020, 1, 1))


def test_stored_instants_read_in_local_zone():
    saigon = ZoneInfo('Asia/Ho_Chi_Minh')
    # 23:30 UTC on Jan 1st is already Jan 2nd in Saigon
    course = _course(datetime(2024, 1, 1, 23, 30, tzinfo=timezone.utc),
                     datetime(2024, 1, 3, 23, 30, tzinfo=timezone.utc))

    assert not is_active_on(course, date(2024, 1, 1), tz=saigon)
    assert is_active_on(course, date(2024, 1, 4), tz=saigon)


def test_naive_instants_are_treated_as_utc():
    course = _course(datetime(2024, 1, 1, 23, 30), datetime(2024, 1, 3, 23, 30))
    assert is_active_on(course, date(2024, 1, 4), tz=ZoneInfo('Asia/Ho_Chi_Minh'))
