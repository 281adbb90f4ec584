from datetime import date
from types import SimpleNamespace

import pytest

from medtrack.helpers.enums import SortBy
from medtrack.scheduling import project_schedule

DAY = date(2024, 1, 5)


def _med(name, time, taken=False, start=None, end=None):
    return SimpleNamespace(name=name, time=time, taken=taken, start_date=start, end_date=end)


def test_sorts_by_time_and_keeps_ties_in_input_order():
    a, b, c = _med('A', '09:00'), _med('B', '08:00'), _med('C', '08:00')

    result = project_schedule([a, b, c], DAY, sort_by=SortBy.TIME)

    assert result == [b, c, a]


def test_sorts_by_name():
    meds = [_med('Vitamin D', '07:00'), _med('Aspirin', '20:00'), _med('Metformin', '12:00')]

    result = project_schedule(meds, DAY, sort_by='name')

    assert [med.name for med in result] == ['Aspirin', 'Metformin', 'Vitamin D']


def test_status_sort_puts_not_taken_first():
    first_taken = _med('A', '08:00', taken=True)
    not_taken = _med('B', '09:00')
    second_taken = _med('C', '07:00', taken=True)

    result = project_schedule([first_taken, not_taken, second_taken], DAY, sort_by=SortBy.STATUS)

    assert result == [not_taken, first_taken, second_taken]


def test_hide_completed_drops_taken():
    taken, pending = _med('A', '08:00', taken=True), _med('B', '09:00')

    assert project_schedule([taken, pending], DAY, show_completed=False) == [pending]
    assert project_schedule([taken, pending], DAY, show_completed=True) == [taken, pending]


def test_filters_out_inactive_courses():
    ongoing = _med('Ongoing', '08:00')
    current = _med('Current', '09:00', start=date(2024, 1, 1), end=date(2024, 1, 10))
    finished = _med('Finished', '10:00', start=date(2023, 12, 1), end=date(2023, 12, 10))
    upcoming = _med('Upcoming', '11:00', start=date(2024, 2, 1), end=date(2024, 2, 3))

    result = project_schedule([ongoing, current, finished, upcoming], DAY)

    assert result == [ongoing, current]


def test_input_list_is_left_untouched():
    meds = [_med('A', '09:00'), _med('B', '08:00')]
    snapshot = list(meds)

    result = project_schedule(meds, DAY)

    assert meds == snapshot
    assert result is not meds


def test_empty_input():
    assert project_schedule([], DAY) == []


def test_unknown_sort_key():
    with pytest.raises(ValueError):
        project_schedule([_med('A', '08:00')], DAY, sort_by='dosage')
