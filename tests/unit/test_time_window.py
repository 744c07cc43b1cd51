from datetime import date

import pytest

from reservations.errors import ErrorCode, ValidationError
from reservations.models import TimeWindow, format_minutes, minutes_from_hhmm
from tests.helpers import local_time


def test_parse_builds_minutes_of_day():
    window = TimeWindow.parse("2026-03-10", "09:30", "11:00")

    assert window.date == date(2026, 3, 10)
    assert window.start == 570
    assert window.end == 660
    assert window.start_time == "09:30"
    assert window.end_time == "11:00"
    assert window.duration_minutes() == 90
    assert str(window) == "2026-03-10 09:30-11:00"


@pytest.mark.parametrize("value", ["9:30", "24:00", "12:60", "1230", "", None, "ab:cd"])
def test_invalid_time_is_invalid_format(value):
    with pytest.raises(ValidationError) as excinfo:
        minutes_from_hhmm(value, field_name="start_time")
    assert excinfo.value.code is ErrorCode.INVALID_FORMAT


@pytest.mark.parametrize("value", ["2026-02-30", "2026/03/10", "10-03-2026", "2026-3-1"])
def test_invalid_date_is_invalid_format(value):
    with pytest.raises(ValidationError) as excinfo:
        TimeWindow.parse(value, "09:00", "10:00")
    assert excinfo.value.code is ErrorCode.INVALID_FORMAT


@pytest.mark.parametrize("start,end", [("10:00", "10:00"), ("11:00", "10:00")])
def test_end_not_after_start_is_invalid_range(start, end):
    with pytest.raises(ValidationError) as excinfo:
        TimeWindow.parse("2026-03-10", start, end)
    assert excinfo.value.code is ErrorCode.INVALID_RANGE


def test_overlap_is_symmetric_and_half_open():
    a = TimeWindow.parse("2026-03-10", "10:00", "11:00")
    b = TimeWindow.parse("2026-03-10", "10:30", "11:30")
    adjacent = TimeWindow.parse("2026-03-10", "11:00", "12:00")
    inside = TimeWindow.parse("2026-03-10", "10:15", "10:45")

    assert a.overlaps(b) and b.overlaps(a)
    assert a.overlaps(a)
    assert a.overlaps(inside) and inside.overlaps(a)
    assert not a.overlaps(adjacent)
    assert not adjacent.overlaps(a)


def test_windows_on_different_days_never_overlap():
    a = TimeWindow.parse("2026-03-10", "10:00", "11:00")
    b = TimeWindow.parse("2026-03-11", "10:00", "11:00")

    assert not a.overlaps(b)


def test_ordering_by_start_then_end():
    early = TimeWindow.parse("2026-03-10", "09:00", "10:00")
    longer = TimeWindow.parse("2026-03-10", "09:00", "11:00")
    later = TimeWindow.parse("2026-03-10", "09:30", "09:45")

    assert sorted([later, longer, early]) == [early, longer, later]


def test_starts_after_uses_minute_precision():
    window = TimeWindow.parse("2026-03-10", "09:00", "10:00")

    assert window.starts_after(local_time(2026, 3, 10, 8, 59))
    assert not window.starts_after(local_time(2026, 3, 10, 9, 0))
    assert not window.starts_after(local_time(2026, 3, 11, 8, 0))
    assert window.starts_after(local_time(2026, 3, 9, 23, 0))


def test_format_minutes_pads():
    assert format_minutes(65) == "01:05"
