import logging

import pytest

from reservations.engine.validation import (
    ensure_future_start,
    ensure_unique_waitlist_entry,
    ensure_within_horizon,
    parse_identifier,
    require_fields,
)
from reservations.errors import ConflictError, ErrorCode, ValidationError
from reservations.models import TimeWindow, WaitlistEntry
from tests.helpers import DummyLogger, local_time

NOW = local_time(2026, 3, 10, 9, 0)


def test_require_fields_lists_every_missing_field():
    with pytest.raises(ValidationError) as excinfo:
        require_fields({'room_id': 1, 'date': '', 'start_time': None, 'end_time': '  '})

    assert excinfo.value.code is ErrorCode.MISSING_FIELD
    assert excinfo.value.details['fields'] == ['date', 'start_time', 'end_time']


def test_parse_identifier_accepts_numeric_strings():
    assert parse_identifier("42", field_name="room_id") == 42
    with pytest.raises(ValidationError) as excinfo:
        parse_identifier("room-1", field_name="room_id")
    assert excinfo.value.code is ErrorCode.INVALID_FORMAT


def test_horizon_accepts_today_through_six_days_ahead():
    ensure_within_horizon(TimeWindow.parse("2026-03-10", "10:00", "11:00"), NOW, 7)
    ensure_within_horizon(TimeWindow.parse("2026-03-16", "10:00", "11:00"), NOW, 7)

    for day in ("2026-03-17", "2026-03-18", "2026-03-09"):
        with pytest.raises(ValidationError) as excinfo:
            ensure_within_horizon(TimeWindow.parse(day, "10:00", "11:00"), NOW, 7)
        assert excinfo.value.code is ErrorCode.OUT_OF_WINDOW


def test_same_day_start_must_be_in_the_future():
    ensure_future_start(TimeWindow.parse("2026-03-10", "09:01", "10:00"), NOW)
    ensure_future_start(TimeWindow.parse("2026-03-11", "08:00", "09:00"), NOW)

    with pytest.raises(ValidationError) as excinfo:
        ensure_future_start(TimeWindow.parse("2026-03-10", "09:00", "10:00"), NOW)
    assert excinfo.value.code is ErrorCode.PAST_TIME


def test_duplicate_waitlist_entry_is_rejected_and_logged():
    logger = DummyLogger()
    entries = [
        WaitlistEntry(id="w1", user_id=1, room_id=1, date="2026-03-10", start_time="10:00", end_time="11:00"),
    ]
    window = TimeWindow.parse("2026-03-10", "10:00", "11:00")

    with pytest.raises(ConflictError) as excinfo:
        ensure_unique_waitlist_entry(entries, user_id=1, room_id=1, window=window, logger=logger)

    assert excinfo.value.code is ErrorCode.DUPLICATE_ENTRY
    assert logger.last("warning") is not None


def test_different_window_is_not_a_duplicate():
    entries = [
        WaitlistEntry(id="w1", user_id=1, room_id=1, date="2026-03-10", start_time="10:00", end_time="11:00"),
    ]

    ensure_unique_waitlist_entry(
        entries,
        user_id=1,
        room_id=1,
        window=TimeWindow.parse("2026-03-10", "10:00", "10:30"),
        logger=logging.getLogger("test"),
    )
