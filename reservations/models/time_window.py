"""
TimeWindow model for representing a bookable interval on a calendar day
"""

from __future__ import annotations
from tracking import t

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from infrastructure.constants import DATE_FORMAT, MINUTES_PER_DAY
from reservations.errors import ErrorCode, ValidationError

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_PATTERN = re.compile(r"^(\d{2}):(\d{2})$")


def minutes_from_hhmm(value: Any, *, field_name: str = "time") -> int:
    """Convert an ``HH:MM`` string into minutes since midnight."""
    t('reservations.models.time_window.minutes_from_hhmm')

    match = _TIME_PATTERN.match(str(value)) if value is not None else None
    if not match:
        raise ValidationError(
            f"{field_name} must use the HH:MM format",
            code=ErrorCode.INVALID_FORMAT,
            details={"field": field_name, "value": value},
        )
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValidationError(
            f"{field_name} is not a valid time of day",
            code=ErrorCode.INVALID_FORMAT,
            details={"field": field_name, "value": value},
        )
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Render minutes since midnight as ``HH:MM``."""
    t('reservations.models.time_window.format_minutes')
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_date(value: Any, *, field_name: str = "date") -> date:
    """Parse a ``YYYY-MM-DD`` string into a real calendar date."""
    t('reservations.models.time_window.parse_date')

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value) if value is not None else ""
    if not _DATE_PATTERN.match(text):
        raise ValidationError(
            f"{field_name} must use the YYYY-MM-DD format",
            code=ErrorCode.INVALID_FORMAT,
            details={"field": field_name, "value": value},
        )
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(
            f"{field_name} is not a valid calendar date",
            code=ErrorCode.INVALID_FORMAT,
            details={"field": field_name, "value": value},
        ) from None


@dataclass(frozen=True, order=True)
class TimeWindow:
    """
    Half-open ``[start, end)`` interval on a single calendar day.

    Attributes:
        date: Calendar day of the window
        start: Start minute of day (0-1439)
        end: End minute of day, strictly greater than ``start``

    Windows order by date, then start, then end.
    """

    date: date
    start: int
    end: int

    def __post_init__(self) -> None:
        if not (0 <= self.start < MINUTES_PER_DAY) or not (0 < self.end <= MINUTES_PER_DAY):
            raise ValidationError(
                "Window bounds must fall within a single day",
                code=ErrorCode.INVALID_FORMAT,
                details={"start": self.start, "end": self.end},
            )
        if self.end <= self.start:
            raise ValidationError(
                "End time must be later than start time",
                code=ErrorCode.INVALID_RANGE,
                details={"start": format_minutes(self.start), "end": format_minutes(self.end)},
            )

    @classmethod
    def parse(cls, date_value: Any, start_time: Any, end_time: Any) -> "TimeWindow":
        """Build a window from ``YYYY-MM-DD`` and ``HH:MM`` strings."""
        t('reservations.models.time_window.TimeWindow.parse')
        day = parse_date(date_value)
        start = minutes_from_hhmm(start_time, field_name="start_time")
        end = minutes_from_hhmm(end_time, field_name="end_time")
        return cls(date=day, start=start, end=end)

    @property
    def date_str(self) -> str:
        t('reservations.models.time_window.TimeWindow.date_str')
        return self.date.strftime(DATE_FORMAT)

    @property
    def start_time(self) -> str:
        t('reservations.models.time_window.TimeWindow.start_time')
        return format_minutes(self.start)

    @property
    def end_time(self) -> str:
        t('reservations.models.time_window.TimeWindow.end_time')
        return format_minutes(self.end)

    def duration_minutes(self) -> int:
        t('reservations.models.time_window.TimeWindow.duration_minutes')
        return self.end - self.start

    def overlaps(self, other: "TimeWindow") -> bool:
        """Canonical half-open overlap test; windows on different days never overlap."""
        t('reservations.models.time_window.TimeWindow.overlaps')
        if self.date != other.date:
            return False
        return self.start < other.end and other.start < self.end

    def starts_after(self, moment: datetime) -> bool:
        """True when the window begins strictly after ``moment`` (minute precision)."""
        t('reservations.models.time_window.TimeWindow.starts_after')
        today = moment.date()
        if self.date != today:
            return self.date > today
        return self.start > moment.hour * 60 + moment.minute

    def __str__(self) -> str:
        return f"{self.date_str} {self.start_time}-{self.end_time}"


def window_or_none(date_value: Any, start_time: Any, end_time: Any) -> Optional[TimeWindow]:
    """Parse a stored window, returning ``None`` for malformed legacy records."""
    t('reservations.models.time_window.window_or_none')
    try:
        return TimeWindow.parse(date_value, start_time, end_time)
    except ValidationError:
        return None
