"""Domain model definitions for the reservation engine."""

from .time_window import TimeWindow, format_minutes, minutes_from_hhmm, parse_date
from .records import (
    Notification,
    Participant,
    Reservation,
    RoomRecord,
    RoomTimelineEntry,
    UserRecord,
    WaitlistEntry,
    reminder_key,
)

__all__ = [
    "TimeWindow",
    "format_minutes",
    "minutes_from_hhmm",
    "parse_date",
    "Notification",
    "Participant",
    "Reservation",
    "RoomRecord",
    "RoomTimelineEntry",
    "UserRecord",
    "WaitlistEntry",
    "reminder_key",
]
