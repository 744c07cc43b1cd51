"""Validation helpers for reservation and waitlist requests."""

from __future__ import annotations
from tracking import t

from datetime import datetime, timedelta
from typing import Any, Dict, Iterable

from reservations.engine.participants import member_id
from reservations.errors import ConflictError, ErrorCode, ValidationError
from reservations.models import TimeWindow, WaitlistEntry


def require_fields(fields: Dict[str, Any]) -> None:
    """Raise ``ValidationError`` naming every required field that is empty."""

    t('reservations.engine.validation.require_fields')
    missing = [
        name for name, value in fields.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            code=ErrorCode.MISSING_FIELD,
            details={"fields": missing},
        )


def parse_identifier(value: Any, *, field_name: str) -> int:
    """Coerce a room or user identifier into an int."""

    t('reservations.engine.validation.parse_identifier')
    identifier = member_id(value)
    if identifier is None:
        raise ValidationError(
            f"{field_name} must be a numeric identifier",
            code=ErrorCode.INVALID_FORMAT,
            details={"field": field_name, "value": value},
        )
    return identifier


def ensure_not_past_date(window: TimeWindow, now: datetime) -> None:
    t('reservations.engine.validation.ensure_not_past_date')
    if window.date < now.date():
        raise ValidationError(
            f"{window.date_str} is in the past",
            code=ErrorCode.OUT_OF_WINDOW,
            details={"date": window.date_str},
        )


def ensure_within_horizon(window: TimeWindow, now: datetime, horizon_days: int) -> None:
    """Accept dates from today through ``today + horizon_days - 1`` inclusive."""

    t('reservations.engine.validation.ensure_within_horizon')
    ensure_not_past_date(window, now)
    last_day = now.date() + timedelta(days=horizon_days - 1)
    if window.date > last_day:
        raise ValidationError(
            f"Reservations can be made at most {horizon_days} days ahead (until {last_day.isoformat()})",
            code=ErrorCode.OUT_OF_WINDOW,
            details={"date": window.date_str, "last_bookable_date": last_day.isoformat()},
        )


def ensure_future_start(window: TimeWindow, now: datetime) -> None:
    """Same-day windows must start strictly after the current time of day."""

    t('reservations.engine.validation.ensure_future_start')
    if window.date == now.date() and not window.starts_after(now):
        raise ValidationError(
            f"{window.start_time} has already passed today",
            code=ErrorCode.PAST_TIME,
            details={"start_time": window.start_time},
        )


def ensure_unique_waitlist_entry(
    entries: Iterable[WaitlistEntry],
    *,
    user_id: int,
    room_id: int,
    window: TimeWindow,
    logger: Any,
) -> None:
    """Raise ``ConflictError`` if the user already waits for the exact slot."""

    t('reservations.engine.validation.ensure_unique_waitlist_entry')
    for existing in entries:
        if not existing.is_waiting:
            continue
        if existing.user_id != user_id or existing.room_id != room_id:
            continue
        if (
            existing.date != window.date_str
            or existing.start_time != window.start_time
            or existing.end_time != window.end_time
        ):
            continue

        logger.warning(
            """DUPLICATE WAITLIST ENTRY REJECTED
            User %s already waits for room %s on %s %s-%s
            Existing entry ID: %s
            """,
            user_id,
            room_id,
            window.date_str,
            window.start_time,
            window.end_time,
            existing.id,
        )
        raise ConflictError(
            f"You are already waiting for room {room_id} on {window.date_str} at {window.start_time}",
            code=ErrorCode.DUPLICATE_ENTRY,
            details={"entry_id": existing.id},
        )
