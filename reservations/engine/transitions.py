"""State transition helpers for reservations and waitlist entries."""

from __future__ import annotations
from tracking import t

from datetime import datetime
from typing import Any, Dict

from infrastructure.constants import RESERVATION_CANCELLED, RESERVATION_CONFIRMED
from reservations.models import Reservation, RoomRecord, WaitlistEntry


def cancellation_changes(now: datetime) -> Dict[str, Any]:
    """Field updates that move a confirmed reservation to its terminal state."""

    t('reservations.engine.transitions.cancellation_changes')
    return {
        'status': RESERVATION_CANCELLED,
        'cancelled_at': now.isoformat(),
    }


def reservation_from_waitlist(
    entry: WaitlistEntry,
    room: RoomRecord | None,
    now: datetime,
) -> Reservation:
    """Build the confirmed reservation a promoted waitlist entry turns into.

    The reservation reuses the entry id; purpose and participants start empty.
    """

    t('reservations.engine.transitions.reservation_from_waitlist')
    return Reservation(
        id=entry.id,
        room_id=entry.room_id,
        user_id=entry.user_id,
        date=entry.date,
        start_time=entry.start_time,
        end_time=entry.end_time,
        participants=[],
        purpose="",
        location=(room.location.strip() if room is not None else ""),
        status=RESERVATION_CONFIRMED,
        created_at=now.isoformat(),
    )
