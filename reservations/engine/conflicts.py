"""Slot conflict detection over a reservation snapshot."""

from __future__ import annotations
from tracking import t

from typing import Any, Iterable, Optional

from reservations.models import Reservation, TimeWindow


def find_conflict(
    room_id: Any,
    window: TimeWindow,
    reservations: Iterable[Reservation],
) -> Optional[Reservation]:
    """Return the first confirmed reservation in ``room_id`` overlapping ``window``."""

    t('reservations.engine.conflicts.find_conflict')
    for existing in reservations:
        if existing.room_id != room_id or not existing.is_confirmed:
            continue
        if existing.date != window.date_str:
            continue
        existing_window = existing.window
        if existing_window is not None and existing_window.overlaps(window):
            return existing
    return None


def has_conflict(
    room_id: Any,
    window: TimeWindow,
    reservations: Iterable[Reservation],
) -> bool:
    """True iff a confirmed reservation for the room and date overlaps ``window``."""

    t('reservations.engine.conflicts.has_conflict')
    return find_conflict(room_id, window, reservations) is not None
