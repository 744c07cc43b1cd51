"""Per-user quota counting for reservations and waitlist entries."""

from __future__ import annotations
from tracking import t

from datetime import datetime
from typing import Any, Iterable

from infrastructure.constants import (
    DATE_FORMAT,
    DEFAULT_MAX_ACTIVE_RESERVATIONS,
    DEFAULT_MAX_WAITING_ENTRIES,
    TIME_FORMAT,
)
from reservations.engine.participants import involves_member
from reservations.models import Reservation, WaitlistEntry


def is_future_start(date_str: str, start_time: str, as_of: datetime) -> bool:
    """True when ``date_str start_time`` lies strictly after ``as_of`` (minute precision)."""

    t('reservations.engine.quota.is_future_start')
    today = as_of.strftime(DATE_FORMAT)
    if date_str > today:
        return True
    return date_str == today and start_time > as_of.strftime(TIME_FORMAT)


def future_active_count(
    user_id: Any,
    as_of: datetime,
    reservations: Iterable[Reservation],
) -> int:
    """
    Count confirmed, not-yet-started reservations that involve ``user_id``.

    A reservation involves a user when they own it or appear among its
    participants as a member id. The creator of a group booking is therefore
    charged once, and every member participant is charged as well.
    """

    t('reservations.engine.quota.future_active_count')
    count = 0
    for reservation in reservations:
        if not reservation.is_confirmed:
            continue
        if reservation.user_id != user_id and not involves_member(reservation.participants, user_id):
            continue
        if is_future_start(reservation.date, reservation.start_time, as_of):
            count += 1
    return count


def waiting_count(user_id: Any, waitlist: Iterable[WaitlistEntry]) -> int:
    """Count the user's entries still waiting."""

    t('reservations.engine.quota.waiting_count')
    return sum(1 for entry in waitlist if entry.user_id == user_id and entry.is_waiting)


class QuotaEnforcer:
    """Applies the configured caps to counts taken from a fresh snapshot."""

    def __init__(
        self,
        max_active_reservations: int = DEFAULT_MAX_ACTIVE_RESERVATIONS,
        max_waiting_entries: int = DEFAULT_MAX_WAITING_ENTRIES,
    ) -> None:
        t('reservations.engine.quota.QuotaEnforcer.__init__')
        self.max_active_reservations = max_active_reservations
        self.max_waiting_entries = max_waiting_entries

    def future_active_count(
        self,
        user_id: Any,
        as_of: datetime,
        reservations: Iterable[Reservation],
    ) -> int:
        t('reservations.engine.quota.QuotaEnforcer.future_active_count')
        return future_active_count(user_id, as_of, reservations)

    def waiting_count(self, user_id: Any, waitlist: Iterable[WaitlistEntry]) -> int:
        t('reservations.engine.quota.QuotaEnforcer.waiting_count')
        return waiting_count(user_id, waitlist)

    def is_over_quota(
        self,
        user_id: Any,
        as_of: datetime,
        reservations: Iterable[Reservation],
    ) -> bool:
        t('reservations.engine.quota.QuotaEnforcer.is_over_quota')
        return self.future_active_count(user_id, as_of, reservations) >= self.max_active_reservations

    def is_waitlist_full(self, user_id: Any, waitlist: Iterable[WaitlistEntry]) -> bool:
        t('reservations.engine.quota.QuotaEnforcer.is_waitlist_full')
        return self.waiting_count(user_id, waitlist) >= self.max_waiting_entries
