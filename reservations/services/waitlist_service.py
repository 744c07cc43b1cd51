"""
Waitlist Service Module

Admits users to the waitlist of an occupied slot and runs the promotion sweep
that turns the earliest eligible entry into a confirmed reservation when the
blocking reservation is cancelled.
"""

from __future__ import annotations
from tracking import t

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from infrastructure.settings import AppSettings, get_settings
from reservations.engine.conflicts import find_conflict, has_conflict
from reservations.engine.quota import QuotaEnforcer
from reservations.engine.transitions import reservation_from_waitlist
from reservations.engine.validation import (
    ensure_not_past_date,
    ensure_unique_waitlist_entry,
    ensure_within_horizon,
    parse_identifier,
    require_fields,
)
from reservations.errors import ConflictError, ErrorCode, NotFoundError, StorageError
from reservations.models import Reservation, TimeWindow, WaitlistEntry
from reservations.services.guard import internal_errors
from reservations.store import ReservationStore


@dataclass
class PromotionOutcome:
    """Result of one promotion sweep."""

    promoted: Optional[Reservation] = None
    discarded: List[WaitlistEntry] = field(default_factory=list)
    skipped: List[WaitlistEntry] = field(default_factory=list)


class WaitlistService:
    """Waitlist admission, cancellation and the promotion sweep."""

    def __init__(
        self,
        store: ReservationStore,
        rooms: Any,
        clock: Any,
        settings: AppSettings | None = None,
        quota: QuotaEnforcer | None = None,
    ) -> None:
        t('reservations.services.waitlist_service.WaitlistService.__init__')
        self.store = store
        self.rooms = rooms
        self.clock = clock
        self.settings = settings or get_settings()
        self.quota = quota or QuotaEnforcer(
            max_active_reservations=self.settings.max_active_reservations,
            max_waiting_entries=self.settings.max_waiting_entries,
        )
        self.logger = logging.getLogger('WaitlistService')

    def join_waitlist(
        self,
        user_id: Any,
        room_id: Any,
        date: Any,
        start_time: Any,
        end_time: Any,
    ) -> WaitlistEntry:
        """
        Queue ``user_id`` for an occupied slot.

        Raises:
            ValidationError: missing or malformed fields, or a past date
            NotFoundError: the room does not exist
            ConflictError: quota exceeded, slot open, waitlist full or duplicate entry
        """
        t('reservations.services.waitlist_service.WaitlistService.join_waitlist')
        with internal_errors(self.logger, 'join_waitlist', user_id=user_id, room_id=room_id):
            require_fields({
                'user_id': user_id,
                'room_id': room_id,
                'date': date,
                'start_time': start_time,
                'end_time': end_time,
            })
            user_id = parse_identifier(user_id, field_name='user_id')
            room_id = parse_identifier(room_id, field_name='room_id')
            window = TimeWindow.parse(date, start_time, end_time)

            now = self.clock.now()
            if self.settings.waitlist_enforce_horizon:
                ensure_within_horizon(window, now, self.settings.booking_horizon_days)
            else:
                ensure_not_past_date(window, now)

            if self.rooms.get_room(room_id) is None:
                raise NotFoundError('room', room_id)

            with self.store.locks.hold(room_id, [user_id]):
                reservations = self.store.reservations.list_all()
                if self.quota.is_over_quota(user_id, now, reservations):
                    raise ConflictError(
                        f"User {user_id} already holds {self.quota.max_active_reservations} upcoming reservations",
                        code=ErrorCode.QUOTA_EXCEEDED,
                        details={'user_id': user_id},
                    )
                if not has_conflict(room_id, window, reservations):
                    raise ConflictError(
                        "This slot is open; reserve it directly instead of joining the waitlist",
                        code=ErrorCode.SLOT_OPEN,
                        details={'room_id': room_id, 'date': window.date_str},
                    )

                waitlist = self.store.waitlist.list_all()
                if self.quota.is_waitlist_full(user_id, waitlist):
                    raise ConflictError(
                        f"User {user_id} already has {self.quota.max_waiting_entries} waitlist entries",
                        code=ErrorCode.WAITLIST_FULL,
                        details={'user_id': user_id},
                    )
                ensure_unique_waitlist_entry(
                    waitlist,
                    user_id=user_id,
                    room_id=room_id,
                    window=window,
                    logger=self.logger,
                )

                entry = self.store.waitlist.append(WaitlistEntry(
                    id=uuid.uuid4().hex,
                    user_id=user_id,
                    room_id=room_id,
                    date=window.date_str,
                    start_time=window.start_time,
                    end_time=window.end_time,
                    created_at=now.isoformat(),
                ))

        self.logger.info(f"""WAITLIST ENTRY ADDED
        Entry ID: {entry.id}
        User ID: {entry.user_id}
        Room ID: {entry.room_id}
        Slot: {entry.date} {entry.start_time}-{entry.end_time}
        """)
        return entry

    def cancel_waitlist(self, entry_id: str) -> None:
        t('reservations.services.waitlist_service.WaitlistService.cancel_waitlist')
        with internal_errors(self.logger, 'cancel_waitlist', entry_id=entry_id):
            entry = self.store.waitlist.get(entry_id)
            if entry is None:
                raise NotFoundError('waitlist entry', entry_id)
            with self.store.locks.hold(entry.room_id, [entry.user_id]):
                if self.store.waitlist.remove(entry_id) is None:
                    raise NotFoundError('waitlist entry', entry_id)
        self.logger.info(
            "Waitlist entry %s removed by user %s (room %s %s %s)",
            entry_id,
            entry.user_id,
            entry.room_id,
            entry.date,
            entry.start_time,
        )

    def list_waitlist_for_user(self, user_id: Any) -> List[WaitlistEntry]:
        """Waiting entries of ``user_id``, latest slot first."""
        t('reservations.services.waitlist_service.WaitlistService.list_waitlist_for_user')
        user_id = parse_identifier(user_id, field_name='user_id')
        entries = [
            entry for entry in self.store.waitlist.list_all()
            if entry.user_id == user_id and entry.is_waiting
        ]
        return sorted(entries, key=lambda entry: (entry.date, entry.start_time), reverse=True)

    def promote_for(self, cancelled: Reservation, now: Optional[datetime] = None) -> PromotionOutcome:
        """
        Promote the earliest eligible waiter for the slot ``cancelled`` freed.

        The caller must hold the room partition lock of ``cancelled.room_id``.
        Candidates match room, date and exact start time, in ``(created_at, id)``
        order. Over-quota candidates are removed from the waitlist and the walk
        continues. A candidate within quota whose window still overlaps another
        confirmed reservation stays queued. At most one reservation is created.
        """
        t('reservations.services.waitlist_service.WaitlistService.promote_for')
        now = now or self.clock.now()
        outcome = PromotionOutcome()

        candidates = sorted(
            (
                entry for entry in self.store.waitlist.list_all()
                if entry.is_waiting
                and entry.room_id == cancelled.room_id
                and entry.date == cancelled.date
                and entry.start_time == cancelled.start_time
            ),
            key=lambda entry: (entry.created_at, entry.id),
        )
        if not candidates:
            self.logger.debug(
                "No waiters for room %s %s %s", cancelled.room_id, cancelled.date, cancelled.start_time
            )
            return outcome

        room = self.rooms.get_room(cancelled.room_id)
        for entry in candidates:
            with self.store.locks.hold_user(entry.user_id):
                reservations = self.store.reservations.list_all()
                if self.quota.is_over_quota(entry.user_id, now, reservations):
                    self.store.waitlist.remove(entry.id)
                    outcome.discarded.append(entry)
                    self.logger.info(f"""WAITLIST ENTRY DISCARDED
        Entry ID: {entry.id}
        User ID: {entry.user_id}
        Reason: user at reservation quota
        Slot: {entry.date} {entry.start_time}-{entry.end_time}
        """)
                    continue

                window = entry.window
                if window is not None:
                    blocking = find_conflict(entry.room_id, window, reservations)
                    if blocking is not None:
                        self.logger.warning(
                            "Waitlist entry %s still blocked by reservation %s; leaving it queued",
                            entry.id,
                            blocking.id,
                        )
                        outcome.skipped.append(entry)
                        continue

                self.store.waitlist.remove(entry.id)
                promoted = reservation_from_waitlist(entry, room, now)
                try:
                    outcome.promoted = self.store.reservations.append(promoted)
                except StorageError as exc:
                    self.logger.critical(
                        "Promotion of waitlist entry %s for user %s failed after the entry was removed; "
                        "no reservation was created for room %s %s %s-%s: %s",
                        entry.id,
                        entry.user_id,
                        entry.room_id,
                        entry.date,
                        entry.start_time,
                        entry.end_time,
                        exc,
                        exc_info=True,
                    )
                    return outcome

            self.logger.info(f"""WAITLIST PROMOTION
        Reservation ID: {promoted.id}
        User ID: {promoted.user_id}
        Room ID: {promoted.room_id}
        Slot: {promoted.date} {promoted.start_time}-{promoted.end_time}
        Discarded before promotion: {len(outcome.discarded)}
        """)
            break

        return outcome
