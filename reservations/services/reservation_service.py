"""Domain service for creating, cancelling and listing room reservations."""

from __future__ import annotations
from tracking import t

import logging
import uuid
from typing import Any, Iterable, List, Optional

from infrastructure.constants import UNKNOWN_USER_NAME
from infrastructure.settings import AppSettings, get_settings
from reservations.engine.conflicts import find_conflict
from reservations.engine.participants import split_participants
from reservations.engine.quota import QuotaEnforcer
from reservations.engine.transitions import cancellation_changes
from reservations.engine.validation import (
    ensure_future_start,
    ensure_within_horizon,
    parse_identifier,
    require_fields,
)
from reservations.errors import ConflictError, ErrorCode, NotFoundError, StorageError
from reservations.models import Reservation, RoomTimelineEntry, TimeWindow
from reservations.models.time_window import parse_date
from reservations.services.events import EventSink, SlotEvent, publish_safely
from reservations.services.guard import internal_errors
from reservations.services.waitlist_service import PromotionOutcome, WaitlistService
from reservations.store import ReservationStore


class ReservationService:
    """High-level API for reservation admission and cancellation."""

    def __init__(
        self,
        store: ReservationStore,
        rooms: Any,
        users: Any,
        clock: Any,
        waitlist: WaitlistService | None = None,
        settings: AppSettings | None = None,
        quota: QuotaEnforcer | None = None,
        events: EventSink | None = None,
    ) -> None:
        t('reservations.services.reservation_service.ReservationService.__init__')
        self.logger = logging.getLogger(self.__class__.__name__)
        self.store = store
        self.rooms = rooms
        self.users = users
        self.clock = clock
        self.settings = settings or get_settings()
        self.quota = quota or QuotaEnforcer(
            max_active_reservations=self.settings.max_active_reservations,
            max_waiting_entries=self.settings.max_waiting_entries,
        )
        self.waitlist = waitlist or WaitlistService(
            store, rooms, clock, settings=self.settings, quota=self.quota
        )
        self.events = events

    def create_reservation(
        self,
        room_id: Any,
        user_id: Any,
        date: Any,
        start_time: Any,
        end_time: Any,
        purpose: Optional[str] = "",
        participants: Optional[Iterable[Any]] = None,
    ) -> Reservation:
        """
        Book ``room_id`` for ``user_id`` over ``[start_time, end_time)`` on ``date``.

        Checks run in a fixed order and the first failure wins: fields and
        formats, booking horizon, same-day start, room existence and
        availability, capacity, slot conflict, owner quota, then member
        participant quota. The last four and the write happen while holding
        the room partition and the quota partitions of every member involved.

        Returns:
            Reservation: the confirmed reservation as stored
        """
        t('reservations.services.reservation_service.ReservationService.create_reservation')
        with internal_errors(self.logger, 'create_reservation', room_id=room_id, user_id=user_id):
            require_fields({
                'room_id': room_id,
                'user_id': user_id,
                'date': date,
                'start_time': start_time,
                'end_time': end_time,
            })
            room_id = parse_identifier(room_id, field_name='room_id')
            user_id = parse_identifier(user_id, field_name='user_id')
            window = TimeWindow.parse(date, start_time, end_time)
            split = split_participants(participants)

            self.logger.info(f"""NEW RESERVATION REQUEST
        User ID: {user_id}
        Room ID: {room_id}
        Slot: {window}
        Participants: {split.normalized}
        """)

            now = self.clock.now()
            ensure_within_horizon(window, now, self.settings.booking_horizon_days)
            ensure_future_start(window, now)

            room = self.rooms.get_room(room_id)
            if room is None:
                raise NotFoundError('room', room_id)
            if not room.available:
                raise ConflictError(
                    f"Room {room_id} is not available for booking",
                    code=ErrorCode.ROOM_UNAVAILABLE,
                    details={'room_id': room_id},
                )
            headcount = 1 + split.headcount
            if headcount > room.capacity:
                raise ConflictError(
                    f"{headcount} people exceed the capacity of room {room_id} ({room.capacity})",
                    code=ErrorCode.CAPACITY_EXCEEDED,
                    details={'room_id': room_id, 'capacity': room.capacity, 'headcount': headcount},
                )

            members = [member for member in split.members if member != user_id]
            with self.store.locks.hold(room_id, [user_id, *members]):
                reservations = self.store.reservations.list_all()
                blocking = find_conflict(room_id, window, reservations)
                if blocking is not None:
                    self.logger.warning(
                        "Slot %s in room %s already taken by reservation %s",
                        window,
                        room_id,
                        blocking.id,
                    )
                    raise ConflictError(
                        f"Room {room_id} is already reserved during {window}",
                        code=ErrorCode.SLOT_TAKEN,
                        details={'room_id': room_id, 'conflicting_id': blocking.id},
                    )
                if self.quota.is_over_quota(user_id, now, reservations):
                    raise ConflictError(
                        f"User {user_id} already holds {self.quota.max_active_reservations} upcoming reservations",
                        code=ErrorCode.QUOTA_EXCEEDED,
                        details={'user_id': user_id},
                    )
                for member in members:
                    if self.users.get_user(member) is None:
                        raise NotFoundError('user', member)
                    if self.quota.is_over_quota(member, now, reservations):
                        raise ConflictError(
                            f"Participant {member} already holds {self.quota.max_active_reservations} upcoming reservations",
                            code=ErrorCode.QUOTA_EXCEEDED,
                            details={'user_id': member},
                        )

                reservation = self.store.reservations.append(Reservation(
                    id=uuid.uuid4().hex,
                    room_id=room_id,
                    user_id=user_id,
                    date=window.date_str,
                    start_time=window.start_time,
                    end_time=window.end_time,
                    participants=split.normalized,
                    purpose=(purpose or "").strip(),
                    location=room.location.strip(),
                    created_at=now.isoformat(),
                ))

        self.logger.info(f"""RESERVATION CONFIRMED
        Reservation ID: {reservation.id}
        User ID: {reservation.user_id}
        Room ID: {reservation.room_id}
        Slot: {reservation.date} {reservation.start_time}-{reservation.end_time}
        Participants: {reservation.participants}
        """)
        publish_safely(self.events, SlotEvent.reserved(reservation), self.logger)
        return reservation

    def cancel_reservation(self, reservation_id: str) -> PromotionOutcome:
        """
        Cancel a confirmed reservation and promote the next eligible waiter.

        A reservation that is unknown or already cancelled raises
        ``NotFoundError``, so repeated cancellation never promotes twice.
        """
        t('reservations.services.reservation_service.ReservationService.cancel_reservation')
        with internal_errors(self.logger, 'cancel_reservation', reservation_id=reservation_id):
            existing = self.store.reservations.get(reservation_id)
            if existing is None:
                raise NotFoundError('reservation', reservation_id)

            with self.store.locks.hold(existing.room_id):
                current = self.store.reservations.get(reservation_id)
                if current is None or not current.is_confirmed:
                    raise NotFoundError(
                        'reservation',
                        reservation_id,
                        f"Reservation {reservation_id} not found or already cancelled",
                    )
                now = self.clock.now()
                cancelled = self.store.reservations.update(reservation_id, **cancellation_changes(now))
                if cancelled is None:
                    raise NotFoundError('reservation', reservation_id)

                self.logger.info(f"""RESERVATION CANCELLED
        Reservation ID: {cancelled.id}
        User ID: {cancelled.user_id}
        Room ID: {cancelled.room_id}
        Slot: {cancelled.date} {cancelled.start_time}-{cancelled.end_time}
        """)

                try:
                    outcome = self.waitlist.promote_for(cancelled, now)
                except StorageError as exc:
                    self.logger.critical(
                        "Promotion sweep for cancelled reservation %s aborted by a storage failure: %s",
                        reservation_id,
                        exc,
                        exc_info=True,
                    )
                    outcome = PromotionOutcome()

        publish_safely(self.events, SlotEvent.available(cancelled), self.logger)
        if outcome.promoted is not None:
            publish_safely(self.events, SlotEvent.reserved(outcome.promoted), self.logger)
        return outcome

    def get_reservation(self, reservation_id: str) -> Reservation:
        t('reservations.services.reservation_service.ReservationService.get_reservation')
        reservation = self.store.reservations.get(reservation_id)
        if reservation is None:
            raise NotFoundError('reservation', reservation_id)
        return reservation

    def list_reservations_for_user(self, user_id: Any) -> List[Reservation]:
        """Owned and joined reservations, cancelled included, latest first."""
        t('reservations.services.reservation_service.ReservationService.list_reservations_for_user')
        user_id = parse_identifier(user_id, field_name='user_id')
        matches = [
            reservation for reservation in self.store.reservations.list_all()
            if reservation.user_id == user_id
            or user_id in split_participants(reservation.participants).members
        ]
        return sorted(matches, key=lambda item: (item.date, item.start_time), reverse=True)

    def list_reservations_for_room(self, room_id: Any, date: Any = None) -> List[RoomTimelineEntry]:
        """Confirmed reservations of a room in chronological order, with owner details."""
        t('reservations.services.reservation_service.ReservationService.list_reservations_for_room')
        room_id = parse_identifier(room_id, field_name='room_id')
        date_filter = parse_date(date).isoformat() if date else None

        matches = [
            reservation for reservation in self.store.reservations.list_all()
            if reservation.room_id == room_id
            and reservation.is_confirmed
            and (date_filter is None or reservation.date == date_filter)
        ]
        matches.sort(key=lambda item: (item.date, item.start_time))

        timeline: List[RoomTimelineEntry] = []
        for reservation in matches:
            owner = self.users.get_user(reservation.user_id)
            timeline.append(RoomTimelineEntry(
                reservation=reservation,
                user_name=owner.name if owner else UNKNOWN_USER_NAME,
                user_email=owner.email if owner else "",
            ))
        return timeline
