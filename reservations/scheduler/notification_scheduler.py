"""
Reminder Scheduler Module

Runs a recurring scan over today's confirmed reservations and leaves a single
reminder in the owner's inbox once the start time is about
``REMINDER_LEAD_MINUTES`` away.
"""

from __future__ import annotations
from tracking import t

import asyncio
import logging
import threading
import time
import uuid
from datetime import datetime
from typing import Any, List, Optional

from infrastructure.constants import DATE_FORMAT
from infrastructure.settings import AppSettings, get_settings
from reservations.models import Notification, Reservation, RoomRecord, reminder_key
from reservations.models.time_window import minutes_from_hhmm
from reservations.errors import ValidationError
from reservations.scheduler.metrics import SchedulerStats
from reservations.store import ReservationStore


def build_reminder_message(reservation: Reservation, room: Optional[RoomRecord], lead_minutes: int) -> str:
    """Human readable reminder naming the room, its location and the start time."""
    t('reservations.scheduler.notification_scheduler.build_reminder_message')
    room_name = room.name if room else f"Room {reservation.room_id}"
    location = reservation.location or (room.location if room else "")
    where = f"{room_name} ({location})" if location else room_name
    return (
        f"Reminder: your reservation of {where} starts at {reservation.start_time} "
        f"in {lead_minutes} minutes."
    )


class NotificationScheduler:
    """
    Periodic reminder scan with an injectable clock.

    ``run_tick`` is the whole unit of work and can be driven directly in tests;
    ``start``/``stop`` run it every ``NOTIFICATION_TICK_SECONDS`` on a daemon
    thread with its own event loop, and ``run_async`` runs the same loop in the
    caller's event loop.
    """

    def __init__(
        self,
        store: ReservationStore,
        rooms: Any,
        clock: Any,
        settings: AppSettings | None = None,
        stats: SchedulerStats | None = None,
    ) -> None:
        t('reservations.scheduler.notification_scheduler.NotificationScheduler.__init__')
        self.store = store
        self.rooms = rooms
        self.clock = clock
        self.settings = settings or get_settings()
        self.stats = stats or SchedulerStats()
        self.logger = logging.getLogger('NotificationScheduler')
        self.running = False
        self.scheduler_thread: Optional[threading.Thread] = None
        self._tick_lock = threading.Lock()

    def run_tick(self, now: Optional[datetime] = None) -> List[Notification]:
        """Emit reminders due at ``now`` and return the notifications created."""
        t('reservations.scheduler.notification_scheduler.NotificationScheduler.run_tick')
        now = now or self.clock.now()
        today = now.strftime(DATE_FORMAT)
        current_minute = now.hour * 60 + now.minute
        lead = self.settings.reminder_lead_minutes
        tolerance = self.settings.reminder_tolerance_minutes

        created: List[Notification] = []
        with self._tick_lock:
            due = [
                reservation for reservation in self.store.reservations.list_all()
                if reservation.is_confirmed and reservation.date == today
            ]
            if not due:
                return created

            existing_keys = {
                notification.reminder_key
                for notification in self.store.notifications.list_all()
                if notification.reminder_key
            }
            for reservation in due:
                try:
                    start_minute = minutes_from_hhmm(reservation.start_time, field_name='start_time')
                except ValidationError:
                    self.logger.warning(
                        "Skipping reservation %s with malformed start time %r",
                        reservation.id,
                        reservation.start_time,
                    )
                    continue

                delta = start_minute - current_minute
                if not (lead - tolerance <= delta <= lead + tolerance):
                    continue

                key = reminder_key(reservation.user_id, reservation.room_id, reservation.date, reservation.start_time)
                if key in existing_keys:
                    self.logger.debug("Reminder %s already sent", key)
                    continue

                room = self.rooms.get_room(reservation.room_id)
                notification = self.store.notifications.append(Notification(
                    id=uuid.uuid4().hex,
                    user_id=reservation.user_id,
                    room_id=reservation.room_id,
                    message=build_reminder_message(reservation, room, lead),
                    timestamp=now.isoformat(),
                    reservation_id=reservation.id,
                    reminder_key=key,
                ))
                existing_keys.add(key)
                created.append(notification)
                self.logger.info(f"""REMINDER CREATED
        Notification ID: {notification.id}
        User ID: {notification.user_id}
        Room ID: {notification.room_id}
        Starts: {reservation.date} {reservation.start_time} (in {delta} minutes)
        """)
        return created

    async def run_async(self) -> None:
        """Run the scheduler in the current event loop."""
        t('reservations.scheduler.notification_scheduler.NotificationScheduler.run_async')
        self.logger.info("Starting reminder scheduler in main event loop")
        self.running = True
        await self._scheduler_loop()

    def start(self) -> None:
        """Start the scan on a daemon thread with its own event loop."""
        t('reservations.scheduler.notification_scheduler.NotificationScheduler.start')
        if self.running:
            self.logger.debug("Reminder scheduler already running")
            return
        self.logger.info(
            "Starting reminder scheduler (tick every %ss, lead %s±%s minutes)",
            self.settings.notification_tick_seconds,
            self.settings.reminder_lead_minutes,
            self.settings.reminder_tolerance_minutes,
        )
        self.running = True
        self.scheduler_thread = threading.Thread(
            target=lambda: asyncio.run(self._scheduler_loop()),
            daemon=True,
            name="NotificationScheduler",
        )
        self.scheduler_thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        """Stop accepting ticks and wait for an in-flight tick to finish."""
        t('reservations.scheduler.notification_scheduler.NotificationScheduler.stop')
        self.logger.info("Stopping reminder scheduler")
        self.running = False
        if self.scheduler_thread is not None:
            self.scheduler_thread.join(timeout=timeout)
            self.scheduler_thread = None
        self.logger.info("Reminder scheduler stopped\n%s", self.stats.format_report())

    async def _scheduler_loop(self) -> None:
        t('reservations.scheduler.notification_scheduler.NotificationScheduler._scheduler_loop')
        interval = float(self.settings.notification_tick_seconds)
        while self.running:
            started = time.monotonic()
            try:
                now = self.clock.now()
                created = self.run_tick(now)
                self.stats.record_tick(len(created), time.monotonic() - started, now.isoformat())
            except Exception as exc:
                self.stats.record_error()
                self.logger.error("Reminder scan failed: %s", exc, exc_info=True)
            await self._sleep(interval)

    async def _sleep(self, interval: float) -> None:
        # Wakes at least once a second so stop() is honoured promptly.
        deadline = time.monotonic() + interval
        while self.running:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return
            await asyncio.sleep(min(remaining, 1.0))
