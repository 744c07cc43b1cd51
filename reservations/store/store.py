"""Shared mutable state for the engine: three collections plus partition locks."""

from __future__ import annotations
from tracking import t

import logging
from typing import Optional

from infrastructure.settings import AppSettings
from reservations.models import Notification, Reservation, WaitlistEntry
from reservations.store.collection import RecordCollection
from reservations.store.locks import PartitionLocks
from reservations.store.repository import InMemoryRepository, RecordRepository


class ReservationStore:
    """Single shared resource holding reservations, waitlist and notifications."""

    def __init__(
        self,
        reservations: RecordCollection[Reservation],
        waitlist: RecordCollection[WaitlistEntry],
        notifications: RecordCollection[Notification],
        locks: Optional[PartitionLocks] = None,
    ) -> None:
        t('reservations.store.store.ReservationStore.__init__')
        self.reservations = reservations
        self.waitlist = waitlist
        self.notifications = notifications
        self.locks = locks or PartitionLocks()

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "ReservationStore":
        """Build a JSON-file backed store at the configured paths."""
        t('reservations.store.store.ReservationStore.from_settings')
        logger = logging.getLogger('RecordRepository')
        return cls(
            reservations=RecordCollection(
                'reservations',
                RecordRepository(settings.reservations_file, logger=logger),
                factory=Reservation.from_dict,
                logger=logger,
            ),
            waitlist=RecordCollection(
                'waitlist',
                RecordRepository(settings.waitlist_file, logger=logger),
                factory=WaitlistEntry.from_dict,
                logger=logger,
            ),
            notifications=RecordCollection(
                'notifications',
                RecordRepository(settings.notifications_file, logger=logger),
                factory=Notification.from_dict,
                logger=logger,
            ),
        )

    @classmethod
    def in_memory(cls) -> "ReservationStore":
        t('reservations.store.store.ReservationStore.in_memory')
        return cls(
            reservations=RecordCollection(
                'reservations', InMemoryRepository(), factory=Reservation.from_dict
            ),
            waitlist=RecordCollection(
                'waitlist', InMemoryRepository(), factory=WaitlistEntry.from_dict
            ),
            notifications=RecordCollection(
                'notifications', InMemoryRepository(), factory=Notification.from_dict
            ),
        )
