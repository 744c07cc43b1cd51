"""Per-room and per-user mutual exclusion for read-check-write sections."""

from __future__ import annotations
from tracking import t

import threading
from contextlib import ExitStack, contextmanager
from typing import Any, Dict, Iterable, Iterator


class PartitionLocks:
    """
    Hands out one re-entrant lock per room id and per user id.

    ``hold`` always takes the room lock before any user lock and user locks in
    ascending id order, so concurrent holders cannot deadlock.
    """

    def __init__(self) -> None:
        t('reservations.store.locks.PartitionLocks.__init__')
        self._guard = threading.Lock()
        self._rooms: Dict[Any, threading.RLock] = {}
        self._users: Dict[Any, threading.RLock] = {}

    def room_lock(self, room_id: Any) -> threading.RLock:
        t('reservations.store.locks.PartitionLocks.room_lock')
        with self._guard:
            return self._rooms.setdefault(room_id, threading.RLock())

    def user_lock(self, user_id: Any) -> threading.RLock:
        t('reservations.store.locks.PartitionLocks.user_lock')
        with self._guard:
            return self._users.setdefault(user_id, threading.RLock())

    @contextmanager
    def hold(self, room_id: Any, user_ids: Iterable[Any] = ()) -> Iterator[None]:
        """Acquire the room partition plus the quota partitions of ``user_ids``."""
        t('reservations.store.locks.PartitionLocks.hold')
        ordered_users = sorted(set(user_ids), key=lambda value: (str(type(value)), value))
        with ExitStack() as stack:
            stack.enter_context(self.room_lock(room_id))
            for user_id in ordered_users:
                stack.enter_context(self.user_lock(user_id))
            yield

    @contextmanager
    def hold_user(self, user_id: Any) -> Iterator[None]:
        t('reservations.store.locks.PartitionLocks.hold_user')
        with self.user_lock(user_id):
            yield
