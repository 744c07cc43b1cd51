"""Shared fakes and builders for unit tests."""

from __future__ import annotations
from tracking import t

import threading
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pytz

from infrastructure.settings import load_settings
from reservations.models import RoomRecord, UserRecord
from reservations.services import ReservationService, WaitlistService
from reservations.store import ReservationStore

TZ = pytz.timezone('Asia/Seoul')


def local_time(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    """Timezone-aware wall-clock time in the engine's default timezone."""
    return TZ.localize(datetime(year, month, day, hour, minute))


class DummyLogger:
    """Lightweight stand-in for ``logging.Logger`` that records calls."""

    def __init__(self) -> None:
        t('tests.helpers.DummyLogger.__init__')
        self.records: List[Tuple[str, Tuple[Any, ...], Dict[str, Any]]] = []

    def _record(self, level: str, *args: Any, **kwargs: Any) -> None:
        self.records.append((level, args, kwargs))

    def debug(self, *args: Any, **kwargs: Any) -> None:
        self._record("debug", *args, **kwargs)

    def info(self, *args: Any, **kwargs: Any) -> None:
        self._record("info", *args, **kwargs)

    def warning(self, *args: Any, **kwargs: Any) -> None:
        self._record("warning", *args, **kwargs)

    def error(self, *args: Any, **kwargs: Any) -> None:
        self._record("error", *args, **kwargs)

    def critical(self, *args: Any, **kwargs: Any) -> None:
        self._record("critical", *args, **kwargs)

    def levels(self) -> List[str]:
        return [level for level, _, _ in self.records]

    def last(self, level: str | None = None) -> Tuple[str, Tuple[Any, ...], Dict[str, Any]] | None:
        """Return the most recent record, optionally filtered by level."""
        if not self.records:
            return None
        if level is None:
            return self.records[-1]
        for entry in reversed(self.records):
            if entry[0] == level:
                return entry
        return None


class FixedClock:
    """Clock whose ``now`` only moves when a test says so."""

    def __init__(self, current: datetime) -> None:
        self.current = current

    def now(self) -> datetime:
        return self.current

    def advance(self, **delta: float) -> datetime:
        self.current = self.current + timedelta(**delta)
        return self.current

    def set(self, current: datetime) -> None:
        self.current = current


class RecordingSink:
    """Event sink that keeps published events, optionally failing every call."""

    def __init__(self, fail: bool = False) -> None:
        self.events: List[Any] = []
        self.fail = fail
        self._lock = threading.Lock()

    def publish(self, event: Any) -> None:
        with self._lock:
            self.events.append(event)
        if self.fail:
            raise RuntimeError("sink offline")

    @property
    def statuses(self) -> List[str]:
        return [event.status for event in self.events]


class FakeRooms:
    def __init__(self, rooms: Iterable[RoomRecord] = ()) -> None:
        self.rooms: Dict[int, RoomRecord] = {room.id: room for room in rooms}

    def get_room(self, room_id: Any) -> Optional[RoomRecord]:
        return self.rooms.get(room_id)


class FakeUsers:
    def __init__(self, users: Iterable[UserRecord] = ()) -> None:
        self.users: Dict[int, UserRecord] = {user.id: user for user in users}

    def get_user(self, user_id: Any) -> Optional[UserRecord]:
        return self.users.get(user_id)


def make_room(room_id: int = 1, capacity: int = 4, **overrides: Any) -> RoomRecord:
    values = {
        'id': room_id,
        'name': f"Seminar {room_id}",
        'capacity': capacity,
        'location': "Main Hall",
    }
    values.update(overrides)
    return RoomRecord(**values)


def make_user(user_id: int, name: Optional[str] = None) -> UserRecord:
    return UserRecord(id=user_id, name=name or f"User {user_id}", email=f"user{user_id}@example.com")


def make_settings(**overrides: str):
    env = {'DATA_DIRECTORY': 'unused'}
    env.update(overrides)
    return load_settings(env)


class Engine:
    """Fully wired in-memory engine for service-level tests."""

    def __init__(
        self,
        now: datetime,
        *,
        rooms: Iterable[RoomRecord] = (),
        users: Iterable[UserRecord] = (),
        store: Optional[ReservationStore] = None,
        sink: Optional[RecordingSink] = None,
        **settings_overrides: str,
    ) -> None:
        self.clock = FixedClock(now)
        self.store = store or ReservationStore.in_memory()
        self.rooms = FakeRooms(rooms or [make_room()])
        self.users = FakeUsers(users or [make_user(user_id) for user_id in range(1, 11)])
        self.sink = sink or RecordingSink()
        self.settings = make_settings(**settings_overrides)
        self.waitlist = WaitlistService(self.store, self.rooms, self.clock, settings=self.settings)
        self.reservations = ReservationService(
            self.store,
            self.rooms,
            self.users,
            self.clock,
            waitlist=self.waitlist,
            settings=self.settings,
            events=self.sink,
        )

    def book(self, user_id: int, start: str, end: str, *, room_id: int = 1, date: Optional[str] = None, **kwargs: Any):
        day = date or self.clock.now().strftime('%Y-%m-%d')
        return self.reservations.create_reservation(room_id, user_id, day, start, end, **kwargs)

    def join(self, user_id: int, start: str, end: str, *, room_id: int = 1, date: Optional[str] = None):
        day = date or self.clock.now().strftime('%Y-%m-%d')
        return self.waitlist.join_waitlist(user_id, room_id, day, start, end)
