"""Domain dataclasses for reservations, waitlist entries and notifications."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from infrastructure.constants import (
    RESERVATION_CANCELLED,
    RESERVATION_CONFIRMED,
    WAITLIST_WAITING,
)
from reservations.models.time_window import TimeWindow, window_or_none

Participant = Union[int, str]


def _as_int(value: Any) -> Any:
    try:
        return int(value)
    except (TypeError, ValueError):
        return value


@dataclass
class Reservation:
    """A booking of one room for one window; cancellation never deletes it."""

    id: str
    room_id: int
    user_id: int
    date: str
    start_time: str
    end_time: str
    participants: List[Participant] = field(default_factory=list)
    purpose: str = ""
    location: str = ""
    status: str = RESERVATION_CONFIRMED
    created_at: str = ""
    cancelled_at: Optional[str] = None

    @property
    def is_confirmed(self) -> bool:
        return self.status == RESERVATION_CONFIRMED

    @property
    def is_cancelled(self) -> bool:
        return self.status == RESERVATION_CANCELLED

    @property
    def window(self) -> Optional[TimeWindow]:
        return window_or_none(self.date, self.start_time, self.end_time)

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        if payload.get('cancelled_at') is None:
            payload.pop('cancelled_at')
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Reservation":
        return cls(
            id=str(payload['id']),
            room_id=_as_int(payload.get('room_id')),
            user_id=_as_int(payload.get('user_id')),
            date=str(payload.get('date', '')),
            start_time=str(payload.get('start_time', '')),
            end_time=str(payload.get('end_time', '')),
            participants=list(payload.get('participants') or []),
            purpose=payload.get('purpose') or "",
            location=payload.get('location') or "",
            status=payload.get('status', RESERVATION_CONFIRMED),
            created_at=payload.get('created_at') or "",
            cancelled_at=payload.get('cancelled_at'),
        )


@dataclass
class WaitlistEntry:
    """A user queued for a slot that currently has a confirmed booking."""

    id: str
    user_id: int
    room_id: int
    date: str
    start_time: str
    end_time: str
    status: str = WAITLIST_WAITING
    created_at: str = ""

    @property
    def is_waiting(self) -> bool:
        return self.status == WAITLIST_WAITING

    @property
    def window(self) -> Optional[TimeWindow]:
        return window_or_none(self.date, self.start_time, self.end_time)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "WaitlistEntry":
        return cls(
            id=str(payload['id']),
            user_id=_as_int(payload.get('user_id')),
            room_id=_as_int(payload.get('room_id')),
            date=str(payload.get('date', '')),
            start_time=str(payload.get('start_time', '')),
            end_time=str(payload.get('end_time', '')),
            status=payload.get('status', WAITLIST_WAITING),
            created_at=payload.get('created_at') or "",
        )


@dataclass
class Notification:
    """A reminder delivered to a user's inbox."""

    id: str
    user_id: int
    room_id: int
    message: str
    timestamp: str
    read: bool = False
    reservation_id: Optional[str] = None
    reminder_key: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Notification":
        return cls(
            id=str(payload['id']),
            user_id=_as_int(payload.get('user_id')),
            room_id=_as_int(payload.get('room_id')),
            message=payload.get('message') or "",
            timestamp=payload.get('timestamp') or "",
            read=bool(payload.get('read', False)),
            reservation_id=payload.get('reservation_id'),
            reminder_key=payload.get('reminder_key'),
        )


def reminder_key(user_id: Any, room_id: Any, date: str, start_time: str) -> str:
    """Structured idempotency key for a reservation reminder."""
    return f"{user_id}:{room_id}:{date}:{start_time}"


@dataclass(frozen=True)
class RoomRecord:
    """Read-only view of a catalog room."""

    id: int
    name: str
    capacity: int
    location: str = ""
    equipment: tuple = ()
    available: bool = True

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload['equipment'] = list(self.equipment)
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "RoomRecord":
        return cls(
            id=int(payload['id']),
            name=str(payload.get('name') or f"Room {payload['id']}"),
            capacity=int(payload.get('capacity', 0)),
            location=str(payload.get('location') or ""),
            equipment=tuple(payload.get('equipment') or payload.get('equipments') or ()),
            available=bool(payload.get('available', True)),
        )


@dataclass(frozen=True)
class UserRecord:
    """Read-only view of a known user."""

    id: int
    name: str
    email: str = ""
    role: str = "student"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "UserRecord":
        return cls(
            id=int(payload['id']),
            name=str(payload.get('name') or ""),
            email=str(payload.get('email') or ""),
            role=str(payload.get('role') or "student"),
        )


@dataclass(frozen=True)
class RoomTimelineEntry:
    """Confirmed reservation enriched with the owner's display details."""

    reservation: Reservation
    user_name: str
    user_email: str

    def to_dict(self) -> Dict[str, Any]:
        payload = self.reservation.to_dict()
        payload['user_name'] = self.user_name
        payload['user_email'] = self.user_email
        return payload
