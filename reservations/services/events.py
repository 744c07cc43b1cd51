"""
Slot Event Publishing

Reservation and cancellation announce slot state changes to an ``EventSink``.
Publication is fire-and-forget: a failing sink is logged and never undoes or
fails the booking that triggered it.
"""

from __future__ import annotations
from tracking import t

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol

from infrastructure.constants import SLOT_AVAILABLE, SLOT_RESERVED


@dataclass(frozen=True)
class SlotEvent:
    room_id: int
    date: str
    start_time: str
    end_time: str
    status: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'room_id': self.room_id,
            'date': self.date,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'status': self.status,
        }

    @classmethod
    def reserved(cls, reservation: Any) -> "SlotEvent":
        return cls._for(reservation, SLOT_RESERVED)

    @classmethod
    def available(cls, reservation: Any) -> "SlotEvent":
        return cls._for(reservation, SLOT_AVAILABLE)

    @classmethod
    def _for(cls, reservation: Any, status: str) -> "SlotEvent":
        return cls(
            room_id=reservation.room_id,
            date=reservation.date,
            start_time=reservation.start_time,
            end_time=reservation.end_time,
            status=status,
        )


class EventSink(Protocol):
    def publish(self, event: SlotEvent) -> None:
        ...


class LoggingEventSink:
    """Default sink that records slot changes in the engine log."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger('SlotEvents')

    def publish(self, event: SlotEvent) -> None:
        t('reservations.services.events.LoggingEventSink.publish')
        self.logger.info(
            "Slot %s: room %s on %s %s-%s",
            event.status,
            event.room_id,
            event.date,
            event.start_time,
            event.end_time,
        )


class CallbackEventSink:
    """Forwards events to plain callables, e.g. a websocket broadcaster."""

    def __init__(self, *callbacks: Callable[[SlotEvent], Any]) -> None:
        self._callbacks: List[Callable[[SlotEvent], Any]] = list(callbacks)

    def subscribe(self, callback: Callable[[SlotEvent], Any]) -> None:
        t('reservations.services.events.CallbackEventSink.subscribe')
        self._callbacks.append(callback)

    def publish(self, event: SlotEvent) -> None:
        t('reservations.services.events.CallbackEventSink.publish')
        for callback in list(self._callbacks):
            callback(event)


def publish_safely(sink: Optional[EventSink], event: SlotEvent, logger: logging.Logger) -> None:
    """Publish ``event`` and log, rather than raise, any sink failure."""

    t('reservations.services.events.publish_safely')
    if sink is None:
        return
    try:
        sink.publish(event)
    except Exception as exc:
        logger.error(
            "Event sink failed for %s event on room %s %s %s: %s",
            event.status,
            event.room_id,
            event.date,
            event.start_time,
            exc,
            exc_info=True,
        )
