"""Reservation engine services."""

from .events import CallbackEventSink, EventSink, LoggingEventSink, SlotEvent, publish_safely
from .notification_service import NotificationService
from .reservation_service import ReservationService
from .stats_service import RoomUsage, StatsService
from .waitlist_service import PromotionOutcome, WaitlistService

__all__ = [
    "CallbackEventSink",
    "EventSink",
    "LoggingEventSink",
    "SlotEvent",
    "publish_safely",
    "NotificationService",
    "ReservationService",
    "RoomUsage",
    "StatsService",
    "PromotionOutcome",
    "WaitlistService",
]
