"""Usage statistics computed from the reservation log."""

from __future__ import annotations
from tracking import t

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List

from infrastructure.constants import POPULAR_ROOMS_LIMIT
from reservations.store import ReservationStore


@dataclass(frozen=True)
class RoomUsage:
    room_id: int
    name: str
    reservation_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'room_id': self.room_id,
            'name': self.name,
            'reservation_count': self.reservation_count,
        }


class StatsService:
    """Aggregates over every reservation ever made, cancelled ones included."""

    def __init__(self, store: ReservationStore, rooms: Any) -> None:
        t('reservations.services.stats_service.StatsService.__init__')
        self.store = store
        self.rooms = rooms
        self.logger = logging.getLogger('StatsService')

    def popular_rooms(self, limit: int = POPULAR_ROOMS_LIMIT) -> List[RoomUsage]:
        """Rooms ranked by reservation count; ties keep the lower room id first."""
        t('reservations.services.stats_service.StatsService.popular_rooms')
        counts = Counter(reservation.room_id for reservation in self.store.reservations.list_all())
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:max(limit, 0)]

        usage: List[RoomUsage] = []
        for room_id, count in ranked:
            room = self.rooms.get_room(room_id)
            usage.append(RoomUsage(
                room_id=room_id,
                name=room.name if room else f"Room {room_id}",
                reservation_count=count,
            ))
        self.logger.debug("Computed popular rooms: %s", [item.room_id for item in usage])
        return usage
