"""
Room Catalog
Read access to the rooms that can be booked, persisted as a JSON list
"""
from tracking import t

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from reservations.models import RoomRecord


class RoomCatalog:
    """
    JSON-backed lookup of bookable rooms.

    The reservation engine only reads from the catalog; ``save_room`` and
    ``seed_if_empty`` exist for administrative seeding.
    """

    def __init__(self, file_path: str = 'data/rooms.json') -> None:
        t('rooms.catalog.RoomCatalog.__init__')
        self.file_path = Path(file_path)
        self.logger = logging.getLogger('RoomCatalog')
        self._lock = threading.RLock()
        self.rooms: Dict[int, RoomRecord] = self._load_rooms()
        self.logger.info(f"RoomCatalog initialized with {len(self.rooms)} rooms from {file_path}")

    def get_room(self, room_id: Any) -> Optional[RoomRecord]:
        t('rooms.catalog.RoomCatalog.get_room')
        try:
            key = int(room_id)
        except (TypeError, ValueError):
            return None
        with self._lock:
            room = self.rooms.get(key)
        if room is None:
            self.logger.debug(f"No room found for room_id: {room_id}")
        return room

    def list_rooms(self, *, available_only: bool = False) -> List[RoomRecord]:
        t('rooms.catalog.RoomCatalog.list_rooms')
        with self._lock:
            rooms = sorted(self.rooms.values(), key=lambda room: room.id)
        if available_only:
            rooms = [room for room in rooms if room.available]
        return rooms

    def save_room(self, room: RoomRecord) -> None:
        t('rooms.catalog.RoomCatalog.save_room')
        with self._lock:
            self.rooms[room.id] = room
            self._save_rooms()
        self.logger.info(f"Saved room {room.id} ({room.name})")

    def seed_if_empty(self, rooms: Iterable[RoomRecord]) -> bool:
        """Populate an empty catalog; returns ``True`` when rooms were written."""
        t('rooms.catalog.RoomCatalog.seed_if_empty')
        with self._lock:
            if self.rooms:
                return False
            for room in rooms:
                self.rooms[room.id] = room
            self._save_rooms()
        self.logger.info(f"Seeded room catalog with {len(self.rooms)} default rooms")
        return True

    def _save_rooms(self) -> None:
        t('rooms.catalog.RoomCatalog._save_rooms')
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            payload = [room.to_dict() for room in sorted(self.rooms.values(), key=lambda room: room.id)]
            with open(self.file_path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            self.logger.debug(f"Successfully saved {len(payload)} rooms to {self.file_path}")
        except OSError as e:
            self.logger.error(f"Error saving rooms to {self.file_path}: {e}", exc_info=True)
            raise

    def _load_rooms(self) -> Dict[int, RoomRecord]:
        t('rooms.catalog.RoomCatalog._load_rooms')
        if not self.file_path.exists() or self.file_path.stat().st_size == 0:
            self.logger.info(f"Room file {self.file_path} is missing or empty, starting with no rooms")
            return {}

        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"Could not read room file {self.file_path}: {e}")
            return {}

        if isinstance(data, dict):
            data = list(data.values())
        if not isinstance(data, list):
            self.logger.warning(f"Room file {self.file_path} does not contain a list, ignoring it")
            return {}

        rooms: Dict[int, RoomRecord] = {}
        for item in data:
            try:
                room = RoomRecord.from_dict(item)
            except (KeyError, TypeError, ValueError):
                self.logger.warning(f"Invalid room entry in {self.file_path}: {item!r}, skipping")
                continue
            rooms[room.id] = room
        return rooms
