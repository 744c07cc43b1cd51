"""
Record Collection Module

Provides RecordCollection, the list/append/update/remove abstraction the
engine uses for reservations, waitlist entries and notifications. Records are
kept in memory and written through to a repository on every mutation.
"""

from __future__ import annotations
from tracking import t

import copy
import logging
import threading
from collections import Counter
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from reservations.errors import StorageError

RecordT = TypeVar('RecordT')


class RecordCollection(Generic[RecordT]):
    """
    Thread-safe collection of dataclass records backed by a repository.

    Reads return copies so callers can never mutate stored state without going
    through :meth:`append`, :meth:`update` or :meth:`remove`. A failed write
    restores the previous in-memory state before raising ``StorageError``.
    """

    def __init__(
        self,
        name: str,
        repository: Any,
        *,
        factory: Callable[[Dict[str, Any]], RecordT],
        logger: Optional[logging.Logger] = None,
    ) -> None:
        t('reservations.store.collection.RecordCollection.__init__')
        self.name = name
        self.repository = repository
        self._factory = factory
        self._lock = threading.RLock()
        self.logger = logger or logging.getLogger('RecordRepository')
        self._records: List[Dict[str, Any]] = []
        for payload in self.repository.load():
            if not isinstance(payload, dict) or not payload.get('id'):
                self.logger.warning("Skipping malformed %s record: %r", name, payload)
                continue
            self._records.append(payload)
        self.logger.info(
            "Collection %s loaded with %s records (status breakdown: %s)",
            name,
            len(self._records),
            self._status_counts(),
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def list_all(self) -> List[RecordT]:
        """Return a snapshot of every record."""
        t('reservations.store.collection.RecordCollection.list_all')
        with self._lock:
            return [self._factory(copy.deepcopy(item)) for item in self._records]

    def get(self, record_id: str) -> Optional[RecordT]:
        t('reservations.store.collection.RecordCollection.get')
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            return self._factory(copy.deepcopy(self._records[index]))

    def append(self, record: RecordT) -> RecordT:
        t('reservations.store.collection.RecordCollection.append')
        payload = record.to_dict()
        with self._lock:
            if self._index_of(payload['id']) is not None:
                raise StorageError(f"Duplicate {self.name} id {payload['id']}")
            self._records.append(payload)
            try:
                self._persist()
            except StorageError:
                self._records.pop()
                raise
        self.logger.debug("Appended %s record %s", self.name, payload['id'])
        return self._factory(copy.deepcopy(payload))

    def update(self, record_id: str, **changes: Any) -> Optional[RecordT]:
        """Apply ``changes`` in place; returns ``None`` when the id is unknown."""
        t('reservations.store.collection.RecordCollection.update')
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                self.logger.warning("%s record %s not found for update", self.name, record_id)
                return None
            previous = self._records[index]
            updated = dict(previous)
            updated.update(changes)
            updated['id'] = previous['id']
            self._records[index] = updated
            try:
                self._persist()
            except StorageError:
                self._records[index] = previous
                raise
        self.logger.debug("Updated %s record %s: %s", self.name, record_id, sorted(changes))
        return self._factory(copy.deepcopy(updated))

    def remove(self, record_id: str) -> Optional[RecordT]:
        """Delete a record, returning it, or ``None`` when absent."""
        t('reservations.store.collection.RecordCollection.remove')
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                self.logger.warning("%s record %s not found for removal", self.name, record_id)
                return None
            removed = self._records.pop(index)
            try:
                self._persist()
            except StorageError:
                self._records.insert(index, removed)
                raise
        self.logger.debug("Removed %s record %s", self.name, record_id)
        return self._factory(copy.deepcopy(removed))

    def _index_of(self, record_id: str) -> Optional[int]:
        for index, item in enumerate(self._records):
            if item.get('id') == record_id:
                return index
        return None

    def _persist(self) -> None:
        # Caller holds ``_lock``.
        self.repository.save(self._records)

    def _status_counts(self) -> Dict[str, int]:
        return dict(Counter(item.get('status', 'n/a') for item in self._records))
