"""Record storage for the reservation engine."""

from .collection import RecordCollection
from .locks import PartitionLocks
from .repository import InMemoryRepository, RecordRepository
from .store import ReservationStore

__all__ = [
    "InMemoryRepository",
    "PartitionLocks",
    "RecordCollection",
    "RecordRepository",
    "ReservationStore",
]
