"""Persistence backends for record collections."""

from __future__ import annotations
from tracking import t

import copy
import json
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, Iterable, List, Optional

from reservations.errors import StorageError


class RecordRepository:
    """Read/write a list of records to a JSON backing file."""

    def __init__(self, file_path: str, *, logger: Any) -> None:
        t('reservations.store.repository.RecordRepository.__init__')
        self._path = Path(file_path)
        self._logger = logger

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> List[dict]:
        """Load records from disk; a missing file means an empty collection."""

        t('reservations.store.repository.RecordRepository.load')
        if not self._path.exists():
            self._logger.debug(
                "Collection file %s does not exist; starting empty",
                self._path,
            )
            return []

        try:
            with self._path.open('r', encoding='utf-8') as handle:
                payload = json.load(handle)
        except (OSError, ValueError) as exc:
            self._logger.error("Failed to load collection from %s: %s", self._path, exc)
            raise StorageError(f"Could not read {self._path.name}") from exc

        if isinstance(payload, list):
            self._logger.debug(
                "Loaded %s records from %s",
                len(payload),
                self._path,
            )
            return payload

        self._logger.warning(
            "Invalid collection format in %s; expected list, received %s",
            self._path,
            type(payload).__name__,
        )
        return []

    def save(self, records: Iterable[dict]) -> None:
        """Atomically replace the backing file with ``records``."""

        t('reservations.store.repository.RecordRepository.save')
        tmp_path: Optional[Path] = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                'w', encoding='utf-8', dir=self._path.parent, delete=False, suffix='.tmp'
            ) as handle:
                tmp_path = Path(handle.name)
                json.dump(list(records), handle, indent=2, ensure_ascii=False)
                handle.flush()
            tmp_path.replace(self._path)
            self._logger.debug("Collection saved to %s", self._path)
        except (OSError, TypeError, ValueError) as exc:
            self._logger.error("Failed to save collection to %s: %s", self._path, exc)
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise StorageError(f"Could not write {self._path.name}") from exc


class InMemoryRepository:
    """Repository holding records in process memory only."""

    def __init__(self, records: Optional[Iterable[dict]] = None) -> None:
        t('reservations.store.repository.InMemoryRepository.__init__')
        self._records: List[dict] = copy.deepcopy(list(records or []))

    def load(self) -> List[dict]:
        t('reservations.store.repository.InMemoryRepository.load')
        return copy.deepcopy(self._records)

    def save(self, records: Iterable[dict]) -> None:
        t('reservations.store.repository.InMemoryRepository.save')
        self._records = copy.deepcopy(list(records))
