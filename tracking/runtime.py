"""Runtime helpers for counting how often engine functions execute."""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Dict, Optional

TRACKING_FILE_ENV = "ROOMQUEUE_TRACKING_FILE"

_LOCK = threading.RLock()
_COUNTS: Dict[str, int] = {}


def _tracking_file() -> Optional[Path]:
    raw = os.environ.get(TRACKING_FILE_ENV, "").strip()
    return Path(raw) if raw else None


def _load_counts(path: Path) -> None:
    if not path.exists():
        return

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, ValueError, TypeError):
        return

    if not isinstance(data, dict):
        return

    for name, raw_count in data.items():
        if not name:
            continue
        try:
            count = int(raw_count)
        except (TypeError, ValueError):
            continue
        _COUNTS[str(name)] = max(count, 0)


def _persist_counts_locked(path: Path) -> None:
    """Write the in-memory counts to ``path``. Caller must hold ``_LOCK``."""
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Optional[Path] = None
    try:
        with NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, delete=False
        ) as handle:
            json.dump(_COUNTS, handle, sort_keys=True)
            handle.write("\n")
            handle.flush()
            tmp_path = Path(handle.name)

        if tmp_path is not None:
            tmp_path.replace(path)
    except OSError:
        if tmp_path is not None:
            try:
                tmp_path.unlink()
            except OSError:
                pass


def t(func_name: str) -> None:
    """Record the provided function name each time it runs."""
    if not func_name:
        return

    with _LOCK:
        _COUNTS[func_name] = _COUNTS.get(func_name, 0) + 1


def snapshot() -> Dict[str, int]:
    """Return a copy of the current call counts."""
    with _LOCK:
        return dict(_COUNTS)


def flush() -> Optional[Path]:
    """Persist counts when ``ROOMQUEUE_TRACKING_FILE`` is configured."""
    path = _tracking_file()
    if path is None:
        return None
    with _LOCK:
        _persist_counts_locked(path)
    return path


def reset() -> None:
    with _LOCK:
        _COUNTS.clear()


_initial_path = _tracking_file()
if _initial_path is not None:
    _load_counts(_initial_path)
