"""Centralized application settings.

All runtime configuration is read here from the environment (optionally
seeded from a ``.env`` file) so the engine modules never call ``os.getenv``
directly. Services receive an :class:`AppSettings` snapshot explicitly.
"""

from __future__ import annotations
from tracking import t

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from . import constants


def _to_bool(value: Optional[str], default: bool = False) -> bool:
    """Normalize environment strings such as "true"/"1" into booleans."""
    t('infrastructure.settings._to_bool')

    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _to_int(value: Optional[str], default: int, *, minimum: int = 0) -> int:
    t('infrastructure.settings._to_int')

    if value is None or not value.strip():
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return max(parsed, minimum)


@dataclass(frozen=True)
class AppSettings:
    """Immutable snapshot of high-level configuration values."""

    production_mode: bool
    timezone: str
    data_directory: str
    reservations_file: str
    waitlist_file: str
    notifications_file: str
    rooms_file: str
    users_file: str
    max_active_reservations: int
    max_waiting_entries: int
    booking_horizon_days: int
    reminder_lead_minutes: int
    reminder_tolerance_minutes: int
    notification_tick_seconds: int
    waitlist_enforce_horizon: bool

    @property
    def log_directory(self) -> str:
        t('infrastructure.settings.AppSettings.log_directory')
        return str(Path(self.data_directory) / 'logs')


def load_settings(env: Optional[Mapping[str, str]] = None) -> AppSettings:
    """Load configuration from the environment and fall back to defaults."""
    t('infrastructure.settings.load_settings')

    if env is None:
        load_dotenv(override=False)
        env = os.environ

    production_mode = _to_bool(env.get("PRODUCTION_MODE", "false"), default=False)
    timezone = env.get("ROOMQUEUE_TIMEZONE", constants.DEFAULT_TIMEZONE)

    data_directory = env.get("DATA_DIRECTORY", constants.DEFAULT_DATA_DIRECTORY)
    data_path = Path(data_directory)

    reservations_file = env.get("RESERVATIONS_FILE", str(data_path / "reservations.json"))
    waitlist_file = env.get("WAITLIST_FILE", str(data_path / "waitlist.json"))
    notifications_file = env.get("NOTIFICATIONS_FILE", str(data_path / "notifications.json"))
    rooms_file = env.get("ROOMS_FILE", str(data_path / "rooms.json"))
    users_file = env.get("USERS_FILE", str(data_path / "users.json"))

    max_active_reservations = _to_int(
        env.get("MAX_ACTIVE_RESERVATIONS"),
        constants.DEFAULT_MAX_ACTIVE_RESERVATIONS,
        minimum=1,
    )
    max_waiting_entries = _to_int(
        env.get("MAX_WAITING_ENTRIES"),
        constants.DEFAULT_MAX_WAITING_ENTRIES,
        minimum=1,
    )
    booking_horizon_days = _to_int(
        env.get("BOOKING_HORIZON_DAYS"),
        constants.DEFAULT_BOOKING_HORIZON_DAYS,
        minimum=1,
    )

    reminder_lead_minutes = _to_int(
        env.get("REMINDER_LEAD_MINUTES"),
        constants.DEFAULT_REMINDER_LEAD_MINUTES,
    )
    reminder_tolerance_minutes = _to_int(
        env.get("REMINDER_TOLERANCE_MINUTES"),
        constants.DEFAULT_REMINDER_TOLERANCE_MINUTES,
    )
    notification_tick_seconds = _to_int(
        env.get("NOTIFICATION_TICK_SECONDS"),
        constants.DEFAULT_NOTIFICATION_TICK_SECONDS,
        minimum=1,
    )

    waitlist_enforce_horizon = _to_bool(env.get("WAITLIST_ENFORCE_HORIZON", "false"))

    return AppSettings(
        production_mode=production_mode,
        timezone=timezone,
        data_directory=data_directory,
        reservations_file=reservations_file,
        waitlist_file=waitlist_file,
        notifications_file=notifications_file,
        rooms_file=rooms_file,
        users_file=users_file,
        max_active_reservations=max_active_reservations,
        max_waiting_entries=max_waiting_entries,
        booking_horizon_days=booking_horizon_days,
        reminder_lead_minutes=reminder_lead_minutes,
        reminder_tolerance_minutes=reminder_tolerance_minutes,
        notification_tick_seconds=notification_tick_seconds,
        waitlist_enforce_horizon=waitlist_enforce_horizon,
    )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached :class:`AppSettings` instance."""
    t('infrastructure.settings.get_settings')

    return load_settings()
