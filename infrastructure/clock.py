"""Timezone-aware clock used by services and the reminder scheduler."""

from __future__ import annotations
from tracking import t

from datetime import datetime

import pytz


class SystemClock:
    """Return the current wall-clock time in the configured timezone."""

    def __init__(self, timezone: str) -> None:
        t('infrastructure.clock.SystemClock.__init__')
        self.timezone = pytz.timezone(timezone)

    def now(self) -> datetime:
        t('infrastructure.clock.SystemClock.now')
        return datetime.now(self.timezone)

    def localize(self, value: datetime) -> datetime:
        """Attach the clock timezone to naive datetimes, convert aware ones."""
        t('infrastructure.clock.SystemClock.localize')
        if value.tzinfo is None:
            return self.timezone.localize(value)
        return value.astimezone(self.timezone)
