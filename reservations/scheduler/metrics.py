"""Statistics helpers for the reminder scheduler."""

from __future__ import annotations
from tracking import t

from dataclasses import dataclass
from typing import Optional


@dataclass
class SchedulerStats:
    """Mutable counters tracking reminder scan activity."""

    ticks: int = 0
    reminders_sent: int = 0
    tick_errors: int = 0
    total_tick_time: float = 0.0
    last_tick_at: Optional[str] = None

    def record_tick(self, reminders: int, tick_time: Optional[float] = None, at: Optional[str] = None) -> None:
        t('reservations.scheduler.metrics.SchedulerStats.record_tick')
        self.ticks += 1
        self.reminders_sent += max(reminders, 0)
        self.last_tick_at = at or self.last_tick_at
        self._record_tick_time(tick_time)

    def record_error(self) -> None:
        t('reservations.scheduler.metrics.SchedulerStats.record_error')
        self.ticks += 1
        self.tick_errors += 1

    def _record_tick_time(self, tick_time: Optional[float]) -> None:
        if tick_time is None:
            return
        try:
            value = float(tick_time)
        except (TypeError, ValueError):
            return
        if value < 0:
            return
        self.total_tick_time += value

    @property
    def avg_tick_time(self) -> float:
        t('reservations.scheduler.metrics.SchedulerStats.avg_tick_time')
        completed = self.ticks - self.tick_errors
        if completed <= 0:
            return 0.0
        return self.total_tick_time / completed

    @property
    def error_rate(self) -> float:
        t('reservations.scheduler.metrics.SchedulerStats.error_rate')
        if self.ticks == 0:
            return 0.0
        return (self.tick_errors / self.ticks) * 100

    def format_report(self) -> str:
        t('reservations.scheduler.metrics.SchedulerStats.format_report')
        lines = [
            "Reminder Scheduler Report",
            f"Ticks: {self.ticks}",
            f"Reminders sent: {self.reminders_sent}",
            f"Tick errors: {self.tick_errors} ({self.error_rate:.2f}%)",
            f"Avg tick time: {self.avg_tick_time:.3f}s",
        ]
        if self.last_tick_at:
            lines.append(f"Last tick: {self.last_tick_at}")
        return "\n".join(lines)
