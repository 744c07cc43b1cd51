"""Background reminder scan."""

from .metrics import SchedulerStats
from .notification_scheduler import NotificationScheduler, build_reminder_message

__all__ = ["SchedulerStats", "NotificationScheduler", "build_reminder_message"]
