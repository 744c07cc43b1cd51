"""User-facing access to the reminder inbox."""

from __future__ import annotations
from tracking import t

import logging
from typing import Any, List

from reservations.engine.validation import parse_identifier
from reservations.errors import NotFoundError
from reservations.models import Notification
from reservations.services.guard import internal_errors
from reservations.store import ReservationStore


class NotificationService:
    """List a user's notifications and mark them read."""

    def __init__(self, store: ReservationStore) -> None:
        t('reservations.services.notification_service.NotificationService.__init__')
        self.store = store
        self.logger = logging.getLogger('NotificationService')

    def list_for_user(self, user_id: Any) -> List[Notification]:
        """Notifications addressed to ``user_id``, newest first."""
        t('reservations.services.notification_service.NotificationService.list_for_user')
        user_id = parse_identifier(user_id, field_name='user_id')
        matches = [
            notification for notification in self.store.notifications.list_all()
            if notification.user_id == user_id
        ]
        return sorted(matches, key=lambda item: (item.timestamp, item.id), reverse=True)

    def unread_count(self, user_id: Any) -> int:
        t('reservations.services.notification_service.NotificationService.unread_count')
        return sum(1 for notification in self.list_for_user(user_id) if not notification.read)

    def mark_read(self, notification_id: str) -> Notification:
        t('reservations.services.notification_service.NotificationService.mark_read')
        with internal_errors(self.logger, 'mark_read', notification_id=notification_id):
            updated = self.store.notifications.update(notification_id, read=True)
            if updated is None:
                raise NotFoundError('notification', notification_id)
        self.logger.debug("Notification %s marked read for user %s", notification_id, updated.user_id)
        return updated
