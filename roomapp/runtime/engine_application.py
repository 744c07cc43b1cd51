"""Engine runtime application: wiring, request dispatch and lifecycle."""

from __future__ import annotations
from tracking import flush, t

import logging
import threading
from typing import Any, Callable, Dict, Optional

from infrastructure.settings import AppSettings, get_settings
from roomapp.bootstrap.container import DependencyContainer
from roomapp.error_handler import ErrorHandler
from rooms import DEFAULT_ROOMS


def _serialize(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    return value


class EngineApplication:
    """
    Assemble dependencies and expose the engine operations to a request layer.

    ``dispatch`` runs one named operation and always returns a response
    dictionary; failures are mapped by :class:`ErrorHandler`.
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        *,
        container: Optional[DependencyContainer] = None,
        seed_rooms: bool = False,
    ) -> None:
        t('roomapp.runtime.engine_application.EngineApplication.__init__')
        self.logger = logging.getLogger('EngineApplication')
        self.settings = settings or (container.settings if container else get_settings())
        self.container = container or DependencyContainer(self.settings)
        self.dependencies = self.container.build_dependencies()
        self.scheduler = self.dependencies.scheduler
        self._stopped = threading.Event()

        if seed_rooms:
            self.dependencies.room_catalog.seed_if_empty(DEFAULT_ROOMS)

        reservations = self.dependencies.reservation_service
        waitlist = self.dependencies.waitlist_service
        notifications = self.dependencies.notification_service
        stats = self.dependencies.stats_service
        self.operations: Dict[str, Callable[..., Any]] = {
            'create_reservation': reservations.create_reservation,
            'cancel_reservation': reservations.cancel_reservation,
            'get_reservation': reservations.get_reservation,
            'list_reservations_for_user': reservations.list_reservations_for_user,
            'list_reservations_for_room': reservations.list_reservations_for_room,
            'join_waitlist': waitlist.join_waitlist,
            'cancel_waitlist': waitlist.cancel_waitlist,
            'list_waitlist_for_user': waitlist.list_waitlist_for_user,
            'list_notifications_for_user': notifications.list_for_user,
            'mark_notification_read': notifications.mark_read,
            'popular_rooms': stats.popular_rooms,
        }

    def dispatch(self, operation: str, **payload: Any) -> Dict[str, Any]:
        """Run ``operation`` with keyword ``payload`` and wrap the outcome."""
        t('roomapp.runtime.engine_application.EngineApplication.dispatch')
        handler = self.operations.get(operation)
        if handler is None:
            self.logger.warning("Unknown operation requested: %s", operation)
            return {
                'success': False,
                'code': 'unknown_operation',
                'message': f"Unknown operation: {operation}",
                'status': 404,
            }
        try:
            result = handler(**payload)
        except TypeError as exc:
            self.logger.warning("Bad arguments for %s: %s", operation, exc)
            return {
                'success': False,
                'code': 'invalid_format',
                'message': f"Invalid arguments for {operation}",
                'status': 400,
            }
        except Exception as exc:
            return ErrorHandler.to_response(exc, operation)

        if operation == 'cancel_reservation':
            promoted = getattr(result, 'promoted', None)
            return ErrorHandler.success({'promoted': _serialize(promoted)}, message="Reservation cancelled")
        return ErrorHandler.success(_serialize(result))

    def start(self) -> None:
        t('roomapp.runtime.engine_application.EngineApplication.start')
        self.logger.info(f"""ENGINE STARTING
        Timezone: {self.settings.timezone}
        Data directory: {self.settings.data_directory}
        Rooms: {len(self.dependencies.room_catalog.list_rooms())}
        Reservations on file: {len(self.dependencies.store.reservations)}
        Waitlist entries on file: {len(self.dependencies.store.waitlist)}
        """)
        self._stopped.clear()
        self.scheduler.start()

    def stop(self) -> None:
        t('roomapp.runtime.engine_application.EngineApplication.stop')
        if self._stopped.is_set():
            return
        self.scheduler.stop()
        flush()
        self._stopped.set()
        self.logger.info("Engine stopped")

    def run_forever(self) -> None:
        """Start the engine and block until :meth:`stop` is called."""
        t('roomapp.runtime.engine_application.EngineApplication.run_forever')
        self.start()
        try:
            while not self._stopped.wait(timeout=1.0):
                pass
        finally:
            self.stop()
