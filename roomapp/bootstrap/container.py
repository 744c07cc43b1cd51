"""Dependency container wiring engine runtime components together."""

from __future__ import annotations
from tracking import t

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from infrastructure.clock import SystemClock
from infrastructure.settings import AppSettings, get_settings
from reservations.engine.quota import QuotaEnforcer
from reservations.scheduler import NotificationScheduler
from reservations.services import (
    LoggingEventSink,
    NotificationService,
    ReservationService,
    StatsService,
    WaitlistService,
)
from reservations.store import ReservationStore
from rooms import RoomCatalog
from users import UserManager


@dataclass(frozen=True)
class EngineDependencies:
    """Concrete dependency snapshot for the reservation engine runtime."""

    settings: AppSettings
    clock: SystemClock
    store: ReservationStore
    room_catalog: RoomCatalog
    user_manager: UserManager
    reservation_service: ReservationService
    waitlist_service: WaitlistService
    notification_service: NotificationService
    stats_service: StatsService
    scheduler: NotificationScheduler

    def as_dict(self) -> Dict[str, Any]:
        """Return dependencies as a mapping keyed by attribute name."""
        t('roomapp.bootstrap.container.EngineDependencies.as_dict')

        return {
            'settings': self.settings,
            'clock': self.clock,
            'store': self.store,
            'room_catalog': self.room_catalog,
            'user_manager': self.user_manager,
            'reservation_service': self.reservation_service,
            'waitlist_service': self.waitlist_service,
            'notification_service': self.notification_service,
            'stats_service': self.stats_service,
            'scheduler': self.scheduler,
        }


class DependencyContainer:
    """Lazy dependency container with optional override support."""

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> None:
        t('roomapp.bootstrap.container.DependencyContainer.__init__')
        self.settings = settings or get_settings()
        self._cache: Dict[str, Any] = {}
        if overrides:
            self._cache.update(overrides)

    # ------------------------------------------------------------------
    # Internal helpers
    def _resolve(self, key: str, factory: Callable[[], Any]) -> Any:
        t('roomapp.bootstrap.container.DependencyContainer._resolve')
        if key not in self._cache:
            self._cache[key] = factory()
        return self._cache[key]

    # ------------------------------------------------------------------
    # Collaborators
    @property
    def clock(self) -> SystemClock:
        t('roomapp.bootstrap.container.DependencyContainer.clock')
        return self._resolve('clock', lambda: SystemClock(self.settings.timezone))

    @property
    def store(self) -> ReservationStore:
        t('roomapp.bootstrap.container.DependencyContainer.store')
        return self._resolve('store', lambda: ReservationStore.from_settings(self.settings))

    @property
    def room_catalog(self) -> RoomCatalog:
        t('roomapp.bootstrap.container.DependencyContainer.room_catalog')
        return self._resolve('room_catalog', lambda: RoomCatalog(self.settings.rooms_file))

    @property
    def user_manager(self) -> UserManager:
        t('roomapp.bootstrap.container.DependencyContainer.user_manager')
        return self._resolve('user_manager', lambda: UserManager(self.settings.users_file))

    @property
    def event_sink(self) -> Any:
        t('roomapp.bootstrap.container.DependencyContainer.event_sink')
        return self._resolve('event_sink', LoggingEventSink)

    @property
    def quota(self) -> QuotaEnforcer:
        t('roomapp.bootstrap.container.DependencyContainer.quota')

        def factory() -> QuotaEnforcer:
            return QuotaEnforcer(
                max_active_reservations=self.settings.max_active_reservations,
                max_waiting_entries=self.settings.max_waiting_entries,
            )

        return self._resolve('quota', factory)

    # ------------------------------------------------------------------
    # Services
    @property
    def waitlist_service(self) -> WaitlistService:
        t('roomapp.bootstrap.container.DependencyContainer.waitlist_service')

        def factory() -> WaitlistService:
            return WaitlistService(
                self.store,
                self.room_catalog,
                self.clock,
                settings=self.settings,
                quota=self.quota,
            )

        return self._resolve('waitlist_service', factory)

    @property
    def reservation_service(self) -> ReservationService:
        t('roomapp.bootstrap.container.DependencyContainer.reservation_service')

        def factory() -> ReservationService:
            return ReservationService(
                self.store,
                self.room_catalog,
                self.user_manager,
                self.clock,
                waitlist=self.waitlist_service,
                settings=self.settings,
                quota=self.quota,
                events=self.event_sink,
            )

        return self._resolve('reservation_service', factory)

    @property
    def notification_service(self) -> NotificationService:
        t('roomapp.bootstrap.container.DependencyContainer.notification_service')
        return self._resolve('notification_service', lambda: NotificationService(self.store))

    @property
    def stats_service(self) -> StatsService:
        t('roomapp.bootstrap.container.DependencyContainer.stats_service')
        return self._resolve('stats_service', lambda: StatsService(self.store, self.room_catalog))

    @property
    def scheduler(self) -> NotificationScheduler:
        t('roomapp.bootstrap.container.DependencyContainer.scheduler')

        def factory() -> NotificationScheduler:
            return NotificationScheduler(
                self.store,
                self.room_catalog,
                self.clock,
                settings=self.settings,
            )

        return self._resolve('scheduler', factory)

    # ------------------------------------------------------------------
    def build_dependencies(self) -> EngineDependencies:
        """Materialise and return all core dependencies."""
        t('roomapp.bootstrap.container.DependencyContainer.build_dependencies')

        return EngineDependencies(
            settings=self.settings,
            clock=self.clock,
            store=self.store,
            room_catalog=self.room_catalog,
            user_manager=self.user_manager,
            reservation_service=self.reservation_service,
            waitlist_service=self.waitlist_service,
            notification_service=self.notification_service,
            stats_service=self.stats_service,
            scheduler=self.scheduler,
        )


__all__ = ['EngineDependencies', 'DependencyContainer']
