"""Dependency injection container for ExitCheck."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from .config import Config, get_config
from .domain.models import ExitPatternAnalysis
from .domain.services import (
    ChecklistService,
    ExitEventRecorder,
    ExitSessionOrchestrator,
    ExitStatsService,
    HomeZoneService,
    PatternAnalyzer,
    StreakTracker,
)
from .geofence import GeofenceMonitor, PermissionGate, SignalChannel
from .infra.capabilities import LocationService, NotificationService
from .infra.database import DatabaseConnection
from .infra.repositories import KuzuStore
from .infra.store import Store
from .infra.streak_state import JsonStreakStateRepository, StreakStateRepository

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """Dependency injection container.

    Platform capabilities are supplied by the host. The store and the
    streak state repository default to the on-disk implementations under
    config.data_dir, and can be replaced (e.g. with in-memory ones in tests).
    """

    config: Config
    location_service: LocationService
    notification_service: NotificationService
    is_foreground: Callable[[], bool] = field(default=lambda: False)
    _store: Store | None = None
    _owns_store: bool = False
    _streak_repository: StreakStateRepository | None = None
    _database: DatabaseConnection | None = None
    _permission_gate: PermissionGate | None = None
    _monitor: GeofenceMonitor | None = None
    _channel: SignalChannel | None = None
    _recorder: ExitEventRecorder | None = None
    _streak_tracker: StreakTracker | None = None
    _pattern_analyzer: PatternAnalyzer | None = None
    _stats_service: ExitStatsService | None = None
    _home_service: HomeZoneService | None = None
    _checklist_service: ChecklistService | None = None
    _orchestrator: ExitSessionOrchestrator | None = None

    @classmethod
    def create(
        cls,
        location_service: LocationService,
        notification_service: NotificationService,
        config: Config | None = None,
        is_foreground: Callable[[], bool] | None = None,
        store: Store | None = None,
        streak_repository: StreakStateRepository | None = None,
    ) -> Container:
        """Create a new container.

        Args:
            location_service: Platform location capability.
            notification_service: Platform local-notification capability.
            config: Optional config. Uses global config if not provided.
            is_foreground: Whether the host UI is visible. Defaults to never.
            store: Optional entity store. Defaults to KuzuStore on config.db_path.
            streak_repository: Optional streak state repository. Defaults to
                the JSON document at config.streak_state_path.

        Returns:
            A new Container instance.
        """
        return cls(
            config=config or get_config(),
            location_service=location_service,
            notification_service=notification_service,
            is_foreground=is_foreground or (lambda: False),
            _store=store,
            _streak_repository=streak_repository,
        )

    # =========================================================================
    # Storage
    # =========================================================================

    @property
    def database(self) -> DatabaseConnection:
        """Get the database connection (lazy initialization)."""
        if self._database is None:
            self._database = DatabaseConnection(db_path=self.config.db_path)
        return self._database

    @property
    def store(self) -> Store:
        """Get the entity store (lazy initialization)."""
        if self._store is None:
            self._store = KuzuStore(db=self.database)
            self._owns_store = True
        return self._store

    @property
    def streak_repository(self) -> StreakStateRepository:
        if self._streak_repository is None:
            self._streak_repository = JsonStreakStateRepository(
                path=self.config.streak_state_path
            )
        return self._streak_repository

    # =========================================================================
    # Geofence
    # =========================================================================

    @property
    def permission_gate(self) -> PermissionGate:
        if self._permission_gate is None:
            self._permission_gate = PermissionGate(self.location_service)
        return self._permission_gate

    @property
    def signal_channel(self) -> SignalChannel:
        if self._channel is None:
            self._channel = SignalChannel(
                maxsize=self.config.signal_queue_size,
                post_timeout=self.config.signal_post_timeout,
            )
        return self._channel

    @property
    def geofence_monitor(self) -> GeofenceMonitor:
        if self._monitor is None:
            self._monitor = GeofenceMonitor(
                location_service=self.location_service,
                permission_gate=self.permission_gate,
                exit_debounce_seconds=self.config.exit_debounce_seconds,
            )
        return self._monitor

    # =========================================================================
    # Services
    # =========================================================================

    @property
    def recorder(self) -> ExitEventRecorder:
        if self._recorder is None:
            self._recorder = ExitEventRecorder(store=self.store)
        return self._recorder

    @property
    def streak_tracker(self) -> StreakTracker:
        if self._streak_tracker is None:
            self._streak_tracker = StreakTracker(repository=self.streak_repository)
        return self._streak_tracker

    @property
    def pattern_analyzer(self) -> PatternAnalyzer:
        if self._pattern_analyzer is None:
            self._pattern_analyzer = PatternAnalyzer(
                store=self.store,
                min_occurrences=self.config.min_pattern_occurrences,
                weekend_days=self.config.weekend_days,
            )
        return self._pattern_analyzer

    @property
    def stats_service(self) -> ExitStatsService:
        if self._stats_service is None:
            self._stats_service = ExitStatsService(store=self.store)
        return self._stats_service

    @property
    def home_service(self) -> HomeZoneService:
        if self._home_service is None:
            self._home_service = HomeZoneService(
                store=self.store,
                monitor=self.geofence_monitor,
                default_radius=self.config.default_radius,
            )
        return self._home_service

    @property
    def checklist_service(self) -> ChecklistService:
        if self._checklist_service is None:
            self._checklist_service = ChecklistService(store=self.store)
        return self._checklist_service

    @property
    def orchestrator(self) -> ExitSessionOrchestrator:
        """Get the session orchestrator, subscribed to the geofence monitor."""
        if self._orchestrator is None:
            self._orchestrator = ExitSessionOrchestrator(
                store=self.store,
                recorder=self.recorder,
                streak_tracker=self.streak_tracker,
                notifications=self.notification_service,
                is_foreground=self.is_foreground,
                auto_check_phone=self.config.auto_check_phone,
                ask_for_feedback=self.config.ask_for_feedback,
                feedback_after_exits=self.config.feedback_after_exits,
            )
            self.geofence_monitor.subscribe(self._orchestrator.handle_exit)
        return self._orchestrator

    # =========================================================================
    # Coordination
    # =========================================================================

    def pump_signals(self, limit: int | None = None) -> int:
        """Drain pending platform signals into the geofence monitor.

        Call from the coordination context (the host's main loop).
        """
        # The orchestrator must be listening before any exit is handled
        _ = self.orchestrator
        return self.signal_channel.drain(self.geofence_monitor.handle_signal, limit)

    def suggestions(self) -> list[ExitPatternAnalysis]:
        """Leading forgotten-item patterns for the dashboard."""
        return self.pattern_analyzer.top_suggestions(self.config.suggestion_limit)

    def close(self) -> None:
        """Close all resources.

        A store or streak repository passed to create() is kept, so the
        container can be used again after close().
        """
        if self._monitor is not None:
            self._monitor.stop_monitoring()
        if self._database is not None:
            self._database.close()
            self._database = None
        if self._owns_store:
            self._store = None
            self._owns_store = False
        self._permission_gate = None
        self._monitor = None
        self._channel = None
        self._recorder = None
        self._streak_tracker = None
        self._pattern_analyzer = None
        self._stats_service = None
        self._home_service = None
        self._checklist_service = None
        self._orchestrator = None


# Module-level container instance
_container: Container | None = None


def get_container() -> Container:
    """Get the global container instance.

    Raises:
        RuntimeError: If configure_container() has not been called.
    """
    if _container is None:
        raise RuntimeError("Container not configured; call configure_container()")
    return _container


def configure_container(
    location_service: LocationService,
    notification_service: NotificationService,
    **kwargs,
) -> Container:
    """Create the global container with the host's capabilities."""
    global _container
    reset_container()
    _container = Container.create(
        location_service=location_service,
        notification_service=notification_service,
        **kwargs,
    )
    logger.info(f"Container configured (data dir: {_container.config.data_dir})")
    return _container


def reset_container() -> None:
    """Reset the container (for testing)."""
    global _container
    if _container is not None:
        _container.close()
    _container = None
