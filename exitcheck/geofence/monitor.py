"""Geofence Monitor - turns region signals into exit events.

State machine:

    IDLE --start_monitoring--> ARMED        (always auth + capability)
    IDLE --start_monitoring--> UNAVAILABLE  (no always auth / no capability)
    ARMED --RegionExited(armed id)--> ARMED (emits ExitDetected once)
    ARMED --MonitoringFailed--> ERROR       (registration void, re-arm)
    any --stop_monitoring--> IDLE

start_monitoring always stops the previous region first, so at most one
region is ever registered. Region identity is derived from the home
location id, so re-arming after a radius or coordinate change replaces the
registration instead of adding one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from ..domain.models import (
    AuthorizationChanged,
    ExitDetected,
    HomeLocation,
    LocationSignal,
    LocationUpdated,
    MonitoringFailed,
    MonitorIssue,
    MonitorState,
    MonitorStatus,
    Region,
    RegionEntered,
    RegionExited,
)

if TYPE_CHECKING:
    from ..infra.capabilities import LocationService
    from .permission import PermissionGate

logger = logging.getLogger(__name__)

ExitListener = Callable[[ExitDetected], None]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GeofenceMonitor:
    """Owns the single monitored home region."""

    def __init__(
        self,
        location_service: LocationService,
        permission_gate: PermissionGate,
        exit_debounce_seconds: float = 60.0,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the monitor.

        Args:
            location_service: Platform location capability.
            permission_gate: Authorization state tracker.
            exit_debounce_seconds: Repeat exit signals for the armed region
                within this window count as the same transition.
            clock: Source of the current time.
        """
        self._location = location_service
        self._permissions = permission_gate
        self._debounce = timedelta(seconds=exit_debounce_seconds)
        self._clock = clock

        self._state = MonitorState.IDLE
        self._region: Region | None = None
        self._issue: MonitorIssue | None = None
        self._detail: str | None = None
        self._last_exit_at: datetime | None = None
        self._current_location: tuple[float, float] | None = None
        self._listeners: list[ExitListener] = []

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> MonitorState:
        return self._state

    @property
    def region(self) -> Region | None:
        return self._region

    @property
    def is_monitoring(self) -> bool:
        return self._state == MonitorState.ARMED

    @property
    def last_exit_at(self) -> datetime | None:
        return self._last_exit_at

    @property
    def current_location(self) -> tuple[float, float] | None:
        """Last (latitude, longitude) fix delivered by the platform."""
        return self._current_location

    def status(self) -> MonitorStatus:
        return MonitorStatus(
            state=self._state,
            region_identifier=self._region.identifier if self._region else None,
            issue=self._issue,
            detail=self._detail,
            last_exit_at=self._last_exit_at,
        )

    # =========================================================================
    # Arming
    # =========================================================================

    def start_monitoring(self, home: HomeLocation) -> MonitorStatus:
        """Register the home region, replacing any previous registration."""
        self.stop_monitoring()

        if not self._permissions.has_always_authorization:
            self._become_unavailable(
                MonitorIssue.AUTHORIZATION_INSUFFICIENT,
                "Always authorization required for geofencing",
            )
            return self.status()

        if not self._location.is_monitoring_available():
            self._become_unavailable(
                MonitorIssue.MONITORING_UNAVAILABLE,
                "Region monitoring not available on this device",
            )
            return self.status()

        region = home.region
        self._location.start_monitoring(region)
        self._region = region
        self._state = MonitorState.ARMED
        self._issue = None
        self._detail = None
        logger.info(
            f"Started monitoring region: {region.identifier} "
            f"(radius {region.radius:.0f}m)"
        )
        return self.status()

    def stop_monitoring(self) -> None:
        """Unregister the region. Safe in every state."""
        if self._region is not None:
            self._location.stop_monitoring(self._region)
            logger.info(f"Stopped monitoring region: {self._region.identifier}")
            self._region = None
        self._state = MonitorState.IDLE
        self._issue = None
        self._detail = None

    def _become_unavailable(self, issue: MonitorIssue, detail: str) -> None:
        self._state = MonitorState.UNAVAILABLE
        self._issue = issue
        self._detail = detail
        logger.warning(f"Geofence monitoring unavailable: {detail}")

    # =========================================================================
    # Subscribers
    # =========================================================================

    def subscribe(self, listener: ExitListener) -> Callable[[], None]:
        """Register an exit listener. Returns a function that unsubscribes."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # =========================================================================
    # Signal Handling
    # =========================================================================

    def handle_signal(self, signal: LocationSignal) -> None:
        """Apply one platform signal. Call only on the coordination context."""
        if isinstance(signal, RegionExited):
            self._on_region_exited(signal)
        elif isinstance(signal, MonitoringFailed):
            self._on_monitoring_failed(signal)
        elif isinstance(signal, AuthorizationChanged):
            self._permissions.update(signal.status)
        elif isinstance(signal, LocationUpdated):
            self._current_location = (signal.latitude, signal.longitude)
        elif isinstance(signal, RegionEntered):
            # Entry notifications are suppressed on the region
            logger.debug(f"Ignoring region entry: {signal.region_identifier}")
        else:
            logger.warning(f"Unknown location signal: {signal!r}")

    def _is_armed_for(self, region_identifier: str | None) -> bool:
        return (
            self._state == MonitorState.ARMED
            and self._region is not None
            and region_identifier == self._region.identifier
        )

    def _on_region_exited(self, signal: RegionExited) -> None:
        if not self._is_armed_for(signal.region_identifier):
            logger.debug(
                f"Ignoring exit for {signal.region_identifier} "
                f"(state={self._state.value})"
            )
            return

        now = self._clock()
        if self._last_exit_at is not None and now - self._last_exit_at < self._debounce:
            logger.debug(f"Ignoring repeated exit signal at {now.isoformat()}")
            return

        self._last_exit_at = now
        event = ExitDetected(region_identifier=signal.region_identifier, detected_at=now)
        logger.info(f"Exit detected for region: {signal.region_identifier}")
        for listener in list(self._listeners):
            listener(event)

    def _on_monitoring_failed(self, signal: MonitoringFailed) -> None:
        if self._state != MonitorState.ARMED or self._region is None:
            logger.debug(f"Ignoring monitoring failure while {self._state.value}")
            return
        if (
            signal.region_identifier is not None
            and signal.region_identifier != self._region.identifier
        ):
            logger.debug(f"Ignoring failure for {signal.region_identifier}")
            return

        logger.warning(
            f"Monitoring failed for {self._region.identifier}: {signal.reason}"
        )
        self._region = None
        self._state = MonitorState.ERROR
        self._issue = MonitorIssue.MONITORING_FAILED
        self._detail = f"Monitoring failed: {signal.reason}"
