"""Home Zone Service - the single home location and its monitoring."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..models import DEFAULT_RADIUS_METERS, HomeLocation, MonitorState, MonitorStatus

if TYPE_CHECKING:
    from ...geofence.monitor import GeofenceMonitor
    from ...infra.store import Store

logger = logging.getLogger(__name__)


class HomeZoneService:
    """Keeps zero or one HomeLocation and re-arms the monitor on changes."""

    def __init__(
        self,
        store: Store,
        monitor: GeofenceMonitor,
        default_radius: float = DEFAULT_RADIUS_METERS,
    ) -> None:
        self._store = store
        self._monitor = monitor
        self._default_radius = default_radius

    def get_home(self) -> HomeLocation | None:
        """The home location, or None when none is set yet."""
        homes = self._store.fetch(HomeLocation, sort_key=lambda h: h.created_at)
        return homes[0] if homes else None

    def set_home(
        self,
        latitude: float,
        longitude: float,
        radius: float | None = None,
        name: str = "Home",
    ) -> HomeLocation:
        """Create the home location, or move the existing one."""
        home = self.get_home()
        if home is None:
            home = HomeLocation(
                latitude=latitude,
                longitude=longitude,
                radius=radius if radius is not None else self._default_radius,
                name=name,
            )
            self._store.insert(home)
            logger.info(f"Home location created ({home.radius:.0f}m)")
        else:
            home.update_coordinate(latitude, longitude)
            if radius is not None:
                home.update_radius(radius)
            home.name = name
            logger.info("Home location updated")

        self._store.save()
        self._rearm(home)
        return home

    def update_radius(self, radius: float) -> HomeLocation | None:
        """Change the home radius (clamped). Returns None if no home is set."""
        home = self.get_home()
        if home is None:
            return None
        home.update_radius(radius)
        self._store.save()
        self._rearm(home)
        return home

    def update_coordinate(self, latitude: float, longitude: float) -> HomeLocation | None:
        home = self.get_home()
        if home is None:
            return None
        home.update_coordinate(latitude, longitude)
        self._store.save()
        self._rearm(home)
        return home

    def use_current_location(self) -> HomeLocation | None:
        """Move home to the monitor's last known fix, if there is one."""
        fix = self._monitor.current_location
        if fix is None:
            logger.info("No location fix available yet")
            return None
        return self.update_coordinate(*fix)

    def start_monitoring(self) -> MonitorStatus | None:
        """Arm the monitor for the stored home. None if no home is set."""
        home = self.get_home()
        if home is None:
            return None
        return self._monitor.start_monitoring(home)

    def _rearm(self, home: HomeLocation) -> None:
        # A failed registration is re-armed too; IDLE and UNAVAILABLE wait for the host
        if self._monitor.state in (MonitorState.ARMED, MonitorState.ERROR):
            self._monitor.start_monitoring(home)
