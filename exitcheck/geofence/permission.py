"""Location permission tracking."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..domain.models import AuthorizationStatus

if TYPE_CHECKING:
    from ..infra.capabilities import LocationService

logger = logging.getLogger(__name__)

StatusListener = Callable[[AuthorizationStatus], None]


class PermissionGate:
    """Tracks the location authorization state.

    Requests are fire-and-forget: the new status is applied when an
    AuthorizationChanged signal is drained on the coordination context.
    """

    def __init__(self, location_service: LocationService) -> None:
        self._location = location_service
        self._status = location_service.authorization_status()
        self._listeners: list[StatusListener] = []

    @property
    def status(self) -> AuthorizationStatus:
        return self._status

    @property
    def has_always_authorization(self) -> bool:
        return self._status == AuthorizationStatus.AUTHORIZED_ALWAYS

    @property
    def has_any_authorization(self) -> bool:
        return self._status in (
            AuthorizationStatus.AUTHORIZED_ALWAYS,
            AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
        )

    def request_when_in_use(self) -> None:
        self._location.request_when_in_use_authorization()

    def request_always(self) -> None:
        self._location.request_always_authorization()

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Register a status listener. Returns a function that unsubscribes."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, status: AuthorizationStatus) -> None:
        """Apply a status delivered by the platform."""
        if status == self._status:
            return
        logger.info(
            f"Authorization status changed: {self._status.description} -> "
            f"{status.description}"
        )
        self._status = status
        for listener in list(self._listeners):
            listener(status)
