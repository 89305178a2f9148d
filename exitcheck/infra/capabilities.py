"""Platform capabilities the core talks to.

These are implemented by the host application (or by fakes in tests).
Results of authorization requests and region transitions never come back
as return values; they arrive later as signals on the signal channel.
"""

from __future__ import annotations

from typing import Protocol

from ..domain.models import AuthorizationStatus, Region


class LocationService(Protocol):
    def authorization_status(self) -> AuthorizationStatus: ...

    def is_monitoring_available(self) -> bool: ...

    def request_when_in_use_authorization(self) -> None: ...

    def request_always_authorization(self) -> None: ...

    def request_location(self) -> None: ...

    def start_monitoring(self, region: Region) -> None: ...

    def stop_monitoring(self, region: Region) -> None: ...


class NotificationService(Protocol):
    def schedule_exit_prompt(self) -> None:
        """Schedule the short-delay 'Leaving home?' local prompt."""
        ...
