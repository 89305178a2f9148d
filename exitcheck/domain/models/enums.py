"""Enumeration types for ExitCheck domain models."""

from __future__ import annotations

from enum import Enum


class AuthorizationStatus(str, Enum):
    """Location authorization granted to the app by the platform."""

    NOT_DETERMINED = "not_determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED_ALWAYS = "authorized_always"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"

    @property
    def description(self) -> str:
        """Human-readable label for settings screens."""
        return {
            AuthorizationStatus.NOT_DETERMINED: "Not Determined",
            AuthorizationStatus.RESTRICTED: "Restricted",
            AuthorizationStatus.DENIED: "Denied",
            AuthorizationStatus.AUTHORIZED_ALWAYS: "Always",
            AuthorizationStatus.AUTHORIZED_WHEN_IN_USE: "When In Use",
        }[self]


class MonitorState(str, Enum):
    """Lifecycle state of the geofence monitor.

    IDLE: no region registered
    ARMED: region registered, waiting for a transition
    UNAVAILABLE: capability missing or authorization insufficient
    ERROR: an armed region failed and must be re-armed explicitly
    """

    IDLE = "idle"
    ARMED = "armed"
    UNAVAILABLE = "unavailable"
    ERROR = "error"


class MonitorIssue(str, Enum):
    """Why the monitor is not armed."""

    AUTHORIZATION_INSUFFICIENT = "authorization_insufficient"  # user can grant
    MONITORING_UNAVAILABLE = "monitoring_unavailable"  # device can't, hide feature
    MONITORING_FAILED = "monitoring_failed"  # re-arm to recover


class TimeOfDay(str, Enum):
    """Coarse time-of-day bucket used by pattern analysis."""

    MORNING = "morning"  # 05-12
    AFTERNOON = "afternoon"  # 12-17
    EVENING = "evening"  # 17-21
    NIGHT = "night"

    @classmethod
    def from_hour(cls, hour: int) -> TimeOfDay:
        if 5 <= hour < 12:
            return cls.MORNING
        if 12 <= hour < 17:
            return cls.AFTERNOON
        if 17 <= hour < 21:
            return cls.EVENING
        return cls.NIGHT
