"""Domain models for ExitCheck.

This package provides all domain models, organized by concern:
- enums: AuthorizationStatus, MonitorState, MonitorIssue, TimeOfDay
- home: HomeLocation, Region
- checklist: ChecklistItem
- exit_event: ExitEvent
- streak: StreakState
- pattern: ExitPatternAnalysis
- signals: AuthorizationChanged, RegionEntered, RegionExited, ...
- results: ExitDetected, MonitorStatus, SessionOutcome, ExitStats
"""

from .checklist import ChecklistItem
from .enums import AuthorizationStatus, MonitorIssue, MonitorState, TimeOfDay
from .exit_event import ExitEvent
from .home import (
    DEFAULT_RADIUS_METERS,
    MAX_RADIUS_METERS,
    MIN_RADIUS_METERS,
    HomeLocation,
    Region,
    clamp_radius,
)
from .pattern import ExitPatternAnalysis
from .results import (
    ExitDetected,
    ExitStats,
    ForgottenItemCount,
    MonitorStatus,
    SessionOutcome,
)
from .signals import (
    AuthorizationChanged,
    LocationSignal,
    LocationUpdated,
    MonitoringFailed,
    RegionEntered,
    RegionExited,
)
from .streak import StreakState

__all__ = [
    # Enums
    "AuthorizationStatus",
    "MonitorState",
    "MonitorIssue",
    "TimeOfDay",
    # Entities
    "HomeLocation",
    "Region",
    "ChecklistItem",
    "ExitEvent",
    "StreakState",
    "clamp_radius",
    "MIN_RADIUS_METERS",
    "MAX_RADIUS_METERS",
    "DEFAULT_RADIUS_METERS",
    # Derived
    "ExitPatternAnalysis",
    # Signals
    "AuthorizationChanged",
    "RegionEntered",
    "RegionExited",
    "MonitoringFailed",
    "LocationUpdated",
    "LocationSignal",
    # Results
    "ExitDetected",
    "MonitorStatus",
    "SessionOutcome",
    "ExitStats",
    "ForgottenItemCount",
]
