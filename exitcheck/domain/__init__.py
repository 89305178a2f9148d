"""Domain layer - Core business logic and models."""

from .exceptions import (
    ExitCheckError,
    ItemNotFoundError,
    NoActiveSessionError,
    PersistenceError,
    SessionClosedError,
    SignalChannelFullError,
    ValidationError,
)
from .models import (
    ChecklistItem,
    ExitDetected,
    ExitEvent,
    ExitPatternAnalysis,
    ExitStats,
    HomeLocation,
    MonitorState,
    MonitorStatus,
    SessionOutcome,
    StreakState,
    TimeOfDay,
)

__all__ = [
    # Exceptions
    "ExitCheckError",
    "ValidationError",
    "ItemNotFoundError",
    "SessionClosedError",
    "NoActiveSessionError",
    "PersistenceError",
    "SignalChannelFullError",
    # Models
    "HomeLocation",
    "ChecklistItem",
    "ExitEvent",
    "StreakState",
    "ExitPatternAnalysis",
    "TimeOfDay",
    "MonitorState",
    "MonitorStatus",
    "ExitDetected",
    "SessionOutcome",
    "ExitStats",
]
