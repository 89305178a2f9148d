"""Infrastructure layer - storage and platform capability interfaces."""

from .capabilities import LocationService, NotificationService
from .database import DatabaseConnection
from .repositories import KuzuStore
from .store import InMemoryStore, Store
from .streak_state import (
    InMemoryStreakStateRepository,
    JsonStreakStateRepository,
    StreakStateRepository,
)

__all__ = [
    "DatabaseConnection",
    "KuzuStore",
    "InMemoryStore",
    "Store",
    "StreakStateRepository",
    "InMemoryStreakStateRepository",
    "JsonStreakStateRepository",
    "LocationService",
    "NotificationService",
]
