"""Domain Services Package.

This package contains the business logic layer for ExitCheck.

Main components:
- ExitSessionOrchestrator: Session lifecycle from exit to recorded outcome
- ExitEventRecorder: Persists exit events
- StreakTracker: Consecutive-day perfect exit streak
- PatternAnalyzer: Forgotten-item patterns and suggestions
- ExitStatsService: Quick statistics
- HomeZoneService: Home location and monitoring
- ChecklistService: Checklist item editing
"""

from .checklist import ChecklistService
from .home import HomeZoneService
from .pattern import PatternAnalyzer
from .recorder import ExitEventRecorder
from .session import ExitSession, ExitSessionOrchestrator
from .stats import ExitStatsService
from .streak import StreakTracker, milestone_message_for

__all__ = [
    "ExitSessionOrchestrator",
    "ExitSession",
    "ExitEventRecorder",
    "StreakTracker",
    "milestone_message_for",
    "PatternAnalyzer",
    "ExitStatsService",
    "HomeZoneService",
    "ChecklistService",
]
