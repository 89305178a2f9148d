"""Result models for service operations."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .enums import MonitorIssue, MonitorState
from .exit_event import ExitEvent
from .streak import StreakState


class ExitDetected(BaseModel):
    """Emitted once per physical exit from the armed home region."""

    region_identifier: str
    detected_at: datetime


class MonitorStatus(BaseModel):
    """Snapshot of the geofence monitor."""

    state: MonitorState
    region_identifier: str | None = None
    issue: MonitorIssue | None = None
    detail: str | None = None
    last_exit_at: datetime | None = None

    @property
    def is_monitoring(self) -> bool:
        return self.state == MonitorState.ARMED


class SessionOutcome(BaseModel):
    """What closing an exit session produced."""

    event: ExitEvent
    streak: StreakState
    milestone_message: str | None = None
    celebration_message: str | None = None
    ask_for_feedback: bool = False


class ForgottenItemCount(BaseModel):
    """An item title with its lifetime forgotten counter."""

    title: str
    forgotten_count: int


class ExitStats(BaseModel):
    """Quick statistics over the exit history."""

    total_exits: int
    perfect_exits: int
    rushed_exits: int
    success_rate: float = Field(..., description="Perfect exits in percent (0-100)")
    most_forgotten: list[ForgottenItemCount] = Field(default_factory=list)
