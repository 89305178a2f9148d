"""Streak state model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class StreakState(BaseModel):
    """Consecutive-day perfect exit counter."""

    current_streak: int = Field(default=0, ge=0)
    last_perfect_exit_at: datetime | None = Field(
        default=None, description="Time of the latest perfect exit"
    )
    total_perfect_exits: int = Field(default=0, ge=0)
