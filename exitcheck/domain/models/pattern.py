"""Forgotten-item pattern models (derived, never persisted)."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .enums import TimeOfDay


class ExitPatternAnalysis(BaseModel):
    """How and when a single checklist item tends to be forgotten."""

    item_title: str
    forgotten_count: int = Field(..., ge=2)
    common_days: list[int] = Field(
        default_factory=list, description="Up to 2 ISO weekdays, most frequent first"
    )
    common_times: list[TimeOfDay] = Field(
        default_factory=list, description="Up to 2 time-of-day buckets"
    )
    suggestion: str | None = Field(None, description="Actionable hint for the user")
