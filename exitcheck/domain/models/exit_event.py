"""Exit event model - the append-only record of each departure."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .enums import TimeOfDay


class ExitEvent(BaseModel):
    """Outcome of one checklist session.

    day_of_week (ISO, Monday=1) and hour_of_day are captured when the event
    is created and are never recomputed from the timestamp.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(..., description="Creation time")
    was_complete: bool = Field(
        ..., description="Every active item checked and closed via 'all good'"
    )
    dismissed_early: bool = Field(
        default=False, description="Closed via the 'I'm rushing' path"
    )
    forgotten_items: tuple[str, ...] = Field(
        default=(), description="Titles left unchecked at close"
    )
    day_of_week: int = Field(..., ge=1, le=7)
    hour_of_day: int = Field(..., ge=0, le=23)

    @classmethod
    def create(
        cls,
        timestamp: datetime,
        was_complete: bool,
        dismissed_early: bool = False,
        forgotten_items: list[str] | None = None,
    ) -> ExitEvent:
        """Create an event, snapshotting the calendar fields of timestamp."""
        return cls(
            timestamp=timestamp,
            was_complete=was_complete,
            dismissed_early=dismissed_early,
            forgotten_items=tuple(forgotten_items or ()),
            day_of_week=timestamp.isoweekday(),
            hour_of_day=timestamp.hour,
        )

    @property
    def is_perfect(self) -> bool:
        return self.was_complete and not self.dismissed_early

    @property
    def time_of_day(self) -> TimeOfDay:
        return TimeOfDay.from_hour(self.hour_of_day)

    def is_weekday(self, weekend_days: tuple[int, ...] = (6, 7)) -> bool:
        return self.day_of_week not in weekend_days
