"""Checklist item model."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


class ChecklistItem(BaseModel):
    """Something the user wants to have with them when leaving home."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str = Field(..., description="Item title, also the pattern-matching key")
    emoji: str = Field(default="", description="Decorative emoji")
    order: int = Field(default=0, description="Display and read-aloud position")
    is_active: bool = Field(default=True)
    category: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    forgotten_count: int = Field(default=0, ge=0)
    last_forgotten_at: datetime | None = Field(default=None)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title cannot be empty")
        return value

    @property
    def display_text(self) -> str:
        if not self.emoji:
            return self.title
        return f"{self.emoji} {self.title}"

    def mark_forgotten(self, at: datetime | None = None) -> None:
        """Record that this item was left unchecked on a rushed exit."""
        self.forgotten_count += 1
        self.last_forgotten_at = at or datetime.now(timezone.utc)
