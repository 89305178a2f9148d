"""Home zone models."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_RADIUS_METERS = 50.0
MAX_RADIUS_METERS = 500.0
DEFAULT_RADIUS_METERS = 100.0

REGION_ID_PREFIX = "home_geofence_"


def clamp_radius(radius: float) -> float:
    """Clamp a geofence radius to the supported range."""
    return max(MIN_RADIUS_METERS, min(radius, MAX_RADIUS_METERS))


class Region(BaseModel):
    """A circular region registered with the location service."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., description="Stable region identifier")
    latitude: float
    longitude: float
    radius: float = Field(..., description="Radius in meters")
    notify_on_exit: bool = True
    notify_on_entry: bool = False


class HomeLocation(BaseModel):
    """The single home zone whose exit triggers the checklist.

    Radius is clamped to [50, 500] meters on construction and on every
    assignment.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    latitude: float
    longitude: float
    radius: float = Field(default=DEFAULT_RADIUS_METERS)
    name: str = Field(default="Home")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("radius")
    @classmethod
    def _clamp_radius(cls, value: float) -> float:
        return clamp_radius(value)

    @property
    def region_identifier(self) -> str:
        return f"{REGION_ID_PREFIX}{self.id}"

    @property
    def region(self) -> Region:
        """Exit-only region derived from this location."""
        return Region(
            identifier=self.region_identifier,
            latitude=self.latitude,
            longitude=self.longitude,
            radius=self.radius,
        )

    def update_coordinate(
        self, latitude: float, longitude: float, at: datetime | None = None
    ) -> None:
        self.latitude = latitude
        self.longitude = longitude
        self.updated_at = at or datetime.now(timezone.utc)

    def update_radius(self, radius: float, at: datetime | None = None) -> None:
        self.radius = radius
        self.updated_at = at or datetime.now(timezone.utc)
