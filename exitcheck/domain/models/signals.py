"""Location signals delivered by the platform.

Each signal is a small tagged model; the coordination context drains them
from the signal channel and dispatches on type.
"""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel

from .enums import AuthorizationStatus


class AuthorizationChanged(BaseModel):
    kind: Literal["authorization_changed"] = "authorization_changed"
    status: AuthorizationStatus


class RegionEntered(BaseModel):
    kind: Literal["region_entered"] = "region_entered"
    region_identifier: str


class RegionExited(BaseModel):
    kind: Literal["region_exited"] = "region_exited"
    region_identifier: str


class MonitoringFailed(BaseModel):
    kind: Literal["monitoring_failed"] = "monitoring_failed"
    region_identifier: str | None = None
    reason: str


class LocationUpdated(BaseModel):
    kind: Literal["location_updated"] = "location_updated"
    latitude: float
    longitude: float


LocationSignal = Union[
    AuthorizationChanged,
    RegionEntered,
    RegionExited,
    MonitoringFailed,
    LocationUpdated,
]
