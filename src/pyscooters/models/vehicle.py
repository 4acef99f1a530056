"""Canonical vehicle model."""

from __future__ import annotations

import math
from typing import Any

from pydantic import Field, field_validator

from pyscooters.geometry import LatLng
from pyscooters.models._base import ScooterBaseModel


class Vehicle(ScooterBaseModel):
    """A shared scooter or bike reported by one provider feed.

    Coordinates are required and must be finite; a raw record without
    them never becomes a ``Vehicle``.  Optional fields are ``None`` when
    the feed does not report them.
    """

    provider: str
    """Registry identifier of the reporting provider (e.g. ``"lime"``)."""
    lat: float = Field(ge=-90.0, le=90.0)
    """Latitude in decimal degrees (WGS84)."""
    lng: float = Field(ge=-180.0, le=180.0)
    """Longitude in decimal degrees (WGS84)."""
    battery: int | None = Field(default=None, ge=0, le=100)
    """Battery level in percent, ``None`` when unknown."""
    range_m: int | None = Field(default=None, ge=0)
    """Remaining range in meters, ``None`` when unknown."""
    vehicle_id: str | None = None
    """Provider-side identifier; only unique within one provider."""
    deep_link: str | None = None
    """URI opening the provider's rental flow."""
    distance_m: float = Field(default=0.0, ge=0.0)
    """Distance from the query origin; set by the aggregator."""

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def _require_finite(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("coordinate must be a number")
        if isinstance(value, (int, float)) and not math.isfinite(value):
            raise ValueError("coordinate must be finite")
        return value

    @property
    def position(self) -> LatLng:
        return LatLng(lat=self.lat, lng=self.lng)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the public JSON field names."""
        return self.model_dump(mode="json")
