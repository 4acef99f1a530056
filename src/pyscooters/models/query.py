"""Aggregation request and response models."""

from __future__ import annotations

import math
from typing import Any

from pydantic import Field, field_validator

from pyscooters._constants import DEFAULT_CORRIDOR_WIDTH_M, DEFAULT_RADIUS_M
from pyscooters.geometry import LatLng
from pyscooters.models._base import ScooterBaseModel
from pyscooters.models.feed import FeedResult
from pyscooters.models.vehicle import Vehicle


class AggregationQuery(ScooterBaseModel):
    """One "what is near me" question.

    Parameters
    ----------
    origin : LatLng
        Search center; distances are measured from here.
    destination : LatLng or None
        When set, only vehicles within ``corridor_width`` of the straight
        origin-destination segment are kept.
    radius : float
        Maximum distance from ``origin`` in meters.
    min_battery : int
        Minimum battery percent.  ``0`` disables battery filtering, so
        vehicles with unknown battery are kept.
    corridor_width : float
        Corridor half-width in meters.  Ignored without a destination.
    providers : tuple of str or None
        Provider allowlist; ``None`` queries every registered provider.
    """

    origin: LatLng
    destination: LatLng | None = None
    radius: float = DEFAULT_RADIUS_M
    min_battery: int = Field(default=0, ge=0, le=100)
    corridor_width: float = Field(default=DEFAULT_CORRIDOR_WIDTH_M, ge=0.0)
    providers: tuple[str, ...] | None = None

    @field_validator("origin", "destination")
    @classmethod
    def _finite_point(cls, value: LatLng | None) -> LatLng | None:
        if value is not None and not value.is_finite:
            raise ValueError("coordinates must be finite")
        return value

    @field_validator("radius", "corridor_width")
    @classmethod
    def _finite_distance(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("distance must be finite")
        return value

    @field_validator("providers")
    @classmethod
    def _normalize_providers(cls, value: tuple[str, ...] | None) -> tuple[str, ...] | None:
        if value is None:
            return None
        return tuple(p.strip().lower() for p in value if p.strip())


class AggregationResult(ScooterBaseModel):
    """Filtered vehicles sorted by distance, plus per-provider counts.

    ``providers`` only has keys for providers present in ``vehicles``,
    so its values always sum to ``len(vehicles)``.
    """

    vehicles: tuple[Vehicle, ...] = ()
    providers: dict[str, int] = Field(default_factory=dict)
    feeds: tuple[FeedResult, ...] = ()
    """Raw per-provider fetch outcomes, for diagnostics only."""

    def to_payload(self, *, include_diagnostics: bool = False) -> dict[str, Any]:
        """Serialize to the public response document."""
        payload: dict[str, Any] = {
            "vehicles": [v.to_dict() for v in self.vehicles],
            "providers": dict(self.providers),
        }
        if include_diagnostics:
            payload["diagnostics"] = {feed.provider: feed.diagnostics() for feed in self.feeds}
        return payload
