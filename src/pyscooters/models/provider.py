"""Static provider definitions."""

from __future__ import annotations

import enum

from pydantic import Field, model_validator

from pyscooters.geometry import LatLng
from pyscooters.models._base import ScooterBaseModel


class SchemaVersion(enum.Enum):
    """Payload layout of a provider feed.

    Each member names the JSON path holding the vehicle array.
    """

    GBFS_V2 = ("data", "bikes")
    """GBFS 2.x ``free_bike_status``: ``{"data": {"bikes": [...]}}``."""
    GBFS_V3 = ("data", "vehicles")
    """GBFS 3.x ``vehicle_status``: ``{"data": {"vehicles": [...]}}``."""

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self.value)

    @property
    def label(self) -> str:
        return self.name.lower()


class BoundingBox(ScooterBaseModel):
    """Inclusive latitude/longitude box."""

    lat_min: float
    lat_max: float
    lng_min: float
    lng_max: float

    @model_validator(mode="after")
    def _check_order(self) -> BoundingBox:
        if self.lat_min > self.lat_max or self.lng_min > self.lng_max:
            raise ValueError("bounding box minimum exceeds maximum")
        return self

    def contains(self, point: LatLng) -> bool:
        return self.lat_min <= point.lat <= self.lat_max and self.lng_min <= point.lng <= self.lng_max


class ProviderDefinition(ScooterBaseModel):
    """How to reach and read one provider's live feed.

    Parameters
    ----------
    url : str
        Unauthenticated GET endpoint returning the feed document.
    schema_version : SchemaVersion
        Selects the JSON path of the vehicle array.
    bounding_box : BoundingBox or None
        Records outside this box are discarded.  Used for feeds that
        occasionally report vehicles outside their service area.
    name : str
        Human-readable provider name.
    color : str
        Brand color used by map clients.
    initial : str
        Short marker label used by map clients.
    """

    url: str
    schema_version: SchemaVersion = SchemaVersion.GBFS_V2
    bounding_box: BoundingBox | None = None
    name: str = ""
    color: str = "#888888"
    initial: str = Field(default="", max_length=3)
