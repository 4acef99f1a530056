"""Data models for pyscooters."""

from pyscooters.models._base import ScooterBaseModel, round_half_up
from pyscooters.models.feed import FeedResult, FeedStatus
from pyscooters.models.provider import BoundingBox, ProviderDefinition, SchemaVersion
from pyscooters.models.query import AggregationQuery, AggregationResult
from pyscooters.models.vehicle import Vehicle

__all__ = [
    "AggregationQuery",
    "AggregationResult",
    "BoundingBox",
    "FeedResult",
    "FeedStatus",
    "ProviderDefinition",
    "SchemaVersion",
    "ScooterBaseModel",
    "Vehicle",
    "round_half_up",
]
