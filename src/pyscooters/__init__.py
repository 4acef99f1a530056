"""pyscooters - Async aggregator for shared micromobility live-fleet feeds."""

from pyscooters._constants import PACKAGE_VERSION as __version__
from pyscooters.aggregator import aggregate, filter_and_rank
from pyscooters.client import ScooterClient
from pyscooters.config import ScooterConfig
from pyscooters.exceptions import (
    ScooterConfigError,
    ScooterError,
    ScooterFeedError,
    ScooterTransportError,
)
from pyscooters.geometry import LatLng, distance_to_segment_m, great_circle_distance_m
from pyscooters.ingestion.feeds import fetch_provider
from pyscooters.models import (
    AggregationQuery,
    AggregationResult,
    BoundingBox,
    FeedResult,
    FeedStatus,
    ProviderDefinition,
    SchemaVersion,
    Vehicle,
)
from pyscooters.providers import PROVIDERS, resolve_providers

__all__ = [
    "__version__",
    "PROVIDERS",
    "AggregationQuery",
    "AggregationResult",
    "BoundingBox",
    "FeedResult",
    "FeedStatus",
    "LatLng",
    "ProviderDefinition",
    "SchemaVersion",
    "ScooterClient",
    "ScooterConfig",
    "ScooterConfigError",
    "ScooterError",
    "ScooterFeedError",
    "ScooterTransportError",
    "Vehicle",
    "aggregate",
    "distance_to_segment_m",
    "fetch_provider",
    "filter_and_rank",
    "great_circle_distance_m",
    "resolve_providers",
]
