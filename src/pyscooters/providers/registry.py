"""Registry of known live-fleet feeds.

Adding a provider whose feed follows one of the :class:`SchemaVersion`
layouts only needs a new entry in :data:`PROVIDERS`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from pyscooters.models.provider import BoundingBox, ProviderDefinition, SchemaVersion

#: Voi's Swiss feed covers more than Zurich and occasionally leaks
#: vehicles from other cities; keep only the Zurich service area.
ZURICH_BBOX = BoundingBox(lat_min=47.32, lat_max=47.43, lng_min=8.45, lng_max=8.60)

PROVIDERS: Mapping[str, ProviderDefinition] = MappingProxyType(
    {
        "bolt": ProviderDefinition(
            url="https://api.mobidata-bw.de/sharing/gbfs/v3/bolt_zurich/vehicle_status",
            schema_version=SchemaVersion.GBFS_V3,
            name="Bolt",
            color="#00cc44",
            initial="B",
        ),
        "bird": ProviderDefinition(
            url="https://mds.bird.co/gbfs/v2/public/zurich/free_bike_status.json",
            schema_version=SchemaVersion.GBFS_V2,
            name="Bird",
            color="#222222",
            initial="Bi",
        ),
        "dott": ProviderDefinition(
            url="https://gbfs.api.ridedott.com/public/v2/zurich/free_bike_status.json",
            schema_version=SchemaVersion.GBFS_V2,
            name="Dott",
            color="#ff6600",
            initial="D",
        ),
        "lime": ProviderDefinition(
            url="https://api.mobidata-bw.de/sharing/gbfs/v2/lime_zurich/free_bike_status",
            schema_version=SchemaVersion.GBFS_V2,
            name="Lime",
            color="#32cd32",
            initial="L",
        ),
        "voi": ProviderDefinition(
            url="https://api.mobidata-bw.de/sharing/gbfs/v2/voi_ch/free_bike_status",
            schema_version=SchemaVersion.GBFS_V2,
            bounding_box=ZURICH_BBOX,
            name="Voi",
            color="#ff1493",
            initial="V",
        ),
    }
)


def resolve_providers(
    requested: Iterable[str] | None,
    registry: Mapping[str, ProviderDefinition] = PROVIDERS,
) -> list[tuple[str, ProviderDefinition]]:
    """Select the providers a query should fan out to.

    ``None`` selects every registered provider.  Otherwise identifiers
    are matched case-insensitively; unknown ones are ignored.  The result
    is always in registry order with no duplicates.
    """
    if requested is None:
        return list(registry.items())

    wanted = {str(p).strip().lower() for p in requested}
    return [(key, definition) for key, definition in registry.items() if key.lower() in wanted]
