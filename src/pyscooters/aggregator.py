"""Fan out to provider feeds and rank the merged vehicles.

The fetch phase is a fixed fan-out/fan-in barrier: every selected
provider is fetched concurrently and nothing is filtered until all of
them have answered or failed.  Everything after the barrier is plain
synchronous work on immutable tuples.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from collections.abc import Iterable, Mapping

from pyscooters._constants import CORRIDOR_TOLERANCE_M
from pyscooters._transport import Transport
from pyscooters.geometry import distance_to_segment_m, great_circle_distance_m
from pyscooters.ingestion.feeds import fetch_provider
from pyscooters.models._base import round_half_up
from pyscooters.models.feed import FeedResult
from pyscooters.models.provider import ProviderDefinition
from pyscooters.models.query import AggregationQuery, AggregationResult
from pyscooters.models.vehicle import Vehicle
from pyscooters.providers.registry import PROVIDERS, resolve_providers

_logger = logging.getLogger(__name__)


def with_distances(vehicles: Iterable[Vehicle], query: AggregationQuery) -> tuple[Vehicle, ...]:
    """Return copies of *vehicles* with ``distance_m`` measured from the origin."""
    return tuple(
        v.model_copy(update={"distance_m": round_half_up(great_circle_distance_m(query.origin, v.position), 1)})
        for v in vehicles
    )


def _passes_battery(vehicle: Vehicle, min_battery: int) -> bool:
    if min_battery <= 0:
        return True
    return vehicle.battery is not None and vehicle.battery >= min_battery


def _in_corridor(vehicle: Vehicle, query: AggregationQuery) -> bool:
    if query.destination is None:
        return True
    offset = distance_to_segment_m(vehicle.position, query.origin, query.destination)
    return offset <= query.corridor_width + CORRIDOR_TOLERANCE_M


def filter_and_rank(vehicles: Iterable[Vehicle], query: AggregationQuery) -> tuple[Vehicle, ...]:
    """Measure, filter and sort *vehicles* for *query*.

    Radius, battery and corridor filters all apply.  The sort is stable,
    so vehicles at equal distance keep their input order.
    """
    measured = with_distances(vehicles, query)
    kept = [
        v
        for v in measured
        if v.distance_m <= query.radius and _passes_battery(v, query.min_battery) and _in_corridor(v, query)
    ]
    kept.sort(key=lambda v: v.distance_m)
    return tuple(kept)


def count_by_provider(vehicles: Iterable[Vehicle]) -> dict[str, int]:
    return dict(Counter(v.provider for v in vehicles))


async def fetch_all(
    targets: list[tuple[str, ProviderDefinition]],
    transport: Transport,
) -> tuple[FeedResult, ...]:
    """Fetch every target concurrently and wait for all of them.

    An exception escaping a fetch task is turned into a failed
    :class:`FeedResult`; it never cancels or fails the other fetches.
    """
    outcomes = await asyncio.gather(
        *(fetch_provider(provider, definition, transport) for provider, definition in targets),
        return_exceptions=True,
    )

    results: list[FeedResult] = []
    for (provider, _definition), outcome in zip(targets, outcomes, strict=True):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            _logger.warning("%s: fetch crashed: %r", provider, outcome)
            results.append(FeedResult.failed(provider, repr(outcome)))
            continue
        if not outcome.ok:
            _logger.warning("%s: feed unavailable: %s", provider, outcome.error)
        results.append(outcome)
    return tuple(results)


async def aggregate(
    query: AggregationQuery,
    transport: Transport,
    registry: Mapping[str, ProviderDefinition] = PROVIDERS,
) -> AggregationResult:
    """Answer *query* from the live feeds of the selected providers."""
    targets = resolve_providers(query.providers, registry)
    if not targets:
        return AggregationResult()

    feeds = await fetch_all(targets, transport)
    merged = [vehicle for feed in feeds for vehicle in feed.vehicles]
    vehicles = filter_and_rank(merged, query)

    _logger.debug(
        "Aggregated %d of %d vehicles from %d providers",
        len(vehicles),
        len(merged),
        len(feeds),
    )
    return AggregationResult(
        vehicles=vehicles,
        providers=count_by_provider(vehicles),
        feeds=feeds,
    )
