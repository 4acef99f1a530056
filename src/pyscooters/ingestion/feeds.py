"""Per-provider feed fetch + normalization."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping

from pyscooters._transport import Transport
from pyscooters.exceptions import ScooterError, ScooterFeedError
from pyscooters.ingestion.normalize import normalize_feed
from pyscooters.models.feed import FeedResult
from pyscooters.models.provider import ProviderDefinition

_logger = logging.getLogger(__name__)


async def fetch_provider(
    provider: str,
    definition: ProviderDefinition,
    transport: Transport,
) -> FeedResult:
    """Fetch one provider feed and normalize it into vehicles.

    Never raises for upstream problems: a timeout, bad status, or
    unreadable document produces a failed :class:`FeedResult` with no
    vehicles.  ``distance_m`` is left at its placeholder; only the
    aggregator knows the query origin.
    """
    started = time.monotonic()
    try:
        payload = await transport.get_json(definition.url)
        if not isinstance(payload, Mapping):
            raise ScooterFeedError(
                f"{provider} feed is a {type(payload).__name__}, expected an object",
                provider=provider,
            )
    except ScooterError as exc:
        return FeedResult.failed(provider, str(exc), elapsed=time.monotonic() - started)

    vehicles, dropped = normalize_feed(
        provider,
        payload,
        definition.schema_version,
        definition.bounding_box,
    )
    elapsed = time.monotonic() - started
    _logger.debug("%s: %d vehicles in %.2fs", provider, len(vehicles), elapsed)
    return FeedResult(provider=provider, vehicles=vehicles, dropped=dropped, elapsed=elapsed)
