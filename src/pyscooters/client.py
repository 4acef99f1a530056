"""High-level async client for the scooter feed aggregator."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from pyscooters._transport import HttpTransport
from pyscooters.aggregator import aggregate
from pyscooters.config import ScooterConfig
from pyscooters.exceptions import ScooterError
from pyscooters.geometry import LatLng
from pyscooters.ingestion.feeds import fetch_provider
from pyscooters.models.feed import FeedResult
from pyscooters.models.provider import ProviderDefinition
from pyscooters.models.query import AggregationQuery, AggregationResult
from pyscooters.providers.registry import PROVIDERS

_logger = logging.getLogger(__name__)


class ScooterClient:
    """Async client that queries live-fleet feeds.

    Usage::

        async with ScooterClient(config) as client:
            result = await client.nearby(47.376, 8.528, radius=300)
    """

    def __init__(
        self,
        config: ScooterConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        registry: Mapping[str, ProviderDefinition] = PROVIDERS,
    ) -> None:
        self._config = config or ScooterConfig()
        self._external_session = session is not None
        self._http_session = session
        self._registry = registry
        self._transport: HttpTransport | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ScooterClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    @property
    def config(self) -> ScooterConfig:
        return self._config

    @property
    def registry(self) -> Mapping[str, ProviderDefinition]:
        return self._registry

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise ScooterError("Client not initialized. Use 'async with ScooterClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def fetch_provider(self, provider: str) -> FeedResult:
        """Fetch a single registered provider, unfiltered."""
        transport = self._require_transport()
        definition = self._registry.get(provider.strip().lower())
        if definition is None:
            raise ScooterError(f"Unknown provider: {provider!r}")
        return await fetch_provider(provider.strip().lower(), definition, transport)

    async def aggregate(self, query: AggregationQuery) -> AggregationResult:
        """Run *query* across the selected providers."""
        transport = self._require_transport()
        return await aggregate(query, transport, self._registry)

    async def nearby(
        self,
        lat: float,
        lng: float,
        *,
        radius: float | None = None,
        min_battery: int = 0,
        providers: list[str] | None = None,
        destination: tuple[float, float] | None = None,
        corridor_width: float | None = None,
    ) -> AggregationResult:
        """Convenience wrapper building an :class:`AggregationQuery`."""
        query = AggregationQuery(
            origin=LatLng(lat=lat, lng=lng),
            destination=LatLng(lat=destination[0], lng=destination[1]) if destination else None,
            radius=self._config.default_radius if radius is None else radius,
            min_battery=min_battery,
            corridor_width=self._config.default_corridor_width if corridor_width is None else corridor_width,
            providers=tuple(providers) if providers is not None else None,
        )
        _logger.debug("Query %s", query)
        return await self.aggregate(query)
