from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from feed_fixtures import ORIGIN, FakeFeedBackend, feed_url, offset_point

from pyscooters.geometry import LatLng
from pyscooters.models.provider import ProviderDefinition, SchemaVersion


@pytest.fixture
def backend() -> FakeFeedBackend:
    return FakeFeedBackend()


@pytest.fixture
def patched_transport(monkeypatch: pytest.MonkeyPatch, backend: FakeFeedBackend) -> FakeFeedBackend:
    """Route every `HttpTransport` GET to the in-memory *backend*."""

    async def fake_get_json(_self: Any, url: str) -> Any:
        return await backend.get_json(url)

    monkeypatch.setattr("pyscooters._transport.HttpTransport.get_json", fake_get_json)
    return backend


@pytest.fixture
def registry() -> dict[str, ProviderDefinition]:
    return {
        "alpha": ProviderDefinition(url=feed_url("alpha"), schema_version=SchemaVersion.GBFS_V2, name="Alpha"),
        "beta": ProviderDefinition(url=feed_url("beta"), schema_version=SchemaVersion.GBFS_V3, name="Beta"),
    }


@pytest.fixture
def point() -> Callable[..., LatLng]:
    def _point(*, north_m: float = 0.0, east_m: float = 0.0, start: LatLng = ORIGIN) -> LatLng:
        return offset_point(start, north_m=north_m, east_m=east_m)

    return _point
