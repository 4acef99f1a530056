from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer
from feed_fixtures import FakeFeedBackend, feed_url, gbfs_v2, gbfs_v3

from pyscooters._transport import HttpTransport
from pyscooters.config import ScooterConfig
from pyscooters.exceptions import ScooterTransportError
from pyscooters.ingestion.feeds import fetch_provider
from pyscooters.models.feed import FeedStatus
from pyscooters.models.provider import ProviderDefinition, SchemaVersion
from pyscooters.providers.registry import ZURICH_BBOX

V2 = ProviderDefinition(url=feed_url("alpha"), schema_version=SchemaVersion.GBFS_V2)
V3 = ProviderDefinition(url=feed_url("beta"), schema_version=SchemaVersion.GBFS_V3)


@pytest.mark.asyncio
async def test_v2_feed_is_normalized(backend: FakeFeedBackend) -> None:
    backend.feeds[V2.url] = gbfs_v2(
        {"bike_id": "a1", "lat": 47.37, "lon": 8.53, "current_fuel_percent": 0.5},
        {"bike_id": "a2", "lat": 47.38, "lon": 8.54},
    )

    result = await fetch_provider("alpha", V2, backend)

    assert result.status is FeedStatus.OK
    assert [v.vehicle_id for v in result.vehicles] == ["a1", "a2"]
    assert result.vehicles[0].battery == 50
    assert all(v.provider == "alpha" for v in result.vehicles)
    assert all(v.distance_m == 0.0 for v in result.vehicles)
    assert backend.calls == [V2.url]


@pytest.mark.asyncio
async def test_v3_feed_is_normalized(backend: FakeFeedBackend) -> None:
    backend.feeds[V3.url] = gbfs_v3({"vehicle_id": "b1", "lat": 47.37, "lng": 8.53, "current_range_meters": 9000})

    result = await fetch_provider("beta", V3, backend)

    assert result.ok
    assert len(result.vehicles) == 1
    assert result.vehicles[0].vehicle_id == "b1"
    assert result.vehicles[0].range_m == 9000


@pytest.mark.asyncio
async def test_bad_records_are_dropped_individually(backend: FakeFeedBackend) -> None:
    backend.feeds[V2.url] = gbfs_v2(
        {"bike_id": "ok", "lat": 47.37, "lon": 8.53},
        {"bike_id": "no-lat", "lon": 8.53},
        {"bike_id": "nan", "lat": "NaN", "lon": 8.53},
    )

    result = await fetch_provider("alpha", V2, backend)

    assert result.ok
    assert [v.vehicle_id for v in result.vehicles] == ["ok"]
    assert result.dropped == 2


@pytest.mark.asyncio
async def test_bounding_box_from_definition(backend: FakeFeedBackend) -> None:
    definition = ProviderDefinition(url=feed_url("voi"), bounding_box=ZURICH_BBOX)
    backend.feeds[definition.url] = gbfs_v2(
        {"bike_id": "zurich", "lat": 47.37, "lon": 8.53},
        {"bike_id": "basel", "lat": 47.56, "lon": 7.59},
    )

    result = await fetch_provider("voi", definition, backend)

    assert [v.vehicle_id for v in result.vehicles] == ["zurich"]


@pytest.mark.asyncio
async def test_transport_error_yields_empty_failed_result(backend: FakeFeedBackend) -> None:
    backend.feeds[V2.url] = ScooterTransportError("timed out", url=V2.url)

    result = await fetch_provider("alpha", V2, backend)

    assert result.status is FeedStatus.FAILED
    assert result.vehicles == ()
    assert result.error == "timed out"


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [[1, 2, 3], "oops", None, 42])
async def test_non_object_document_yields_failed_result(backend: FakeFeedBackend, payload: object) -> None:
    backend.feeds[V2.url] = payload

    result = await fetch_provider("alpha", V2, backend)

    assert result.status is FeedStatus.FAILED
    assert result.vehicles == ()


@pytest.mark.asyncio
async def test_document_without_vehicle_array_is_empty_not_failed(backend: FakeFeedBackend) -> None:
    backend.feeds[V2.url] = {"data": {}}

    result = await fetch_provider("alpha", V2, backend)

    assert result.ok
    assert result.vehicles == ()


@pytest.mark.asyncio
async def test_oversized_number_in_one_record_keeps_the_feed(backend: FakeFeedBackend) -> None:
    backend.feeds[V2.url] = gbfs_v2(
        {"bike_id": "good", "lat": 47.37, "lon": 8.53},
        {"bike_id": "bad", "lat": 47.37, "lon": 10**400},
    )

    result = await fetch_provider("alpha", V2, backend)

    assert result.status is FeedStatus.OK
    assert [v.vehicle_id for v in result.vehicles] == ["good"]
    assert result.dropped == 1


# ------------------------------------------------------------------
# Against a real HTTP server
# ------------------------------------------------------------------


async def _feed(_request: web.Request) -> web.Response:
    return web.json_response(gbfs_v2({"bike_id": "live", "lat": 47.37, "lon": 8.53}))


async def _server_error(_request: web.Request) -> web.Response:
    return web.Response(status=503, text="maintenance")


async def _not_json(_request: web.Request) -> web.Response:
    return web.Response(text="<html>hello</html>", content_type="text/html")


async def _slow(_request: web.Request) -> web.Response:
    await asyncio.sleep(1)
    return web.json_response(gbfs_v2())


async def _echo_headers(request: web.Request) -> web.Response:
    return web.json_response({"user_agent": request.headers.get("User-Agent"), "accept": request.headers.get("Accept")})


@pytest_asyncio.fixture
async def feed_server() -> AsyncIterator[TestServer]:
    app = web.Application()
    app.router.add_get("/feed", _feed)
    app.router.add_get("/error", _server_error)
    app.router.add_get("/html", _not_json)
    app.router.add_get("/slow", _slow)
    app.router.add_get("/headers", _echo_headers)
    async with TestServer(app) as server:
        yield server


@pytest_asyncio.fixture
async def http_transport() -> AsyncIterator[HttpTransport]:
    config = ScooterConfig(request_timeout=0.3, user_agent="pyscooters-tests/1.0")
    async with aiohttp.ClientSession() as session:
        yield HttpTransport(config, session)


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_http_feed_happy_path(feed_server: TestServer, http_transport: HttpTransport) -> None:
    definition = ProviderDefinition(url=str(feed_server.make_url("/feed")))

    result = await fetch_provider("live", definition, http_transport)

    assert result.ok
    assert [v.vehicle_id for v in result.vehicles] == ["live"]


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_http_transport_sends_headers(feed_server: TestServer, http_transport: HttpTransport) -> None:
    body = await http_transport.get_json(str(feed_server.make_url("/headers")))

    assert body == {"user_agent": "pyscooters-tests/1.0", "accept": "application/json"}


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_http_non_2xx_raises_transport_error(feed_server: TestServer, http_transport: HttpTransport) -> None:
    with pytest.raises(ScooterTransportError) as excinfo:
        await http_transport.get_json(str(feed_server.make_url("/error")))
    assert excinfo.value.status_code == 503


@pytest.mark.asyncio
@pytest.mark.e2e
@pytest.mark.parametrize("path", ["/error", "/html", "/slow"])
async def test_http_failures_yield_empty_result(
    feed_server: TestServer,
    http_transport: HttpTransport,
    path: str,
) -> None:
    definition = ProviderDefinition(url=str(feed_server.make_url(path)))

    result = await fetch_provider("flaky", definition, http_transport)

    assert result.status is FeedStatus.FAILED
    assert result.vehicles == ()
    assert result.error


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_http_connection_refused_yields_empty_result(http_transport: HttpTransport) -> None:
    definition = ProviderDefinition(url="http://127.0.0.1:9/free_bike_status.json")

    result = await fetch_provider("down", definition, http_transport)

    assert result.status is FeedStatus.FAILED
    assert result.vehicles == ()
