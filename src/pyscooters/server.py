"""HTTP query endpoint (aiohttp.web).

``GET /api/scooters`` answers one aggregation query per request.  The
handler only turns query-string parameters into an
:class:`AggregationQuery`, runs the aggregator and serializes the
result; bad parameters fall back to defaults instead of producing a
client error.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping

from aiohttp import web

from pyscooters._constants import MAX_BATTERY_PERCENT, PROVIDER_LIST_CACHE_MAX_AGE_S
from pyscooters.client import ScooterClient
from pyscooters.config import ScooterConfig
from pyscooters.geometry import LatLng
from pyscooters.ingestion.normalize import safe_float
from pyscooters.models.query import AggregationQuery

_logger = logging.getLogger(__name__)

CONFIG_KEY = web.AppKey("config", ScooterConfig)
CLIENT_KEY = web.AppKey("client", ScooterClient)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _cache_control(max_age: int) -> str:
    return f"public, max-age={max_age}, s-maxage={max_age}"


def _param_float(params: Mapping[str, str], name: str, default: float) -> float:
    value = safe_float(params.get(name))
    return default if value is None else value


def _param_point(params: Mapping[str, str], lat_name: str, lng_name: str) -> LatLng | None:
    lat = safe_float(params.get(lat_name))
    lng = safe_float(params.get(lng_name))
    if lat is None or lng is None:
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        return None
    return LatLng(lat=lat, lng=lng)


def parse_query(params: Mapping[str, str], config: ScooterConfig) -> AggregationQuery:
    """Build an :class:`AggregationQuery` from query-string parameters.

    Recognized parameters: ``lat``, ``lng``, ``radius``, ``minBattery``,
    ``provider`` (comma separated), ``destLat``, ``destLng`` and
    ``corridor``.  Missing or unparseable values use the configured
    defaults.
    """
    origin = _param_point(params, "lat", "lng") or LatLng(lat=config.default_lat, lng=config.default_lng)
    destination = _param_point(params, "destLat", "destLng")

    min_battery_raw = safe_float(params.get("minBattery"))
    min_battery = 0 if min_battery_raw is None else int(min_battery_raw)
    min_battery = max(0, min(MAX_BATTERY_PERCENT, min_battery))

    corridor = _param_float(params, "corridor", config.default_corridor_width)
    if corridor < 0:
        corridor = config.default_corridor_width

    # A parameter without any usable id means no allowlist.
    provider_ids = [p.strip() for p in params.get("provider", "").split(",") if p.strip()]
    providers = tuple(provider_ids) or None

    return AggregationQuery(
        origin=origin,
        destination=destination,
        radius=_param_float(params, "radius", config.default_radius),
        min_battery=min_battery,
        corridor_width=corridor,
        providers=providers,
    )


async def handle_scooters(request: web.Request) -> web.Response:
    config = request.app[CONFIG_KEY]
    client = request.app[CLIENT_KEY]

    query = parse_query(request.query, config)
    result = await client.aggregate(query)
    return web.json_response(
        result.to_payload(include_diagnostics=config.expose_diagnostics),
        headers={"Cache-Control": _cache_control(config.cache_max_age)},
    )


async def handle_providers(request: web.Request) -> web.Response:
    client = request.app[CLIENT_KEY]
    providers = [
        {
            "id": provider,
            "name": definition.name or provider,
            "color": definition.color,
            "initial": definition.initial,
            "schema_version": definition.schema_version.label,
        }
        for provider, definition in client.registry.items()
    ]
    return web.json_response(
        {"providers": providers},
        headers={"Cache-Control": _cache_control(PROVIDER_LIST_CACHE_MAX_AGE_S)},
    )


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Turn unexpected handler faults into a generic JSON 500."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception:
        _logger.exception("Unhandled error serving %s", request.path)
        return web.json_response({"error": "internal error"}, status=500)


def create_app(
    config: ScooterConfig | None = None,
    *,
    client: ScooterClient | None = None,
) -> web.Application:
    """Build the web application.

    When *client* is omitted the application owns one and opens/closes
    it with the app lifecycle.
    """
    config = config or ScooterConfig()
    app = web.Application(middlewares=[error_middleware])
    app[CONFIG_KEY] = config

    async def _client_ctx(app: web.Application) -> AsyncIterator[None]:
        if client is not None:
            app[CLIENT_KEY] = client
            yield
            return
        async with ScooterClient(config) as owned:
            app[CLIENT_KEY] = owned
            yield

    app.cleanup_ctx.append(_client_ctx)
    app.router.add_get("/api/scooters", handle_scooters)
    app.router.add_get("/api/providers", handle_providers)
    return app


def run(config: ScooterConfig) -> None:
    """Serve the application until interrupted."""
    _logger.info("Serving on http://%s:%d", config.host, config.port)
    web.run_app(create_app(config), host=config.host, port=config.port, print=None)
