"""Internal constants shared across the library."""

from importlib.metadata import PackageNotFoundError, version

try:
    PACKAGE_VERSION = version("pyscooters")
except PackageNotFoundError:
    PACKAGE_VERSION = "0+local"

USER_AGENT = f"pyscooters/{PACKAGE_VERSION}"

#: Mean Earth radius in meters used by the haversine formula.
EARTH_RADIUS_M = 6_371_000.0

#: Fallback origin (Zurich HB) when a query carries no usable coordinates.
DEFAULT_LAT = 47.376
DEFAULT_LNG = 8.528

DEFAULT_RADIUS_M = 500.0
DEFAULT_CORRIDOR_WIDTH_M = 80.0

#: Float slack for the corridor boundary; far below any real GPS precision.
CORRIDOR_TOLERANCE_M = 1e-6
DEFAULT_REQUEST_TIMEOUT_S = 15.0

#: Live fleet positions change quickly; keep shared caches short.
VEHICLE_CACHE_MAX_AGE_S = 30
PROVIDER_LIST_CACHE_MAX_AGE_S = 3600

MAX_BATTERY_PERCENT = 100
