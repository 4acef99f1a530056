"""Normalization helpers.

Centralizes tolerant parsing of raw feed records into :class:`Vehicle`.
Feeds are only loosely typed: numbers may arrive as strings, fields
may be missing, and the longitude key differs between publishers.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pyscooters._constants import MAX_BATTERY_PERCENT
from pyscooters.geometry import LatLng
from pyscooters.models._base import round_half_up
from pyscooters.models.provider import BoundingBox, SchemaVersion
from pyscooters.models.vehicle import Vehicle

_logger = logging.getLogger(__name__)

LNG_KEYS = ("lon", "lng")
VEHICLE_ID_KEYS = ("bike_id", "vehicle_id", "id")
DEEP_LINK_KEYS = ("ios", "android", "web")


def safe_float(value: Any) -> float | None:
    """Parse *value* as a finite float, ``None`` otherwise."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    """Parse *value* and round it half-up to an int."""
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(round_half_up(parsed))


def safe_str(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text if text else None


def non_negative_or_zero(value: Any) -> int | None:
    parsed = safe_int(value)
    if parsed is None:
        return None
    return 0 if parsed < 0 else parsed


def first_present(raw: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    """Return the value of the first key in *keys* that is set in *raw*."""
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def fuel_to_percent(value: Any) -> int | None:
    """Convert a ``0.0``-``1.0`` fuel fraction to a ``0``-``100`` percentage."""
    fraction = safe_float(value)
    if fraction is None:
        return None
    fraction = max(0.0, min(1.0, fraction))
    return int(round_half_up(fraction * MAX_BATTERY_PERCENT))


def extract_vehicle_array(payload: Any, schema_version: SchemaVersion) -> list[Any]:
    """Walk *schema_version*'s JSON path down to the vehicle array.

    A missing key or a non-list at the end of the path yields ``[]``.
    """
    node: Any = payload
    for key in schema_version.path:
        if not isinstance(node, Mapping):
            return []
        node = node.get(key)
    return node if isinstance(node, list) else []


def extract_position(raw: Mapping[str, Any]) -> LatLng | None:
    lat = safe_float(raw.get("lat"))
    lng = safe_float(first_present(raw, LNG_KEYS))
    if lat is None or lng is None:
        return None
    return LatLng(lat=lat, lng=lng)


def extract_deep_link(raw: Mapping[str, Any]) -> str | None:
    rental_uris = raw.get("rental_uris")
    if not isinstance(rental_uris, Mapping):
        return None
    return safe_str(first_present(rental_uris, DEEP_LINK_KEYS))


def normalize_record(
    provider: str,
    raw: Any,
    bounding_box: BoundingBox | None = None,
) -> Vehicle | None:
    """Map one raw feed record to a :class:`Vehicle`.

    Returns ``None`` when the record has no usable position, lies
    outside *bounding_box*, or otherwise fails validation.
    """
    if not isinstance(raw, Mapping):
        return None

    position = extract_position(raw)
    if position is None:
        return None
    if bounding_box is not None and not bounding_box.contains(position):
        return None

    try:
        return Vehicle(
            provider=provider,
            lat=position.lat,
            lng=position.lng,
            battery=fuel_to_percent(raw.get("current_fuel_percent")),
            range_m=non_negative_or_zero(raw.get("current_range_meters")),
            vehicle_id=safe_str(first_present(raw, VEHICLE_ID_KEYS)),
            deep_link=extract_deep_link(raw),
        )
    except ValidationError as exc:
        _logger.debug("Dropping %s record: %s", provider, exc.errors(include_url=False))
        return None


def normalize_feed(
    provider: str,
    payload: Any,
    schema_version: SchemaVersion,
    bounding_box: BoundingBox | None = None,
) -> tuple[tuple[Vehicle, ...], int]:
    """Normalize a whole feed document.

    Returns the vehicles and the number of raw records that were dropped.
    """
    records = extract_vehicle_array(payload, schema_version)
    vehicles: list[Vehicle] = []
    for raw in records:
        try:
            vehicle = normalize_record(provider, raw, bounding_box)
        except Exception:
            _logger.warning("%s: record failed to normalize, dropping it", provider, exc_info=True)
            continue
        if vehicle is not None:
            vehicles.append(vehicle)
    dropped = len(records) - len(vehicles)
    if dropped:
        _logger.debug("%s: dropped %d of %d records", provider, dropped, len(records))
    return tuple(vehicles), dropped
