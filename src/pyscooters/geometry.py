"""Spherical geometry helpers.

Distances are computed on a sphere of radius :data:`EARTH_RADIUS_M`
(haversine).  That is accurate to well under a percent at the city
scale the aggregator works on, which is all it needs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pyscooters._constants import EARTH_RADIUS_M


@dataclass(frozen=True)
class LatLng:
    """A WGS84 latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.lat) and math.isfinite(self.lng)


def great_circle_distance_m(a: LatLng, b: LatLng) -> float:
    """Return the haversine distance in meters between *a* and *b*.

    Identical coordinates give exactly ``0.0``; the haversine term is
    clamped to ``[0, 1]`` so rounding can never push ``asin`` out of its
    domain for antipodal points.
    """
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    dphi = math.radians(b.lat - a.lat)
    dlambda = math.radians(b.lng - a.lng)

    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(h))


def closest_point_on_segment(point: LatLng, start: LatLng, end: LatLng) -> LatLng:
    """Project *point* onto the segment ``start``-``end``.

    The projection treats degrees as planar (x = longitude, y = latitude).
    The interpolation parameter is clamped to ``[0, 1]`` so the result
    always lies on the segment itself.
    """
    dx = end.lng - start.lng
    dy = end.lat - start.lat
    if dx == 0 and dy == 0:
        return start

    t = ((point.lng - start.lng) * dx + (point.lat - start.lat) * dy) / (dx * dx + dy * dy)
    if t <= 0.0:
        return start
    if t >= 1.0:
        return end
    return LatLng(lat=start.lat + t * dy, lng=start.lng + t * dx)


def distance_to_segment_m(point: LatLng, start: LatLng, end: LatLng) -> float:
    """Great-circle distance in meters from *point* to the nearest point of a segment.

    A zero-length segment degenerates to the distance to *start*.
    """
    return great_circle_distance_m(point, closest_point_on_segment(point, start, end))
