from __future__ import annotations
from dataclasses import dataclass
from math import atan2, cos, isnan, radians, sin, sqrt

"""
Geospatial helpers.

A tiny geometry layer so search code can do great-circle distance without
pulling in heavier GIS dependencies. Distances are kilometers.
"""

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float


def distance_km(a: GeoPoint, b: GeoPoint, radius: float = EARTH_RADIUS_KM) -> float:
    """Compute haversine great-circle distance between two points.

    `radius` is the sphere radius in the unit you want back; use 1 for a unit sphere.
    NaN coordinates propagate as NaN.
    """
    lat1 = radians(a.lat)
    lat2 = radians(b.lat)
    dlat = radians(b.lat - a.lat)
    dlon = radians(b.lon - a.lon)

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h slightly outside [0, 1] for near-antipodal points.
    if not isnan(h):
        h = min(1.0, max(0.0, h))
    return radius * 2 * atan2(sqrt(h), sqrt(1 - h))
