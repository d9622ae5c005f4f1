"""Great-circle distance, bearing and speed between two GPS fixes."""

from __future__ import annotations

import math

from onigokko.models.types import GeoPoint

EARTH_RADIUS_M = 6_371_000.0


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance between two fixes in meters."""
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lng - a.lng)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    h = min(h, 1.0)
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def heading(prev: GeoPoint, curr: GeoPoint) -> float:
    """Initial bearing from `prev` to `curr` in degrees [0, 360), clockwise from north.

    Identical points yield 0.
    """
    phi1 = math.radians(prev.lat)
    phi2 = math.radians(curr.lat)
    d_lambda = math.radians(curr.lng - prev.lng)

    y = math.sin(d_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lambda)
    bearing = math.degrees(math.atan2(y, x)) % 360.0
    # -1e-17 % 360 rounds up to 360.0
    return 0.0 if bearing >= 360.0 else bearing


def speed(prev: GeoPoint, curr: GeoPoint) -> float:
    """Average speed between two fixes in m/s.

    Out-of-order or duplicate fixes (elapsed time <= 0) yield 0 rather than an error.
    """
    elapsed = (curr.timestamp - prev.timestamp).total_seconds()
    if elapsed <= 0:
        return 0.0
    return distance(prev, curr) / elapsed
