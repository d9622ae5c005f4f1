"""Radius queries over candidate positions (chaser radar, capture candidates)."""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import TypeVar

from onigokko.errors import InvalidInputError
from onigokko.geo.geometry import distance
from onigokko.models.types import GeoPoint

K = TypeVar('K', bound=Hashable)


def within_radius(
    origin: GeoPoint,
    candidates: Iterable[tuple[K, GeoPoint | None]],
    radius_m: float,
) -> list[K]:
    """IDs of candidates at most `radius_m` from the origin, in input order.

    The boundary is inclusive. Candidates without a location are skipped. Role and
    status filtering is left to the caller.
    """
    if radius_m <= 0:
        raise InvalidInputError(f'Radius must be positive, got {radius_m}.')
    return [
        candidate_id
        for candidate_id, location in candidates
        if location is not None and distance(origin, location) <= radius_m
    ]
