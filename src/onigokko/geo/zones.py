"""Circular zone membership: safe / restricted areas."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from onigokko.geo.geometry import distance
from onigokko.models.types import GeoPoint, ZoneKind

if TYPE_CHECKING:
    from onigokko.models.zone import Zone as ZoneModel


class ZoneArea(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: uuid.UUID
    name: str
    kind: ZoneKind
    center: GeoPoint
    radius_m: float = Field(gt=0)

    def contains(self, point: GeoPoint) -> bool:
        return distance(point, self.center) <= self.radius_m

    @staticmethod
    def from_model(zone: ZoneModel) -> ZoneArea:
        return ZoneArea(
            id=zone.id,
            name=zone.name,
            kind=zone.kind,
            center=GeoPoint(lat=zone.center_lat, lng=zone.center_lng),
            radius_m=zone.radius_m,
        )


@dataclass
class ZoneMatch:
    zone: ZoneArea
    distance_m: float


class ZoneTransition(StrEnum):
    entered = 'entered'
    left = 'left'


@dataclass
class ZoneEvent:
    zone: ZoneArea
    transition: ZoneTransition


def classify(point: GeoPoint, zones: Sequence[ZoneArea], kind: ZoneKind) -> bool:
    """True if the point lies inside at least one zone of `kind` (inclusive radius)."""
    return any(zone.kind == kind and zone.contains(point) for zone in zones)


def nearest_zone(point: GeoPoint, zones: Sequence[ZoneArea], kind: ZoneKind) -> ZoneMatch | None:
    """The containing zone of `kind` whose center is closest to the point.

    Equal distances keep the first zone in input order.
    """
    best: ZoneMatch | None = None
    for zone in zones:
        if zone.kind != kind:
            continue
        d = distance(point, zone.center)
        if d > zone.radius_m:
            continue
        if best is None or d < best.distance_m:
            best = ZoneMatch(zone=zone, distance_m=d)
    return best


def zone_transitions(
    previous: GeoPoint | None, current: GeoPoint, zones: Sequence[ZoneArea]
) -> list[ZoneEvent]:
    """Enter/leave events for zones whose containment changed between two fixes.

    With no previous fix the subject is treated as outside every zone.
    """
    events: list[ZoneEvent] = []
    for zone in zones:
        was_inside = previous is not None and zone.contains(previous)
        is_inside = zone.contains(current)
        if is_inside and not was_inside:
            events.append(ZoneEvent(zone=zone, transition=ZoneTransition.entered))
        elif was_inside and not is_inside:
            events.append(ZoneEvent(zone=zone, transition=ZoneTransition.left))
    return events
