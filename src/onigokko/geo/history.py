"""Player statistics folded from an ordered location history."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from onigokko.geo.geometry import distance, heading, speed
from onigokko.models.types import GeoPoint

if TYPE_CHECKING:
    from onigokko.models.location import LocationRecord


class HistoryEntry(BaseModel):
    """A recorded fix for one subject, read from the history store."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    subject_id: uuid.UUID
    game_id: uuid.UUID | None = None
    location: GeoPoint
    speed: float | None = Field(default=None, ge=0)
    heading: float | None = Field(default=None, ge=0, lt=360)

    @staticmethod
    def from_model(record: LocationRecord) -> HistoryEntry:
        return HistoryEntry(
            id=record.id,
            subject_id=record.player_id,
            game_id=record.game_id,
            location=GeoPoint(
                lat=record.latitude,
                lng=record.longitude,
                accuracy=record.accuracy,
                timestamp=record.timestamp,
            ),
            speed=record.speed,
            heading=record.heading,
        )


@dataclass
class PlayerStats:
    """Derived from a history sequence on demand; never stored."""

    total_distance_m: float
    average_speed: float
    max_speed: float
    duration_ms: int
    last_location: GeoPoint


def compute_stats(entries: Sequence[HistoryEntry]) -> PlayerStats | None:
    """Summarise a timestamp-ascending history. Returns None when there is no data yet.

    Average and max speed only consider entries that carry a recorded speed, since
    devices may report instantaneous GPS speed independent of the history interval.
    """
    if not entries:
        return None

    total = 0.0
    for prev, curr in zip(entries, entries[1:]):
        total += distance(prev.location, curr.location)

    speeds = [e.speed for e in entries if e.speed is not None]
    average = sum(speeds) / len(speeds) if speeds else 0.0
    fastest = max(speeds) if speeds else 0.0

    first, last = entries[0], entries[-1]
    elapsed = last.location.timestamp - first.location.timestamp

    return PlayerStats(
        total_distance_m=total,
        average_speed=average,
        max_speed=fastest,
        duration_ms=round(elapsed.total_seconds() * 1000),
        last_location=last.location,
    )


def derive_motion(
    previous: GeoPoint | None, location: GeoPoint
) -> tuple[float | None, float | None]:
    """Speed and heading of a new fix relative to the previous one. Reported back, never stored."""
    if previous is None:
        return None, None
    return speed(previous, location), heading(previous, location)
