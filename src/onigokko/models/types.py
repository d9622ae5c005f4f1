from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ── Enums ──────────────────────────────────────────────────────────────────────


class GameStatus(StrEnum):
    waiting = 'waiting'
    active = 'active'
    paused = 'paused'
    finished = 'finished'


class PlayerRole(StrEnum):
    runner = 'runner'
    chaser = 'chaser'
    gamemaster = 'gamemaster'
    special = 'special'


class PlayerStatus(StrEnum):
    active = 'active'
    captured = 'captured'
    rescued = 'rescued'
    safe = 'safe'


class ZoneKind(StrEnum):
    safe = 'safe'
    restricted = 'restricted'


class MissionKind(StrEnum):
    area = 'area'
    escape = 'escape'
    rescue = 'rescue'
    common = 'common'


# ── Geo value types ───────────────────────────────────────────────────────────


class GeoPoint(BaseModel):
    """A single timestamped GPS fix. Immutable once recorded."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    accuracy: float | None = Field(default=None, ge=0)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator('timestamp')
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes; those were stored as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


# ── Value objects (stored as JSON columns) ─────────────────────────────────────


class GameSettings(BaseModel):
    location_update_interval_s: int = Field(gt=0)
    location_accuracy_m: float = Field(gt=0)
    chaser_radar_range_m: float = Field(gt=0)
    capture_range_m: float = Field(gt=0)
    duration_s: int = Field(gt=0)
