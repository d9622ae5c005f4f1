"""Request body schemas for the Onigokko API."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from onigokko.models.types import MissionKind, PlayerRole, PlayerStatus, ZoneKind
from onigokko.schemas.common import Coordinates

# ── Games ─────────────────────────────────────────────────────────────────────


class GameSettingsRequest(BaseModel):
    """Per-game tuning. Omitted fields take the server defaults."""

    location_update_interval_s: int | None = Field(
        default=None, gt=0, description='How often clients should report a fix.'
    )
    location_accuracy_m: float | None = Field(
        default=None, gt=0, description='Accuracy clients should request from the device.'
    )
    chaser_radar_range_m: float | None = Field(
        default=None, gt=0, description='Radius within which chasers see runners.'
    )
    capture_range_m: float | None = Field(
        default=None, gt=0, description='Maximum chaser-runner distance for a capture.'
    )
    duration_s: int | None = Field(default=None, gt=0, description='Game length in seconds.')


class CreateGameRequest(BaseModel):
    """Create a new game."""

    name: str = Field(description='Display name for the game.')
    settings: GameSettingsRequest = Field(default_factory=GameSettingsRequest)


class JoinGameRequest(BaseModel):
    """Join an existing game by its join code."""

    join_code: str = Field(description='4-character code shared by the gamemaster.')
    nickname: str = Field(description='Display name for this player.')
    role: PlayerRole = Field(description='runner, chaser, gamemaster, or special.')
    team: str | None = Field(default=None, description='Optional team label.')


# ── Players ───────────────────────────────────────────────────────────────────


class PlayerUpdate(BaseModel):
    """Partial update to a player. All fields are optional; only provided fields are applied."""

    nickname: str | None = Field(default=None, description='New display name.')
    role: PlayerRole | None = Field(default=None, description='New role.')
    status: PlayerStatus | None = Field(
        default=None, description='active, captured, rescued, safe.'
    )
    team: str | None = Field(default=None, description='New team label.')

    @field_validator('nickname', 'role', 'status')
    @classmethod
    def _not_null(cls, value: object) -> object:
        # Omit a field to leave it unchanged; team is the only clearable one.
        if value is None:
            raise ValueError('may be omitted but not null')
        return value


# ── Location ──────────────────────────────────────────────────────────────────


class LocationReportRequest(BaseModel):
    """Report the caller's current position."""

    lat: float = Field(ge=-90, le=90, description='Latitude in degrees.')
    lng: float = Field(ge=-180, le=180, description='Longitude in degrees.')
    accuracy: float | None = Field(default=None, ge=0, description='Fix accuracy in meters.')
    timestamp: datetime = Field(description='Client-side timestamp of the reading.')
    speed: float | None = Field(
        default=None, ge=0, description='Device-reported speed in m/s. Stored as sent.'
    )
    heading: float | None = Field(
        default=None, ge=0, lt=360, description='Device-reported heading. Stored as sent.'
    )


# ── Zones ─────────────────────────────────────────────────────────────────────


class CreateZoneRequest(BaseModel):
    """Create a circular safe or restricted zone."""

    name: str
    kind: ZoneKind
    center: Coordinates
    radius_m: float = Field(gt=0, description='Zone radius in meters.')


class ZoneUpdate(BaseModel):
    """Partial update to a zone."""

    name: str | None = None
    kind: ZoneKind | None = None
    center: Coordinates | None = None
    radius_m: float | None = Field(default=None, gt=0)
    active: bool | None = None

    @field_validator('name', 'kind', 'center', 'radius_m', 'active')
    @classmethod
    def _not_null(cls, value: object) -> object:
        if value is None:
            raise ValueError('may be omitted but not null')
        return value


# ── Missions ──────────────────────────────────────────────────────────────────


class CreateMissionRequest(BaseModel):
    """Create a mission. Area and escape missions need a target and radius to auto-complete."""

    title: str
    description: str = ''
    kind: MissionKind
    target: Coordinates | None = Field(default=None, description='Target point for area/escape.')
    radius_m: float | None = Field(
        default=None, gt=0, description='Completion radius. Defaults to the server setting.'
    )
    duration_s: int | None = Field(default=None, gt=0)


# ── Captures ──────────────────────────────────────────────────────────────────


class CaptureRequest(BaseModel):
    """Record the capture of a runner by the calling chaser."""

    runner_id: uuid.UUID
