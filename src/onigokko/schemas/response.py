"""Response schemas for the Onigokko API."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from onigokko.geo.zones import ZoneTransition
from onigokko.models.types import (
    GameStatus,
    MissionKind,
    PlayerRole,
    PlayerStatus,
    ZoneKind,
)

if TYPE_CHECKING:
    from onigokko.geo.history import HistoryEntry, PlayerStats
    from onigokko.geo.zones import ZoneEvent, ZoneMatch
    from onigokko.models.capture import Capture as CaptureModel
    from onigokko.models.game import Game as GameModel
    from onigokko.models.game import Player as PlayerModel
    from onigokko.models.mission import Mission as MissionModel
    from onigokko.models.zone import Zone as ZoneModel


# ── Players ───────────────────────────────────────────────────────────────────


class PlayerResponse(BaseModel):
    """A player in a game."""

    id: uuid.UUID
    nickname: str
    role: PlayerRole
    status: PlayerStatus
    team: str | None
    capture_count: int
    updated_at: datetime

    @staticmethod
    def from_model(player: PlayerModel) -> PlayerResponse:
        return PlayerResponse(
            id=player.id,
            nickname=player.nickname,
            role=player.role,
            status=player.status,
            team=player.team,
            capture_count=player.capture_count,
            updated_at=player.updated_at,
        )


# ── Games ─────────────────────────────────────────────────────────────────────


class GameResponse(BaseModel):
    """Full game state, including players and settings."""

    id: uuid.UUID
    name: str
    status: GameStatus
    join_code: str | None = Field(description='4-character code for joining. Null after game ends.')
    settings: dict = Field(description='GameSettings: radar range, capture range, intervals.')
    players: list[PlayerResponse]
    started_at: datetime | None
    ended_at: datetime | None
    created_at: datetime

    @staticmethod
    def from_model(game: GameModel) -> GameResponse:
        return GameResponse(
            id=game.id,
            name=game.name,
            status=game.status,
            join_code=game.join_code,
            settings=game.settings,
            players=[PlayerResponse.from_model(p) for p in game.players],
            started_at=game.started_at,
            ended_at=game.ended_at,
            created_at=game.created_at,
        )


class JoinGameResponse(BaseModel):
    """Returned when a player joins a game. Includes the game state and the caller's player ID."""

    game: GameResponse
    player_id: uuid.UUID = Field(description="The joining player's ID for subsequent requests.")


# ── Zones ─────────────────────────────────────────────────────────────────────


class ZoneResponse(BaseModel):
    """A circular zone."""

    id: uuid.UUID
    name: str
    kind: ZoneKind
    center_lat: float
    center_lng: float
    radius_m: float
    active: bool

    @staticmethod
    def from_model(zone: ZoneModel) -> ZoneResponse:
        return ZoneResponse(
            id=zone.id,
            name=zone.name,
            kind=zone.kind,
            center_lat=zone.center_lat,
            center_lng=zone.center_lng,
            radius_m=zone.radius_m,
            active=zone.active,
        )


class ZoneMatchResponse(BaseModel):
    """The zone a point was matched to, with the distance to its center."""

    zone_id: uuid.UUID
    name: str
    distance_m: float

    @staticmethod
    def from_match(match: ZoneMatch | None) -> ZoneMatchResponse | None:
        if match is None:
            return None
        return ZoneMatchResponse(
            zone_id=match.zone.id, name=match.zone.name, distance_m=match.distance_m
        )


class ZoneCheckResponse(BaseModel):
    """Membership of a point in zones of one kind."""

    kind: ZoneKind
    inside: bool
    match: ZoneMatchResponse | None = Field(description='Nearest containing zone, if any.')


class ZoneStatus(BaseModel):
    """Where the caller stands relative to the game's zones."""

    in_safe_zone: bool
    safe_zone: ZoneMatchResponse | None
    in_restricted_zone: bool
    restricted_zone: ZoneMatchResponse | None


class ZoneEventResponse(BaseModel):
    """The caller entered or left a zone with this fix."""

    zone_id: uuid.UUID
    name: str
    kind: ZoneKind
    transition: ZoneTransition

    @staticmethod
    def from_event(event: ZoneEvent) -> ZoneEventResponse:
        return ZoneEventResponse(
            zone_id=event.zone.id,
            name=event.zone.name,
            kind=event.zone.kind,
            transition=event.transition,
        )


# ── Missions ──────────────────────────────────────────────────────────────────


class MissionResponse(BaseModel):
    """A mission and who has completed it."""

    id: uuid.UUID
    title: str
    description: str
    kind: MissionKind
    target_lat: float | None
    target_lng: float | None
    radius_m: float | None
    duration_s: int | None
    completed: bool
    completed_by: list[str] = Field(description='Player IDs, in completion order.')

    @staticmethod
    def from_model(mission: MissionModel) -> MissionResponse:
        return MissionResponse(
            id=mission.id,
            title=mission.title,
            description=mission.description,
            kind=mission.kind,
            target_lat=mission.target_lat,
            target_lng=mission.target_lng,
            radius_m=mission.radius_m,
            duration_s=mission.duration_s,
            completed=mission.completed,
            completed_by=list(mission.completed_by),
        )


# ── Location ──────────────────────────────────────────────────────────────────


class RadarContact(BaseModel):
    """A runner visible on a chaser's radar, with their latest fix."""

    player_id: uuid.UUID
    nickname: str
    lat: float
    lng: float
    distance_m: float
    timestamp: datetime


class LocationReportResponse(BaseModel):
    """Everything derived from the reported fix."""

    zones: ZoneStatus
    zone_events: list[ZoneEventResponse]
    completed_missions: list[uuid.UUID] = Field(description='Missions completed with this fix.')
    radar: list[RadarContact] | None = Field(description='Runners in radar range. Chasers only.')
    derived_speed: float | None = Field(
        description='m/s from the previous fix. Not stored; null on the first fix.'
    )
    derived_heading: float | None = Field(description='Degrees from the previous fix. Not stored.')


class LocationHistoryEntry(BaseModel):
    """A single fix in the location history."""

    id: int | None
    player_id: uuid.UUID
    lat: float
    lng: float
    accuracy: float | None
    speed: float | None
    heading: float | None
    timestamp: datetime

    @staticmethod
    def from_entry(entry: HistoryEntry) -> LocationHistoryEntry:
        return LocationHistoryEntry(
            id=entry.id,
            player_id=entry.subject_id,
            lat=entry.location.lat,
            lng=entry.location.lng,
            accuracy=entry.location.accuracy,
            speed=entry.speed,
            heading=entry.heading,
            timestamp=entry.location.timestamp,
        )


class PlayerStatsResponse(BaseModel):
    """Movement statistics derived from a player's history."""

    total_distance_m: float
    average_speed: float = Field(description='m/s, over fixes that carry a speed.')
    max_speed: float = Field(description='m/s.')
    duration_ms: int
    last_lat: float
    last_lng: float
    last_timestamp: datetime

    @staticmethod
    def from_stats(stats: PlayerStats | None) -> PlayerStatsResponse | None:
        if stats is None:
            return None
        return PlayerStatsResponse(
            total_distance_m=stats.total_distance_m,
            average_speed=stats.average_speed,
            max_speed=stats.max_speed,
            duration_ms=stats.duration_ms,
            last_lat=stats.last_location.lat,
            last_lng=stats.last_location.lng,
            last_timestamp=stats.last_location.timestamp,
        )


# ── Captures ──────────────────────────────────────────────────────────────────


class CaptureResponse(BaseModel):
    """A recorded capture."""

    id: uuid.UUID
    chaser_id: uuid.UUID
    runner_id: uuid.UUID
    lat: float
    lng: float
    capture_time: datetime
    verified: bool

    @staticmethod
    def from_model(capture: CaptureModel) -> CaptureResponse:
        return CaptureResponse(
            id=capture.id,
            chaser_id=capture.chaser_id,
            runner_id=capture.runner_id,
            lat=capture.latitude,
            lng=capture.longitude,
            capture_time=capture.capture_time,
            verified=capture.verified,
        )


class NearbyRunner(BaseModel):
    """A runner within capture range of the calling chaser."""

    player_id: uuid.UUID
    nickname: str
    status: PlayerStatus
    distance_m: float
