"""Database query functions. Return SQLModel objects; callers handle transformation."""

from __future__ import annotations

import random
import string
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy import func
from sqlmodel import Session, col, select

from onigokko.models.capture import Capture
from onigokko.models.game import Game, Player
from onigokko.models.location import LocationRecord
from onigokko.models.mission import Mission
from onigokko.models.types import GameStatus, GeoPoint, PlayerRole, PlayerStatus, ZoneKind
from onigokko.models.zone import Zone

# ── Games ─────────────────────────────────────────────────────────────────────


def generate_join_code(session: Session, *, length: int = 4, max_attempts: int = 10) -> str:
    """Generate a unique random alphanumeric join code."""
    for _ in range(max_attempts):
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        existing = session.exec(select(Game).where(Game.join_code == code)).first()
        if not existing:
            return code
    msg = f'Failed to generate unique join code after {max_attempts} attempts'
    raise RuntimeError(msg)


def create_game(session: Session, *, name: str, settings: dict) -> Game:
    """Create a game with a generated join code, commit, and return it."""
    game = Game(name=name, join_code=generate_join_code(session), settings=settings)
    session.add(game)
    session.commit()
    session.refresh(game)
    return game


def find_game_by_join_code(session: Session, join_code: str) -> Game | None:
    """Find a game by its join code."""
    return session.exec(select(Game).where(Game.join_code == join_code.upper())).first()


def update_game_status(
    session: Session, game: Game, status: GameStatus, *, clear_join_code: bool = False
) -> Game:
    """Update a game's status (stamping start/end times), commit, and return it."""
    now = datetime.now(UTC)
    if status == GameStatus.active and game.started_at is None:
        game.started_at = now
    if status == GameStatus.finished:
        game.ended_at = now
    game.status = status
    if clear_join_code:
        game.join_code = None
    session.add(game)
    session.commit()
    session.refresh(game)
    return game


# ── Players ───────────────────────────────────────────────────────────────────


def add_player(
    session: Session,
    *,
    client_id: uuid.UUID,
    game_id: uuid.UUID,
    nickname: str,
    role: PlayerRole,
    team: str | None = None,
) -> Player:
    """Create a player in a game, commit, and return it."""
    player = Player(client_id=client_id, game_id=game_id, nickname=nickname, role=role, team=team)
    session.add(player)
    session.commit()
    session.refresh(player)
    return player


def get_player(session: Session, player_id: uuid.UUID) -> Player | None:
    """Return a single player by ID."""
    return session.get(Player, player_id)


def update_player(session: Session, player: Player, updates: dict) -> Player:
    """Apply partial updates to a player, commit, and return it."""
    for key, value in updates.items():
        setattr(player, key, value)
    player.updated_at = datetime.now(UTC)
    session.add(player)
    session.commit()
    session.refresh(player)
    return player


def list_players(
    session: Session,
    game_id: uuid.UUID,
    *,
    role: PlayerRole | None = None,
    status: PlayerStatus | None = None,
) -> list[Player]:
    """Return the players of a game, optionally filtered by role and status."""
    stmt = select(Player).where(Player.game_id == game_id)
    if role is not None:
        stmt = stmt.where(Player.role == role)
    if status is not None:
        stmt = stmt.where(Player.status == status)
    return list(session.exec(stmt).all())


# ── Location history ─────────────────────────────────────────────────────────


def append_location(
    session: Session,
    *,
    player_id: uuid.UUID,
    game_id: uuid.UUID | None,
    location: GeoPoint,
    speed: float | None,
    heading: float | None,
) -> LocationRecord:
    """Append a fix to the history store, commit, and return it."""
    record = LocationRecord(
        player_id=player_id,
        game_id=game_id,
        latitude=location.lat,
        longitude=location.lng,
        accuracy=location.accuracy,
        speed=speed,
        heading=heading,
        timestamp=location.timestamp,
    )
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


def query_history(
    session: Session,
    *,
    player_id: uuid.UUID | None = None,
    game_id: uuid.UUID | None = None,
) -> list[LocationRecord]:
    """Return history rows filtered by player and/or game, oldest first."""
    stmt = select(LocationRecord)
    if player_id is not None:
        stmt = stmt.where(LocationRecord.player_id == player_id)
    if game_id is not None:
        stmt = stmt.where(LocationRecord.game_id == game_id)
    stmt = stmt.order_by(LocationRecord.timestamp, LocationRecord.id)  # type: ignore[arg-type]
    return list(session.exec(stmt).all())


def get_latest_location(
    session: Session, player_id: uuid.UUID, game_id: uuid.UUID
) -> LocationRecord | None:
    """Return the most recently reported fix for a player in a game."""
    return session.exec(
        select(LocationRecord)
        .where(
            LocationRecord.player_id == player_id,
            LocationRecord.game_id == game_id,
        )
        .order_by(LocationRecord.id.desc())  # type: ignore[union-attr]
        .limit(1)
    ).first()


@dataclass
class PlayerLocationData:
    """A player paired with their latest fix (None if they have not reported yet)."""

    player: Player
    record: LocationRecord | None


def get_players_with_latest_location(
    session: Session,
    game_id: uuid.UUID,
    *,
    role: PlayerRole | None = None,
    status: PlayerStatus | None = None,
) -> list[PlayerLocationData]:
    """Return players of a game with their latest fix, filtered by role and status."""
    latest_sq = (
        select(
            LocationRecord.player_id,
            func.max(LocationRecord.id).label('max_id'),
        )
        .where(LocationRecord.game_id == game_id)
        .group_by(LocationRecord.player_id)  # type: ignore[arg-type]
        .subquery()
    )
    latest: dict[uuid.UUID, LocationRecord] = {
        record.player_id: record
        for record in session.exec(
            select(LocationRecord).join(latest_sq, LocationRecord.id == latest_sq.c.max_id)  # type: ignore[arg-type]
        ).all()
    }
    players = list_players(session, game_id, role=role, status=status)
    return [PlayerLocationData(player=p, record=latest.get(p.id)) for p in players]


# ── Zones ────────────────────────────────────────────────────────────────────


def list_zones(session: Session, game_id: uuid.UUID, *, kind: ZoneKind | None = None) -> list[Zone]:
    """Return the active zones of a game, optionally of one kind."""
    stmt = select(Zone).where(Zone.game_id == game_id, col(Zone.active).is_(True))
    if kind is not None:
        stmt = stmt.where(Zone.kind == kind)
    return list(session.exec(stmt).all())


def create_zone(
    session: Session,
    *,
    game_id: uuid.UUID,
    name: str,
    kind: ZoneKind,
    center_lat: float,
    center_lng: float,
    radius_m: float,
) -> Zone:
    """Create an active zone, commit, and return it."""
    zone = Zone(
        game_id=game_id,
        name=name,
        kind=kind,
        center_lat=center_lat,
        center_lng=center_lng,
        radius_m=radius_m,
    )
    session.add(zone)
    session.commit()
    session.refresh(zone)
    return zone


def get_zone(session: Session, zone_id: uuid.UUID) -> Zone | None:
    """Return a single zone by ID."""
    return session.get(Zone, zone_id)


def update_zone(session: Session, zone: Zone, updates: dict) -> Zone:
    """Apply partial updates to a zone, commit, and return it."""
    for key, value in updates.items():
        setattr(zone, key, value)
    session.add(zone)
    session.commit()
    session.refresh(zone)
    return zone


def delete_zone(session: Session, zone: Zone) -> None:
    """Delete a zone and commit."""
    session.delete(zone)
    session.commit()


# ── Missions ─────────────────────────────────────────────────────────────────


def list_missions(session: Session, game_id: uuid.UUID) -> list[Mission]:
    """Return all missions of a game, oldest first."""
    return list(
        session.exec(
            select(Mission).where(Mission.game_id == game_id).order_by(Mission.created_at)  # type: ignore[arg-type]
        ).all()
    )


def create_mission(session: Session, *, game_id: uuid.UUID, **fields: object) -> Mission:
    """Create a mission, commit, and return it."""
    mission = Mission(game_id=game_id, **fields)
    session.add(mission)
    session.commit()
    session.refresh(mission)
    return mission


def get_mission(session: Session, mission_id: uuid.UUID) -> Mission | None:
    """Return a single mission by ID."""
    return session.get(Mission, mission_id)


def delete_mission(session: Session, mission: Mission) -> None:
    """Delete a mission and commit."""
    session.delete(mission)
    session.commit()


def record_mission_completions(
    session: Session, mission_ids: list[uuid.UUID], subject_id: str
) -> list[Mission]:
    """Add the subject to each mission's completed_by set and commit once.

    The set only grows: a subject already present is left as it is. Returns the
    missions that actually changed.
    """
    changed: list[Mission] = []
    for mission_id in mission_ids:
        mission = session.get(Mission, mission_id)
        if mission is None or subject_id in mission.completed_by:
            continue
        mission.completed_by = [*mission.completed_by, subject_id]
        mission.completed = True
        session.add(mission)
        changed.append(mission)
    session.commit()
    for mission in changed:
        session.refresh(mission)
    return changed


# ── Captures ─────────────────────────────────────────────────────────────────


def list_captures(session: Session, game_id: uuid.UUID, chaser_id: uuid.UUID) -> list[Capture]:
    """Return a chaser's captures in a game, newest first."""
    return list(
        session.exec(
            select(Capture)
            .where(Capture.game_id == game_id, Capture.chaser_id == chaser_id)
            .order_by(Capture.capture_time.desc())  # type: ignore[attr-defined]
        ).all()
    )


def record_capture(
    session: Session,
    *,
    game_id: uuid.UUID,
    chaser: Player,
    runner: Player,
    location: GeoPoint,
) -> Capture:
    """Store a capture, mark the runner captured and bump the chaser's count in one commit."""
    capture = Capture(
        game_id=game_id,
        chaser_id=chaser.id,
        runner_id=runner.id,
        latitude=location.lat,
        longitude=location.lng,
    )
    now = datetime.now(UTC)
    runner.status = PlayerStatus.captured
    runner.updated_at = now
    chaser.capture_count += 1
    chaser.updated_at = now
    session.add_all([capture, runner, chaser])
    session.commit()
    session.refresh(capture)
    return capture
