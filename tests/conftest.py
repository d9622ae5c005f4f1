from __future__ import annotations

import uuid
from collections.abc import Generator
from datetime import UTC, datetime
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import onigokko.models  # noqa: F401  registers all tables on metadata
from onigokko.db import get_session
from onigokko.main import app
from onigokko.models.game import Game, Player
from onigokko.models.location import LocationRecord
from onigokko.models.mission import Mission
from onigokko.models.types import GameStatus, MissionKind, PlayerRole, ZoneKind
from onigokko.models.zone import Zone


@pytest.fixture
def session() -> Generator[Session, None, None]:
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session: Session) -> Generator[TestClient, None, None]:
    def _override_get_session() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_session] = _override_get_session
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def headers(player: Player | uuid.UUID | None = None) -> dict[str, str]:
    if isinstance(player, Player):
        client_id = player.client_id
    else:
        client_id = player or uuid.uuid4()
    return {'X-Client-Id': str(client_id)}


# ── Factory functions ─────────────────────────────────────────────────────────


def create_game(session: Session, **overrides: Any) -> Game:
    defaults: dict[str, Any] = {
        'name': 'Test Game',
        'join_code': overrides.pop('join_code', uuid.uuid4().hex[:4].upper()),
        'status': GameStatus.waiting,
        'settings': {
            'location_update_interval_s': 30,
            'location_accuracy_m': 50.0,
            'chaser_radar_range_m': 200.0,
            'capture_range_m': 50.0,
            'duration_s': 3600,
        },
    }
    defaults.update(overrides)
    game = Game(**defaults)
    session.add(game)
    session.commit()
    session.refresh(game)
    return game


def create_player(session: Session, game_id: uuid.UUID, **overrides: Any) -> Player:
    defaults: dict[str, Any] = {
        'game_id': game_id,
        'client_id': uuid.uuid4(),
        'nickname': 'Test Player',
        'role': PlayerRole.runner,
    }
    defaults.update(overrides)
    player = Player(**defaults)
    session.add(player)
    session.commit()
    session.refresh(player)
    return player


def create_location(
    session: Session, player: Player, lat: float, lng: float, **overrides: Any
) -> LocationRecord:
    defaults: dict[str, Any] = {
        'player_id': player.id,
        'game_id': player.game_id,
        'latitude': lat,
        'longitude': lng,
        'timestamp': datetime(2026, 5, 1, 10, 0, tzinfo=UTC),
    }
    defaults.update(overrides)
    record = LocationRecord(**defaults)
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


def create_zone(session: Session, game_id: uuid.UUID, **overrides: Any) -> Zone:
    defaults: dict[str, Any] = {
        'game_id': game_id,
        'name': 'Test Zone',
        'kind': ZoneKind.safe,
        'center_lat': 35.0,
        'center_lng': 139.0,
        'radius_m': 100.0,
    }
    defaults.update(overrides)
    zone = Zone(**defaults)
    session.add(zone)
    session.commit()
    session.refresh(zone)
    return zone


def create_mission(session: Session, game_id: uuid.UUID, **overrides: Any) -> Mission:
    defaults: dict[str, Any] = {
        'game_id': game_id,
        'title': 'Reach the shrine',
        'kind': MissionKind.area,
        'target_lat': 35.0,
        'target_lng': 139.0,
        'radius_m': 50.0,
    }
    defaults.update(overrides)
    mission = Mission(**defaults)
    session.add(mission)
    session.commit()
    session.refresh(mission)
    return mission
