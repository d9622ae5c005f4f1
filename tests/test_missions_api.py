from __future__ import annotations

import uuid

from fastapi.testclient import TestClient
from sqlmodel import Session

from onigokko.models.types import GameStatus, MissionKind, PlayerRole
from tests.conftest import create_game, create_mission, create_player, headers

# ── GET /games/{game_id}/missions ───────────────────────────────────────────


def test_list_missions(client: TestClient, session: Session):
    game = create_game(session)
    mission = create_mission(session, game.id)
    create_mission(session, create_game(session).id)

    resp = client.get(f'/games/{game.id}/missions')
    assert resp.status_code == 200
    data = resp.json()
    assert [m['id'] for m in data] == [str(mission.id)]
    assert data[0]['completed_by'] == []
    assert data[0]['completed'] is False


# ── POST /games/{game_id}/missions ──────────────────────────────────────────


def test_create_area_mission_defaults_radius(client: TestClient, session: Session):
    game = create_game(session)
    gm = create_player(session, game.id, role=PlayerRole.gamemaster)

    resp = client.post(
        f'/games/{game.id}/missions',
        json={'title': 'Tower', 'kind': 'area', 'target': {'lat': 35.66, 'lng': 139.75}},
        headers=headers(gm),
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data['radius_m'] == 100.0
    assert data['target_lat'] == 35.66


def test_create_spatial_mission_requires_target(client: TestClient, session: Session):
    game = create_game(session)
    gm = create_player(session, game.id, role=PlayerRole.gamemaster)

    resp = client.post(
        f'/games/{game.id}/missions',
        json={'title': 'Run', 'kind': 'escape'},
        headers=headers(gm),
    )
    assert resp.status_code == 422


def test_create_common_mission_without_target(client: TestClient, session: Session):
    game = create_game(session)
    gm = create_player(session, game.id, role=PlayerRole.gamemaster)

    resp = client.post(
        f'/games/{game.id}/missions',
        json={'title': 'Take a photo', 'kind': 'common', 'duration_s': 600},
        headers=headers(gm),
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data['target_lat'] is None
    assert data['radius_m'] is None
    assert data['duration_s'] == 600


def test_create_mission_requires_gamemaster(client: TestClient, session: Session):
    game = create_game(session)
    chaser = create_player(session, game.id, role=PlayerRole.chaser)
    resp = client.post(
        f'/games/{game.id}/missions',
        json={'title': 'Nope', 'kind': 'common'},
        headers=headers(chaser),
    )
    assert resp.status_code == 403


# ── DELETE /games/{game_id}/missions/{mission_id} ───────────────────────────


def test_delete_mission(client: TestClient, session: Session):
    game = create_game(session)
    gm = create_player(session, game.id, role=PlayerRole.gamemaster)
    mission = create_mission(session, game.id)

    resp = client.delete(f'/games/{game.id}/missions/{mission.id}', headers=headers(gm))
    assert resp.status_code == 204
    assert client.get(f'/games/{game.id}/missions').json() == []


def test_delete_mission_not_found(client: TestClient, session: Session):
    game = create_game(session)
    gm = create_player(session, game.id, role=PlayerRole.gamemaster)
    resp = client.delete(f'/games/{game.id}/missions/{uuid.uuid4()}', headers=headers(gm))
    assert resp.status_code == 404


# ── POST /games/{game_id}/missions/{mission_id}/complete ────────────────────


def test_complete_mission_is_idempotent(client: TestClient, session: Session):
    game = create_game(session, status=GameStatus.active)
    runner = create_player(session, game.id)
    mission = create_mission(session, game.id, kind=MissionKind.rescue)

    for _ in range(3):
        resp = client.post(
            f'/games/{game.id}/missions/{mission.id}/complete', headers=headers(runner)
        )
        assert resp.status_code == 200

    data = resp.json()
    assert data['completed'] is True
    assert data['completed_by'] == [str(runner.id)]


def test_complete_mission_keeps_completion_order(client: TestClient, session: Session):
    game = create_game(session, status=GameStatus.active)
    first = create_player(session, game.id)
    second = create_player(session, game.id)
    mission = create_mission(session, game.id, kind=MissionKind.common)

    client.post(f'/games/{game.id}/missions/{mission.id}/complete', headers=headers(first))
    resp = client.post(
        f'/games/{game.id}/missions/{mission.id}/complete', headers=headers(second)
    )
    assert resp.json()['completed_by'] == [str(first.id), str(second.id)]


def test_complete_mission_not_a_player(client: TestClient, session: Session):
    game = create_game(session)
    mission = create_mission(session, game.id)
    resp = client.post(f'/games/{game.id}/missions/{mission.id}/complete', headers=headers())
    assert resp.status_code == 403
