from __future__ import annotations

import uuid

from fastapi.testclient import TestClient
from sqlmodel import Session

from onigokko.models.types import GameStatus, PlayerRole, PlayerStatus
from tests.conftest import create_game, create_location, create_player, headers


def _setup(session: Session, runner_lng: float = 139.0003):
    """Active game with a chaser at (35, 139) and a runner ~27 m east by default."""
    game = create_game(session, status=GameStatus.active)
    chaser = create_player(session, game.id, nickname='Oni', role=PlayerRole.chaser)
    runner = create_player(session, game.id, nickname='Runner')
    create_location(session, chaser, 35.0, 139.0)
    create_location(session, runner, 35.0, runner_lng)
    return game, chaser, runner


# ── POST /games/{game_id}/captures ──────────────────────────────────────────


def test_capture_runner_in_range(client: TestClient, session: Session):
    game, chaser, runner = _setup(session)

    resp = client.post(
        f'/games/{game.id}/captures', json={'runner_id': str(runner.id)}, headers=headers(chaser)
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data['chaser_id'] == str(chaser.id)
    assert data['runner_id'] == str(runner.id)
    assert data['lat'] == 35.0
    assert data['verified'] is False

    session.refresh(runner)
    session.refresh(chaser)
    assert runner.status == PlayerStatus.captured
    assert chaser.capture_count == 1


def test_capture_runner_out_of_range(client: TestClient, session: Session):
    # ~64 m, beyond the 50 m capture range
    game, chaser, runner = _setup(session, runner_lng=139.0007)

    resp = client.post(
        f'/games/{game.id}/captures', json={'runner_id': str(runner.id)}, headers=headers(chaser)
    )
    assert resp.status_code == 409
    session.refresh(runner)
    assert runner.status == PlayerStatus.active


def test_capture_requires_active_game(client: TestClient, session: Session):
    game, chaser, runner = _setup(session)
    game.status = GameStatus.paused
    session.add(game)
    session.commit()

    resp = client.post(
        f'/games/{game.id}/captures', json={'runner_id': str(runner.id)}, headers=headers(chaser)
    )
    assert resp.status_code == 409


def test_capture_already_captured_runner(client: TestClient, session: Session):
    game, chaser, runner = _setup(session)
    client.post(
        f'/games/{game.id}/captures', json={'runner_id': str(runner.id)}, headers=headers(chaser)
    )
    resp = client.post(
        f'/games/{game.id}/captures', json={'runner_id': str(runner.id)}, headers=headers(chaser)
    )
    assert resp.status_code == 409


def test_capture_unknown_runner(client: TestClient, session: Session):
    game, chaser, _ = _setup(session)
    resp = client.post(
        f'/games/{game.id}/captures', json={'runner_id': str(uuid.uuid4())}, headers=headers(chaser)
    )
    assert resp.status_code == 404


def test_capture_another_chaser(client: TestClient, session: Session):
    game, chaser, _ = _setup(session)
    other = create_player(session, game.id, role=PlayerRole.chaser)
    resp = client.post(
        f'/games/{game.id}/captures', json={'runner_id': str(other.id)}, headers=headers(chaser)
    )
    assert resp.status_code == 404


def test_capture_runner_without_fix(client: TestClient, session: Session):
    game, chaser, _ = _setup(session)
    silent = create_player(session, game.id)
    resp = client.post(
        f'/games/{game.id}/captures', json={'runner_id': str(silent.id)}, headers=headers(chaser)
    )
    assert resp.status_code == 409


def test_capture_requires_chaser(client: TestClient, session: Session):
    game, _, runner = _setup(session)
    resp = client.post(
        f'/games/{game.id}/captures', json={'runner_id': str(runner.id)}, headers=headers(runner)
    )
    assert resp.status_code == 403


# ── GET /games/{game_id}/captures ───────────────────────────────────────────


def test_list_captures(client: TestClient, session: Session):
    game, chaser, runner = _setup(session)
    client.post(
        f'/games/{game.id}/captures', json={'runner_id': str(runner.id)}, headers=headers(chaser)
    )

    resp = client.get(f'/games/{game.id}/captures', headers=headers(chaser))
    assert resp.status_code == 200
    assert [c['runner_id'] for c in resp.json()] == [str(runner.id)]


# ── GET /games/{game_id}/captures/nearby ────────────────────────────────────


def test_nearby_runners(client: TestClient, session: Session):
    game, chaser, runner = _setup(session)
    far = create_player(session, game.id)
    create_location(session, far, 35.0, 139.001)  # ~91 m

    resp = client.get(f'/games/{game.id}/captures/nearby', headers=headers(chaser))
    assert resp.status_code == 200
    data = resp.json()
    assert [r['player_id'] for r in data] == [str(runner.id)]
    assert data[0]['nickname'] == 'Runner'

    resp = client.get(
        f'/games/{game.id}/captures/nearby', params={'radius_m': 150}, headers=headers(chaser)
    )
    assert {r['player_id'] for r in resp.json()} == {str(runner.id), str(far.id)}


def test_nearby_runners_without_fix(client: TestClient, session: Session):
    game = create_game(session, status=GameStatus.active)
    chaser = create_player(session, game.id, role=PlayerRole.chaser)
    resp = client.get(f'/games/{game.id}/captures/nearby', headers=headers(chaser))
    assert resp.status_code == 409
