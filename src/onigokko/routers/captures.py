"""Capture adjudication: chasers tagging runners."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlmodel import Session

from onigokko.db import get_session
from onigokko.dependencies import get_chaser, get_game
from onigokko.geo.geometry import distance
from onigokko.geo.history import HistoryEntry
from onigokko.geo.radar import within_radius
from onigokko.models.game import Game, Player
from onigokko.models.types import GameSettings, GameStatus, GeoPoint, PlayerRole, PlayerStatus
from onigokko.queries import (
    get_latest_location,
    get_player,
    get_players_with_latest_location,
    list_captures,
    record_capture,
)
from onigokko.schemas.request import CaptureRequest
from onigokko.schemas.response import CaptureResponse, NearbyRunner

router = APIRouter(prefix='/games/{game_id}/captures', tags=['captures'])


def _chaser_location(session: Session, game: Game, chaser: Player) -> GeoPoint:
    latest = get_latest_location(session, chaser.id, game.id)
    if not latest:
        raise HTTPException(status_code=409, detail='No location reported yet.')
    return HistoryEntry.from_model(latest).location


@router.get('', response_model=list[CaptureResponse])
def list_my_captures(
    game: Game = Depends(get_game),
    chaser: Player = Depends(get_chaser),
    session: Session = Depends(get_session),
) -> list[CaptureResponse]:
    """Captures made by the calling chaser, newest first."""
    return [CaptureResponse.from_model(c) for c in list_captures(session, game.id, chaser.id)]


@router.get('/nearby', response_model=list[NearbyRunner])
def nearby_runners(
    radius_m: float | None = Query(
        default=None, gt=0, description="Search radius. Defaults to the game's capture range."
    ),
    game: Game = Depends(get_game),
    chaser: Player = Depends(get_chaser),
    session: Session = Depends(get_session),
) -> list[NearbyRunner]:
    """Active runners within range of the calling chaser's latest fix."""
    origin = _chaser_location(session, game, chaser)
    radius = radius_m or GameSettings.model_validate(game.settings).capture_range_m

    runners = get_players_with_latest_location(
        session, game.id, role=PlayerRole.runner, status=PlayerStatus.active
    )
    locations = {
        data.player.id: HistoryEntry.from_model(data.record).location
        for data in runners
        if data.record is not None
    }
    by_id = {data.player.id: data.player for data in runners}
    candidates = [(data.player.id, locations.get(data.player.id)) for data in runners]
    return [
        NearbyRunner(
            player_id=player_id,
            nickname=by_id[player_id].nickname,
            status=by_id[player_id].status,
            distance_m=distance(origin, locations[player_id]),
        )
        for player_id in within_radius(origin, candidates, radius)
    ]


@router.post('', response_model=CaptureResponse, status_code=201)
def capture_runner(
    body: CaptureRequest,
    game: Game = Depends(get_game),
    chaser: Player = Depends(get_chaser),
    session: Session = Depends(get_session),
) -> CaptureResponse:
    """Capture a runner within the game's capture range (boundary inclusive)."""
    if game.status != GameStatus.active:
        raise HTTPException(status_code=409, detail='Captures are only allowed while active.')

    runner = get_player(session, body.runner_id)
    if not runner or runner.game_id != game.id or runner.role != PlayerRole.runner:
        raise HTTPException(status_code=404, detail='Runner not found in this game.')
    if runner.status != PlayerStatus.active:
        raise HTTPException(status_code=409, detail=f'Runner is {runner.status}.')

    origin = _chaser_location(session, game, chaser)
    runner_latest = get_latest_location(session, runner.id, game.id)
    runner_location = HistoryEntry.from_model(runner_latest).location if runner_latest else None
    capture_range = GameSettings.model_validate(game.settings).capture_range_m
    if not within_radius(origin, [(runner.id, runner_location)], capture_range):
        logger.warning(f'Chaser {chaser.id} tried to capture {runner.id} out of range')
        raise HTTPException(status_code=409, detail='Runner is out of capture range.')

    capture = record_capture(
        session, game_id=game.id, chaser=chaser, runner=runner, location=origin
    )
    logger.info(f'Chaser {chaser.id} captured runner {runner.id} in game {game.id}')
    return CaptureResponse.from_model(capture)
