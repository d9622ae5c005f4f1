"""Game lifecycle endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlmodel import Session

from onigokko.config import settings as app_settings
from onigokko.db import get_session
from onigokko.dependencies import get_client_id, get_game
from onigokko.models.game import Game
from onigokko.models.types import GameSettings, GameStatus, PlayerRole
from onigokko.queries import (
    add_player,
    find_game_by_join_code,
    get_player,
    update_game_status,
)
from onigokko.queries import (
    create_game as query_create_game,
)
from onigokko.queries import (
    update_player as query_update_player,
)
from onigokko.schemas.request import CreateGameRequest, JoinGameRequest, PlayerUpdate
from onigokko.schemas.response import GameResponse, JoinGameResponse, PlayerResponse

router = APIRouter(prefix='/games', tags=['games'])

# Allowed lifecycle transitions: target status -> states it may be entered from.
_TRANSITIONS = {
    GameStatus.active: {GameStatus.waiting, GameStatus.paused},
    GameStatus.paused: {GameStatus.active},
    GameStatus.finished: {GameStatus.active, GameStatus.paused},
}


def _transition(session: Session, game: Game, status: GameStatus, **kwargs: bool) -> Game:
    if game.status not in _TRANSITIONS[status]:
        raise HTTPException(
            status_code=409,
            detail=f'Cannot move game from {game.status} to {status}.',
        )
    game = update_game_status(session, game, status, **kwargs)
    logger.info(f'Game {game.id} is now {status}')
    return game


@router.post('', response_model=GameResponse, status_code=201)
def create_game(
    body: CreateGameRequest,
    client_id: uuid.UUID = Depends(get_client_id),
    session: Session = Depends(get_session),
) -> GameResponse:
    """Create a new game. Settings not given take the server defaults."""
    defaults = {
        'location_update_interval_s': app_settings.location_update_interval_s,
        'location_accuracy_m': app_settings.location_accuracy_m,
        'chaser_radar_range_m': app_settings.chaser_radar_range_m,
        'capture_range_m': app_settings.capture_range_m,
        'duration_s': app_settings.game_duration_s,
    }
    game_settings = GameSettings(**(defaults | body.settings.model_dump(exclude_none=True)))
    game = query_create_game(session, name=body.name, settings=game_settings.model_dump())
    logger.info(f'Game {game.id} created by client {client_id} (join code {game.join_code})')
    return GameResponse.from_model(game)


@router.post('/join', response_model=JoinGameResponse, status_code=201)
def join_game(
    body: JoinGameRequest,
    client_id: uuid.UUID = Depends(get_client_id),
    session: Session = Depends(get_session),
) -> JoinGameResponse:
    """Join a game by its join code."""
    game = find_game_by_join_code(session, body.join_code)
    if not game:
        raise HTTPException(status_code=404, detail='Invalid join code.')
    if game.status != GameStatus.waiting:
        raise HTTPException(status_code=409, detail='Game is not waiting for players.')

    player = add_player(
        session,
        client_id=client_id,
        game_id=game.id,
        nickname=body.nickname,
        role=body.role,
        team=body.team,
    )
    session.refresh(game)
    return JoinGameResponse(game=GameResponse.from_model(game), player_id=player.id)


@router.get('/{game_id}', response_model=GameResponse)
def get_game_state(
    game: Game = Depends(get_game),
) -> GameResponse:
    """Fetch current game state."""
    return GameResponse.from_model(game)


@router.patch(
    '/{game_id}/players/{player_id}',
    response_model=PlayerResponse,
)
def patch_player(
    player_id: uuid.UUID,
    body: PlayerUpdate,
    game: Game = Depends(get_game),
    session: Session = Depends(get_session),
) -> PlayerResponse:
    """Update a player's nickname, role, status, or team."""
    player = get_player(session, player_id)
    if not player or player.game_id != game.id:
        raise HTTPException(status_code=404, detail='Player not found in this game.')

    player = query_update_player(session, player, body.model_dump(exclude_unset=True))
    return PlayerResponse.from_model(player)


@router.post('/{game_id}/start', response_model=GameResponse)
def start_game(
    game: Game = Depends(get_game),
    session: Session = Depends(get_session),
) -> GameResponse:
    """Transition the game from waiting to active."""
    if game.status != GameStatus.waiting:
        raise HTTPException(status_code=409, detail='Game is not waiting for players.')

    roles = [p.role for p in game.players]
    if not roles:
        raise HTTPException(status_code=409, detail='No players in game.')
    if PlayerRole.runner not in roles:
        raise HTTPException(status_code=409, detail='At least one runner is required.')
    if PlayerRole.chaser not in roles:
        raise HTTPException(status_code=409, detail='At least one chaser is required.')

    return GameResponse.from_model(_transition(session, game, GameStatus.active))


@router.post('/{game_id}/pause', response_model=GameResponse)
def pause_game(
    game: Game = Depends(get_game),
    session: Session = Depends(get_session),
) -> GameResponse:
    """Transition the game from active to paused."""
    return GameResponse.from_model(_transition(session, game, GameStatus.paused))


@router.post('/{game_id}/resume', response_model=GameResponse)
def resume_game(
    game: Game = Depends(get_game),
    session: Session = Depends(get_session),
) -> GameResponse:
    """Transition the game from paused back to active."""
    if game.status != GameStatus.paused:
        raise HTTPException(status_code=409, detail='Game is not paused.')
    return GameResponse.from_model(_transition(session, game, GameStatus.active))


@router.post('/{game_id}/end', response_model=GameResponse)
def end_game(
    game: Game = Depends(get_game),
    session: Session = Depends(get_session),
) -> GameResponse:
    """Transition the game to finished."""
    game = _transition(session, game, GameStatus.finished, clear_join_code=True)
    return GameResponse.from_model(game)
