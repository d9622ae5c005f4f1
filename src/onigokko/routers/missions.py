"""Mission management and explicit completion."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlmodel import Session

from onigokko.config import settings as app_settings
from onigokko.db import get_session
from onigokko.dependencies import get_game, get_gamemaster, get_player_in_game
from onigokko.geo.missions import SPATIAL_KINDS, MissionObjective
from onigokko.models.game import Game, Player
from onigokko.models.mission import Mission
from onigokko.queries import create_mission as query_create_mission
from onigokko.queries import delete_mission as query_delete_mission
from onigokko.queries import get_mission, list_missions, record_mission_completions
from onigokko.schemas.request import CreateMissionRequest
from onigokko.schemas.response import MissionResponse

router = APIRouter(prefix='/games/{game_id}/missions', tags=['missions'])


def _mission_in_game(session: Session, game: Game, mission_id: uuid.UUID) -> Mission:
    mission = get_mission(session, mission_id)
    if not mission or mission.game_id != game.id:
        raise HTTPException(status_code=404, detail='Mission not found.')
    return mission


@router.get('', response_model=list[MissionResponse])
def list_game_missions(
    game: Game = Depends(get_game),
    session: Session = Depends(get_session),
) -> list[MissionResponse]:
    """All missions of the game, oldest first."""
    return [MissionResponse.from_model(m) for m in list_missions(session, game.id)]


@router.post('', response_model=MissionResponse, status_code=201)
def create_mission(
    body: CreateMissionRequest,
    game: Game = Depends(get_game),
    gamemaster: Player = Depends(get_gamemaster),
    session: Session = Depends(get_session),
) -> MissionResponse:
    """Create a mission. Gamemaster only.

    Area and escape missions require a target; their radius defaults to the server's
    mission radius.
    """
    radius_m = body.radius_m
    if body.kind in SPATIAL_KINDS:
        if body.target is None:
            raise HTTPException(
                status_code=422, detail=f'A target is required for {body.kind} missions.'
            )
        if radius_m is None:
            radius_m = app_settings.mission_radius_m

    mission = query_create_mission(
        session,
        game_id=game.id,
        title=body.title,
        description=body.description,
        kind=body.kind,
        target_lat=body.target.lat if body.target else None,
        target_lng=body.target.lng if body.target else None,
        radius_m=radius_m,
        duration_s=body.duration_s,
    )
    return MissionResponse.from_model(mission)


@router.delete('/{mission_id}', status_code=204)
def delete_mission(
    mission_id: uuid.UUID,
    game: Game = Depends(get_game),
    gamemaster: Player = Depends(get_gamemaster),
    session: Session = Depends(get_session),
) -> None:
    """Delete a mission. Gamemaster only."""
    query_delete_mission(session, _mission_in_game(session, game, mission_id))


@router.post('/{mission_id}/complete', response_model=MissionResponse)
def complete_mission(
    mission_id: uuid.UUID,
    game: Game = Depends(get_game),
    player: Player = Depends(get_player_in_game),
    session: Session = Depends(get_session),
) -> MissionResponse:
    """Mark the mission completed by the caller. Repeating the call changes nothing."""
    mission = _mission_in_game(session, game, mission_id)
    objective = MissionObjective.from_model(mission)
    if objective.complete(str(player.id)):
        record_mission_completions(session, [mission.id], str(player.id))
        logger.info(f'Player {player.id} completed mission {mission.id} ({mission.kind})')
    return MissionResponse.from_model(mission)
