"""Location reporting, history and radar endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlmodel import Session

from onigokko.db import get_session
from onigokko.dependencies import get_chaser, get_game, get_player_in_game
from onigokko.geo.geometry import distance
from onigokko.geo.history import HistoryEntry, compute_stats, derive_motion
from onigokko.geo.missions import MissionObjective, evaluate
from onigokko.geo.radar import within_radius
from onigokko.geo.zones import ZoneArea, classify, nearest_zone, zone_transitions
from onigokko.models.game import Game, Player
from onigokko.models.types import (
    GameSettings,
    GameStatus,
    GeoPoint,
    PlayerRole,
    PlayerStatus,
    ZoneKind,
)
from onigokko.queries import (
    append_location,
    get_latest_location,
    get_player,
    get_players_with_latest_location,
    list_missions,
    list_zones,
    query_history,
    record_mission_completions,
)
from onigokko.schemas.request import LocationReportRequest
from onigokko.schemas.response import (
    LocationHistoryEntry,
    LocationReportResponse,
    PlayerStatsResponse,
    RadarContact,
    ZoneEventResponse,
    ZoneMatchResponse,
    ZoneStatus,
)

router = APIRouter(prefix='/games/{game_id}', tags=['location'])


def _radar_contacts(session: Session, game: Game, origin: GeoPoint) -> list[RadarContact]:
    """Active runners within the game's radar range of `origin`."""
    radius = GameSettings.model_validate(game.settings).chaser_radar_range_m
    runners = get_players_with_latest_location(
        session, game.id, role=PlayerRole.runner, status=PlayerStatus.active
    )
    by_id = {data.player.id: data for data in runners}
    candidates = [
        (data.player.id, HistoryEntry.from_model(data.record).location if data.record else None)
        for data in runners
    ]
    contacts = []
    for player_id in within_radius(origin, candidates, radius):
        data = by_id[player_id]
        assert data.record is not None
        location = HistoryEntry.from_model(data.record).location
        contacts.append(
            RadarContact(
                player_id=player_id,
                nickname=data.player.nickname,
                lat=location.lat,
                lng=location.lng,
                distance_m=distance(origin, location),
                timestamp=location.timestamp,
            )
        )
    return contacts


def _check_history_access(caller: Player, player_id: uuid.UUID) -> None:
    if caller.role != PlayerRole.gamemaster and caller.id != player_id:
        raise HTTPException(
            status_code=403, detail="Only the gamemaster can view other players' history."
        )


@router.post('/location', response_model=LocationReportResponse)
def report_location(
    body: LocationReportRequest,
    game: Game = Depends(get_game),
    player: Player = Depends(get_player_in_game),
    session: Session = Depends(get_session),
) -> LocationReportResponse:
    """Record the caller's fix and evaluate it against zones, missions and radar."""
    if game.status != GameStatus.active:
        raise HTTPException(status_code=409, detail='Locations are only accepted while active.')

    location = GeoPoint(
        lat=body.lat, lng=body.lng, accuracy=body.accuracy, timestamp=body.timestamp
    )
    previous_record = get_latest_location(session, player.id, game.id)
    previous = HistoryEntry.from_model(previous_record).location if previous_record else None

    derived_speed, derived_heading = derive_motion(previous, location)
    append_location(
        session,
        player_id=player.id,
        game_id=game.id,
        location=location,
        speed=body.speed,
        heading=body.heading,
    )

    zones = [ZoneArea.from_model(z) for z in list_zones(session, game.id)]
    events = zone_transitions(previous, location, zones)
    for event in events:
        logger.info(
            f'Player {player.id} {event.transition} {event.zone.kind} zone "{event.zone.name}"'
        )

    missions = [MissionObjective.from_model(m) for m in list_missions(session, game.id)]
    completed = evaluate(str(player.id), location, missions)
    if completed:
        record_mission_completions(session, [uuid.UUID(m) for m in completed], str(player.id))
        logger.info(f'Player {player.id} completed missions {completed}')

    radar = _radar_contacts(session, game, location) if player.role == PlayerRole.chaser else None

    return LocationReportResponse(
        zones=ZoneStatus(
            in_safe_zone=classify(location, zones, ZoneKind.safe),
            safe_zone=ZoneMatchResponse.from_match(nearest_zone(location, zones, ZoneKind.safe)),
            in_restricted_zone=classify(location, zones, ZoneKind.restricted),
            restricted_zone=ZoneMatchResponse.from_match(
                nearest_zone(location, zones, ZoneKind.restricted)
            ),
        ),
        zone_events=[ZoneEventResponse.from_event(e) for e in events],
        completed_missions=[uuid.UUID(m) for m in completed],
        radar=radar,
        derived_speed=derived_speed,
        derived_heading=derived_heading,
    )


@router.get('/location-history', response_model=list[LocationHistoryEntry])
def location_history(
    player_id: uuid.UUID | None = Query(
        default=None, description='Restrict to one player. Defaults to the caller.'
    ),
    game: Game = Depends(get_game),
    caller: Player = Depends(get_player_in_game),
    session: Session = Depends(get_session),
) -> list[LocationHistoryEntry]:
    """Ordered location history. Gamemasters may omit player_id to get the whole game."""
    if player_id is None and caller.role != PlayerRole.gamemaster:
        player_id = caller.id
    if player_id is not None:
        _check_history_access(caller, player_id)

    records = query_history(session, player_id=player_id, game_id=game.id)
    return [LocationHistoryEntry.from_entry(HistoryEntry.from_model(r)) for r in records]


@router.get('/players/{player_id}/stats', response_model=PlayerStatsResponse | None)
def player_stats(
    player_id: uuid.UUID,
    game: Game = Depends(get_game),
    caller: Player = Depends(get_player_in_game),
    session: Session = Depends(get_session),
) -> PlayerStatsResponse | None:
    """Distance, speed and duration derived from a player's history. Null with no history."""
    target = get_player(session, player_id)
    if not target or target.game_id != game.id:
        raise HTTPException(status_code=404, detail='Player not found in this game.')
    _check_history_access(caller, player_id)

    entries = [
        HistoryEntry.from_model(r)
        for r in query_history(session, player_id=player_id, game_id=game.id)
    ]
    return PlayerStatsResponse.from_stats(compute_stats(entries))


@router.get('/radar', response_model=list[RadarContact])
def radar(
    game: Game = Depends(get_game),
    chaser: Player = Depends(get_chaser),
    session: Session = Depends(get_session),
) -> list[RadarContact]:
    """Active runners within radar range of the calling chaser's latest fix."""
    latest = get_latest_location(session, chaser.id, game.id)
    if not latest:
        raise HTTPException(status_code=409, detail='No location reported yet.')
    return _radar_contacts(session, game, HistoryEntry.from_model(latest).location)
