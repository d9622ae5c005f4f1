"""Safe / restricted zone management and membership checks."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from onigokko.db import get_session
from onigokko.dependencies import get_game, get_gamemaster
from onigokko.geo.zones import ZoneArea, classify, nearest_zone
from onigokko.models.game import Game, Player
from onigokko.models.types import GeoPoint, ZoneKind
from onigokko.models.zone import Zone
from onigokko.queries import create_zone as query_create_zone
from onigokko.queries import delete_zone as query_delete_zone
from onigokko.queries import get_zone, list_zones
from onigokko.queries import update_zone as query_update_zone
from onigokko.schemas.request import CreateZoneRequest, ZoneUpdate
from onigokko.schemas.response import ZoneCheckResponse, ZoneMatchResponse, ZoneResponse

router = APIRouter(prefix='/games/{game_id}/zones', tags=['zones'])


def _zone_in_game(session: Session, game: Game, zone_id: uuid.UUID) -> Zone:
    zone = get_zone(session, zone_id)
    if not zone or zone.game_id != game.id:
        raise HTTPException(status_code=404, detail='Zone not found.')
    return zone


@router.get('', response_model=list[ZoneResponse])
def list_game_zones(
    kind: ZoneKind | None = Query(default=None, description='Only zones of this kind.'),
    game: Game = Depends(get_game),
    session: Session = Depends(get_session),
) -> list[ZoneResponse]:
    """Active zones of the game."""
    return [ZoneResponse.from_model(z) for z in list_zones(session, game.id, kind=kind)]


@router.get('/check', response_model=ZoneCheckResponse)
def check_zone(
    lat: float = Query(ge=-90, le=90),
    lng: float = Query(ge=-180, le=180),
    kind: ZoneKind = Query(),
    game: Game = Depends(get_game),
    session: Session = Depends(get_session),
) -> ZoneCheckResponse:
    """Is the point inside any active zone of `kind`, and which one is nearest."""
    point = GeoPoint(lat=lat, lng=lng)
    zones = [ZoneArea.from_model(z) for z in list_zones(session, game.id, kind=kind)]
    return ZoneCheckResponse(
        kind=kind,
        inside=classify(point, zones, kind),
        match=ZoneMatchResponse.from_match(nearest_zone(point, zones, kind)),
    )


@router.post('', response_model=ZoneResponse, status_code=201)
def create_zone(
    body: CreateZoneRequest,
    game: Game = Depends(get_game),
    gamemaster: Player = Depends(get_gamemaster),
    session: Session = Depends(get_session),
) -> ZoneResponse:
    """Create a zone. Gamemaster only."""
    zone = query_create_zone(
        session,
        game_id=game.id,
        name=body.name,
        kind=body.kind,
        center_lat=body.center.lat,
        center_lng=body.center.lng,
        radius_m=body.radius_m,
    )
    return ZoneResponse.from_model(zone)


@router.patch('/{zone_id}', response_model=ZoneResponse)
def update_zone(
    zone_id: uuid.UUID,
    body: ZoneUpdate,
    game: Game = Depends(get_game),
    gamemaster: Player = Depends(get_gamemaster),
    session: Session = Depends(get_session),
) -> ZoneResponse:
    """Update or deactivate a zone. Gamemaster only."""
    zone = _zone_in_game(session, game, zone_id)
    updates = body.model_dump(exclude_unset=True, exclude={'center'})
    if body.center is not None:
        updates['center_lat'] = body.center.lat
        updates['center_lng'] = body.center.lng
    return ZoneResponse.from_model(query_update_zone(session, zone, updates))


@router.delete('/{zone_id}', status_code=204)
def delete_zone(
    zone_id: uuid.UUID,
    game: Game = Depends(get_game),
    gamemaster: Player = Depends(get_gamemaster),
    session: Session = Depends(get_session),
) -> None:
    """Delete a zone. Gamemaster only."""
    query_delete_zone(session, _zone_in_game(session, game, zone_id))
