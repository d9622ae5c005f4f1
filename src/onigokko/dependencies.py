"""Shared FastAPI dependencies for the Onigokko API."""

from __future__ import annotations

import uuid

from fastapi import Depends, Header, HTTPException, Path
from sqlmodel import Session, select

from onigokko.db import get_session
from onigokko.models.game import Game, Player
from onigokko.models.types import PlayerRole


def get_client_id(x_client_id: uuid.UUID = Header()) -> uuid.UUID:
    """Extract and validate the X-Client-Id header."""
    return x_client_id


def get_game(
    game_id: uuid.UUID = Path(),
    session: Session = Depends(get_session),
) -> Game:
    """Resolve game_id path param to a Game, or 404."""
    game = session.get(Game, game_id)
    if not game:
        raise HTTPException(status_code=404, detail='Game not found.')
    return game


def get_player_in_game(
    game: Game = Depends(get_game),
    client_id: uuid.UUID = Depends(get_client_id),
    session: Session = Depends(get_session),
) -> Player:
    """Resolve the calling player via client_id + game, or 403."""
    player = session.exec(
        select(Player).where(Player.client_id == client_id, Player.game_id == game.id)
    ).first()
    if not player:
        raise HTTPException(status_code=403, detail='You are not a player in this game.')
    return player


def get_gamemaster(player: Player = Depends(get_player_in_game)) -> Player:
    """Require the calling player to be the game's gamemaster, or 403."""
    if player.role != PlayerRole.gamemaster:
        raise HTTPException(status_code=403, detail='Only the gamemaster can do this.')
    return player


def get_chaser(player: Player = Depends(get_player_in_game)) -> Player:
    """Require the calling player to be a chaser, or 403."""
    if player.role != PlayerRole.chaser:
        raise HTTPException(status_code=403, detail='Only chasers can do this.')
    return player
