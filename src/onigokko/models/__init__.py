from __future__ import annotations

from onigokko.models.capture import Capture
from onigokko.models.game import Game, Player
from onigokko.models.location import LocationRecord
from onigokko.models.mission import Mission
from onigokko.models.types import (
    GameSettings,
    GameStatus,
    GeoPoint,
    MissionKind,
    PlayerRole,
    PlayerStatus,
    ZoneKind,
)
from onigokko.models.zone import Zone

__all__ = [
    # Table models
    'Capture',
    'Game',
    'LocationRecord',
    'Mission',
    'Player',
    'Zone',
    # Enums
    'GameStatus',
    'MissionKind',
    'PlayerRole',
    'PlayerStatus',
    'ZoneKind',
    # Value objects
    'GameSettings',
    'GeoPoint',
]
