from __future__ import annotations

from sqlalchemy import inspect
from sqlalchemy.orm import configure_mappers

from onigokko.models import Game, LocationRecord, Mission, Player, Zone


def test_relationships_resolve_to_table_models():
    configure_mappers()

    game = inspect(Game).relationships
    assert game['players'].mapper.class_ is Player
    assert game['zones'].mapper.class_ is Zone
    assert game['missions'].mapper.class_ is Mission

    player = inspect(Player).relationships
    assert player['game'].mapper.class_ is Game
    assert player['location_records'].mapper.class_ is LocationRecord
    assert inspect(LocationRecord).relationships['player'].mapper.class_ is Player
