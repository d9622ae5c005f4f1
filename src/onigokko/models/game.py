import uuid
from datetime import UTC, datetime

import sqlalchemy as sa
from sqlmodel import Field, Relationship, SQLModel

from onigokko.models.types import GameStatus, PlayerRole, PlayerStatus


class Game(SQLModel, table=True):
    __tablename__ = 'game'  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str
    status: GameStatus = GameStatus.waiting
    join_code: str | None = Field(default=None, sa_column_kwargs={'unique': True, 'index': True})
    settings: dict = Field(default_factory=dict, sa_type=sa.JSON)  # GameSettings
    started_at: datetime | None = None
    ended_at: datetime | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    players: list['Player'] = Relationship(back_populates='game')
    zones: list['Zone'] = Relationship(back_populates='game')  # noqa: F821
    missions: list['Mission'] = Relationship(back_populates='game')  # noqa: F821


class Player(SQLModel, table=True):
    __tablename__ = 'player'  # type: ignore[assignment]
    __table_args__ = (sa.UniqueConstraint('client_id', 'game_id'),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    client_id: uuid.UUID
    game_id: uuid.UUID = Field(foreign_key='game.id')
    nickname: str
    role: PlayerRole
    status: PlayerStatus = PlayerStatus.active
    team: str | None = None
    capture_count: int = 0
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    game: Game = Relationship(back_populates='players')
    location_records: list['LocationRecord'] = Relationship(  # noqa: F821
        back_populates='player',
    )


# Avoid circular imports; resolved at runtime by SQLModel.
from onigokko.models.location import LocationRecord  # noqa: E402
from onigokko.models.mission import Mission  # noqa: E402
from onigokko.models.zone import Zone  # noqa: E402

__all__ = ['Game', 'Player', 'LocationRecord', 'Mission', 'Zone']
