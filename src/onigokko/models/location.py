import uuid
from datetime import UTC, datetime

from sqlmodel import Field, Relationship, SQLModel


class LocationRecord(SQLModel, table=True):
    """One row of the append-only location history store."""

    __tablename__ = 'location_history'  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    player_id: uuid.UUID = Field(foreign_key='player.id', index=True)
    game_id: uuid.UUID | None = Field(default=None, foreign_key='game.id', index=True)
    latitude: float
    longitude: float
    accuracy: float | None = None
    speed: float | None = None  # m/s
    heading: float | None = None  # degrees, 0 = north
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    player: 'Player' = Relationship(back_populates='location_records')  # noqa: F821


# Avoid circular imports; resolved at runtime by SQLModel.
from onigokko.models.game import Player  # noqa: E402

__all__ = ['LocationRecord', 'Player']
