import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class Capture(SQLModel, table=True):
    __tablename__ = 'capture'  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    game_id: uuid.UUID = Field(foreign_key='game.id', index=True)
    chaser_id: uuid.UUID = Field(foreign_key='player.id')
    runner_id: uuid.UUID = Field(foreign_key='player.id')
    latitude: float
    longitude: float
    capture_time: datetime = Field(default_factory=lambda: datetime.now(UTC))
    verified: bool = False
