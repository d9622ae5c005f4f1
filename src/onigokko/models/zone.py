import uuid

from sqlmodel import Field, Relationship, SQLModel

from onigokko.models.types import ZoneKind


class Zone(SQLModel, table=True):
    __tablename__ = 'zone'  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    game_id: uuid.UUID = Field(foreign_key='game.id', index=True)
    name: str
    kind: ZoneKind
    center_lat: float
    center_lng: float
    radius_m: float
    active: bool = True

    game: 'Game' = Relationship(back_populates='zones')  # noqa: F821


# Avoid circular imports; resolved at runtime by SQLModel.
from onigokko.models.game import Game  # noqa: E402

__all__ = ['Zone', 'Game']
