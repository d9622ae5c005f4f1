import uuid
from datetime import UTC, datetime

import sqlalchemy as sa
from sqlmodel import Field, Relationship, SQLModel

from onigokko.models.types import MissionKind


class Mission(SQLModel, table=True):
    __tablename__ = 'mission'  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    game_id: uuid.UUID = Field(foreign_key='game.id', index=True)
    title: str
    description: str = ''
    kind: MissionKind
    target_lat: float | None = None
    target_lng: float | None = None
    radius_m: float | None = None
    duration_s: int | None = None
    completed_by: list = Field(default_factory=list, sa_type=sa.JSON)  # player IDs as str
    completed: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    game: 'Game' = Relationship(back_populates='missions')  # noqa: F821


# Avoid circular imports; resolved at runtime by SQLModel.
from onigokko.models.game import Game  # noqa: E402

__all__ = ['Mission', 'Game']
