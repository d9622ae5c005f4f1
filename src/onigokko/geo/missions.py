"""Location-driven mission completion.

Each (mission, subject) pair moves Pending -> Completed exactly once. Only spatial
missions (area, escape) complete from location; rescue and common missions are
completed by an explicit action.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from onigokko.geo.geometry import distance
from onigokko.models.types import GeoPoint, MissionKind

if TYPE_CHECKING:
    from onigokko.models.mission import Mission as MissionModel

SPATIAL_KINDS = frozenset({MissionKind.area, MissionKind.escape})


class MissionObjective(BaseModel):
    id: str
    kind: MissionKind
    target: GeoPoint | None = None
    radius_m: float | None = Field(default=None, gt=0)
    completed_by: set[str] = Field(default_factory=set)

    @property
    def is_spatial(self) -> bool:
        return self.kind in SPATIAL_KINDS and self.target is not None and self.radius_m is not None

    def complete(self, subject_id: str) -> bool:
        """Record a completion. Returns False if the subject had already completed it."""
        if subject_id in self.completed_by:
            return False
        self.completed_by.add(subject_id)
        return True

    @staticmethod
    def from_model(mission: MissionModel) -> MissionObjective:
        target = None
        if mission.target_lat is not None and mission.target_lng is not None:
            target = GeoPoint(lat=mission.target_lat, lng=mission.target_lng)
        return MissionObjective(
            id=str(mission.id),
            kind=mission.kind,
            target=target,
            radius_m=mission.radius_m,
            completed_by={str(s) for s in mission.completed_by},
        )


def evaluate(
    subject_id: str, location: GeoPoint, missions: Sequence[MissionObjective]
) -> list[str]:
    """IDs of missions the subject completes with this fix.

    Completions are recorded on the given snapshots, so evaluating the same snapshot
    again while the subject stays in range yields nothing new. Escape missions use the
    same arrival test as area missions.
    """
    newly_completed: list[str] = []
    for mission in missions:
        if subject_id in mission.completed_by or not mission.is_spatial:
            continue
        assert mission.target is not None and mission.radius_m is not None
        if distance(location, mission.target) <= mission.radius_m and mission.complete(subject_id):
            newly_completed.append(mission.id)
    return newly_completed
