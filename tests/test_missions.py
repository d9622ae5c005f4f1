from __future__ import annotations

import uuid

from onigokko.geo.geometry import distance
from onigokko.geo.missions import MissionObjective, evaluate
from onigokko.models.mission import Mission
from onigokko.models.types import GeoPoint, MissionKind

TARGET = GeoPoint(lat=35.0, lng=139.0)


def _mission(kind: MissionKind = MissionKind.area, **overrides) -> MissionObjective:
    fields = {'id': 'mission-id', 'kind': kind, 'target': TARGET, 'radius_m': 50.0}
    fields.update(overrides)
    return MissionObjective(**fields)


def test_area_mission_completes_on_arrival():
    mission = _mission()
    assert evaluate('p1', TARGET, [mission]) == ['mission-id']
    assert evaluate('p1', TARGET, [mission]) == []


def test_repeated_evaluation_completes_once():
    mission = _mission()
    results = [evaluate('p1', TARGET, [mission]) for _ in range(10)]
    assert sum(len(r) for r in results) == 1
    assert mission.completed_by == {'p1'}


def test_completion_survives_leaving_and_returning():
    mission = _mission()
    away = GeoPoint(lat=35.01, lng=139.0)
    assert evaluate('p1', TARGET, [mission]) == ['mission-id']
    assert evaluate('p1', away, [mission]) == []
    assert evaluate('p1', TARGET, [mission]) == []
    assert 'p1' in mission.completed_by


def test_boundary_is_inclusive():
    point = GeoPoint(lat=35.0, lng=139.0004)
    mission = _mission(radius_m=distance(point, TARGET))
    assert evaluate('p1', point, [mission]) == ['mission-id']


def test_outside_radius_stays_pending():
    mission = _mission()
    assert evaluate('p1', GeoPoint(lat=35.001, lng=139.0), [mission]) == []
    assert mission.completed_by == set()


def test_escape_mission_uses_arrival():
    mission = _mission(MissionKind.escape)
    assert evaluate('p1', TARGET, [mission]) == ['mission-id']


def test_rescue_and_common_never_auto_complete():
    missions = [
        _mission(MissionKind.rescue, id='rescue'),
        _mission(MissionKind.common, id='common'),
    ]
    assert evaluate('p1', TARGET, missions) == []


def test_missing_target_or_radius_never_auto_completes():
    missions = [_mission(id='no-target', target=None), _mission(id='no-radius', radius_m=None)]
    assert evaluate('p1', TARGET, missions) == []


def test_subjects_are_independent():
    mission = _mission()
    assert evaluate('p1', TARGET, [mission]) == ['mission-id']
    assert evaluate('p2', TARGET, [mission]) == ['mission-id']
    assert mission.completed_by == {'p1', 'p2'}


def test_already_completed_subject_is_skipped():
    mission = _mission(completed_by={'p1'})
    assert evaluate('p1', TARGET, [mission]) == []


def test_explicit_completion_is_idempotent():
    mission = _mission(MissionKind.rescue)
    assert mission.complete('p1') is True
    assert mission.complete('p1') is False
    assert mission.completed_by == {'p1'}


def test_from_model():
    row = Mission(
        game_id=uuid.uuid4(),
        title='Escape',
        kind=MissionKind.escape,
        target_lat=35.0,
        target_lng=139.0,
        radius_m=25.0,
        completed_by=['a', 'b'],
    )
    objective = MissionObjective.from_model(row)
    assert objective.id == str(row.id)
    assert objective.target is not None
    assert objective.target.lat == 35.0
    assert objective.completed_by == {'a', 'b'}


def test_from_model_without_target():
    row = Mission(game_id=uuid.uuid4(), title='Help out', kind=MissionKind.common)
    objective = MissionObjective.from_model(row)
    assert objective.target is None
    assert objective.is_spatial is False
