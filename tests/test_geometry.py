from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from onigokko.geo.geometry import distance, heading, speed
from onigokko.models.types import GeoPoint

T0 = datetime(2026, 5, 1, 10, 0, tzinfo=UTC)


def _pt(lat: float, lng: float, seconds: float = 0) -> GeoPoint:
    return GeoPoint(lat=lat, lng=lng, timestamp=T0 + timedelta(seconds=seconds))


# ── distance ─────────────────────────────────────────────────────────────────


def test_distance_to_self_is_zero():
    a = _pt(35.6895, 139.6917)
    assert distance(a, a) == 0


def test_distance_is_symmetric():
    a = _pt(35.6895, 139.6917)
    b = _pt(34.6937, 135.5023)
    assert distance(a, b) == pytest.approx(distance(b, a))


def test_distance_one_kilometer_north():
    a = _pt(35.6895, 139.6917)
    b = _pt(35.6985, 139.6917)
    assert distance(a, b) == pytest.approx(1000, rel=0.01)


def test_distance_one_nautical_mile_on_meridian():
    a = _pt(0.0, 0.0)
    b = _pt(1 / 60, 0.0)
    assert distance(a, b) == pytest.approx(1852, rel=0.01)


def test_distance_long_range():
    # Tokyo -> Osaka, roughly 400 km
    tokyo = _pt(35.6895, 139.6917)
    osaka = _pt(34.6937, 135.5023)
    assert distance(tokyo, osaka) == pytest.approx(397_000, rel=0.02)


def test_distance_antipodal_does_not_fail():
    assert distance(_pt(0, 0), _pt(0, 180)) == pytest.approx(20_015_087, rel=1e-3)


# ── heading ──────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ('lat', 'lng', 'expected'),
    [
        (35.01, 139.0, 0.0),
        (35.0, 139.01, 90.0),
        (34.99, 139.0, 180.0),
        (35.0, 138.99, 270.0),
    ],
)
def test_heading_cardinal_directions(lat: float, lng: float, expected: float):
    assert heading(_pt(35.0, 139.0), _pt(lat, lng)) == pytest.approx(expected, abs=0.1)


def test_heading_same_point_is_zero():
    a = _pt(35.0, 139.0)
    assert heading(a, a) == 0.0


def test_heading_range():
    h = heading(_pt(35.0, 139.0), _pt(35.0001, 138.9999))
    assert 0 <= h < 360


# ── speed ────────────────────────────────────────────────────────────────────


def test_speed():
    prev = _pt(35.6895, 139.6917, 0)
    curr = _pt(35.6985, 139.6917, 100)
    assert speed(prev, curr) == pytest.approx(distance(prev, curr) / 100)


def test_speed_zero_elapsed_is_zero():
    prev = _pt(35.0, 139.0, 10)
    curr = _pt(35.1, 139.0, 10)
    assert speed(prev, curr) == 0


def test_speed_out_of_order_is_zero():
    prev = _pt(35.0, 139.0, 60)
    curr = _pt(35.1, 139.0, 0)
    assert speed(prev, curr) == 0


# ── GeoPoint ─────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(('lat', 'lng'), [(90.1, 0), (-91, 0), (0, 180.5), (0, -181)])
def test_geopoint_rejects_out_of_range(lat: float, lng: float):
    with pytest.raises(ValueError):
        GeoPoint(lat=lat, lng=lng)


def test_geopoint_naive_timestamp_is_utc():
    p = GeoPoint(lat=0, lng=0, timestamp=datetime(2026, 5, 1, 10, 0))
    assert p.timestamp == T0
