from __future__ import annotations

from onigokko.geo.geometry import EARTH_RADIUS_M, distance, heading, speed
from onigokko.geo.history import HistoryEntry, PlayerStats, compute_stats, derive_motion
from onigokko.geo.missions import MissionObjective, evaluate
from onigokko.geo.radar import within_radius
from onigokko.geo.replay import ReplayCursor, ReplayPlayer
from onigokko.geo.zones import (
    ZoneArea,
    ZoneEvent,
    ZoneMatch,
    ZoneTransition,
    classify,
    nearest_zone,
    zone_transitions,
)

__all__ = [
    # Geo math
    'EARTH_RADIUS_M',
    'distance',
    'heading',
    'speed',
    # History
    'HistoryEntry',
    'PlayerStats',
    'compute_stats',
    'derive_motion',
    # Zones
    'ZoneArea',
    'ZoneEvent',
    'ZoneMatch',
    'ZoneTransition',
    'classify',
    'nearest_zone',
    'zone_transitions',
    # Radar
    'within_radius',
    # Missions
    'MissionObjective',
    'evaluate',
    # Replay
    'ReplayCursor',
    'ReplayPlayer',
]
