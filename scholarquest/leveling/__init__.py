"""Leveling system: accepted papers to points, level and progress."""

from scholarquest.leveling.engine import (
    TIER_POINTS,
    compute_level,
    compute_leveling,
    compute_total_points,
    cumulative_points,
    level_for_points,
    points_for_next_level,
    tier_points,
)
from scholarquest.leveling.models import LevelingResult
from scholarquest.leveling.ranks import rank_name

__all__ = [
    "LevelingResult",
    "TIER_POINTS",
    "compute_level",
    "compute_leveling",
    "compute_total_points",
    "cumulative_points",
    "level_for_points",
    "points_for_next_level",
    "rank_name",
    "tier_points",
]
