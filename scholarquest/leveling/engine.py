"""Pure leveling calculations.

The level curve is quadratic: reaching level L costs ``5 * L * (L + 1)``
points in total, so each level-up costs 10 more points than the one before
(10, 20, 30, ...).
"""

import math
from collections.abc import Iterable

from scholarquest.leveling.models import LevelingResult
from scholarquest.models import Tier

TIER_POINTS: dict[Tier, int] = {
    Tier.A: 50,
    Tier.B: 25,
    Tier.C: 10,
    Tier.OTHER: 5,
}


def tier_points(tier: Tier | str) -> int:
    """Return the fixed point value of a venue tier.

    Raises:
        ValueError: If ``tier`` is not a member of ``Tier``
    """
    return TIER_POINTS[Tier(tier)]


def compute_total_points(accepted_tiers: Iterable[Tier | str]) -> int:
    """Sum the point values of the tiers of accepted papers.
    
    Args:
        accepted_tiers: Tiers of accepted papers, in any order
        
    Returns:
        Total points (0 for no papers)
    """
    return sum(tier_points(tier) for tier in accepted_tiers)


def cumulative_points(level: int) -> int:
    """Total points needed to reach ``level`` from zero."""
    return 5 * level * (level + 1)


def points_for_next_level(level: int) -> int:
    """Cost of advancing from ``level`` to ``level + 1``."""
    return 10 * (level + 1)


def level_for_points(total_points: int) -> int:
    """Largest level L with ``cumulative_points(L) <= total_points``.

    Solves ``5L^2 + 5L <= p`` exactly: the inequality is equivalent to
    ``(10L + 5)^2 <= 20p + 25``, so ``L = (isqrt(20p + 25) - 5) // 10``.
    Integer square root keeps this exact for arbitrarily large totals.
    """
    if total_points <= 0:
        return 0
    return max(0, (math.isqrt(20 * total_points + 25) - 5) // 10)


def compute_level(total_points: int) -> LevelingResult:
    """Derive level, in-level XP and progress from a point total.
    
    Negative totals are treated as zero.
    
    Args:
        total_points: Sum of accepted paper points
        
    Returns:
        LevelingResult for the given total
    """
    total_points = max(0, int(total_points))
    level = level_for_points(total_points)

    required_xp = points_for_next_level(level)
    current_xp = total_points - cumulative_points(level)

    if required_xp <= 0:
        progress = 0.0
    else:
        progress = current_xp / required_xp * 100
        if math.isnan(progress) or math.isinf(progress):
            progress = 0.0

    return LevelingResult(
        total_points=total_points,
        level=level,
        current_xp=current_xp,
        required_xp=required_xp,
        progress_percent=progress,
    )


def compute_leveling(accepted_tiers: Iterable[Tier | str]) -> LevelingResult:
    """Compute the full leveling state from the tiers of accepted papers."""
    return compute_level(compute_total_points(accepted_tiers))
