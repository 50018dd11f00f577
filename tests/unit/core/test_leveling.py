"""Unit tests for leveling calculations."""

import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from scholarquest.leveling import (
    LevelingResult,
    compute_level,
    compute_leveling,
    compute_total_points,
    cumulative_points,
    level_for_points,
    points_for_next_level,
    rank_name,
    tier_points,
)
from scholarquest.models import Tier

# Mark all tests in this module as unit tests
pytestmark = pytest.mark.unit


class TestTierPoints:
    """Tests for tier point values."""

    def test_fixed_values(self):
        """Each tier maps to its fixed point value."""
        assert tier_points(Tier.A) == 50
        assert tier_points(Tier.B) == 25
        assert tier_points(Tier.C) == 10
        assert tier_points(Tier.OTHER) == 5

    def test_accepts_string_values(self):
        """Stored string values resolve to the same points."""
        assert tier_points("A") == 50
        assert tier_points("Other") == 5

    def test_unknown_tier_raises(self):
        """A tier outside the enumeration is a caller error."""
        with pytest.raises(ValueError):
            tier_points("S")


class TestComputeTotalPoints:
    """Tests for compute_total_points function."""

    def test_empty_is_zero(self):
        assert compute_total_points([]) == 0

    def test_mixed_tiers(self):
        """[A, A, B] sums to 125."""
        assert compute_total_points([Tier.A, Tier.A, Tier.B]) == 125

    def test_accepts_generator(self):
        assert compute_total_points(t for t in [Tier.C, Tier.OTHER]) == 15

    @given(
        n=st.integers(min_value=0, max_value=50),
        m=st.integers(min_value=0, max_value=50),
        k=st.integers(min_value=0, max_value=50),
        j=st.integers(min_value=0, max_value=50),
    )
    @settings(max_examples=100)
    def test_linear_in_tier_counts(self, n, m, k, j):
        """Property test: total is 50n + 25m + 10k + 5j."""
        tiers = [Tier.A] * n + [Tier.B] * m + [Tier.C] * k + [Tier.OTHER] * j
        assert compute_total_points(tiers) == 50 * n + 25 * m + 10 * k + 5 * j

    @given(tiers=st.lists(st.sampled_from(list(Tier)), max_size=40), seed=st.randoms())
    @settings(max_examples=100)
    def test_order_independent(self, tiers, seed):
        """Property test: shuffling the tiers does not change the total."""
        shuffled = list(tiers)
        seed.shuffle(shuffled)
        assert compute_total_points(shuffled) == compute_total_points(tiers)


class TestLevelCurve:
    """Tests for the cumulative cost curve."""

    def test_cumulative_points(self):
        assert [cumulative_points(level) for level in range(5)] == [0, 10, 30, 60, 100]

    def test_level_up_costs_grow_by_ten(self):
        """Each level-up costs 10 more points than the previous one."""
        for level in range(20):
            cost = cumulative_points(level + 1) - cumulative_points(level)
            assert cost == points_for_next_level(level) == 10 * (level + 1)

    def test_level_for_points_thresholds(self):
        assert level_for_points(0) == 0
        assert level_for_points(9) == 0
        assert level_for_points(10) == 1
        assert level_for_points(29) == 1
        assert level_for_points(30) == 2
        assert level_for_points(100) == 4

    def test_exact_for_huge_totals(self):
        """Integer arithmetic stays exact where float sqrt would not."""
        level = 10**15
        total = cumulative_points(level)
        assert level_for_points(total) == level
        assert level_for_points(total - 1) == level - 1

    @given(total=st.integers(min_value=0, max_value=10**30))
    @settings(max_examples=200)
    def test_level_brackets_total(self, total):
        """Property test: cumulative(L) <= total < cumulative(L + 1)."""
        level = level_for_points(total)
        assert cumulative_points(level) <= total < cumulative_points(level + 1)

    @given(total=st.integers(min_value=0, max_value=10**6))
    @settings(max_examples=200)
    def test_matches_closed_form(self, total):
        """Property test: agrees with floor((-5 + sqrt(25 + 20p)) / 10) at small scale."""
        closed_form = max(0, math.floor((-5 + math.sqrt(25 + 20 * total)) / 10))
        assert level_for_points(total) == closed_form


class TestComputeLevel:
    """Tests for compute_level function."""

    def test_zero_points(self):
        result = compute_level(0)
        assert result.level == 0
        assert result.current_xp == 0
        assert result.required_xp == 10
        assert result.progress_percent == 0

    def test_just_below_first_level(self):
        result = compute_level(9)
        assert result.level == 0
        assert result.current_xp == 9
        assert result.required_xp == 10
        assert result.progress_percent == pytest.approx(90)

    def test_exact_level_up_threshold(self):
        result = compute_level(10)
        assert result.level == 1
        assert result.current_xp == 0
        assert result.required_xp == 20
        assert result.progress_percent == 0

    def test_example_two_a_one_b(self):
        """Three accepted papers [A, A, B] land halfway through level 4."""
        result = compute_leveling([Tier.A, Tier.A, Tier.B])
        assert result.total_points == 125
        assert result.level == 4
        assert result.current_xp == 25
        assert result.required_xp == 50
        assert result.progress_percent == pytest.approx(50)

    def test_negative_total_clamps_to_zero(self):
        """Negative totals never yield a negative level or NaN progress."""
        result = compute_level(-25)
        assert result.level == 0
        assert result.current_xp == 0
        assert result.progress_percent == 0
        assert not math.isnan(result.progress_percent)

    def test_result_is_immutable(self):
        result = compute_level(50)
        with pytest.raises(Exception):
            result.level = 99

    def test_xp_to_next_level(self):
        result = compute_level(125)
        assert result.next_level == 5
        assert result.xp_to_next_level == 25

    def test_returns_fresh_result(self):
        assert compute_level(42) == compute_level(42)
        assert compute_level(42) is not compute_level(42)
        assert isinstance(compute_level(42), LevelingResult)

    @given(total=st.integers(min_value=0, max_value=100_000))
    @settings(max_examples=300)
    def test_xp_within_bucket(self, total):
        """Property test: 0 <= current_xp < required_xp and level >= 0."""
        result = compute_level(total)
        assert result.level >= 0
        assert 0 <= result.current_xp < result.required_xp
        assert result.total_points == total

    @given(total=st.integers(min_value=0, max_value=100_000))
    @settings(max_examples=300)
    def test_progress_is_finite_percentage(self, total):
        """Property test: progress is never NaN and stays in [0, 100)."""
        progress = compute_level(total).progress_percent
        assert not math.isnan(progress)
        assert 0 <= progress < 100

    @given(
        a=st.integers(min_value=0, max_value=100_000),
        b=st.integers(min_value=0, max_value=100_000),
    )
    @settings(max_examples=200)
    def test_monotonic(self, a, b):
        """Property test: more points never means a lower level."""
        low, high = sorted((a, b))
        assert compute_level(low).level <= compute_level(high).level

    def test_every_total_in_range(self):
        """Sweep 0..100000: no NaN, no negative progress."""
        for total in range(100_001):
            result = compute_level(total)
            assert result.progress_percent >= 0
            assert 0 <= result.current_xp < result.required_xp


class TestRankName:
    """Tests for rank titles."""

    @pytest.mark.parametrize(
        "level,expected",
        [
            (0, "Apprentice"),
            (1, "Apprentice"),
            (2, "Seeker"),
            (4, "Seeker"),
            (5, "Ascetic"),
            (9, "Ascetic"),
            (10, "Gatekeeper"),
            (19, "Gatekeeper"),
            (20, "Grandmaster"),
            (39, "Grandmaster"),
            (40, "Divine"),
            (1000, "Divine"),
        ],
    )
    def test_rank_bands(self, level, expected):
        assert rank_name(level) == expected
