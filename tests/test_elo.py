"""Tests for rating policies."""

import pytest

from value_hierarchy.core.config import HierarchyConfig, RankingConfig
from value_hierarchy.ranking import (
    EloPolicy,
    FixedDeltaPolicy,
    RatingPolicy,
    calculate_expected_win_chance,
    create_rating_policy,
    update_elo,
)


class TestCalculateExpectedWinChance:
    """Tests for expected win probability calculation."""

    def test_equal_ratings(self):
        """Test equal ratings produce 0.5 expected."""
        expected = calculate_expected_win_chance(1500, 1500)
        assert expected == pytest.approx(0.5, abs=0.001)

    def test_higher_rating_higher_expected(self):
        """Test higher rated value has higher expected score."""
        expected = calculate_expected_win_chance(1600, 1400)
        assert 0.5 < expected < 1.0

    def test_400_point_difference(self):
        """Test 400 point difference produces ~91% expected."""
        expected = calculate_expected_win_chance(1900, 1500)
        # 10^(400/400) = 10, so expected = 1/(1+0.1) ≈ 0.909
        assert expected == pytest.approx(0.909, abs=0.01)


class TestUpdateElo:
    """Tests for Elo rating updates."""

    def test_even_match_moves_half_k(self):
        """Test an even match moves each side by K/2."""
        new_w, new_l = update_elo(1500, 1500, k_factor=20)
        assert new_w == pytest.approx(1510.0)
        assert new_l == pytest.approx(1490.0)

    def test_zero_sum(self):
        """Test gains equal losses."""
        new_w, new_l = update_elo(1620, 1480, k_factor=32)
        assert (new_w - 1620) == pytest.approx(1480 - new_l)

    def test_upset_win_larger_change(self):
        """Test an upset moves ratings further than an expected result."""
        upset_w, _ = update_elo(1400, 1600, k_factor=20)
        expected_w, _ = update_elo(1600, 1400, k_factor=20)

        assert upset_w - 1400 > 10
        assert expected_w - 1600 < 10


class TestPolicies:
    """Tests for the RatingPolicy implementations."""

    def test_fixed_ignores_gap(self):
        """Test the fixed policy ignores the rating gap."""
        policy = FixedDeltaPolicy()
        assert policy.adjust(1500, 1500) == (1510, 1490)
        assert policy.adjust(1200, 1800) == (1210, 1790)

    def test_policies_satisfy_protocol(self):
        assert isinstance(FixedDeltaPolicy(), RatingPolicy)
        assert isinstance(EloPolicy(), RatingPolicy)

    @pytest.mark.parametrize("factory", [FixedDeltaPolicy, EloPolicy])
    def test_non_positive_rejected(self, factory):
        with pytest.raises(ValueError, match="must be positive"):
            factory(0)

    def test_create_default_is_fixed(self):
        """Test default config builds the fixed +/-10 policy."""
        policy = create_rating_policy(HierarchyConfig())
        assert isinstance(policy, FixedDeltaPolicy)
        assert policy.delta == 10.0

    def test_create_elo(self):
        """Test config can select the Elo policy."""
        config = HierarchyConfig(ranking=RankingConfig(policy="elo", k_factor=24))
        policy = create_rating_policy(config)
        assert isinstance(policy, EloPolicy)
        assert policy.k_factor == 24
