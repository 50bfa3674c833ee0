"""
Unit Tests for Progress Projector

Tests verify progress percentage and remaining revenue to the next tier.
"""

from decimal import Decimal

import pytest

from incentive_engine.calculators.progress import ProgressProjector
from incentive_engine.models import IncentiveRule, IncentiveTier


def tier(threshold, rate=1):
    return IncentiveTier(Decimal(str(threshold)), Decimal(str(rate)))


def make_rule(base_revenue_threshold=0):
    return IncentiveRule(
        name="Rule",
        is_active=True,
        commission_rate_min=Decimal("0"),
        commission_rate_max=Decimal("100"),
        base_revenue_threshold=Decimal(str(base_revenue_threshold)),
    )


@pytest.fixture
def projector():
    return ProgressProjector()


class TestProgressWithNextTier:
    """Progress inside the band leading to the next tier."""

    def test_halfway_through_band(self, projector):
        result = projector.project(Decimal("50000"), make_rule(), tier(0), tier(100000))

        assert result.progress_percentage == Decimal("50")
        assert result.remaining_to_next_tier == Decimal("50000")

    def test_band_starts_at_current_tier_threshold(self, projector):
        """Band 40,000 → 100,000; 55,000 is a quarter of the way."""
        result = projector.project(Decimal("55000"), make_rule(), tier(40000), tier(100000))

        assert result.progress_percentage == Decimal("25")
        assert result.remaining_to_next_tier == Decimal("45000")

    def test_current_tier_at_zero_is_used_as_baseline(self, projector):
        """A current tier at 0 is still the baseline, not the rule base."""
        result = projector.project(Decimal("50000"), make_rule(20000), tier(0), tier(100000))
        assert result.progress_percentage == Decimal("50")

    def test_band_starts_at_rule_base_without_current_tier(self, projector):
        """Band 10,000 → 30,000; 15,000 is a quarter of the way."""
        result = projector.project(Decimal("15000"), make_rule(10000), None, tier(30000))

        assert result.progress_percentage == Decimal("25")
        assert result.remaining_to_next_tier == Decimal("15000")

    def test_revenue_below_rule_base_clamps_to_zero(self, projector):
        result = projector.project(Decimal("5000"), make_rule(10000), None, tier(30000))

        assert result.progress_percentage == Decimal("0")
        assert result.remaining_to_next_tier == Decimal("25000")

    @pytest.mark.parametrize("revenue", ["0", "1", "9999.99", "25000", "49999.99"])
    def test_progress_always_within_bounds(self, projector, revenue):
        result = projector.project(Decimal(revenue), make_rule(10000), None, tier(50000))
        assert Decimal("0") <= result.progress_percentage <= Decimal("100")


class TestProgressWithoutNextTier:
    """No next tier to project towards."""

    def test_top_tier_reached(self, projector):
        result = projector.project(Decimal("150000"), make_rule(), tier(100000), None)

        assert result.progress_percentage == Decimal("100")
        assert result.remaining_to_next_tier == Decimal("0")

    def test_no_tiers_at_all(self, projector):
        result = projector.project(Decimal("150000"), make_rule(), None, None)

        assert result.progress_percentage == Decimal("0")
        assert result.remaining_to_next_tier == Decimal("0")


class TestZeroWidthBand:
    """Known edge case: next threshold equals the baseline."""

    def test_zero_width_band_reports_full_progress(self, projector):
        """Base 50,000 with first tier at 50,000 cannot be divided through."""
        result = projector.project(Decimal("20000"), make_rule(50000), None, tier(50000))

        assert result.progress_percentage == Decimal("100")
        assert result.remaining_to_next_tier == Decimal("30000")

    def test_inverted_band_reports_full_progress(self, projector):
        """Base above the next threshold is treated the same way."""
        result = projector.project(Decimal("20000"), make_rule(80000), None, tier(50000))

        assert result.progress_percentage == Decimal("100")
        assert result.remaining_to_next_tier == Decimal("30000")
