"""
Tier Accumulator

Progressive (marginal) incentive over a rule's tier schedule. Revenue inside
each band is paid at that band's rate only; higher tiers never re-price the
revenue below them.
"""

from decimal import Decimal
from typing import Iterator

from ..models import IncentiveTier, NotReached, Reached, TierAccumulation


class TierAccumulator:
    """Walks tiers in ascending threshold order and sums band contributions."""

    @staticmethod
    def sort_tiers(tiers: list[IncentiveTier]) -> list[IncentiveTier]:
        """Tiers sorted ascending by threshold; storage order is irrelevant."""
        return sorted(tiers, key=lambda t: t.revenue_threshold)

    def walk(self, qualifying_revenue: Decimal, tiers: list[IncentiveTier]) -> Iterator[Reached | NotReached]:
        """
        Yield Reached for each tier at or below the revenue, then a single
        NotReached for the first tier above it, and stop.

        The band of a reached tier runs from its threshold up to the next
        tier's threshold, or up to the revenue when the next tier is out of
        reach (or there is none).
        """
        sorted_tiers = self.sort_tiers(tiers)

        for i, tier in enumerate(sorted_tiers):
            if qualifying_revenue < tier.revenue_threshold:
                yield NotReached(tier)
                return

            if i + 1 < len(sorted_tiers):
                band_upper = min(qualifying_revenue, sorted_tiers[i + 1].revenue_threshold)
            else:
                band_upper = qualifying_revenue

            band_revenue = band_upper - tier.revenue_threshold
            contribution = band_revenue * tier.incentive_rate / Decimal("100")
            yield Reached(tier, band_revenue, contribution)

    def accumulate(self, qualifying_revenue: Decimal, tiers: list[IncentiveTier]) -> TierAccumulation:
        """
        Compute current tier, next tier and total incentive.

        - No tiers: nothing set, incentive 0.
        - Revenue below every threshold: only next_tier (the lowest tier) set.
        - Revenue at or above every threshold: next_tier stays None.
        """
        current_tier = None
        next_tier = None
        incentive_amount = Decimal("0")
        steps = []

        for step in self.walk(qualifying_revenue, tiers):
            steps.append(step)
            if isinstance(step, Reached):
                current_tier = step.tier
                incentive_amount += step.contribution
            else:
                next_tier = step.tier

        return TierAccumulation(
            current_tier=current_tier,
            next_tier=next_tier,
            incentive_amount=incentive_amount,
            steps=tuple(steps),
        )
