"""
Progress Projector

Projects how far a salesperson is through the band leading to their next tier.
"""

from decimal import Decimal

from ..models import IncentiveRule, IncentiveTier, Progress

HUNDRED = Decimal("100")
ZERO = Decimal("0")


class ProgressProjector:
    """Calculates progress percentage and revenue still needed for the next tier."""

    def project(
        self,
        qualifying_revenue: Decimal,
        rule: IncentiveRule,
        current_tier: IncentiveTier | None,
        next_tier: IncentiveTier | None,
    ) -> Progress:
        """
        Progress towards `next_tier`.

        The band starts at the current tier's threshold, or at the rule's
        base revenue threshold when no tier has been reached yet.

        A band of zero (or negative) width cannot be divided through; it is
        reported as 100% progress. The remaining amount is still the plain
        distance to the next threshold.
        """
        if next_tier is None:
            if current_tier is not None:
                return Progress(progress_percentage=HUNDRED, remaining_to_next_tier=ZERO)
            return Progress()

        if current_tier is not None:
            baseline = current_tier.revenue_threshold
        else:
            baseline = rule.base_revenue_threshold

        next_threshold = next_tier.revenue_threshold
        remaining = max(next_threshold - qualifying_revenue, ZERO)
        band_width = next_threshold - baseline

        if band_width <= 0:
            return Progress(progress_percentage=HUNDRED, remaining_to_next_tier=remaining)

        progress = HUNDRED * (qualifying_revenue - baseline) / band_width
        return Progress(
            progress_percentage=min(max(progress, ZERO), HUNDRED),
            remaining_to_next_tier=remaining,
        )
