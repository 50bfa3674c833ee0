"""
Output Builder

Constructs the overview response from a list of incentive calculations.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from .models import IncentiveCalculation, IncentiveRule, IncentiveTier


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places. Used for percentages too."""
    return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _fmt(value) -> str:
    """Format a number for descriptions."""
    return f"{value:,.2f}"


class OutputBuilder:
    """Builds the overview output."""

    def build(self, calculations: list[IncentiveCalculation], rules: list[IncentiveRule]) -> dict:
        """Construct the overview from calculations and the configured rules."""
        active_rules = [rule for rule in rules if rule.is_active]
        return {
            "summary": self._build_summary(calculations, active_rules),
            "calculations": [self._build_calculation(c) for c in calculations],
        }

    def _build_summary(self, calculations: list[IncentiveCalculation], active_rules: list[IncentiveRule]) -> dict:
        """Headline figures across every calculated user."""
        total_incentives = sum((c.incentive_amount for c in calculations), Decimal("0"))
        # The first active rule is the one the overview headlines
        primary = active_rules[0] if active_rules else None

        return {
            "total_incentives": to_money(total_incentives),
            "earning_count": sum(1 for c in calculations if c.incentive_amount > 0),
            "users_calculated": len(calculations),
            "active_rule_count": len(active_rules),
            "primary_rule": self._build_rule(primary),
        }

    def _build_calculation(self, calc: IncentiveCalculation) -> dict:
        return {
            "user_id": calc.user_id,
            "user_name": calc.user_name,
            "total_revenue": to_money(calc.total_revenue),
            "total_commission": to_money(calc.total_commission),
            "commission_rate": to_money(calc.commission_rate),
            "qualifying_revenue": to_money(calc.qualifying_revenue),
            "qualifying_accounts_count": calc.qualifying_accounts_count,
            "managed_accounts_count": calc.managed_accounts_count,
            "applicable_rule": calc.applicable_rule.name if calc.applicable_rule else None,
            "current_tier": self._build_tier(calc.current_tier),
            "next_tier": self._build_tier(calc.next_tier),
            "incentive_amount": to_money(calc.incentive_amount),
            "progress_percentage": to_money(calc.progress_percentage),
            "remaining_to_next_tier": to_money(calc.remaining_to_next_tier),
            "description": self._describe(calc),
        }

    def _build_rule(self, rule: Optional[IncentiveRule]) -> Optional[dict]:
        if rule is None:
            return None
        return {
            "id": rule.id,
            "name": rule.name,
            "base_revenue_threshold": to_money(rule.base_revenue_threshold),
            "min_commission_threshold": to_money(rule.min_commission_threshold),
            "commission_rate_min": to_money(rule.commission_rate_min),
            "commission_rate_max": None if rule.is_unbounded else to_money(rule.commission_rate_max),
            "unbounded": rule.is_unbounded,
            "tier_count": len(rule.tiers),
        }

    def _build_tier(self, tier: Optional[IncentiveTier]) -> Optional[dict]:
        if tier is None:
            return None
        return {
            "revenue_threshold": to_money(tier.revenue_threshold),
            "incentive_rate": to_money(tier.incentive_rate),
        }

    def _describe(self, calc: IncentiveCalculation) -> str:
        """Plain-language note explaining the figures."""
        rate = to_money(calc.commission_rate)
        if calc.applicable_rule is None:
            return f"No applicable incentive rule found for this commission rate ({rate:.2f}%)"

        rule_name = calc.applicable_rule.name
        if calc.current_tier is None and calc.next_tier is None:
            return f"Rule '{rule_name}' has no tiers configured"

        if calc.current_tier is None:
            return (
                f"Rule '{rule_name}': qualifying revenue {_fmt(calc.qualifying_revenue)} is below the first tier "
                f"at {_fmt(calc.next_tier.revenue_threshold)}; {_fmt(calc.remaining_to_next_tier)} remaining"
            )

        if calc.next_tier is None:
            return (
                f"Rule '{rule_name}': top tier reached at {_fmt(calc.current_tier.revenue_threshold)} "
                f"({to_money(calc.current_tier.incentive_rate)}% rate)"
            )

        return (
            f"Rule '{rule_name}': {to_money(calc.progress_percentage):.2f}% of the way to the next tier "
            f"at {_fmt(calc.next_tier.revenue_threshold)}; {_fmt(calc.remaining_to_next_tier)} remaining"
        )
