"""
Rule Matcher

Selects the incentive rule whose commission-rate band contains a
salesperson's blended commission rate.
"""

from decimal import Decimal
from enum import Enum

from ..models import IncentiveRule


class RuleOrder(str, Enum):
    """Order in which candidate rules are evaluated."""

    INPUT = "input"  # as supplied by the caller
    PRIORITY = "priority"  # ascending `priority`, unprioritised rules last


class RuleMatcher:
    """First-match-wins rule selection.

    Overlapping bands are not an error: whichever rule comes first in the
    evaluation order wins. No tie-breaking by band width or specificity.
    """

    # A max of exactly 100% means "no upper bound"
    UNBOUNDED_MAX = Decimal("100")

    def __init__(self, order: RuleOrder | str = RuleOrder.INPUT):
        self.order = RuleOrder(order)

    def ordered(self, rules: list[IncentiveRule]) -> list[IncentiveRule]:
        """Return the rules in the order they will be evaluated."""
        if self.order == RuleOrder.PRIORITY:
            # sorted() is stable, so equal priorities keep input order
            return sorted(
                rules,
                key=lambda r: (r.priority is None, r.priority if r.priority is not None else 0),
            )
        return list(rules)

    def match(self, commission_rate: Decimal, rules: list[IncentiveRule]) -> IncentiveRule | None:
        """Return the first rule whose band contains `commission_rate`, or None."""
        for rule in self.ordered(rules):
            if self.matches(commission_rate, rule):
                return rule
        return None

    def matches(self, commission_rate: Decimal, rule: IncentiveRule) -> bool:
        if commission_rate < rule.commission_rate_min:
            return False
        if rule.commission_rate_max == self.UNBOUNDED_MAX:
            return True
        return commission_rate <= rule.commission_rate_max
