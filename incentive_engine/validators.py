"""
Input Validation for the Incentive Engine

Validates a parsed request before it reaches the calculators.
Raises ValueError with clear messages for any constraint violations.

Only per-field sanity is checked here. Rule bands that overlap or are
inverted, and tiers listed out of order, are accepted: the calculators
resolve them deterministically.
"""

from .calculators.rules import RuleOrder
from .models import IncentiveInput, IncentiveRule, SalesDatum, User


class InputValidator:
    """Validates incentive input according to business rules."""

    def validate(self, input_data: IncentiveInput) -> None:
        """
        Run all validations. Raises ValueError if any check fails.
        """
        self._validate_user(input_data.current_user)
        self._validate_rule_order(input_data.rule_order)

        for datum in input_data.sales_data:
            self._validate_sales_datum(datum)

        for rule in input_data.rules:
            self._validate_rule(rule)

    def _validate_user(self, user: User) -> None:
        if not user.id:
            raise ValueError("current_user.id is required")

    def _validate_rule_order(self, rule_order: str) -> None:
        valid = [order.value for order in RuleOrder]
        if rule_order not in valid:
            raise ValueError(f"Invalid rule_order: {rule_order}. Must be one of {valid}")

    def _validate_finite(self, value, label: str) -> None:
        # Comparisons against NaN raise InvalidOperation
        if not value.is_finite():
            raise ValueError(f"{label} must be a finite number, got: {value}")

    def _validate_sales_datum(self, datum: SalesDatum) -> None:
        self._validate_finite(datum.total_purchases, f"total_purchases for account {datum.account_id}")
        self._validate_finite(datum.gross_commission, f"gross_commission for account {datum.account_id}")
        if datum.total_purchases < 0:
            raise ValueError(
                f"total_purchases cannot be negative for account {datum.account_id}, "
                f"got: {datum.total_purchases}"
            )
        if datum.gross_commission < 0:
            raise ValueError(
                f"gross_commission cannot be negative for account {datum.account_id}, "
                f"got: {datum.gross_commission}"
            )

    def _validate_rule(self, rule: IncentiveRule) -> None:
        if not isinstance(rule.is_active, bool):
            raise ValueError(f"Rule '{rule.name}' is_active must be true or false, got: {rule.is_active!r}")

        for label in ("commission_rate_min", "commission_rate_max", "min_commission_threshold", "base_revenue_threshold"):
            self._validate_finite(getattr(rule, label), f"Rule '{rule.name}' {label}")

        if not (0 <= rule.commission_rate_min <= 100):
            raise ValueError(
                f"Rule '{rule.name}' commission_rate_min must be between 0 and 100, "
                f"got: {rule.commission_rate_min}"
            )
        if not (0 <= rule.commission_rate_max <= 100):
            raise ValueError(
                f"Rule '{rule.name}' commission_rate_max must be between 0 and 100, "
                f"got: {rule.commission_rate_max}"
            )

        for i, tier in enumerate(rule.tiers):
            self._validate_finite(tier.revenue_threshold, f"Rule '{rule.name}' tier {i} revenue_threshold")
            self._validate_finite(tier.incentive_rate, f"Rule '{rule.name}' tier {i} incentive_rate")
            if tier.revenue_threshold < 0:
                raise ValueError(
                    f"Rule '{rule.name}' tier {i} revenue_threshold cannot be negative, "
                    f"got: {tier.revenue_threshold}"
                )
            if not (0 <= tier.incentive_rate <= 100):
                raise ValueError(
                    f"Rule '{rule.name}' tier {i} incentive_rate must be between 0 and 100, "
                    f"got: {tier.incentive_rate}"
                )
