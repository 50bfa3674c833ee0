"""
Incentive Processor - Main Orchestrator

Coordinates the incentive pipeline through discrete, testable steps.
"""

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from .calculators import (
    AccountQualifier,
    ProgressProjector,
    RuleMatcher,
    RuleOrder,
    TierAccumulator,
)
from .models import (
    Account,
    IncentiveCalculation,
    IncentiveInput,
    IncentiveRule,
    SalesDatum,
    User,
)
from .names import UserNameResolver
from .output import OutputBuilder
from .validators import InputValidator

logger = logging.getLogger(__name__)


class IncentiveProcessor:
    """
    Main orchestrator for incentive calculation.

    Per user:
    1. Total revenue and commission over the user's accounts
    2. Blended commission rate
    3. Match a rule (first match wins)
    4. Qualify accounts against the rule's commission floor
    5. Walk tiers over qualifying revenue
    6. Project progress to the next tier

    Over a population, one calculation per user, sorted by incentive
    descending. Nothing is cached; every call recomputes from its inputs.
    """

    def __init__(self, rule_order: RuleOrder | str = RuleOrder.INPUT):
        # Initialize all calculators
        self.validator = InputValidator()
        self.rule_matcher = RuleMatcher(rule_order)
        self.account_qualifier = AccountQualifier()
        self.tier_accumulator = TierAccumulator()
        self.progress_projector = ProgressProjector()
        self.output_builder = OutputBuilder()

    def calculate_for_user(
        self,
        user_id: str,
        user_accounts: List[Account],
        all_sales_data: List[SalesDatum],
        active_rules: List[IncentiveRule],
        resolve_name: Optional[Callable[[str], str]] = None,
        rule_matcher: Optional[RuleMatcher] = None,
    ) -> Optional[IncentiveCalculation]:
        """
        Calculate the incentive for a single user.

        Args:
            user_id: The salesperson being calculated
            user_accounts: Accounts the user manages
            all_sales_data: Sales data for every account (filtered here)
            active_rules: Rules already filtered to the active ones
            resolve_name: id -> display name, defaults to the id fallback
            rule_matcher: Overrides the processor's rule evaluation order

        Returns:
            IncentiveCalculation, or None when the user manages no accounts
        """
        if not user_accounts:
            return None

        resolve_name = resolve_name or UserNameResolver()
        rule_matcher = rule_matcher or self.rule_matcher

        # Step 1: Sales data of this user's accounts
        account_ids = {account.id for account in user_accounts}
        user_sales = [datum for datum in all_sales_data if datum.account_id in account_ids]

        # Step 2: Totals and blended rate
        total_revenue = sum((d.total_purchases for d in user_sales), Decimal("0"))
        total_commission = sum((d.gross_commission for d in user_sales), Decimal("0"))
        commission_rate = self._commission_rate(total_revenue, total_commission)

        # Step 3: Match rule
        rule = rule_matcher.match(commission_rate, active_rules)

        if rule is None:
            logger.debug(f"No rule matches commission rate {commission_rate} for user {user_id}")
            return IncentiveCalculation(
                user_id=user_id,
                user_name=resolve_name(user_id),
                total_revenue=total_revenue,
                total_commission=total_commission,
                commission_rate=commission_rate,
                applicable_rule=None,
                current_tier=None,
                next_tier=None,
                incentive_amount=Decimal("0"),
                progress_percentage=Decimal("0"),
                remaining_to_next_tier=Decimal("0"),
                managed_accounts_count=len(user_accounts),
            )

        # Step 4: Qualify accounts
        qualification = self.account_qualifier.qualify(user_accounts, user_sales, rule)

        # Step 5: Walk tiers
        accumulation = self.tier_accumulator.accumulate(qualification.qualifying_revenue, rule.tiers)

        # Step 6: Project progress
        progress = self.progress_projector.project(
            qualification.qualifying_revenue,
            rule,
            accumulation.current_tier,
            accumulation.next_tier,
        )

        return IncentiveCalculation(
            user_id=user_id,
            user_name=resolve_name(user_id),
            total_revenue=total_revenue,
            total_commission=total_commission,
            commission_rate=commission_rate,
            applicable_rule=rule,
            current_tier=accumulation.current_tier,
            next_tier=accumulation.next_tier,
            incentive_amount=accumulation.incentive_amount,
            progress_percentage=progress.progress_percentage,
            remaining_to_next_tier=progress.remaining_to_next_tier,
            managed_accounts_count=len(user_accounts),
            qualifying_revenue=qualification.qualifying_revenue,
            qualifying_accounts_count=len(qualification.account_ids),
        )

    def calculate_for_population(
        self,
        accounts: List[Account],
        all_sales_data: List[SalesDatum],
        all_rules: List[IncentiveRule],
        current_user: User,
        administrator: Optional[bool] = None,
        resolve_name: Optional[Callable[[str], str]] = None,
        rule_matcher: Optional[RuleMatcher] = None,
    ) -> List[IncentiveCalculation]:
        """
        Calculate incentives for everyone in scope.

        Administrator scope covers every user owning at least one account;
        otherwise only `current_user`, over the accounts listed in their
        `managed_accounts`. `administrator` defaults to the user's role.

        Results are sorted by incentive amount, highest first. Ties keep the
        order in which users were enumerated.
        """
        active_rules = [rule for rule in all_rules if rule.is_active]
        if not active_rules:
            return []

        if administrator is None:
            administrator = current_user.is_superadmin
        resolve_name = resolve_name or UserNameResolver(current_user=current_user)

        calculations = []
        for user_id, user_accounts in self._accounts_in_scope(accounts, current_user, administrator):
            calculation = self.calculate_for_user(
                user_id,
                user_accounts,
                all_sales_data,
                active_rules,
                resolve_name=resolve_name,
                rule_matcher=rule_matcher,
            )
            if calculation is not None:
                calculations.append(calculation)

        # sorted() is stable, reverse=True included
        return sorted(calculations, key=lambda c: c.incentive_amount, reverse=True)

    def process(self, input_data: IncentiveInput) -> Dict[str, Any]:
        """
        Process a complete overview request.

        Args:
            input_data: Parsed IncentiveInput snapshot

        Returns:
            Overview dict with summary and per-user calculations
        """
        # Step 1: Validate
        self.validator.validate(input_data)

        # Step 2: Calculate
        calculations = self.calculate_for_population(
            input_data.accounts,
            input_data.sales_data,
            input_data.rules,
            input_data.current_user,
            administrator=input_data.administrator,
            resolve_name=UserNameResolver(input_data.user_names, input_data.current_user),
            rule_matcher=RuleMatcher(input_data.rule_order),
        )

        # Step 3: Build output
        return self.output_builder.build(calculations, input_data.rules)

    def process_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Process an overview request from raw dictionary input.

        Convenience method for API usage.
        """
        input_data = IncentiveInput.from_dict(data)
        return self.process(input_data)

    @staticmethod
    def _commission_rate(total_revenue: Decimal, total_commission: Decimal) -> Decimal:
        """Blended commission rate as a percentage of revenue."""
        if total_revenue > 0:
            return Decimal("100") * total_commission / total_revenue
        return Decimal("0")

    @staticmethod
    def _accounts_in_scope(accounts: List[Account], current_user: User, administrator: bool):
        """Yield (user_id, accounts) pairs for every user in scope."""
        if administrator:
            # dict keeps first-appearance order of user ids
            by_user: Dict[str, List[Account]] = {}
            for account in accounts:
                if not account.user_id:
                    continue
                by_user.setdefault(account.user_id, []).append(account)
            yield from by_user.items()
        else:
            managed = set(current_user.managed_accounts)
            yield current_user.id, [account for account in accounts if account.id in managed]

