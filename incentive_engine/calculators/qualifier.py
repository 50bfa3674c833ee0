"""
Account Qualifier

Filters a salesperson's accounts down to those whose own commission clears
the rule's minimum, and totals the revenue of the survivors.
"""

from collections import defaultdict
from decimal import Decimal

from ..models import Account, IncentiveRule, Qualification, SalesDatum


class AccountQualifier:
    """Partitions accounts into qualifying and non-qualifying."""

    def qualify(
        self,
        accounts: list[Account],
        sales_data: list[SalesDatum],
        rule: IncentiveRule,
    ) -> Qualification:
        """
        Qualify accounts against `rule.min_commission_threshold`.

        Each account is judged on the sum of its own gross commission only.
        An account without sales data has zero commission, so it qualifies
        only when the threshold is zero or negative.

        Revenue of non-qualifying accounts never reaches the tier walk.
        """
        account_ids = {account.id for account in accounts}
        commission_by_account = defaultdict(lambda: Decimal("0"))
        revenue_by_account = defaultdict(lambda: Decimal("0"))

        for datum in sales_data:
            if datum.account_id not in account_ids:
                continue
            commission_by_account[datum.account_id] += datum.gross_commission
            revenue_by_account[datum.account_id] += datum.total_purchases

        qualifying = frozenset(
            account.id
            for account in accounts
            if commission_by_account[account.id] >= rule.min_commission_threshold
        )

        qualifying_revenue = sum(
            (revenue_by_account[account_id] for account_id in qualifying),
            Decimal("0"),
        )

        return Qualification(account_ids=qualifying, qualifying_revenue=qualifying_revenue)
