"""Shared fixtures for incentive engine tests."""

from decimal import Decimal

import pytest

from incentive_engine.models import IncentiveRule, IncentiveTier, User


@pytest.fixture
def standard_rule():
    """Rule for rates of 5% and above: 2% from 0, 5% from 100,000."""
    return IncentiveRule(
        id="r-standard",
        name="Standard Plan",
        is_active=True,
        commission_rate_min=Decimal("5"),
        commission_rate_max=Decimal("100"),
        min_commission_threshold=Decimal("1000"),
        base_revenue_threshold=Decimal("0"),
        tiers=[
            IncentiveTier(Decimal("100000"), Decimal("5")),
            IncentiveTier(Decimal("0"), Decimal("2")),
        ],
    )


@pytest.fixture
def admin_user():
    return User(id="admin-0001", name="Alice Admin", role="superadmin")


@pytest.fixture
def sample_payload():
    """Raw request payload as sent by the dashboard."""
    return {
        "current_user": {
            "id": "admin-0001",
            "name": "Alice Admin",
            "role": "superadmin",
            "managed_accounts": [],
        },
        "users": [
            {"id": "user-aaaa-1111", "name": "Bob Seller"},
            {"id": "user-bbbb-2222", "name": "Carol Seller"},
        ],
        "accounts": [
            {"id": "acc-1", "user_id": "user-aaaa-1111"},
            {"id": "acc-2", "user_id": "user-bbbb-2222"},
            {"id": "acc-3", "user_id": "user-bbbb-2222"},
        ],
        "sales_data": [
            {"account_id": "acc-1", "total_purchases": 150000, "gross_commission": 9000},
            {"account_id": "acc-2", "total_purchases": 50000, "gross_commission": 3000},
            {"account_id": "acc-3", "total_purchases": 200000, "gross_commission": 500},
        ],
        "incentive_rules": [
            {
                "id": "r-standard",
                "name": "Standard Plan",
                "is_active": True,
                "commission_rate_min": 0,
                "commission_rate_max": 100,
                "min_commission_threshold": 1000,
                "base_revenue_threshold": 0,
                "tiers": [
                    {"revenue_threshold": 0, "incentive_rate": 2},
                    {"revenue_threshold": 100000, "incentive_rate": 5},
                ],
            }
        ],
    }

