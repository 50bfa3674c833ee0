"""
Domain Models for the Incentive Engine

These dataclasses provide type-safe representations of all business entities.
All monetary values and percentages use Decimal for precision.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation


class InputError(ValueError):
    """A request payload that cannot be turned into an IncentiveInput."""


def to_decimal(value) -> Decimal:
    """Convert a raw JSON number (or string) to Decimal without float noise."""
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise InputError(f"Invalid numeric value: {value!r}") from None
    # json.loads accepts NaN and Infinity
    if not result.is_finite():
        raise InputError(f"Numeric value must be finite, got: {value!r}")
    return result


def to_id(value) -> str | None:
    """Ids arrive as JSON strings or integers; the engine compares them as strings."""
    if value is None:
        return None
    return str(value)


def to_bool(value, name: str) -> bool:
    if not isinstance(value, bool):
        raise InputError(f"{name} must be true or false, got: {value!r}")
    return value


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass
class Account:
    """An account owned by exactly one salesperson."""

    id: str
    user_id: str | None

    @classmethod
    def from_dict(cls, data: dict) -> "Account":
        return cls(id=to_id(data["id"]), user_id=to_id(data.get("user_id")))


@dataclass
class SalesDatum:
    """A sales record belonging to one account."""

    account_id: str
    total_purchases: Decimal
    gross_commission: Decimal

    @classmethod
    def from_dict(cls, data: dict) -> "SalesDatum":
        return cls(
            account_id=to_id(data["account_id"]),
            total_purchases=to_decimal(data.get("total_purchases", 0)),
            gross_commission=to_decimal(data.get("gross_commission", 0)),
        )


@dataclass
class IncentiveTier:
    """A revenue band with its own incentive rate (percentage)."""

    revenue_threshold: Decimal
    incentive_rate: Decimal

    @classmethod
    def from_dict(cls, data: dict) -> "IncentiveTier":
        return cls(
            revenue_threshold=to_decimal(data["revenue_threshold"]),
            incentive_rate=to_decimal(data["incentive_rate"]),
        )


@dataclass
class IncentiveRule:
    """Incentive rule configuration.

    The rule applies to salespeople whose blended commission rate falls inside
    [commission_rate_min, commission_rate_max]. A max of exactly 100 means
    the band has no upper bound.
    """

    name: str
    is_active: bool
    commission_rate_min: Decimal
    commission_rate_max: Decimal
    min_commission_threshold: Decimal = Decimal("0")
    base_revenue_threshold: Decimal = Decimal("0")
    tiers: list[IncentiveTier] = field(default_factory=list)
    id: str | None = None
    priority: int | None = None

    @property
    def is_unbounded(self) -> bool:
        return self.commission_rate_max == Decimal("100")

    @classmethod
    def from_dict(cls, data: dict) -> "IncentiveRule":
        name = data["name"]
        priority = data.get("priority")
        return cls(
            id=to_id(data.get("id")),
            name=name,
            is_active=to_bool(data.get("is_active", False), f"Rule '{name}' is_active"),
            commission_rate_min=to_decimal(data.get("commission_rate_min", 0)),
            commission_rate_max=to_decimal(data.get("commission_rate_max", 100)),
            min_commission_threshold=to_decimal(data.get("min_commission_threshold", 0)),
            base_revenue_threshold=to_decimal(data.get("base_revenue_threshold", 0)),
            tiers=[IncentiveTier.from_dict(t) for t in data.get("tiers", [])],
            priority=int(priority) if priority is not None else None,
        )


@dataclass
class User:
    """The user requesting the overview."""

    id: str
    name: str
    role: str = "user"
    managed_accounts: list[str] = field(default_factory=list)

    @property
    def is_superadmin(self) -> bool:
        return self.role == "superadmin"

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=to_id(data["id"]),
            name=data.get("name", ""),
            role=data.get("role", "user"),
            managed_accounts=[to_id(a) for a in data.get("managed_accounts") or []],
        )


@dataclass
class IncentiveInput:
    """Complete snapshot handed to the engine for one overview request."""

    accounts: list[Account]
    sales_data: list[SalesDatum]
    rules: list[IncentiveRule]
    current_user: User
    user_names: dict[str, str] = field(default_factory=dict)
    rule_order: str = "input"
    administrator: bool | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "IncentiveInput":
        """
        Build the snapshot from a raw request payload.

        Raises InputError (a ValueError) for anything that is not a usable
        payload, so callers only need to handle ValueError.
        """
        if not isinstance(data, dict):
            raise InputError("Request body must be a JSON object")

        try:
            # Roster may come as a list of user records or a plain id -> name map
            roster = data.get("users") or {}
            if isinstance(roster, dict):
                user_names = {to_id(k): v for k, v in roster.items()}
            else:
                user_names = {to_id(u["id"]): u.get("name", "") for u in roster}

            administrator = data.get("administrator")
            if administrator is not None:
                administrator = to_bool(administrator, "administrator")

            return cls(
                accounts=[Account.from_dict(a) for a in data.get("accounts", [])],
                sales_data=[SalesDatum.from_dict(s) for s in data.get("sales_data", [])],
                rules=[IncentiveRule.from_dict(r) for r in data.get("incentive_rules", [])],
                current_user=User.from_dict(data["current_user"]),
                user_names=user_names,
                rule_order=data.get("rule_order", "input"),
                administrator=administrator,
            )
        except KeyError as e:
            raise InputError(f"Missing required field: {e.args[0]!r}") from None
        except (TypeError, AttributeError) as e:
            raise InputError(f"Malformed payload: {e}") from None


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class Qualification:
    """Accounts that clear the rule's per-account commission floor."""

    account_ids: frozenset = frozenset()
    qualifying_revenue: Decimal = Decimal("0")


@dataclass(frozen=True)
class Reached:
    """A tier the qualifying revenue reached, with its band contribution."""

    tier: IncentiveTier
    band_revenue: Decimal
    contribution: Decimal


@dataclass(frozen=True)
class NotReached:
    """The first tier the qualifying revenue did not reach."""

    tier: IncentiveTier


@dataclass(frozen=True)
class TierAccumulation:
    """Result of walking a rule's tiers."""

    current_tier: IncentiveTier | None = None
    next_tier: IncentiveTier | None = None
    incentive_amount: Decimal = Decimal("0")
    steps: tuple = ()


@dataclass(frozen=True)
class Progress:
    """Progress towards the next tier."""

    progress_percentage: Decimal = Decimal("0")
    remaining_to_next_tier: Decimal = Decimal("0")


@dataclass(frozen=True)
class IncentiveCalculation:
    """Final incentive figures for one salesperson."""

    user_id: str
    user_name: str
    total_revenue: Decimal
    total_commission: Decimal
    commission_rate: Decimal
    applicable_rule: IncentiveRule | None
    current_tier: IncentiveTier | None
    next_tier: IncentiveTier | None
    incentive_amount: Decimal
    progress_percentage: Decimal
    remaining_to_next_tier: Decimal
    managed_accounts_count: int
    qualifying_revenue: Decimal = Decimal("0")
    qualifying_accounts_count: int = 0
