"""
Calculators Package

Provides the calculation components of the incentive pipeline.
"""

from .progress import ProgressProjector
from .qualifier import AccountQualifier
from .rules import RuleMatcher, RuleOrder
from .tiers import TierAccumulator

__all__ = [
    "RuleMatcher",
    "RuleOrder",
    "AccountQualifier",
    "TierAccumulator",
    "ProgressProjector",
]
