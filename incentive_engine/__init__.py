"""
SALES INCENTIVE ENGINE
Tiered incentive calculation per salesperson
"""

from .models import IncentiveCalculation, IncentiveInput
from .processor import IncentiveProcessor

__all__ = ['IncentiveProcessor', 'IncentiveInput', 'IncentiveCalculation']
