"""
Calculators Package

Provides all calculation components for coupon pricing and fee settlement.
"""

from .codes import CouponCodeGenerator
from .conflicts import CouponConflictResolver
from .discount import DiscountCalculator
from .eligibility import CouponEligibilityValidator
from .optimizer import CouponCombinationOptimizer
from .savings import SavingsCalculator
from .settlement import FeeSettlementCalculator
from .status import CouponStatusResolver

__all__ = [
    "CouponCodeGenerator",
    "DiscountCalculator",
    "CouponStatusResolver",
    "CouponEligibilityValidator",
    "CouponConflictResolver",
    "CouponCombinationOptimizer",
    "FeeSettlementCalculator",
    "SavingsCalculator",
]
