"""
PRICING & SETTLEMENT ENGINE
Coupon discounts, eligibility, stacking and partner fee settlement
"""

from .models import QuoteInput, QuoteResult
from .processor import PricingProcessor

__all__ = ['PricingProcessor', 'QuoteInput', 'QuoteResult']
