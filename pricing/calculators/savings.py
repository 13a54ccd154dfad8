"""
User Savings Calculator

Aggregates how much a user has saved with coupons.
"""

from decimal import ROUND_HALF_UP, Decimal

from ..models import APPLIED_USAGE_STATUS, CouponUsage, UserSavings


class SavingsCalculator:
    """Summarizes applied coupon usages. Other statuses (e.g. refunded) are ignored."""

    def calculate(self, usages: list[CouponUsage]) -> UserSavings:
        applied = [u for u in usages if u.status == APPLIED_USAGE_STATUS]
        total = sum(u.discount_amount for u in applied)
        count = len(applied)

        average = Decimal("0")
        if count > 0:
            average = (Decimal(total) / Decimal(count)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

        return UserSavings(
            total_savings=total,
            usage_count=count,
            average_savings=average,
            last_used=max((u.applied_at for u in applied), default=None),
        )
