"""
Coupon Combination Optimizer

Greedy selection of the coupon set giving the largest discount:
either every stackable coupon together, or one non-stackable coupon alone.
"""

from ..models import CombinationResult, Coupon, PrioritizedCoupon
from .discount import DiscountCalculator


class CouponCombinationOptimizer:
    """Picks the best combination among eligible coupons."""

    def __init__(self, discount_calculator: DiscountCalculator | None = None):
        self.discount_calculator = discount_calculator or DiscountCalculator()

    def optimize(self, available_coupons: list[Coupon], order_value: int) -> CombinationResult:
        """
        Find the best combination.

        1. All stackable coupons are summed, each computed against the original
           order value (no compounding). The sum wins if it beats 0.
        2. Each non-stackable coupon alone replaces the best if it beats it.

        Ties keep the earlier candidate.
        """
        stackable = [c for c in available_coupons if c.stackable]
        non_stackable = [c for c in available_coupons if not c.stackable]

        best_combination: list[Coupon] = []
        best_discount = 0

        if stackable:
            combined = sum(self._discount(c, order_value) for c in stackable)
            if combined > best_discount:
                best_discount = combined
                best_combination = list(stackable)

        for coupon in non_stackable:
            discount = self._discount(coupon, order_value)
            if discount > best_discount:
                best_discount = discount
                best_combination = [coupon]

        return CombinationResult(
            best_combination=best_combination,
            total_discount=best_discount,
            final_amount=max(0, order_value - best_discount),
            savings=best_discount,
        )

    def prioritize(self, coupons: list[Coupon], order_value: int) -> list[PrioritizedCoupon]:
        """Coupons paired with their discount, largest discount first (stable)."""
        ranked = [
            PrioritizedCoupon(coupon=c, calculated_discount=self.discount_calculator.calculate_for_coupon(c, order_value))
            for c in coupons
        ]
        return sorted(ranked, key=lambda p: p.priority, reverse=True)

    def _discount(self, coupon: Coupon, order_value: int) -> int:
        return self.discount_calculator.calculate_for_coupon(coupon, order_value).discount_amount
