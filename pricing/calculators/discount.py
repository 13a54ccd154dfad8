"""
Discount Calculator

Computes the discount a single coupon gives on an order amount.
All amounts are integer cents; percentage discounts are floored.
"""

from decimal import Decimal

from ..errors import InvalidAmount
from ..models import Coupon, DiscountCalculation, DiscountType
from ..money import HUNDRED, apply_percentage, floor_cents, quantize_percent, to_decimal


class DiscountCalculator:
    """Calculates percentage and fixed-amount discounts."""

    def calculate(
        self,
        discount_type: DiscountType | str,
        discount_value,
        order_amount: int,
        max_discount_amount: int | None = None,
    ) -> DiscountCalculation:
        """
        Calculate the discount for one coupon.

        - percentage: floor(order * value / 100), clamped to max_discount_amount
        - fixed_amount: min(value, order)

        A zero order amount yields a zero discount and zero percentage.
        """
        if order_amount < 0:
            raise InvalidAmount(f"order_amount cannot be negative, got: {order_amount}")

        discount_type = DiscountType(discount_type)
        max_discount_reached = False

        if discount_type is DiscountType.PERCENTAGE:
            discount = apply_percentage(order_amount, discount_value)
            # A cap of 0 counts as "no cap", as in the stored records
            if max_discount_amount and discount > max_discount_amount:
                discount = max_discount_amount
                max_discount_reached = True
        elif discount_type is DiscountType.FIXED_AMOUNT:
            discount = min(floor_cents(discount_value), order_amount)
        else:
            raise ValueError(f"Unsupported discount type: {discount_type}")

        discount = max(0, min(discount, order_amount))

        return DiscountCalculation(
            original_amount=order_amount,
            discount_amount=discount,
            final_amount=order_amount - discount,
            discount_percentage=self._percentage_of(discount, order_amount),
            max_discount_reached=max_discount_reached,
        )

    def calculate_for_coupon(self, coupon: Coupon, order_amount: int) -> DiscountCalculation:
        return self.calculate(
            coupon.discount_type,
            coupon.discount_value,
            order_amount,
            coupon.max_discount_amount,
        )

    @staticmethod
    def _percentage_of(discount: int, order_amount: int) -> Decimal:
        if order_amount <= 0:
            return Decimal("0")
        return quantize_percent(to_decimal(discount) / Decimal(order_amount) * HUNDRED)
