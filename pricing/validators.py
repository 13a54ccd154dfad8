"""
Input Validation for the Pricing & Settlement Engine

InputValidator guards the engine: it raises on data that can only come from
an upstream bug. CouponRecordValidator checks coupon records entered by
admins and partners and returns every problem as a list of messages.
"""

from decimal import Decimal

from .errors import InvalidAmount, InvalidDateRange, InvalidDiscountValue, InvalidFeePercentage
from .models import Coupon, CouponType, DiscountType, QuoteInput
from .money import to_decimal

MAX_VALIDITY_MS = 2 * 365 * 24 * 60 * 60 * 1000


class InputValidator:
    """Validates engine input. Raises a ValueError subclass on any violation."""

    def validate(self, input_data: QuoteInput) -> None:
        """
        Run all validations. Raises ValueError if any check fails.
        """
        self.validate_order_amount(input_data.order_amount)

        seen_codes = set()
        for coupon in input_data.coupons:
            self.validate_coupon(coupon)
            if coupon.code in seen_codes:
                raise ValueError(f"Duplicate coupon code in input: {coupon.code}")
            seen_codes.add(coupon.code)

        for code, count in input_data.user_usage_counts.items():
            if count < 0:
                raise ValueError(f"user usage count cannot be negative for {code}, got: {count}")

        selected = input_data.selected_codes
        if selected is not None and not isinstance(selected, (list, tuple)):
            raise ValueError(f"selected_codes must be a list of coupon codes, got: {selected!r}")

        if input_data.fee_percentage is not None:
            fee = to_decimal(input_data.fee_percentage)
            if fee.is_nan() or not (0 <= fee <= 100):
                raise InvalidFeePercentage(
                    f"Fee percentage must be between 0 and 100, got: {input_data.fee_percentage}"
                )

    def validate_coupon(self, coupon: Coupon) -> None:
        """Validate the invariants every stored coupon must hold."""
        if coupon.valid_until < coupon.valid_from:
            raise InvalidDateRange(
                f"Coupon {coupon.code}: validUntil ({coupon.valid_until}) is before validFrom ({coupon.valid_from})"
            )

        if coupon.discount_value <= 0:
            raise InvalidDiscountValue(
                f"Coupon {coupon.code}: discountValue must be positive, got: {coupon.discount_value}"
            )

        if coupon.discount_type is DiscountType.PERCENTAGE and coupon.discount_value > 100:
            raise InvalidDiscountValue(
                f"Coupon {coupon.code}: percentage discountValue cannot exceed 100, got: {coupon.discount_value}"
            )

        if coupon.usage_count < 0:
            raise ValueError(f"Coupon {coupon.code}: usageCount cannot be negative, got: {coupon.usage_count}")

    def validate_order_amount(self, amount: int) -> None:
        if amount < 0:
            raise InvalidAmount(f"Order amount cannot be negative, got: {amount}")


class CouponRecordValidator:
    """Validates coupon data before it is saved. Collects every error."""

    MIN_CODE_LENGTH = 3
    MAX_CODE_LENGTH = 20
    CODE_CHARS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-")

    def collect_errors(self, coupon: Coupon, now: int) -> list[str]:
        errors: list[str] = []

        for check in (
            self.validate_code(coupon.code),
            self.validate_discount_value(coupon.discount_type, coupon.discount_value, coupon.max_discount_amount),
            self.validate_date_range(coupon.valid_from, coupon.valid_until, now),
            self.validate_usage_limits(coupon.usage_limit, coupon.user_usage_limit),
            self.validate_order_value_limits(coupon.minimum_order_value, coupon.maximum_order_value),
        ):
            if check:
                errors.append(check)

        if not coupon.name.strip():
            errors.append("Coupon name is required")

        if not coupon.description.strip():
            errors.append("Coupon description is required")

        if not coupon.global_application.is_global and not coupon.applicable_assets:
            errors.append("Coupon must be global or have at least one applicable asset")

        if coupon.coupon_type is CouponType.PRIVATE and not coupon.allowed_users:
            errors.append("Private coupons must list at least one allowed user")

        return errors

    # Each check returns an error message, or None when the value is fine

    def validate_code(self, code: str) -> str | None:
        if not code or not code.strip():
            return "Coupon code is required"
        if len(code) < self.MIN_CODE_LENGTH:
            return f"Coupon code must have at least {self.MIN_CODE_LENGTH} characters"
        if len(code) > self.MAX_CODE_LENGTH:
            return f"Coupon code must have at most {self.MAX_CODE_LENGTH} characters"
        if not set(code.upper()) <= self.CODE_CHARS:
            return "Coupon code may only contain letters, numbers and hyphens"
        return None

    def validate_discount_value(
        self,
        discount_type: DiscountType,
        discount_value: Decimal,
        max_discount_amount: int | None = None,
    ) -> str | None:
        if discount_value <= 0:
            return "Discount value must be greater than zero"

        if discount_type is DiscountType.PERCENTAGE:
            if discount_value > 100:
                return "Percentage discount cannot exceed 100%"
            if max_discount_amount is not None and max_discount_amount <= 0:
                return "Maximum discount amount must be greater than zero"

        return None

    def validate_date_range(self, valid_from: int, valid_until: int, now: int) -> str | None:
        if valid_from >= valid_until:
            return "Start date must be before end date"
        if valid_until <= now:
            return "End date must be in the future"
        if valid_until - valid_from > MAX_VALIDITY_MS:
            return "Validity period cannot exceed 2 years"
        return None

    def validate_usage_limits(self, usage_limit: int | None, user_usage_limit: int | None) -> str | None:
        if usage_limit is not None and usage_limit <= 0:
            return "Total usage limit must be greater than zero"
        if user_usage_limit is not None and user_usage_limit <= 0:
            return "Per-user usage limit must be greater than zero"
        if usage_limit and user_usage_limit and user_usage_limit > usage_limit:
            return "Per-user usage limit cannot exceed the total usage limit"
        return None

    def validate_order_value_limits(self, minimum: int | None, maximum: int | None) -> str | None:
        if minimum is not None and minimum < 0:
            return "Minimum order value cannot be negative"
        if maximum is not None and maximum <= 0:
            return "Maximum order value must be greater than zero"
        if minimum and maximum and minimum > maximum:
            return "Minimum order value cannot exceed the maximum order value"
        return None
