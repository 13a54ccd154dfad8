"""
Exceptions for the Pricing & Settlement Engine

Only programmer/data-integrity problems are raised. Coupon ineligibility is
never an exception; it is reported through CouponValidationResult.reasons.
"""


class InvalidAmount(ValueError):
    """Transaction or order amount is not a usable amount of cents."""


class InvalidFeePercentage(ValueError):
    """Fee percentage outside the [0, 100] range."""


class InvalidDateRange(ValueError):
    """Coupon record with validUntil before validFrom."""


class InvalidDiscountValue(ValueError):
    """Coupon record whose discount value breaks the discount type's bounds."""


class CouponCodeExhausted(RuntimeError):
    """Every generated coupon code collided with an existing one."""
