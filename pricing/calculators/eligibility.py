"""
Coupon Eligibility Validator

Applies the business rules deciding whether a coupon may be used on an order.
Ineligibility is reported, never raised: every failing rule adds a reason.
"""

from ..models import AssetType, Coupon, CouponStatus, CouponValidationResult, RejectionReason
from ..money import format_cents
from ..validators import InputValidator
from .status import CouponStatusResolver


class CouponEligibilityValidator:
    """Validates a coupon against an order value and a user's usage history."""

    def __init__(
        self,
        status_resolver: CouponStatusResolver | None = None,
        currency_symbol: str = "R$",
    ):
        self.status_resolver = status_resolver or CouponStatusResolver()
        self.input_validator = InputValidator()
        self.currency_symbol = currency_symbol

    def validate(
        self,
        coupon: Coupon,
        order_value: int,
        user_id: str | None = None,
        user_usage_count: int | None = None,
        now: int | None = None,
    ) -> CouponValidationResult:
        """
        Run every rule and collect all reasons in one pass.

        Rules:
        1. Status must be active
        2. order_value >= minimum_order_value
        3. order_value <= maximum_order_value
        4. user_usage_count < user_usage_limit (only when user_id, the limit
           and the count are all known)
        """
        # Malformed records and negative amounts are upstream bugs, not ineligibility
        self.input_validator.validate_order_amount(order_value)
        self.input_validator.validate_coupon(coupon)

        reasons: list[str] = []
        codes: list[RejectionReason] = []

        status = self.status_resolver.resolve(coupon, now)
        if status is not CouponStatus.ACTIVE:
            reasons.append(status.message)
            codes.append(RejectionReason.for_status(status))

        if coupon.minimum_order_value and order_value < coupon.minimum_order_value:
            reasons.append(f"Minimum order value: {format_cents(coupon.minimum_order_value, self.currency_symbol)}")
            codes.append(RejectionReason.BELOW_MINIMUM_ORDER)

        if coupon.maximum_order_value and order_value > coupon.maximum_order_value:
            reasons.append(f"Maximum order value: {format_cents(coupon.maximum_order_value, self.currency_symbol)}")
            codes.append(RejectionReason.ABOVE_MAXIMUM_ORDER)

        user_limit_reached = False
        if user_id and coupon.user_usage_limit and user_usage_count is not None:
            if user_usage_count >= coupon.user_usage_limit:
                reasons.append("Per-user usage limit reached")
                codes.append(RejectionReason.USER_LIMIT_REACHED)
                user_limit_reached = True

        is_valid = len(reasons) == 0
        return CouponValidationResult(
            is_valid=is_valid,
            reasons=reasons,
            can_use=is_valid,
            max_usage_reached=status is CouponStatus.USED_UP,
            user_limit_reached=user_limit_reached,
            reason_codes=codes,
        )

    @staticmethod
    def is_asset_applicable(coupon: Coupon, asset_type: AssetType | str, asset_id: str) -> bool:
        """Global coupons match by asset type; others need an active matching asset."""
        asset_type = AssetType(asset_type)

        if coupon.global_application.is_global:
            return asset_type in coupon.global_application.asset_types

        return any(
            asset.asset_type is asset_type and asset.asset_id == asset_id and asset.is_active
            for asset in coupon.applicable_assets
        )
