"""
Output Builder

Constructs API responses from calculation results.
Amounts stay in integer cents; Decimals are rendered as floats.
"""

from decimal import Decimal

from .models import (
    ApplicationFee,
    CombinationResult,
    ConflictReport,
    Coupon,
    CouponValidationResult,
    DiscountCalculation,
    DiscountType,
    FeeCalculation,
    QuoteContext,
    QuoteResult,
    UserSavings,
)
from .money import format_cents


def to_float(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return round(float(value), 2)


class OutputBuilder:
    """Builds the final output response."""

    def __init__(self, currency_symbol: str = "R$"):
        self.currency_symbol = currency_symbol

    def build(self, ctx: QuoteContext) -> QuoteResult:
        """Construct the complete quote result from processing context."""
        return QuoteResult(
            order_summary=self._build_order_summary(ctx),
            coupon_validations=[
                self.validation_to_dict(c.code, ctx.validations[c.code]) for c in ctx.quote.coupons
            ],
            conflicts=self.conflicts_to_dict(ctx.conflicts),
            best_combination=self.combination_to_dict(ctx.combination),
            settlement=self.fees_to_dict(ctx.fees) if ctx.fees else None,
        )

    def _build_order_summary(self, ctx: QuoteContext) -> dict:
        quote = ctx.quote
        combination = ctx.combination
        return {
            "order_amount": quote.order_amount,
            "user_id": quote.user_id,
            "coupons_received": len(quote.coupons),
            "coupons_eligible": len(ctx.eligible_coupons),
            "total_discount": combination.total_discount,
            "final_amount": combination.final_amount,
            "evaluated_at": ctx.now,
        }

    def discount_to_dict(self, calc: DiscountCalculation) -> dict:
        return {
            "original_amount": calc.original_amount,
            "discount_amount": calc.discount_amount,
            "final_amount": calc.final_amount,
            "discount_percentage": to_float(calc.discount_percentage),
            "max_discount_reached": calc.max_discount_reached,
        }

    def validation_to_dict(self, code: str, result: CouponValidationResult) -> dict:
        return {
            "code": code,
            "is_valid": result.is_valid,
            "can_use": result.can_use,
            "reasons": list(result.reasons),
            "reason_codes": [r.value for r in result.reason_codes],
            "max_usage_reached": result.max_usage_reached,
            "user_limit_reached": result.user_limit_reached,
        }

    def conflicts_to_dict(self, report: ConflictReport) -> dict:
        return {"has_conflicts": report.has_conflicts, "conflicts": list(report.conflicts)}

    def combination_to_dict(self, result: CombinationResult) -> dict:
        return {
            "coupons": [c.code for c in result.best_combination],
            "total_discount": result.total_discount,
            "final_amount": result.final_amount,
            "savings": result.savings,
        }

    def fees_to_dict(self, fees: FeeCalculation) -> dict:
        return {
            "transaction_amount": fees.transaction_amount,
            "stripe_fee": fees.stripe_fee,
            "platform_fee": fees.platform_fee,
            "partner_amount": fees.partner_amount,
        }

    def application_fee_to_dict(self, fee: ApplicationFee) -> dict:
        return {
            "total_amount": fee.total_amount,
            "fee_percentage": to_float(fee.fee_percentage),
            "application_fee_amount": fee.application_fee_amount,
            "partner_amount": fee.partner_amount,
            "estimated_stripe_fee": fee.estimated_stripe_fee,
        }

    def savings_to_dict(self, savings: UserSavings) -> dict:
        return {
            "total_savings": savings.total_savings,
            "usage_count": savings.usage_count,
            "average_savings": to_float(savings.average_savings),
            "last_used": savings.last_used,
        }

    def describe_coupon(self, coupon: Coupon) -> str:
        """Readable summary, e.g. '20% off (max R$ 50.00) on orders above R$ 100.00'."""
        if coupon.discount_type is DiscountType.PERCENTAGE:
            description = f"{coupon.discount_value.normalize():f}% off"
            if coupon.max_discount_amount:
                description += f" (max {self._fmt(coupon.max_discount_amount)})"
        elif coupon.discount_type is DiscountType.FIXED_AMOUNT:
            description = f"{self._fmt(int(coupon.discount_value))} off"
        else:
            raise ValueError(f"Unsupported discount type: {coupon.discount_type}")

        if coupon.minimum_order_value:
            description += f" on orders above {self._fmt(coupon.minimum_order_value)}"

        return description

    def _fmt(self, amount_cents: int) -> str:
        return format_cents(amount_cents, self.currency_symbol)
