"""
Pricing Processor - Main Orchestrator

Coordinates the checkout quote pipeline through discrete, testable steps,
and exposes each calculator to the API layers as a dict-in/dict-out call.
"""

import json
import logging
from typing import Any, Dict

from .calculators import (
    CouponCombinationOptimizer,
    CouponConflictResolver,
    CouponEligibilityValidator,
    CouponStatusResolver,
    DiscountCalculator,
    FeeSettlementCalculator,
    SavingsCalculator,
)
from .calculators.status import now_millis
from .models import Coupon, CouponUsage, QuoteContext, QuoteInput, QuoteResult
from .output import OutputBuilder
from .validators import InputValidator

logger = logging.getLogger(__name__)


class PricingProcessor:
    """
    Main orchestrator for checkout quotes.

    Implements a clear pipeline pattern:
    1. Validate Input
    2. Build Context
    3. Check Coupon Eligibility
    4. Check Conflicts among selected coupons
    5. Optimize Combination of eligible coupons
    6. Settle Fees on the discounted amount
    7. Build Output
    """

    def __init__(self, currency_symbol: str = "R$", clock=now_millis):
        self.clock = clock
        self.validator = InputValidator()
        self.status_resolver = CouponStatusResolver(clock)
        self.discount_calculator = DiscountCalculator()
        self.eligibility_validator = CouponEligibilityValidator(self.status_resolver, currency_symbol)
        self.conflict_resolver = CouponConflictResolver()
        self.optimizer = CouponCombinationOptimizer(self.discount_calculator)
        self.settlement_calculator = FeeSettlementCalculator()
        self.savings_calculator = SavingsCalculator()
        self.output_builder = OutputBuilder(currency_symbol)

    def quote(self, input_data: QuoteInput) -> QuoteResult:
        """
        Quote an order through the complete pipeline.

        Args:
            input_data: QuoteInput object

        Returns:
            QuoteResult with validations, conflicts, best combination and settlement
        """
        # Step 1: Validate
        self.validator.validate(input_data)

        # Step 2: Build initial context
        ctx = QuoteContext(quote=input_data, now=input_data.now if input_data.now is not None else self.clock())

        # Step 3: Eligibility per coupon
        for coupon in input_data.coupons:
            ctx.validations[coupon.code] = self.eligibility_validator.validate(
                coupon,
                input_data.order_amount,
                user_id=input_data.user_id,
                user_usage_count=input_data.user_usage_counts.get(coupon.code),
                now=ctx.now,
            )
        logger.debug(f"Eligible coupons: {[c.code for c in ctx.eligible_coupons]}")

        # Step 4: Conflicts among what the customer picked
        ctx.conflicts = self.conflict_resolver.check_conflicts(ctx.selected_coupons)

        # Step 5: Best combination among eligible coupons
        ctx.combination = self.optimizer.optimize(ctx.eligible_coupons, input_data.order_amount)

        # Step 6: Settlement on what the customer actually pays
        if input_data.fee_percentage is not None and ctx.combination.final_amount > 0:
            ctx.fees = self.settlement_calculator.calculate_fees(
                ctx.combination.final_amount, input_data.fee_percentage
            )

        logger.info(
            f"Quoted order of {input_data.order_amount} cents: "
            f"discount {ctx.combination.total_discount}, final {ctx.combination.final_amount}"
        )

        # Step 7: Build output
        return self.output_builder.build(ctx)

    def quote_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Quote an order from raw dictionary input.

        Convenience method for API usage.
        """
        input_data = QuoteInput.from_dict(data)
        result = self.quote(input_data)
        return self._result_to_dict(result)

    # -------------------------------------------------------------------------
    # Single-calculator entry points used by the API layers
    # -------------------------------------------------------------------------

    def discount_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        calc = self.discount_calculator.calculate(
            data["discount_type"],
            data["discount_value"],
            int(data["order_amount"]),
            data.get("max_discount_amount"),
        )
        return self.output_builder.discount_to_dict(calc)

    def validate_coupon_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        coupon = Coupon.from_dict(data["coupon"])
        result = self.eligibility_validator.validate(
            coupon,
            int(data["order_value"]),
            user_id=data.get("user_id"),
            user_usage_count=data.get("user_usage_count"),
            now=data.get("now"),
        )
        output = self.output_builder.validation_to_dict(coupon.code, result)
        output["status"] = self.status_resolver.resolve(coupon, data.get("now")).value
        output["description"] = self.output_builder.describe_coupon(coupon)
        return output

    def conflicts_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        coupons = [Coupon.from_dict(c) for c in data["coupons"]]
        return self.output_builder.conflicts_to_dict(self.conflict_resolver.check_conflicts(coupons))

    def optimize_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        coupons = [Coupon.from_dict(c) for c in data["coupons"]]
        order_value = int(data["order_value"])
        output = self.output_builder.combination_to_dict(self.optimizer.optimize(coupons, order_value))
        output["ranking"] = [
            {"code": p.coupon.code, "discount_amount": p.priority}
            for p in self.optimizer.prioritize(coupons, order_value)
        ]
        return output

    def fees_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        fees = self.settlement_calculator.calculate_fees(data["amount"], data["fee_percentage"])
        return self.output_builder.fees_to_dict(fees)

    def application_fee_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        fee = self.settlement_calculator.calculate_application_fee(data["total_amount"], data["fee_percentage"])
        return self.output_builder.application_fee_to_dict(fee)

    def savings_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        usages = [CouponUsage.from_dict(u) for u in data["usages"]]
        return self.output_builder.savings_to_dict(self.savings_calculator.calculate(usages))

    def _result_to_dict(self, result: QuoteResult) -> Dict[str, Any]:
        """Convert QuoteResult to dictionary for API response."""
        output = {
            "order_summary": result.order_summary,
            "coupon_validations": result.coupon_validations,
            "conflicts": result.conflicts,
            "best_combination": result.best_combination,
        }
        if result.settlement:
            output["settlement"] = result.settlement
        return output


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def quote_from_dict(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """Quote an order from a Python dict and return a Python dict."""
    processor = PricingProcessor()
    return processor.quote_from_dict(input_data)


def quote_from_json(json_input: str) -> str:
    """
    Quote an order from a JSON string and return a JSON string.
    Errors are returned as JSON, never raised.
    """
    try:
        input_data = json.loads(json_input)
        processor = PricingProcessor()
        result = processor.quote_from_dict(input_data)
        return json.dumps(result, indent=2)

    except ValueError as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)

    except Exception as e:
        logger.error(f"Quote failed: {str(e)}", exc_info=True)
        error_response = {"error": str(e), "status": "failed"}
        return json.dumps(error_response, indent=2)
