"""
Integration Scenarios for the Pricing & Settlement Engine

Each class is a business scenario documented in
docs/test_scenarios_business_summary.md. Keep both files in sync
(tests/test_docs_sync.py enforces it).
"""

import pytest

from pricing import PricingProcessor

NOW = 1_700_000_000_000
DAY_MS = 24 * 60 * 60 * 1000


def coupon(code, discount_type, value, stackable=False, **extra):
    return {
        "code": code,
        "discountType": discount_type,
        "discountValue": value,
        "validFrom": NOW - DAY_MS,
        "validUntil": NOW + 30 * DAY_MS,
        "stackable": stackable,
        **extra,
    }


@pytest.fixture
def processor():
    return PricingProcessor(clock=lambda: NOW)


class TestReferenceCalculations:
    """Known-good values for discounts, fees, conflicts and the optimizer."""

    def test_percentage_discount_on_100(self, processor):
        result = processor.discount_from_dict({"discount_type": "percentage", "discount_value": 20, "order_amount": 100})

        assert result["discount_amount"] == 20
        assert result["final_amount"] == 80
        assert result["discount_percentage"] == 20

    def test_percentage_discount_capped(self, processor):
        result = processor.discount_from_dict(
            {"discount_type": "percentage", "discount_value": 50, "order_amount": 200, "max_discount_amount": 50}
        )

        assert result["discount_amount"] == 50
        assert result["max_discount_reached"] is True

    def test_partner_fees_standard(self, processor):
        result = processor.fees_from_dict({"amount": 10000, "fee_percentage": 15})

        assert result["stripe_fee"] == 319
        assert result["platform_fee"] == 1500
        assert result["partner_amount"] == 8181

    def test_partner_fees_tiny_percentage(self, processor):
        result = processor.fees_from_dict({"amount": 100, "fee_percentage": 0.1})

        assert result["platform_fee"] == 0
        assert result["partner_amount"] == 69

    def test_two_non_stackable_conflict(self, processor):
        result = processor.conflicts_from_dict({
            "coupons": [coupon("A", "fixed_amount", 100), coupon("B", "fixed_amount", 200)],
        })

        assert result["has_conflicts"] is True

    def test_optimize_without_coupons(self, processor):
        result = processor.optimize_from_dict({"coupons": [], "order_value": 500})

        assert result["coupons"] == []
        assert result["total_discount"] == 0
        assert result["final_amount"] == 500


class TestAccommodationCheckout:
    """A R$ 1.500,00 stay with a capped seasonal coupon and an 18% partner fee."""

    def test_capped_coupon_applied_and_partner_settled(self, processor):
        result = processor.quote_from_dict({
            "order_amount": 150000,
            "fee_percentage": 18,
            "coupons": [coupon("SEASON20", "percentage", 20, maxDiscountAmount=20000)],
        })

        assert result["best_combination"]["total_discount"] == 20000
        assert result["best_combination"]["final_amount"] == 130000
        # 130000: stripe 3770 + 29, platform 23400
        assert result["settlement"] == {
            "transaction_amount": 130000,
            "stripe_fee": 3799,
            "platform_fee": 23400,
            "partner_amount": 102801,
        }


class TestStackingVersusExclusive:
    """Stackable coupons summed versus one bigger exclusive coupon."""

    def test_exclusive_coupon_wins_when_larger(self, processor):
        result = processor.quote_from_dict({
            "order_amount": 25000,
            "coupons": [
                coupon("TEN", "percentage", 10, stackable=True),
                coupon("FIVE-OFF", "fixed_amount", 500, stackable=True),
                coupon("VIP", "fixed_amount", 4000),
            ],
        })

        # stack: 2500 + 500 = 3000 < 4000
        assert result["best_combination"]["coupons"] == ["VIP"]
        assert result["best_combination"]["final_amount"] == 21000

    def test_stack_wins_when_larger(self, processor):
        result = processor.quote_from_dict({
            "order_amount": 50000,
            "coupons": [
                coupon("TEN", "percentage", 10, stackable=True),
                coupon("FIVE-OFF", "fixed_amount", 500, stackable=True),
                coupon("VIP", "fixed_amount", 4000),
            ],
        })

        # stack: 5000 + 500 = 5500 > 4000
        assert result["best_combination"]["coupons"] == ["TEN", "FIVE-OFF"]
        assert result["best_combination"]["total_discount"] == 5500


class TestIneligibleCouponsExcluded:
    """Coupons failing business rules never reach the optimizer."""

    def test_every_reason_reported_and_coupon_skipped(self, processor):
        result = processor.quote_from_dict({
            "order_amount": 3000,
            "user_id": "user_1",
            "user_usage_counts": {"WELCOME": 1},
            "coupons": [
                coupon("WELCOME", "fixed_amount", 1000, minimumOrderValue=5000, userUsageLimit=1,
                       type="first_purchase"),
                coupon("SMALL", "fixed_amount", 300),
            ],
        })

        validation = result["coupon_validations"][0]
        assert validation["reason_codes"] == ["below_minimum_order", "user_limit_reached"]
        assert result["best_combination"]["coupons"] == ["SMALL"]

    def test_expired_and_used_up_coupons(self, processor):
        result = processor.quote_from_dict({
            "order_amount": 10000,
            "coupons": [
                coupon("OLD", "percentage", 50, validUntil=NOW - 1),
                coupon("GONE", "percentage", 40, usageLimit=10, usageCount=10),
            ],
        })

        reasons = {v["code"]: v["reasons"] for v in result["coupon_validations"]}
        assert reasons == {"OLD": ["Coupon expired"], "GONE": ["Usage limit reached"]}
        assert result["best_combination"]["total_discount"] == 0


class TestExclusiveCategoryConflict:
    """Two first-purchase coupons selected together."""

    def test_first_purchase_coupons_conflict(self, processor):
        result = processor.quote_from_dict({
            "order_amount": 10000,
            "coupons": [
                coupon("HELLO", "fixed_amount", 500, stackable=True, type="first_purchase"),
                coupon("HI", "fixed_amount", 700, stackable=True, type="first_purchase"),
            ],
        })

        assert result["conflicts"]["conflicts"] == ['Multiple coupons of type "first_purchase" are not allowed']
