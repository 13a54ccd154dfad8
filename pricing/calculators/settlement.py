"""
Fee Settlement Calculator

Splits a transaction between payment processor, platform and partner.
All amounts are integer cents; every derived fee is floored.
"""

from decimal import Decimal, InvalidOperation

from ..errors import InvalidAmount, InvalidFeePercentage
from ..models import ApplicationFee, FeeCalculation
from ..money import HUNDRED, apply_percentage, to_decimal


class FeeSettlementCalculator:
    """Calculates platform fee, processor fee estimate and partner payout."""

    # Processor fee estimate: 2.9% + 29 cents
    PROCESSOR_FEE_RATE = Decimal("2.9")
    PROCESSOR_FIXED_FEE = 29

    def calculate_fees(self, amount: int, fee_percentage) -> FeeCalculation:
        """
        Payout accounting split.

        partner_amount = amount - stripe_fee - platform_fee, so the three parts
        always sum to amount exactly. With a high fee percentage partner_amount
        goes negative (the partner owes the processor fee).

        Example: 10000 at 15% -> stripe 319, platform 1500, partner 8181
        """
        fee_percentage = self._validate(amount, fee_percentage)

        platform_fee = apply_percentage(amount, fee_percentage)
        stripe_fee = self.estimate_processor_fee(amount)

        return FeeCalculation(
            transaction_amount=amount,
            stripe_fee=stripe_fee,
            platform_fee=platform_fee,
            partner_amount=amount - stripe_fee - platform_fee,
        )

    def calculate_application_fee(self, total_amount: int, fee_percentage) -> ApplicationFee:
        """
        Destination-charge split.

        The partner receives total_amount - application_fee_amount. The
        processor takes its fee out-of-band, so the estimate is informational
        only and is not subtracted here.
        """
        fee_percentage = self._validate(total_amount, fee_percentage)

        application_fee = apply_percentage(total_amount, fee_percentage)

        return ApplicationFee(
            total_amount=total_amount,
            fee_percentage=fee_percentage,
            application_fee_amount=application_fee,
            partner_amount=total_amount - application_fee,
            estimated_stripe_fee=self.estimate_processor_fee(total_amount),
        )

    def estimate_processor_fee(self, amount: int) -> int:
        """floor(amount * 2.9%) + 29"""
        return apply_percentage(amount, self.PROCESSOR_FEE_RATE) + self.PROCESSOR_FIXED_FEE

    def _validate(self, amount, fee_percentage) -> Decimal:
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidAmount(f"Amount must be an integer number of cents, got: {amount!r}")
        if amount <= 0:
            raise InvalidAmount(f"Amount must be positive, got: {amount}")

        try:
            fee_percentage = to_decimal(fee_percentage)
        except InvalidOperation:
            raise InvalidFeePercentage(f"Fee percentage must be a number, got: {fee_percentage!r}")
        if fee_percentage.is_nan() or not (0 <= fee_percentage <= HUNDRED):
            raise InvalidFeePercentage(f"Fee percentage must be between 0 and 100, got: {fee_percentage}")
        return fee_percentage
