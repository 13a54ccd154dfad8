"""
Coupon Status Resolver

Derives a coupon's lifecycle status from its stored fields and the current time.
"""

import time
from decimal import Decimal
from typing import Callable

from ..models import Coupon, CouponStatus
from ..money import HUNDRED, quantize_percent

DAY_MS = 24 * 60 * 60 * 1000


def now_millis() -> int:
    return int(time.time() * 1000)


class CouponStatusResolver:
    """Resolves coupon status against "now" (epoch millis)."""

    EXPIRING_SOON_DAYS = 3

    def __init__(self, clock: Callable[[], int] = now_millis):
        self._clock = clock

    def resolve(self, coupon: Coupon, now: int | None = None) -> CouponStatus:
        """
        Resolve status. Check order matters:
        deleted -> inactive -> expired -> used_up -> active
        """
        if now is None:
            now = self._clock()

        if coupon.deleted_at is not None:
            return CouponStatus.DELETED

        if not coupon.is_active:
            return CouponStatus.INACTIVE

        if coupon.valid_until < now:
            return CouponStatus.EXPIRED

        if coupon.usage_limit and coupon.usage_count >= coupon.usage_limit:
            return CouponStatus.USED_UP

        return CouponStatus.ACTIVE

    def is_within_validity(self, coupon: Coupon, now: int | None = None) -> bool:
        if now is None:
            now = self._clock()
        return coupon.valid_from <= now <= coupon.valid_until

    def is_expiring_soon(self, coupon: Coupon, now: int | None = None, days: int = EXPIRING_SOON_DAYS) -> bool:
        """True when the coupon is still valid but expires within `days`."""
        if now is None:
            now = self._clock()
        threshold = now + days * DAY_MS
        return now < coupon.valid_until <= threshold

    @staticmethod
    def usage_rate(usage_count: int, usage_limit: int | None) -> Decimal:
        """Share of the usage limit consumed, in percent, capped at 100."""
        if not usage_limit:
            return Decimal("0")
        rate = Decimal(usage_count) / Decimal(usage_limit) * HUNDRED
        return quantize_percent(min(HUNDRED, rate))
