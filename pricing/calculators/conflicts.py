"""
Coupon Conflict Resolver

Detects coupon combinations that may not be used together.
"""

from ..models import ConflictReport, Coupon, CouponType


class CouponConflictResolver:
    """Checks stacking rules and mutually-exclusive coupon categories."""

    # At most one coupon of each of these types per order
    EXCLUSIVE_TYPES = (CouponType.FIRST_PURCHASE, CouponType.RETURNING_CUSTOMER)

    def check_conflicts(self, coupons: list[Coupon]) -> ConflictReport:
        """
        Evaluate every rule and collect all messages.

        The two stacking rules can fire together for the same selection;
        both messages are kept.
        """
        conflicts: list[str] = []

        non_stackable = [c for c in coupons if not c.stackable]

        if len(non_stackable) > 1:
            conflicts.append("Multiple non-stackable coupons selected")

        if non_stackable and len(coupons) > 1:
            conflicts.append("Selected coupon cannot be combined with other coupons")

        for coupon_type, count in self._count_exclusive_types(coupons).items():
            if count > 1:
                conflicts.append(f'Multiple coupons of type "{coupon_type.value}" are not allowed')

        return ConflictReport(has_conflicts=len(conflicts) > 0, conflicts=conflicts)

    def _count_exclusive_types(self, coupons: list[Coupon]) -> dict[CouponType, int]:
        # Keeps first-seen order so messages come out in selection order
        counts: dict[CouponType, int] = {}
        for coupon in coupons:
            if coupon.coupon_type in self.EXCLUSIVE_TYPES:
                counts[coupon.coupon_type] = counts.get(coupon.coupon_type, 0) + 1
        return counts
