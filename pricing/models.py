"""
Domain Models for the Pricing & Settlement Engine

These dataclasses provide type-safe representations of coupon and
settlement entities. Amounts are integer cents; percentages use Decimal.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum

from .errors import InvalidAmount, InvalidFeePercentage
from .money import floor_cents, to_decimal

# =============================================================================
# ENUMS
# =============================================================================


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"


class CouponType(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    FIRST_PURCHASE = "first_purchase"
    RETURNING_CUSTOMER = "returning_customer"


class AssetType(str, Enum):
    ACTIVITIES = "activities"
    EVENTS = "events"
    RESTAURANTS = "restaurants"
    VEHICLES = "vehicles"
    ACCOMMODATIONS = "accommodations"
    PACKAGES = "packages"


class CouponStatus(str, Enum):
    """Lifecycle status of a coupon, derived from its stored fields."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    USED_UP = "used_up"
    DELETED = "deleted"

    @property
    def message(self) -> str:
        return _STATUS_MESSAGES[self]


_STATUS_MESSAGES = {
    CouponStatus.ACTIVE: "Coupon active",
    CouponStatus.INACTIVE: "Coupon inactive",
    CouponStatus.EXPIRED: "Coupon expired",
    CouponStatus.USED_UP: "Usage limit reached",
    CouponStatus.DELETED: "Coupon removed",
}


class RejectionReason(str, Enum):
    """Machine-readable code for each eligibility rejection."""

    COUPON_DELETED = "coupon_deleted"
    COUPON_INACTIVE = "coupon_inactive"
    COUPON_EXPIRED = "coupon_expired"
    USAGE_LIMIT_REACHED = "usage_limit_reached"
    BELOW_MINIMUM_ORDER = "below_minimum_order"
    ABOVE_MAXIMUM_ORDER = "above_maximum_order"
    USER_LIMIT_REACHED = "user_limit_reached"

    @classmethod
    def for_status(cls, status: CouponStatus) -> "RejectionReason":
        if status is CouponStatus.DELETED:
            return cls.COUPON_DELETED
        if status is CouponStatus.INACTIVE:
            return cls.COUPON_INACTIVE
        if status is CouponStatus.EXPIRED:
            return cls.COUPON_EXPIRED
        if status is CouponStatus.USED_UP:
            return cls.USAGE_LIMIT_REACHED
        raise ValueError(f"Active coupons have no rejection reason: {status}")


APPLIED_USAGE_STATUS = "applied"


def _optional_cents(data: dict, key: str) -> int | None:
    value = data.get(key)
    return floor_cents(value) if value is not None else None


def _optional_int(data: dict, key: str) -> int | None:
    value = data.get(key)
    return int(value) if value is not None else None


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass(frozen=True)
class ApplicableAsset:
    """A specific asset a non-global coupon applies to."""

    asset_type: AssetType
    asset_id: str
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "ApplicableAsset":
        return cls(
            asset_type=AssetType(data["assetType"]),
            asset_id=str(data["assetId"]),
            is_active=data.get("isActive", True),
        )


@dataclass(frozen=True)
class GlobalApplication:
    is_global: bool = False
    asset_types: tuple[AssetType, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "GlobalApplication":
        return cls(
            is_global=data.get("isGlobal", False),
            asset_types=tuple(AssetType(t) for t in data.get("assetTypes", [])),
        )


@dataclass(frozen=True)
class Coupon:
    """A coupon record as stored by the persistence layer (read-only here)."""

    code: str
    discount_type: DiscountType
    discount_value: Decimal
    valid_from: int  # epoch millis
    valid_until: int  # epoch millis
    is_active: bool = True
    stackable: bool = False
    coupon_type: CouponType = CouponType.PUBLIC
    max_discount_amount: int | None = None  # percentage coupons only
    minimum_order_value: int | None = None
    maximum_order_value: int | None = None
    usage_limit: int | None = None
    usage_count: int = 0
    user_usage_limit: int | None = None
    deleted_at: int | None = None
    global_application: GlobalApplication = field(default_factory=GlobalApplication)
    applicable_assets: tuple[ApplicableAsset, ...] = ()
    name: str = ""
    description: str = ""
    allowed_users: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "Coupon":
        return cls(
            code=data["code"],
            discount_type=DiscountType(data["discountType"]),
            discount_value=to_decimal(data["discountValue"]),
            valid_from=int(data["validFrom"]),
            valid_until=int(data["validUntil"]),
            is_active=data.get("isActive", True),
            stackable=data.get("stackable", False),
            coupon_type=CouponType(data.get("type", CouponType.PUBLIC.value)),
            max_discount_amount=_optional_cents(data, "maxDiscountAmount"),
            minimum_order_value=_optional_cents(data, "minimumOrderValue"),
            maximum_order_value=_optional_cents(data, "maximumOrderValue"),
            usage_limit=_optional_int(data, "usageLimit"),
            usage_count=int(data.get("usageCount", 0)),
            user_usage_limit=_optional_int(data, "userUsageLimit"),
            deleted_at=_optional_int(data, "deletedAt"),
            global_application=GlobalApplication.from_dict(data.get("globalApplication", {})),
            applicable_assets=tuple(ApplicableAsset.from_dict(a) for a in data.get("applicableAssets", [])),
            name=data.get("name", ""),
            description=data.get("description", ""),
            allowed_users=tuple(data.get("allowedUsers", [])),
        )


@dataclass(frozen=True)
class CouponUsage:
    """Historical usage record. Only read for savings reporting."""

    discount_amount: int
    applied_at: int
    status: str = APPLIED_USAGE_STATUS

    @classmethod
    def from_dict(cls, data: dict) -> "CouponUsage":
        return cls(
            discount_amount=floor_cents(data["discountAmount"]),
            applied_at=int(data["appliedAt"]),
            status=data.get("status", APPLIED_USAGE_STATUS),
        )


@dataclass
class QuoteInput:
    """Complete input for a checkout quote."""

    order_amount: int
    coupons: list[Coupon] = field(default_factory=list)
    selected_codes: list[str] | None = None  # None = all supplied coupons
    user_id: str | None = None
    user_usage_counts: dict[str, int] = field(default_factory=dict)
    fee_percentage: Decimal | None = None
    now: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "QuoteInput":
        fee = data.get("fee_percentage")
        now = data.get("now")
        try:
            order_amount = floor_cents(data["order_amount"])
        except (InvalidOperation, ValueError, OverflowError):
            raise InvalidAmount(f"order_amount must be a number of cents, got: {data['order_amount']!r}")
        try:
            fee_percentage = to_decimal(fee) if fee is not None else None
        except InvalidOperation:
            raise InvalidFeePercentage(f"Fee percentage must be a number, got: {fee!r}")
        return cls(
            order_amount=order_amount,
            coupons=[Coupon.from_dict(c) for c in data.get("coupons", [])],
            selected_codes=data.get("selected_codes"),
            user_id=data.get("user_id"),
            user_usage_counts={k: int(v) for k, v in data.get("user_usage_counts", {}).items()},
            fee_percentage=fee_percentage,
            now=int(now) if now is not None else None,
        )


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class DiscountCalculation:
    """Discount applied by a single coupon to an order amount."""

    original_amount: int
    discount_amount: int
    final_amount: int
    discount_percentage: Decimal
    max_discount_reached: bool = False


@dataclass(frozen=True)
class CouponValidationResult:
    """Eligibility verdict. reasons is empty iff is_valid."""

    is_valid: bool
    reasons: list[str]
    can_use: bool
    max_usage_reached: bool = False
    user_limit_reached: bool = False
    reason_codes: list[RejectionReason] = field(default_factory=list)


@dataclass(frozen=True)
class ConflictReport:
    has_conflicts: bool
    conflicts: list[str]


@dataclass(frozen=True)
class CombinationResult:
    """Best coupon combination found by the optimizer."""

    best_combination: list[Coupon]
    total_discount: int
    final_amount: int
    savings: int


@dataclass(frozen=True)
class PrioritizedCoupon:
    coupon: Coupon
    calculated_discount: DiscountCalculation

    @property
    def priority(self) -> int:
        return self.calculated_discount.discount_amount


@dataclass(frozen=True)
class FeeCalculation:
    """Payout split. stripe_fee + platform_fee + partner_amount == transaction_amount."""

    transaction_amount: int
    stripe_fee: int
    platform_fee: int
    partner_amount: int


@dataclass(frozen=True)
class ApplicationFee:
    """Destination-charge split.

    The partner receives total_amount - application_fee_amount; the processor
    deducts its own fee out-of-band, so estimated_stripe_fee is informational.
    """

    total_amount: int
    fee_percentage: Decimal
    application_fee_amount: int
    partner_amount: int
    estimated_stripe_fee: int


@dataclass(frozen=True)
class UserSavings:
    total_savings: int
    usage_count: int
    average_savings: Decimal
    last_used: int | None = None


@dataclass
class QuoteContext:
    """
    Holds all intermediate state while quoting.
    This is the "bag" that flows through the pipeline.
    """

    # Input (immutable during processing)
    quote: QuoteInput
    now: int

    # Step results (populated as we go)
    validations: dict[str, CouponValidationResult] = field(default_factory=dict)
    conflicts: ConflictReport = field(default_factory=lambda: ConflictReport(False, []))
    combination: CombinationResult | None = None
    fees: FeeCalculation | None = None

    @property
    def eligible_coupons(self) -> list[Coupon]:
        return [c for c in self.quote.coupons if self.validations[c.code].is_valid]

    @property
    def selected_coupons(self) -> list[Coupon]:
        codes = self.quote.selected_codes
        if codes is None:
            return list(self.quote.coupons)
        return [c for c in self.quote.coupons if c.code in codes]


@dataclass
class QuoteResult:
    """Final output of a checkout quote."""

    order_summary: dict
    coupon_validations: list
    conflicts: dict
    best_combination: dict
    settlement: dict | None = None
