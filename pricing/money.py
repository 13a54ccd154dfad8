"""
Money Math

Fixed-point helpers over integer minor currency units (cents).
Percentages are Decimals; results that land back in cents are always floored.
"""

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, localcontext

HUNDRED = Decimal("100")


def to_decimal(value) -> Decimal:
    """Build a Decimal from raw input without float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def floor_cents(value) -> int:
    """Floor any numeric value to a whole number of cents."""
    return int(to_decimal(value).to_integral_value(rounding=ROUND_FLOOR))


def apply_percentage(amount_cents: int, percent) -> int:
    """floor(amount_cents * percent / 100)

    Flooring keeps every derived fee at or below its exact value, which is what
    lets fee parts reconstruct the transaction amount exactly.
    """
    percent = to_decimal(percent)
    # Enough digits for the product to be exact at any amount
    with localcontext() as ctx:
        ctx.prec = len(str(abs(amount_cents))) + len(percent.as_tuple().digits) + 2
        return floor_cents(Decimal(amount_cents) * percent / HUNDRED)


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(value, upper))


def quantize_percent(value: Decimal) -> Decimal:
    """Round a display percentage to 2 decimal places (ROUND_HALF_UP)."""
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def cents_to_units(amount_cents: int) -> Decimal:
    """Convert cents to major units, e.g. 1050 -> Decimal('10.50')."""
    return (Decimal(amount_cents) / HUNDRED).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_cents(amount_cents: int, symbol: str = "R$") -> str:
    """Format cents as a currency string for reasons and descriptions."""
    return f"{symbol} {cents_to_units(amount_cents):,.2f}"
