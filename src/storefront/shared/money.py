"""Minor-unit arithmetic for prices and discounts.

Prices are stored in dollars as floats; the provider works in integer cents.
Conversions round half up, so 0.5 cents always rounds away from zero.
"""

from decimal import ROUND_HALF_UP, Decimal


def _half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_minor_units(price: float) -> int:
    """Convert a dollar amount to integer cents."""
    return _half_up(Decimal(str(price)) * 100)


def to_major_units(amount: int) -> float:
    return float(Decimal(amount) / 100)


def percent_of(amount: int, percentage: int) -> int:
    """``percentage`` percent of ``amount`` cents, rounded to a whole cent."""
    return _half_up(Decimal(amount) * Decimal(percentage) / 100)
