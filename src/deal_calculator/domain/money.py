from __future__ import annotations

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal
from fractions import Fraction

CENT = Decimal("0.01")

# A residual balance at or below this many cents counts as paid off.
PAID_OFF_THRESHOLD_CENTS = 1


def to_cents(amount: Decimal) -> int:
    """
    Convert a decimal currency amount to integer cents.

    Amounts are expected to carry at most two decimal places; anything finer
    is rounded half-up to the cent, matching how amounts are entered at the
    counter.
    """
    if not isinstance(amount, Decimal):
        raise TypeError("amount must be Decimal (no floats past the boundary)")
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> Decimal:
    """Convert integer cents back to a two-place Decimal."""
    return (Decimal(cents) / 100).quantize(CENT)


def truncate_cents(cents: Decimal | Fraction) -> int:
    """
    Truncate a fractional cent amount toward zero for non-negative values.

    Dealership pricing truncates taxes and interest to the cent; it never
    rounds to nearest.
    """
    if isinstance(cents, Fraction):
        return cents.numerator // cents.denominator
    return int(cents.to_integral_value(rounding=ROUND_FLOOR))


def ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)
