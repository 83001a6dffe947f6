from decimal import Decimal
from fractions import Fraction

import pytest

from deal_calculator.domain.money import ceil_div, from_cents, to_cents, truncate_cents


def test_to_cents_converts_two_place_decimal():
    assert to_cents(Decimal("22012.60")) == 2_201_260
    assert to_cents(Decimal("0.01")) == 1
    assert to_cents(Decimal("139.5")) == 13_950


def test_to_cents_rounds_sub_cent_input_half_up():
    assert to_cents(Decimal("1.005")) == 101
    assert to_cents(Decimal("1.004")) == 100


def test_to_cents_rejects_float():
    with pytest.raises(TypeError, match="no floats past the boundary"):
        to_cents(19.99)  # type: ignore[arg-type]


def test_from_cents_returns_two_place_decimal():
    assert from_cents(2_201_260) == Decimal("22012.60")
    assert str(from_cents(4_400)) == "44.00"
    assert str(from_cents(0)) == "0.00"
    assert str(from_cents(-100_000)) == "-1000.00"


def test_truncate_cents_floors_decimal_and_fraction():
    assert truncate_cents(Decimal("73.97422")) == 73
    assert truncate_cents(Decimal("73")) == 73
    assert truncate_cents(Fraction(16_658_333, 1_000)) == 16_658
    assert truncate_cents(Fraction(0)) == 0


def test_ceil_div():
    assert ceil_div(60 * 52, 12) == 260
    assert ceil_div(13 * 52, 12) == 57
    assert ceil_div(0, 12) == 0
