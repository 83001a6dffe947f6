from decimal import Decimal

import pytest

from deal_calculator.domain.deal import DealInputs, SaleType
from deal_calculator.domain.taxes import (
    LOCAL_TAX_CENTS,
    amount_financed,
    compute_taxes,
    total_price,
)


# ============================================================================
# RETAIL
# ============================================================================


def test_retail_taxes_on_round_price():
    """$10,000.00 retail: 7.346% state, 0.3045% business, flat $44.00 local."""
    taxes = compute_taxes(SaleType.RETAIL, 1_000_000)

    assert taxes.state_tax == 73_460  # $734.60
    assert taxes.business_tax == 3_045  # $30.45
    assert taxes.local_tax == 4_400  # $44.00
    assert taxes.total == 73_460 + 3_045 + 4_400


def test_state_tax_is_truncated_not_rounded():
    """
    $10.07 × 7.346% = $0.7397422.

    Rounding would give $0.74; the dealership truncates to $0.73.
    """
    taxes = compute_taxes(SaleType.RETAIL, 1_007)

    assert taxes.state_tax == 73


def test_business_tax_is_truncated_not_rounded():
    """$2.00 × 0.3045% = $0.00609, which truncates to zero."""
    taxes = compute_taxes(SaleType.RETAIL, 200)

    assert taxes.business_tax == 0


def test_retail_zero_price_still_pays_local_tax():
    taxes = compute_taxes(SaleType.RETAIL, 0)

    assert taxes.state_tax == 0
    assert taxes.business_tax == 0
    assert taxes.local_tax == LOCAL_TAX_CENTS


# ============================================================================
# WHOLESALE
# ============================================================================


@pytest.mark.parametrize("sales_price", [0, 1_007, 1_000_000, 2_000_000, 987_654_321])
def test_wholesale_is_untaxed(sales_price):
    taxes = compute_taxes(SaleType.WHOLESALE, sales_price)

    assert taxes.state_tax == 0
    assert taxes.local_tax == 0
    assert taxes.business_tax == 0
    assert taxes.total == 0


# ============================================================================
# TOTALS
# ============================================================================


def test_total_price_and_amount_financed_for_standard_retail_deal():
    """
    $20,000 retail with default fees and $2,000 down.

    20000 + 299 + 139.50 + 1469.20 + 44.00 + 60.90 = 22012.60
    """
    inputs = DealInputs(sales_price=2_000_000, down_payment=200_000)
    taxes = compute_taxes(inputs.sale_type, inputs.sales_price)

    assert taxes.state_tax == 146_920
    assert taxes.business_tax == 6_090
    assert total_price(inputs, taxes) == 2_201_260
    assert amount_financed(inputs, taxes) == 2_001_260


def test_wholesale_total_is_price_plus_fees():
    inputs = DealInputs(
        sale_type=SaleType.WHOLESALE,
        sales_price=500_000,
        doc_fee=29_900,
        title_fee=13_950,
        apr=Decimal("0"),
    )
    taxes = compute_taxes(inputs.sale_type, inputs.sales_price)

    assert total_price(inputs, taxes) == 543_850


def test_amount_financed_goes_negative_when_down_payment_covers_everything():
    inputs = DealInputs(sales_price=100_000, doc_fee=0, title_fee=0, down_payment=200_000)
    taxes = compute_taxes(SaleType.WHOLESALE, inputs.sales_price)

    assert amount_financed(inputs, taxes) == -100_000
