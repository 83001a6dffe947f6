from __future__ import annotations

from decimal import Decimal

from deal_calculator.domain.deal import DealInputs, SaleType, TaxBreakdown
from deal_calculator.domain.money import truncate_cents

STATE_TAX_RATE = Decimal("0.07346")
BUSINESS_TAX_RATE = Decimal("0.003045")
LOCAL_TAX_CENTS = 4_400


def compute_taxes(sale_type: SaleType, sales_price: int) -> TaxBreakdown:
    """
    Compute the tax lines for a sale.

    Wholesale deals are untaxed. Retail deals pay state and business tax as a
    percentage of the sales price, truncated to the cent, plus a flat local tax.
    """
    if sale_type is SaleType.WHOLESALE:
        return TaxBreakdown(state_tax=0, local_tax=0, business_tax=0)

    price = Decimal(sales_price)
    return TaxBreakdown(
        state_tax=truncate_cents(price * STATE_TAX_RATE),
        local_tax=LOCAL_TAX_CENTS,
        business_tax=truncate_cents(price * BUSINESS_TAX_RATE),
    )


def total_price(inputs: DealInputs, taxes: TaxBreakdown) -> int:
    return inputs.sales_price + inputs.doc_fee + inputs.title_fee + taxes.total


def amount_financed(inputs: DealInputs, taxes: TaxBreakdown) -> int:
    """Total price less down payment. Negative when the down payment covers everything."""
    return total_price(inputs, taxes) - inputs.down_payment
