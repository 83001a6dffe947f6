from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from deal_calculator.domain.amortization import DEFAULT_LIMITS
from deal_calculator.domain.deal import (
    CalculationMode,
    PaymentFrequency,
    SaleType,
    SolverStatus,
)

MONEY_PATTERN = r"^\d+(\.\d{1,2})?$"
RATE_PATTERN = r"^\d+(\.\d{1,4})?$"

# Longest term the period cap allows at any frequency (monthly has the fewest periods).
# More frequent schedules past the cap come back infeasible from the solver.
MAX_TERM_MONTHS = DEFAULT_LIMITS.max_periods * 12 // PaymentFrequency.MONTHLY.periods_per_year

UpdatableField = Literal[
    "sale_type",
    "sales_price",
    "doc_fee",
    "title_fee",
    "down_payment",
    "apr",
    "frequency",
    "mode",
    "term_months",
    "payment_amount",
]


class DealInputsDTO(BaseModel):
    """Calculator form values. Defaults are the dealership's standard form values."""

    sale_type: SaleType = Field(default=SaleType.RETAIL, description="Retail (taxed) or Wholesale")
    sales_price: str = Field(
        default="0.00",
        description="Vehicle sales price as decimal string",
        examples=["20000.00"],
        pattern=MONEY_PATTERN,
    )
    doc_fee: str = Field(
        default="299.00",
        description="Doc/notary fee as decimal string",
        pattern=MONEY_PATTERN,
    )
    title_fee: str = Field(
        default="139.50",
        description="Title/license fee as decimal string",
        pattern=MONEY_PATTERN,
    )
    down_payment: str = Field(
        default="0.00",
        description="Down payment as decimal string",
        examples=["2000.00"],
        pattern=MONEY_PATTERN,
    )
    apr: str = Field(
        default="19.99",
        description="Annual percentage rate as a percent (e.g., '19.99')",
        pattern=RATE_PATTERN,
    )
    frequency: PaymentFrequency = Field(default=PaymentFrequency.MONTHLY)
    mode: CalculationMode = Field(
        default=CalculationMode.BY_TERM,
        description="byTerm solves the payment; byPayment solves the term",
    )
    term_months: int = Field(
        default=60,
        description="Loan term in months (input in byTerm mode, output in byPayment mode)",
        ge=0,
        le=MAX_TERM_MONTHS,
    )
    payment_amount: str = Field(
        default="0.00",
        description="Payment per period (input in byPayment mode, output in byTerm mode)",
        pattern=MONEY_PATTERN,
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "sale_type": "Retail",
                "sales_price": "20000.00",
                "doc_fee": "299.00",
                "title_fee": "139.50",
                "down_payment": "2000.00",
                "apr": "19.99",
                "frequency": "Monthly",
                "mode": "byTerm",
                "term_months": 60,
                "payment_amount": "0.00",
            }
        }
    )


class DealStateDTO(DealInputsDTO):
    """Form values as the calculator left them after an update.

    A term solved under a raised DEAL_MAX_PERIODS can exceed MAX_TERM_MONTHS,
    so the request bound does not apply here.
    """

    term_months: int = Field(default=60, description="Loan term in months", ge=0)


class TaxBreakdownDTO(BaseModel):
    state_tax: str
    local_tax: str
    business_tax: str


class DealTotalsDTO(BaseModel):
    total_price: str
    amount_financed: str
    finance_charge: str
    balance_due: str


class SolverResultDTO(BaseModel):
    status: SolverStatus = Field(
        description="solved, incomplete (not enough input yet) or infeasible (no valid schedule)"
    )
    feasible: bool
    payment_amount: str | None = Field(default=None, description="Solved payment (byTerm mode)")
    term_months: int | None = Field(default=None, description="Solved term (byPayment mode)")
    periods: int
    finance_charge: str


class DealQuoteResponseDTO(BaseModel):
    """Response with taxes, totals and the solved side of the deal."""

    taxes: TaxBreakdownDTO
    totals: DealTotalsDTO
    solver: SolverResultDTO


class DealUpdateRequestDTO(BaseModel):
    """One field change applied to the current form values."""

    inputs: DealInputsDTO
    field: UpdatableField = Field(description="Name of the field being changed")
    value: str = Field(description="New value as a string", examples=["72"])


class DealUpdateResponseDTO(BaseModel):
    inputs: DealStateDTO
    recomputed: bool
    sequence: int
    quote: DealQuoteResponseDTO | None = None
