from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction


# ==============================================================================
# Enumerations
# ==============================================================================


class SaleType(str, Enum):
    RETAIL = "Retail"
    WHOLESALE = "Wholesale"


class PaymentFrequency(str, Enum):
    WEEKLY = "Weekly"
    BI_WEEKLY = "Bi-Weekly"
    SEMI_MONTHLY = "Semi-Monthly"
    MONTHLY = "Monthly"

    @property
    def periods_per_year(self) -> int:
        return _PERIODS_PER_YEAR[self]

    @property
    def days_per_period(self) -> Fraction:
        """
        Days of interest accrued per payment period.

        Semi-monthly and monthly use the average period length derived from a
        365-day year, not calendar months.
        """
        return _DAYS_PER_PERIOD[self]


_PERIODS_PER_YEAR = {
    PaymentFrequency.WEEKLY: 52,
    PaymentFrequency.BI_WEEKLY: 26,
    PaymentFrequency.SEMI_MONTHLY: 24,
    PaymentFrequency.MONTHLY: 12,
}

_DAYS_PER_PERIOD = {
    PaymentFrequency.WEEKLY: Fraction(7),
    PaymentFrequency.BI_WEEKLY: Fraction(14),
    PaymentFrequency.SEMI_MONTHLY: Fraction(365, 24),
    PaymentFrequency.MONTHLY: Fraction(365, 12),
}


class CalculationMode(str, Enum):
    """Which of term or payment is the independent variable."""

    BY_TERM = "byTerm"
    BY_PAYMENT = "byPayment"


class SolverStatus(str, Enum):
    SOLVED = "solved"
    # Not enough input yet (e.g. nothing financed, no term entered).
    INCOMPLETE = "incomplete"
    # Input is complete but no schedule amortizes the principal within bounds.
    INFEASIBLE = "infeasible"


# ==============================================================================
# Value Objects
# ==============================================================================


@dataclass(frozen=True, slots=True)
class DealInputs:
    """
    Snapshot of the calculator form.

    All currency fields are integer cents. ``apr`` is a percentage
    (``Decimal("19.99")`` means 19.99%). Only one of ``term_months`` and
    ``payment_amount`` is authoritative, as selected by ``mode``.
    """

    sale_type: SaleType = SaleType.RETAIL
    sales_price: int = 0
    doc_fee: int = 29_900
    title_fee: int = 13_950
    down_payment: int = 0
    apr: Decimal = Decimal("19.99")
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    mode: CalculationMode = CalculationMode.BY_TERM
    term_months: int = 60
    payment_amount: int = 0


@dataclass(frozen=True, slots=True)
class TaxBreakdown:
    state_tax: int
    local_tax: int
    business_tax: int

    @property
    def total(self) -> int:
        return self.state_tax + self.local_tax + self.business_tax


@dataclass(frozen=True, slots=True)
class DerivedAmounts:
    total_price: int
    amount_financed: int
    finance_charge: int
    balance_due: int


@dataclass(frozen=True, slots=True)
class SolverResult:
    """
    Output of PaymentSolver or TermSolver.

    ``payment_amount`` is set for by-term solves and ``term_months`` for
    by-payment solves. Anything other than SOLVED reports zero for every
    amount so a partial schedule is never shown.
    """

    status: SolverStatus
    payment_amount: int | None = None
    term_months: int | None = None
    periods: int = 0
    finance_charge: int = 0

    @property
    def feasible(self) -> bool:
        return self.status is not SolverStatus.INFEASIBLE

    @classmethod
    def incomplete(cls, mode: CalculationMode) -> SolverResult:
        return cls._zeroed(SolverStatus.INCOMPLETE, mode)

    @classmethod
    def infeasible(cls, mode: CalculationMode) -> SolverResult:
        return cls._zeroed(SolverStatus.INFEASIBLE, mode)

    @classmethod
    def _zeroed(cls, status: SolverStatus, mode: CalculationMode) -> SolverResult:
        if mode is CalculationMode.BY_TERM:
            return cls(status=status, payment_amount=0)
        return cls(status=status, term_months=0)


@dataclass(frozen=True, slots=True)
class DealQuote:
    inputs: DealInputs
    taxes: TaxBreakdown
    totals: DerivedAmounts
    solver: SolverResult
