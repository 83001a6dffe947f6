from __future__ import annotations

from decimal import Decimal

from deal_calculator.domain.amortization import (
    DEFAULT_LIMITS,
    EngineLimits,
    simulate,
)
from deal_calculator.domain.deal import (
    CalculationMode,
    PaymentFrequency,
    SolverResult,
    SolverStatus,
)
from deal_calculator.domain.money import ceil_div


def total_periods(term_months: int, frequency: PaymentFrequency) -> int:
    """Number of payments in a term: ``ceil(term_months / 12 * periods_per_year)``."""
    return ceil_div(term_months * frequency.periods_per_year, 12)


def months_for_periods(periods: int, frequency: PaymentFrequency) -> int:
    """Convert a payment count back to whole months, rounding up."""
    return ceil_div(periods * 12, frequency.periods_per_year)


def solve_payment(
    principal: int,
    apr: Decimal,
    term_months: int,
    frequency: PaymentFrequency,
    limits: EngineLimits = DEFAULT_LIMITS,
) -> SolverResult:
    """
    Find the smallest per-period payment that pays off ``principal`` within the term.

    Binary search over whole cents in ``[0, 2 * principal]``. A candidate is
    sufficient when the amortization replay reaches a zero balance within the
    term's number of periods. Sufficiency is monotonic in the payment, so the
    search narrows to the boundary and returns its upper (sufficient) side.

    Zero APR is not special-cased; the same search solves it. A term whose
    period count exceeds ``limits.max_periods`` is infeasible without searching.
    """
    mode = CalculationMode.BY_TERM
    if principal < 0 or term_months <= 0 or apr < 0:
        return SolverResult.incomplete(mode)

    periods = total_periods(term_months, frequency)

    def sufficient(payment: int) -> bool:
        return simulate(principal, apr, payment, frequency, max_periods=periods).fully_paid

    if sufficient(0):
        return SolverResult(status=SolverStatus.SOLVED, payment_amount=0)

    if periods > limits.max_periods:
        # Same cap as solve_term; a longer schedule could never be replayed there.
        return SolverResult.infeasible(mode)

    low, high = 0, principal * 2
    if not sufficient(high):
        return SolverResult.infeasible(mode)

    iterations = 0
    while high - low > 1 and iterations < limits.max_search_iterations:
        mid = (low + high) // 2
        if sufficient(mid):
            high = mid
        else:
            low = mid
        iterations += 1

    if high - low > 1:
        # Search cap hit before converging to the cent.
        return SolverResult.infeasible(mode)

    schedule = simulate(principal, apr, high, frequency, max_periods=periods)
    return SolverResult(
        status=SolverStatus.SOLVED,
        payment_amount=high,
        periods=schedule.periods_used,
        finance_charge=schedule.total_interest,
    )


def solve_term(
    principal: int,
    apr: Decimal,
    payment: int,
    frequency: PaymentFrequency,
    limits: EngineLimits = DEFAULT_LIMITS,
) -> SolverResult:
    """
    Find how many months a fixed payment takes to pay off ``principal``.

    Runs a single forward replay capped at ``limits.max_periods`` and converts
    the periods used to months, rounding up. A payment that never covers a
    period's interest, or that does not finish within the cap, is infeasible.
    """
    mode = CalculationMode.BY_PAYMENT
    if principal < 0 or apr < 0:
        return SolverResult.incomplete(mode)
    if principal == 0:
        return SolverResult(status=SolverStatus.SOLVED, term_months=0)
    if payment <= 0:
        return SolverResult.incomplete(mode)

    schedule = simulate(principal, apr, payment, frequency, max_periods=limits.max_periods)
    if not schedule.fully_paid:
        return SolverResult.infeasible(mode)

    return SolverResult(
        status=SolverStatus.SOLVED,
        term_months=months_for_periods(schedule.periods_used, frequency),
        periods=schedule.periods_used,
        finance_charge=schedule.total_interest,
    )
