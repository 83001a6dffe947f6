from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Iterator

from deal_calculator.domain.deal import PaymentFrequency
from deal_calculator.domain.money import PAID_OFF_THRESHOLD_CENTS, truncate_cents


@dataclass(frozen=True, slots=True)
class EngineLimits:
    """
    Safety valves for the solvers.

    These bound the work done per computation; they are not pricing rules.
    ``max_periods`` caps the by-payment simulation and
    ``max_search_iterations`` caps the by-term binary search.
    """

    max_periods: int = 1000
    max_search_iterations: int = 100


DEFAULT_LIMITS = EngineLimits()


@dataclass(frozen=True, slots=True)
class AmortizationPeriod:
    index: int
    opening_balance: int
    period_interest: int
    principal_paid: int
    closing_balance: int


@dataclass(frozen=True, slots=True)
class AmortizationResult:
    periods_used: int
    total_interest: int
    final_balance: int
    fully_paid: bool
    # True when a period's interest met or exceeded the payment.
    interest_not_covered: bool = False


def periodic_rate(apr: Decimal, frequency: PaymentFrequency) -> Fraction:
    """Interest rate per period: ``apr / 100 / 365`` per day, times days per period."""
    return Fraction(apr) / 100 / 365 * frequency.days_per_period


def _replay(
    principal: int, rate: Fraction, payment: int, max_periods: int
) -> Iterator[AmortizationPeriod]:
    balance = principal
    index = 0
    while balance > PAID_OFF_THRESHOLD_CENTS and index < max_periods:
        interest = truncate_cents(balance * rate)
        principal_paid = payment - interest
        if principal_paid <= 0:
            return
        closing = max(balance - principal_paid, 0)
        index += 1
        yield AmortizationPeriod(
            index=index,
            opening_balance=balance,
            period_interest=interest,
            principal_paid=principal_paid,
            closing_balance=closing,
        )
        balance = closing


def simulate(
    principal: int,
    apr: Decimal,
    payment: int,
    frequency: PaymentFrequency,
    max_periods: int,
) -> AmortizationResult:
    """
    Replay a loan period by period with a fixed payment.

    Each period accrues ``balance * periodic_rate`` interest truncated to the
    cent; the rest of the payment reduces principal. Stops when the balance is
    paid off, when ``max_periods`` is reached, or as soon as a payment fails to
    cover the period's interest.

    Args:
        principal: Amount financed in cents (>= 0)
        apr: Annual percentage rate as a percent (>= 0)
        payment: Payment per period in cents (>= 0)
        frequency: Payment frequency
        max_periods: Hard cap on simulated periods

    Returns:
        AmortizationResult with periods used, interest paid and payoff status
    """
    rate = periodic_rate(apr, frequency)
    balance = principal
    total_interest = 0
    periods_used = 0

    for period in _replay(principal, rate, payment, max_periods):
        total_interest += period.period_interest
        balance = period.closing_balance
        periods_used = period.index

    fully_paid = balance <= PAID_OFF_THRESHOLD_CENTS
    # The replay only stops early, unpaid and under the cap, when interest wasn't covered.
    interest_not_covered = not fully_paid and periods_used < max_periods

    return AmortizationResult(
        periods_used=periods_used,
        total_interest=total_interest,
        final_balance=balance,
        fully_paid=fully_paid,
        interest_not_covered=interest_not_covered,
    )
