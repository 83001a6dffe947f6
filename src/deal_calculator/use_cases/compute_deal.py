from __future__ import annotations

import logging
from dataclasses import dataclass

from deal_calculator.domain.amortization import DEFAULT_LIMITS, EngineLimits
from deal_calculator.domain.deal import (
    CalculationMode,
    DealInputs,
    DealQuote,
    DerivedAmounts,
    SolverResult,
    SolverStatus,
)
from deal_calculator.domain.solvers import solve_payment, solve_term
from deal_calculator.domain.taxes import amount_financed, compute_taxes, total_price

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ComputeDeal:
    """
    Structure a deal from a snapshot of calculator inputs.

    Flow:
    - Taxes from sale type and sales price
    - Total price and amount financed
    - Mode selects the solver: by-term solves the payment, by-payment solves the term
    - Finance charge is the interest of the solved schedule; balance due adds it
      to the amount financed

    The derived side of the pair (payment in by-term mode, term in by-payment
    mode) is never read from the inputs. No exception escapes for numeric
    input; failures are carried by ``SolverResult.status``.
    """

    limits: EngineLimits = DEFAULT_LIMITS

    def execute(self, inputs: DealInputs) -> DealQuote:
        taxes = compute_taxes(inputs.sale_type, inputs.sales_price)
        price = total_price(inputs, taxes)
        financed = amount_financed(inputs, taxes)

        solver = self._solve(inputs, financed)
        finance_charge = solver.finance_charge if solver.status is SolverStatus.SOLVED else 0

        logger.debug(
            "Deal computed",
            extra={
                "mode": inputs.mode.value,
                "status": solver.status.value,
                "periods": solver.periods,
                "amount_financed": financed,
            },
        )
        if solver.status is SolverStatus.INFEASIBLE:
            logger.info(
                "No feasible schedule for deal",
                extra={
                    "mode": inputs.mode.value,
                    "amount_financed": financed,
                    "apr": str(inputs.apr),
                    "frequency": inputs.frequency.value,
                },
            )

        return DealQuote(
            inputs=inputs,
            taxes=taxes,
            totals=DerivedAmounts(
                total_price=price,
                amount_financed=financed,
                finance_charge=finance_charge,
                balance_due=financed + finance_charge,
            ),
            solver=solver,
        )

    def _solve(self, inputs: DealInputs, financed: int) -> SolverResult:
        if inputs.mode is CalculationMode.BY_TERM:
            return solve_payment(
                financed, inputs.apr, inputs.term_months, inputs.frequency, self.limits
            )
        return solve_term(
            financed, inputs.apr, inputs.payment_amount, inputs.frequency, self.limits
        )


def compute_deal(inputs: DealInputs, limits: EngineLimits = DEFAULT_LIMITS) -> DealQuote:
    """Convenience wrapper around ``ComputeDeal(limits).execute(inputs)``."""
    return ComputeDeal(limits=limits).execute(inputs)
