from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from deal_calculator.domain.deal import CalculationMode, DealInputs, DealQuote
from deal_calculator.domain.errors import UnknownFieldError
from deal_calculator.use_cases.compute_deal import ComputeDeal

logger = logging.getLogger(__name__)

# Fields whose change always triggers a recompute, whatever the mode.
PRICING_FIELDS = frozenset(
    {
        "sale_type",
        "sales_price",
        "doc_fee",
        "title_fee",
        "down_payment",
        "apr",
        "frequency",
    }
)

# The field each mode treats as its independent input.
DRIVING_FIELD = {
    CalculationMode.BY_TERM: "term_months",
    CalculationMode.BY_PAYMENT: "payment_amount",
}

# The field each mode derives and overwrites.
DERIVED_FIELD = {
    CalculationMode.BY_TERM: "payment_amount",
    CalculationMode.BY_PAYMENT: "term_months",
}


@dataclass(frozen=True, slots=True)
class CoordinatorUpdate:
    inputs: DealInputs
    recomputed: bool
    quote: DealQuote | None = None
    sequence: int = 0


class ModeCoordinator:
    """
    Single owner of the by-term / by-payment switch.

    Exactly one direction of derivation is live at a time. A change to a
    pricing field or to the mode's driving field runs one compute pass and
    overwrites only the mode's derived field. Writing the derived field never
    triggers a pass, so payment and term cannot drive each other in a cycle.

    Every recompute gets a strictly increasing ``sequence`` so callers firing
    overlapping updates can drop results from superseded passes.

    Instances hold per-form state and are not meant to be shared between
    callers.
    """

    def __init__(self, inputs: DealInputs | None = None, use_case: ComputeDeal | None = None) -> None:
        self._inputs = inputs or DealInputs()
        self._use_case = use_case or ComputeDeal()
        self._sequence = 0

    @property
    def inputs(self) -> DealInputs:
        return self._inputs

    @property
    def mode(self) -> CalculationMode:
        return self._inputs.mode

    @property
    def sequence(self) -> int:
        return self._sequence

    def switch_mode(self, mode: CalculationMode) -> CoordinatorUpdate:
        """Change which side is independent. Never recomputes by itself."""
        self._inputs = dataclasses.replace(self._inputs, mode=mode)
        return CoordinatorUpdate(inputs=self._inputs, recomputed=False, sequence=self._sequence)

    def update(self, field: str, value: Any) -> CoordinatorUpdate:
        """
        Apply one field change and recompute if the change is a trigger.

        Writing the value a field already holds is a no-op.

        Args:
            field: Name of a ``DealInputs`` field
            value: New domain value for the field (cents, Decimal, enum, int)

        Returns:
            CoordinatorUpdate with the current inputs and the quote when a
            recompute happened

        Raises:
            UnknownFieldError: If ``field`` is not a calculator input
        """
        if field == "mode":
            return self.switch_mode(CalculationMode(value))
        if field not in PRICING_FIELDS and field not in DERIVED_FIELD.values():
            raise UnknownFieldError(field)

        if getattr(self._inputs, field) == value:
            return CoordinatorUpdate(inputs=self._inputs, recomputed=False, sequence=self._sequence)

        self._inputs = dataclasses.replace(self._inputs, **{field: value})

        if field in PRICING_FIELDS or field == DRIVING_FIELD[self.mode]:
            return self.recompute()

        logger.debug(
            "Derived field edited without recompute",
            extra={"field": field, "mode": self.mode.value},
        )
        return CoordinatorUpdate(inputs=self._inputs, recomputed=False, sequence=self._sequence)

    def recompute(self) -> CoordinatorUpdate:
        """Run one compute pass and overwrite the mode's derived field."""
        quote = self._use_case.execute(self._inputs)
        self._sequence += 1

        if self.mode is CalculationMode.BY_TERM:
            derived = quote.solver.payment_amount or 0
        else:
            derived = quote.solver.term_months or 0
        self._inputs = dataclasses.replace(self._inputs, **{DERIVED_FIELD[self.mode]: derived})

        return CoordinatorUpdate(
            inputs=self._inputs,
            recomputed=True,
            quote=quote,
            sequence=self._sequence,
        )
