from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from deal_calculator.domain.deal import (
    CalculationMode,
    DealInputs,
    DealQuote,
    PaymentFrequency,
    SaleType,
)
from deal_calculator.domain.errors import ValidationError
from deal_calculator.domain.money import from_cents, to_cents
from deal_calculator.entrypoints.http.dtos.deal import (
    MAX_TERM_MONTHS,
    MONEY_PATTERN,
    RATE_PATTERN,
    DealInputsDTO,
    DealQuoteResponseDTO,
    DealStateDTO,
    DealTotalsDTO,
    DealUpdateResponseDTO,
    SolverResultDTO,
    TaxBreakdownDTO,
)
from deal_calculator.use_cases.mode_coordinator import CoordinatorUpdate

MONEY_FIELDS = ("sales_price", "doc_fee", "title_fee", "down_payment", "payment_amount")


def _invalid(field: str, message: str, code: str) -> dict[str, str]:
    return {"field": field, "message": message, "code": code}


def _parse_decimal(field: str, raw: str, errors: list[dict[str, str]]) -> Decimal:
    try:
        value = Decimal(raw)
    except (InvalidOperation, ValueError):
        errors.append(_invalid(field, f"Must be a valid decimal: {raw}", "INVALID_DECIMAL"))
        return Decimal("0")  # Placeholder to continue validation

    if not value.is_finite():
        errors.append(_invalid(field, f"Must be a valid decimal: {raw}", "INVALID_DECIMAL"))
        return Decimal("0")
    if value < 0:
        errors.append(_invalid(field, "Must be >= 0", "INVALID_VALUE"))
    return value


class DealMapper:
    """Maps between REST DTOs and domain models for deals.

    The only place where decimal strings become integer cents and back.
    """

    @staticmethod
    def to_domain_inputs(dto: DealInputsDTO) -> DealInputs:
        """
        Converts request DTO to domain DealInputs.

        Raises:
            ValidationError: If any amount cannot be converted to a valid Decimal
        """
        errors: list[dict[str, str]] = []

        cents = {
            name: to_cents(_parse_decimal(name, getattr(dto, name), errors))
            for name in MONEY_FIELDS
        }
        apr = _parse_decimal("apr", dto.apr, errors)

        if errors:
            raise ValidationError(errors=errors)

        return DealInputs(
            sale_type=dto.sale_type,
            apr=apr,
            frequency=dto.frequency,
            mode=dto.mode,
            term_months=dto.term_months,
            **cents,
        )

    @staticmethod
    def to_inputs_dto(inputs: DealInputs) -> DealStateDTO:
        return DealStateDTO(
            sale_type=inputs.sale_type,
            sales_price=str(from_cents(inputs.sales_price)),
            doc_fee=str(from_cents(inputs.doc_fee)),
            title_fee=str(from_cents(inputs.title_fee)),
            down_payment=str(from_cents(inputs.down_payment)),
            apr=str(inputs.apr),
            frequency=inputs.frequency,
            mode=inputs.mode,
            term_months=inputs.term_months,
            payment_amount=str(from_cents(inputs.payment_amount)),
        )

    @staticmethod
    def to_field_value(field: str, raw: str) -> Any:
        """
        Parses a single updated field value into its domain type.

        Raises:
            ValidationError: If the value does not parse for that field
        """
        try:
            if field == "sale_type":
                return SaleType(raw)
            if field == "frequency":
                return PaymentFrequency(raw)
            if field == "mode":
                return CalculationMode(raw)
            if field == "term_months":
                months = int(raw)
                if not 0 <= months <= MAX_TERM_MONTHS:
                    raise ValueError(raw)
                return months
        except ValueError:
            raise ValidationError(
                errors=[_invalid(field, f"Invalid value: {raw}", "INVALID_VALUE")]
            ) from None

        pattern = RATE_PATTERN if field == "apr" else MONEY_PATTERN
        if re.fullmatch(pattern, raw) is None:
            raise ValidationError(
                errors=[_invalid(field, f"Must be a valid decimal: {raw}", "INVALID_DECIMAL")]
            )

        errors: list[dict[str, str]] = []
        value = _parse_decimal(field, raw, errors)
        if errors:
            raise ValidationError(errors=errors)
        if field == "apr":
            return value
        return to_cents(value)

    @staticmethod
    def to_response(quote: DealQuote) -> DealQuoteResponseDTO:
        """
        Converts a domain DealQuote to response DTO.

        Handles cents → decimal string conversion at the boundary.
        """
        solver = quote.solver
        return DealQuoteResponseDTO(
            taxes=TaxBreakdownDTO(
                state_tax=str(from_cents(quote.taxes.state_tax)),
                local_tax=str(from_cents(quote.taxes.local_tax)),
                business_tax=str(from_cents(quote.taxes.business_tax)),
            ),
            totals=DealTotalsDTO(
                total_price=str(from_cents(quote.totals.total_price)),
                amount_financed=str(from_cents(quote.totals.amount_financed)),
                finance_charge=str(from_cents(quote.totals.finance_charge)),
                balance_due=str(from_cents(quote.totals.balance_due)),
            ),
            solver=SolverResultDTO(
                status=solver.status,
                feasible=solver.feasible,
                payment_amount=(
                    str(from_cents(solver.payment_amount))
                    if solver.payment_amount is not None
                    else None
                ),
                term_months=solver.term_months,
                periods=solver.periods,
                finance_charge=str(from_cents(solver.finance_charge)),
            ),
        )

    @staticmethod
    def to_update_response(update: CoordinatorUpdate) -> DealUpdateResponseDTO:
        return DealUpdateResponseDTO(
            inputs=DealMapper.to_inputs_dto(update.inputs),
            recomputed=update.recomputed,
            sequence=update.sequence,
            quote=DealMapper.to_response(update.quote) if update.quote is not None else None,
        )
