"""
Test suite for DealMapper.

The mapper translates between REST DTOs and domain models:
- Decimal strings → integer cents on the way in
- Integer cents → two-place decimal strings on the way out
- Invalid values → ValidationError with field-level errors
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from deal_calculator.domain.deal import (
    CalculationMode,
    DealInputs,
    DealQuote,
    DerivedAmounts,
    PaymentFrequency,
    SaleType,
    SolverResult,
    SolverStatus,
    TaxBreakdown,
)
from deal_calculator.domain.errors import ValidationError
from deal_calculator.entrypoints.http.dtos.deal import DealInputsDTO
from deal_calculator.entrypoints.http.mappers.deal_mapper import DealMapper
from deal_calculator.use_cases.mode_coordinator import CoordinatorUpdate


@pytest.fixture
def sample_quote() -> DealQuote:
    return DealQuote(
        inputs=DealInputs(sales_price=2_000_000, down_payment=200_000),
        taxes=TaxBreakdown(state_tax=146_920, local_tax=4_400, business_tax=6_090),
        totals=DerivedAmounts(
            total_price=2_201_260,
            amount_financed=2_001_260,
            finance_charge=1_180_000,
            balance_due=3_181_260,
        ),
        solver=SolverResult(
            status=SolverStatus.SOLVED,
            payment_amount=53_010,
            periods=60,
            finance_charge=1_180_000,
        ),
    )


# ==============================================================================
# to_domain_inputs() - DTO → Domain
# ==============================================================================


def test_to_domain_inputs_converts_amounts_to_cents() -> None:
    dto = DealInputsDTO(
        sale_type=SaleType.RETAIL,
        sales_price="20000.00",
        doc_fee="299.00",
        title_fee="139.5",
        down_payment="2000",
        apr="19.99",
        frequency=PaymentFrequency.BI_WEEKLY,
        mode=CalculationMode.BY_PAYMENT,
        term_months=0,
        payment_amount="250.25",
    )

    result = DealMapper.to_domain_inputs(dto)

    assert result == DealInputs(
        sale_type=SaleType.RETAIL,
        sales_price=2_000_000,
        doc_fee=29_900,
        title_fee=13_950,
        down_payment=200_000,
        apr=Decimal("19.99"),
        frequency=PaymentFrequency.BI_WEEKLY,
        mode=CalculationMode.BY_PAYMENT,
        term_months=0,
        payment_amount=25_025,
    )


def test_to_domain_inputs_uses_form_defaults() -> None:
    result = DealMapper.to_domain_inputs(DealInputsDTO())

    assert result == DealInputs()


def test_to_domain_inputs_collects_all_invalid_decimals() -> None:
    dto = DealInputsDTO.model_construct(
        **{**DealInputsDTO().model_dump(), "sales_price": "abc", "apr": "x"}
    )

    with pytest.raises(ValidationError) as exc_info:
        DealMapper.to_domain_inputs(dto)

    fields = [error["field"] for error in exc_info.value.errors or []]
    assert fields == ["sales_price", "apr"]
    assert exc_info.value.errors[0]["code"] == "INVALID_DECIMAL"


def test_to_domain_inputs_rejects_negative_amounts() -> None:
    dto = DealInputsDTO.model_construct(**{**DealInputsDTO().model_dump(), "down_payment": "-5"})

    with pytest.raises(ValidationError) as exc_info:
        DealMapper.to_domain_inputs(dto)

    assert exc_info.value.errors == [
        {"field": "down_payment", "message": "Must be >= 0", "code": "INVALID_VALUE"}
    ]


# ==============================================================================
# to_field_value() - single field parsing
# ==============================================================================


@pytest.mark.parametrize(
    "field, raw, expected",
    [
        ("sales_price", "18500.50", 1_850_050),
        ("payment_amount", "530", 53_000),
        ("apr", "7.25", Decimal("7.25")),
        ("term_months", "72", 72),
        ("term_months", "1000", 1000),
        ("sale_type", "Wholesale", SaleType.WHOLESALE),
        ("frequency", "Semi-Monthly", PaymentFrequency.SEMI_MONTHLY),
        ("mode", "byPayment", CalculationMode.BY_PAYMENT),
    ],
)
def test_to_field_value_parses_domain_types(field: str, raw: str, expected: object) -> None:
    assert DealMapper.to_field_value(field, raw) == expected


@pytest.mark.parametrize(
    "field, raw",
    [
        ("sales_price", "$20,000"),
        ("sales_price", "1e5"),
        ("apr", "-1"),
        ("term_months", "sixty"),
        ("term_months", "-12"),
        ("term_months", "1001"),
        ("frequency", "Daily"),
        ("sale_type", "Lease"),
    ],
)
def test_to_field_value_rejects_invalid_values(field: str, raw: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        DealMapper.to_field_value(field, raw)

    assert exc_info.value.errors is not None
    assert exc_info.value.errors[0]["field"] == field


# ==============================================================================
# to_response() - Domain → DTO
# ==============================================================================


def test_to_response_formats_cents_as_decimal_strings(sample_quote: DealQuote) -> None:
    response = DealMapper.to_response(sample_quote)

    assert response.taxes.state_tax == "1469.20"
    assert response.taxes.local_tax == "44.00"
    assert response.taxes.business_tax == "60.90"
    assert response.totals.total_price == "22012.60"
    assert response.totals.amount_financed == "20012.60"
    assert response.totals.finance_charge == "11800.00"
    assert response.totals.balance_due == "31812.60"
    assert response.solver.status is SolverStatus.SOLVED
    assert response.solver.feasible is True
    assert response.solver.payment_amount == "530.10"
    assert response.solver.term_months is None
    assert response.solver.periods == 60


def test_to_response_infeasible_solver() -> None:
    quote = DealQuote(
        inputs=DealInputs(mode=CalculationMode.BY_PAYMENT),
        taxes=TaxBreakdown(0, 0, 0),
        totals=DerivedAmounts(100_000, 100_000, 0, 100_000),
        solver=SolverResult.infeasible(CalculationMode.BY_PAYMENT),
    )

    response = DealMapper.to_response(quote)

    assert response.solver.status is SolverStatus.INFEASIBLE
    assert response.solver.feasible is False
    assert response.solver.term_months == 0
    assert response.solver.payment_amount is None
    assert response.solver.finance_charge == "0.00"


def test_to_update_response_round_trips_inputs(sample_quote: DealQuote) -> None:
    inputs = DealInputs(sales_price=2_000_000, down_payment=200_000, payment_amount=53_010)
    update = CoordinatorUpdate(inputs=inputs, recomputed=True, quote=sample_quote, sequence=3)

    response = DealMapper.to_update_response(update)

    assert response.recomputed is True
    assert response.sequence == 3
    assert response.inputs.payment_amount == "530.10"
    assert response.inputs.sales_price == "20000.00"
    assert response.quote is not None
    assert DealMapper.to_domain_inputs(response.inputs) == inputs


def test_to_update_response_without_quote() -> None:
    update = CoordinatorUpdate(inputs=DealInputs(), recomputed=False)

    response = DealMapper.to_update_response(update)

    assert response.recomputed is False
    assert response.quote is None


def test_to_update_response_keeps_solved_term_beyond_request_bound() -> None:
    """A term solved under a raised period cap is reported, not rejected."""
    inputs = DealInputs(mode=CalculationMode.BY_PAYMENT, term_months=1_200, payment_amount=1_000)

    response = DealMapper.to_update_response(CoordinatorUpdate(inputs=inputs, recomputed=True))

    assert response.inputs.term_months == 1_200
