from fastapi import APIRouter, Depends

from deal_calculator.entrypoints.http.dependencies import get_compute_deal_use_case
from deal_calculator.entrypoints.http.dtos.deal import (
    DealInputsDTO,
    DealQuoteResponseDTO,
    DealUpdateRequestDTO,
    DealUpdateResponseDTO,
)
from deal_calculator.entrypoints.http.error_responses import ErrorResponse
from deal_calculator.entrypoints.http.mappers.deal_mapper import DealMapper
from deal_calculator.use_cases.compute_deal import ComputeDeal
from deal_calculator.use_cases.mode_coordinator import ModeCoordinator


router = APIRouter(tags=["Deals"])

_VALIDATION_RESPONSE = {
    "model": ErrorResponse,
    "description": "Validation error",
    "content": {
        "application/json": {
            "example": {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {
                        "field": "sales_price",
                        "message": "Must be a valid decimal: abc",
                        "code": "INVALID_DECIMAL",
                    }
                ],
            }
        }
    },
}


@router.post(
    "/deals/quote",
    response_model=DealQuoteResponseDTO,
    summary="Structure a deal",
    description="""
    Compute taxes, totals and the solved side of a deal.

    ## Monetary Values
    - All monetary values are strings with up to 2 decimal places (e.g., "20000.00")
    - APR is a percent string (e.g., "19.99")

    ## Modes
    - `byTerm`: `term_months` is the input; the smallest payment that pays the
      loan off within the term is solved
    - `byPayment`: `payment_amount` is the input; the number of months is solved

    ## Solver Status
    - `solved`: a valid schedule was found
    - `incomplete`: not enough input yet (e.g., nothing financed, no term); amounts are zero
    - `infeasible`: the payment cannot pay the loan off; amounts are zero

    ## Example
    ```
    POST /v1/deals/quote
    {
        "sales_price": "20000.00",
        "down_payment": "2000.00",
        "term_months": 60
    }
    ```
    """,
    responses={422: _VALIDATION_RESPONSE},
)
def quote_deal(
    payload: DealInputsDTO,
    use_case: ComputeDeal = Depends(get_compute_deal_use_case),
) -> DealQuoteResponseDTO:
    """
    Quote endpoint.

    1. Map: Convert DTO to domain inputs (string → cents)
    2. Execute: Compute the deal
    3. Map: Convert the quote to response DTO (cents → string)
    """
    inputs = DealMapper.to_domain_inputs(payload)

    quote = use_case.execute(inputs)

    return DealMapper.to_response(quote)


@router.post(
    "/deals/update",
    response_model=DealUpdateResponseDTO,
    summary="Apply one calculator field change",
    description="""
    Apply a single field change to the current form values and recompute when
    the change is a trigger for the active mode.

    - Pricing fields (sale type, prices, fees, down payment, APR, frequency)
      always recompute
    - `term_months` recomputes only in `byTerm` mode; `payment_amount` only in
      `byPayment` mode
    - Changing `mode` never recomputes
    - A recompute overwrites only the derived field of the active mode
    """,
    responses={422: _VALIDATION_RESPONSE},
)
def update_deal(
    payload: DealUpdateRequestDTO,
    use_case: ComputeDeal = Depends(get_compute_deal_use_case),
) -> DealUpdateResponseDTO:
    inputs = DealMapper.to_domain_inputs(payload.inputs)
    value = DealMapper.to_field_value(payload.field, payload.value)

    coordinator = ModeCoordinator(inputs=inputs, use_case=use_case)
    update = coordinator.update(payload.field, value)

    return DealMapper.to_update_response(update)
