"""Error body returned by the deal routes on 4xx and 5xx.

Only rejected input produces one: an infeasible or incomplete deal is a 200
quote whose ``solver.status`` says so.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """One rejected form field, named as the form names it."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "down_payment",
                "message": "Must be a valid decimal: 2,000",
                "code": "INVALID_DECIMAL",
            }
        }
    )


class ErrorResponse(BaseModel):
    """
    ``detail`` is a summary; ``errors`` lists every field that failed so a form
    can flag them all in one round trip. ``code`` is ``VALIDATION_ERROR`` for
    rejected input and ``INTERNAL_ERROR`` for a server fault.
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "detail": "Invalid request parameters",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "term_months",
                            "message": "Input should be less than or equal to 1000",
                            "code": "less_than_equal",
                        }
                    ],
                },
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "sales_price",
                            "message": "Must be a valid decimal: $20,000",
                            "code": "INVALID_DECIMAL",
                        },
                        {
                            "field": "apr",
                            "message": "Must be a valid decimal: 19,99",
                            "code": "INVALID_DECIMAL",
                        },
                    ],
                },
                {"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"},
            ]
        }
    )
