"""Error responses for the deal calculator API.

The engine reports unsolvable deals through ``SolverStatus`` and never raises,
so an infeasible payment or term is a normal 200 response. What reaches these
handlers is input the calculator cannot even start on:

- a body pydantic rejects (``"$20,000"`` as a price, ``"Daily"`` frequency,
  a term outside ``0..MAX_TERM_MONTHS``)
- an update value the mapper cannot parse for its field
- anything else, which is a bug and answers 500
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from deal_calculator.domain.errors import DomainError

logger = logging.getLogger(__name__)

# Domain error codes that are the client's fault; anything unlisted is a 400.
DOMAIN_STATUS_CODES: dict[str, int] = {
    "VALIDATION_ERROR": 422,
}


def _request_context(request: Request) -> dict[str, str]:
    return {"path": request.url.path, "method": request.method}


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Answer a rejected deal input or update.

    ``ValidationError`` carries the per-field list built by ``DealMapper``
    (``INVALID_DECIMAL`` for unparseable amounts, ``INVALID_VALUE`` for
    out-of-range terms or negative amounts). ``UnknownFieldError`` carries the
    offending field name in its message.
    """
    error_dict = exc.to_dict()
    status_code = DOMAIN_STATUS_CODES.get(exc.error_code, status.HTTP_400_BAD_REQUEST)

    logger.info(
        "Deal input rejected",
        extra={
            "error_code": exc.error_code,
            "error_message": exc.message,
            **_request_context(request),
        },
    )

    content: dict[str, Any] = {"detail": exc.message, "code": exc.error_code}
    if "errors" in error_dict:
        content["errors"] = error_dict["errors"]

    return JSONResponse(status_code=status_code, content=content)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Flatten pydantic body errors into the same field list the mapper produces.

    ``("body", "inputs", "sales_price")`` becomes ``"inputs.sales_price"`` so a
    form can highlight the field directly.
    """
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"] if loc not in ("body", "query")),
            "message": error["msg"],
            "code": error["type"],
        }
        for error in exc.errors()
    ]

    logger.info("Deal request body rejected", extra={"errors": errors, **_request_context(request)})

    return JSONResponse(
        status_code=422,
        content={
            "detail": "Invalid request parameters",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        },
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    """A bare enum or int conversion that slipped past the mapper."""
    logger.info("Deal value rejected", extra={"error_message": str(exc), **_request_context(request)})

    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "code": "INVALID_VALUE"},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Deal calculation failed unexpectedly",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "error_message": str(exc),
            **_request_context(request),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(ValueError, handle_value_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.info("Exception handlers registered")
