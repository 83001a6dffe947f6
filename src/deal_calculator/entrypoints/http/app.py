from fastapi import FastAPI

from deal_calculator.entrypoints.http.exception_handlers import register_exception_handlers
from deal_calculator.entrypoints.http.routes.deals import router as deals_router
from deal_calculator.entrypoints.http.routes.health import router as health_router


def build_app() -> FastAPI:
    app = FastAPI(
        title="Deal Calculator API",
        description="""
        Deal-structuring calculator for the dealership desk.

        ## Features
        - Retail/wholesale tax lines and totals
        - Solve the payment for a term, or the term for a payment
        - One-field-at-a-time updates that recompute only the derived side

        ## Error Handling
        All errors return structured JSON responses with error codes.
        An infeasible schedule is not an error; it is reported in the
        `solver.status` field of a successful response.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        license_info={
            "name": "Proprietary",
        },
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(deals_router, prefix="/v1")

    return app


app = build_app()
