"""
Dependency injection for FastAPI routes.

The calculator is stateless, so the use case is built per request from the
configured engine limits. The mode coordinator holds per-form state and is
therefore never cached; routes build a fresh one for each update.
"""

from __future__ import annotations

from fastapi import Depends

from deal_calculator.domain.amortization import EngineLimits
from deal_calculator.infra.config import engine_limits
from deal_calculator.use_cases.compute_deal import ComputeDeal


def get_engine_limits() -> EngineLimits:
    """Solver limits read from the environment."""
    return engine_limits()


def get_compute_deal_use_case(limits: EngineLimits = Depends(get_engine_limits)) -> ComputeDeal:
    """
    Factory function that returns a configured ComputeDeal use case.

    Args:
        limits: Engine limits (injected by FastAPI via Depends(get_engine_limits))

    Returns:
        ComputeDeal: Use case configured with the given limits
    """
    return ComputeDeal(limits=limits)
