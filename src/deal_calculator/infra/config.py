from __future__ import annotations

import os

from deal_calculator.domain.amortization import DEFAULT_LIMITS, EngineLimits


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)

    if raw is None or raw.strip() == "":
        return default

    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None

    if value <= 0:
        raise RuntimeError(f"{name} must be > 0, got {value}")

    return value


def engine_limits() -> EngineLimits:
    """Solver limits, overridable through DEAL_MAX_PERIODS and DEAL_MAX_SEARCH_ITERATIONS."""
    return EngineLimits(
        max_periods=_positive_int("DEAL_MAX_PERIODS", DEFAULT_LIMITS.max_periods),
        max_search_iterations=_positive_int(
            "DEAL_MAX_SEARCH_ITERATIONS", DEFAULT_LIMITS.max_search_iterations
        ),
    )
