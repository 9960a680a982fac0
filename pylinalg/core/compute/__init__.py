"""
Shared compute infrastructure for PyLinalg.

Submodules:
    tolerances: Tolerance tiers for equality, pivoting and residual checks
    timing: Execution timing utilities
"""

from pylinalg.core.compute.timing import Timer
from pylinalg.core.compute.tolerances import (
    ToleranceTier,
    EQUALITY,
    PIVOT,
    RESIDUAL,
    ILL_CONDITIONED_PIVOT_RATIO,
    select_tolerance,
)

__all__ = [
    # Timing
    "Timer",
    # Tolerances
    "ToleranceTier",
    "EQUALITY",
    "PIVOT",
    "RESIDUAL",
    "ILL_CONDITIONED_PIVOT_RATIO",
    "select_tolerance",
]
