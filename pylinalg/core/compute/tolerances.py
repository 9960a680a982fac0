"""
Tolerance tiers for numerical comparison and pivot selection.

Defines the thresholds used across the library:
- EQUALITY: elementwise matrix/row/vector equality (absolute 1e-6)
- PIVOT: smallest usable elimination pivot, scaled by the matrix magnitude
- RESIDUAL: acceptance of A @ x against b

Used by the models, the elimination backend and the test suite.
"""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str

    def threshold(self, scale: float) -> float:
        """Absolute cutoff for values of the given magnitude."""
        return max(self.atol, self.rtol * abs(scale))


# Structural equality of matrices, rows and vectors
EQUALITY = ToleranceTier(
    rtol=0.0,
    atol=1e-6,
    name='equality',
    description='Fixed absolute tolerance for elementwise equality',
)

# Pivot candidates at or below rtol * max|A| are treated as zero. Purely
# relative, so uniformly scaled systems (1e-13 * A) classify like A.
PIVOT = ToleranceTier(
    rtol=1e-12,
    atol=0.0,
    name='pivot',
    description='Zero-pivot detection during Gaussian elimination',
)

# Verification of solutions: A @ x must reproduce b
RESIDUAL = ToleranceTier(
    rtol=1e-9,
    atol=1e-6,
    name='residual',
    description='Solution check, A @ x against b',
)

# Smallest/largest pivot magnitude below this ratio triggers a warning.
# Roughly corresponds to losing ten significant digits in float64.
ILL_CONDITIONED_PIVOT_RATIO = 1e-10


def select_tolerance(
    purpose: Literal['equality', 'pivot', 'residual'],
) -> ToleranceTier:
    """Select the tolerance tier for a given purpose."""
    tiers = {
        'equality': EQUALITY,
        'pivot': PIVOT,
        'residual': RESIDUAL,
    }
    try:
        return tiers[purpose]
    except KeyError:
        raise ValueError(f"Unknown tolerance purpose: {purpose!r}") from None
