"""
Tolerance-based structural equality.

Two operands are equal when their shapes match and every pair of elements
differs by at most the comparer's absolute tolerance (EQUALITY tier,
1e-6, unless configured otherwise).
"""

from typing import Any

import numpy as np

from pylinalg.core.compute.tolerances import EQUALITY, ToleranceTier


class MatrixComparer:
    """
    Elementwise equality with a fixed absolute tolerance.

    Works on anything exposing ``__array__`` (Matrix, Row, Vector, ndarray).

    Example:
        >>> comparer = MatrixComparer()
        >>> comparer.equals(Matrix([[1.0]]), Matrix([[1.0 + 1e-9]]))
        True
    """

    def __init__(self, tolerance: ToleranceTier = EQUALITY):
        self._tolerance = tolerance

    @property
    def tolerance(self) -> ToleranceTier:
        return self._tolerance

    def equals(self, x: Any, y: Any) -> bool:
        """Compare shapes, then all elements within the absolute tolerance."""
        if x is None or y is None:
            return False

        left = np.asarray(x, dtype=np.float64)
        right = np.asarray(y, dtype=np.float64)
        if left.shape != right.shape:
            return False

        return bool(np.all(np.abs(left - right) <= self._tolerance.atol))

    def __call__(self, x: Any, y: Any) -> bool:
        return self.equals(x, y)


DEFAULT_COMPARER = MatrixComparer()
