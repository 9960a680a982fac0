"""
Core infrastructure for PyLinalg.

This module provides shared abstractions and utilities used by the value
types (models), the solver domain and the interpolation helpers.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Tolerance tiers and timing
"""

from pylinalg.core.result import Result
from pylinalg.core.exceptions import (
    PyLinalgError,
    ValidationError,
    DimensionError,
    NonSquareMatrixError,
    RankMismatchError,
    IndexOutOfBoundsError,
    NumericalError,
    SingularMatrixError,
    IndeterminateSystemError,
    UnsupportedOperationError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyLinalgError",
    "ValidationError",
    "DimensionError",
    "NonSquareMatrixError",
    "RankMismatchError",
    "IndexOutOfBoundsError",
    "NumericalError",
    "SingularMatrixError",
    "IndeterminateSystemError",
    "UnsupportedOperationError",
]
