"""
PyLinalg: dense linear algebra on small real matrices.

Row, Vector and Matrix value types with tolerance-based equality, a
memoized determinant and transpose, and linear systems solved by Gaussian
elimination with partial pivoting.

Submodules:
    models: Row, Vector, Matrix value types
    systems: solve() / inverse() and their diagnostic variants
    interpolate: Natural cubic splines built on the solver
"""

__version__ = "0.1.0"

from pylinalg import models
from pylinalg import systems
from pylinalg import interpolate

from pylinalg.models import Row, Vector, Matrix, MatrixComparer
from pylinalg.systems import solve, solve_system, inverse, invert
from pylinalg.interpolate import CubicSpline, fit_cubic_spline
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
    "__version__",
    # Submodules
    "models",
    "systems",
    "interpolate",
    # Value types
    "Row",
    "Vector",
    "Matrix",
    "MatrixComparer",
    # Linear systems
    "solve",
    "solve_system",
    "inverse",
    "invert",
    # Interpolation
    "CubicSpline",
    "fit_cubic_spline",
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
