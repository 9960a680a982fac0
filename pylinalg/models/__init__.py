"""
Value types: Row, Vector and Matrix.

Public API:
    Row(*values)                 fixed-length row used for whole-row access
    Vector(n) / Vector(values)   n-dimensional vector
    Matrix(...)                  dense matrix with memoized D and T
    MatrixComparer               tolerance-based equality (1e-6 by default)

Example:
    >>> from pylinalg.models import Matrix, Vector
    >>> A = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    >>> A * Vector([7, 5, 8])
    Vector([41.0, 101.0, 161.0])
"""

from pylinalg.models.row import Row
from pylinalg.models.matrix import Matrix
from pylinalg.models.vector import Vector
from pylinalg.models.comparers import MatrixComparer

__all__ = [
    "Row",
    "Matrix",
    "Vector",
    "MatrixComparer",
]
