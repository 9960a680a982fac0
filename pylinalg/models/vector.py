"""
N-dimensional numeric vector.

A Vector is independent of Matrix but interoperates with it:
    Matrix * Vector -> Vector   (standard matrix-vector product)
    Vector * Matrix -> Matrix   (matrix must be 1xM, i.e. a transposed vector)
    Vector.T        -> 1xN Matrix, memoized until the next element write
"""

from __future__ import annotations

import weakref
from typing import Any, Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import DimensionError, NumericalError
from pylinalg.core.validation import check_dimension, check_index, check_same_shape, check_scalar
from pylinalg.models._common import (
    as_values,
    checked_divisor,
    is_scalar,
    scalar_operand,
)
from pylinalg.models.comparers import DEFAULT_COMPARER
from pylinalg.models.matrix import Matrix


class Vector:
    """
    Numeric vector of length n >= 1.

    Construction:
        Vector(3)               # zeros, length 3
        Vector([7, 5, 8])       # from any 1-D array-like

    Arithmetic:
        v + w, v - w, v * w     elementwise, equal lengths required
        v * s, s * v, v / s     scalar scaling
        s / v                   same as v / s
        v - s, s - v, v + s     scalar broadcast
        abs(v), v.norm()        Euclidean norm
    """

    __hash__ = None  # mutable
    __array_ufunc__ = None  # numpy scalars defer to the reflected operators

    def __init__(self, values: ArrayLike | int):
        if is_scalar(values) and isinstance(values, (int, np.integer)):
            data = np.zeros(check_dimension(values, 'n'), dtype=np.float64)
        else:
            data = as_values(values, 1, 'Vector')
        self._data = data
        self._transpose: Matrix | None = None

    @classmethod
    def _wrap(cls, data: NDArray[np.float64]) -> Vector:
        """Adopt an already validated 1-D array without copying."""
        vector = cls.__new__(cls)
        vector._data = data
        vector._transpose = None
        return vector

    # === Container protocol ===

    def __len__(self) -> int:
        return self._data.shape[0]

    @property
    def length(self) -> int:
        return len(self)

    def __getitem__(self, i: int) -> float:
        i = check_index(i, len(self), self._data.shape, 'vector element')
        return float(self._data[i])

    def __setitem__(self, i: int, value: float) -> None:
        i = check_index(i, len(self), self._data.shape, 'vector element')
        self._data[i] = check_scalar(value, f"Vector[{i}]")
        if self._transpose is not None:
            self._transpose._source = None
            self._transpose = None

    def __iter__(self) -> Iterator[float]:
        return iter(self._data.tolist())

    def __array__(self, dtype=None, copy=None) -> NDArray:
        data = self._data.copy()
        return data if dtype is None else data.astype(dtype)

    def to_numpy(self) -> NDArray[np.float64]:
        """Copy of the values as a 1-D array."""
        return self._data.copy()

    def tolist(self) -> list[float]:
        return self._data.tolist()

    # === Arithmetic ===

    def __add__(self, other: Any) -> Vector:
        if isinstance(other, Vector):
            check_same_shape(self._data.shape, other._data.shape, 'Vector add')
            return Vector._wrap(self._data + other._data)
        if is_scalar(other):
            return Vector._wrap(self._data + scalar_operand(other, 'Vector add'))
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: Any) -> Vector:
        if isinstance(other, Vector):
            check_same_shape(self._data.shape, other._data.shape, 'Vector subtract')
            return Vector._wrap(self._data - other._data)
        if is_scalar(other):
            return Vector._wrap(self._data - scalar_operand(other, 'Vector subtract'))
        return NotImplemented

    def __rsub__(self, other: Any) -> Vector:
        if is_scalar(other):
            return Vector._wrap(scalar_operand(other, 'Vector subtract') - self._data)
        return NotImplemented

    def __neg__(self) -> Vector:
        return Vector._wrap(-self._data)

    def __mul__(self, other: Any) -> Vector | Matrix:
        if isinstance(other, Vector):
            check_same_shape(self._data.shape, other._data.shape, 'Vector multiply')
            return Vector._wrap(self._data * other._data)
        if isinstance(other, Matrix):
            return self._outer(other)
        if is_scalar(other):
            return Vector._wrap(self._data * scalar_operand(other, 'Vector multiply'))
        return NotImplemented

    def __rmul__(self, other: Any) -> Vector:
        if isinstance(other, Matrix):
            return _matrix_vector(other, self)
        if is_scalar(other):
            return Vector._wrap(self._data * scalar_operand(other, 'Vector multiply'))
        return NotImplemented

    def __matmul__(self, other: Any) -> float:
        if isinstance(other, Vector):
            return self.dot(other)
        return NotImplemented

    def __rmatmul__(self, other: Any) -> Vector:
        if isinstance(other, Matrix):
            return _matrix_vector(other, self)
        return NotImplemented

    def __truediv__(self, alpha: Any) -> Vector:
        if not is_scalar(alpha):
            return NotImplemented
        return Vector._wrap(self._data / checked_divisor(alpha, 'Vector divide'))

    # s / v reads as v scaled by 1/s
    __rtruediv__ = __truediv__

    def _outer(self, matrix: Matrix) -> Matrix:
        # The right operand stands in for a transposed vector
        if matrix.rows != 1:
            raise DimensionError(
                f"Vector multiply: a vector of length {len(self)} can only multiply "
                f"a 1xM matrix from the left, got {matrix.rows}x{matrix.cols}",
                operation='outer',
                left_shape=self._data.shape,
                right_shape=matrix.shape,
            )
        return Matrix._wrap(np.outer(self._data, matrix.get_row(0).to_numpy()))

    # === Vector functions ===

    def dot(self, other: Vector) -> float:
        """Inner product with a vector of the same length."""
        check_same_shape(self._data.shape, other._data.shape, 'dot')
        return float(self._data @ other._data)

    def norm(self) -> float:
        """Euclidean length sqrt(sum v_i^2)."""
        return float(np.sqrt(np.sum(self._data * self._data)))

    def __abs__(self) -> float:
        return self.norm()

    def normalize(self) -> Vector:
        """
        Unit vector in the same direction.

        Raises:
            NumericalError: For the zero vector, which has no direction
        """
        length = self.norm()
        if length == 0.0:
            raise NumericalError(
                f"normalize: zero vector of length {len(self)} has no direction"
            )
        return self / length

    @property
    def T(self) -> Matrix:
        """Transpose as a 1xN Matrix, memoized until the next element write."""
        if self._transpose is None:
            transpose = Matrix._wrap(self._data.reshape(1, -1).copy())
            # Writing to the matrix drops it from this cache
            transpose._source = weakref.ref(self)
            self._transpose = transpose
        return self._transpose

    # === Comparison / display ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return DEFAULT_COMPARER.equals(self._data, other._data)

    def __repr__(self) -> str:
        return f"Vector({self._data.tolist()!r})"


def _matrix_vector(matrix: Matrix, vector: Vector) -> Vector:
    if matrix.cols != len(vector):
        raise DimensionError(
            f"matmul: cannot multiply a {matrix.rows}x{matrix.cols} matrix "
            f"with a vector of length {len(vector)}",
            operation='matvec',
            left_shape=matrix.shape,
            right_shape=vector._data.shape,
        )
    return Vector._wrap(matrix.to_numpy() @ vector._data)
