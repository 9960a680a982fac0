"""
Dense matrix of double-precision values.

The Matrix wraps a private float64 array of fixed shape. Values can be
changed through element, row and column assignment and row pivoting; the
shape never changes after construction.

Derived values are memoized:
    D: determinant (first-row Laplace expansion above order 3)
    T: transpose, a separate Matrix holding a weak back-reference to its
       source so that ``A.T.T is A`` without the transpose keeping A alive

Every mutation through the Matrix API drops both caches, so a memoized
value always reflects the current elements. There is no internal locking;
concurrent access to one instance must be synchronized by the caller.
"""

from __future__ import annotations

import weakref
from typing import Any, Iterator, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import DimensionError
from pylinalg.core.validation import (
    check_dimension,
    check_index,
    check_same_shape,
    check_scalar,
)
from pylinalg.models._common import (
    as_values,
    checked_divisor,
    is_scalar,
    scalar_operand,
)
from pylinalg.models._determinant import determinant, minor as _minor
from pylinalg.models.comparers import DEFAULT_COMPARER
from pylinalg.models.row import Row

if TYPE_CHECKING:
    from pylinalg.models.vector import Vector


class Matrix:
    """
    Dense rows x cols matrix.

    Construction:
        Matrix(3)                          # 3x3 zeros
        Matrix(2, 3)                       # 2x3 zeros
        Matrix([[1, 2], [3, 4]])           # from a 2-D literal or ndarray
        Matrix([1, 2, 3, 4, 5, 6], 2, 3)   # row-major: m[i, j] = flat[i*3 + j]
        Matrix.identity(3)

    Indexing:
        m[i, j]          element (get/set)
        m[i]             row i as a Row copy; ``m[i] = row`` copies values in

    Operators:
        +, -             same shape
        *, @             matrix product (lft.cols == rgt.rows), or matrix-vector
        * s, s *, / s, s /    scaling by a scalar (``s / m`` equals ``m / s``)

    Equality uses an absolute tolerance of 1e-6 after a shape check.
    """

    __hash__ = None  # mutable
    __array_ufunc__ = None  # numpy scalars defer to the reflected operators

    def __init__(self, data: ArrayLike | int, *shape: int):
        if is_scalar(data) and isinstance(data, (int, np.integer)):
            dims = (data,) + shape
            if len(dims) == 1:
                dims = (dims[0], dims[0])
            if len(dims) != 2:
                raise TypeError(
                    f"Matrix(rows, cols) takes at most two dimensions, got {len(dims)}"
                )
            rows = check_dimension(dims[0], 'rows')
            cols = check_dimension(dims[1], 'cols')
            values = np.zeros((rows, cols), dtype=np.float64)
        elif shape:
            if len(shape) != 2:
                raise TypeError(
                    f"Matrix(flat, rows, cols) requires exactly two dimensions, got {len(shape)}"
                )
            rows = check_dimension(shape[0], 'rows')
            cols = check_dimension(shape[1], 'cols')
            flat = as_values(data, 1, 'flat')
            if flat.shape[0] != rows * cols:
                raise DimensionError(
                    f"flat: {flat.shape[0]} values cannot fill a {rows}x{cols} matrix "
                    f"({rows * cols} required)",
                    operation='reshape',
                    left_shape=flat.shape,
                    right_shape=(rows, cols),
                )
            values = flat.reshape(rows, cols)
        else:
            values = as_values(data, 2, 'Matrix')

        self._init_state(np.ascontiguousarray(values))

    def _init_state(self, values: NDArray[np.float64]) -> None:
        self._data = values
        self._det: float | None = None
        self._transpose: Matrix | None = None
        self._source: weakref.ref[Matrix] | None = None

    @classmethod
    def _wrap(cls, values: NDArray[np.float64]) -> Matrix:
        """Adopt an already validated 2-D array without copying."""
        matrix = cls.__new__(cls)
        matrix._init_state(values)
        return matrix

    @classmethod
    def identity(cls, n: int) -> Matrix:
        """Identity matrix of order n."""
        return cls._wrap(np.eye(check_dimension(n, 'n'), dtype=np.float64))

    # === Shape ===

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    # === Derived values ===

    @property
    def D(self) -> float:
        """
        Determinant, computed once and memoized until the next mutation.

        A determinant of 0 means the rows are linearly dependent and the
        system A x = b has either no solution or infinitely many.

        Cost grows with the number of column subsets (about 2^n memoized
        minors), so orders much beyond 20 are impractical. For those, use
        ``solve_system(A, b).determinant``, a by-product of elimination.

        Raises:
            NonSquareMatrixError: If the matrix is not square
        """
        if self._det is None:
            self._det = determinant(self._data)
        return self._det

    @property
    def T(self) -> Matrix:
        """Transpose, memoized; the transpose of ``A.T`` is ``A`` itself."""
        if self._source is not None:
            source = self._source()
            if isinstance(source, Matrix) and source._transpose is self:
                return source

        if self._transpose is None:
            transpose = Matrix._wrap(self._data.T.copy())
            transpose._source = weakref.ref(self)
            self._transpose = transpose
        return self._transpose

    def minor(self, row: int, col: int) -> Matrix:
        """Submatrix with the given row and column removed."""
        row = self._row_index(row)
        col = self._col_index(col)
        if self.rows < 2 or self.cols < 2:
            raise DimensionError(
                f"minor: a {self.rows}x{self.cols} matrix has no minors",
                operation='minor',
                left_shape=self.shape,
            )
        return Matrix._wrap(_minor(self._data, row, col))

    def _invalidate(self) -> None:
        """Drop memoized values and detach from any cached transpose link."""
        self._det = None
        if self._transpose is not None:
            self._transpose._source = None
            self._transpose = None
        if self._source is not None:
            source = self._source()
            if source is not None and source._transpose is self:
                source._transpose = None
            self._source = None

    # === Indexing ===

    def _row_index(self, i: Any) -> int:
        return check_index(i, self.rows, self.shape, 'row')

    def _col_index(self, j: Any) -> int:
        return check_index(j, self.cols, self.shape, 'column')

    def __getitem__(self, key: Any) -> float | Row:
        if isinstance(key, tuple):
            if len(key) != 2:
                raise TypeError(f"Matrix index takes (row, col), got {len(key)} values")
            i, j = key
            return float(self._data[self._row_index(i), self._col_index(j)])
        return self.get_row(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        if isinstance(key, tuple):
            if len(key) != 2:
                raise TypeError(f"Matrix index takes (row, col), got {len(key)} values")
            i, j = key
            i, j = self._row_index(i), self._col_index(j)
            self._data[i, j] = check_scalar(value, f"Matrix[{i}, {j}]")
            self._invalidate()
        else:
            self.set_row(value, key)

    def get_row(self, row: int) -> Row:
        """Copy of one row."""
        return Row._wrap(self._data[self._row_index(row)].copy())

    def set_row(self, values: Row | ArrayLike, row: int) -> None:
        """Copy values into one row; length must equal cols."""
        row = self._row_index(row)
        data = as_values(values, 1, 'row')
        check_same_shape((self.cols,), data.shape, 'set_row')
        self._data[row] = data
        self._invalidate()

    def get_column(self, col: int) -> NDArray[np.float64]:
        """Copy of one column as a 1-D array."""
        return self._data[:, self._col_index(col)].copy()

    def set_column(self, values: ArrayLike, col: int) -> None:
        """Copy values into one column; length must equal rows."""
        col = self._col_index(col)
        data = as_values(values, 1, 'column')
        check_same_shape((self.rows,), data.shape, 'set_column')
        self._data[:, col] = data
        self._invalidate()

    def pivot_rows(self, n: int, m: int) -> None:
        """
        Swap rows n and m in place.

        Raises:
            IndexOutOfBoundsError: Naming the offending index and the shape
        """
        n = self._row_index(n)
        m = self._row_index(m)
        if n == m:
            return
        self._data[[n, m]] = self._data[[m, n]]
        self._invalidate()

    def __iter__(self) -> Iterator[Row]:
        for i in range(self.rows):
            yield self.get_row(i)

    # === Arithmetic ===

    def __add__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        check_same_shape(self.shape, other.shape, 'add')
        return Matrix._wrap(self._data + other._data)

    def __sub__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        check_same_shape(self.shape, other.shape, 'subtract')
        return Matrix._wrap(self._data - other._data)

    def __neg__(self) -> Matrix:
        return Matrix._wrap(-self._data)

    def __mul__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self._matmul(other)
        if is_scalar(other):
            return Matrix._wrap(self._data * scalar_operand(other, 'multiply'))
        # Matrix * Vector is resolved by Vector.__rmul__
        return NotImplemented

    def __rmul__(self, other: Any) -> Matrix:
        if is_scalar(other):
            return Matrix._wrap(self._data * scalar_operand(other, 'multiply'))
        return NotImplemented

    def __matmul__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self._matmul(other)
        return NotImplemented

    def _matmul(self, other: Matrix) -> Matrix:
        if self.cols != other.rows:
            raise DimensionError(
                f"matmul: cannot multiply {self.rows}x{self.cols} by "
                f"{other.rows}x{other.cols} (left cols must equal right rows)",
                operation='matmul',
                left_shape=self.shape,
                right_shape=other.shape,
            )
        return Matrix._wrap(self._data @ other._data)

    def __truediv__(self, alpha: Any) -> Matrix:
        if not is_scalar(alpha):
            return NotImplemented
        return Matrix._wrap(self._data / checked_divisor(alpha, 'divide'))

    # s / m reads as m scaled by 1/s
    __rtruediv__ = __truediv__

    # === Linear systems ===

    def inverse(self) -> Matrix:
        """
        Inverse via Gauss-Jordan elimination against an identity block.

        Raises:
            NonSquareMatrixError: If the matrix is not square
            SingularMatrixError: If the matrix is not invertible
        """
        from pylinalg.systems.solvers import _emit_warnings, _invert
        solution = _invert(self, 'auto', None)
        _emit_warnings(solution)
        return solution.inverse

    @staticmethod
    def solve(matrix: Matrix, vector: Any) -> Vector:
        """Solve ``matrix @ x = vector``; see :func:`pylinalg.systems.solve`."""
        from pylinalg.systems.solvers import _emit_warnings, _solve_system
        solution = _solve_system(matrix, vector, 'auto', None)
        _emit_warnings(solution)
        return solution.x

    # === Conversion ===

    def copy(self) -> Matrix:
        """Deep copy without memoized values."""
        return Matrix._wrap(self._data.copy())

    def to_numpy(self) -> NDArray[np.float64]:
        """Copy of the elements as a 2-D array."""
        return self._data.copy()

    def flatten(self) -> NDArray[np.float64]:
        """Row-major copy; ``Matrix(m.flatten(), m.rows, m.cols) == m``."""
        return self._data.ravel(order='C').copy()

    def tolist(self) -> list[list[float]]:
        return self._data.tolist()

    def __array__(self, dtype=None, copy=None) -> NDArray:
        data = self._data.copy()
        return data if dtype is None else data.astype(dtype)

    # === Comparison / display ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return DEFAULT_COMPARER.equals(self._data, other._data)

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r})"

    def __str__(self) -> str:
        width = max(len(f"{v:g}") for v in self._data.flat)
        lines = (
            "[" + " ".join(f"{v:>{width}g}" for v in row) + "]"
            for row in self._data
        )
        return "\n".join(lines)
