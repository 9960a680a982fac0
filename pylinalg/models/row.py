"""
Row value type.

A Row is an owned, fixed-length array of doubles. It is the unit in which
a Matrix hands out and accepts whole rows: reading ``matrix[i]`` returns a
copy, and assigning a Row back copies its values into the matrix.
"""

from __future__ import annotations

from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.validation import check_index, check_same_shape, check_scalar
from pylinalg.models._common import (
    as_values,
    checked_divisor,
    is_scalar,
    scalar_operand,
)
from pylinalg.models.comparers import DEFAULT_COMPARER


class Row:
    """
    Fixed-length numeric row.

    Construction:
        Row(1.0, 2.0, 3.0)       # positional values
        Row([1.0, 2.0, 3.0])     # any 1-D array-like

    Supports elementwise ``+``/``-`` with a Row of equal length and scalar
    ``*``/``/`` in both operand orders (``s / row`` equals ``row / s``).
    """

    __hash__ = None  # mutable
    __array_ufunc__ = None  # numpy scalars defer to the reflected operators

    def __init__(self, *values: Any):
        if len(values) == 1 and not is_scalar(values[0]):
            values = values[0]
        self._data = as_values(values, 1, 'Row')

    @classmethod
    def _wrap(cls, data: NDArray[np.float64]) -> Row:
        """Adopt an already validated array without copying."""
        row = cls.__new__(cls)
        row._data = data
        return row

    # === Container protocol ===

    def __len__(self) -> int:
        return self._data.shape[0]

    @property
    def length(self) -> int:
        return len(self)

    def __getitem__(self, i: int) -> float:
        i = check_index(i, len(self), self._data.shape, 'row element')
        return float(self._data[i])

    def __setitem__(self, i: int, value: float) -> None:
        i = check_index(i, len(self), self._data.shape, 'row element')
        self._data[i] = check_scalar(value, 'Row element')

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

    def __add__(self, other: Any) -> Row:
        if not isinstance(other, Row):
            return NotImplemented
        check_same_shape(self._data.shape, other._data.shape, 'Row add')
        return Row._wrap(self._data + other._data)

    def __sub__(self, other: Any) -> Row:
        if not isinstance(other, Row):
            return NotImplemented
        check_same_shape(self._data.shape, other._data.shape, 'Row subtract')
        return Row._wrap(self._data - other._data)

    def __neg__(self) -> Row:
        return Row._wrap(-self._data)

    def __mul__(self, alpha: Any) -> Row:
        if not is_scalar(alpha):
            return NotImplemented
        return Row._wrap(self._data * scalar_operand(alpha, 'Row multiply'))

    __rmul__ = __mul__

    def __truediv__(self, alpha: Any) -> Row:
        if not is_scalar(alpha):
            return NotImplemented
        return Row._wrap(self._data / checked_divisor(alpha, 'Row divide'))

    # s / row reads as row scaled by 1/s
    __rtruediv__ = __truediv__

    # === Comparison / display ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return DEFAULT_COMPARER.equals(self._data, other._data)

    def __repr__(self) -> str:
        values = ", ".join(f"{v:g}" for v in self._data)
        return f"Row({values})"
