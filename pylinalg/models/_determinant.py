"""
Determinant engine.

Orders 1-3 use closed forms. Larger orders use Laplace (cofactor)
expansion along the first row:

    det(A) = sum_j (-1)^j * a[0, j] * det(minor(0, j))

applied recursively. Every step expands along the top remaining row, so a
minor is fully identified by the tuple of columns that survive; minors are
memoized on that tuple for the duration of one determinant evaluation.
The cache holds up to C(n, k) minors of each order k, about 2^n in total,
which bounds practical use to orders of roughly 20.
"""

from functools import lru_cache
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.validation import check_square


def determinant(data: NDArray[np.floating[Any]]) -> float:
    """
    Determinant of a square 2-D array.

    Args:
        data: Square array of order >= 1

    Returns:
        det(data) as a Python float

    Raises:
        NonSquareMatrixError: If data is not square
    """
    check_square(data.shape, 'determinant')
    if data.shape[0] <= 3:
        return closed_form(data)
    return laplace_expansion(data, base_order=3)


def closed_form(data: NDArray[np.floating[Any]]) -> float:
    """Closed-form determinant for orders 1, 2 and 3."""
    n = data.shape[0]
    if n == 1:
        return float(data[0, 0])
    if n == 2:
        return float(data[0, 0] * data[1, 1] - data[0, 1] * data[1, 0])
    if n == 3:
        return _sarrus(data)
    raise ValueError(f"closed_form: order must be 1-3, got {n}")


def _sarrus(a: NDArray[np.floating[Any]]) -> float:
    return float(
        a[0, 0] * a[1, 1] * a[2, 2]
        + a[0, 1] * a[1, 2] * a[2, 0]
        + a[0, 2] * a[1, 0] * a[2, 1]
        - a[0, 2] * a[1, 1] * a[2, 0]
        - a[0, 0] * a[1, 2] * a[2, 1]
        - a[0, 1] * a[1, 0] * a[2, 2]
    )


def laplace_expansion(data: NDArray[np.floating[Any]], base_order: int = 3) -> float:
    """
    Determinant by first-row cofactor expansion.

    Args:
        data: Square array
        base_order: Minors of this order or smaller switch to the closed
            form. Use 1 to expand all the way down to single entries.

    Returns:
        det(data) as a Python float
    """
    check_square(data.shape, 'determinant')
    if not 1 <= base_order <= 3:
        raise ValueError(f"base_order must be 1, 2 or 3, got {base_order}")

    n = data.shape[0]

    @lru_cache(maxsize=None)
    def minor_det(cols: tuple[int, ...]) -> float:
        k = len(cols)
        top = n - k
        if k <= base_order:
            return closed_form(data[np.ix_(range(top, n), cols)])

        total = 0.0
        for j, col in enumerate(cols):
            entry = data[top, col]
            if entry == 0.0:
                continue
            sign = -1.0 if j % 2 else 1.0
            total += sign * float(entry) * minor_det(cols[:j] + cols[j + 1:])
        return total

    return minor_det(tuple(range(n)))


def minor(data: NDArray[np.floating[Any]], row: int, col: int) -> NDArray[np.float64]:
    """Copy of data with one row and one column removed."""
    keep_rows = np.arange(data.shape[0]) != row
    keep_cols = np.arange(data.shape[1]) != col
    return data[keep_rows][:, keep_cols].copy()
