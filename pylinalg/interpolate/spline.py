"""
Natural cubic spline interpolation.

For knots x_0 < ... < x_n with values y_i, the spline is a cubic on each
segment [x_i, x_{i+1}]:

    S_i(t) = a3 (t - x_i)^3 + a2 (t - x_i)^2 + a1 (t - x_i) + a0

The interior second derivatives M_1..M_{n-1} solve the tridiagonal system

    h_{i-1} M_{i-1} + 2 (h_{i-1} + h_i) M_i + h_i M_{i+1}
        = 6 ((y_{i+1} - y_i) / h_i - (y_i - y_{i-1}) / h_{i-1})

with h_i = x_{i+1} - x_i and the natural end conditions M_0 = M_n = 0.
"""

from __future__ import annotations

from dataclasses import dataclass
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import ValidationError
from pylinalg.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
)
from pylinalg.models.matrix import Matrix
from pylinalg.systems.solvers import solve


@dataclass(frozen=True)
class CubicSpline:
    """
    Piecewise cubic through a set of knots.

    Attributes:
        knots: Strictly increasing x coordinates (n + 1,)
        values: y coordinates at the knots (n + 1,)
        coefficients: One row [a3, a2, a1, a0] per segment (n x 4)
        second_derivatives: S'' at each knot (n + 1,)
    """
    knots: NDArray[np.float64]
    values: NDArray[np.float64]
    coefficients: NDArray[np.float64]
    second_derivatives: NDArray[np.float64]

    @property
    def n_segments(self) -> int:
        return self.coefficients.shape[0]

    def segment(self, t: float) -> int:
        """Index of the segment containing t (the last knot belongs to the last segment)."""
        self._check_domain(np.asarray(t, dtype=np.float64))
        index = int(np.searchsorted(self.knots, t, side='right')) - 1
        return min(max(index, 0), self.n_segments - 1)

    def __call__(self, t: ArrayLike) -> float | NDArray[np.float64]:
        """
        Evaluate the spline at t (scalar or array).

        Raises:
            ValidationError: If any t lies outside [x_0, x_n]
        """
        points = check_array(t, 't')
        check_finite(points, 't')
        self._check_domain(points)

        index = np.searchsorted(self.knots, points, side='right') - 1
        index = np.clip(index, 0, self.n_segments - 1)
        dx = points - self.knots[index]
        a3, a2, a1, a0 = self.coefficients[index].T
        result = ((a3 * dx + a2) * dx + a1) * dx + a0

        if result.ndim == 0:
            return float(result)
        return result

    def _check_domain(self, points: NDArray[np.float64]) -> None:
        lo, hi = self.knots[0], self.knots[-1]
        if np.any(points < lo) or np.any(points > hi):
            raise ValidationError(
                f"t: outside the interpolation range [{lo:g}, {hi:g}]"
            )


def fit_cubic_spline(x: ArrayLike, y: ArrayLike) -> CubicSpline:
    """
    Fit a natural cubic spline through the points (x_i, y_i).

    Args:
        x: Strictly increasing knot positions, at least two
        y: Values at the knots

    Returns:
        CubicSpline with per-segment coefficients

    Raises:
        ValidationError: If fewer than two points, non-finite values or
            x not strictly increasing
        DimensionError: If x and y differ in length
    """
    # === Input Validation ===
    x_arr = check_array(x, 'x')
    y_arr = check_array(y, 'y')
    check_1d(x_arr, 'x')
    check_1d(y_arr, 'y')
    check_finite(x_arr, 'x')
    check_finite(y_arr, 'y')
    check_consistent_length(x_arr, y_arr, names=('x', 'y'))

    if x_arr.shape[0] < 2:
        raise ValidationError(
            f"x: requires at least 2 points, got {x_arr.shape[0]}"
        )

    h = np.diff(x_arr)
    if np.any(h <= 0):
        bad = int(np.flatnonzero(h <= 0)[0])
        raise ValidationError(
            f"x: must be strictly increasing, x[{bad}]={x_arr[bad]:g} >= x[{bad + 1}]={x_arr[bad + 1]:g}"
        )

    # === Second Derivatives ===
    n = h.shape[0]
    M = np.zeros(n + 1, dtype=np.float64)
    if n > 1:
        M[1:n] = _interior_second_derivatives(h, y_arr)

    # === Segment Coefficients ===
    slopes = np.diff(y_arr) / h
    coefficients = np.column_stack([
        (M[1:] - M[:-1]) / (6.0 * h),
        M[:-1] / 2.0,
        slopes - h * (2.0 * M[:-1] + M[1:]) / 6.0,
        y_arr[:-1],
    ])

    return CubicSpline(
        knots=x_arr,
        values=y_arr,
        coefficients=coefficients,
        second_derivatives=M,
    )


def _interior_second_derivatives(
    h: NDArray[np.float64],
    y: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Assemble and solve the (n-1) x (n-1) tridiagonal system for M_1..M_{n-1}."""
    size = h.shape[0] - 1
    system = Matrix(size, size)
    rhs = np.empty(size, dtype=np.float64)

    for k in range(size):
        i = k + 1
        system[k, k] = 2.0 * (h[i - 1] + h[i])
        if k > 0:
            system[k, k - 1] = h[i - 1]
        if k < size - 1:
            system[k, k + 1] = h[i]
        rhs[k] = 6.0 * ((y[i + 1] - y[i]) / h[i] - (y[i] - y[i - 1]) / h[i - 1])

    return solve(system, rhs).to_numpy()
