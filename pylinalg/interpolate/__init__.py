"""
Interpolation built on the Matrix type and the linear solver.

Public API:
    fit_cubic_spline(x, y) -> CubicSpline
"""

from pylinalg.interpolate.spline import CubicSpline, fit_cubic_spline

__all__ = [
    "CubicSpline",
    "fit_cubic_spline",
]
