"""
Linear system solution types.

Contains the parameter payload produced by elimination backends and the
user-facing wrappers for solve and inverse.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pylinalg.core.result import Result
from pylinalg.models.matrix import Matrix
from pylinalg.models.vector import Vector

if TYPE_CHECKING:
    from pylinalg.systems.design import SystemDesign


@dataclass(frozen=True)
class EliminationParams:
    """
    Parameter payload for Gaussian elimination.

    This is the immutable data computed by backends.

    Attributes:
        solution: X with A X = B (n x k)
        pivots: Pivot values in elimination order
        permutation: permutation[i] is the original index of row i after pivoting
        row_swaps: Number of row interchanges performed
        rank: Number of usable pivots (n for a solved system)
        determinant: det(A) as a by-product of elimination
    """
    solution: NDArray[np.float64]
    pivots: NDArray[np.float64]
    permutation: NDArray[np.intp]
    row_swaps: int
    rank: int
    determinant: float


class _EliminationSolution:
    """Accessors shared by the solve and inverse wrappers."""

    _result: Result[EliminationParams]
    _design: 'SystemDesign'

    @property
    def pivots(self) -> NDArray[np.float64]:
        return self._result.params.pivots

    @property
    def permutation(self) -> NDArray[np.intp]:
        return self._result.params.permutation

    @property
    def row_swaps(self) -> int:
        return self._result.params.row_swaps

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def determinant(self) -> float:
        return self._result.params.determinant

    @property
    def pivot_ratio(self) -> float:
        """Smallest over largest pivot magnitude; small values mean ill-conditioning."""
        magnitudes = np.abs(self.pivots)
        return float(magnitudes.min() / magnitudes.max())

    @property
    def ill_conditioned(self) -> bool:
        """True if the backend flagged a small pivot ratio."""
        return self._result.has_warning("Ill-conditioned")

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def _summary_lines(self, title: str) -> list[str]:
        lines = [
            title,
            "=" * 60,
            f"Order: {self._design.n}",
            f"Rank: {self.rank}",
            f"Row swaps: {self.row_swaps}",
            f"Determinant: {self.determinant:.6g}",
            f"Pivot ratio: {self.pivot_ratio:.3e}",
        ]
        return lines

    def _summary_footer(self) -> list[str]:
        lines = ["-" * 60, f"Backend: {self.backend_name}"]
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.6f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return lines


@dataclass
class LinearSolution(_EliminationSolution):
    """
    User-facing result of solving ``A x = b``.

    Wraps the backend Result and provides the solution vector together
    with elimination diagnostics.
    """
    _result: Result[EliminationParams]
    _design: 'SystemDesign'

    # Cached computations
    _residuals: NDArray[np.float64] | None = None

    @property
    def x(self) -> Vector:
        """Solution as a new Vector."""
        return Vector(self._result.params.solution[:, 0])

    @property
    def solution(self) -> NDArray[np.float64]:
        """Solution as a 1-D array."""
        return self._result.params.solution[:, 0].copy()

    @property
    def residuals(self) -> NDArray[np.float64]:
        """b - A x, computed on the original (unpivoted) system."""
        if self._residuals is None:
            x = self._result.params.solution[:, 0]
            self._residuals = self._design.B[:, 0] - self._design.A @ x
        return self._residuals

    @property
    def residual_norm(self) -> float:
        return float(np.linalg.norm(self.residuals))

    def summary(self) -> str:
        """Plain-text report of the solution and diagnostics."""
        lines = self._summary_lines("Linear System Solution")
        lines.append(f"Residual norm: {self.residual_norm:.3e}")
        lines.append("")
        lines.append("Solution:")
        lines.append("-" * 60)
        for i, value in enumerate(self._result.params.solution[:, 0]):
            lines.append(f"  x[{i}]: {value:14.6f}")
        lines.extend(self._summary_footer())
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self._design.n}, rank={self.rank}, "
            f"row_swaps={self.row_swaps}, residual_norm={self.residual_norm:.3e})"
        )


@dataclass
class InverseSolution(_EliminationSolution):
    """
    User-facing result of inverting a square matrix.
    """
    _result: Result[EliminationParams]
    _design: 'SystemDesign'

    @property
    def inverse(self) -> Matrix:
        """Inverse as a new Matrix."""
        return Matrix(self._result.params.solution)

    def summary(self) -> str:
        """Plain-text report of the inversion diagnostics."""
        lines = self._summary_lines("Matrix Inverse")
        identity_error = np.max(np.abs(
            self._design.A @ self._result.params.solution - np.eye(self._design.n)
        ))
        lines.append(f"Max |A A^-1 - I|: {identity_error:.3e}")
        lines.extend(self._summary_footer())
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"InverseSolution(n={self._design.n}, row_swaps={self.row_swaps}, "
            f"determinant={self.determinant:.6g})"
        )
