"""
CPU backend for square linear systems.

Gaussian elimination with partial pivoting followed by back substitution
and row normalization (Gauss-Jordan). The same routine solves ``A x = b``
and inverts ``A``: the right-hand side is an n x k block that receives
every row operation applied to A.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylinalg.core.compute.timing import Timer
from pylinalg.core.compute.tolerances import (
    ILL_CONDITIONED_PIVOT_RATIO,
    PIVOT,
    ToleranceTier,
)
from pylinalg.core.exceptions import IndeterminateSystemError, SingularMatrixError
from pylinalg.core.result import Result
from pylinalg.systems.design import SystemDesign
from pylinalg.systems.solution import EliminationParams


class GaussianEliminationBackend:
    """
    CPU backend using Gaussian elimination with partial pivoting.

    Implements SystemDesign -> Result[EliminationParams].

    Rank-deficient systems are classified instead of producing non-finite
    values:
        - inconsistent equations (0 = c, c != 0): SingularMatrixError
        - consistent with free variables:         IndeterminateSystemError
        - inversion of any rank-deficient matrix: SingularMatrixError

    Ill-conditioning is recorded in Result.warnings; the public solver
    functions re-emit it as a RuntimeWarning at the caller.
    """

    def __init__(self, tolerance: ToleranceTier = PIVOT):
        self._tolerance = tolerance

    @property
    def name(self) -> str:
        return 'cpu_gauss'

    @property
    def tolerance(self) -> ToleranceTier:
        return self._tolerance

    def solve(self, design: SystemDesign) -> Result[EliminationParams]:
        """
        Solve ``A X = B`` for the design's right-hand-side block.

        Algorithm:
            1. Forward elimination with partial pivoting (largest magnitude
               candidate per column; candidates at or below the pivot
               tolerance leave the column free)
            2. Classify rank deficiency (singular vs indeterminate)
            3. Back substitution, eliminating entries above each pivot
            4. Normalize every row by its pivot

        Args:
            design: Validated square system

        Returns:
            Result containing EliminationParams

        Raises:
            SingularMatrixError: No solution, or inverse of a singular matrix
            IndeterminateSystemError: Infinitely many solutions
        """
        timer = Timer()
        timer.start()

        n = design.n
        U = design.A.copy()
        B = design.B.copy()
        tol = self._tolerance.threshold(design.scale)

        # === Forward Elimination ===
        with timer.section('forward_elimination'):
            pivot_cols, permutation, row_swaps = _forward_eliminate(U, B, tol)

        rank = len(pivot_cols)
        if rank < n:
            self._raise_rank_deficient(design, U, B, pivot_cols, tol)

        pivots = np.diag(U).copy()
        determinant = float(np.prod(pivots)) * (-1.0 if row_swaps % 2 else 1.0)

        # === Back Substitution ===
        with timer.section('back_substitution'):
            _back_substitute(U, B)

        # === Normalization ===
        with timer.section('normalization'):
            B /= pivots[:, np.newaxis]
            U /= pivots[:, np.newaxis]

        timer.stop()

        warn_list = []
        magnitudes = np.abs(pivots)
        ratio = float(magnitudes.min() / magnitudes.max())
        if ratio < ILL_CONDITIONED_PIVOT_RATIO:
            msg = (
                f"Ill-conditioned system: smallest/largest pivot ratio {ratio:.3e} "
                f"is below {ILL_CONDITIONED_PIVOT_RATIO:.0e}; the solution may be inaccurate"
            )
            warn_list.append(msg)

        params = EliminationParams(
            solution=B,
            pivots=pivots,
            permutation=permutation,
            row_swaps=row_swaps,
            rank=rank,
            determinant=determinant,
        )

        info: dict[str, Any] = {
            'method': 'gaussian_elimination',
            'pivoting': 'partial',
            'rhs': design.rhs_kind,
            'row_swaps': row_swaps,
            'rank': rank,
            'pivot_tolerance': tol,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warn_list),
        )

    def _raise_rank_deficient(
        self,
        design: SystemDesign,
        U: NDArray[np.float64],
        B: NDArray[np.float64],
        pivot_cols: list[int],
        tol: float,
    ) -> None:
        n = design.n
        rank = len(pivot_cols)
        first_free = next(c for c in range(n) if c not in pivot_cols)

        if design.rhs_kind == 'identity':
            raise SingularMatrixError(
                f"Matrix is singular and has no inverse: rank={rank}, expected={n} "
                f"(no usable pivot in column {first_free})",
                matrix_name='A',
                rank=rank,
                expected_rank=n,
                pivot_index=first_free,
            )

        # Rows rank..n-1 of U are numerically zero; their right-hand side decides
        rhs_tol = self._tolerance.threshold(max(design.scale, float(np.max(np.abs(design.B)))))
        leftover = np.abs(B[rank:])
        if np.any(leftover > rhs_tol):
            raise SingularMatrixError(
                f"Linear system is inconsistent and has no solution: a zero row of A "
                f"meets a right-hand side of {float(leftover.max()):.6g} "
                f"(rank={rank}, expected={n})",
                matrix_name='A',
                rank=rank,
                expected_rank=n,
                pivot_index=first_free,
            )

        raise IndeterminateSystemError(
            f"Linear system has infinitely many solutions: rank={rank}, "
            f"{n - rank} free variable(s)",
            rank=rank,
            free_variables=n - rank,
        )


def _forward_eliminate(
    U: NDArray[np.float64],
    B: NDArray[np.float64],
    tol: float,
) -> tuple[list[int], NDArray[np.intp], int]:
    """
    Reduce U to row echelon form in place, mirroring every step onto B.

    Returns:
        (pivot columns, row permutation, number of row swaps)
    """
    n = U.shape[0]
    permutation = np.arange(n)
    pivot_cols: list[int] = []
    row_swaps = 0
    row = 0

    for col in range(n):
        if row == n:
            break

        best = row + int(np.argmax(np.abs(U[row:, col])))
        if abs(U[best, col]) <= tol:
            # No usable pivot: column stays free
            continue

        if best != row:
            U[[row, best]] = U[[best, row]]
            B[[row, best]] = B[[best, row]]
            permutation[[row, best]] = permutation[[best, row]]
            row_swaps += 1

        factors = U[row + 1:, col] / U[row, col]
        U[row + 1:, col:] -= np.outer(factors, U[row, col:])
        U[row + 1:, col] = 0.0
        B[row + 1:] -= np.outer(factors, B[row])

        pivot_cols.append(col)
        row += 1

    return pivot_cols, permutation, row_swaps


def _back_substitute(U: NDArray[np.float64], B: NDArray[np.float64]) -> None:
    """Clear the entries above the diagonal of an upper-triangular U in place."""
    n = U.shape[0]
    for i in range(n - 1, 0, -1):
        factors = U[:i, i] / U[i, i]
        U[:i] -= np.outer(factors, U[i])
        U[:i, i] = 0.0
        B[:i] -= np.outer(factors, B[i])
