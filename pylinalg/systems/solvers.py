"""
Solver dispatch for square linear systems.

This module provides the public entry points and backend selection:
    solve / solve_system     A x = b
    inverse / invert         A^-1
"""

import warnings
from typing import Any, Literal
from numpy.typing import ArrayLike

from pylinalg.core.compute.tolerances import PIVOT, ToleranceTier
from pylinalg.core.exceptions import UnsupportedOperationError
from pylinalg.models.matrix import Matrix
from pylinalg.models.vector import Vector
from pylinalg.systems.backends.cpu import GaussianEliminationBackend
from pylinalg.systems.design import SystemDesign
from pylinalg.systems.solution import InverseSolution, LinearSolution


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_gauss', 'gpu']


def solve_system(
    matrix: Matrix | ArrayLike,
    vector: Any,
    *,
    backend: BackendChoice = 'auto',
    tolerance: ToleranceTier | None = None,
) -> LinearSolution:
    """
    Solve the square linear system ``matrix @ x = vector``.

    Neither input is modified; elimination runs on private copies.

    Args:
        matrix: Square coefficient matrix (Matrix or 2-D array-like)
        vector: Right-hand side (Vector, Row, 1-D array-like or n x 1 column)
        backend: Computational backend to use:
            - 'auto' / 'cpu' / 'cpu_gauss': Gaussian elimination on CPU
            - 'gpu': recognised but not supported
        tolerance: Pivot tolerance tier (defaults to PIVOT)

    Returns:
        LinearSolution with the solution vector and elimination diagnostics

    Raises:
        ValidationError: If inputs are non-numeric or non-finite
        NonSquareMatrixError: If matrix is not square
        RankMismatchError: If len(vector) != matrix rows
        SingularMatrixError: If the equations are inconsistent
        IndeterminateSystemError: If the system has infinitely many solutions
        UnsupportedOperationError: If an unsupported backend is requested

    Warns:
        RuntimeWarning: If the pivots indicate an ill-conditioned system

    Example:
        >>> A = Matrix([[5, 2, 8], [1, 5, 9], [7, 5, 3]])
        >>> result = solve_system(A, [8, 6, 1])
        >>> result.x
        >>> print(result.summary())
    """
    solution = _solve_system(matrix, vector, backend, tolerance)
    _emit_warnings(solution)
    return solution


def solve(
    matrix: Matrix | ArrayLike,
    vector: Any,
    *,
    backend: BackendChoice = 'auto',
    tolerance: ToleranceTier | None = None,
) -> Vector:
    """
    Solve ``matrix @ x = vector`` and return x as a Vector.

    Shorthand for ``solve_system(...).x``; see solve_system for arguments
    and raised exceptions.
    """
    solution = _solve_system(matrix, vector, backend, tolerance)
    _emit_warnings(solution)
    return solution.x


def invert(
    matrix: Matrix | ArrayLike,
    *,
    backend: BackendChoice = 'auto',
    tolerance: ToleranceTier | None = None,
) -> InverseSolution:
    """
    Invert a square matrix by Gauss-Jordan elimination against the identity.

    Args:
        matrix: Square matrix (Matrix or 2-D array-like)
        backend: See solve_system
        tolerance: Pivot tolerance tier (defaults to PIVOT)

    Returns:
        InverseSolution with the inverse and elimination diagnostics

    Raises:
        NonSquareMatrixError: If matrix is not square
        SingularMatrixError: If matrix is not invertible
    """
    solution = _invert(matrix, backend, tolerance)
    _emit_warnings(solution)
    return solution


def inverse(
    matrix: Matrix | ArrayLike,
    *,
    backend: BackendChoice = 'auto',
    tolerance: ToleranceTier | None = None,
) -> Matrix:
    """Inverse of a square matrix as a new Matrix; see invert."""
    solution = _invert(matrix, backend, tolerance)
    _emit_warnings(solution)
    return solution.inverse


# === Internal pipeline ===
# Public entry points (including Matrix.solve and Matrix.inverse) call these
# directly, so _emit_warnings' default stacklevel lands on the user's line.

def _solve_system(
    matrix: Matrix | ArrayLike,
    vector: Any,
    backend: BackendChoice,
    tolerance: ToleranceTier | None,
) -> LinearSolution:
    # === Input Validation ===
    # This is the boundary - validate here, trust everywhere else
    design = SystemDesign.for_solve(matrix, vector)

    # === Select Backend ===
    backend_impl = _get_backend(backend, tolerance)

    # === Solve ===
    result = backend_impl.solve(design)

    # === Wrap and Return ===
    return LinearSolution(_result=result, _design=design)


def _invert(
    matrix: Matrix | ArrayLike,
    backend: BackendChoice,
    tolerance: ToleranceTier | None,
) -> InverseSolution:
    design = SystemDesign.for_inverse(matrix)
    result = _get_backend(backend, tolerance).solve(design)
    return InverseSolution(_result=result, _design=design)


def _emit_warnings(
    solution: LinearSolution | InverseSolution,
    stacklevel: int = 3,
) -> None:
    """Re-emit recorded backend warnings; stacklevel 3 is the caller of the entry point."""
    for message in solution.warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=stacklevel)


def _get_backend(choice: BackendChoice, tolerance: ToleranceTier | None):
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
        UnsupportedOperationError: If a recognised backend is not available
    """
    tier = PIVOT if tolerance is None else tolerance

    if choice in ('auto', 'cpu', 'cpu_gauss'):
        return GaussianEliminationBackend(tolerance=tier)

    elif choice == 'gpu':
        raise UnsupportedOperationError(
            "GPU backend is not supported; use backend='cpu'",
            feature='gpu',
        )

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
