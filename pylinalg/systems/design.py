"""
Linear system design.

A SystemDesign holds the validated coefficient matrix A and the
right-hand-side block B of ``A X = B``. For ``solve`` B is the solving
vector as an n x 1 block; for ``inverse`` it is the n x n identity. Both
are private copies, so the caller's objects are never touched by
elimination.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_finite,
    check_not_empty,
    check_rhs_length,
    check_square,
)
from pylinalg.models.matrix import Matrix


RhsKind = Literal['vector', 'identity']


@dataclass(frozen=True)
class SystemDesign:
    """
    Validated square system ``A X = B``.

    Construction:
        SystemDesign.for_solve(matrix, vector)   # B is n x 1
        SystemDesign.for_inverse(matrix)         # B is the identity
    """
    _A: NDArray[np.float64]
    _B: NDArray[np.float64]
    _n: int
    _rhs_kind: RhsKind

    @classmethod
    def for_solve(cls, matrix: Matrix | ArrayLike, vector: Any) -> SystemDesign:
        """
        Build the design for a single right-hand side.

        Raises:
            NonSquareMatrixError: If matrix is not square
            RankMismatchError: If len(vector) != matrix rows
            ValidationError: If any value is non-numeric or non-finite
        """
        A = _matrix_values(matrix)
        check_square(A.shape, 'solve')

        b = check_array(vector, 'vector')
        # Accept an n x 1 column as a vector
        if b.ndim == 2 and b.shape[1] == 1:
            b = b.ravel()
        check_1d(b, 'vector')
        check_finite(b, 'vector')
        check_rhs_length(A.shape[0], b.shape[0], 'vector')

        return cls(_A=A, _B=b.reshape(-1, 1), _n=A.shape[0], _rhs_kind='vector')

    @classmethod
    def for_inverse(cls, matrix: Matrix | ArrayLike) -> SystemDesign:
        """
        Build the design for inversion (B = identity).

        Raises:
            NonSquareMatrixError: If matrix is not square
        """
        A = _matrix_values(matrix)
        check_square(A.shape, 'inverse')
        n = A.shape[0]
        return cls(_A=A, _B=np.eye(n, dtype=np.float64), _n=n, _rhs_kind='identity')

    # === Properties ===

    @property
    def A(self) -> NDArray[np.float64]:
        """Coefficient matrix (n x n)."""
        return self._A

    @property
    def B(self) -> NDArray[np.float64]:
        """Right-hand-side block (n x k)."""
        return self._B

    @property
    def n(self) -> int:
        """Order of the system."""
        return self._n

    @property
    def k(self) -> int:
        """Number of right-hand-side columns."""
        return self._B.shape[1]

    @property
    def rhs_kind(self) -> RhsKind:
        return self._rhs_kind

    @property
    def scale(self) -> float:
        """Largest absolute coefficient, used to scale the pivot tolerance."""
        return float(np.max(np.abs(self._A)))


def _matrix_values(matrix: Matrix | ArrayLike) -> NDArray[np.float64]:
    if isinstance(matrix, Matrix):
        return matrix.to_numpy()
    A = check_array(matrix, 'matrix')
    check_2d(A, 'matrix')
    check_not_empty(A, 'matrix')
    check_finite(A, 'matrix')
    return A
