"""
Exception hierarchy for PyLinalg.

All exceptions inherit from PyLinalgError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - "Invalid input", "numerically singular" and "unsupported feature"
      are separate branches so callers can tell them apart
"""


class PyLinalgError(Exception):
    """Base exception for all PyLinalg errors."""
    pass


class ValidationError(PyLinalgError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks, including
    non-numeric or non-finite values. Such input is never coerced.
    """
    pass


class DimensionError(ValidationError):
    """
    Operand shapes or lengths are incompatible.

    Raised by arithmetic on Matrix, Row and Vector when the operands do not
    have the shapes the operation requires.

    Attributes:
        operation: Name of the failing operation (e.g. 'add', 'matmul')
        left_shape: Shape of the left operand, if known
        right_shape: Shape of the right operand, if known
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        left_shape: tuple[int, ...] | None = None,
        right_shape: tuple[int, ...] | None = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.left_shape = left_shape
        self.right_shape = right_shape


class NonSquareMatrixError(DimensionError):
    """
    A square matrix was required.

    Raised by determinant, inverse and solve on non-square input.

    Attributes:
        shape: Shape of the offending matrix
    """

    def __init__(
        self,
        message: str,
        shape: tuple[int, int] | None = None,
        operation: str | None = None,
    ):
        super().__init__(message, operation=operation, left_shape=shape)
        self.shape = shape


class RankMismatchError(DimensionError):
    """
    Right-hand side length does not match the number of matrix rows.

    Attributes:
        expected: Number of rows of the coefficient matrix
        actual: Length of the right-hand side
    """

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None,
    ):
        super().__init__(message, operation='solve')
        self.expected = expected
        self.actual = actual


class IndexOutOfBoundsError(ValidationError, IndexError):
    """
    Row or column index outside the matrix.

    Also an IndexError, so code written against plain sequences keeps working.

    Attributes:
        index: The offending index
        shape: Shape of the indexed object
        axis: 'row' or 'column'
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        shape: tuple[int, ...] | None = None,
        axis: str | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.shape = shape
        self.axis = axis


class NumericalError(PyLinalgError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or the system is inconsistent.

    Raised when elimination runs out of usable pivots and the equations
    cannot all hold (no solution), or when an inverse is requested for a
    rank-deficient matrix.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Numerical rank found during elimination
        expected_rank: Expected rank (the matrix order)
        pivot_index: Column at which the first unusable pivot was found
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
        pivot_index: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank
        self.pivot_index = pivot_index


class IndeterminateSystemError(NumericalError):
    """
    Linear system has infinitely many solutions.

    Raised when the coefficient matrix is rank-deficient but the equations
    are consistent, leaving free variables.

    Attributes:
        rank: Numerical rank found during elimination
        free_variables: Number of unconstrained unknowns
    """

    def __init__(
        self,
        message: str,
        rank: int,
        free_variables: int,
    ):
        super().__init__(message)
        self.rank = rank
        self.free_variables = free_variables


class UnsupportedOperationError(PyLinalgError, NotImplementedError):
    """
    A recognised feature that is not implemented.

    Attributes:
        feature: Identifier of the unsupported feature
    """

    def __init__(self, message: str, feature: str | None = None):
        super().__init__(message)
        self.feature = feature
