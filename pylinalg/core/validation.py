"""
Input validation utilities for PyLinalg.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Unparsable values are an error, never zero
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylinalg.core.exceptions import (
    ValidationError,
    DimensionError,
    NonSquareMatrixError,
    RankMismatchError,
    IndexOutOfBoundsError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data)
    and complex input.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype (always a fresh copy)

    Raises:
        ValidationError: If input cannot be converted to a real numeric array
    """
    try:
        result = np.array(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex values are not supported")

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result.astype(np.float64)


def check_scalar(value: Any, name: str) -> float:
    """
    Validate a single real, finite number.

    Args:
        value: Candidate scalar
        name: Parameter name for error messages

    Returns:
        The value as a Python float

    Raises:
        ValidationError: If value is not a real number or is NaN/Inf
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise ValidationError(
            f"{name}: expected a real number, got {type(value).__name__}"
        )
    result = float(value)
    if not np.isfinite(result):
        raise ValidationError(f"{name}: non-finite value {result}")
    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_not_empty(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify every axis of the array has at least one element.

    Raises:
        ValidationError: If any dimension is zero
    """
    if array.size == 0:
        raise ValidationError(f"{name}: empty array with shape {array.shape}")


def check_dimension(value: Any, name: str) -> int:
    """
    Validate a matrix/vector dimension: a positive integer.

    Raises:
        ValidationError: If value is not an int or is < 1
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise ValidationError(
            f"{name}: expected a positive integer, got {type(value).__name__}"
        )
    if value < 1:
        raise ValidationError(f"{name}: must be >= 1, got {value}")
    return int(value)


def check_square(shape: tuple[int, int], operation: str, name: str = 'matrix') -> None:
    """
    Verify a 2D shape is square.

    Raises:
        NonSquareMatrixError: If rows != cols
    """
    rows, cols = shape
    if rows != cols:
        raise NonSquareMatrixError(
            f"{operation}: {name} must be square, got {rows}x{cols}",
            shape=(rows, cols),
            operation=operation,
        )


def check_same_shape(
    left: tuple[int, ...],
    right: tuple[int, ...],
    operation: str,
) -> None:
    """
    Verify two operands have identical shapes.

    Raises:
        DimensionError: If the shapes differ
    """
    if left != right:
        raise DimensionError(
            f"{operation}: operand shapes differ, {_fmt(left)} vs {_fmt(right)}",
            operation=operation,
            left_shape=left,
            right_shape=right,
        )


def check_rhs_length(n_rows: int, rhs_length: int, name: str = 'rhs') -> None:
    """
    Verify a right-hand side matches the number of equations.

    Raises:
        RankMismatchError: If the lengths differ
    """
    if rhs_length != n_rows:
        raise RankMismatchError(
            f"{name}: length {rhs_length} does not match the {n_rows} matrix rows",
            expected=n_rows,
            actual=rhs_length,
        )


def check_index(index: Any, size: int, shape: tuple[int, ...], axis: str) -> int:
    """
    Verify an index lies in [0, size).

    Negative indices are rejected rather than wrapped.

    Args:
        index: Candidate index
        size: Length of the indexed axis
        shape: Full shape of the indexed object (for the message)
        axis: 'row' or 'column'

    Returns:
        The index as a Python int

    Raises:
        IndexOutOfBoundsError: If index is not an int or is out of range
    """
    if isinstance(index, (bool, np.bool_)) or not isinstance(index, (int, np.integer)):
        raise IndexOutOfBoundsError(
            f"{axis} index must be an integer, got {type(index).__name__}",
            index=None,
            shape=shape,
            axis=axis,
        )
    if not 0 <= index < size:
        raise IndexOutOfBoundsError(
            f"{axis} index [{index}] is unreachable in object of shape {_fmt(shape)}",
            index=int(index),
            shape=shape,
            axis=axis,
        )
    return int(index)


def _fmt(shape: tuple[int, ...]) -> str:
    return "x".join(str(s) for s in shape) if shape else "scalar"
