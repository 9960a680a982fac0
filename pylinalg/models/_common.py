"""
Shared helpers for the value types (Row, Vector, Matrix).
"""

import numbers
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.validation import (
    check_array,
    check_finite,
    check_not_empty,
    check_ndim,
    check_scalar,
)


def is_scalar(value: Any) -> bool:
    """True for real numbers usable as a scalar operand (bool excluded)."""
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def scalar_operand(value: Any, operation: str) -> float:
    """Validate a scalar operand and return it as float."""
    return check_scalar(value, f"{operation} operand")


def checked_divisor(value: Any, operation: str) -> float:
    """Validate a scalar divisor, rejecting zero."""
    alpha = scalar_operand(value, operation)
    if alpha == 0.0:
        raise ZeroDivisionError(f"{operation}: division by zero")
    return alpha


def as_values(values: ArrayLike, ndim: int, name: str) -> NDArray[np.float64]:
    """Convert user data to a validated, finite, non-empty float64 array."""
    data = check_array(values, name)
    check_ndim(data, ndim, name)
    check_not_empty(data, name)
    check_finite(data, name)
    return data
