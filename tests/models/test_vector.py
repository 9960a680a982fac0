"""
Tests for the Vector value type and its interplay with Matrix.
"""

import gc

import numpy as np
import pytest

from pylinalg.core.exceptions import (
    DimensionError,
    IndexOutOfBoundsError,
    NumericalError,
    ValidationError,
)
from pylinalg.models import Matrix, Vector


# ═══════════════════════════════════════════════════════════════════════
# Construction and access
# ═══════════════════════════════════════════════════════════════════════


class TestVectorConstruction:

    def test_zeros_by_length(self):
        v = Vector(3)
        assert len(v) == 3
        assert v.tolist() == [0.0, 0.0, 0.0]

    def test_from_values(self):
        assert Vector([7, 5, 8]).tolist() == [7.0, 5.0, 8.0]

    def test_rejects_zero_length(self):
        with pytest.raises(ValidationError):
            Vector(0)
        with pytest.raises(ValidationError):
            Vector([])

    def test_rejects_non_numeric(self):
        with pytest.raises(ValidationError):
            Vector(["a", "b"])

    def test_index_bounds(self):
        v = Vector([1, 2])
        with pytest.raises(IndexOutOfBoundsError):
            v[2]
        with pytest.raises(IndexOutOfBoundsError):
            v[-1] = 3.0


# ═══════════════════════════════════════════════════════════════════════
# Arithmetic
# ═══════════════════════════════════════════════════════════════════════


class TestVectorArithmetic:

    def test_elementwise(self):
        v, w = Vector([1, 2, 3]), Vector([4, 5, 6])
        assert v + w == Vector([5, 7, 9])
        assert w - v == Vector([3, 3, 3])
        assert v * w == Vector([4, 10, 18])

    def test_mismatched_lengths(self):
        with pytest.raises(DimensionError):
            Vector([1, 2, 3]) + Vector([1, 2])
        with pytest.raises(DimensionError):
            Vector([1, 2]) * Vector([1, 2, 3])

    def test_scalar_broadcast(self):
        v = Vector([1, 2])
        assert v + 1 == Vector([2, 3])
        assert 1 + v == Vector([2, 3])
        assert v - 1 == Vector([0, 1])
        assert 10 - v == Vector([9, 8])
        assert 2 * v == Vector([2, 4])
        assert v * 2 == Vector([2, 4])
        assert v / 2 == Vector([0.5, 1])

    def test_scalar_divided_by_vector_scales(self):
        """s / v is v scaled by 1/s, the same as v / s."""
        assert 2.0 / Vector([4, 8]) == Vector([2, 4])
        assert 2 / Vector([1, 0, 3]) == Vector([0.5, 0, 1.5])

    def test_division_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            Vector([1, 2]) / 0
        with pytest.raises(ZeroDivisionError):
            0 / Vector([1, 2])

    def test_negation(self):
        assert -Vector([1, -2]) == Vector([-1, 2])

    def test_numpy_scalar_operand(self):
        result = np.float64(3.0) * Vector([1, 2])
        assert isinstance(result, Vector)
        assert result == Vector([3, 6])


class TestVectorFunctions:

    def test_norm(self):
        v = Vector([3, 4])
        assert v.norm() == 5.0
        assert abs(v) == 5.0

    def test_dot(self):
        v, w = Vector([1, 2, 3]), Vector([4, 5, 6])
        assert v.dot(w) == 32.0
        assert v @ w == 32.0

    def test_dot_mismatch(self):
        with pytest.raises(DimensionError):
            Vector([1, 2]).dot(Vector([1, 2, 3]))

    def test_normalize(self):
        unit = Vector([3, 0, 4]).normalize()
        assert unit == Vector([0.6, 0, 0.8])
        assert unit.norm() == pytest.approx(1.0)

    def test_normalize_zero_vector(self):
        with pytest.raises(NumericalError, match="zero vector"):
            Vector(3).normalize()


# ═══════════════════════════════════════════════════════════════════════
# Matrix interplay
# ═══════════════════════════════════════════════════════════════════════


class TestMatrixVectorProduct:

    def test_matrix_times_vector(self, counting_matrix):
        result = counting_matrix * Vector([7, 5, 8])
        assert isinstance(result, Vector)
        assert result == Vector([41, 101, 161])

    def test_matmul_operator(self, counting_matrix):
        assert counting_matrix @ Vector([7, 5, 8]) == Vector([41, 101, 161])

    def test_matrix_vector_mismatch(self, counting_matrix):
        with pytest.raises(DimensionError) as exc_info:
            counting_matrix * Vector([1, 2])
        assert exc_info.value.operation == 'matvec'

    def test_vector_times_square_matrix_rejected(self, counting_matrix):
        with pytest.raises(DimensionError) as exc_info:
            Vector([7, 5, 8]) * counting_matrix
        assert exc_info.value.operation == 'outer'

    def test_vector_times_row_matrix_is_outer(self):
        v = Vector([1, 2])
        result = v * Vector([3, 4, 5]).T
        assert isinstance(result, Matrix)
        assert result == Matrix([[3, 4, 5], [6, 8, 10]])


class TestVectorTranspose:

    def test_shape_and_values(self):
        t = Vector([1, 2, 3]).T
        assert t.shape == (1, 3)
        assert t.tolist() == [[1.0, 2.0, 3.0]]

    def test_memoized(self):
        v = Vector([1, 2, 3])
        assert v.T is v.T

    def test_element_write_drops_cache(self):
        v = Vector([1, 2, 3])
        before = v.T
        v[0] = 10.0
        after = v.T
        assert after is not before
        assert after[0, 0] == 10.0
        assert before[0, 0] == 1.0

    def test_mutating_transpose_detaches_it(self):
        v = Vector([1, 2, 3])
        t = v.T
        t[0, 1] = 99.0
        assert v[1] == 2.0
        assert v.T is not t
        assert v.T[0, 1] == 2.0

    def test_transpose_of_transpose_is_column(self):
        tt = Vector([1, 2]).T.T
        assert isinstance(tt, Matrix)
        assert tt.shape == (2, 1)

    def test_transpose_does_not_keep_vector_alive(self):
        v = Vector([1, 2])
        t = v.T
        del v
        gc.collect()
        assert t._source() is None
