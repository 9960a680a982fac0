"""
Tests for solve() / solve_system().

Covers the known 3x3 scenario, partial pivoting, classification of
rank-deficient systems (inconsistent vs free variables), input contracts,
backend dispatch and cross-checks against scipy.linalg.solve.
"""

import warnings

import numpy as np
import pytest
from scipy import linalg

from pylinalg.core.compute.tolerances import ToleranceTier
from pylinalg.core.exceptions import (
    DimensionError,
    IndeterminateSystemError,
    NonSquareMatrixError,
    RankMismatchError,
    SingularMatrixError,
    UnsupportedOperationError,
    ValidationError,
)
from pylinalg.models import Matrix, Row, Vector
from pylinalg.systems import LinearSolution, inverse, invert, solve, solve_system


# ═══════════════════════════════════════════════════════════════════════
# Known solutions
# ═══════════════════════════════════════════════════════════════════════


class TestKnownSystems:

    def test_three_by_three(self, system_3x3):
        A, b, x_true = system_3x3
        x = solve(A, b)
        assert isinstance(x, Vector)
        np.testing.assert_allclose(x.to_numpy(), x_true, atol=1e-12)

    def test_residual_within_tolerance(self, system_3x3):
        A, b, _ = system_3x3
        assert A * solve(A, b) == Vector(b)

    def test_static_method_on_matrix(self, system_3x3):
        A, b, x_true = system_3x3
        np.testing.assert_allclose(Matrix.solve(A, b).to_numpy(), x_true, atol=1e-12)

    def test_order_one(self):
        assert solve(Matrix([[4.0]]), [2.0]) == Vector([0.5])

    def test_zero_leading_entry_requires_pivot(self):
        result = solve_system(Matrix([[0, 1], [1, 0]]), [2, 3])
        assert result.x == Vector([3, 2])
        assert result.row_swaps == 1
        assert result.determinant == pytest.approx(-1.0)

    def test_upper_triangular_no_swaps(self):
        result = solve_system([[2, 1, 1], [0, 3, 1], [0, 0, 4]], [4, 4, 4])
        assert result.row_swaps == 0
        np.testing.assert_allclose(result.solution, [1.0, 1.0, 1.0])


class TestPartialPivoting:

    def test_small_leading_pivot(self):
        """Without row interchange the 1e-17 pivot destroys the solution."""
        A = [[1e-17, 1.0], [1.0, 1.0]]
        x = solve(A, [1.0, 2.0])
        np.testing.assert_allclose(x.to_numpy(), [1.0, 1.0], atol=1e-12)

    def test_largest_candidate_selected(self):
        result = solve_system([[1, 2, 3], [9, 1, 1], [4, 8, 1]], [6, 11, 13])
        assert result.permutation[0] == 1
        np.testing.assert_allclose(result.solution, [1.0, 1.0, 1.0])


# ═══════════════════════════════════════════════════════════════════════
# Rank-deficient systems
# ═══════════════════════════════════════════════════════════════════════


class TestRankDeficient:

    def test_inconsistent_is_singular(self):
        with pytest.raises(SingularMatrixError, match="inconsistent") as exc_info:
            solve([[1, 2], [2, 4]], [1, 3])
        assert exc_info.value.rank == 1
        assert exc_info.value.expected_rank == 2
        assert exc_info.value.pivot_index == 1

    def test_consistent_is_indeterminate(self):
        with pytest.raises(IndeterminateSystemError, match="infinitely many") as exc_info:
            solve([[1, 2], [2, 4]], [1, 2])
        assert exc_info.value.rank == 1
        assert exc_info.value.free_variables == 1

    def test_counting_matrix_consistent(self, counting_matrix):
        with pytest.raises(IndeterminateSystemError) as exc_info:
            solve(counting_matrix, [1, 2, 3])
        assert exc_info.value.rank == 2

    def test_counting_matrix_inconsistent(self, counting_matrix):
        with pytest.raises(SingularMatrixError):
            solve(counting_matrix, [1, 2, 4])

    def test_zero_matrix(self):
        with pytest.raises(IndeterminateSystemError) as exc_info:
            solve(Matrix(3), [0, 0, 0])
        assert exc_info.value.free_variables == 3
        with pytest.raises(SingularMatrixError):
            solve(Matrix(3), [0, 1, 0])

    def test_near_zero_pivot_classified(self):
        """A pivot below tolerance is rank deficiency, never a non-finite result."""
        with pytest.raises((SingularMatrixError, IndeterminateSystemError)):
            solve([[1.0, 2.0], [2.0, 4.0 + 1e-14]], [1.0, 3.0])

    def test_custom_tolerance(self):
        A = [[1.0, 1.0], [1.0, 1.0 + 1e-6]]
        loose = ToleranceTier(rtol=1e-3, atol=1e-3, name='loose', description='')
        with pytest.raises(IndeterminateSystemError):
            solve(A, [2.0, 2.0], tolerance=loose)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            np.testing.assert_allclose(solve(A, [2.0, 2.0]).to_numpy(), [2.0, 0.0], atol=1e-6)


class TestIllConditioned:

    def test_warning_emitted(self):
        A = [[1.0, 1.0], [1.0, 1.0 + 1e-11]]
        with pytest.warns(RuntimeWarning, match="Ill-conditioned"):
            result = solve_system(A, [2.0, 2.0])
        assert result.ill_conditioned
        assert result.pivot_ratio < 1e-10

    def test_warning_points_at_caller(self):
        A = Matrix([[1.0, 0.0], [0.0, 1e-11]])
        b = [1.0, 1.0]
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            solve(A, b)
            solve_system(A, b)
            inverse(A)
            invert(A)
            A.inverse()
            Matrix.solve(A, b)
        assert len(caught) == 6
        for w in caught:
            assert w.category is RuntimeWarning
            assert w.filename == __file__

    def test_well_conditioned_no_warning(self, system_3x3):
        A, b, _ = system_3x3
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = solve_system(A, b)
        assert result.warnings == ()
        assert not result.ill_conditioned


class TestScaleInvariance:

    def test_tiny_diagonal_inverse(self):
        result = inverse(Matrix([[1e-13, 0.0], [0.0, 1e-13]]))
        np.testing.assert_allclose(result.to_numpy(), 1e13 * np.eye(2), rtol=1e-12)

    def test_tiny_system(self):
        x = solve([[2e-13, 1e-13], [1e-13, 3e-13]], [3e-13, 4e-13])
        np.testing.assert_allclose(x.to_numpy(), [1.0, 1.0], rtol=1e-10)

    def test_scaled_rank_deficient_still_classified(self, counting_matrix):
        scaled = counting_matrix * 1e-13
        with pytest.raises(IndeterminateSystemError):
            solve(scaled, [1e-13, 2e-13, 3e-13])
        with pytest.raises(SingularMatrixError):
            solve(scaled, [1e-13, 2e-13, 4e-13])


# ═══════════════════════════════════════════════════════════════════════
# Input contracts
# ═══════════════════════════════════════════════════════════════════════


class TestInputs:

    def test_non_square(self):
        with pytest.raises(NonSquareMatrixError) as exc_info:
            solve(Matrix(2, 3), [1, 2])
        assert exc_info.value.operation == 'solve'

    def test_one_dimensional_matrix_rejected(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            solve([1.0, 2.0], [1.0])

    def test_rhs_length_mismatch(self, system_3x3):
        A, _, _ = system_3x3
        with pytest.raises(RankMismatchError) as exc_info:
            solve(A, [1, 2])
        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 2

    def test_rejects_non_finite_rhs(self, system_3x3):
        A, _, _ = system_3x3
        with pytest.raises(ValidationError, match="non-finite"):
            solve(A, [1.0, np.nan, 2.0])

    def test_rejects_non_numeric(self):
        with pytest.raises(ValidationError):
            solve([["a", "b"], ["c", "d"]], [1, 2])

    @pytest.mark.parametrize("rhs", [
        [8, 6, 1],
        np.array([8.0, 6.0, 1.0]),
        Vector([8, 6, 1]),
        Row(8, 6, 1),
        Matrix([[8], [6], [1]]),
    ])
    def test_rhs_forms(self, system_3x3, rhs):
        A, _, x_true = system_3x3
        np.testing.assert_allclose(solve(A, rhs).to_numpy(), x_true, atol=1e-12)

    def test_inputs_not_modified(self, system_3x3):
        A, _, _ = system_3x3
        before = A.to_numpy()
        b = Vector([8, 6, 1])
        solve(A, b)
        np.testing.assert_array_equal(A.to_numpy(), before)
        assert b.tolist() == [8.0, 6.0, 1.0]

    def test_solution_is_new_vector(self, system_3x3):
        A, b, _ = system_3x3
        result = solve_system(A, b)
        x = result.x
        x[0] = 100.0
        assert result.x[0] != 100.0


class TestBackendSelection:

    @pytest.mark.parametrize("backend", ['auto', 'cpu', 'cpu_gauss'])
    def test_cpu_aliases(self, system_3x3, backend):
        A, b, _ = system_3x3
        assert solve_system(A, b, backend=backend).backend_name == 'cpu_gauss'

    def test_gpu_unsupported(self, system_3x3):
        A, b, _ = system_3x3
        with pytest.raises(UnsupportedOperationError) as exc_info:
            solve(A, b, backend='gpu')
        assert exc_info.value.feature == 'gpu'

    def test_unknown_backend(self, system_3x3):
        A, b, _ = system_3x3
        with pytest.raises(ValueError, match="Unknown backend"):
            solve(A, b, backend='quantum')


# ═══════════════════════════════════════════════════════════════════════
# Diagnostics
# ═══════════════════════════════════════════════════════════════════════


class TestLinearSolution:

    def test_fields(self, system_3x3):
        A, b, _ = system_3x3
        result = solve_system(A, b)
        assert isinstance(result, LinearSolution)
        assert result.rank == 3
        assert result.determinant == pytest.approx(-270.0)
        assert result.info['method'] == 'gaussian_elimination'
        assert result.info['pivoting'] == 'partial'
        assert result.info['rhs'] == 'vector'
        assert sorted(result.permutation.tolist()) == [0, 1, 2]
        assert len(result.pivots) == 3

    def test_residuals(self, system_3x3):
        A, b, _ = system_3x3
        result = solve_system(A, b)
        assert result.residuals.shape == (3,)
        assert result.residual_norm < 1e-12

    def test_timing_sections(self, system_3x3):
        A, b, _ = system_3x3
        timing = solve_system(A, b).timing
        for key in ('total_seconds', 'forward_elimination', 'back_substitution', 'normalization'):
            assert key in timing

    def test_summary(self, system_3x3):
        A, b, _ = system_3x3
        text = solve_system(A, b).summary()
        assert "Linear System Solution" in text
        assert "Rank: 3" in text
        assert "x[2]" in text
        assert "Backend: cpu_gauss" in text

    def test_repr(self, system_3x3):
        A, b, _ = system_3x3
        assert repr(solve_system(A, b)).startswith("LinearSolution(n=3, rank=3")


# ═══════════════════════════════════════════════════════════════════════
# Cross-checks against scipy
# ═══════════════════════════════════════════════════════════════════════


class TestAgainstScipy:

    def test_random_system(self, random_system):
        A, b = random_system
        np.testing.assert_allclose(solve(A, b).to_numpy(), linalg.solve(A, b), rtol=1e-10)

    @pytest.mark.parametrize("n", [2, 5, 10, 25])
    def test_reproduces_rhs(self, rng, n):
        A = rng.standard_normal((n, n)) + n * np.eye(n)
        b = rng.standard_normal(n)
        x = solve(A, b)
        assert Matrix(A) * x == Vector(b)

    def test_determinant_matches(self, rng):
        A = rng.standard_normal((6, 6))
        result = solve_system(A, np.ones(6))
        assert result.determinant == pytest.approx(linalg.det(A), rel=1e-9)
        assert result.determinant == pytest.approx(Matrix(A).D, rel=1e-9)
