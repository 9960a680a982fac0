"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pylinalg.models import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def system_3x3():
    """Nonsingular 3x3 system with a known rational solution."""
    A = Matrix([[5, 2, 8], [1, 5, 9], [7, 5, 3]])
    b = [8, 6, 1]
    x_true = np.array([29 / 135, -197 / 270, 283 / 270])
    return A, b, x_true


@pytest.fixture
def counting_matrix():
    """The singular 3x3 matrix [[1,2,3],[4,5,6],[7,8,9]]."""
    return Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])


@pytest.fixture
def random_system(rng):
    """Well-conditioned random 6x6 system (diagonally dominant)."""
    n = 6
    A = rng.standard_normal((n, n)) + n * np.eye(n)
    b = rng.standard_normal(n)
    return A, b
