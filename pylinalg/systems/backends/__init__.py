"""
Linear system backends.

Available backends:
    GaussianEliminationBackend: CPU Gaussian elimination with partial pivoting
"""

from pylinalg.systems.backends.cpu import GaussianEliminationBackend

__all__ = [
    "GaussianEliminationBackend",
]
