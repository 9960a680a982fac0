"""
Square linear systems: solve and inverse.

Public API:
    solve(A, b, ...) -> Vector
    solve_system(A, b, ...) -> LinearSolution
    inverse(A, ...) -> Matrix
    invert(A, ...) -> InverseSolution

These functions handle:
    - Input validation
    - Design construction
    - Backend selection
    - Result wrapping

Example:
    >>> from pylinalg.systems import solve
    >>> solve([[5, 2, 8], [1, 5, 9], [7, 5, 3]], [8, 6, 1])
"""

from pylinalg.systems.design import SystemDesign
from pylinalg.systems.solution import EliminationParams, LinearSolution, InverseSolution
from pylinalg.systems.solvers import solve, solve_system, inverse, invert

__all__ = [
    "solve",
    "solve_system",
    "inverse",
    "invert",
    "SystemDesign",
    "EliminationParams",
    "LinearSolution",
    "InverseSolution",
]
