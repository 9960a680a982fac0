"""
Generic result container for PyLinalg computations.

The Result class provides a standardized envelope that solver backends
return. Domains define their own parameter payloads; the envelope carries
the shared metadata (timing, backend, non-fatal warnings).

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, row swaps, rank)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for linear-algebra computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (solution block, pivots, ...)
        info: Structured metadata (method, rank, row swaps)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=EliminationParams(solution=x, pivots=p, ...),
        ...     info={'method': 'gaussian_elimination', 'row_swaps': 1},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_gauss'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
