"""
Generic result container for moonalloy computations.

The Result class provides a standardized envelope for solver output. It
keeps timing, diagnostics and warnings next to the computed payload while
letting each solver define its own parameter structure.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, pivots, rank)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) so a returned result is never modified
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for numerical computations.

    Type Parameters:
        P: The solver-specific parameter payload type

    Attributes:
        params: Solver-specific payload (solution vector, reduced matrix, ...)
        info: Structured metadata (method, rank, pivot columns)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the kernel that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=LinearSystemParams(...),
        ...     info={'method': 'gauss_partial_pivot', 'rank': 3},
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
