"""
Linear-system solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np

from moonalloy.core.result import Result
from moonalloy.core.compute.tolerances import (
    ToleranceTier,
    ILL_CONDITIONED_THRESHOLD,
    select_tolerance,
)
from moonalloy.linalg.array import Array
from moonalloy.linalg.matrix import Matrix

if TYPE_CHECKING:
    from moonalloy.linalg.design import LinearSystemDesign


@dataclass(frozen=True)
class LinearSystemParams:
    """
    Parameter payload for a direct solve.

    This is the immutable data computed by the elimination kernels.
    """
    solution: Array
    echelon: Matrix
    pivot_columns: tuple[int, ...]
    rank: int
    n_swaps: int


@dataclass
class LinearSystemSolution:
    """
    User-facing solve results.

    Wraps the Result envelope and provides accessors for the solution
    vector, the reduced system and residual diagnostics.
    """
    _result: Result[LinearSystemParams]
    _design: 'LinearSystemDesign'

    # Cached computations
    _condition_number: float | None = None

    @property
    def x(self) -> Array:
        """Copy of the solution vector."""
        return self._result.params.solution.copy()

    @property
    def echelon(self) -> Matrix:
        """Copy of the row echelon form of ``[A | b]``."""
        return self._result.params.echelon.copy()

    @property
    def pivot_columns(self) -> tuple[int, ...]:
        return self._result.params.pivot_columns

    @property
    def rank(self) -> int:
        """Number of pivots found in the coefficient columns."""
        return self._result.params.rank

    @property
    def n_swaps(self) -> int:
        return self._result.params.n_swaps

    @property
    def is_full_rank(self) -> bool:
        return self.rank == self._design.n

    @property
    def is_finite(self) -> bool:
        """False if a zero pivot produced inf/NaN entries."""
        return bool(np.all(np.isfinite(self._result.params.solution.to_numpy())))

    @property
    def residuals(self) -> Array:
        """``A·x - b``."""
        with np.errstate(invalid='ignore', over='ignore'):
            return self._design.apply(self._result.params.solution).minus(self._design.rhs)

    @property
    def residual_norm(self) -> float:
        with np.errstate(invalid='ignore', over='ignore'):
            return self.residuals.norm()

    @property
    def condition_number(self) -> float:
        """2-norm condition number of A (inf for singular A)."""
        if self._condition_number is None:
            a = self._design.coefficients.to_numpy()
            self._condition_number = float(np.linalg.cond(a))
        return self._condition_number

    def is_consistent(self, tier: ToleranceTier | None = None) -> bool:
        """
        Check ``A·x ≈ b`` within a tolerance tier.

        Args:
            tier: Tolerance to use. If None, picked from the condition
                number of A.
        """
        if not self.is_finite:
            return False
        if tier is None:
            tier = select_tolerance(self.condition_number > ILL_CONDITIONED_THRESHOLD)
        return bool(np.allclose(
            self._design.apply(self._result.params.solution).to_numpy(),
            self._design.rhs.to_numpy(),
            rtol=tier.rtol,
            atol=tier.atol,
        ))

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def has_warning(self, substring: str) -> bool:
        return self._result.has_warning(substring)

    def summary(self) -> str:
        """Human-readable summary of the solve."""
        lines = [
            "Linear system solve (Gaussian elimination, partial pivoting)",
            f"  Equations:      {self._design.n}",
            f"  Rank:           {self.rank}",
            f"  Row swaps:      {self.n_swaps}",
            f"  Finite:         {self.is_finite}",
        ]
        if self.is_finite:
            lines.append(f"  Residual norm:  {self.residual_norm:.6g}")
        lines.append(f"  Solution:       {self._result.params.solution.to_list()}")
        for w in self.warnings:
            lines.append(f"  Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"LinearSystemSolution(n={self._design.n}, rank={self.rank})"
