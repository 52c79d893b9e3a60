"""
Tolerance tiers for numerical validation.

Array and Matrix equality is exact; callers comparing computed
results (solver output, residuals) pick one of these tiers instead.

Used by the test suite and by LinearSystemSolution.is_consistent().
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Relative and absolute tolerance pair for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Well-conditioned systems solved in double precision
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, well-conditioned',
)

# Double precision, ill-conditioned problems (cond > 1e4)
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned (cond > 1e4)',
)

# Condition number above which a system counts as ill-conditioned.
ILL_CONDITIONED_THRESHOLD = 1e4


def select_tolerance(is_ill_conditioned: bool = False) -> ToleranceTier:
    """Select the tolerance tier for a double-precision solve."""
    if is_ill_conditioned:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
