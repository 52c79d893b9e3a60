"""
Shared compute infrastructure for moonalloy.

Submodules:
    timing: Execution timing utilities
    tolerances: Tolerance tiers for comparing computed results
"""

from moonalloy.core.compute.timing import Timer, timed
from moonalloy.core.compute.tolerances import (
    ToleranceTier,
    CPU_FP64,
    CPU_FP64_ILL_CONDITIONED,
    select_tolerance,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "ToleranceTier",
    "CPU_FP64",
    "CPU_FP64_ILL_CONDITIONED",
    "select_tolerance",
]
