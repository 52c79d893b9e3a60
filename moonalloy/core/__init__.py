"""
Core infrastructure for moonalloy.

This module provides shared abstractions and utilities used by the
linear-algebra core and the modules built on top of it.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and tolerance tiers
"""

from moonalloy.core.result import Result
from moonalloy.core.exceptions import (
    MoonalloyError,
    ValidationError,
    DimensionError,
    IndexOutOfBoundsError,
    InvalidRangeError,
    NullHandleError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "MoonalloyError",
    "ValidationError",
    "DimensionError",
    "IndexOutOfBoundsError",
    "InvalidRangeError",
    "NullHandleError",
    "NumericalError",
    "SingularMatrixError",
]
