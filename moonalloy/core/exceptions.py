"""
Exception hierarchy for moonalloy.

All exceptions inherit from MoonalloyError to allow catching any
library-specific error.

Design principles:
    - Shape, index and range violations are programmer errors: they are
      raised immediately and never turned into sentinel return values
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class MoonalloyError(Exception):
    """Base exception for all moonalloy errors."""
    pass


class ValidationError(MoonalloyError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Operand shapes disagree (shape mismatch).

    Raised for unequal Array lengths, unequal Matrix shapes, ragged Matrix
    construction and incompatible multiplication dimensions.

    Attributes:
        expected: The shape or length that was required, if known
        actual: The shape or length that was received, if known
    """

    def __init__(
        self,
        message: str,
        expected: int | tuple[int, ...] | None = None,
        actual: int | tuple[int, ...] | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class IndexOutOfBoundsError(ValidationError, IndexError):
    """
    Indexed access outside ``[0, length)``.

    Also an IndexError so that iteration protocols relying on it behave.

    Attributes:
        index: The offending index
        length: Length of the indexed axis
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        length: int | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.length = length


class InvalidRangeError(ValidationError):
    """
    A half-open range ``[first, last)`` is empty or reversed.

    Attributes:
        first: First index of the range
        last: Last (exclusive) index of the range
    """

    def __init__(
        self,
        message: str,
        first: int | None = None,
        last: int | None = None,
    ):
        super().__init__(message)
        self.first = first
        self.last = last


class NullHandleError(ValidationError):
    """
    A boundary-layer handle is missing, released, or of the wrong kind.
    """
    pass


class NumericalError(MoonalloyError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a solve requires a non-zero pivot on every diagonal entry
    but the reduced system has a zero (or below-tolerance) diagonal.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Number of usable pivots found
        expected_rank: Rank required for a unique solution
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank
