"""
Input validation utilities for moonalloy.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No clamping or wrapping of indices (negative indices are errors)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import operator

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from moonalloy.core.exceptions import (
    ValidationError,
    DimensionError,
    IndexOutOfBoundsError,
    InvalidRangeError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate input and copy it into a fresh, C-contiguous float64 buffer.

    The returned array never shares memory with ``array``, so the caller
    becomes its only owner.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray of dtype float64

    Raises:
        ValidationError: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number) or np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected real numeric data"
        )

    return np.array(result, dtype=np.float64, order='C', copy=True)


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            expected=ndim,
            actual=array.ndim,
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 2-dimensional.

    Raises:
        DimensionError: If array is not 2D
    """
    check_ndim(array, 2, name)


def check_size(n: Any, name: str) -> int:
    """
    Validate a length or dimension argument.

    Accepts anything implementing ``__index__`` (int, numpy integers).

    Args:
        n: Requested size
        name: Parameter name for error messages

    Returns:
        n as a plain int

    Raises:
        ValidationError: If n is not an integer or is negative
    """
    try:
        n = operator.index(n)
    except TypeError as e:
        raise ValidationError(
            f"{name}: expected an integer size, got {type(n).__name__}"
        ) from e
    if n < 0:
        raise ValidationError(f"{name}: size must be non-negative, got {n}")
    return n


def check_scalar(value: Any, name: str) -> float:
    """
    Convert a real scalar argument to float.

    Strings are rejected even when they spell a number.

    Raises:
        ValidationError: If value is not a real number
    """
    if isinstance(value, (str, bytes)):
        raise ValidationError(f"{name}: expected a real number, got {type(value).__name__}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"{name}: expected a real number, got {type(value).__name__}"
        ) from e


def check_type(value: Any, expected: type, name: str) -> None:
    """
    Verify an operand is an instance of ``expected``.

    Raises:
        ValidationError: If value has the wrong type
    """
    if not isinstance(value, expected):
        raise ValidationError(
            f"{name}: expected {expected.__name__}, got {type(value).__name__}"
        )


def check_same_length(length_a: int, length_b: int, operation: str) -> None:
    """
    Verify two operands have the same length.

    Args:
        length_a: Length of the left operand
        length_b: Length of the right operand
        operation: Operation name for error messages

    Raises:
        DimensionError: If the lengths differ
    """
    if length_a != length_b:
        raise DimensionError(
            f"{operation}: lengths differ ({length_a} != {length_b})",
            expected=length_a,
            actual=length_b,
        )


def check_same_shape(
    shape_a: tuple[int, int],
    shape_b: tuple[int, int],
    operation: str,
) -> None:
    """
    Verify two matrices have identical (rows, cols).

    Raises:
        DimensionError: If the shapes differ
    """
    if shape_a != shape_b:
        raise DimensionError(
            f"{operation}: shapes differ ({shape_a[0]}x{shape_a[1]} "
            f"!= {shape_b[0]}x{shape_b[1]})",
            expected=shape_a,
            actual=shape_b,
        )


def check_index(index: Any, length: int, name: str) -> int:
    """
    Verify ``0 <= index < length``.

    Args:
        index: Index to check (anything implementing ``__index__``)
        length: Length of the indexed axis
        name: Parameter name for error messages

    Returns:
        index as a plain int

    Raises:
        IndexOutOfBoundsError: If index is outside [0, length)
        ValidationError: If index is not an integer
    """
    try:
        i = operator.index(index)
    except TypeError as e:
        raise ValidationError(
            f"{name}: expected an integer index, got {type(index).__name__}"
        ) from e
    if i < 0 or i >= length:
        raise IndexOutOfBoundsError(
            f"{name}: index {i} out of bounds for length {length}",
            index=i,
            length=length,
        )
    return i


def check_range(first: Any, last: Any, length: int, name: str) -> tuple[int, int]:
    """
    Verify ``[first, last)`` is a non-empty range inside ``[0, length]``.

    Args:
        first: First index (inclusive)
        last: Last index (exclusive)
        length: Length of the sliced axis
        name: Parameter name for error messages

    Returns:
        (first, last) as plain ints

    Raises:
        InvalidRangeError: If first >= last
        IndexOutOfBoundsError: If first < 0 or last > length
    """
    try:
        first, last = operator.index(first), operator.index(last)
    except TypeError as e:
        raise ValidationError(f"{name}: range bounds must be integers") from e
    if first >= last:
        raise InvalidRangeError(
            f"{name}: first index must be smaller than last index "
            f"(got first={first}, last={last})",
            first=first,
            last=last,
        )
    if first < 0:
        raise IndexOutOfBoundsError(
            f"{name}: first index {first} out of bounds for length {length}",
            index=first,
            length=length,
        )
    if last > length:
        raise IndexOutOfBoundsError(
            f"{name}: last index {last} out of bounds for length {length}",
            index=last,
            length=length,
        )
    return first, last
