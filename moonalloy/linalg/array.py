"""
Array: a fixed-length vector of float64 values.

Each Array exclusively owns one C-contiguous float64 buffer whose length is
fixed at construction. Every transformation allocates a fresh buffer; the
only mutators are ``set`` / item assignment, and they touch only the
receiver.

Equality is exact (element-wise ``==``, so NaN never equals NaN). Callers
comparing computed values must apply their own tolerance, see
moonalloy.core.compute.tolerances.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from moonalloy.core.validation import (
    check_array,
    check_1d,
    check_size,
    check_same_length,
    check_index,
    check_range,
    check_scalar,
    check_type,
)


class Array:
    """
    Fixed-length, owned sequence of float64 values.

    Construction:
        Array()                       # empty
        Array([1.0, 2.0, 3.0])        # copy of a literal sequence
        Array.of(2.0, 3)              # [2.0, 2.0, 2.0]
        Array.zeros(3), Array.ones(3)

    Raises:
        ValidationError: If values are not numeric
        DimensionError: If values are not one-dimensional
    """

    __slots__ = ('_data',)

    def __init__(self, values: ArrayLike | Array = ()):
        if isinstance(values, Array):
            self._data = values._data.copy()
            return
        data = check_array(values, 'values')
        check_1d(data, 'values')
        self._data = data

    @classmethod
    def _own(cls, buffer: NDArray[np.float64]) -> Array:
        """Wrap a freshly allocated buffer without copying it."""
        arr = cls.__new__(cls)
        arr._data = np.ascontiguousarray(buffer, dtype=np.float64)
        return arr

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def new(cls) -> Array:
        """Return an Array with no elements."""
        return cls._own(np.empty(0, dtype=np.float64))

    @classmethod
    def from_values(cls, values: Iterable[float] | ArrayLike) -> Array:
        """Return an Array holding a copy of ``values``."""
        if not isinstance(values, (Array, np.ndarray, list, tuple)):
            values = list(values)
        return cls(values)

    @classmethod
    def of(cls, value: float, length: int) -> Array:
        """Return an Array of ``length`` elements all equal to ``value``."""
        length = check_size(length, 'length')
        return cls._own(np.full(length, check_scalar(value, 'value'), dtype=np.float64))

    @classmethod
    def zeros(cls, length: int) -> Array:
        """Return an Array of ``length`` zeros."""
        return cls.of(0.0, length)

    @classmethod
    def ones(cls, length: int) -> Array:
        """Return an Array of ``length`` ones."""
        return cls.of(1.0, length)

    # ------------------------------------------------------------------
    # Shape and element access
    # ------------------------------------------------------------------

    @property
    def length(self) -> int:
        """Number of elements."""
        return self._data.shape[0]

    def __len__(self) -> int:
        return self._data.shape[0]

    def get(self, index: int) -> float:
        """
        Return the element at ``index``.

        Raises:
            IndexOutOfBoundsError: If index is outside [0, length)
        """
        i = check_index(index, self.length, 'Array.get')
        return float(self._data[i])

    def set(self, value: float, index: int) -> None:
        """
        Overwrite the element at ``index`` in place.

        Raises:
            IndexOutOfBoundsError: If index is outside [0, length)
        """
        i = check_index(index, self.length, 'Array.set')
        self._data[i] = check_scalar(value, 'Array.set')

    def __getitem__(self, index: int) -> float:
        return self.get(index)

    def __setitem__(self, index: int, value: float) -> None:
        self.set(value, index)

    def __iter__(self) -> Iterator[float]:
        return iter(self._data.tolist())

    def splice(self, first: int, last: int) -> Array:
        """
        Return a copy of the half-open range ``[first, last)``.

        Raises:
            InvalidRangeError: If first >= last
            IndexOutOfBoundsError: If the range leaves the Array
        """
        first, last = check_range(first, last, self.length, 'Array.splice')
        return Array._own(self._data[first:last].copy())

    def concat(self, other: Array) -> Array:
        """Return ``self``'s elements followed by ``other``'s."""
        check_type(other, Array, 'Array.concat')
        return Array._own(np.concatenate((self._data, other._data)))

    # ------------------------------------------------------------------
    # Reductions
    # ------------------------------------------------------------------

    def sum(self) -> float:
        """Sum of all elements (0.0 for an empty Array)."""
        return float(np.sum(self._data))

    def average(self) -> float:
        """Arithmetic mean of the elements; NaN for an empty Array."""
        if self.length == 0:
            return float('nan')
        return float(np.sum(self._data) / self.length)

    def norm(self) -> float:
        """Euclidean norm: square root of the sum of squares."""
        return float(np.sqrt(np.sum(self._data * self._data)))

    def dotp(self, other: Array) -> float:
        """
        Dot product: element-wise multiply, then sum.

        Raises:
            DimensionError: If the lengths differ
        """
        check_type(other, Array, 'Array.dotp')
        check_same_length(self.length, other.length, 'Array.dotp')
        return float(np.sum(self._data * other._data))

    # ------------------------------------------------------------------
    # Scalar and element-wise arithmetic
    # ------------------------------------------------------------------

    def scalar_add(self, value: float) -> Array:
        return Array._own(self._data + check_scalar(value, 'Array.scalar_add'))

    def scalar_sub(self, value: float) -> Array:
        return Array._own(self._data - check_scalar(value, 'Array.scalar_sub'))

    def scalar_mult(self, value: float) -> Array:
        return Array._own(self._data * check_scalar(value, 'Array.scalar_mult'))

    def plus(self, other: Array) -> Array:
        """
        Element-wise sum.

        Raises:
            DimensionError: If the lengths differ
        """
        check_type(other, Array, 'Array.plus')
        check_same_length(self.length, other.length, 'Array.plus')
        return Array._own(self._data + other._data)

    def minus(self, other: Array) -> Array:
        """
        Element-wise difference.

        Raises:
            DimensionError: If the lengths differ
        """
        check_type(other, Array, 'Array.minus')
        check_same_length(self.length, other.length, 'Array.minus')
        return Array._own(self._data - other._data)

    def mult(self, other: Array) -> Array:
        """
        Element-wise product.

        Raises:
            DimensionError: If the lengths differ
        """
        check_type(other, Array, 'Array.mult')
        check_same_length(self.length, other.length, 'Array.mult')
        return Array._own(self._data * other._data)

    def __add__(self, other: Any) -> Array:
        if not isinstance(other, Array):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: Any) -> Array:
        if not isinstance(other, Array):
            return NotImplemented
        return self.minus(other)

    def __mul__(self, other: Any) -> Array:
        if not isinstance(other, Array):
            return NotImplemented
        return self.mult(other)

    def __neg__(self) -> Array:
        return self.scalar_mult(-1.0)

    # ------------------------------------------------------------------
    # Comparison, conversion, formatting
    # ------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        # Exact comparison, no tolerance
        return self.length == other.length and bool(np.all(self._data == other._data))

    __hash__ = None  # mutable

    def copy(self) -> Array:
        """Return an independent copy."""
        return Array._own(self._data.copy())

    def to_numpy(self) -> NDArray[np.float64]:
        """Return the elements as a new numpy array (never a view)."""
        return self._data.copy()

    def to_list(self) -> list[float]:
        return self._data.tolist()

    def __repr__(self) -> str:
        return f"Array({self._data.tolist()!r})"

    def __str__(self) -> str:
        return f"Array: {self._data.tolist()!r}"
