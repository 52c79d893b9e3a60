"""
Matrix: a fixed-shape, row-major collection of Arrays.

A Matrix owns exactly ``rows`` Arrays, each of length ``cols``. Rows passed
to the constructor are copied, so no two Matrices share a row buffer.
Arithmetic is lifted row-wise from Array operations and always returns a
freshly allocated Matrix; ``set``, ``set_row`` and ``swap_rows`` are the
only mutators.

Multiplication note:
    ``a.mult(b)`` requires ``a.rows == b.cols`` and returns the
    ``b.rows x a.cols`` Matrix whose entry ``(i, j)`` is
    ``b.row(i) . a.column(j)``, i.e. the conventional product ``b · a``.
    The ``@`` operator is the conventional product: ``a @ b == b.mult(a)``.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from moonalloy.core.exceptions import DimensionError
from moonalloy.core.validation import (
    check_array,
    check_2d,
    check_size,
    check_same_shape,
    check_index,
    check_type,
)
from moonalloy.linalg.array import Array


class Matrix:
    """
    Fixed-shape (rows x cols) matrix of float64 values stored as row Arrays.

    Construction:
        Matrix([Array([1.0, 2.0]), Array([3.0, 4.0])])
        Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])
        Matrix.zeros(2, 3), Matrix.ones(2, 3), Matrix.identity(3)

    Raises:
        DimensionError: If the rows are ragged or the matrix would be empty
        ValidationError: If a row is not numeric
    """

    __slots__ = ('_rows', '_cols')

    def __init__(self, rows: Iterable[Array | ArrayLike] | NDArray[Any]):
        if isinstance(rows, Matrix):
            arrays = [row.copy() for row in rows._rows]
        elif isinstance(rows, np.ndarray):
            data = check_array(rows, 'rows')
            check_2d(data, 'rows')
            arrays = [Array(line) for line in data]
        else:
            arrays = [Array(row) for row in rows]

        if not arrays:
            raise DimensionError("Matrix: needs at least one row", actual=0)

        cols = arrays[0].length
        for i, row in enumerate(arrays):
            if row.length != cols:
                raise DimensionError(
                    f"Matrix: rows must have equal length "
                    f"(row 0 has {cols}, row {i} has {row.length})",
                    expected=cols,
                    actual=row.length,
                )
        if cols == 0:
            raise DimensionError("Matrix: needs at least one column", actual=0)

        self._rows = arrays
        self._cols = cols

    @classmethod
    def _own(cls, rows: list[Array], cols: int) -> Matrix:
        """Wrap freshly allocated, rectangular rows without copying them."""
        mat = cls.__new__(cls)
        mat._rows = rows
        mat._cols = cols
        return mat

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_rows(cls, rows: Iterable[Array | ArrayLike] | NDArray[Any]) -> Matrix:
        """Build a Matrix from a rectangular collection of rows (copied)."""
        return cls(rows)

    @classmethod
    def of(cls, value: float, rows: int, cols: int) -> Matrix:
        """Return a ``rows x cols`` Matrix with every entry equal to ``value``."""
        rows = check_size(rows, 'rows')
        cols = check_size(cols, 'cols')
        if rows == 0 or cols == 0:
            raise DimensionError(
                f"Matrix: dimensions must be positive, got {rows}x{cols}",
                actual=(rows, cols),
            )
        return cls._own([Array.of(value, cols) for _ in range(rows)], cols)

    @classmethod
    def zeros(cls, rows: int, cols: int) -> Matrix:
        return cls.of(0.0, rows, cols)

    @classmethod
    def ones(cls, rows: int, cols: int) -> Matrix:
        return cls.of(1.0, rows, cols)

    @classmethod
    def identity(cls, n: int) -> Matrix:
        """Return the ``n x n`` identity Matrix."""
        mat = cls.zeros(n, n)
        for i in range(mat.rows):
            mat._rows[i].set(1.0, i)
        return mat

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        """Number of rows."""
        return len(self._rows)

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return (len(self._rows), self._cols)

    def dimensions(self) -> tuple[int, int]:
        """Return ``(rows, cols)``."""
        return self.shape

    def __len__(self) -> int:
        return len(self._rows)

    # ------------------------------------------------------------------
    # Element, row and column access
    # ------------------------------------------------------------------

    def _row_ref(self, i: int, name: str) -> Array:
        return self._rows[check_index(i, self.rows, name)]

    def get(self, i: int, j: int) -> float:
        """
        Return entry ``(i, j)``.

        Raises:
            IndexOutOfBoundsError: If i or j is out of bounds
        """
        return self._row_ref(i, 'Matrix.get').get(j)

    def set(self, value: float, i: int, j: int) -> None:
        """
        Overwrite entry ``(i, j)`` in place.

        Raises:
            IndexOutOfBoundsError: If i or j is out of bounds
        """
        self._row_ref(i, 'Matrix.set').set(value, j)

    def row(self, i: int) -> Array:
        """Return a copy of row ``i``."""
        return self._row_ref(i, 'Matrix.row').copy()

    def column(self, j: int) -> Array:
        """Return a copy of column ``j``."""
        j = check_index(j, self._cols, 'Matrix.column')
        return Array([row.get(j) for row in self._rows])

    def __getitem__(self, key: int | tuple[int, int]) -> float | Array:
        if isinstance(key, tuple):
            i, j = key
            return self.get(i, j)
        return self.row(key)

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        i, j = key
        self.set(value, i, j)

    def __iter__(self) -> Iterator[Array]:
        return (row.copy() for row in self._rows)

    def splice(self, row: int, first: int, last: int) -> Array:
        """
        Return a copy of ``[first, last)`` of one row.

        Raises:
            InvalidRangeError: If first >= last
            IndexOutOfBoundsError: If row or the range is out of bounds
        """
        return self._row_ref(row, 'Matrix.splice').splice(first, last)

    def set_row(self, array: Array, row: int) -> None:
        """
        Overwrite the tail of ``row`` with ``array``.

        An Array shorter than ``cols`` is right-aligned: it is written
        starting at column ``cols - len(array)`` and the leading entries
        of the row are left untouched.

        Raises:
            DimensionError: If array is longer than cols
            IndexOutOfBoundsError: If row is out of bounds
        """
        check_type(array, Array, 'Matrix.set_row')
        target = self._row_ref(row, 'Matrix.set_row')
        if array.length > self._cols:
            raise DimensionError(
                f"Matrix.set_row: array of length {array.length} does not fit "
                f"in a row of length {self._cols}",
                expected=self._cols,
                actual=array.length,
            )
        offset = self._cols - array.length
        for k, value in enumerate(array):
            target.set(value, k + offset)

    def swap_rows(self, i: int, j: int) -> None:
        """Exchange rows ``i`` and ``j`` in place (by reference, no copy)."""
        i = check_index(i, self.rows, 'Matrix.swap_rows')
        j = check_index(j, self.rows, 'Matrix.swap_rows')
        self._rows[i], self._rows[j] = self._rows[j], self._rows[i]

    def augment(self, array: Array) -> Matrix:
        """
        Append ``array`` as one extra column.

        Returns:
            New ``rows x (cols + 1)`` Matrix

        Raises:
            DimensionError: If len(array) != rows
        """
        check_type(array, Array, 'Matrix.augment')
        if array.length != self.rows:
            raise DimensionError(
                f"Matrix.augment: column of length {array.length} does not "
                f"match {self.rows} rows",
                expected=self.rows,
                actual=array.length,
            )
        rows = [
            row.concat(Array.of(array.get(i), 1))
            for i, row in enumerate(self._rows)
        ]
        return Matrix._own(rows, self._cols + 1)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def plus(self, other: Matrix) -> Matrix:
        """
        Element-wise sum.

        Raises:
            DimensionError: If the shapes differ
        """
        check_type(other, Matrix, 'Matrix.plus')
        check_same_shape(self.shape, other.shape, 'Matrix.plus')
        return Matrix._own(
            [a.plus(b) for a, b in zip(self._rows, other._rows)], self._cols
        )

    def minus(self, other: Matrix) -> Matrix:
        """
        Element-wise difference.

        Raises:
            DimensionError: If the shapes differ
        """
        check_type(other, Matrix, 'Matrix.minus')
        check_same_shape(self.shape, other.shape, 'Matrix.minus')
        return Matrix._own(
            [a.minus(b) for a, b in zip(self._rows, other._rows)], self._cols
        )

    def elem_mult(self, other: Matrix) -> Matrix:
        """
        Element-wise (Hadamard) product.

        Raises:
            DimensionError: If the shapes differ
        """
        check_type(other, Matrix, 'Matrix.elem_mult')
        check_same_shape(self.shape, other.shape, 'Matrix.elem_mult')
        return Matrix._own(
            [a.mult(b) for a, b in zip(self._rows, other._rows)], self._cols
        )

    def scalar(self, value: float) -> Matrix:
        """Multiply every entry by ``value``."""
        return Matrix._own([row.scalar_mult(value) for row in self._rows], self._cols)

    def transpose(self) -> Matrix:
        """Return the ``cols x rows`` transpose; row ``j`` is column ``j``."""
        return Matrix._own([self.column(j) for j in range(self._cols)], self.rows)

    def mult(self, other: Matrix) -> Matrix:
        """
        Matrix product computed against ``transpose(self)``.

        Entry ``(i, j)`` of the result is ``other.row(i) . self.column(j)``,
        so the result is the conventional product ``other · self`` with
        shape ``other.rows x self.cols``.

        Raises:
            DimensionError: If self.rows != other.cols
        """
        check_type(other, Matrix, 'Matrix.mult')
        if self.rows != other.cols:
            raise DimensionError(
                f"Matrix.mult: invalid dimensions {self.rows}x{self._cols} "
                f"and {other.rows}x{other.cols} (requires self.rows == other.cols)",
                expected=self.rows,
                actual=other.cols,
            )
        columns = self.transpose()._rows
        rows = [
            Array([left.dotp(col) for col in columns])
            for left in other._rows
        ]
        return Matrix._own(rows, self._cols)

    def __add__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.minus(other)

    def __mul__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.elem_mult(other)

    def __matmul__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return other.mult(self)

    def __neg__(self) -> Matrix:
        return self.scalar(-1.0)

    # ------------------------------------------------------------------
    # Comparison, conversion, formatting
    # ------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return all(a == b for a, b in zip(self._rows, other._rows))

    __hash__ = None  # mutable

    def copy(self) -> Matrix:
        """Return an independent deep copy."""
        return Matrix._own([row.copy() for row in self._rows], self._cols)

    def to_numpy(self) -> NDArray[np.float64]:
        """Return the entries as a new ``(rows, cols)`` numpy array."""
        return np.vstack([row.to_numpy() for row in self._rows])

    def to_list(self) -> list[list[float]]:
        return [row.to_list() for row in self._rows]

    def __repr__(self) -> str:
        return f"Matrix({self.to_list()!r})"

    def __str__(self) -> str:
        body = ", \n ".join(repr(row.to_list()) for row in self._rows)
        return f"Matrix: \n[{body}]"
