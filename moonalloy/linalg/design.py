"""
LinearSystemDesign: validated data for ``A·x = b``.

Wraps a square coefficient Matrix and a right-hand-side Array and checks
their shapes once, before any solver runs. Follows the moonalloy Design
pattern: immutable, built through a classmethod, owning private copies of
its inputs.
"""

from __future__ import annotations

from dataclasses import dataclass

from numpy.typing import ArrayLike

from moonalloy.core.exceptions import DimensionError
from moonalloy.linalg.array import Array
from moonalloy.linalg.matrix import Matrix


@dataclass(frozen=True)
class LinearSystemDesign:
    """
    Design for a square linear system.

    Construction:
        LinearSystemDesign.from_arrays(a, b)
    """
    _a: Matrix
    _b: Array
    _n: int

    @classmethod
    def from_arrays(
        cls,
        a: Matrix | ArrayLike,
        b: Array | ArrayLike,
    ) -> LinearSystemDesign:
        """
        Build a design from a coefficient matrix and right-hand side.

        Parameters
        ----------
        a : Matrix or array-like
            Square ``n x n`` coefficient matrix. Copied.
        b : Array or array-like
            Right-hand side of length ``n``. Copied.

        Raises
        ------
        DimensionError
            If ``a`` is not square or ``len(b) != a.rows``.
        """
        a = a.copy() if isinstance(a, Matrix) else Matrix(a)
        b = b.copy() if isinstance(b, Array) else Array(b)

        n, p = a.shape
        if n != p:
            raise DimensionError(
                f"A: coefficient matrix must be square, got {n}x{p}",
                expected=(n, n),
                actual=(n, p),
            )
        if b.length != n:
            raise DimensionError(
                f"b: right-hand side has length {b.length}, expected {n}",
                expected=n,
                actual=b.length,
            )

        return cls(_a=a, _b=b, _n=n)

    @property
    def coefficients(self) -> Matrix:
        """Copy of the coefficient matrix A."""
        return self._a.copy()

    @property
    def rhs(self) -> Array:
        """Copy of the right-hand side b."""
        return self._b.copy()

    @property
    def n(self) -> int:
        """Number of equations (and unknowns)."""
        return self._n

    def augmented(self) -> Matrix:
        """Fresh ``n x (n + 1)`` augmented matrix ``[A | b]``."""
        return self._a.augment(self._b)

    def apply(self, x: Array) -> Array:
        """Compute ``A·x`` as row-wise dot products."""
        return Array([row.dotp(x) for row in self._a])

    def __repr__(self) -> str:
        return f"LinearSystemDesign(n={self._n})"
