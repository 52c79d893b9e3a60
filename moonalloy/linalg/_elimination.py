"""
Gaussian elimination kernels.

Forward elimination with partial pivoting and back substitution on an
augmented ``n x (n + 1)`` Matrix. Both kernels are built from Matrix and
Array primitives (swap_rows, splice, set_row, dotp) and never touch the
caller's coefficient Matrix or right-hand side: they operate on the
freshly allocated augmented Matrix produced by ``Matrix.augment``.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from moonalloy.linalg.array import Array
from moonalloy.linalg.matrix import Matrix


@dataclass(frozen=True)
class EchelonForm:
    """
    Output of forward elimination.

    Attributes:
        reduced: Row echelon form of the augmented matrix
        pivot_columns: Column of each pivot, in pivot-row order
        n_swaps: Number of row exchanges performed
    """
    reduced: Matrix
    pivot_columns: tuple[int, ...]
    n_swaps: int


def select_pivot(m: Matrix, h: int, k: int) -> int:
    """
    Row in ``h..rows-1`` with the largest ``|m[i, k]|``.

    Ties go to the first row attaining the maximum.
    """
    best_row = h
    best = abs(m.get(h, k))
    for i in range(h + 1, m.rows):
        value = abs(m.get(i, k))
        if value > best:
            best_row, best = i, value
    return best_row


def forward_eliminate(augmented: Matrix) -> EchelonForm:
    """
    Reduce an augmented matrix to row echelon form in place.

    Pivot cursors ``h`` (row) and ``k`` (column) start at 0. A column whose
    largest remaining entry is exactly zero yields no pivot: only ``k``
    advances. Otherwise the pivot row is swapped into place and every row
    below has its column-``k`` entry eliminated.

    Args:
        augmented: ``n x (n + 1)`` matrix; it is modified and returned
            inside the EchelonForm

    Returns:
        EchelonForm
    """
    n, cols = augmented.shape
    m = augmented
    h, k = 0, 0
    pivots: list[int] = []
    swaps = 0

    while h < n and k < cols:
        p = select_pivot(m, h, k)
        pivot = m.get(p, k)
        if pivot == 0.0:
            k += 1
            continue

        if p != h:
            m.swap_rows(h, p)
            swaps += 1

        for i in range(h + 1, n):
            f = m.get(i, k) / pivot
            m.set(0.0, i, k)
            if k + 1 < cols:
                tail = m.splice(i, k + 1, cols).minus(
                    m.splice(h, k + 1, cols).scalar_mult(f)
                )
                m.set_row(tail, i)

        pivots.append(k)
        h += 1
        k += 1

    return EchelonForm(reduced=m, pivot_columns=tuple(pivots), n_swaps=swaps)


def back_substitute(reduced: Matrix) -> Array:
    """
    Solve an ``n x (n + 1)`` row echelon system from the last row upward.

    ``x[i] = (R[i, n] - R[i, i+1:n] . x[i+1:n]) / R[i, i]``

    A zero diagonal entry is divided through as-is: the affected entries
    of the result become inf or NaN. Callers decide whether that is an
    error (see solvers.gauss_elimination).
    """
    n = reduced.rows
    x = Array.zeros(n)

    with np.errstate(divide='ignore', invalid='ignore'):
        x.set(_divide(reduced.get(n - 1, n), reduced.get(n - 1, n - 1)), n - 1)
        for i in range(n - 2, -1, -1):
            s = reduced.splice(i, i + 1, n).dotp(x.splice(i + 1, n))
            x.set(_divide(reduced.get(i, n) - s, reduced.get(i, i)), i)

    return x


def diagonal(reduced: Matrix) -> Array:
    """Diagonal ``R[i, i]`` of the square coefficient part."""
    return Array([reduced.get(i, i) for i in range(reduced.rows)])


def _divide(numerator: float, denominator: float) -> float:
    # IEEE division: x/0 -> +-inf, 0/0 -> nan
    return float(np.float64(numerator) / np.float64(denominator))
