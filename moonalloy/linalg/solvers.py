"""
Direct solvers for square linear systems.

Provides solve() as the full entry point (solution plus diagnostics) and
gauss_elimination() returning just the solution Array.
"""

from __future__ import annotations

import warnings

import numpy as np
from numpy.typing import ArrayLike

from moonalloy.core.result import Result
from moonalloy.core.compute.timing import timed
from moonalloy.core.exceptions import SingularMatrixError, ValidationError
from moonalloy.linalg.array import Array
from moonalloy.linalg.matrix import Matrix
from moonalloy.linalg.design import LinearSystemDesign
from moonalloy.linalg.solution import LinearSystemParams, LinearSystemSolution
from moonalloy.linalg._elimination import (
    forward_eliminate,
    back_substitute,
    diagonal,
)


BACKEND_NAME = 'cpu_gauss'
METHOD = 'gauss_partial_pivot'


def _ensure_design(
    a: Matrix | ArrayLike | LinearSystemDesign,
    b: Array | ArrayLike | None,
) -> LinearSystemDesign:
    """Convert raw inputs to LinearSystemDesign if needed."""
    if isinstance(a, LinearSystemDesign):
        if b is not None:
            raise ValidationError("b must be omitted when passing a LinearSystemDesign")
        return a
    if b is None:
        raise ValidationError("b: right-hand side is required")
    return LinearSystemDesign.from_arrays(a, b)


def solve(
    a: Matrix | ArrayLike | LinearSystemDesign,
    b: Array | ArrayLike | None = None,
    *,
    check_singular: bool = False,
    tol: float = 0.0,
) -> LinearSystemSolution:
    """
    Solve ``A·x = b`` by Gaussian elimination with partial pivoting.

    Parameters
    ----------
    a : Matrix, array-like or LinearSystemDesign
        Square ``n x n`` coefficient matrix (or a prepared design).
    b : Array or array-like
        Right-hand side of length ``n``. Omit when ``a`` is a design.
    check_singular : bool
        If True, raise SingularMatrixError when a diagonal entry of the
        reduced system satisfies ``|R[i, i]| <= tol``. If False (default),
        a zero diagonal is divided through and the solution contains
        inf/NaN; a RuntimeWarning is issued in that case.
    tol : float
        Singularity threshold used with ``check_singular``. The default
        of 0.0 flags exact zeros only.

    Returns
    -------
    LinearSystemSolution

    Raises
    ------
    DimensionError
        If A is not square or len(b) != n.
    SingularMatrixError
        If check_singular is True and the reduced system is singular.
    """
    return _solve(
        _ensure_design(a, b),
        check_singular=check_singular,
        tol=tol,
        stacklevel=3,
    )


def _solve(
    design: LinearSystemDesign,
    *,
    check_singular: bool,
    tol: float,
    stacklevel: int,
) -> LinearSystemSolution:
    """
    Run the elimination kernels on a validated design.

    ``stacklevel`` is forwarded to warnings.warn so a non-finite result is
    reported at the line that called the public entry point.
    """
    if not tol >= 0:
        raise ValidationError(f"tol: must be a non-negative number, got {tol}")

    n = design.n

    with timed() as timer:
        with timer.section('augment'):
            augmented = design.augmented()

        with timer.section('forward_elimination'):
            echelon = forward_eliminate(augmented)

        rank = sum(1 for k in echelon.pivot_columns if k < n)

        if check_singular:
            diag = diagonal(echelon.reduced)
            zero = [i for i, d in enumerate(diag) if not abs(d) > tol]
            if zero:
                raise SingularMatrixError(
                    f"Coefficient matrix is singular: zero pivot on diagonal "
                    f"row(s) {zero} (tol={tol}), rank={rank}, expected={n}",
                    matrix_name='A',
                    rank=rank,
                    expected_rank=n,
                )

        with timer.section('back_substitution'):
            x = back_substitute(echelon.reduced)

    warning_messages: list[str] = []
    non_finite = np.flatnonzero(~np.isfinite(x.to_numpy())).tolist()
    if non_finite:
        msg = (
            f"Solution has non-finite entries at {non_finite}: the system is "
            f"singular (rank={rank}, expected={n})"
        )
        warnings.warn(msg, RuntimeWarning, stacklevel=stacklevel)
        warning_messages.append(msg)

    params = LinearSystemParams(
        solution=x,
        echelon=echelon.reduced,
        pivot_columns=echelon.pivot_columns,
        rank=rank,
        n_swaps=echelon.n_swaps,
    )
    result = Result(
        params=params,
        info={
            'method': METHOD,
            'rank': rank,
            'pivot_columns': echelon.pivot_columns,
            'n_swaps': echelon.n_swaps,
        },
        timing=timer.result(),
        backend_name=BACKEND_NAME,
        warnings=tuple(warning_messages),
    )

    return LinearSystemSolution(_result=result, _design=design)


def gauss_elimination(
    a: Matrix | ArrayLike,
    b: Array | ArrayLike,
    *,
    check_singular: bool = False,
    tol: float = 0.0,
) -> Array:
    """
    Solve ``A·x = b`` and return ``x``.

    Same algorithm and error policy as solve(); neither ``a`` nor ``b``
    is modified.

    Examples
    --------
    >>> a = Matrix.from_rows([[3.0, 2.0], [-6.0, 6.0]])
    >>> gauss_elimination(a, Array([7.0, 6.0]))
    Array([1.0, 2.0])
    """
    return _solve(
        _ensure_design(a, b),
        check_singular=check_singular,
        tol=tol,
        stacklevel=3,
    ).x
