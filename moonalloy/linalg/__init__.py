"""
Linear algebra module.

Dense float64 vectors and matrices with exact-allocation semantics, plus a
direct solver for square linear systems.

Public API:
    Array                 - Fixed-length vector
    Matrix                - Fixed-shape matrix of row Arrays
    gauss_elimination(a, b) - Solve A·x = b, return x
    solve(a, b)           - Solve A·x = b with diagnostics
"""

from moonalloy.linalg.array import Array
from moonalloy.linalg.matrix import Matrix
from moonalloy.linalg.design import LinearSystemDesign
from moonalloy.linalg.solution import LinearSystemParams, LinearSystemSolution
from moonalloy.linalg.solvers import gauss_elimination, solve

__all__ = [
    "Array",
    "Matrix",
    "gauss_elimination",
    "solve",
    "LinearSystemDesign",
    "LinearSystemParams",
    "LinearSystemSolution",
]
