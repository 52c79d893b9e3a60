"""
moonalloy: dense numerical linear algebra for Python.

Fixed-shape float64 vectors and matrices with exact-allocation semantics
(every transformation returns a new, exclusively owned object), a direct
Gaussian-elimination solver, and a handle-based boundary layer for foreign
callers.

Submodules:
    linalg: Array, Matrix, gauss_elimination, solve
    ffi: Handle-based entry points
    regression: Simple linear regression on Arrays
    statistics: Combinatorial helpers
"""

__version__ = "0.1.0"

from moonalloy import linalg
from moonalloy import regression
from moonalloy import statistics
from moonalloy.linalg import Array, Matrix, gauss_elimination, solve

__all__ = [
    "__version__",
    "linalg",
    "regression",
    "statistics",
    "Array",
    "Matrix",
    "gauss_elimination",
    "solve",
]
