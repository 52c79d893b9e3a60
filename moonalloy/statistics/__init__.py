"""
Statistics helpers.

Public API:
    factorial, binomial_coefficient, gamma, dirac_delta
"""

from moonalloy.statistics.functions import (
    factorial,
    binomial_coefficient,
    gamma,
    dirac_delta,
)

__all__ = [
    "factorial",
    "binomial_coefficient",
    "gamma",
    "dirac_delta",
]
