"""
Combinatorial helper functions.

Exact integer results via scipy.special; arguments must be non-negative
integers.
"""

from scipy import special

from moonalloy.core.exceptions import ValidationError
from moonalloy.core.validation import check_size


def factorial(n: int) -> int:
    """n! (with 0! = 1)."""
    n = check_size(n, 'n')
    return int(special.factorial(n, exact=True))


def binomial_coefficient(n: int, k: int) -> int:
    """
    Number of k-element subsets of an n-element set: n! / (k! (n-k)!).

    Returns 0 when k > n.
    """
    n = check_size(n, 'n')
    k = check_size(k, 'k')
    return int(special.comb(n, k, exact=True))


def gamma(n: int) -> int:
    """Gamma function at a positive integer: (n-1)!."""
    n = check_size(n, 'n')
    if n == 0:
        raise ValidationError("n: gamma is undefined at 0 (pole)")
    return factorial(n - 1)


def dirac_delta(x: int) -> int:
    """Discrete delta: 1 at x == 0, else 0."""
    return 1 if x == 0 else 0
