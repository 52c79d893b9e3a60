"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from moonalloy.linalg import Array, Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def small_system():
    """2x2 system A·x = b with exact solution x = [1, 2]."""
    a = Matrix.from_rows([[3.0, 2.0], [-6.0, 6.0]])
    b = Array([7.0, 6.0])
    return a, b


@pytest.fixture
def three_by_three_system():
    """Classic 3x3 system with solution x = [2, 3, -1]."""
    a = Matrix.from_rows([
        [2.0, 1.0, -1.0],
        [-3.0, -1.0, 2.0],
        [-2.0, 1.0, 2.0],
    ])
    b = Array([8.0, -11.0, -3.0])
    return a, b


@pytest.fixture
def random_system(rng):
    """Diagonally dominant 6x6 system with a known solution."""
    n = 6
    a = rng.standard_normal((n, n)) + n * np.eye(n)
    x = rng.standard_normal(n)
    b = a @ x
    return a, b, x
