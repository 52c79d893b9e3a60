"""
Regression models built on the linear-algebra core.

Models follow a minimal structural protocol: optimize() fits parameters to
observed data, predict() maps inputs to fitted values. Both take and return
Arrays.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from moonalloy.core.exceptions import ValidationError
from moonalloy.core.validation import check_same_length
from moonalloy.linalg.array import Array


@runtime_checkable
class Model(Protocol):
    """
    Minimal protocol for a fitted model.

    Implementations are free to carry any parameters; the protocol only
    fixes how data goes in and predictions come out.
    """

    def optimize(self, xs: Array, ys: Array) -> None:
        """Fit the model parameters to observations ``ys`` at ``xs``."""
        ...

    def predict(self, xs: Array) -> Array:
        """Return predictions for ``xs``."""
        ...


class SimpleLinearRegression:
    """
    Ordinary least squares fit of ``y = slope * x + intercept``.

    Attributes:
        slope: Fitted slope
        intercept: Fitted intercept
    """

    def __init__(self, slope: float = 0.0, intercept: float = 0.0):
        self.slope = float(slope)
        self.intercept = float(intercept)

    def optimize(self, xs: Array, ys: Array) -> None:
        """
        Closed-form least squares fit.

        slope = Σ(x - x̄)(y - ȳ) / Σ(x - x̄)²,  intercept = ȳ - slope·x̄

        Raises:
            DimensionError: If xs and ys differ in length
            ValidationError: If fewer than 2 points or xs is constant
        """
        check_same_length(xs.length, ys.length, 'SimpleLinearRegression.optimize')
        if xs.length < 2:
            raise ValidationError(
                f"xs: requires at least 2 samples, got {xs.length}"
            )

        x_bar = xs.average()
        y_bar = ys.average()
        dx = xs.scalar_sub(x_bar)
        sxx = dx.dotp(dx)
        if sxx == 0.0:
            raise ValidationError("xs: zero variance (constant), slope is undefined")

        self.slope = dx.dotp(ys.scalar_sub(y_bar)) / sxx
        self.intercept = y_bar - self.slope * x_bar

    def predict(self, xs: Array) -> Array:
        return xs.scalar_mult(self.slope).scalar_add(self.intercept)

    def __repr__(self) -> str:
        return f"SimpleLinearRegression(slope={self.slope!r}, intercept={self.intercept!r})"
