"""
Goodness-of-fit measures for regression models.
"""

from moonalloy.core.exceptions import DimensionError
from moonalloy.linalg.array import Array
from moonalloy.regression.model import Model


def cos_angle(v1: Array, v2: Array) -> float:
    """Cosine of the angle between two vectors (NaN if either is zero)."""
    denominator = v1.norm() * v2.norm()
    if denominator == 0.0:
        return float('nan')
    return v1.dotp(v2) / denominator


def evaluate_simple_linear_regression(
    observations: Array,
    xs: Array,
    model: Model,
) -> float:
    """
    Score a model by the absolute cosine between observations and predictions.

    Returns a value in [0, 1]; 1 means the prediction vector points in
    exactly the same (or opposite) direction as the observations.

    Raises:
        DimensionError: If the predictions and observations differ in length
    """
    predictions = model.predict(xs)
    if observations.length != predictions.length:
        raise DimensionError(
            f"evaluate: {observations.length} observations but "
            f"{predictions.length} predictions",
            expected=observations.length,
            actual=predictions.length,
        )
    return abs(cos_angle(observations, predictions))
