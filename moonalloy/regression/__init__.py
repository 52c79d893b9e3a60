"""
Regression module.

Public API:
    Model                              - Structural protocol for models
    SimpleLinearRegression             - Least squares line fit
    evaluate_simple_linear_regression  - Cosine-similarity score
"""

from moonalloy.regression.model import Model, SimpleLinearRegression
from moonalloy.regression.evaluation import cos_angle, evaluate_simple_linear_regression

__all__ = [
    "Model",
    "SimpleLinearRegression",
    "cos_angle",
    "evaluate_simple_linear_regression",
]
