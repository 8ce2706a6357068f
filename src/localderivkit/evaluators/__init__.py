"""Positioned evaluators of local derivatives.

Provides the gradient and Hessian evaluators and the factories that build them.
"""

from .base import PositionedEvaluator, displaced
from .gradient import (
    GradientEvaluator,
    build_gradient_evaluator,
    gradient_backward,
    gradient_central,
    gradient_forward,
)
from .hessian import HessianEvaluator, hessian_central

__all__ = [
    "PositionedEvaluator",
    "displaced",
    "GradientEvaluator",
    "HessianEvaluator",
    "build_gradient_evaluator",
    "gradient_central",
    "gradient_forward",
    "gradient_backward",
    "hessian_central",
]
