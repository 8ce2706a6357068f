"""Provides all localderivkit entry points."""

from importlib.metadata import PackageNotFoundError, version

from localderivkit.evaluators import (
    GradientEvaluator,
    HessianEvaluator,
    build_gradient_evaluator,
    gradient_backward,
    gradient_central,
    gradient_forward,
    hessian_central,
)
from localderivkit.exceptions import (
    LocalDerivativeError,
    OutOfBoundsError,
    UnsupportedOrderError,
)
from localderivkit.field import ArrayField
from localderivkit.local_derivative_kit import LocalDerivativeKit
from localderivkit.region import Region, padded_region
from localderivkit.stencil import DifferenceKind, Stencil, get_stencil

try:
    __version__ = version("localderivkit")
except PackageNotFoundError:
    pass

__all__ = [
    "ArrayField",
    "DifferenceKind",
    "GradientEvaluator",
    "HessianEvaluator",
    "LocalDerivativeError",
    "LocalDerivativeKit",
    "OutOfBoundsError",
    "Region",
    "Stencil",
    "UnsupportedOrderError",
    "build_gradient_evaluator",
    "get_stencil",
    "gradient_backward",
    "gradient_central",
    "gradient_forward",
    "hessian_central",
    "padded_region",
]
