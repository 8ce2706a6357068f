"""Provides the LocalDerivativeKit class.

A light front end over the evaluators. You provide the field and, optionally,
the region of interest, then ask for gradient or Hessian evaluators by
difference kind and accuracy order, or for whole derivative fields swept over
the region.

Typical usage examples:

>>> import numpy as np
>>> from localderivkit.field import ArrayField
>>> from localderivkit.local_derivative_kit import LocalDerivativeKit
>>> from localderivkit.region import Region
>>>
>>> field = ArrayField.from_function(lambda x, y: x * x + x * y, shape=(16, 16))
>>> kit = LocalDerivativeKit(field, Region((4, 4), (11, 11)))
>>> hess = kit.hessian(order=2)
>>> hess.set_position((8, 8))
>>> hess.evaluate().tolist()
[[2.0, 1.0], [1.0, 0.0]]
>>> kit.gradient_field("forward", order=1).shape
(8, 8, 2)

Notes:
    - Kind names are case/spacing/punctuation insensitive; aliases like
      ``"cd"`` or ``"Forward-Difference"`` are accepted.
    - For the canonical kind names, call ``available_kinds()``.
"""

from __future__ import annotations

import numpy as np

from localderivkit.evaluators.base import PositionedEvaluator, resolve_region
from localderivkit.evaluators.gradient import (
    GradientEvaluator,
    build_gradient_evaluator,
)
from localderivkit.evaluators.hessian import HessianEvaluator, hessian_central
from localderivkit.field import RandomAccessible
from localderivkit.logger import localderivkit_logger
from localderivkit.region import Region
from localderivkit.stencil import (
    DEFAULT_GRADIENT_ORDER,
    DEFAULT_HESSIAN_ORDER,
    DifferenceKind,
    available_kinds,
    resolve_kind,
)
from localderivkit.utils.types import FloatArray

__all__ = [
    "LocalDerivativeKit",
    "available_kinds",
    "resolve_kind",
]


class LocalDerivativeKit:
    """Provides gradient and Hessian evaluators over one field and region."""

    def __init__(self, source: RandomAccessible, region: Region | None = None):
        """Initialise with a field and the region of interest.

        Args:
            source: The field to differentiate.
            region: Region where derivatives are wanted. Defaults to the
                bounds of ``source``; the field must also cover the padding
                each stencil adds around it.
        """
        self.source = source
        self.region = resolve_region(source, region)

    def gradient(
        self,
        kind: DifferenceKind | str = DifferenceKind.CENTRAL,
        order: int = DEFAULT_GRADIENT_ORDER,
    ) -> GradientEvaluator:
        """Returns a gradient evaluator bound to the kit's region."""
        return build_gradient_evaluator(self.source, self.region, resolve_kind(kind), order)

    def hessian(self, order: int = DEFAULT_HESSIAN_ORDER) -> HessianEvaluator:
        """Returns a central-difference Hessian evaluator bound to the kit's region."""
        return hessian_central(self.source, self.region, order)

    def gradient_field(
        self,
        kind: DifferenceKind | str = DifferenceKind.CENTRAL,
        order: int = DEFAULT_GRADIENT_ORDER,
    ) -> FloatArray:
        """Returns the gradient at every position of the region.

        Returns:
            Array of shape ``region.shape + (n,)``; ``out[i, j, ..., d]`` is
            the derivative along axis ``d`` at ``region.min + (i, j, ...)``.
        """
        return self._sweep(self.gradient(kind, order), (self.source.ndim,))

    def hessian_field(self, order: int = DEFAULT_HESSIAN_ORDER) -> FloatArray:
        """Returns the Hessian at every position of the region.

        Returns:
            Array of shape ``region.shape + (n, n)``.
        """
        return self._sweep(self.hessian(order), (self.source.ndim, self.source.ndim))

    def _sweep(
        self,
        evaluator: PositionedEvaluator,
        entry_shape: tuple[int, ...],
    ) -> FloatArray:
        region = self.region
        out = np.empty(region.shape + entry_shape, dtype=np.float64)
        origin = region.min
        for pos in region.positions():
            evaluator.set_position(pos)
            index = tuple(p - o for p, o in zip(pos, origin))
            # The evaluator reuses its buffer; copy each result out.
            out[index] = evaluator.evaluate().reshape(entry_shape)
        localderivkit_logger.info(
            "Evaluated %s at %d positions.", type(evaluator).__name__, region.size
        )
        return out
