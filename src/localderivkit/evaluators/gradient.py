"""Contains the gradient evaluator and the functions that build it.

A single :class:`GradientEvaluator` serves every difference kind and accuracy
order: only the stencil it is given changes. The factories select the
stencil, so an unsupported order fails here, before any cursor is opened.

Examples:
---------
Central gradient of a linear ramp:

>>> from localderivkit.field import ArrayField
>>> from localderivkit.evaluators.gradient import gradient_central
>>> field = ArrayField.from_function(lambda x, y: 3 * x - 2 * y, shape=(8, 8))
>>> grad = gradient_central(field, order=4)
>>> grad.set_position((4, 4))
>>> grad.evaluate().ravel().tolist()
[3.0, -2.0]
"""

from __future__ import annotations

from localderivkit.evaluators.base import PositionedEvaluator, resolve_region
from localderivkit.field import RandomAccessible
from localderivkit.logger import localderivkit_logger
from localderivkit.region import Region
from localderivkit.stencil import (
    DEFAULT_GRADIENT_ORDER,
    DifferenceKind,
    Stencil,
    get_stencil,
)
from localderivkit.utils.types import FloatArray

__all__ = [
    "GradientEvaluator",
    "build_gradient_evaluator",
    "gradient_central",
    "gradient_forward",
    "gradient_backward",
]


class GradientEvaluator(PositionedEvaluator):
    """Computes the n x 1 gradient of a scalar field at the current position.

    Row ``d`` of the output holds the estimate of the first derivative along
    axis ``d``, per unit grid spacing.

    Attributes:
        stencil: The first-derivative stencil applied along every axis.
    """

    def __init__(
        self,
        source: RandomAccessible,
        region: Region,
        stencil: Stencil,
    ) -> None:
        """Initialises the evaluator.

        Args:
            source: The field to differentiate. It must serve reads over
                ``region`` expanded by the stencil reach.
            region: Region in which the evaluator will be positioned.
            stencil: A first-derivative stencil.
        """
        if stencil.derivative != 1:
            raise ValueError(
                f"[GradientEvaluator] Needs a first-derivative stencil; got derivative={stencil.derivative}."
            )
        region = resolve_region(source, region)
        low, high = stencil.reach
        super().__init__(source, region, region.expand(low, high), (source.ndim, 1))
        self.stencil = stencil

    def evaluate(self) -> FloatArray:
        """Computes the gradient at the current position.

        Returns:
            The owned (n, 1) output buffer. It is overwritten by the next call.
        """
        divisor = self.stencil.divisor
        for d in range(self.ndim):
            self._matrix[d, 0] = self._accumulate(self.stencil, d) / divisor
        return self._matrix

    def copy(self) -> "GradientEvaluator":
        """Returns an independent evaluator at the same position.

        The copy shares the source and the stencil but owns a fresh cursor
        and a fresh output buffer.
        """
        dup = GradientEvaluator(self.source, self.region, self.stencil)
        dup.set_position(self.position)
        return dup


def build_gradient_evaluator(
    source: RandomAccessible,
    region: Region | None = None,
    kind: DifferenceKind | str = DifferenceKind.CENTRAL,
    order: int = DEFAULT_GRADIENT_ORDER,
) -> GradientEvaluator:
    """Returns a gradient evaluator for a difference kind and accuracy order.

    Args:
        source: The field to differentiate.
        region: Region in which the evaluator will be positioned. Defaults to
            the bounds of ``source``.
        kind: The difference kind, or any name or alias accepted by
            :func:`~localderivkit.stencil.resolve_kind` (e.g. ``"cd"``).
        order: The accuracy order.

    Returns:
        The evaluator, bound to the padded region.

    Raises:
        UnsupportedOrderError: If ``order`` is not tabulated for ``kind``.
        ValueError: If ``kind`` is not a known difference kind.
    """
    stencil = get_stencil(kind, order, derivative=1)
    evaluator = GradientEvaluator(source, region, stencil)
    localderivkit_logger.debug(
        "Built %s gradient evaluator of order %d over [%s, %s], padded to [%s, %s].",
        stencil.kind,
        stencil.order,
        evaluator.region.min,
        evaluator.region.max,
        evaluator.padded_region.min,
        evaluator.padded_region.max,
    )
    return evaluator


def gradient_central(
    source: RandomAccessible,
    region: Region | None = None,
    order: int = DEFAULT_GRADIENT_ORDER,
) -> GradientEvaluator:
    """Returns a central-difference gradient evaluator.

    Supported orders are 2, 4, 6 and 8; the region is padded by ``order // 2``
    on every side.
    """
    return build_gradient_evaluator(source, region, DifferenceKind.CENTRAL, order)


def gradient_forward(
    source: RandomAccessible,
    region: Region | None = None,
    order: int = DEFAULT_GRADIENT_ORDER,
) -> GradientEvaluator:
    """Returns a forward-difference gradient evaluator.

    Supported orders are 1 to 6; the region is padded by ``order`` on the
    high side only.
    """
    return build_gradient_evaluator(source, region, DifferenceKind.FORWARD, order)


def gradient_backward(
    source: RandomAccessible,
    region: Region | None = None,
    order: int = DEFAULT_GRADIENT_ORDER,
) -> GradientEvaluator:
    """Returns a backward-difference gradient evaluator.

    Supported orders are 1 to 6; the region is padded by ``order`` on the
    low side only.
    """
    return build_gradient_evaluator(source, region, DifferenceKind.BACKWARD, order)
