"""Contains the Hessian evaluator and the function that builds it.

Diagonal entries use a central second-derivative stencil along one axis.
Mixed partials nest the central first-derivative stencil of the same order:
along axis ``e`` at every offset the stencil visits along axis ``d``. For
order 2 this is the classical four-point cross difference

    H[d, e] = (f(+1, +1) - f(+1, -1) - f(-1, +1) + f(-1, -1)) / 4.

Each mixed partial is computed once and stored in both ``H[d, e]`` and
``H[e, d]``, so the output is exactly symmetric.
"""

from __future__ import annotations

from localderivkit.evaluators.base import (
    PositionedEvaluator,
    displaced,
    resolve_region,
)
from localderivkit.field import RandomAccessible
from localderivkit.logger import localderivkit_logger
from localderivkit.region import Region
from localderivkit.stencil import (
    DEFAULT_HESSIAN_ORDER,
    DifferenceKind,
    get_stencil,
)
from localderivkit.utils.types import FloatArray

__all__ = [
    "HessianEvaluator",
    "hessian_central",
]


class HessianEvaluator(PositionedEvaluator):
    """Computes the n x n Hessian of a scalar field at the current position.

    Attributes:
        order: The accuracy order (2 or 4).
        second_stencil: Central second-derivative stencil for the diagonal.
        first_stencil: Central first-derivative stencil nested for mixed partials.
    """

    def __init__(
        self,
        source: RandomAccessible,
        region: Region | None = None,
        order: int = DEFAULT_HESSIAN_ORDER,
    ) -> None:
        """Initialises the evaluator.

        Args:
            source: The field to differentiate.
            region: Region in which the evaluator will be positioned.
                Defaults to the bounds of ``source``.
            order: The accuracy order, 2 or 4.

        Raises:
            UnsupportedOrderError: If ``order`` is not 2 or 4.
        """
        second = get_stencil(DifferenceKind.CENTRAL, order, derivative=2)
        first = get_stencil(DifferenceKind.CENTRAL, order, derivative=1)
        region = resolve_region(source, region)
        low = max(second.reach[0], first.reach[0])
        high = max(second.reach[1], first.reach[1])
        n = source.ndim
        super().__init__(source, region, region.expand(low, high), (n, n))
        self.order = order
        self.second_stencil = second
        self.first_stencil = first

    def evaluate(self) -> FloatArray:
        """Computes the Hessian at the current position.

        Returns:
            The owned (n, n) output buffer. It is overwritten by the next call.
        """
        h = self._matrix
        n = self.ndim
        for d in range(n):
            h[d, d] = self._accumulate(self.second_stencil, d) / self.second_stencil.divisor
            for e in range(d + 1, n):
                v = self._mixed_partial(d, e)
                h[d, e] = v
                h[e, d] = v
        return h

    def _mixed_partial(self, d: int, e: int) -> float:
        first = self.first_stencil
        cursor = self._cursor
        acc = 0.0
        for offset, weight in first:
            with displaced(cursor, offset, d):
                acc += weight * self._accumulate(first, e)
        return acc / (first.divisor * first.divisor)

    def copy(self) -> "HessianEvaluator":
        """Returns an independent evaluator at the same position.

        The copy shares the source and the stencils but owns a fresh cursor
        and a fresh output buffer.
        """
        dup = HessianEvaluator(self.source, self.region, self.order)
        dup.set_position(self.position)
        return dup


def hessian_central(
    source: RandomAccessible,
    region: Region | None = None,
    order: int = DEFAULT_HESSIAN_ORDER,
) -> HessianEvaluator:
    """Returns a central-difference Hessian evaluator.

    Supported orders are 2 and 4; the region is padded by ``order // 2`` on
    every side.

    Raises:
        UnsupportedOrderError: If ``order`` is not 2 or 4.
    """
    evaluator = HessianEvaluator(source, region, order)
    localderivkit_logger.debug(
        "Built central Hessian evaluator of order %d over [%s, %s], padded to [%s, %s].",
        order,
        evaluator.region.min,
        evaluator.region.max,
        evaluator.padded_region.min,
        evaluator.padded_region.max,
    )
    return evaluator
