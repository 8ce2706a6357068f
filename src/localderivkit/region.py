"""Axis-aligned integer regions and the padding a stencil adds to them.

A :class:`Region` is an inclusive box ``[min, max]`` on the integer lattice.
:func:`padded_region` expands the region a caller wants to sample into the
region the underlying source must be able to serve once the stencil reach is
added. It only computes that region; whether the source can actually serve
it is left to the source.
"""

from __future__ import annotations

import itertools
import numbers
from dataclasses import dataclass
from typing import Iterator, Sequence

from localderivkit.stencil import DifferenceKind, get_stencil

__all__ = [
    "Region",
    "padding",
    "padded_region",
]


@dataclass(frozen=True)
class Region:
    """Inclusive integer box on an n-dimensional lattice.

    Attributes:
        min: Lowest coordinate on each axis.
        max: Highest coordinate on each axis.
    """

    min: tuple[int, ...]
    max: tuple[int, ...]

    def __post_init__(self) -> None:
        lo = tuple(int(v) for v in self.min)
        hi = tuple(int(v) for v in self.max)
        if len(lo) != len(hi):
            raise ValueError(
                f"min and max must have the same length; got {len(lo)} and {len(hi)}."
            )
        if len(lo) == 0:
            raise ValueError("A region needs at least one dimension.")
        if any(a > b for a, b in zip(lo, hi)):
            raise ValueError(f"Empty region: min={lo} is not <= max={hi}.")
        object.__setattr__(self, "min", lo)
        object.__setattr__(self, "max", hi)

    @classmethod
    def from_min_max(cls, min: Sequence[int], max: Sequence[int]) -> "Region":
        """Builds a region from its two corners."""
        return cls(tuple(min), tuple(max))

    @classmethod
    def from_shape(cls, shape: Sequence[int]) -> "Region":
        """Builds the region ``[0, shape - 1]`` covered by an array of ``shape``."""
        return cls(tuple(0 for _ in shape), tuple(int(s) - 1 for s in shape))

    @property
    def ndim(self) -> int:
        return len(self.min)

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(b - a + 1 for a, b in zip(self.min, self.max))

    @property
    def size(self) -> int:
        n = 1
        for s in self.shape:
            n *= s
        return n

    def contains(self, position: Sequence[int]) -> bool:
        """Returns True if ``position`` lies inside the region (bounds included)."""
        if len(position) != self.ndim:
            return False
        return all(a <= p <= b for a, p, b in zip(self.min, position, self.max))

    def expand(
        self,
        low: int | Sequence[int],
        high: int | Sequence[int] | None = None,
    ) -> "Region":
        """Returns the region grown by ``low`` below and ``high`` above on each axis.

        Args:
            low: Margin subtracted from ``min``; a scalar applies to every axis.
            high: Margin added to ``max``. Defaults to ``low``.

        Returns:
            The expanded region.
        """
        if high is None:
            high = low
        lo = _per_axis(low, self.ndim)
        hi = _per_axis(high, self.ndim)
        return Region(
            tuple(a - m for a, m in zip(self.min, lo)),
            tuple(b + m for b, m in zip(self.max, hi)),
        )

    def positions(self) -> Iterator[tuple[int, ...]]:
        """Iterates over every lattice position of the region, last axis fastest."""
        ranges = [range(a, b + 1) for a, b in zip(self.min, self.max)]
        return itertools.product(*ranges)


def _per_axis(value: int | Sequence[int], ndim: int) -> tuple[int, ...]:
    if isinstance(value, numbers.Integral):
        return (int(value),) * ndim
    out = tuple(int(v) for v in value)
    if len(out) != ndim:
        raise ValueError(f"Expected {ndim} margins, got {len(out)}.")
    return out


def padding(kind: DifferenceKind | str, order: int, derivative: int = 1) -> tuple[int, int]:
    """Returns the ``(low, high)`` margin a stencil needs on every axis.

    Central differences of order ``o`` need ``o // 2`` samples on both sides;
    forward differences need ``o`` samples above and none below, backward
    differences the mirror of that.

    Raises:
        UnsupportedOrderError: If the order is not tabulated for ``kind``.
    """
    return get_stencil(kind, order, derivative).reach


def padded_region(
    region: Region,
    kind: DifferenceKind | str,
    order: int,
    derivative: int = 1,
) -> Region:
    """Expands a requested sampling region by the reach of a stencil.

    Args:
        region: The region in which the evaluator will be positioned.
        kind: The difference kind.
        order: The accuracy order.
        derivative: The derivative the stencil approximates.

    Returns:
        The region the data source must be able to serve.

    Raises:
        UnsupportedOrderError: If the order is not tabulated for ``kind``.
    """
    low, high = padding(kind, order, derivative)
    return region.expand(low, high)
