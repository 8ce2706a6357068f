"""Shared machinery of the positioned derivative evaluators.

An evaluator behaves like a cursor over the derivative field: it is moved
around with the usual positioning calls and, when asked, computes the
derivative matrix at its current position. Its position *is* the position
of the one cursor it owns over the source. Sampling neighbouring points
displaces that cursor temporarily; :func:`displaced` guarantees it is put
back, including when a read fails.

The output matrix is owned by the evaluator and reused: every call to
``evaluate`` overwrites and returns the same NumPy array. Copy the result if
it must outlive the next call.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Sequence

import numpy as np

from localderivkit.field import Cursor, RandomAccessible
from localderivkit.region import Region
from localderivkit.utils.types import FloatArray
from localderivkit.utils.validate import as_coordinates, as_integer, validate_axis

__all__ = [
    "PositionedEvaluator",
    "displaced",
    "resolve_region",
]


@contextmanager
def displaced(cursor: Cursor, distance: int, axis: int) -> Iterator[Cursor]:
    """Moves ``cursor`` by ``distance`` along ``axis`` for the duration of the block.

    The inverse move runs on exit whether or not the block raised.

    Args:
        cursor: The cursor to displace.
        distance: Signed number of lattice steps.
        axis: Axis to move along.

    Yields:
        The displaced cursor.
    """
    if distance == 0:
        yield cursor
        return
    cursor.move(distance, axis)
    try:
        yield cursor
    finally:
        cursor.move(-distance, axis)


def resolve_region(source: RandomAccessible, region: Region | None) -> Region:
    """Returns ``region``, or the bounds of ``source`` when ``region`` is None.

    Raises:
        ValueError: If no region is given and the source has no ``bounds``,
            or if the region and the source disagree on dimensionality.
    """
    if region is None:
        region = getattr(source, "bounds", None)
        if region is None:
            raise ValueError(
                "A region is required for sources that do not expose their bounds."
            )
    if region.ndim != source.ndim:
        raise ValueError(
            f"Region has {region.ndim} dimensions but the source has {source.ndim}."
        )
    return region


class PositionedEvaluator:
    """Base class of evaluators that compute a derivative matrix at a lattice position.

    Subclasses set up their stencils, call ``__init__`` with the padded
    region and the output shape, and implement :meth:`evaluate` and
    :meth:`copy`.

    Attributes:
        source: The field being differentiated.
        region: The region the caller intends to position the evaluator in.
        padded_region: The region the owned cursor is allowed to read.
    """

    def __init__(
        self,
        source: RandomAccessible,
        region: Region,
        padded_region: Region,
        output_shape: tuple[int, int],
    ) -> None:
        self.source = source
        self.region = region
        self.padded_region = padded_region
        self._cursor = source.cursor(padded_region)
        self._matrix = np.zeros(output_shape, dtype=np.float64)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(region=[{self.region.min}, {self.region.max}], "
            f"position={self.position})"
        )

    @property
    def ndim(self) -> int:
        return self._cursor.ndim

    @property
    def position(self) -> tuple[int, ...]:
        """The current lattice position, equal to the owned cursor's."""
        return tuple(self._cursor.position)

    @property
    def matrix(self) -> FloatArray:
        """The owned output buffer, as filled by the last :meth:`evaluate` call."""
        return self._matrix

    def set_position(self, position: Sequence[int]) -> None:
        self._cursor.set_position(as_coordinates(position, self.ndim))

    def set_axis_position(self, position: int, axis: int) -> None:
        """Sets the coordinate along ``axis``, keeping the other coordinates."""
        axis = validate_axis(axis, self.ndim)
        coords = list(self.position)
        coords[axis] = as_integer(position, "coordinate")
        self._cursor.set_position(tuple(coords))

    def move(self, distance: int, axis: int) -> None:
        self._cursor.move(as_integer(distance, "distance"), validate_axis(axis, self.ndim))

    def move_by(self, distances: Sequence[int]) -> None:
        """Moves along every axis at once by ``distances``."""
        for axis, distance in enumerate(as_coordinates(distances, self.ndim)):
            if distance:
                self._cursor.move(distance, axis)

    def fwd(self, axis: int) -> None:
        self.move(1, axis)

    def bck(self, axis: int) -> None:
        self.move(-1, axis)

    def evaluate(self) -> FloatArray:
        raise NotImplementedError

    def copy(self) -> "PositionedEvaluator":
        raise NotImplementedError

    def _accumulate(self, stencil, axis: int) -> float:
        """Applies a 1D stencil along ``axis`` at the current position.

        Returns the weighted sum of samples before normalization.
        """
        cursor = self._cursor
        acc = 0.0
        for offset, weight in stencil:
            with displaced(cursor, offset, axis):
                acc += weight * cursor.read()
        return acc
