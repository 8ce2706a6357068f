"""Random-access reading of n-dimensional scalar fields.

The evaluators only need a small capability from the data they differentiate:
something that knows its dimensionality and can hand out a cursor bound to a
region. A cursor can be positioned at an integer coordinate, moved by a
relative distance along one axis, and read as a real scalar. Any object
satisfying :class:`RandomAccessible` and :class:`Cursor` can be used.

:class:`ArrayField` is the bundled implementation over a NumPy array.

Examples:
---------
Sampling a function on a lattice and reading it back:

>>> from localderivkit.field import ArrayField
>>> field = ArrayField.from_function(lambda x, y: x + 10 * y, shape=(4, 3))
>>> cur = field.cursor()
>>> cur.set_position((2, 1))
>>> cur.read()
12.0
>>> cur.move(1, 0)
>>> cur.position
(3, 1)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, Sequence, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from localderivkit.exceptions import OutOfBoundsError
from localderivkit.region import Region
from localderivkit.utils.validate import as_coordinates, as_integer

__all__ = [
    "Cursor",
    "RandomAccessible",
    "ArrayField",
    "ArrayCursor",
]


@runtime_checkable
class Cursor(Protocol):
    """A movable, readable position on an integer lattice."""

    @property
    def ndim(self) -> int:
        ...

    @property
    def position(self) -> tuple[int, ...]:
        ...

    def set_position(self, position: Sequence[int]) -> None:
        ...

    def move(self, distance: int, axis: int) -> None:
        ...

    def read(self) -> float:
        ...


@runtime_checkable
class RandomAccessible(Protocol):
    """A scalar field that can hand out cursors bound to a region.

    Cursors are expected to be independent: moving one must not move
    another. Reads outside the region a cursor was opened on may fail; such
    failures are propagated untouched by the evaluators.
    """

    @property
    def ndim(self) -> int:
        ...

    def cursor(self, region: Region | None = None) -> Cursor:
        ...


class ArrayField:
    """A :class:`RandomAccessible` over an n-dimensional NumPy array.

    Lattice coordinate ``(i, j, ...)`` maps to ``array[i, j, ...]``.

    Attributes:
        array: The sampled values, stored as a float64 array.
    """

    def __init__(self, array: ArrayLike) -> None:
        arr = np.asarray(array, dtype=np.float64)
        if arr.ndim == 0:
            raise ValueError("ArrayField needs an array with at least one dimension.")
        self.array = arr

    @classmethod
    def from_function(
        cls,
        function: Callable[..., float | NDArray[np.floating]],
        shape: Sequence[int],
    ) -> "ArrayField":
        """Samples ``function`` at every integer coordinate of an array of ``shape``.

        Args:
            function: Called once with one coordinate grid per axis (as from
                ``np.indices``) and must broadcast over them.
            shape: Shape of the lattice.

        Returns:
            The sampled field.
        """
        grids = np.indices(tuple(int(s) for s in shape), dtype=np.float64)
        values = np.broadcast_to(np.asarray(function(*grids), dtype=np.float64), grids.shape[1:])
        return cls(np.array(values))

    @property
    def ndim(self) -> int:
        return self.array.ndim

    @property
    def shape(self) -> tuple[int, ...]:
        return self.array.shape

    @property
    def bounds(self) -> Region:
        """The region covered by the array."""
        return Region.from_shape(self.array.shape)

    def cursor(self, region: Region | None = None) -> "ArrayCursor":
        """Returns a fresh cursor allowed to read inside ``region``.

        The region is not checked against the array here: reads outside the
        array fail when they happen.

        Args:
            region: Region the cursor may read. Defaults to :attr:`bounds`.

        Raises:
            ValueError: If ``region`` does not match the dimensionality.
        """
        if region is None:
            region = self.bounds
        if region.ndim != self.ndim:
            raise ValueError(
                f"Region has {region.ndim} dimensions but the field has {self.ndim}."
            )
        return ArrayCursor(self.array, region)


class ArrayCursor:
    """Cursor over a NumPy array, restricted to reading inside a region.

    Moving is unchecked; only :meth:`read` validates the current position,
    against both the region and the array.
    A new cursor starts at the region's ``min`` corner.
    """

    __slots__ = ("_array", "_region", "_pos")

    def __init__(self, array: NDArray[np.float64], region: Region) -> None:
        self._array = array
        self._region = region
        self._pos = list(region.min)

    @property
    def ndim(self) -> int:
        return len(self._pos)

    @property
    def region(self) -> Region:
        return self._region

    @property
    def position(self) -> tuple[int, ...]:
        return tuple(self._pos)

    def set_position(self, position: Sequence[int]) -> None:
        self._pos = list(as_coordinates(position, self.ndim))

    def move(self, distance: int, axis: int) -> None:
        self._pos[axis] += as_integer(distance, "distance")

    def fwd(self, axis: int) -> None:
        self._pos[axis] += 1

    def bck(self, axis: int) -> None:
        self._pos[axis] -= 1

    def read(self) -> float:
        pos = tuple(self._pos)
        if not self._region.contains(pos):
            raise OutOfBoundsError(
                f"Read at {pos} is outside the region "
                f"[{self._region.min}, {self._region.max}]."
            )
        if any(p < 0 or p >= s for p, s in zip(pos, self._array.shape)):
            raise OutOfBoundsError(
                f"Read at {pos} is outside the array of shape {self._array.shape}."
            )
        return float(self._array[pos])

    def copy(self) -> "ArrayCursor":
        """Returns an independent cursor at the same position."""
        dup = ArrayCursor(self._array, self._region)
        dup._pos = list(self._pos)
        return dup
