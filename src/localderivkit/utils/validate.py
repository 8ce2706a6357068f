"""Validation utilities for localderivkit."""

from __future__ import annotations

import numbers
from typing import Sequence

import numpy as np

__all__ = [
    "as_coordinates",
    "as_integer",
    "validate_axis",
]


def as_integer(value, name: str = "value") -> int:
    """Returns ``value`` as a Python int if it is integral.

    Integer-valued floats are accepted; booleans and fractional values are not.

    Raises:
        TypeError: If ``value`` is not integral.
    """
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"Expected an integer {name}; got {value!r}.")
    return int(value)


def as_coordinates(position: Sequence[int], ndim: int) -> tuple[int, ...]:
    """Converts a position to a tuple of Python ints of length ``ndim``.

    Args:
        position: Sequence or array of integer coordinates.
        ndim: Expected number of coordinates.

    Returns:
        The coordinates as a tuple of ints.

    Raises:
        ValueError: If the length does not match ``ndim``.
        TypeError: If a coordinate is not integral.
    """
    arr = np.asarray(position)
    if arr.ndim != 1 or arr.size != ndim:
        raise ValueError(
            f"Expected a position with {ndim} coordinates; got shape {arr.shape}."
        )
    return tuple(as_integer(v, "coordinate") for v in arr.tolist())


def validate_axis(axis: int, ndim: int) -> int:
    """Checks that ``axis`` indexes one of ``ndim`` dimensions.

    Negative axes are not accepted: cursor moves address axes by position.

    Raises:
        ValueError: If ``axis`` is out of range.
    """
    if not 0 <= axis < ndim:
        raise ValueError(f"axis {axis} out of bounds for ndim={ndim}.")
    return int(axis)
