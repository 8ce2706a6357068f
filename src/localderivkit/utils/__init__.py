"""Utility functions for localderivkit."""

from .validate import (
    as_coordinates,
    validate_axis,
)

__all__ = [
    "as_coordinates",
    "validate_axis",
]
