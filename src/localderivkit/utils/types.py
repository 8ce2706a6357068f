"""Shared typing aliases for localderivkit."""

from __future__ import annotations

from typing import Sequence, TypeAlias

import numpy as np
from numpy.typing import NDArray

FloatArray: TypeAlias = NDArray[np.float64]

Coordinates: TypeAlias = Sequence[int] | NDArray[np.integer]
