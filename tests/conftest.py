"""Pytest configuration file with sampled fields shared across the test modules."""

import math

import numpy as np
import pytest

from localderivkit.field import ArrayField
from localderivkit.region import Region

__all__ = ["RecordingField"]

#: Lattice shared by the accuracy tests.
LATTICE_SHAPE = (128, 128, 64)
#: Region the evaluators are positioned in for the accuracy tests.
TEST_REGION = Region((50, 50, 20), (70, 70, 30))

AMPLITUDE = 100.0


class RecordingField(ArrayField):
    """ArrayField whose cursors log every position they read."""

    def __init__(self, array):
        super().__init__(array)
        self.reads = []

    def cursor(self, region=None):
        inner = super().cursor(region)
        return _RecordingCursor(inner, self.reads)


class _RecordingCursor:
    def __init__(self, inner, log):
        self._inner = inner
        self._log = log

    @property
    def ndim(self):
        return self._inner.ndim

    @property
    def position(self):
        return self._inner.position

    def set_position(self, position):
        self._inner.set_position(position)

    def move(self, distance, axis):
        self._inner.move(distance, axis)

    def read(self):
        self._log.append(self._inner.position)
        return self._inner.read()


def product_function(x, y, z):
    """Returns 1/(x+1) * A * z: smooth along x, constant along y, linear along z."""
    return AMPLITUDE * z / (x + 1.0)


def product_gradient(x, y, z):
    """Returns the analytic gradient of ``product_function``."""
    return np.array(
        [-AMPLITUDE * z / (x + 1.0) ** 2, 0.0, AMPLITUDE / (x + 1.0)],
        dtype=float,
    )


def product_hessian(x, y, z):
    """Returns the analytic Hessian of ``product_function``."""
    hxx = 2.0 * AMPLITUDE * z / (x + 1.0) ** 3
    hxz = -AMPLITUDE / (x + 1.0) ** 2
    return np.array(
        [[hxx, 0.0, hxz], [0.0, 0.0, 0.0], [hxz, 0.0, 0.0]],
        dtype=float,
    )


def quadratic_coefficients(theta=math.pi / 3, sx=1.0, sy=2.0):
    """Returns (a, b, c) of a rotated anisotropic quadratic form."""
    ct = math.cos(theta)
    st = math.sin(theta)
    a = ct * ct / 2.0 / sx / sx + st * st / 2.0 / sy / sy
    b = -math.sin(2.0 * theta) / 4.0 / sx / sx + math.sin(2.0 * theta) / 4.0 / sy / sy
    c = st * st / 2.0 / sx / sx + ct * ct / 2.0 / sy / sy
    return a, b, c


@pytest.fixture(scope="session")
def test_region():
    """Region [50, 50, 20] - [70, 70, 30] used by the accuracy tests."""
    return TEST_REGION


@pytest.fixture(scope="session")
def product_field():
    """``product_function`` sampled on the 128 x 128 x 64 lattice."""
    return ArrayField.from_function(product_function, LATTICE_SHAPE)


@pytest.fixture(scope="session")
def quadratic_field():
    """Returns ``(field, (a, b, c))`` for f = -a x^2 - 2 b x y - c y^2 centred at (63, 63)."""
    a, b, c = quadratic_coefficients()

    def f(x, y, z):
        u = x - 63.0
        v = y - 63.0
        return -a * u * u - 2.0 * b * u * v - c * v * v + 0.0 * z

    return ArrayField.from_function(f, LATTICE_SHAPE), (a, b, c)


@pytest.fixture
def rng():
    """Random generator with a fixed seed for reproducibility."""
    return np.random.default_rng(seed=42)
