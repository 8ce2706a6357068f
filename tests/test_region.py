"""Unit tests for localderivkit.region."""

import numpy as np
import pytest

from localderivkit.exceptions import UnsupportedOrderError
from localderivkit.region import Region, padded_region, padding


def test_region_shape_size_and_ndim():
    """Tests the derived geometry of an inclusive region."""
    r = Region((50, 50, 20), (70, 70, 30))
    assert r.ndim == 3
    assert r.shape == (21, 21, 11)
    assert r.size == 21 * 21 * 11


def test_region_coerces_numpy_integers():
    """Tests that corners given as numpy integers become plain ints."""
    r = Region.from_min_max(np.array([1, 2]), np.array([3, 4]))
    assert r.min == (1, 2)
    assert all(type(v) is int for v in r.min + r.max)


@pytest.mark.parametrize(
    "lo, hi",
    [((0, 0), (1,)), ((), ()), ((2, 0), (1, 5))],
)
def test_invalid_regions_raise(lo, hi):
    """Tests that mismatched, empty, or inverted regions are rejected."""
    with pytest.raises(ValueError):
        Region(lo, hi)


def test_from_shape_covers_array():
    """Tests that from_shape spans [0, shape - 1]."""
    r = Region.from_shape((4, 5))
    assert r.min == (0, 0)
    assert r.max == (3, 4)


def test_contains_includes_bounds():
    """Tests that both corners are inside the region."""
    r = Region((0, 0), (2, 2))
    assert r.contains((0, 0))
    assert r.contains((2, 2))
    assert not r.contains((3, 0))
    assert not r.contains((0, -1))
    assert not r.contains((0, 0, 0))


def test_expand_symmetric_and_per_side():
    """Tests symmetric, asymmetric, and per-axis expansion."""
    r = Region((10, 10), (20, 20))
    assert r.expand(2) == Region((8, 8), (22, 22))
    assert r.expand(0, 3) == Region((10, 10), (23, 23))
    assert r.expand((1, 2), (3, 4)) == Region((9, 8), (23, 24))
    with pytest.raises(ValueError):
        r.expand((1, 2, 3))


def test_positions_iterates_last_axis_fastest():
    """Tests the iteration order of region positions."""
    r = Region((0, 5), (1, 6))
    assert list(r.positions()) == [(0, 5), (0, 6), (1, 5), (1, 6)]


@pytest.mark.parametrize("order", [2, 4, 6, 8])
def test_central_padding_is_half_order(order):
    """Tests that central differences pad order/2 on every side."""
    r = Region((50, 50, 20), (70, 70, 30))
    h = order // 2
    assert padding("central", order) == (h, h)
    assert padded_region(r, "central", order) == Region(
        (50 - h, 50 - h, 20 - h), (70 + h, 70 + h, 30 + h)
    )


@pytest.mark.parametrize("order", range(1, 7))
def test_one_sided_padding(order):
    """Tests that forward pads the high side and backward the low side only."""
    r = Region((5, 5), (9, 9))
    assert padded_region(r, "forward", order) == Region((5, 5), (9 + order, 9 + order))
    assert padded_region(r, "backward", order) == Region((5 - order, 5 - order), (9, 9))


@pytest.mark.parametrize("order", [2, 4])
def test_hessian_padding(order):
    """Tests the padding of the second-derivative stencils."""
    r = Region((5,), (9,))
    assert padded_region(r, "central", order, derivative=2) == r.expand(order // 2)


def test_padding_rejects_unsupported_order():
    """Tests that padding is computed only for tabulated orders."""
    with pytest.raises(UnsupportedOrderError):
        padded_region(Region((0,), (1,)), "central", 3)
