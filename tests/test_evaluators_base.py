"""Unit tests for localderivkit.evaluators.base."""

import numpy as np
import pytest

from localderivkit.evaluators.base import PositionedEvaluator, displaced, resolve_region
from localderivkit.field import ArrayField
from localderivkit.region import Region


def test_displaced_restores_position():
    """Tests that the scoped displacement undoes its move on exit."""
    cur = ArrayField(np.zeros((5, 5))).cursor()
    cur.set_position((2, 2))
    with displaced(cur, -2, 1) as moved:
        assert moved is cur
        assert cur.position == (2, 0)
    assert cur.position == (2, 2)


def test_displaced_restores_position_on_error():
    """Tests that the inverse move runs when the block raises."""
    cur = ArrayField(np.zeros((5, 5))).cursor()
    cur.set_position((2, 2))
    with pytest.raises(RuntimeError):
        with displaced(cur, 3, 0):
            raise RuntimeError("read failed")
    assert cur.position == (2, 2)


def test_displaced_nests():
    """Tests nested displacements along two axes."""
    cur = ArrayField(np.zeros((5, 5))).cursor()
    cur.set_position((2, 2))
    with displaced(cur, 1, 0):
        with displaced(cur, -1, 1):
            assert cur.position == (3, 1)
        assert cur.position == (3, 2)
    assert cur.position == (2, 2)


def test_displaced_by_zero_does_not_move():
    """Tests that a zero offset leaves the cursor untouched."""

    class NoMoves:
        position = (1,)

        def move(self, distance, axis):
            raise AssertionError("move should not be called")

    with displaced(NoMoves(), 0, 0) as cur:
        assert cur.position == (1,)


def test_resolve_region_defaults_to_bounds():
    """Tests that a missing region falls back to the source bounds."""
    field = ArrayField(np.zeros((4, 6)))
    assert resolve_region(field, None) == Region((0, 0), (3, 5))
    r = Region((1, 1), (2, 2))
    assert resolve_region(field, r) is r


def test_base_evaluator_is_abstract():
    """Tests that the base class does not implement evaluation or copying."""
    field = ArrayField(np.zeros((4, 4)))
    region = field.bounds
    base = PositionedEvaluator(field, region, region, (2, 1))
    with pytest.raises(NotImplementedError):
        base.evaluate()
    with pytest.raises(NotImplementedError):
        base.copy()
