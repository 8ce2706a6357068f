"""Stencil definitions for finite-difference derivatives on a unit-spaced lattice.

Every stencil is a fixed list of integer sample offsets, relative to the point
where the derivative is evaluated, paired with integer weight numerators and a
common normalization divisor. The effective coefficient of a sample is
``weight / divisor``. No division by a physical step size is performed: the
derivatives are expressed per unit grid spacing.

The tables are plain data built once at import time and shared read-only by
every evaluator. Adding an accuracy order is a matter of adding a row here.
"""

from __future__ import annotations

import enum
import numbers
import re
from dataclasses import dataclass
from fractions import Fraction
from functools import lru_cache
from typing import Mapping, Sequence

from localderivkit.exceptions import UnsupportedOrderError

__all__ = [
    "DifferenceKind",
    "Stencil",
    "available_kinds",
    "get_stencil",
    "resolve_kind",
    "supported_orders",
    "truncation_order",
    "DEFAULT_GRADIENT_ORDER",
    "DEFAULT_HESSIAN_ORDER",
]

#: Accuracy order used by the gradient factories when none is given.
DEFAULT_GRADIENT_ORDER = 2
#: Accuracy order used by the Hessian factory when none is given.
DEFAULT_HESSIAN_ORDER = 2


class DifferenceKind(str, enum.Enum):
    """Where a stencil samples relative to the evaluation point."""

    CENTRAL = "central"
    FORWARD = "forward"
    BACKWARD = "backward"

    def __str__(self) -> str:
        return self.value


_KIND_SPECS: list[tuple[DifferenceKind, list[str]]] = [
    (DifferenceKind.CENTRAL, ["centered", "central-difference", "cd"]),
    (DifferenceKind.FORWARD, ["forward-difference", "fd"]),
    (DifferenceKind.BACKWARD, ["backward-difference", "bd"]),
]


def _norm(s: str) -> str:
    """Normalize a kind string for robust matching (case/spacing/punct insensitive)."""
    return re.sub(r"[^a-z0-9]+", "", s.lower())


@lru_cache(maxsize=1)
def _kind_map() -> Mapping[str, DifferenceKind]:
    """Builds and caches the lookup from normalized names and aliases to kinds."""
    kinds: dict[str, DifferenceKind] = {}
    for kind, aliases in _KIND_SPECS:
        kinds[_norm(kind.value)] = kind
        for a in aliases:
            kinds[_norm(a)] = kind
    return kinds


def available_kinds() -> list[str]:
    """Returns the canonical difference kind names."""
    return [kind.value for kind, _ in _KIND_SPECS]


def resolve_kind(kind: DifferenceKind | str) -> DifferenceKind:
    """Maps a kind name or alias to a :class:`DifferenceKind`.

    Raises:
        ValueError: If the name is not recognized.
        TypeError: If ``kind`` is neither a string nor a :class:`DifferenceKind`.
    """
    if isinstance(kind, DifferenceKind):
        return kind
    if not isinstance(kind, str):
        raise TypeError(f"Difference kind must be a string; got {type(kind).__name__}.")
    try:
        return _kind_map()[_norm(kind)]
    except KeyError:
        raise ValueError(
            f"Unknown difference kind {kind!r}. Choose one of {available_kinds()}."
        ) from None


@dataclass(frozen=True)
class Stencil:
    """A one-dimensional finite-difference formula.

    Attributes:
        kind: The difference kind the formula belongs to.
        order: The accuracy order of the formula.
        derivative: The derivative the formula approximates (1 or 2).
        offsets: Integer sample offsets relative to the evaluation point.
        weights: Integer weight numerators aligned with ``offsets``.
        divisor: Normalization divisor shared by all weights.
    """

    kind: DifferenceKind
    order: int
    derivative: int
    offsets: tuple[int, ...]
    weights: tuple[int, ...]
    divisor: int

    def __post_init__(self) -> None:
        if len(self.offsets) != len(self.weights):
            raise ValueError("offsets and weights must have the same length.")
        if self.divisor == 0:
            raise ValueError("divisor must be non-zero.")

    def __len__(self) -> int:
        return len(self.offsets)

    def __iter__(self):
        return iter(zip(self.offsets, self.weights))

    @property
    def reach(self) -> tuple[int, int]:
        """Returns the number of samples the stencil needs below and above the point."""
        return max(0, -min(self.offsets)), max(0, max(self.offsets))

    def coefficients(self) -> tuple[Fraction, ...]:
        """Returns the exact normalized coefficients aligned with ``offsets``."""
        return tuple(Fraction(w, self.divisor) for w in self.weights)

    def apply(self, values: Sequence[float]) -> float:
        """Returns the normalized weighted sum of samples aligned with ``offsets``.

        Args:
            values: One sampled value per offset, in the order of ``offsets``.

        Returns:
            The derivative estimate per unit grid spacing.
        """
        if len(values) != len(self.weights):
            raise ValueError(
                f"Expected {len(self.weights)} samples for this stencil, got {len(values)}."
            )
        acc = 0.0
        for w, v in zip(self.weights, values):
            acc += w * v
        return acc / self.divisor


# (offsets, weight numerators, divisor) keyed by accuracy order.
_CENTRAL_FIRST = {
    2: ((-1, 1), (-1, 1), 2),
    4: ((-2, -1, 1, 2), (1, -8, 8, -1), 12),
    6: ((-3, -2, -1, 1, 2, 3), (-1, 9, -45, 45, -9, 1), 60),
    8: (
        (-4, -3, -2, -1, 1, 2, 3, 4),
        (3, -32, 168, -672, 672, -168, 32, -3),
        840,
    ),
}

_CENTRAL_SECOND = {
    2: ((-1, 0, 1), (1, -2, 1), 1),
    4: ((-2, -1, 0, 1, 2), (-1, 16, -30, 16, -1), 12),
}

_FORWARD_FIRST = {
    1: ((-1, 1), 1),
    2: ((-3, 4, -1), 2),
    3: ((-11, 18, -9, 2), 6),
    4: ((-25, 48, -36, 16, -3), 12),
    5: ((-137, 300, -300, 200, -75, 12), 60),
    6: ((-147, 360, -450, 400, -225, 72, -10), 60),
}


def _build_tables() -> dict[tuple[DifferenceKind, int, int], Stencil]:
    """Assembles the stencil table keyed by ``(kind, derivative, order)``."""
    table: dict[tuple[DifferenceKind, int, int], Stencil] = {}
    for order, (offsets, weights, divisor) in _CENTRAL_FIRST.items():
        table[(DifferenceKind.CENTRAL, 1, order)] = Stencil(
            DifferenceKind.CENTRAL, order, 1, offsets, weights, divisor
        )
    for order, (offsets, weights, divisor) in _CENTRAL_SECOND.items():
        table[(DifferenceKind.CENTRAL, 2, order)] = Stencil(
            DifferenceKind.CENTRAL, order, 2, offsets, weights, divisor
        )
    for order, (weights, divisor) in _FORWARD_FIRST.items():
        offsets = tuple(range(order + 1))
        table[(DifferenceKind.FORWARD, 1, order)] = Stencil(
            DifferenceKind.FORWARD, order, 1, offsets, weights, divisor
        )
        # Mirrored offsets flip the sign of an odd derivative.
        table[(DifferenceKind.BACKWARD, 1, order)] = Stencil(
            DifferenceKind.BACKWARD,
            order,
            1,
            tuple(-k for k in offsets),
            tuple(-w for w in weights),
            divisor,
        )
    return table


_STENCILS = _build_tables()


def supported_orders(kind: DifferenceKind | str, derivative: int = 1) -> tuple[int, ...]:
    """Lists the tabulated accuracy orders for a difference kind.

    Args:
        kind: The difference kind.
        derivative: The derivative order, 1 (gradient) or 2 (Hessian diagonal).

    Returns:
        The supported accuracy orders in increasing order. Empty if the kind
        has no table for this derivative.
    """
    kind = resolve_kind(kind)
    return tuple(
        sorted(o for (k, d, o) in _STENCILS if k is kind and d == derivative)
    )


def get_stencil(
    kind: DifferenceKind | str,
    order: int,
    derivative: int = 1,
) -> Stencil:
    """Returns the tabulated stencil for a difference kind and accuracy order.

    Args:
        kind: The difference kind.
        order: The accuracy order.
        derivative: The derivative order, 1 or 2.

    Returns:
        The shared, immutable stencil.

    Raises:
        UnsupportedOrderError: If the combination is not tabulated.
    """
    kind = resolve_kind(kind)
    # bool is an int; True must not select the order-1 table.
    if isinstance(order, bool) or not isinstance(order, numbers.Integral):
        raise UnsupportedOrderError(kind, order, supported_orders(kind, derivative), derivative)
    order = int(order)
    try:
        return _STENCILS[(kind, derivative, order)]
    except KeyError:
        raise UnsupportedOrderError(
            kind, order, supported_orders(kind, derivative), derivative
        ) from None


def truncation_order(stencil: Stencil, max_degree: int = 40) -> int:
    """Computes the accuracy order a stencil achieves from its Taylor moments.

    The moment ``sum_k c_k * k**r`` of an exact stencil for derivative ``m``
    equals ``m!`` for ``r == m`` and vanishes for every other ``r`` below
    ``m + p``, where ``p`` is the accuracy order. The moments are computed
    with exact rationals, so no tolerance is involved.

    Args:
        stencil: The stencil to inspect.
        max_degree: Highest moment degree inspected.

    Returns:
        The accuracy order ``p``.

    Raises:
        ValueError: If a lower moment does not vanish (the stencil does not
            approximate its derivative at all).
        RuntimeError: If no non-vanishing moment is found up to ``max_degree``.
    """
    m = stencil.derivative
    coeffs = stencil.coefficients()
    factorial = 1
    for r in range(1, m + 1):
        factorial *= r

    for r in range(m + 1):
        moment = sum(c * Fraction(k) ** r for k, c in zip(stencil.offsets, coeffs))
        expected = factorial if r == m else 0
        if moment != expected:
            raise ValueError(
                f"Stencil does not approximate derivative {m}: moment {r} is {moment}."
            )
    for r in range(m + 1, max_degree + 1):
        moment = sum(c * Fraction(k) ** r for k, c in zip(stencil.offsets, coeffs))
        if moment != 0:
            return r - m
    raise RuntimeError("Could not detect truncation order.")
