"""Exceptions raised by localderivkit."""


class LocalDerivativeError(Exception):
    """Base exception for local derivative operations."""

    pass


class UnsupportedOrderError(LocalDerivativeError, ValueError):
    """Raised when a stencil is requested for an accuracy order that is not tabulated.

    This is a configuration error: it is raised when an evaluator is built,
    never while it is evaluated, and the requested order is never replaced
    by a default one.
    """

    def __init__(self, kind, order, supported, derivative: int = 1):
        self.kind = kind
        self.order = order
        self.supported = tuple(supported)
        self.derivative = derivative
        what = "first" if derivative == 1 else "second"
        super().__init__(
            f"[Stencil] Unsupported accuracy order for {kind} {what}-derivative "
            f"differences: {order!r}. Must be one of {list(self.supported)}."
        )


class OutOfBoundsError(LocalDerivativeError, IndexError):
    """Raised by the bundled array cursor when reading outside its region."""

    pass
