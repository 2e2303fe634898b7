"""Error classes for relay conversion and routing.

Every error is fatal to the call that raised it. Nothing in the package
retries or returns a partial result after one of these.
"""


class BancorError(Exception):
    """Base error for relay math, routing and estimation."""

    pass


class SymbolMismatch(BancorError):
    """Two operands carry different token symbols where equality is required."""

    pass


class ReserveExhausted(BancorError):
    """A conversion would consume an entire reserve (or supply) or more."""

    pass


class PathNotFound(BancorError):
    """No route connects the requested symbols within the relay set."""

    pass


class ReserveMismatch(BancorError):
    """Fetched balances do not cover every reserve of a relay."""

    pass


__all__ = [
    "BancorError",
    "SymbolMismatch",
    "ReserveExhausted",
    "PathNotFound",
    "ReserveMismatch",
]
