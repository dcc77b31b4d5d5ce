"""Exception hierarchy for fd_operators.

Every library error derives from :class:`FDOperatorError`. The grid and
dimension errors also derive from :class:`ValueError`, so callers that only
guard against bad inputs can keep catching ``ValueError``.
"""

from __future__ import annotations


class FDOperatorError(Exception):
    """Base class for all fd_operators errors."""


class InvalidGridError(FDOperatorError, ValueError):
    """Raised when a grid is not a 1D, strictly increasing array of coordinates."""


class InvalidGridSize(InvalidGridError):
    """Raised when a grid has fewer points than the requested stencil spans.

    Each operator builder checks this on entry. For example a fourth-order
    interior stencil needs at least 5 points and the fourth-order one-sided
    second-derivative boundary stencil needs 6.
    """

    def __init__(self, name: str, n_points: int, required: int) -> None:
        self.name = name
        self.n_points = int(n_points)
        self.required = int(required)
        super().__init__(
            f"{name} needs at least {self.required} grid points, got {self.n_points}"
        )


class DimensionMismatch(FDOperatorError, ValueError):
    """Raised when an array length does not match an operator order.

    Used by the mixed-derivative coefficient setters (per-axis and full-field)
    and by operator actions applied to vectors of the wrong length.
    """


class UnsupportedSchemeError(FDOperatorError, ValueError):
    """Raised when a (derivative, grid regularity, scheme code) combination is not offered."""
