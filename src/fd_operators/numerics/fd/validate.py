"""
fd_operators.numerics.fd.validate

Grid checks shared by every operator builder, so that d1dx1, d2dx2 and the
dispatcher reject bad grids with the same errors.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ...exceptions import InvalidGridError, InvalidGridSize


def assert_strictly_increasing(x: np.ndarray, name: str) -> None:
    if x.ndim != 1:
        raise InvalidGridError(f"{name} must be 1D")
    if not np.all(np.isfinite(x)):
        raise InvalidGridError(f"{name} must be finite")
    if np.any(np.diff(x) <= 0):
        raise InvalidGridError(f"{name} must be strictly increasing")


def assert_min_points(x: np.ndarray, required: int, name: str) -> None:
    if x.shape[0] < required:
        raise InvalidGridSize(name, x.shape[0], required)


def as_grid(grid: ArrayLike, required: int, name: str) -> NDArray[np.floating]:
    """Return ``grid`` as a float array after shape, size and monotonicity checks."""
    x = np.asarray(grid, dtype=float)
    if x.ndim != 1:
        raise InvalidGridError(f"{name}: grid must be 1D")
    assert_min_points(x, required, name)
    assert_strictly_increasing(x, f"{name}: grid")
    return x
