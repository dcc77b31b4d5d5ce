# src/fd_operators/numerics/__init__.py
"""
Numerical building blocks (advanced API).

Top-level package `fd_operators` exposes the everyday operator API.
This subpackage exposes the storage types, grids and root finding.
"""

from .banded import BandDiagonal, BandedOperator, PentaDiagonal, TriDiagonal
from .grids import (
    GridConfig,
    SpacingPolicy,
    build_x_grid,
    exponential,
    hyperbolic,
    is_uniform,
    uniform,
)
from .root_finding import RootResult, newton_method

__all__ = [
    # Banded storage
    "BandedOperator",
    "BandDiagonal",
    "TriDiagonal",
    "PentaDiagonal",
    # Grids
    "SpacingPolicy",
    "GridConfig",
    "build_x_grid",
    "uniform",
    "exponential",
    "hyperbolic",
    "is_uniform",
    # Root finding
    "RootResult",
    "newton_method",
]
