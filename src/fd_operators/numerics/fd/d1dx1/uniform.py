"""First-derivative operators on uniform grids.

Grid spacing is taken as ``(x[-1] - x[0]) / (n - 1)``; all weights are the
standard fixed-fraction stencils scaled by ``1/h``.
"""

from __future__ import annotations

from numpy.typing import ArrayLike

from ...banded import PentaDiagonal, TriDiagonal
from .._assembly import build_uniform
from ..stencils import (
    D1_CENTRAL_2,
    D1_CENTRAL_4,
    D1_FORWARD_1,
    D1_FORWARD_2,
    D1_FORWARD_4,
    D1_SHIFTED_4,
)

__all__ = ["c2b1", "c2b2", "c4b2", "c4b4"]


def c2b1(grid: ArrayLike) -> TriDiagonal:
    """Interior: central difference, 2nd order.
    Boundary 1st row: forward difference, 1st order.
    """
    return build_uniform(
        TriDiagonal, grid, D1_CENTRAL_2, [D1_FORWARD_1], name="d1dx1.uniform.c2b1"
    )


def c2b2(grid: ArrayLike) -> TriDiagonal:
    """Interior: central difference, 2nd order.
    Boundary 1st row: forward difference, 2nd order.
    """
    return build_uniform(
        TriDiagonal, grid, D1_CENTRAL_2, [D1_FORWARD_2], name="d1dx1.uniform.c2b2"
    )


def c4b2(grid: ArrayLike) -> PentaDiagonal:
    """Interior: central difference, 4th order.
    Boundary 1st row: forward difference, 2nd order.
    Boundary 2nd row: central difference, 2nd order.
    """
    return build_uniform(
        PentaDiagonal,
        grid,
        D1_CENTRAL_4,
        [D1_FORWARD_2, D1_CENTRAL_2],
        name="d1dx1.uniform.c4b2",
    )


def c4b4(grid: ArrayLike) -> PentaDiagonal:
    """Interior: central difference, 4th order.
    Boundary 1st row: forward difference, 4th order.
    Boundary 2nd row: one-sided (points -1 .. 3), 4th order.
    """
    return build_uniform(
        PentaDiagonal,
        grid,
        D1_CENTRAL_4,
        [D1_FORWARD_4, D1_SHIFTED_4],
        name="d1dx1.uniform.c4b4",
    )
