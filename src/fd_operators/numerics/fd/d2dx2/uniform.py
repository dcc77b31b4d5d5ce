"""Second-derivative operators on uniform grids.

``b0`` variants zero the boundary row, i.e. they impose ``d2u/dx2 = 0`` (zero
curvature) at the edge. This is not a Neumann condition on ``du/dx``; callers
that need ``du/dx = 0`` must impose it themselves.
"""

from __future__ import annotations

from numpy.typing import ArrayLike

from ...banded import PentaDiagonal, TriDiagonal
from .._assembly import build_uniform
from ..stencils import (
    D2_CENTRAL_2,
    D2_CENTRAL_4,
    D2_FORWARD_1,
    D2_FORWARD_2,
    D2_FORWARD_4,
    D2_SHIFTED_4,
)

__all__ = ["c2b0", "c2b1", "c2b2", "c4b0", "c4b2", "c4b4"]


def c2b0(grid: ArrayLike) -> TriDiagonal:
    """Interior: central difference, 2nd order.
    Boundary 1st row: zero curvature, d2dx2 = 0.
    """
    return build_uniform(TriDiagonal, grid, D2_CENTRAL_2, [None], name="d2dx2.uniform.c2b0")


def c2b1(grid: ArrayLike) -> TriDiagonal:
    """Interior: central difference, 2nd order.
    Boundary 1st row: forward difference, 1st order.
    """
    return build_uniform(
        TriDiagonal, grid, D2_CENTRAL_2, [D2_FORWARD_1], name="d2dx2.uniform.c2b1"
    )


def c2b2(grid: ArrayLike) -> TriDiagonal:
    """Interior: central difference, 2nd order.
    Boundary 1st row: forward difference, 2nd order (4 points, needs n >= 4).
    """
    return build_uniform(
        TriDiagonal, grid, D2_CENTRAL_2, [D2_FORWARD_2], name="d2dx2.uniform.c2b2"
    )


def c4b0(grid: ArrayLike) -> PentaDiagonal:
    """Interior: central difference, 4th order.
    Boundary 1st row: zero curvature, d2dx2 = 0.
    Boundary 2nd row: central difference, 2nd order.
    """
    return build_uniform(
        PentaDiagonal, grid, D2_CENTRAL_4, [None, D2_CENTRAL_2], name="d2dx2.uniform.c4b0"
    )


def c4b2(grid: ArrayLike) -> PentaDiagonal:
    """Interior: central difference, 4th order.
    Boundary 1st row: forward difference, 2nd order.
    Boundary 2nd row: central difference, 2nd order.
    """
    return build_uniform(
        PentaDiagonal,
        grid,
        D2_CENTRAL_4,
        [D2_FORWARD_2, D2_CENTRAL_2],
        name="d2dx2.uniform.c4b2",
    )


def c4b4(grid: ArrayLike) -> PentaDiagonal:
    """Interior: central difference, 4th order.
    Boundary 1st row: forward difference, 4th order (6 points, needs n >= 6).
    Boundary 2nd row: one-sided (points -1 .. 4), 4th order.
    """
    return build_uniform(
        PentaDiagonal,
        grid,
        D2_CENTRAL_4,
        [D2_FORWARD_4, D2_SHIFTED_4],
        name="d2dx2.uniform.c4b4",
    )
