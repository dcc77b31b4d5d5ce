"""First-derivative operators on non-uniform grids.

Each row's weights come from its own local spacings: the closed-form 3-point
formula for second-order central rows, the Taylor-system solver for every
other row. No fourth-order boundary variant is offered here.
"""

from __future__ import annotations

from numpy.typing import ArrayLike

from ...banded import PentaDiagonal, TriDiagonal
from .._assembly import build_nonuniform
from ..stencils import D1_CENTRAL_2, D1_CENTRAL_4, D1_FORWARD_1, D1_FORWARD_2

__all__ = ["c2b1", "c2b2", "c4b2"]


def c2b1(grid: ArrayLike) -> TriDiagonal:
    """Interior: central difference, 2nd order.
    Boundary 1st row: forward difference, 1st order.
    """
    return build_nonuniform(
        TriDiagonal, grid, D1_CENTRAL_2, [D1_FORWARD_1], name="d1dx1.nonuniform.c2b1"
    )


def c2b2(grid: ArrayLike) -> TriDiagonal:
    """Interior: central difference, 2nd order.
    Boundary 1st row: forward difference, 2nd order.
    """
    return build_nonuniform(
        TriDiagonal, grid, D1_CENTRAL_2, [D1_FORWARD_2], name="d1dx1.nonuniform.c2b2"
    )


def c4b2(grid: ArrayLike) -> PentaDiagonal:
    """Interior: central difference, 4th order.
    Boundary 1st row: forward difference, 2nd order.
    Boundary 2nd row: central difference, 2nd order.
    """
    return build_nonuniform(
        PentaDiagonal,
        grid,
        D1_CENTRAL_4,
        [D1_FORWARD_2, D1_CENTRAL_2],
        name="d1dx1.nonuniform.c4b2",
    )
