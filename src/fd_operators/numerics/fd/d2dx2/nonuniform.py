"""Second-derivative operators on non-uniform grids.

Same boundary conventions as :mod:`.uniform` (``b0`` is zero curvature, not a
zero first derivative). Only ``c2b0``, ``c2b1`` and ``c4b0`` are offered.
"""

from __future__ import annotations

from numpy.typing import ArrayLike

from ...banded import PentaDiagonal, TriDiagonal
from .._assembly import build_nonuniform
from ..stencils import D2_CENTRAL_2, D2_CENTRAL_4, D2_FORWARD_1

__all__ = ["c2b0", "c2b1", "c4b0"]


def c2b0(grid: ArrayLike) -> TriDiagonal:
    """Interior: central difference, 2nd order.
    Boundary 1st row: zero curvature, d2dx2 = 0.
    """
    return build_nonuniform(
        TriDiagonal, grid, D2_CENTRAL_2, [None], name="d2dx2.nonuniform.c2b0"
    )


def c2b1(grid: ArrayLike) -> TriDiagonal:
    """Interior: central difference, 2nd order.
    Boundary 1st row: forward difference, 1st order (3-point Lagrange at x_0).
    """
    return build_nonuniform(
        TriDiagonal, grid, D2_CENTRAL_2, [D2_FORWARD_1], name="d2dx2.nonuniform.c2b1"
    )


def c4b0(grid: ArrayLike) -> PentaDiagonal:
    """Interior: central difference, 4th order.
    Boundary 1st row: zero curvature, d2dx2 = 0.
    Boundary 2nd row: central difference, 2nd order.
    """
    return build_nonuniform(
        PentaDiagonal,
        grid,
        D2_CENTRAL_4,
        [None, D2_CENTRAL_2],
        name="d2dx2.nonuniform.c4b0",
    )
