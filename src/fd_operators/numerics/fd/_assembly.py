"""Assembly of band-diagonal derivative operators from stencil descriptions.

An operator is described by one interior stencil and a list of boundary
stencils for rows ``0 .. nb-1`` (``None`` means an all-zero row). The last
``nb`` rows use the mirrored stencils. On uniform grids the table weights are
scaled by ``1/h**deriv``; on non-uniform grids only the stencil footprint
(offset, size) is kept and every row gets weights from its own local spacings.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TypeAlias, TypeVar

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..banded import BandDiagonal, RowStencil
from .stencils import (
    Stencil,
    d1_central_nonuniform_coeffs,
    d2_central_nonuniform_coeffs,
    fd_weights,
)
from .validate import as_grid

logger = logging.getLogger(__name__)

BoundaryStencils: TypeAlias = Sequence[Stencil | None]

B = TypeVar("B", bound=BandDiagonal)


def required_points(interior: Stencil, boundary: BoundaryStencils) -> int:
    """Smallest grid that holds the interior stencil and every boundary stencil."""
    need = interior.size
    for r, s in enumerate(boundary):
        if s is not None:
            need = max(need, r + s.offset + s.size)
    return max(need, 2 * len(boundary) + 1)


def _check_shapes(
    kind: type[BandDiagonal], interior: Stencil, boundary: BoundaryStencils
) -> None:
    if interior.size != 2 * kind.half_width + 1 or interior.offset != -kind.half_width:
        raise ValueError(f"interior stencil does not match {kind.__name__} band")
    if len(boundary) != kind.half_width:
        raise ValueError(f"{kind.__name__} needs {kind.half_width} boundary stencils")


def build_uniform(
    kind: type[B],
    grid: ArrayLike,
    interior: Stencil,
    boundary: BoundaryStencils,
    *,
    name: str,
) -> B:
    _check_shapes(kind, interior, boundary)
    x = as_grid(grid, required_points(interior, boundary), name)
    n = int(x.size)
    h = (x[-1] - x[0]) / (n - 1)

    band = np.tile(interior.scaled(h), (n, 1))

    top: list[RowStencil] = []
    bottom: list[RowStencil] = []
    for r, s in enumerate(boundary):
        if s is None:
            top.append((r, np.zeros(1)))
            bottom.append((n - 1 - r, np.zeros(1)))
            continue
        m = s.mirrored()
        top.append((r + s.offset, s.scaled(h)))
        bottom.append((n - 1 - r + m.offset, m.scaled(h)))
    bottom.reverse()

    logger.debug("%s: uniform operator n=%d h=%.6g", name, n, h)
    return kind.from_band(band, top, bottom)


def _interior_nonuniform(
    x: NDArray[np.floating], interior: Stencil, nb: int
) -> NDArray[np.floating]:
    n = int(x.size)
    band = np.zeros((n, interior.size), dtype=float)
    if n - 2 * nb <= 0:
        return band

    if interior.size == 3:
        hm = x[1:-1] - x[:-2]
        hp = x[2:] - x[1:-1]
        coeffs = (
            d1_central_nonuniform_coeffs(hm, hp)
            if interior.deriv == 1
            else d2_central_nonuniform_coeffs(hm, hp)
        )
        band[1:-1] = np.column_stack(coeffs)
        return band

    for i in range(nb, n - nb):
        lo = i + interior.offset
        band[i] = fd_weights(x[lo : lo + interior.size], x[i], interior.deriv)
    return band


def build_nonuniform(
    kind: type[B],
    grid: ArrayLike,
    interior: Stencil,
    boundary: BoundaryStencils,
    *,
    name: str,
) -> B:
    _check_shapes(kind, interior, boundary)
    x = as_grid(grid, required_points(interior, boundary), name)
    n = int(x.size)
    nb = len(boundary)
    deriv = interior.deriv

    band = _interior_nonuniform(x, interior, nb)

    top: list[RowStencil] = []
    bottom: list[RowStencil] = []
    for r, s in enumerate(boundary):
        i_bot = n - 1 - r
        if s is None:
            top.append((r, np.zeros(1)))
            bottom.append((i_bot, np.zeros(1)))
            continue
        lo = r + s.offset
        top.append((lo, fd_weights(x[lo : lo + s.size], x[r], deriv)))
        m = s.mirrored()
        lo = i_bot + m.offset
        bottom.append((lo, fd_weights(x[lo : lo + m.size], x[i_bot], deriv)))
    bottom.reverse()

    logger.debug(
        "%s: non-uniform operator n=%d min(dx)=%.6g max(dx)=%.6g",
        name,
        n,
        float(np.min(np.diff(x))),
        float(np.max(np.diff(x))),
    )
    return kind.from_band(band, top, bottom)
