# fd_operators/models/black_scholes/pde.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ...exceptions import DimensionMismatch
from ...numerics.banded import BandDiagonal


@dataclass(frozen=True, slots=True)
class GeneratorPrefactors:
    """
    Spatially varying coefficients of the Black-Scholes generator in spot
    coordinates (x = S):

        L u = c(x) u + b(x) u_x + a(x) u_xx

    with c = -r, b = r x, a = 0.5 (sigma x)^2.
    """

    identity: NDArray[np.floating]
    first: NDArray[np.floating]
    second: NDArray[np.floating]

    def as_array(self) -> NDArray[np.floating]:
        """Rows: identity, first-derivative, second-derivative coefficients."""
        return np.vstack([self.identity, self.first, self.second])


def bs_generator_prefactors(
    rate: float, sigma: float, spatial_grid: ArrayLike
) -> GeneratorPrefactors:
    """Per-node generator coefficients for constant rate and volatility.

    No input checks: degenerate inputs propagate as NaN/Inf.
    """
    x = np.asarray(spatial_grid, dtype=float)
    r = float(rate)
    sig = float(sigma)
    return GeneratorPrefactors(
        identity=np.full(x.shape, -r, dtype=float),
        first=r * x,
        second=0.5 * (sig * x) ** 2,
    )


def generator_prefactors(
    rate: float, sigma: float, spatial_grid: ArrayLike
) -> NDArray[np.floating]:
    """``(3, n)`` array of generator prefactors; see :func:`bs_generator_prefactors`."""
    return bs_generator_prefactors(rate, sigma, spatial_grid).as_array()


def bs_generator(
    rate: float,
    sigma: float,
    spatial_grid: ArrayLike,
    d1dx1: BandDiagonal,
    d2dx2: BandDiagonal,
) -> BandDiagonal:
    """Generator matrix ``diag(c) I + diag(b) D1 + diag(a) D2``.

    The result has the wider of the two operator types. Boundary rows are
    whatever the chosen derivative operators put there; no boundary
    condition is imposed here.
    """
    pf = bs_generator_prefactors(rate, sigma, spatial_grid)
    n = int(pf.identity.shape[0])
    if d1dx1.order != n or d2dx2.order != n:
        raise DimensionMismatch(
            f"operator orders ({d1dx1.order}, {d2dx2.order}) must match grid size {n}"
        )
    eye = type(d2dx2).identity(n).scale_rows(pf.identity)
    return eye + d1dx1.scale_rows(pf.first) + d2dx2.scale_rows(pf.second)
