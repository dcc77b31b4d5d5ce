"""
numerics/fd/stencils.py (pure coefficients/weights)
Responsibility: return stencil coefficients; no assembly into operators.

Two sources of weights:
- fixed-fraction tables for uniform grids (``Stencil`` constants below), in
  units of ``1/h**deriv``;
- per-row weights on non-uniform grids, either from the closed-form 3-point
  formulas or from ``fd_weights``, which solves the small Taylor system for an
  arbitrary set of points. d1dx1 and d2dx2 both go through these helpers so
  sibling operators stay consistent.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray


@dataclass(frozen=True, slots=True)
class Stencil:
    """Uniform-grid stencil: ``f^(deriv)(x_i) ~ sum_j weights[j] f_{i+offset+j} / h**deriv``."""

    offset: int
    weights: tuple[float, ...]
    deriv: int

    @property
    def size(self) -> int:
        return len(self.weights)

    def scaled(self, h: float) -> NDArray[np.floating]:
        return np.asarray(self.weights, dtype=float) / h**self.deriv

    def mirrored(self) -> Stencil:
        """Stencil for the mirrored row at the opposite boundary.

        Reflecting ``x -> -x`` reverses the points and flips the sign of odd
        derivatives.
        """
        sign = -1.0 if self.deriv % 2 else 1.0
        return Stencil(
            offset=-(self.offset + self.size - 1),
            weights=tuple(sign * w for w in reversed(self.weights)),
            deriv=self.deriv,
        )


# First derivative
D1_FORWARD_1 = Stencil(0, (-1.0, 1.0), deriv=1)
D1_FORWARD_2 = Stencil(0, (-1.5, 2.0, -0.5), deriv=1)
D1_FORWARD_4 = Stencil(0, (-25.0 / 12.0, 4.0, -3.0, 4.0 / 3.0, -0.25), deriv=1)
D1_SHIFTED_4 = Stencil(-1, (-0.25, -5.0 / 6.0, 1.5, -0.5, 1.0 / 12.0), deriv=1)
D1_CENTRAL_2 = Stencil(-1, (-0.5, 0.0, 0.5), deriv=1)
D1_CENTRAL_4 = Stencil(-2, (1.0 / 12.0, -2.0 / 3.0, 0.0, 2.0 / 3.0, -1.0 / 12.0), deriv=1)

# Second derivative
D2_FORWARD_1 = Stencil(0, (1.0, -2.0, 1.0), deriv=2)
D2_FORWARD_2 = Stencil(0, (2.0, -5.0, 4.0, -1.0), deriv=2)
D2_FORWARD_4 = Stencil(
    0,
    (15.0 / 4.0, -77.0 / 6.0, 107.0 / 6.0, -13.0, 61.0 / 12.0, -5.0 / 6.0),
    deriv=2,
)
D2_SHIFTED_4 = Stencil(
    -1, (5.0 / 6.0, -1.25, -1.0 / 3.0, 7.0 / 6.0, -0.5, 1.0 / 12.0), deriv=2
)
D2_CENTRAL_2 = Stencil(-1, (1.0, -2.0, 1.0), deriv=2)
D2_CENTRAL_4 = Stencil(-2, (-1.0 / 12.0, 4.0 / 3.0, -2.5, 4.0 / 3.0, -1.0 / 12.0), deriv=2)


def fd_weights(points: ArrayLike, x_eval: float, deriv: int) -> NDArray[np.floating]:
    """Finite-difference weights for the ``deriv``-th derivative at ``x_eval``.

    Solves the Taylor system

        sum_j w_j (x_j - x_eval)**m / m! = [m == deriv],   m = 0 .. p-1

    for the ``p`` given points, so the stencil is exact for polynomials of
    degree ``< p``. Distances are normalised by the largest one before the
    solve to keep the system well scaled.

    Parameters
    ----------
    points:
        Distinct stencil coordinates, shape (p,), with ``p > deriv``.
    x_eval:
        Evaluation point (need not be one of ``points``).
    deriv:
        Derivative order, ``0 <= deriv < p``.
    """
    x = np.asarray(points, dtype=float)
    if x.ndim != 1:
        raise ValueError("points must be 1D")
    p = int(x.size)
    if not 0 <= deriv < p:
        raise ValueError(f"need 0 <= deriv < {p}, got deriv={deriv}")

    d = x - float(x_eval)
    scale = float(np.max(np.abs(d)))
    if scale == 0.0:
        raise ValueError("points must not all coincide with x_eval")
    d = d / scale

    m = np.arange(p)
    factorials = np.array([math.factorial(int(k)) for k in m], dtype=float)
    A = d[None, :] ** m[:, None] / factorials[:, None]
    rhs = np.zeros(p, dtype=float)
    rhs[deriv] = 1.0

    w = np.linalg.solve(A, rhs)
    return w / scale**deriv


def d1_central_nonuniform_coeffs(hm, hp):
    """Central 3-point coefficients for the first derivative on a nonuniform grid.

    Given grid spacings:
        hm = x_i - x_{i-1}
        hp = x_{i+1} - x_i

    returns coefficients (dl, dd, du) such that:
        y'(x_i) ≈ dl*y_{i-1} + dd*y_i + du*y_{i+1}

    This stencil is second-order accurate for smooth functions on nonuniform grids.

    Parameters
    ----------
    hm, hp:
        Left/right spacings. May be scalars or arrays (vectorized).

    Returns
    -------
    (dl, dd, du):
        Coefficients with the same shape as `hm`/`hp`.
    """
    denom = hm * hp * (hm + hp)
    dl = -hp * hp / denom
    dd = (hp * hp - hm * hm) / denom
    du = hm * hm / denom
    return dl, dd, du


def d2_central_nonuniform_coeffs(hm, hp):
    """Central 3-point coefficients for the second derivative on a nonuniform grid.

    Same conventions as :func:`d1_central_nonuniform_coeffs`. Exact for
    quadratics; first-order accurate where ``hm != hp``, second-order on
    smoothly varying grids.
    """
    dl = 2.0 / (hm * (hm + hp))
    dd = -2.0 / (hm * hp)
    du = 2.0 / (hp * (hm + hp))
    return dl, dd, du
