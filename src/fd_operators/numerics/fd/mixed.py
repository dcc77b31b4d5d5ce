"""Mixed second derivative d2/dxdy on a tensor-product grid.

Field layout: a 2D field ``f[i, j]`` with ``i`` the x-index (``n_x`` points)
and ``j`` the y-index (``n_y`` points) is flattened in C order, so flat index
``i * n_y + j``. ``d2dxdy`` differentiates along y first (the contiguous
axis), then along x, then multiplies by the prefactors.

A composer instance is not safe for concurrent ``set_prefactors`` and
``d2dxdy`` calls; builders and evaluation are otherwise free of shared state.
"""

from __future__ import annotations

import logging
from typing import overload

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ...exceptions import DimensionMismatch
from ..banded import BandedOperator, BandDiagonal

logger = logging.getLogger(__name__)

__all__ = ["MixedDerivative"]


def _own(op: BandedOperator) -> BandedOperator:
    # band-diagonal operators are held by value
    if isinstance(op, BandDiagonal):
        return op.copy()
    return op


class MixedDerivative:
    """Tensor product of two 1D first-derivative operators with a coefficient field.

    Parameters
    ----------
    d1dx1:
        Operator acting along x, order ``n_x``.
    d1dy1:
        Operator acting along y, order ``n_y``.

    Both only need an ``order`` and an ``action(u, axis)``; any
    :class:`~fd_operators.numerics.banded.BandedOperator` works, so tri- and
    penta-diagonal operators can be mixed freely. Prefactors start at 1.0.
    """

    __slots__ = ("_d1dx1", "_d1dy1", "_prefactors")

    def __init__(self, d1dx1: BandedOperator, d1dy1: BandedOperator) -> None:
        if not isinstance(d1dx1, BandedOperator) or not isinstance(d1dy1, BandedOperator):
            raise TypeError("d1dx1 and d1dy1 must provide order and action(u, axis)")
        self._d1dx1 = _own(d1dx1)
        self._d1dy1 = _own(d1dy1)
        self._prefactors = np.ones(self.n_x * self.n_y, dtype=float)

    @property
    def d1dx1(self) -> BandedOperator:
        return self._d1dx1

    @property
    def d1dy1(self) -> BandedOperator:
        return self._d1dy1

    @property
    def n_x(self) -> int:
        return int(self._d1dx1.order)

    @property
    def n_y(self) -> int:
        return int(self._d1dy1.order)

    @property
    def shape(self) -> tuple[int, int]:
        return self.n_x, self.n_y

    @property
    def prefactors(self) -> NDArray[np.floating]:
        """Copy of the flat prefactor field (length ``n_x * n_y``)."""
        return self._prefactors.copy()

    # ---------------------------
    # Prefactors
    # ---------------------------

    @overload
    def set_prefactors(self, scalar: float, /) -> None: ...

    @overload
    def set_prefactors(self, factors: ArrayLike, /) -> None: ...

    @overload
    def set_prefactors(self, coef_x: ArrayLike, coef_y: ArrayLike, /) -> None: ...

    def set_prefactors(self, *args: ArrayLike) -> None:
        """Set the coefficient field.

        - ``set_prefactors(scalar)``: every coefficient equals ``scalar``.
        - ``set_prefactors(coef_x, coef_y)``: separable field,
          ``coef[i * n_y + j] = coef_x[i] * coef_y[j]``.
        - ``set_prefactors(factors)``: full field of length ``n_x * n_y``
          (a ``(n_x, n_y)`` array is accepted too), copied verbatim.

        Raises
        ------
        DimensionMismatch
            If a sequence length does not match the axis order or the product.
        """
        if len(args) == 2:
            self.set_separable_prefactors(args[0], args[1])
            return
        if len(args) != 1:
            raise TypeError("set_prefactors takes a scalar, one field, or two axis vectors")

        value = np.asarray(args[0], dtype=float)
        if value.ndim == 0:
            self.set_scalar_prefactors(float(value))
        else:
            self.set_full_prefactors(value)

    def set_scalar_prefactors(self, scalar: float) -> None:
        self._prefactors = np.full(self.n_x * self.n_y, float(scalar), dtype=float)

    def set_separable_prefactors(self, coef_x: ArrayLike, coef_y: ArrayLike) -> None:
        cx = np.asarray(coef_x, dtype=float)
        cy = np.asarray(coef_y, dtype=float)
        if cx.shape != (self.n_x,):
            raise DimensionMismatch(f"coef_x must have shape {(self.n_x,)}, got {cx.shape}")
        if cy.shape != (self.n_y,):
            raise DimensionMismatch(f"coef_y must have shape {(self.n_y,)}, got {cy.shape}")
        self._prefactors = np.outer(cx, cy).ravel()

    def set_full_prefactors(self, factors: ArrayLike) -> None:
        f = np.asarray(factors, dtype=float)
        size = self.n_x * self.n_y
        if f.shape not in {(size,), (self.n_x, self.n_y)}:
            raise DimensionMismatch(
                f"prefactors must have shape {(size,)} or {self.shape}, got {f.shape}"
            )
        self._prefactors = np.array(f, dtype=float).ravel()

    # ---------------------------
    # Evaluation
    # ---------------------------

    def d2dxdy(self, func: ArrayLike) -> NDArray[np.floating]:
        """Approximate ``prefactor * d2f/dxdy``.

        ``func`` is the flat field of length ``n_x * n_y`` (or a ``(n_x, n_y)``
        array); the result has the same shape as ``func``.
        """
        f = np.asarray(func, dtype=float)
        n_x, n_y = self.shape
        if f.shape not in {(n_x * n_y,), (n_x, n_y)}:
            raise DimensionMismatch(
                f"func must have shape {(n_x * n_y,)} or {(n_x, n_y)}, got {f.shape}"
            )

        field = f.reshape(n_x, n_y)
        # y first (axis 1, contiguous), then x (axis 0)
        field = self._d1dy1.action(field, axis=1)
        field = self._d1dx1.action(field, axis=0)
        field = field * self._prefactors.reshape(n_x, n_y)

        logger.debug("d2dxdy evaluated on (%d, %d) field", n_x, n_y)
        return field.reshape(f.shape)
