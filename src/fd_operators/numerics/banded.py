# src/fd_operators/numerics/banded.py
"""Band-diagonal operator storage.

A band-diagonal operator of order ``n`` with half-width ``k`` is stored as

* ``band``: shape ``(n, 2k+1)`` in row-window layout, ``band[i, k+o] == A[i, i+o]``.
  Rows that belong to a boundary block are kept at zero here.
* ``top``: the first ``nb`` rows, stored densely over columns ``0 .. c-1``.
* ``bottom``: the last ``nb`` rows, stored densely over columns ``n-c .. n-1``.

with ``nb = min(k, n // 2)`` boundary rows per side and ``c = min(E, n)``
boundary columns (``E`` is ``boundary_elements``). The boundary blocks hold
one-sided stencils that reach further into the domain than the interior band,
e.g. the 4-point second-derivative stencil at the first row of a
:class:`TriDiagonal`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar, Protocol, Self, TypeAlias, cast, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import DimensionMismatch

__all__ = [
    "BandedOperator",
    "BandDiagonal",
    "TriDiagonal",
    "PentaDiagonal",
    "RowStencil",
]

# (first column, weights) of one matrix row
RowStencil: TypeAlias = tuple[int, NDArray[np.floating]]


@runtime_checkable
class BandedOperator(Protocol):
    """Anything with an order and a (batched) matrix-vector action."""

    @property
    def order(self) -> int: ...

    def action(self, u: ArrayLike, axis: int = -1) -> NDArray[np.floating]: ...


def _place(target: NDArray[np.floating], offset: int, weights: NDArray[np.floating]) -> None:
    """Write ``weights`` into ``target`` starting at ``offset``.

    Weights that fall outside ``target`` must be exactly zero.
    """
    m = int(target.shape[0])
    for j, w in enumerate(weights):
        pos = offset + j
        if 0 <= pos < m:
            target[pos] = w
        elif w != 0.0:
            raise ValueError(
                f"weight at relative position {pos} does not fit storage of width {m}"
            )


@dataclass(frozen=True, slots=True, eq=False)
class BandDiagonal:
    band: NDArray[np.floating]
    top: NDArray[np.floating]
    bottom: NDArray[np.floating]

    half_width: ClassVar[int] = 0
    boundary_elements: ClassVar[int] = 1

    # ---------------------------
    # Layout
    # ---------------------------

    @classmethod
    def layout(cls, n: int) -> tuple[int, int]:
        """Return ``(nb, c)``: boundary rows per side and boundary block width."""
        n = int(n)
        if n < 0:
            raise ValueError("order must be >= 0")
        return min(cls.half_width, n // 2), min(cls.boundary_elements, n)

    @property
    def width(self) -> int:
        return 2 * self.half_width + 1

    @property
    def order(self) -> int:
        return int(np.asarray(self.band).shape[0])

    def check(self) -> int:
        """Validate internal shapes and return the order ``n``.

        ``n == 0`` is valid: every array is then empty.
        """
        band = np.asarray(self.band)
        if band.ndim != 2 or band.shape[1] != self.width:
            raise ValueError(f"band must have shape (n, {self.width}), got {band.shape}")
        n = int(band.shape[0])
        nb, c = self.layout(n)
        top = np.asarray(self.top)
        bottom = np.asarray(self.bottom)
        if top.shape != (nb, c) or bottom.shape != (nb, c):
            raise ValueError(
                f"top/bottom must have shape {(nb, c)}, got {top.shape}, {bottom.shape}"
            )
        if nb and (np.any(band[:nb]) or np.any(band[n - nb :])):
            raise ValueError("band rows covered by boundary blocks must be zero")
        return n

    # ---------------------------
    # Construction
    # ---------------------------

    @classmethod
    def zeros(cls, n: int) -> Self:
        nb, c = cls.layout(n)
        return cls(
            band=np.zeros((int(n), 2 * cls.half_width + 1), dtype=float),
            top=np.zeros((nb, c), dtype=float),
            bottom=np.zeros((nb, c), dtype=float),
        )

    @classmethod
    def from_rows(cls, n: int, rows: Sequence[RowStencil]) -> Self:
        """Build an operator from one ``(start, weights)`` stencil per row.

        Raises ``ValueError`` if a nonzero weight falls outside the storage
        available for its row.
        """
        n = int(n)
        if len(rows) != n:
            raise DimensionMismatch(f"expected {n} rows, got {len(rows)}")
        out = cls.zeros(n)
        k = cls.half_width
        nb, c = cls.layout(n)

        for i, (start, weights) in enumerate(rows):
            w = np.asarray(weights, dtype=float)
            start = int(start)
            if w.ndim != 1:
                raise ValueError("row weights must be 1D")
            if start < 0 or start + w.size > n:
                raise ValueError(f"row {i} stencil exceeds columns [0, {n})")
            if i < nb:
                _place(out.top[i], start, w)
            elif i >= n - nb:
                _place(out.bottom[i - (n - nb)], start - (n - c), w)
            else:
                _place(out.band[i], start - (i - k), w)
        return out

    @classmethod
    def from_band(
        cls,
        band: ArrayLike,
        top: Sequence[RowStencil],
        bottom: Sequence[RowStencil],
    ) -> Self:
        """Build from interior band rows plus explicit boundary rows.

        ``band`` has shape ``(n, 2k+1)``; its first and last ``nb`` rows are
        ignored and replaced by ``top`` (rows ``0 .. nb-1``) and ``bottom``
        (rows ``n-nb .. n-1``), given as ``(start, weights)`` stencils.
        """
        b = np.asarray(band, dtype=float)
        n = int(b.shape[0])
        if b.shape != (n, 2 * cls.half_width + 1):
            raise ValueError(f"band must have shape (n, {2 * cls.half_width + 1})")
        nb, c = cls.layout(n)
        if len(top) != nb or len(bottom) != nb:
            raise ValueError(f"expected {nb} boundary rows per side")

        out = cls.zeros(n)
        out.band[nb : n - nb] = b[nb : n - nb]
        for r, (start, weights) in enumerate(top):
            _place(out.top[r], int(start), np.asarray(weights, dtype=float))
        for r, (start, weights) in enumerate(bottom):
            _place(out.bottom[r], int(start) - (n - c), np.asarray(weights, dtype=float))
        return out

    @classmethod
    def identity(cls, n: int) -> Self:
        return cls.from_rows(n, [(i, np.ones(1)) for i in range(int(n))])

    def copy(self) -> Self:
        return type(self)(
            band=np.array(self.band, dtype=float),
            top=np.array(self.top, dtype=float),
            bottom=np.array(self.bottom, dtype=float),
        )

    # ---------------------------
    # Access
    # ---------------------------

    def row(self, i: int) -> RowStencil:
        """Return ``(start, weights)`` for row ``i`` (negative indices allowed)."""
        n = self.check()
        i = int(i)
        if i < 0:
            i += n
        if not 0 <= i < n:
            raise IndexError(f"row {i} out of range for order {n}")
        nb, c = self.layout(n)
        if i < nb:
            return 0, np.array(self.top[i], dtype=float)
        if i >= n - nb:
            return n - c, np.array(self.bottom[i - (n - nb)], dtype=float)

        k = self.half_width
        start = max(0, i - k)
        stop = min(n - 1, i + k)
        lo = start - (i - k)
        return start, np.array(self.band[i, lo : lo + stop - start + 1], dtype=float)

    def diagonal(self, offset: int = 0) -> NDArray[np.floating]:
        """Return the matrix diagonal at ``offset`` (boundary rows included).

        Entry ``m`` of the result is ``A[r, r + offset]`` with
        ``r = m + max(0, -offset)``.
        """
        n = self.check()
        o = int(offset)
        if n == 0 or abs(o) >= n:
            return np.zeros(0, dtype=float)

        r0 = max(0, -o)
        rows = np.arange(r0, n - max(0, o))
        out = np.zeros(rows.size, dtype=float)

        k = self.half_width
        if abs(o) <= k:
            out[:] = np.asarray(self.band)[rows, k + o]

        nb, c = self.layout(n)
        for r in range(nb):
            col = r + o
            if r >= r0 and 0 <= col < c:
                out[r - r0] = self.top[r, col]
            i = n - nb + r
            j = i + o - (n - c)
            if i - r0 < rows.size and i >= r0 and 0 <= j < c:
                out[i - r0] = self.bottom[r, j]
        return out

    # ---------------------------
    # Action / export
    # ---------------------------

    def action(self, u: ArrayLike, axis: int = -1) -> NDArray[np.floating]:
        """Apply the operator along ``axis`` of ``u`` (batched matrix-vector product).

        Raises
        ------
        DimensionMismatch
            If ``u.shape[axis]`` differs from the operator order.
        """
        n = self.check()
        arr = np.asarray(u, dtype=float)
        if arr.ndim == 0:
            raise DimensionMismatch("u must have at least one dimension")
        if axis < 0:
            axis = arr.ndim + axis
        if axis < 0 or axis >= arr.ndim:
            raise ValueError(f"axis {axis} out of bounds for u.ndim={arr.ndim}")
        if arr.shape[axis] != n:
            raise DimensionMismatch(
                f"u.shape[{axis}] must match operator order {n}, got {arr.shape[axis]}"
            )

        um = np.moveaxis(arr, axis, -1)
        out = np.zeros_like(um)
        band = np.asarray(self.band)
        k = self.half_width

        # fixed summation order: offsets -k .. k, then boundary blocks
        for j in range(2 * k + 1):
            o = j - k
            if abs(o) >= n:
                continue
            if o >= 0:
                out[..., : n - o] += band[: n - o, j] * um[..., o:]
            else:
                out[..., -o:] += band[-o:, j] * um[..., : n + o]

        nb, c = self.layout(n)
        if nb:
            out[..., :nb] += um[..., :c] @ np.asarray(self.top).T
            out[..., n - nb :] += um[..., n - c :] @ np.asarray(self.bottom).T

        return cast(NDArray[np.floating], np.moveaxis(out, -1, axis))

    def to_dense(self) -> NDArray[np.floating]:
        n = self.check()
        A = np.zeros((n, n), dtype=float)
        for i in range(n):
            start, w = self.row(i)
            A[i, start : start + w.size] = w
        return A

    def to_banded(self) -> tuple[NDArray[np.floating], tuple[int, int]]:
        """Export to LAPACK band storage.

        Returns ``(ab, (l, u))`` such that ``ab[u + i - j, j] == A[i, j]``,
        which is the layout ``scipy.linalg.solve_banded((l, u), ab, b)``
        expects. ``l``/``u`` are the actual lower/upper bandwidths, so the
        wider boundary rows may widen them beyond ``half_width``.
        """
        n = self.check()
        rows = [self.row(i) for i in range(n)]
        lower = 0
        upper = 0
        for i, (start, w) in enumerate(rows):
            nz = np.flatnonzero(w)
            if nz.size == 0:
                continue
            lower = max(lower, i - (start + int(nz[0])))
            upper = max(upper, start + int(nz[-1]) - i)

        ab = np.zeros((lower + upper + 1, n), dtype=float)
        for i, (start, w) in enumerate(rows):
            for m, val in enumerate(w):
                j = start + m
                if val != 0.0:
                    ab[upper + i - j, j] = val
        return ab, (lower, upper)

    # ---------------------------
    # Algebra
    # ---------------------------

    def scale_rows(self, coef: ArrayLike) -> Self:
        """Return ``diag(coef) @ A``: row ``i`` multiplied by ``coef[i]``."""
        n = self.check()
        cvec = np.asarray(coef, dtype=float)
        if cvec.ndim == 0:
            cvec = np.full(n, float(cvec))
        if cvec.shape != (n,):
            raise DimensionMismatch(f"coef must have shape {(n,)}, got {cvec.shape}")
        nb, _ = self.layout(n)
        return type(self)(
            band=np.asarray(self.band) * cvec[:, None],
            top=np.asarray(self.top) * cvec[:nb, None],
            bottom=np.asarray(self.bottom) * cvec[n - nb :, None],
        )

    def _promote(self, other: BandDiagonal) -> tuple[BandDiagonal, BandDiagonal]:
        n = self.check()
        if other.check() != n:
            raise DimensionMismatch(f"operator orders differ: {n} vs {other.order}")
        if type(self) is type(other):
            return self, other
        wide = type(self) if self.half_width >= other.half_width else type(other)
        return (
            wide.from_rows(n, [self.row(i) for i in range(n)]),
            wide.from_rows(n, [other.row(i) for i in range(n)]),
        )

    def __add__(self, other: object) -> BandDiagonal:
        if not isinstance(other, BandDiagonal):
            return NotImplemented
        a, b = self._promote(other)
        return type(a)(band=a.band + b.band, top=a.top + b.top, bottom=a.bottom + b.bottom)

    def __sub__(self, other: object) -> BandDiagonal:
        if not isinstance(other, BandDiagonal):
            return NotImplemented
        return self + (-1.0) * other

    def __mul__(self, scalar: object) -> Self:
        if not isinstance(scalar, (int, float, np.floating, np.integer)):
            return NotImplemented
        s = float(scalar)
        return type(self)(band=s * self.band, top=s * self.top, bottom=s * self.bottom)

    __rmul__ = __mul__

    def __neg__(self) -> Self:
        return self * -1.0


@dataclass(frozen=True, slots=True, eq=False)
class TriDiagonal(BandDiagonal):
    """Three bands (sub, main, super) plus one boundary row per side of up to 4 entries."""

    half_width: ClassVar[int] = 1
    boundary_elements: ClassVar[int] = 4

    def to_penta(self) -> PentaDiagonal:
        n = self.check()
        return PentaDiagonal.from_rows(n, [self.row(i) for i in range(n)])


@dataclass(frozen=True, slots=True, eq=False)
class PentaDiagonal(BandDiagonal):
    """Five bands plus two boundary rows per side of up to 6 entries."""

    half_width: ClassVar[int] = 2
    boundary_elements: ClassVar[int] = 6
