"""Finite-difference derivative operators on 1D grids.

Builders are grouped by derivative and grid regularity:

    from fd_operators.numerics.fd import d1dx1, d2dx2
    D1 = d1dx1.uniform.c4b4(x)
    D2 = d2dx2.nonuniform.c2b0(x)

``build_operator`` picks the uniform or non-uniform builder from the grid
spacing. Available codes:

| operator | uniform                            | non-uniform      |
|----------|------------------------------------|------------------|
| d1dx1    | c2b1 c2b2 c4b2 c4b4                | c2b1 c2b2 c4b2   |
| d2dx2    | c2b0 c2b1 c2b2 c4b0 c4b2 c4b4      | c2b0 c2b1 c4b0   |

``c2*`` codes return a :class:`TriDiagonal`, ``c4*`` codes a
:class:`PentaDiagonal`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeAlias

import numpy as np
from numpy.typing import ArrayLike

from ...config import GridRegularity, OperatorConfig, SchemeCode
from ...exceptions import UnsupportedSchemeError
from ..banded import BandDiagonal
from ..grids import is_uniform
from . import d1dx1, d2dx2
from .mixed import MixedDerivative

logger = logging.getLogger(__name__)

Builder: TypeAlias = Callable[[ArrayLike], BandDiagonal]


def _registry() -> dict[tuple[int, GridRegularity], dict[SchemeCode, Builder]]:
    table: dict[tuple[int, GridRegularity], dict[SchemeCode, Builder]] = {}
    for deriv, mod in ((1, d1dx1), (2, d2dx2)):
        for reg, sub in (
            (GridRegularity.UNIFORM, mod.uniform),
            (GridRegularity.NONUNIFORM, mod.nonuniform),
        ):
            table[(deriv, reg)] = {SchemeCode(name): getattr(sub, name) for name in sub.__all__}
    return table


_BUILDERS = _registry()


def available_schemes(
    derivative: int, regularity: GridRegularity | str
) -> tuple[SchemeCode, ...]:
    reg = GridRegularity(regularity)
    if reg == GridRegularity.AUTO:
        raise ValueError("regularity must be UNIFORM or NONUNIFORM")
    try:
        return tuple(_BUILDERS[(int(derivative), reg)])
    except KeyError:
        raise ValueError("derivative must be 1 or 2") from None


def build_operator(grid: ArrayLike, cfg: OperatorConfig) -> BandDiagonal:
    """Build the operator described by ``cfg`` on ``grid``.

    Raises
    ------
    UnsupportedSchemeError
        If the scheme code is not offered for that derivative and regularity.
    InvalidGridSize
        If the grid is narrower than the stencils need.
    """
    x = np.asarray(grid, dtype=float)
    reg = cfg.grid_regularity
    if reg == GridRegularity.AUTO:
        reg = (
            GridRegularity.UNIFORM
            if is_uniform(x, rtol=cfg.uniform_rtol)
            else GridRegularity.NONUNIFORM
        )

    code = cfg.scheme_code
    builders = _BUILDERS[(cfg.derivative, reg)]
    if code not in builders:
        raise UnsupportedSchemeError(
            f"d{cfg.derivative} operator has no {code.value} variant on a "
            f"{reg.value} grid; available: {[c.value for c in builders]}"
        )

    logger.debug(
        "build_operator: derivative=%d scheme=%s regularity=%s n=%d",
        cfg.derivative,
        code.value,
        reg.value,
        x.size,
    )
    return builders[code](x)


__all__ = [
    "d1dx1",
    "d2dx2",
    "MixedDerivative",
    "available_schemes",
    "build_operator",
]
