"""
fd_operators

Finite-difference derivative operators on 1D grids, stored as band-diagonal
matrices, plus the Black-Scholes generator coefficients they are combined
with. The top level re-exports the everyday entry points:

    from fd_operators import d1dx1, d2dx2, MixedDerivative, generator_prefactors
"""

# Re-export operator entrypoints (nice public names)
from .config import GridRegularity, OperatorConfig, SchemeCode
from .exceptions import (
    DimensionMismatch,
    FDOperatorError,
    InvalidGridError,
    InvalidGridSize,
    UnsupportedSchemeError,
)
from .models.black_scholes.pde import bs_generator, generator_prefactors
from .numerics.banded import BandDiagonal, PentaDiagonal, TriDiagonal
from .numerics.fd import MixedDerivative, build_operator, d1dx1, d2dx2

__all__ = [
    # Config
    "GridRegularity",
    "OperatorConfig",
    "SchemeCode",
    # Errors
    "FDOperatorError",
    "InvalidGridError",
    "InvalidGridSize",
    "DimensionMismatch",
    "UnsupportedSchemeError",
    # Operators
    "BandDiagonal",
    "TriDiagonal",
    "PentaDiagonal",
    "d1dx1",
    "d2dx2",
    "build_operator",
    "MixedDerivative",
    # Black-Scholes generator
    "generator_prefactors",
    "bs_generator",
]
