from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class GridRegularity(str, Enum):
    AUTO = "auto"  # detect from the grid spacing
    UNIFORM = "uniform"
    NONUNIFORM = "nonuniform"


class SchemeCode(str, Enum):
    """``cXbY``: interior order X, boundary order Y (``b0``: zero-curvature row)."""

    C2B0 = "c2b0"
    C2B1 = "c2b1"
    C2B2 = "c2b2"
    C4B0 = "c4b0"
    C4B2 = "c4b2"
    C4B4 = "c4b4"

    @property
    def interior_order(self) -> int:
        return int(self.value[1])

    @property
    def boundary_order(self) -> int:
        return int(self.value[3])


@dataclass(frozen=True, slots=True)
class OperatorConfig:
    derivative: int = 1
    scheme: SchemeCode | str = SchemeCode.C2B2
    regularity: GridRegularity | str = GridRegularity.AUTO
    uniform_rtol: float = 1e-10

    def __post_init__(self) -> None:
        if self.derivative not in (1, 2):
            raise ValueError("derivative must be 1 or 2")
        SchemeCode(self.scheme)
        GridRegularity(self.regularity)
        if self.uniform_rtol <= 0:
            raise ValueError("uniform_rtol must be > 0")

    @property
    def scheme_code(self) -> SchemeCode:
        return SchemeCode(self.scheme)

    @property
    def grid_regularity(self) -> GridRegularity:
        return GridRegularity(self.regularity)


@dataclass(frozen=True, slots=True)
class NumericsConfig:
    abs_tol: float = 1e-10
    step_tol: float = 1e-12
    max_iter: int = 100
    min_vega: float = 1e-10

    def __post_init__(self) -> None:
        if self.abs_tol <= 0 or self.step_tol <= 0:
            raise ValueError("abs_tol and step_tol must be > 0")
        if self.max_iter <= 0:
            raise ValueError("max_iter must be > 0")
        if self.min_vega <= 0:
            raise ValueError("min_vega must be > 0")


@dataclass(frozen=True, slots=True)
class ImpliedVolConfig:
    sigma0: float = 0.2
    sigma_lo: float = 1e-8
    sigma_hi: float = 5.0
    numerics: NumericsConfig = field(default_factory=NumericsConfig)

    def __post_init__(self) -> None:
        if self.sigma_lo <= 0 or self.sigma_hi <= 0:
            raise ValueError("sigma bounds must be > 0")
        if self.sigma_lo >= self.sigma_hi:
            raise ValueError("sigma_lo must be < sigma_hi")
        if not (self.sigma_lo <= self.sigma0 <= self.sigma_hi):
            raise ValueError("sigma0 must lie within [sigma_lo, sigma_hi]")
