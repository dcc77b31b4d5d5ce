# src/fd_operators/numerics/grids.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import ArrayLike, NDArray

__all__ = [
    "SpacingPolicy",
    "GridConfig",
    "uniform",
    "exponential",
    "hyperbolic",
    "build_x_grid",
    "is_uniform",
]


class SpacingPolicy(str, Enum):
    UNIFORM = "uniform"
    EXPONENTIAL = "exponential"
    HYPERBOLIC = "hyperbolic"


@dataclass(frozen=True, slots=True)
class GridConfig:
    Nx: int
    x_lb: float
    x_ub: float
    spacing: SpacingPolicy = SpacingPolicy.UNIFORM
    # HYPERBOLIC: concentration point (defaults to the midpoint)
    x_center: float | None = None
    # EXPONENTIAL: > 0 shifts points towards x_lb, < 0 towards x_ub.
    # HYPERBOLIC: width of the concentration region relative to (x_ub - x_lb).
    scaling: float | None = None

    def validate(self) -> None:
        if self.Nx < 2:
            raise ValueError("Nx must be >= 2")
        if not (self.x_lb < self.x_ub):
            raise ValueError("Need x_lb < x_ub")

        if self.spacing == SpacingPolicy.EXPONENTIAL:
            if self.scaling is not None and self.scaling == 0.0:
                raise ValueError("exponential scaling must be nonzero")
        if self.spacing == SpacingPolicy.HYPERBOLIC:
            if self.x_center is not None and not (
                self.x_lb <= self.x_center <= self.x_ub
            ):
                raise ValueError("x_center must be within [x_lb, x_ub]")
            if self.scaling is not None and self.scaling <= 0.0:
                raise ValueError("hyperbolic scaling must be > 0")


def uniform(x_min: float, x_max: float, n_points: int) -> NDArray[np.floating]:
    """Equally spaced points ``x_min + i * dx``."""
    return np.linspace(float(x_min), float(x_max), int(n_points), dtype=float)


def exponential(
    x_min: float, x_max: float, n_points: int, scaling: float = 1.0
) -> NDArray[np.floating]:
    """Exponentially stretched grid (White 2013).

    ``x_i = (x_min - eta) + eta * exp(scaling * z_i)`` with ``z_i = i / (n-1)``
    and ``eta = (x_max - x_min) / (exp(scaling) - 1)``. Positive scaling
    concentrates points near ``x_min``.
    """
    s = float(scaling)
    if s == 0.0:
        raise ValueError("scaling must be nonzero")
    eta = (x_max - x_min) / (np.exp(s) - 1.0)
    z = np.linspace(0.0, 1.0, int(n_points), dtype=float)
    x = (x_min - eta) + eta * np.exp(s * z)
    x[0] = x_min
    x[-1] = x_max
    return x


def hyperbolic(
    x_min: float,
    x_max: float,
    n_points: int,
    x_center: float | None = None,
    scaling: float = 0.1,
) -> NDArray[np.floating]:
    """Hyperbolic-sine grid concentrated around ``x_center`` (White 2013).

    ``x_i = x_center + beta * sinh(gamma * z_i + delta)`` with
    ``beta = scaling * (x_max - x_min)``; smaller ``scaling`` gives stronger
    concentration.
    """
    xc = 0.5 * (x_min + x_max) if x_center is None else float(x_center)
    if scaling <= 0.0:
        raise ValueError("scaling must be > 0")
    beta = scaling * (x_max - x_min)
    delta = np.arcsinh((x_min - xc) / beta)
    gamma = np.arcsinh((x_max - xc) / beta) - delta
    z = np.linspace(0.0, 1.0, int(n_points), dtype=float)
    x = xc + beta * np.sinh(gamma * z + delta)
    x[0] = x_min
    x[-1] = x_max
    return x


def _build_x_grid_validated(cfg: GridConfig) -> NDArray[np.floating]:
    if cfg.spacing == SpacingPolicy.UNIFORM:
        x = uniform(cfg.x_lb, cfg.x_ub, cfg.Nx)
    elif cfg.spacing == SpacingPolicy.EXPONENTIAL:
        scaling = 1.0 if cfg.scaling is None else cfg.scaling
        x = exponential(cfg.x_lb, cfg.x_ub, cfg.Nx, scaling=scaling)
    else:
        scaling = 0.1 if cfg.scaling is None else cfg.scaling
        x = hyperbolic(cfg.x_lb, cfg.x_ub, cfg.Nx, x_center=cfg.x_center, scaling=scaling)

    if not np.all(np.diff(x) > 0):
        raise ValueError("x grid must be strictly increasing")
    return x


def build_x_grid(cfg: GridConfig) -> NDArray[np.floating]:
    cfg.validate()
    return _build_x_grid_validated(cfg)


def is_uniform(x: ArrayLike, rtol: float = 1e-10) -> bool:
    """True if all spacings equal the mean spacing within ``rtol``."""
    arr = np.asarray(x, dtype=float)
    if arr.ndim != 1 or arr.size < 2:
        return True
    dx = np.diff(arr)
    h = (arr[-1] - arr[0]) / (arr.size - 1)
    return bool(np.all(np.abs(dx - h) <= rtol * abs(h)))
