"""Pytest helpers for the fd_operators library."""

from __future__ import annotations

import numpy as np
import pytest


def _make_strictly_increasing_grid(rng: np.random.Generator, n: int) -> np.ndarray:
    """Make a strictly increasing 1D grid with mildly irregular spacing."""
    if n < 2:
        raise ValueError("n must be >= 2")
    steps = rng.uniform(0.05, 0.35, size=n - 1)
    x = np.concatenate(([0.0], np.cumsum(steps)))
    return x.astype(float)


@pytest.fixture
def rng():
    """Seeded RNG factory."""

    def _rng(seed: int) -> np.random.Generator:
        return np.random.default_rng(seed)

    return _rng


@pytest.fixture
def make_grid():
    """Factory for irregular grids: make_grid(seed, n)."""

    def _make(seed: int, n: int) -> np.ndarray:
        return _make_strictly_increasing_grid(np.random.default_rng(seed), n)

    return _make


@pytest.fixture
def uniform_grid() -> np.ndarray:
    return np.linspace(-1.0, 2.0, 31)


@pytest.fixture
def nonuniform_grid(make_grid) -> np.ndarray:
    return make_grid(2025, 27)
