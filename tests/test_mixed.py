# tests/test_mixed.py
import numpy as np
import pytest

from fd_operators.exceptions import DimensionMismatch
from fd_operators.numerics.banded import PentaDiagonal, TriDiagonal
from fd_operators.numerics.fd import MixedDerivative, d1dx1


@pytest.fixture
def grids():
    x = np.linspace(0.0, 1.0, 9)
    y = np.linspace(-1.0, 1.0, 13)
    return x, y


def _field(x: np.ndarray, y: np.ndarray, fn) -> np.ndarray:
    X, Y = np.meshgrid(x, y, indexing="ij")
    return fn(X, Y).ravel()


def test_shape_and_default_prefactors(grids) -> None:
    x, y = grids
    M = MixedDerivative(d1dx1.uniform.c2b2(x), d1dx1.uniform.c2b2(y))
    assert M.shape == (9, 13)
    assert (M.n_x, M.n_y) == (9, 13)
    np.testing.assert_array_equal(M.prefactors, np.ones(9 * 13))


def test_flat_layout_is_x_major(grids) -> None:
    """Flat index ``i * n_y + j``: f = x depends only on the outer index."""
    x, y = grids
    M = MixedDerivative(d1dx1.uniform.c2b2(x), d1dx1.uniform.c2b2(y))
    f = _field(x, y, lambda X, Y: X)
    assert f[1 * 13 + 0] == pytest.approx(x[1])
    # no y-dependence, so the mixed derivative vanishes
    np.testing.assert_allclose(M.d2dxdy(f), 0.0, atol=1e-12)


def test_exact_on_bilinear_products(grids) -> None:
    x, y = grids
    M = MixedDerivative(d1dx1.uniform.c2b1(x), d1dx1.uniform.c2b1(y))
    f = _field(x, y, lambda X, Y: (2.0 * X - 1.0) * (3.0 * Y + 0.5))
    np.testing.assert_allclose(M.d2dxdy(f), 6.0, atol=1e-10)


def test_exact_on_quadratic_products_with_c2b2(grids) -> None:
    x, y = grids
    M = MixedDerivative(d1dx1.uniform.c2b2(x), d1dx1.uniform.c2b2(y))
    f = _field(x, y, lambda X, Y: X**2 * Y**2)
    expected = _field(x, y, lambda X, Y: 4.0 * X * Y)
    np.testing.assert_allclose(M.d2dxdy(f), expected, atol=1e-10)


def test_matches_dense_tensor_product() -> None:
    rng = np.random.default_rng(77)
    x = np.cumsum(rng.uniform(0.1, 0.3, 11))
    y = np.linspace(0.0, 1.0, 7)
    Dx = d1dx1.nonuniform.c2b2(x)
    Dy = d1dx1.uniform.c4b4(y)
    M = MixedDerivative(Dx, Dy)

    P = rng.normal(size=(11, 7))
    M.set_prefactors(P)
    F = rng.normal(size=(11, 7))

    expected = (Dx.to_dense() @ F @ Dy.to_dense().T) * P
    np.testing.assert_allclose(M.d2dxdy(F.ravel()), expected.ravel(), rtol=1e-10, atol=1e-10)
    # a 2D field keeps its shape
    np.testing.assert_allclose(M.d2dxdy(F), expected, rtol=1e-10, atol=1e-10)


def test_tri_and_penta_operators_mix(grids) -> None:
    x, y = grids
    Dx = d1dx1.uniform.c2b2(x)
    Dy = d1dx1.uniform.c4b2(y)
    assert isinstance(Dx, TriDiagonal) and isinstance(Dy, PentaDiagonal)
    M = MixedDerivative(Dx, Dy)
    f = _field(x, y, lambda X, Y: X * Y**2)
    expected = _field(x, y, lambda X, Y: 2.0 * Y)
    np.testing.assert_allclose(M.d2dxdy(f), expected, atol=1e-10)


# --- prefactors --------------------------------------------------------------


def test_scalar_prefactor(grids) -> None:
    x, y = grids
    M = MixedDerivative(d1dx1.uniform.c2b1(x), d1dx1.uniform.c2b1(y))
    f = _field(x, y, lambda X, Y: X * Y)
    M.set_prefactors(0.25)
    np.testing.assert_allclose(M.d2dxdy(f), 0.25, atol=1e-12)


def test_separable_prefactors_layout(grids) -> None:
    x, y = grids
    M = MixedDerivative(d1dx1.uniform.c2b1(x), d1dx1.uniform.c2b1(y))
    cx = np.arange(1.0, 10.0)
    cy = np.linspace(0.5, 2.0, 13)
    M.set_prefactors(cx, cy)
    P = M.prefactors
    for i in (0, 4, 8):
        for j in (0, 6, 12):
            assert P[i * 13 + j] == cx[i] * cy[j]


def test_separable_ones_equals_scalar_one(grids) -> None:
    x, y = grids
    M = MixedDerivative(d1dx1.uniform.c2b2(x), d1dx1.uniform.c2b2(y))
    f = _field(x, y, lambda X, Y: np.sin(X) * np.cos(Y))

    M.set_prefactors(np.ones(9), np.ones(13))
    a = M.d2dxdy(f)
    M.set_prefactors(1.0)
    b = M.d2dxdy(f)
    np.testing.assert_array_equal(a, b)


def test_full_prefactors_flat_and_2d_agree(grids) -> None:
    x, y = grids
    M = MixedDerivative(d1dx1.uniform.c2b2(x), d1dx1.uniform.c2b2(y))
    P = np.random.default_rng(3).normal(size=(9, 13))
    M.set_prefactors(P)
    flat = M.prefactors
    M.set_prefactors(P.ravel())
    np.testing.assert_array_equal(M.prefactors, flat)


def test_prefactors_are_copied(grids) -> None:
    x, y = grids
    M = MixedDerivative(d1dx1.uniform.c2b2(x), d1dx1.uniform.c2b2(y))
    P = np.full(9 * 13, 2.0)
    M.set_prefactors(P)
    P[:] = 5.0
    np.testing.assert_array_equal(M.prefactors, 2.0)

    out = M.prefactors
    out[:] = 7.0
    np.testing.assert_array_equal(M.prefactors, 2.0)


def test_operators_are_held_by_value(grids) -> None:
    x, y = grids
    Dx = d1dx1.uniform.c2b2(x)
    M = MixedDerivative(Dx, d1dx1.uniform.c2b2(y))
    f = _field(x, y, lambda X, Y: X * Y)
    before = M.d2dxdy(f)
    Dx.band[:] = 0.0
    np.testing.assert_array_equal(M.d2dxdy(f), before)


# --- errors ------------------------------------------------------------------


def test_dimension_mismatch(grids) -> None:
    x, y = grids
    M = MixedDerivative(d1dx1.uniform.c2b2(x), d1dx1.uniform.c2b2(y))
    with pytest.raises(DimensionMismatch):
        M.set_prefactors(np.ones(8), np.ones(13))
    with pytest.raises(DimensionMismatch):
        M.set_prefactors(np.ones(9), np.ones(12))
    with pytest.raises(DimensionMismatch):
        M.set_prefactors(np.ones(9 * 13 - 1))
    with pytest.raises(DimensionMismatch):
        M.d2dxdy(np.ones(9 * 13 - 1))
    with pytest.raises(DimensionMismatch):
        M.d2dxdy(np.ones((13, 9)))

    # a failed setter leaves the previous field in place
    np.testing.assert_array_equal(M.prefactors, 1.0)


def test_rejects_non_operators(grids) -> None:
    x, _ = grids
    with pytest.raises(TypeError):
        MixedDerivative(d1dx1.uniform.c2b2(x), np.eye(5))
