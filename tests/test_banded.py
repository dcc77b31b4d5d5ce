# tests/test_banded.py
import numpy as np
import pytest
from scipy.linalg import solve_banded

from fd_operators.exceptions import DimensionMismatch
from fd_operators.numerics.banded import (
    BandedOperator,
    PentaDiagonal,
    TriDiagonal,
)
from fd_operators.numerics.fd import d1dx1, d2dx2


def random_operator(rng: np.random.Generator, kind, n: int):
    """Random operator filling every stored band and boundary entry."""
    k = kind.half_width
    nb, c = kind.layout(n)
    rows = []
    for i in range(n):
        if i < nb:
            rows.append((0, rng.normal(size=c)))
        elif i >= n - nb:
            rows.append((n - c, rng.normal(size=c)))
        else:
            start = max(0, i - k)
            stop = min(n - 1, i + k)
            rows.append((start, rng.normal(size=stop - start + 1)))
    return kind.from_rows(n, rows)


# --- storage ----------------------------------------------------------------


@pytest.mark.parametrize("kind", [TriDiagonal, PentaDiagonal])
def test_zero_order_operator_is_empty(kind) -> None:
    A = kind.zeros(0)
    assert A.check() == 0
    assert A.order == 0
    assert A.to_dense().shape == (0, 0)
    assert A.action(np.zeros(0)).shape == (0,)


@pytest.mark.parametrize(
    ("kind", "n", "expected"),
    [
        (TriDiagonal, 10, (1, 4)),
        (TriDiagonal, 3, (1, 3)),
        (TriDiagonal, 1, (0, 1)),
        (PentaDiagonal, 10, (2, 6)),
        (PentaDiagonal, 5, (2, 5)),
    ],
)
def test_layout(kind, n: int, expected: tuple[int, int]) -> None:
    assert kind.layout(n) == expected


def test_operators_satisfy_protocol() -> None:
    assert isinstance(TriDiagonal.zeros(4), BandedOperator)
    assert isinstance(PentaDiagonal.zeros(6), BandedOperator)


def test_check_rejects_bad_shapes() -> None:
    A = TriDiagonal.zeros(6)
    bad = TriDiagonal(band=A.band, top=A.top[:, :-1], bottom=A.bottom)
    with pytest.raises(ValueError):
        bad.check()

    band = A.band.copy()
    band[0, 1] = 1.0  # row 0 belongs to the top block
    with pytest.raises(ValueError):
        TriDiagonal(band=band, top=A.top, bottom=A.bottom).check()


def test_from_rows_rejects_out_of_storage_weights() -> None:
    n = 8
    rows = [(max(0, i - 1), np.array([1.0, 1.0])) for i in range(n)]
    rows[4] = (1, np.array([1.0, 0.0, 0.0, 1.0]))  # reaches offset -3 on an interior row
    with pytest.raises(ValueError):
        TriDiagonal.from_rows(n, rows)


def test_from_rows_accepts_zero_padding() -> None:
    n = 8
    rows = [(i, np.array([2.0])) for i in range(n)]
    rows[4] = (1, np.array([0.0, 0.0, 0.0, 2.0, 0.0]))
    A = TriDiagonal.from_rows(n, rows)
    np.testing.assert_array_equal(A.to_dense(), 2.0 * np.eye(n))


# --- access -----------------------------------------------------------------


@pytest.mark.parametrize("kind", [TriDiagonal, PentaDiagonal])
@pytest.mark.parametrize("n", [2, 3, 6, 13])
def test_rows_and_diagonals_match_dense(kind, n: int) -> None:
    rng = np.random.default_rng(100 + n)
    A = random_operator(rng, kind, n)
    dense = A.to_dense()

    for i in range(n):
        start, w = A.row(i)
        expected = np.zeros(n)
        expected[start : start + w.size] = w
        np.testing.assert_array_equal(dense[i], expected)

    for offset in range(-(n - 1), n):
        np.testing.assert_array_equal(A.diagonal(offset), np.diagonal(dense, offset))


def test_identity_is_identity() -> None:
    for kind in (TriDiagonal, PentaDiagonal):
        np.testing.assert_array_equal(kind.identity(9).to_dense(), np.eye(9))


# --- action -----------------------------------------------------------------


@pytest.mark.parametrize("kind", [TriDiagonal, PentaDiagonal])
@pytest.mark.parametrize("n", [1, 2, 5, 10, 50])
def test_action_matches_dense(kind, n: int) -> None:
    rng = np.random.default_rng(2024 + n)
    A = random_operator(rng, kind, n)
    u = rng.normal(size=n)
    np.testing.assert_allclose(A.action(u), A.to_dense() @ u, rtol=1e-12, atol=1e-12)


@pytest.mark.parametrize("kind", [TriDiagonal, PentaDiagonal])
def test_action_along_axis(kind) -> None:
    rng = np.random.default_rng(5)
    A = random_operator(rng, kind, 8)
    dense = A.to_dense()
    U = rng.normal(size=(8, 3, 4))

    got0 = A.action(U, axis=0)
    np.testing.assert_allclose(got0, np.einsum("ij,jab->iab", dense, U), atol=1e-12)

    V = np.moveaxis(U, 0, -1)
    got_last = A.action(V)
    np.testing.assert_allclose(got_last, np.einsum("ij,abj->abi", dense, V), atol=1e-12)


def test_action_rejects_wrong_length() -> None:
    A = TriDiagonal.identity(5)
    with pytest.raises(DimensionMismatch):
        A.action(np.ones(4))
    with pytest.raises(DimensionMismatch):
        A.action(np.ones((5, 3)), axis=1)


def test_inputs_not_modified() -> None:
    rng = np.random.default_rng(9)
    A = random_operator(rng, PentaDiagonal, 12)
    band0, top0, bottom0 = A.band.copy(), A.top.copy(), A.bottom.copy()
    u = rng.normal(size=12)
    u0 = u.copy()

    _ = A.action(u)
    _ = A.scale_rows(np.arange(12.0))
    _ = A + A

    np.testing.assert_array_equal(A.band, band0)
    np.testing.assert_array_equal(A.top, top0)
    np.testing.assert_array_equal(A.bottom, bottom0)
    np.testing.assert_array_equal(u, u0)


# --- algebra ----------------------------------------------------------------


def test_scale_rows_and_scalar_multiplication() -> None:
    rng = np.random.default_rng(31)
    A = random_operator(rng, TriDiagonal, 9)
    c = rng.normal(size=9)
    np.testing.assert_allclose(A.scale_rows(c).to_dense(), np.diag(c) @ A.to_dense())
    np.testing.assert_allclose((2.5 * A).to_dense(), 2.5 * A.to_dense())
    np.testing.assert_allclose((-A).to_dense(), -A.to_dense())

    with pytest.raises(DimensionMismatch):
        A.scale_rows(np.ones(8))


def test_addition_promotes_to_penta() -> None:
    x = np.linspace(0.0, 1.0, 11)
    T = d1dx1.uniform.c2b2(x)
    P = d2dx2.uniform.c4b4(x)

    S = T + P
    assert isinstance(S, PentaDiagonal)
    np.testing.assert_allclose(S.to_dense(), T.to_dense() + P.to_dense())

    D = P - T
    assert isinstance(D, PentaDiagonal)
    np.testing.assert_allclose(D.to_dense(), P.to_dense() - T.to_dense())

    np.testing.assert_array_equal(T.to_penta().to_dense(), T.to_dense())


def test_addition_rejects_order_mismatch() -> None:
    with pytest.raises(DimensionMismatch):
        _ = TriDiagonal.identity(4) + TriDiagonal.identity(5)


# --- export -----------------------------------------------------------------


@pytest.mark.parametrize("n", [4, 10, 40])
def test_to_banded_solves_with_scipy(n: int) -> None:
    x = np.arange(float(n))
    A = 10.0 * TriDiagonal.identity(n) - d2dx2.uniform.c2b2(x)
    ab, (lower, upper) = A.to_banded()
    # the one-sided 4-point rows widen both bandwidths to 3
    assert (lower, upper) == (3, 3)

    rhs = np.random.default_rng(n).normal(size=n)
    x_banded = solve_banded((lower, upper), ab, rhs)
    x_dense = np.linalg.solve(A.to_dense(), rhs)
    np.testing.assert_allclose(x_banded, x_dense, rtol=1e-10, atol=1e-12)


def test_to_banded_interior_only_bandwidth() -> None:
    A = TriDiagonal.identity(6) * 3.0
    ab, (lower, upper) = A.to_banded()
    assert (lower, upper) == (0, 0)
    np.testing.assert_array_equal(ab, np.full((1, 6), 3.0))
