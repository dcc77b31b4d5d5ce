from __future__ import annotations


def main() -> None:
    # [START README_QUICKSTART]
    import numpy as np

    from fd_operators import (
        MixedDerivative,
        OperatorConfig,
        bs_generator,
        build_operator,
        d1dx1,
        d2dx2,
        generator_prefactors,
    )
    from fd_operators.numerics import GridConfig, SpacingPolicy, build_x_grid

    s = np.linspace(20.0, 200.0, 181)
    D1 = d1dx1.uniform.c4b4(s)
    D2 = d2dx2.uniform.c4b4(s)
    print("d/dx of S^2 at S=100:", D1.action(s**2)[80])

    # non-uniform grid concentrated around the strike, builder picked from the grid
    cfg = GridConfig(
        Nx=101, x_lb=20.0, x_ub=200.0, spacing=SpacingPolicy.HYPERBOLIC, x_center=100.0
    )
    x = build_x_grid(cfg)
    D2_nu = build_operator(x, OperatorConfig(derivative=2, scheme="c2b0"))
    print("operator type on sinh grid:", type(D2_nu).__name__)

    print("prefactors (3, n):", generator_prefactors(0.05, 0.2, s).shape)
    L = bs_generator(0.05, 0.2, s, D1, D2)
    ab, (lower, upper) = L.to_banded()
    print("generator bandwidths:", lower, upper)

    y = np.linspace(0.0, 1.0, 21)
    M = MixedDerivative(D1, d1dx1.uniform.c2b2(y))
    M.set_prefactors(0.3 * s, np.ones(y.size))
    F = np.outer(s, y)
    print("0.3 S d2(S y)/dSdy at (100, 0.5):", M.d2dxdy(F)[80, 10])
    # [END README_QUICKSTART]


if __name__ == "__main__":
    main()
