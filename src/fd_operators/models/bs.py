"""Closed-form Black-Scholes prices, Greeks and implied volatility.

Used as the reference solution when checking the discretized generator.
Continuous dividend yield ``q`` defaults to zero.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.stats import norm

from ..config import ImpliedVolConfig
from ..numerics.root_finding import RootResult, newton_method

# Below this time to expiry the price is the payoff.
TAU_EPS = 1.0e-10


def _validate_scalar_inputs(
    *, spot: float, strike: float, sigma: float, tau: float
) -> None:
    if spot <= 0.0:
        raise ValueError("spot must be positive")
    if strike <= 0.0:
        raise ValueError("strike must be positive")
    if sigma <= 0.0:
        raise ValueError("sigma must be positive")
    if tau <= 0.0:
        raise ValueError("tau must be positive")


def discount_factor(rate: float, tau: float) -> float:
    return math.exp(-rate * tau)


def d1_d2_from_spot(
    *, spot: float, strike: float, r: float, q: float, sigma: float, tau: float
) -> tuple[float, float]:
    _validate_scalar_inputs(spot=spot, strike=strike, sigma=sigma, tau=tau)
    vol_sqrt_t = sigma * math.sqrt(tau)
    num = math.log(spot / strike) + (r - q + 0.5 * sigma * sigma) * tau
    d1 = num / vol_sqrt_t
    d2 = d1 - vol_sqrt_t
    return float(d1), float(d2)


def call_payoff(spot: float, strike: float) -> float:
    return max(spot - strike, 0.0)


def put_payoff(spot: float, strike: float) -> float:
    return max(strike - spot, 0.0)


def call_price(
    *, spot: float, strike: float, r: float, sigma: float, tau: float, q: float = 0.0
) -> float:
    """
    Black-Scholes European call with continuous dividend yield q.
    """
    if tau <= TAU_EPS:
        return call_payoff(spot, strike)
    d1, d2 = d1_d2_from_spot(spot=spot, strike=strike, r=r, q=q, sigma=sigma, tau=tau)
    df_r = discount_factor(r, tau)
    df_q = discount_factor(q, tau)
    return float(spot * df_q * norm.cdf(d1) - strike * df_r * norm.cdf(d2))


def put_price(
    *, spot: float, strike: float, r: float, sigma: float, tau: float, q: float = 0.0
) -> float:
    """
    Black-Scholes European put with continuous dividend yield q.
    """
    if tau <= TAU_EPS:
        return put_payoff(spot, strike)
    d1, d2 = d1_d2_from_spot(spot=spot, strike=strike, r=r, q=q, sigma=sigma, tau=tau)
    df_r = discount_factor(r, tau)
    df_q = discount_factor(q, tau)
    return float(strike * df_r * norm.cdf(-d2) - spot * df_q * norm.cdf(-d1))


def call_price_on_grid(
    spatial_grid: ArrayLike,
    *,
    strike: float,
    r: float,
    sigma: float,
    tau: float,
    q: float = 0.0,
) -> NDArray[np.floating]:
    """Call prices at every node of ``spatial_grid`` (spot values, all > 0)."""
    s = np.asarray(spatial_grid, dtype=float)
    if tau <= TAU_EPS:
        return np.maximum(s - strike, 0.0)
    vol_sqrt_t = sigma * math.sqrt(tau)
    d1 = (np.log(s / strike) + (r - q + 0.5 * sigma * sigma) * tau) / vol_sqrt_t
    d2 = d1 - vol_sqrt_t
    return s * math.exp(-q * tau) * norm.cdf(d1) - strike * math.exp(-r * tau) * norm.cdf(d2)


def call_greeks(
    *, spot: float, strike: float, r: float, sigma: float, tau: float, q: float = 0.0
) -> dict[str, float]:
    """
    Analytic Greeks for BS European call (with dividend yield q).

    theta is ∂Price/∂t (calendar time, holding expiry fixed), per year.
    """
    d1, d2 = d1_d2_from_spot(spot=spot, strike=strike, r=r, q=q, sigma=sigma, tau=tau)
    sqrt_tau = math.sqrt(tau)
    df_r = discount_factor(r, tau)
    df_q = discount_factor(q, tau)

    Nd1 = norm.cdf(d1)
    Nd2 = norm.cdf(d2)
    phi_d1 = norm.pdf(d1)

    price = spot * df_q * Nd1 - strike * df_r * Nd2
    delta = df_q * Nd1
    gamma = df_q * phi_d1 / (spot * sigma * sqrt_tau)
    vega = spot * df_q * phi_d1 * sqrt_tau
    theta = (
        -(spot * df_q * phi_d1 * sigma) / (2.0 * sqrt_tau)
        - r * strike * df_r * Nd2
        + q * spot * df_q * Nd1
    )
    rho = strike * tau * df_r * Nd2

    return {
        "price": float(price),
        "delta": float(delta),
        "gamma": float(gamma),
        "vega": float(vega),
        "theta": float(theta),
        "rho": float(rho),
    }


def put_greeks(
    *, spot: float, strike: float, r: float, sigma: float, tau: float, q: float = 0.0
) -> dict[str, float]:
    """
    Analytic Greeks for BS European put (with dividend yield q).

    theta is ∂Price/∂t (calendar time, holding expiry fixed), per year.
    """
    d1, d2 = d1_d2_from_spot(spot=spot, strike=strike, r=r, q=q, sigma=sigma, tau=tau)
    sqrt_tau = math.sqrt(tau)
    df_r = discount_factor(r, tau)
    df_q = discount_factor(q, tau)

    Nmd1 = norm.cdf(-d1)
    Nmd2 = norm.cdf(-d2)
    phi_d1 = norm.pdf(d1)

    price = strike * df_r * Nmd2 - spot * df_q * Nmd1
    delta = df_q * (norm.cdf(d1) - 1.0)
    gamma = df_q * phi_d1 / (spot * sigma * sqrt_tau)
    vega = spot * df_q * phi_d1 * sqrt_tau
    theta = (
        -(spot * df_q * phi_d1 * sigma) / (2.0 * sqrt_tau)
        + r * strike * df_r * Nmd2
        - q * spot * df_q * Nmd1
    )
    rho = -strike * tau * df_r * Nmd2

    return {
        "price": float(price),
        "delta": float(delta),
        "gamma": float(gamma),
        "vega": float(vega),
        "theta": float(theta),
        "rho": float(rho),
    }


def implied_vol_result(
    option_price: float,
    *,
    spot: float,
    strike: float,
    r: float,
    tau: float,
    is_call: bool = True,
    q: float = 0.0,
    cfg: ImpliedVolConfig | None = None,
) -> RootResult:
    """Newton search for sigma such that the BS price equals ``option_price``.

    Vega is the Newton slope; iterates stay within ``[cfg.sigma_lo, cfg.sigma_hi]``.

    Raises
    ------
    RootFindingError
        If vega vanishes or the iteration does not converge.
    """
    cfg = ImpliedVolConfig() if cfg is None else cfg
    greeks = call_greeks if is_call else put_greeks

    def _at(sigma: float) -> dict[str, float]:
        return greeks(spot=spot, strike=strike, r=r, q=q, sigma=sigma, tau=tau)

    def Fn(sigma: float) -> float:
        return _at(sigma)["price"] - option_price

    def dFn(sigma: float) -> float:
        return _at(sigma)["vega"]

    return newton_method(
        Fn,
        cfg.sigma0,
        dFn=dFn,
        tol_f=cfg.numerics.abs_tol,
        tol_x=cfg.numerics.step_tol,
        max_iter=cfg.numerics.max_iter,
        min_slope=cfg.numerics.min_vega,
        domain=(cfg.sigma_lo, cfg.sigma_hi),
    )


def implied_vol(
    option_price: float,
    *,
    spot: float,
    strike: float,
    r: float,
    tau: float,
    is_call: bool = True,
    q: float = 0.0,
    cfg: ImpliedVolConfig | None = None,
) -> float:
    return implied_vol_result(
        option_price,
        spot=spot,
        strike=strike,
        r=r,
        tau=tau,
        is_call=is_call,
        q=q,
        cfg=cfg,
    ).root
