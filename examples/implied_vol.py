from __future__ import annotations


def main() -> None:
    # [START README_IMPLIED_VOL]
    from fd_operators.config import ImpliedVolConfig
    from fd_operators.models.bs import call_greeks, implied_vol_result

    cfg = ImpliedVolConfig(sigma0=0.3, sigma_lo=1e-8, sigma_hi=5.0)
    res = implied_vol_result(10.0, spot=100.0, strike=100.0, r=0.05, tau=1.0, cfg=cfg)
    print("IV:", res.root, "iterations:", res.iterations)

    greeks = call_greeks(spot=100.0, strike=100.0, r=0.05, sigma=res.root, tau=1.0)
    print("Greeks at IV:", greeks)
    # [END README_IMPLIED_VOL]


if __name__ == "__main__":
    main()
