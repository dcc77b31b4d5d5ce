from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

# ---------------------------
# Results + Exceptions
# ---------------------------


@dataclass(frozen=True, slots=True)
class RootResult:
    root: float
    converged: bool
    iterations: int
    method: str
    f_at_root: float


class RootFindingError(Exception):
    """Base class for root-finding failures."""


class NoConvergenceError(RootFindingError):
    """Raised when the method fails to converge within max_iter."""


class DerivativeTooSmallError(RootFindingError):
    """Raised when Newton's method cannot proceed due to tiny derivative."""


def _clamp(x: float, domain: tuple[float, float] | None) -> float:
    if domain is None:
        return x
    lo, hi = domain
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def newton_method(
    Fn: Callable[[float], float],
    x0: float,
    *,
    dFn: Callable[[float], float] | None = None,
    tol_f: float = 1e-10,
    tol_x: float = 1e-12,
    max_iter: int = 50,
    min_slope: float = 1e-14,
    domain: tuple[float, float] | None = None,
) -> RootResult:
    """Newton-Raphson iteration started at ``x0``.

    Stops when ``|Fn(x)| <= tol_f`` or the relative step is below ``tol_x``.
    Without ``dFn`` the slope is taken from a central difference. Iterates
    are clamped to ``domain`` when given.
    """
    x = _clamp(float(x0), domain)

    for it in range(1, max_iter + 1):
        fx = Fn(x)
        if abs(fx) <= tol_f:
            return RootResult(
                root=x, converged=True, iterations=it - 1, method="newton", f_at_root=fx
            )

        if dFn is None:
            eps = 1e-5 * max(1.0, abs(x))
            dfx = (Fn(x + eps) - Fn(x - eps)) / (2.0 * eps)
        else:
            dfx = dFn(x)

        if abs(dfx) < min_slope:
            raise DerivativeTooSmallError("Newton failed: derivative too small.")

        x_new = _clamp(x - fx / dfx, domain)

        # Step tolerance (relative)
        if abs(x_new - x) <= tol_x * max(1.0, abs(x_new)):
            return RootResult(
                root=x_new,
                converged=True,
                iterations=it,
                method="newton",
                f_at_root=Fn(x_new),
            )

        x = x_new

    raise NoConvergenceError("Newton did not converge within max_iter.")
