from typing import Callable, List, Sequence

import numpy as np
from scipy.integrate import solve_ivp
from scipy.optimize import brentq


def pfr_rhs(k: float, Ca0: float, Cb0: float) -> Callable[[float, Sequence[float]], List[float]]:
    """dXa/dtau = k Ca0 (1 - Xa)(M - Xa) for A + B -> products."""
    M = Cb0 / Ca0

    def rhs(tau: float, y: Sequence[float]) -> List[float]:
        xa = y[0]
        return [k * Ca0 * (1.0 - xa) * (M - xa)]

    return rhs


def integrate_pfr_conversion(
    k: float,
    Ca0: float,
    Cb0: float,
    tau: float,
    Xa1: float = 0.0,
    method: str = "LSODA",
    rtol: float = 1e-8,
    atol: float = 1e-10,
) -> float:
    """Outlet conversion of a PFR by numerical integration of the design equation."""
    sol = solve_ivp(
        fun=pfr_rhs(k, Ca0, Cb0),
        y0=np.asarray([Xa1], dtype=float),
        t_span=(0.0, tau),
        method=method,
        rtol=rtol,
        atol=atol,
    )
    if sol.status < 0:
        raise RuntimeError(sol.message)
    return float(sol.y[0][-1])


def cstr_balance(k: float, Ca0: float, Cb0: float, tau: float, Xa1: float) -> Callable[[float], float]:
    """Steady-state residual: Xa - Xa1 - k tau Ca0 (1 - Xa)(M - Xa)."""
    M = Cb0 / Ca0

    def residual(xa: float) -> float:
        return xa - Xa1 - k * tau * Ca0 * (1.0 - xa) * (M - xa)

    return residual


def solve_cstr_conversion(k: float, Ca0: float, Cb0: float, tau: float, Xa1: float = 0.0) -> float:
    """Physical CSTR conversion bracketed between Xa1 and min(1, M)."""
    M = Cb0 / Ca0
    upper = min(1.0, M)
    return brentq(cstr_balance(k, Ca0, Cb0, tau, Xa1), Xa1, upper, xtol=1e-14)
