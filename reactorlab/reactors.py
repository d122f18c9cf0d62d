from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Tuple, Union
import math

import numpy as np

from .errors import InvalidConfigurationError, UnresolvedRootError
from .logs import get_logger

logger = get_logger(__name__)

PFR = "PFR"
CSTR = "CSTR"

NAOH_DEFICIT = "Flow rate of NaOH cannot be less than flow rate of Ethyl Acetate"
SECONDS_PER_HOUR = 60 * 60


def _div(a: float, b: float) -> float:
    # IEEE semantics: x/0 -> inf or nan instead of ZeroDivisionError
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(a, b))


# --- Tagged solver results ---

@dataclass(frozen=True)
class Converted:
    value: float
    ok = True

    def unwrap(self) -> float:
        return self.value


@dataclass(frozen=True)
class InvalidConfiguration:
    """The solver has no closed form for this feed ratio."""
    reason: str
    ok = False

    def unwrap(self) -> float:
        raise InvalidConfigurationError(self.reason)


@dataclass(frozen=True)
class UnresolvedRoot:
    """Neither root of the CSTR quadratic lies in (Xa1, 1]."""
    roots: Tuple[float, float]
    ok = False

    def unwrap(self) -> float:
        raise UnresolvedRootError(
            f"No physical CSTR conversion among roots {self.roots[0]:.6g}, {self.roots[1]:.6g}"
        )


ConversionResult = Union[Converted, InvalidConfiguration, UnresolvedRoot]


# --- Geometry and feed ---

def pfr_volume(d: float, l: float) -> float:
    """PFR volume in litres from diameter d (cm) and length l (m)."""
    d = d / 100  # cm to m
    return math.pi * d ** 2 * l / 4 * 1000


def lph_to_lps(flow: float) -> float:
    return flow / SECONDS_PER_HOUR


def get_ca0(Fa: float, Fb: float, Na: float, Nb: float) -> float:
    """Initial concentration of A (ethyl acetate) after mixing the two feeds."""
    return _div(Fa * Na, Fa + Fb)


def get_cb0(Fa: float, Fb: float, Na: float, Nb: float) -> float:
    """Initial concentration of B (NaOH) after mixing the two feeds."""
    return _div(Fb * Nb, Fa + Fb)


@dataclass(frozen=True)
class Feed:
    """Feed streams entering the first reactor.

    Fa, Fb are volumetric flow rates in L/s; Na, Nb are normalities.
    """
    Fa: float
    Fb: float
    Na: float
    Nb: float

    @classmethod
    def from_lph(cls, Fa: float, Fb: float, Na: float, Nb: float) -> "Feed":
        return cls(Fa=lph_to_lps(Fa), Fb=lph_to_lps(Fb), Na=Na, Nb=Nb)

    @property
    def total_flow(self) -> float:
        return self.Fa + self.Fb

    @property
    def ca0(self) -> float:
        return get_ca0(self.Fa, self.Fb, self.Na, self.Nb)

    @property
    def cb0(self) -> float:
        return get_cb0(self.Fa, self.Fb, self.Na, self.Nb)

    @property
    def ratio(self) -> float:
        """Stoichiometric ratio M = Cb0/Ca0."""
        return _div(self.cb0, self.ca0)

    def residence_time(self, volume: float) -> float:
        return _div(volume, self.total_flow)


# --- Closed-form second-order conversions ---

def pfr(k: float, Ca0: float, Cb0: float, tau1: float, Xa1: float) -> ConversionResult:
    """Outlet conversion of a plug-flow segment for A + B -> products.

    Integrated second-order design equation with M = Cb0/Ca0. M > 1 is
    rejected with an InvalidConfiguration result.
    """
    M = _div(Cb0, Ca0)
    if M < 1:
        e = math.exp(k * tau1 * Ca0 * (M - 1))
        a = (M - Xa1) * e - (1 - Xa1) * M
        b = (M - Xa1) * e - (1 - Xa1)
        return Converted(_div(a, b))
    elif M == 1:
        a = (k * tau1 * Ca0) * (1 - Xa1) + Xa1
        b = 1 + k * tau1 * Ca0 * (1 - Xa1)
        return Converted(_div(a, b))
    logger.warning("PFR rejected: M=%s. %s", M, NAOH_DEFICIT)
    return InvalidConfiguration(NAOH_DEFICIT)


def cstr_roots(k: float, Ca0: float, Cb0: float, tau2: float, Xa1: float) -> Tuple[float, float]:
    """Both roots of Xa^2 - b Xa + c = 0, larger first."""
    M = _div(Cb0, Ca0)
    ktc = k * tau2 * Ca0
    b = (M + 1) + _div(1, ktc)
    c = M + _div(Xa1, ktc)
    with np.errstate(invalid="ignore"):
        disc = float(np.sqrt(b * b - 4 * c))
    return (b + disc) / 2, (b - disc) / 2


def cstr(
    k: float,
    Ca0: float,
    Cb0: float,
    tau2: float,
    Xa1: float,
    *,
    strict: bool = False,
) -> ConversionResult:
    """Outlet conversion of a stirred tank from its steady-state mole balance.

    The larger root wins when Xa1 < root <= 1, otherwise the smaller root is
    returned as is. With strict=True the smaller root must pass the same
    bounds and an UnresolvedRoot result is returned when neither does.
    """
    res1, res2 = cstr_roots(k, Ca0, Cb0, tau2, Xa1)
    if Xa1 < res1 <= 1:
        return Converted(res1)
    if not strict:
        return Converted(res2)
    if Xa1 < res2 <= 1:
        return Converted(res2)
    logger.warning("CSTR roots %s, %s outside (%s, 1]", res1, res2, Xa1)
    return UnresolvedRoot((res1, res2))


Solver = Callable[[float, float, float, float, float], ConversionResult]

SOLVERS: Dict[str, Solver] = {
    PFR: pfr,
    CSTR: cstr,
}
