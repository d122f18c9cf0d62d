from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .config import settings
from .kinetics import Arrhenius, SAPONIFICATION
from .logs import get_logger
from .reactors import CSTR, PFR, SOLVERS, Feed, pfr_volume

logger = get_logger(__name__)

MAX_SCAN_POINTS = 10_000


def check_scan_range(tau_min: int, tau_max: int) -> None:
    """Scan residence times must be positive and the scan bounded."""
    if tau_min < 1:
        raise ValueError("tau_min must be at least 1")
    if tau_max < tau_min:
        raise ValueError("tau_max must not be below tau_min")
    if tau_max - tau_min + 1 > MAX_SCAN_POINTS:
        raise ValueError(f"Scan may hold at most {MAX_SCAN_POINTS} points")


@dataclass(frozen=True)
class Stage:
    kind: str
    volume_L: float
    tau: float  # residence time of this stage (s)
    xa_in: float
    xa_out: float


@dataclass
class ReactorTrain:
    """A PFR/CSTR train built stage by stage in click order.

    Tracks the running conversion and residence time of the actual train and,
    in parallel, conversion-vs-residence-time curves at two temperatures over
    an integer scan of residence times, replayed with the same topology.
    """

    feed: Feed
    temperature: float  # Celsius
    tau_min: int = settings.tau_min
    tau_max: int = settings.tau_max
    temperature_step: float = settings.temperature_step
    kinetics: Arrhenius = SAPONIFICATION

    xa: float = field(default=0.0, init=False)
    tau: float = field(default=0.0, init=False)
    stages: List[Stage] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        check_scan_range(self.tau_min, self.tau_max)
        self.k1 = self.kinetics.k(self.temperature)
        self.k2 = self.kinetics.k(self.temperature + self.temperature_step)
        self.ca0 = self.feed.ca0
        self.cb0 = self.feed.cb0
        n = self.tau_max - self.tau_min + 1
        self.scan = np.arange(self.tau_min, self.tau_max + 1, dtype=float)
        self.tau_data = np.zeros(n, dtype=float)
        self.xa_data1 = np.zeros(n, dtype=float)
        self.xa_data2 = np.zeros(n, dtype=float)

    @property
    def temps(self) -> Tuple[float, float]:
        return (self.temperature, self.temperature + self.temperature_step)

    def add_pfr(self, diameter_cm: float, length_m: float) -> Stage:
        return self.add_stage(PFR, pfr_volume(diameter_cm, length_m))

    def add_cstr(self, volume_L: float) -> Stage:
        return self.add_stage(CSTR, volume_L)

    def add_stage(self, kind: str, volume_L: float) -> Stage:
        """Append a reactor and update the trajectory and sweep curves.

        Raises InvalidConfigurationError (PFR with NaOH in deficit) before any
        state is touched.
        """
        if kind not in SOLVERS:
            raise ValueError(f"Unknown reactor kind: {kind!r}")
        solver = SOLVERS[kind]
        tau_i = self.feed.residence_time(volume_L)
        xa_out = solver(self.k1, self.ca0, self.cb0, tau_i, self.xa).unwrap()

        xa1 = np.empty_like(self.xa_data1)
        xa2 = np.empty_like(self.xa_data2)
        for j, curr_tau in enumerate(self.scan):
            xa1[j] = solver(self.k1, self.ca0, self.cb0, curr_tau, self.xa_data1[j]).unwrap()
            xa2[j] = solver(self.k2, self.ca0, self.cb0, curr_tau, self.xa_data2[j]).unwrap()

        stage = Stage(kind=kind, volume_L=volume_L, tau=tau_i, xa_in=self.xa, xa_out=xa_out)
        self.stages.append(stage)
        self.tau += tau_i
        self.xa = xa_out
        self.tau_data += self.scan
        self.xa_data1 = xa1
        self.xa_data2 = xa2
        logger.info(
            "Stage %d %s: V=%.4g L tau=%.4g s Xa %.6g -> %.6g",
            len(self.stages), kind, volume_L, tau_i, stage.xa_in, xa_out,
        )
        return stage

    def pipe(self) -> List[str]:
        """Stage labels in train order."""
        return [s.kind for s in self.stages]

    def summary(self, digits: int = 6) -> Dict[str, float]:
        return {
            "Xa": float(f"{self.xa:.{digits}g}"),
            "tau": float(f"{self.tau:.{digits}g}"),
        }

    def sweep_frame(self) -> pd.DataFrame:
        return pd.DataFrame({
            "tau": self.tau_data,
            "Xa_T1": self.xa_data1,
            "Xa_T2": self.xa_data2,
        })

    def datasheet(self) -> Dict[str, List[float]]:
        """Payload posted to /datasheet for the tabulated results page."""
        return {
            "tau_data": self.tau_data.tolist(),
            "Xa_data": [self.xa_data1.tolist(), self.xa_data2.tolist()],
            "temps": list(self.temps),
        }


def build_train(
    feed: Feed,
    temperature: float,
    stages: List[Tuple[str, float]],
    tau_range: Optional[Tuple[int, int]] = None,
) -> ReactorTrain:
    """Build a train from (kind, volume_L) pairs in order."""
    if tau_range is None:
        train = ReactorTrain(feed=feed, temperature=temperature)
    else:
        train = ReactorTrain(feed=feed, temperature=temperature, tau_min=tau_range[0], tau_max=tau_range[1])
    for kind, volume in stages:
        train.add_stage(kind, volume)
    return train
