"""
simulation_results.py
=====================

Per‑step buffers and summary KPIs of one simulation run.

All buffers are allocated once from the input length and written by step
index.  Row 0 holds the initial state (initial SOC, zero E‑rate, zero
flows); row ``k`` holds the state after step ``k``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from .energy_flow import Flow, StepFlows
from .metrics import PerformanceMetrics


@dataclass(slots=True)
class SimulationResult:
    """Outcome of :func:`bess_pcr.simulator.run_simulation`."""

    time_s: np.ndarray
    frequency_hz: np.ndarray
    soc_pct: np.ndarray
    e_rate: np.ndarray                    # |power| / C   [1/h]
    flows: np.ndarray                     # (n, len(Flow))  [MWh]
    metrics: Optional[PerformanceMetrics] = None

    # -------------- construction -----------------------------------------
    @classmethod
    def allocate(cls, time_s: np.ndarray, frequency_hz: np.ndarray, initial_soc_pct: float) -> "SimulationResult":
        n = len(time_s)
        soc = np.zeros(n)
        soc[0] = initial_soc_pct
        return cls(
            time_s=np.asarray(time_s, dtype=float),
            frequency_hz=np.asarray(frequency_hz, dtype=float),
            soc_pct=soc,
            e_rate=np.zeros(n),
            flows=np.zeros((n, len(Flow))),
        )

    def record_step(self, k: int, soc_pct: float, e_rate: float, flows: StepFlows) -> None:
        self.soc_pct[k] = soc_pct
        self.e_rate[k] = e_rate
        self.flows[k] = flows.as_array()

    # -------------- series accessors -------------------------------------
    def flow(self, which: Flow) -> np.ndarray:
        return self.flows[:, which]

    @property
    def primary_control(self) -> np.ndarray:
        return self.flow(Flow.PRIMARY_CONTROL)

    @property
    def overfulfillment(self) -> np.ndarray:
        return self.flow(Flow.OVERFULFILLMENT)

    @property
    def deadband_util(self) -> np.ndarray:
        return self.flow(Flow.DEADBAND_UTIL)

    @property
    def schedule_tx(self) -> np.ndarray:
        return self.flow(Flow.SCHEDULE_TX)

    @property
    def self_consumption(self) -> np.ndarray:
        return self.flow(Flow.SELF_CONSUMPTION)

    @property
    def n_steps(self) -> int:
        return len(self.time_s)

    @property
    def final_soc(self) -> float:
        return float(self.soc_pct[-1])

    @property
    def fce(self) -> float:
        if self.metrics is None:
            raise RuntimeError("metrics are attached after the simulation loop")
        return self.metrics.fce

    # -------------- export -----------------------------------------------
    def as_dataframe(self) -> pd.DataFrame:
        """One row per step, indexed by elapsed time [s]."""
        df = pd.DataFrame(
            {
                "frequency_hz": self.frequency_hz,
                "soc_pct": self.soc_pct,
                "e_rate": self.e_rate,
            },
            index=pd.Index(self.time_s, name="time_s"),
        )
        for which in Flow:
            df[which.column] = self.flows[:, which]
        return df

    def summary(self) -> Dict[str, Any]:
        """Scalar KPIs of the run as a flat dictionary."""
        out: Dict[str, Any] = {
            "n_steps": self.n_steps,
            "initial_soc_pct": float(self.soc_pct[0]),
            "final_soc_pct": self.final_soc,
            "min_soc_pct": float(self.soc_pct.min()),
            "max_soc_pct": float(self.soc_pct.max()),
            "max_e_rate": float(self.e_rate.max()),
        }
        if self.metrics is not None:
            out.update(self.metrics.as_dict())
        return out
