"""
metrics.py
==========

Aggregate KPIs computed once from the complete flow history:

  • FCE                – full cycle equivalents, throughput / (2 · C)
  • ST energy          – charged / discharged via schedule transactions
  • total energy       – charged / discharged from PC, OF and ST
  • ST shares          – percentage of the totals handled by ST
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

import numpy as np

from .energy_flow import Flow


@dataclass(slots=True, frozen=True)
class PerformanceMetrics:
    fce: float
    schedule_tx_charged: float
    schedule_tx_discharged: float
    total_charged: float
    total_discharged: float
    pct_charged_via_st: float
    pct_discharged_via_st: float

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _positive_sum(values: np.ndarray) -> float:
    return float(values[values > 0].sum())


def _negative_sum(values: np.ndarray) -> float:
    return float(np.abs(values[values < 0]).sum())


def calculate_performance_metrics(flow_history: np.ndarray, capacity_mwh: float) -> PerformanceMetrics:
    """
    ``flow_history`` has one row per step and one column per :class:`Flow`.
    Self consumption is excluded from throughput and charge totals.
    """
    flows = np.asarray(flow_history, dtype=float)
    pc = flows[:, Flow.PRIMARY_CONTROL]
    of = flows[:, Flow.OVERFULFILLMENT]
    du = flows[:, Flow.DEADBAND_UTIL]
    st = flows[:, Flow.SCHEDULE_TX]

    throughput = (
        np.abs(pc).sum()
        + np.abs(of).sum()
        + np.abs(du).sum()
        + np.abs(st).sum()
    )
    fce = float(throughput / (2 * capacity_mwh))

    st_charged = _positive_sum(st)
    st_discharged = _negative_sum(st)

    total_charged = _positive_sum(pc) + _positive_sum(of) + st_charged
    total_discharged = _negative_sum(pc) + _negative_sum(of) + st_discharged

    pct_charged = st_charged / total_charged * 100 if total_charged > 0 else 0.0
    pct_discharged = st_discharged / total_discharged * 100 if total_discharged > 0 else 0.0

    return PerformanceMetrics(
        fce=fce,
        schedule_tx_charged=st_charged,
        schedule_tx_discharged=st_discharged,
        total_charged=total_charged,
        total_discharged=total_discharged,
        pct_charged_via_st=pct_charged,
        pct_discharged_via_st=pct_discharged,
    )
