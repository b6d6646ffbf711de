"""
simulator.py
============

Time‑stepped simulation of a BESS delivering Primary Control Reserve.

Per step ``k`` (``k = 1 … n‑1``):

  1. power flows from the frequency sample and the transaction snapshot
     carried over from step ``k‑1``
  2. transaction transition (the new snapshot is used from ``k+1`` on)
  3. energy balance with clamping to ``[0, C]``
  4. record SOC, E‑rate and the five flows

After the loop the KPIs are computed from the flow history.  The run is
deterministic for given parameters and input series.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np
from tqdm import tqdm

from .energy_balance import update_energy_balance
from .energy_flow import calculate_power_flows
from .metrics import calculate_performance_metrics
from .simulation_results import SimulationResult
from .system_parameters import PCRParameters
from .transaction_scheduler import (
    LoggingTransactionObserver,
    Transaction,
    TransactionObserver,
    update_transaction_status,
)

logger = logging.getLogger(__name__)


class InputShapeError(ValueError):
    """Frequency and time series cannot be simulated together."""


# ---------------------------------------------------------------------------#
#  Input validation                                                          #
# ---------------------------------------------------------------------------#
def validate_series(frequency: Sequence[float], time: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
    """Return both series as float arrays or raise :class:`InputShapeError`."""
    f = np.asarray(frequency, dtype=float)
    t = np.asarray(time, dtype=float)

    if f.ndim != 1 or t.ndim != 1:
        raise InputShapeError("Frequency data and time vector must be one-dimensional")
    if len(f) != len(t):
        raise InputShapeError(
            f"Frequency data and time vector must have same length ({len(f)} != {len(t)})"
        )
    if len(t) < 2:
        raise InputShapeError("At least two samples are required")
    if not (np.isfinite(f).all() and np.isfinite(t).all()):
        raise InputShapeError("Frequency data and time vector must not contain NaN or inf")
    if np.any(np.diff(t) <= 0):
        raise InputShapeError("Time vector must be strictly increasing")
    return f, t


# ---------------------------------------------------------------------------#
#  Main entry point                                                          #
# ---------------------------------------------------------------------------#
def run_simulation(
    params: PCRParameters,
    frequency: Sequence[float],
    time: Sequence[float],
    *,
    observer: Optional[TransactionObserver] = None,
    progress: bool = False,
) -> SimulationResult:
    """
    Simulate the battery over the whole frequency series.

    ``frequency`` [Hz] and ``time`` [s] must have equal length ``n ≥ 2``
    and ``time`` must be strictly increasing.
    """
    f, t = validate_series(frequency, time)
    n = len(t)
    capacity = params.capacity_mwh
    if observer is None:
        observer = LoggingTransactionObserver()

    energy = params.initial_energy_mwh
    transaction = Transaction()
    result = SimulationResult.allocate(t, f, params.initial_soc_pct)

    logger.debug(
        "Simulating %d steps (%.1f h), initial SOC %.1f %%",
        n, (t[-1] - t[0]) / 3600, params.initial_soc_pct,
    )

    for k in tqdm(range(1, n), desc="simulate PCR", disable=not progress):
        delta_t = t[k] - t[k - 1]

        flows, current_power = calculate_power_flows(
            params, f[k], t[k], energy, transaction, delta_t
        )
        # must follow the flow calculation, see module docstring
        transaction = update_transaction_status(
            params, t[k], energy, transaction, observer
        )
        energy = update_energy_balance(energy, flows, capacity)

        result.record_step(
            k,
            soc_pct=params.soc_from_energy(energy),
            e_rate=abs(current_power) / capacity,
            flows=flows,
        )

    result.metrics = calculate_performance_metrics(result.flows, capacity)
    logger.info(
        "Simulation finished: final SOC %.2f %%, FCE %.3f",
        result.final_soc, result.metrics.fce,
    )
    return result
