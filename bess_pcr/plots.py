"""
plots.py
========

Matplotlib views of a :class:`SimulationResult`.

Each function creates its own figure and returns it; showing or saving is
left to the caller.
"""

from __future__ import annotations

from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from .energy_flow import Flow
from .simulation_results import SimulationResult

SECONDS_PER_DAY = 3600 * 24


def _save(fig: Figure, save_path: Optional[str]) -> Figure:
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150)
    return fig


def plot_frequency(frequency_hz: np.ndarray, time_s: np.ndarray, save_path: Optional[str] = None) -> Figure:
    """Frequency trace over time and its distribution."""
    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 7))
    ax1.plot(np.asarray(time_s) / SECONDS_PER_DAY, frequency_hz, linewidth=0.6)
    ax1.set_xlabel("Time [days]")
    ax1.set_ylabel("Frequency [Hz]")
    ax1.set_title("Grid frequency")
    ax1.grid(True, alpha=0.3)

    weights = np.full(len(frequency_hz), 1.0 / len(frequency_hz))
    ax2.hist(frequency_hz, bins=50, weights=weights)
    ax2.set_xlabel("Frequency [Hz]")
    ax2.set_ylabel("Probability")
    ax2.set_title("Frequency distribution")
    ax2.grid(True, alpha=0.3)
    return _save(fig, save_path)


def plot_simulation_overview(result: SimulationResult, save_path: Optional[str] = None) -> Figure:
    """Frequency and SOC on a shared time axis."""
    days = result.time_s / SECONDS_PER_DAY
    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 7), sharex=True)
    ax1.plot(days, result.frequency_hz, linewidth=0.6)
    ax1.set_ylabel("Frequency [Hz]")
    ax1.set_title("Simulation overview")
    ax1.grid(True, alpha=0.3)

    ax2.plot(days, result.soc_pct, color="green")
    ax2.set_ylim(0, 100)
    ax2.set_xlabel("Time [days]")
    ax2.set_ylabel("SOC [%]")
    ax2.grid(True, alpha=0.3)
    return _save(fig, save_path)


def plot_soc_distribution(result: SimulationResult, save_path: Optional[str] = None) -> Figure:
    fig, ax = plt.subplots(figsize=(8, 5))
    weights = np.full(result.n_steps, 100.0 / result.n_steps)
    ax.hist(result.soc_pct, bins=np.arange(0, 101, 2), weights=weights, color="green", alpha=0.7)
    ax.set_xlabel("SOC [%]")
    ax.set_ylabel("Share of time [%]")
    ax.set_title("SOC distribution")
    ax.grid(True, alpha=0.3)
    return _save(fig, save_path)


def plot_e_rate_distribution(result: SimulationResult, save_path: Optional[str] = None) -> Figure:
    # row 0 is the initial state, not a simulated step
    e_rate = result.e_rate[1:]
    fig, ax = plt.subplots(figsize=(8, 5))
    weights = np.full(len(e_rate), 100.0 / max(len(e_rate), 1))
    ax.hist(e_rate, bins=50, weights=weights, color="purple", alpha=0.7)
    ax.set_xlabel("E-rate [1/h]")
    ax.set_ylabel("Share of time [%]")
    ax.set_title("E-rate distribution")
    ax.grid(True, alpha=0.3)
    return _save(fig, save_path)


def plot_energy_flows(result: SimulationResult, save_path: Optional[str] = None) -> Figure:
    """Cumulative energy [MWh] of each flow component."""
    hours = result.time_s / 3600
    fig, ax = plt.subplots(figsize=(12, 6))
    for which in Flow:
        ax.plot(hours, np.cumsum(result.flow(which)), label=which.column.replace("_", " "))
    ax.set_xlabel("Time [h]")
    ax.set_ylabel("Cumulative energy [MWh]")
    ax.set_title("Energy flows")
    ax.legend(loc="best")
    ax.grid(True, alpha=0.3)
    return _save(fig, save_path)
