# ----------------------------------------------------------------------
#  main_simulation.py  – demo run + KPI/plots in one place
# ----------------------------------------------------------------------
"""
Entry point of the demo:
    load (or synthesize) frequency → simulate → KPIs → plots

Run with ``python -m bess_pcr.main_simulation``.  Point ``FREQ_FILE`` at a
CSV or ``.mat`` record to use measured data instead of a synthetic trace.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import pandas as pd

from .frequency_data import read_frequency_csv, read_frequency_mat, synthesize_frequency
from .plots import (
    plot_e_rate_distribution,
    plot_energy_flows,
    plot_frequency,
    plot_simulation_overview,
    plot_soc_distribution,
)
from .simulation_results import SimulationResult
from .simulator import run_simulation
from .system_parameters import PCRParameters

logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------
# 0)  GLOBAL CONSTANTS                                                  #
# ----------------------------------------------------------------------
FREQ_FILE: Optional[Path] = None       # None → synthetic trace
SIMULATION_HOURS = 6
SAMPLING_RATE_HZ = 1
SEED = 0


# ----------------------------------------------------------------------
# 1)  DATA LOADING                                                      #
# ----------------------------------------------------------------------
def load_frequency(params: PCRParameters, path: Optional[Path] = FREQ_FILE):
    if path is None:
        logger.info("Synthesizing %d h of frequency data at %g Hz", SIMULATION_HOURS, SAMPLING_RATE_HZ)
        return synthesize_frequency(
            duration_h=SIMULATION_HOURS,
            sampling_rate_hz=SAMPLING_RATE_HZ,
            fn=params.nominal_frequency_hz,
            seed=SEED,
        )
    path = Path(path)
    logger.info("Loading frequency data from %s", path)
    if path.suffix.lower() == ".mat":
        return read_frequency_mat(path)
    return read_frequency_csv(path)


# ----------------------------------------------------------------------
# 2)  STRATEGY COMPARISON                                               #
# ----------------------------------------------------------------------
STRATEGIES = {
    "ST only": dict(use_of=False, use_du=False),
    "ST + OF": dict(use_of=True, use_du=False),
    "ST + DU": dict(use_of=False, use_du=True),
    "ST + OF + DU": dict(use_of=True, use_du=True),
}


def compare_strategies(
    params: PCRParameters,
    frequency: Sequence[float],
    time: Sequence[float],
) -> pd.DataFrame:
    """Run every SOC‑management combination on the same input, one row each."""
    rows = {}
    for name, flags in STRATEGIES.items():
        res = run_simulation(replace(params, **flags), frequency, time)
        rows[name] = res.summary()
    return pd.DataFrame.from_dict(rows, orient="index").rename_axis("strategy")


# ----------------------------------------------------------------------
# 3)  KPI PRINT + PLOTS                                                 #
# ----------------------------------------------------------------------
def display_results(result: SimulationResult) -> None:
    m = result.metrics
    print("\n--- BESS PCR simulation -----------------------------------")
    print(f"Steps                         : {result.n_steps:10d}")
    print(f"SOC initial / final           : {result.soc_pct[0]:9.2f} % / {result.final_soc:.2f} %")
    print(f"SOC min / max                 : {result.soc_pct.min():9.2f} % / {result.soc_pct.max():.2f} %")
    print(f"Full cycle equivalents        : {m.fce:10.4f}")
    print(f"Total charged                 : {m.total_charged:10.4f} MWh")
    print(f"Total discharged              : {m.total_discharged:10.4f} MWh")
    print(f"ST charged / discharged       : {m.schedule_tx_charged:10.4f} / {m.schedule_tx_discharged:.4f} MWh")
    print(f"Share charged via ST          : {m.pct_charged_via_st:10.2f} %")
    print(f"Share discharged via ST       : {m.pct_discharged_via_st:10.2f} %")
    print("-----------------------------------------------------------")


def plot_all(result: SimulationResult) -> None:
    plot_frequency(result.frequency_hz, result.time_s)
    plot_simulation_overview(result)
    plot_soc_distribution(result)
    plot_e_rate_distribution(result)
    plot_energy_flows(result)
    plt.show()


# ----------------------------------------------------------------------
# 4)  MAIN                                                              #
# ----------------------------------------------------------------------
def main() -> SimulationResult:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    params = PCRParameters()
    f_data, t_data = load_frequency(params)

    result = run_simulation(params, f_data, t_data, progress=True)
    display_results(result)

    print("\nStrategy comparison:")
    print(compare_strategies(params, f_data, t_data)[
        ["final_soc_pct", "fce", "pct_charged_via_st", "pct_discharged_via_st"]
    ].round(3))

    plot_all(result)
    return result


if __name__ == "__main__":
    main()
