"""
energy_flow.py
==============

Power‑flow model of one simulation step.

For a frequency sample ``f`` at time ``t`` the battery responds with five
energy contributions [MWh] (positive == energy into the battery):

  • primary control     – PCR response proportional to the deviation
  • overfulfillment     – +20 % response when the SOC benefits from it
  • deadband util       – cancels the response inside the deadband
  • schedule tx         – active schedule transaction
  • self consumption    – constant auxiliary drain

The function is pure: it reads the transaction snapshot carried over from
the previous step and never modifies it.
"""

from __future__ import annotations

from dataclasses import astuple, dataclass
from enum import IntEnum
from typing import Tuple

import numpy as np

from .system_parameters import PCRParameters
from .transaction_scheduler import Transaction


# ---------------------------------------------------------------------------#
#  Column indices of the flow history                                        #
# ---------------------------------------------------------------------------#

class Flow(IntEnum):
    PRIMARY_CONTROL  = 0
    OVERFULFILLMENT  = 1
    DEADBAND_UTIL    = 2
    SCHEDULE_TX      = 3
    SELF_CONSUMPTION = 4

    @property
    def column(self) -> str:
        return self.name.lower()


# ---------------------------------------------------------------------------#
#  Result container                                                          #
# ---------------------------------------------------------------------------#

@dataclass(slots=True, frozen=True)
class StepFlows:
    """Energy flows [MWh] of one step, field order == :class:`Flow`."""

    primary_control: float = 0.0
    overfulfillment: float = 0.0
    deadband_util: float = 0.0
    schedule_tx: float = 0.0
    self_consumption: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.primary_control
            + self.overfulfillment
            + self.deadband_util
            + self.schedule_tx
            + self.self_consumption
        )

    def as_array(self) -> np.ndarray:
        return np.asarray(astuple(self), dtype=float)


# ---------------------------------------------------------------------------#
#  Core model                                                                #
# ---------------------------------------------------------------------------#

def calculate_power_flows(
    params: PCRParameters,
    f: float,
    t: float,
    energy_mwh: float,
    transaction: Transaction,
    delta_t: float,
) -> Tuple[StepFlows, float]:
    """
    Return the step flows and the instantaneous battery power [MW].

    ``delta_t`` is the step length in seconds.
    """
    fn = params.nominal_frequency_hz
    hrs = delta_t / 3600
    soc = params.soc_from_energy(energy_mwh)

    # 1) primary control
    delta_f = fn - f
    p_grid = params.prequalified_power_mw * delta_f
    if p_grid < 0:
        p_pc = -params.eta_ch * p_grid
    else:
        p_pc = p_grid / params.eta_dis
    primary_control = p_pc * hrs

    # 2) schedule transaction
    in_window = transaction.in_window(t)
    schedule_tx = 0.0
    if in_window:
        if transaction.tx_type == 1:
            grid_energy = transaction.power_mw * hrs
            schedule_tx = grid_energy * params.eta_ch
        else:
            battery_energy = -transaction.power_mw * hrs
            schedule_tx = battery_energy / params.eta_dis

    # 3) overfulfillment
    overfulfillment = 0.0
    if params.use_of:
        of_low, of_high = params.soc_limits_of
        if (soc <= of_low and f > fn) or (soc >= of_high and f < fn):
            overfulfillment = params.overfulfillment_factor * primary_control

    # 4) deadband utilisation
    deadband_util = 0.0
    if params.use_du:
        in_deadband = fn - params.deadband_hz <= f <= fn + params.deadband_hz
        du_low, du_high = params.soc_limits_du
        if in_deadband and ((soc <= du_low and f < fn) or (soc >= du_high and f > fn)):
            deadband_util = -primary_control

    # 5) self consumption, rate already per second
    self_consumption = -params.self_consumption_mwh_per_s * delta_t

    current_power = p_pc
    if in_window:
        current_power += int(transaction.tx_type) * transaction.power_mw

    flows = StepFlows(
        primary_control=primary_control,
        overfulfillment=overfulfillment,
        deadband_util=deadband_util,
        schedule_tx=schedule_tx,
        self_consumption=self_consumption,
    )
    return flows, current_power
