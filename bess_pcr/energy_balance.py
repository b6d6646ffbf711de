"""
energy_balance.py
=================

Commit one step of flows to the stored energy.

The new energy is clamped to the physical range ``[0, C]``; whatever does
not fit is discarded and not booked anywhere.  The caller records the
flows as computed, independent of the clamp.
"""

from __future__ import annotations

import numpy as np

from .energy_flow import StepFlows


def update_energy_balance(energy_mwh: float, flows: StepFlows, capacity_mwh: float) -> float:
    """Return the stored energy [MWh] after applying ``flows``."""
    return float(np.clip(energy_mwh + flows.total, 0.0, capacity_mwh))
