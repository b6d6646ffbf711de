"""
system_parameters.py
====================

Parameter set of a battery energy storage system (BESS) that delivers
Primary Control Reserve (PCR).

One frozen dataclass collects the physical battery data, the PCR
prequalification, the SOC‑management thresholds and the schedule
transaction settings.  Defaults reproduce the reference 2 MWh / 1 MW
system on a 60 Hz grid.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Tuple


class ConfigurationError(ValueError):
    """A required parameter is missing or a value is out of range."""


SocLimits = Tuple[float, float]


# ---------------------------------------------------------------------------#
#  Short names used by the published parameter tables → field names         #
# ---------------------------------------------------------------------------#
REQUIRED_FIELDS: Dict[str, str] = {
    "C": "capacity_mwh",
    "P_PQ": "prequalified_power_mw",
    "eta_ch": "eta_ch",
    "eta_dis": "eta_dis",
    "delta_E_SC": "self_consumption_mwh_per_s",
    "SOC_limits_ST": "soc_limits_st",
    "SOC_limits_OF": "soc_limits_of",
    "SOC_limits_DU": "soc_limits_du",
    "P_ST": "transaction_power_mw",
    "delta_t_contract": "contract_duration_h",
    "delta_t_lead": "lead_time_h",
    "initial_SOC": "initial_soc_pct",
    "fn": "nominal_frequency_hz",
}

OPTIONAL_FIELDS: Dict[str, str] = {
    "use_OF": "use_of",
    "use_DU": "use_du",
    "deadband": "deadband_hz",
    "OF_factor": "overfulfillment_factor",
}


@dataclass(slots=True, frozen=True)
class PCRParameters:
    """Immutable configuration of one simulation run."""

    # Battery
    capacity_mwh: float = 2.0
    eta_ch: float = 0.9
    eta_dis: float = 0.9
    self_consumption_mwh_per_s: float = 3.85e-8
    initial_soc_pct: float = 40.0

    # PCR
    prequalified_power_mw: float = 1.0
    nominal_frequency_hz: float = 60.0
    deadband_hz: float = 0.01

    # SOC management  [low, high] in %
    soc_limits_st: SocLimits = (39.0, 41.0)
    soc_limits_of: SocLimits = (50.0, 50.0)
    soc_limits_du: SocLimits = (50.0, 50.0)
    use_of: bool = False
    use_du: bool = False
    overfulfillment_factor: float = 0.2

    # Schedule transactions
    transaction_power_mw: float = 0.5
    contract_duration_h: float = 0.5
    lead_time_h: float = 0.75

    def __post_init__(self) -> None:
        for name in ("soc_limits_st", "soc_limits_of", "soc_limits_du"):
            pair = tuple(float(v) for v in getattr(self, name))
            if len(pair) != 2:
                raise ConfigurationError(f"{name} must be a [low, high] pair, got {pair!r}")
            if pair[0] > pair[1]:
                raise ConfigurationError(f"{name} must satisfy low <= high, got {pair!r}")
            object.__setattr__(self, name, pair)

        if self.capacity_mwh <= 0:
            raise ConfigurationError("capacity_mwh must be positive")
        for name in ("eta_ch", "eta_dis"):
            eta = getattr(self, name)
            if not 0.0 < eta <= 1.0:
                raise ConfigurationError(f"{name} must lie in (0, 1], got {eta}")
        if not 0.0 <= self.initial_soc_pct <= 100.0:
            raise ConfigurationError("initial_soc_pct must lie in [0, 100]")
        if self.contract_duration_h < 0 or self.lead_time_h < 0:
            raise ConfigurationError("contract duration and lead time must be non-negative")

    # ---------------------------------------------------------------
    # Convenience helpers
    # ---------------------------------------------------------------
    @property
    def lead_time_s(self) -> float:
        return self.lead_time_h * 3600

    @property
    def contract_duration_s(self) -> float:
        return self.contract_duration_h * 3600

    @property
    def initial_energy_mwh(self) -> float:
        return self.capacity_mwh * self.initial_soc_pct / 100

    def soc_from_energy(self, energy_mwh: float) -> float:
        """Return the state of charge [%] for a stored energy [MWh]."""
        return energy_mwh / self.capacity_mwh * 100

    # ---------------------------------------------------------------
    # Factory
    # ---------------------------------------------------------------
    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "PCRParameters":
        """
        Build parameters from a plain dict.

        Keys may be the short names of the parameter tables (``C``,
        ``P_PQ``, ``SOC_limits_ST`` …) or the dataclass field names.  Every
        entry of :data:`REQUIRED_FIELDS` must be present; ``use_OF`` and
        ``use_DU`` default to ``False``.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}

        for short, name in REQUIRED_FIELDS.items():
            if short in mapping:
                kwargs[name] = mapping[short]
            elif name in mapping:
                kwargs[name] = mapping[name]
            else:
                raise ConfigurationError(f"Missing required parameter: {short}")

        for short, name in OPTIONAL_FIELDS.items():
            if short in mapping:
                kwargs[name] = mapping[short]
            elif name in mapping:
                kwargs[name] = mapping[name]

        unknown = set(mapping) - set(REQUIRED_FIELDS) - set(OPTIONAL_FIELDS) - known
        if unknown:
            raise ConfigurationError(f"Unknown parameter(s): {', '.join(sorted(unknown))}")

        return cls(**kwargs)
