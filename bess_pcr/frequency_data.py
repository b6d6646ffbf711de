"""
frequency_data.py
=================

Providers of the grid‑frequency input series.

* ``read_frequency_csv``   – measured data, one sample per row
* ``read_frequency_mat``   – MATLAB ``FreqData.mat`` (struct with Freq/Time)
* ``synthesize_frequency`` – reproducible synthetic trace for demos/tests

Every provider returns ``(frequency_hz, time_s)`` as float arrays of equal
length, time in seconds from the first sample.
"""

from __future__ import annotations

from pathlib import Path
from typing import Tuple, Union

import numpy as np
import pandas as pd
from scipy.io import loadmat

PathLike = Union[str, Path]
Series = Tuple[np.ndarray, np.ndarray]


# ---------- Readers ----------

def read_frequency_csv(
    path: PathLike,
    frequency_col: str = "frequency_hz",
    time_col: str = "time_s",
) -> Series:
    """
    Read a frequency record from CSV.

    Required columns: ``frequency_col`` and either ``time_col`` (elapsed
    seconds) or ``timestamp`` (parsed and converted to elapsed seconds).
    """
    df = pd.read_csv(path)
    if frequency_col not in df.columns:
        raise ValueError(f"'{path}' must contain column: {frequency_col}")

    if time_col in df.columns:
        seconds = df[time_col].astype(float)
    elif "timestamp" in df.columns:
        stamps = pd.to_datetime(df["timestamp"], utc=True, errors="coerce")
        seconds = (stamps - stamps.min()).dt.total_seconds()
    else:
        raise ValueError(f"'{path}' must contain column: {time_col} or timestamp")

    data = (
        pd.DataFrame({"time_s": seconds, "frequency_hz": df[frequency_col].astype(float)})
        .dropna()
        .drop_duplicates(subset=["time_s"])
        .sort_values("time_s")
        .reset_index(drop=True)
    )
    return data["frequency_hz"].to_numpy(), data["time_s"].to_numpy()


def read_frequency_mat(path: PathLike, variable: str = "FreqData") -> Series:
    """Read ``variable.Freq`` / ``variable.Time`` from a MATLAB file."""
    mat = loadmat(str(path), squeeze_me=True, struct_as_record=False)
    if variable not in mat:
        raise ValueError(f"'{path}' does not contain variable '{variable}'")
    data = mat[variable]
    try:
        f = np.atleast_1d(np.asarray(data.Freq, dtype=float))
        t = np.atleast_1d(np.asarray(data.Time, dtype=float))
    except AttributeError as err:
        raise ValueError(f"'{variable}' must be a struct with fields Freq and Time") from err
    return f, t


# ---------- Synthetic data ----------

def synthesize_frequency(
    duration_h: float = 6.0,
    sampling_rate_hz: float = 1.0,
    fn: float = 60.0,
    sigma_hz: float = 0.02,
    reversion_s: float = 60.0,
    seed: int | None = 0,
) -> Series:
    """
    Mean‑reverting (Ornstein–Uhlenbeck) frequency around ``fn``.

    ``sigma_hz`` is the stationary standard deviation of the deviation,
    ``reversion_s`` its correlation time.
    """
    rng = np.random.default_rng(seed)
    dt = 1.0 / sampling_rate_hz
    n = int(round(duration_h * 3600 * sampling_rate_hz)) + 1
    t = np.arange(n) * dt

    decay = np.exp(-dt / reversion_s)
    noise = rng.normal(0.0, sigma_hz * np.sqrt(1 - decay**2), size=n)
    dev = np.empty(n)
    dev[0] = rng.normal(0.0, sigma_hz)
    for k in range(1, n):
        dev[k] = decay * dev[k - 1] + noise[k]
    return fn + dev, t
