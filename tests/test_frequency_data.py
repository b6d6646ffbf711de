import numpy as np
import pandas as pd
import pytest
from scipy.io import savemat

from bess_pcr.frequency_data import read_frequency_csv, read_frequency_mat, synthesize_frequency


def test_read_csv_elapsed_seconds(tmp_path):
    path = tmp_path / "freq.csv"
    pd.DataFrame({"time_s": [2, 0, 1, 1], "frequency_hz": [60.02, 60.0, 59.99, 59.99]}).to_csv(path, index=False)
    f, t = read_frequency_csv(path)
    np.testing.assert_array_equal(t, [0.0, 1.0, 2.0])
    np.testing.assert_array_equal(f, [60.0, 59.99, 60.02])


def test_read_csv_timestamps(tmp_path):
    path = tmp_path / "freq.csv"
    pd.DataFrame({
        "timestamp": ["2024-01-01 00:00:00", "2024-01-01 00:00:01", "2024-01-01 00:00:03"],
        "frequency_hz": [50.0, 50.01, 49.98],
    }).to_csv(path, index=False)
    f, t = read_frequency_csv(path)
    np.testing.assert_array_equal(t, [0.0, 1.0, 3.0])
    assert f[1] == 50.01


def test_read_csv_custom_columns(tmp_path):
    path = tmp_path / "freq.csv"
    pd.DataFrame({"Time": [0, 1], "Freq": [60.0, 60.1]}).to_csv(path, index=False)
    f, t = read_frequency_csv(path, frequency_col="Freq", time_col="Time")
    np.testing.assert_array_equal(f, [60.0, 60.1])


def test_read_csv_missing_columns(tmp_path):
    path = tmp_path / "freq.csv"
    pd.DataFrame({"time_s": [0, 1]}).to_csv(path, index=False)
    with pytest.raises(ValueError, match="frequency_hz"):
        read_frequency_csv(path)

    pd.DataFrame({"frequency_hz": [60, 60]}).to_csv(path, index=False)
    with pytest.raises(ValueError, match="time_s"):
        read_frequency_csv(path)


def test_read_mat(tmp_path):
    path = tmp_path / "FreqData.mat"
    savemat(str(path), {"FreqData": {"Freq": np.array([60.0, 59.98, 60.01]), "Time": np.array([0.0, 1.0, 2.0])}})
    f, t = read_frequency_mat(path)
    np.testing.assert_allclose(f, [60.0, 59.98, 60.01])
    np.testing.assert_allclose(t, [0.0, 1.0, 2.0])


def test_read_mat_missing_variable(tmp_path):
    path = tmp_path / "other.mat"
    savemat(str(path), {"something": np.arange(3)})
    with pytest.raises(ValueError, match="FreqData"):
        read_frequency_mat(path)


def test_synthesize_shape_and_spacing():
    f, t = synthesize_frequency(duration_h=0.1, sampling_rate_hz=2, fn=50.0, seed=1)
    assert len(f) == len(t) == 721
    assert t[0] == 0.0 and t[-1] == 360.0
    assert np.all(np.diff(t) == 0.5)
    assert abs(f.mean() - 50.0) < 0.05


def test_synthesize_is_reproducible():
    a, _ = synthesize_frequency(duration_h=0.05, seed=3)
    b, _ = synthesize_frequency(duration_h=0.05, seed=3)
    c, _ = synthesize_frequency(duration_h=0.05, seed=4)
    np.testing.assert_array_equal(a, b)
    assert not np.array_equal(a, c)
