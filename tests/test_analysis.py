import numpy as np
import pytest

from tracking_error.analysis import error_summary, error_sweep, expected_error_std, summaries_frame, zoom
from tracking_error.errors import InvalidArgument
from tracking_error.simulator import simulate


def test_noiseless_summary_is_zero():
    summary = error_summary(simulate(error=0))
    assert summary["position_rmse"] == 0.0
    assert summary["velocity_rmse"] == 0.0
    assert summary["acceleration_rmse"] == 0.0
    assert np.isnan(summary["velocity_amplification"])


def test_expected_error_std():
    expected = expected_error_std(3.0)
    assert expected["position"] == 3.0
    assert expected["velocity"] == pytest.approx(0.3 * np.sqrt(2) * 3.0)
    assert expected["acceleration"] == pytest.approx(0.3 * np.sqrt(6) * 3.0)
    with pytest.raises(InvalidArgument):
        expected_error_std(-1.0)


def test_derivative_error_matches_theory():
    rng = np.random.default_rng(7)
    vel, acc = [], []
    for _ in range(300):
        result = simulate(error=3, rng=rng)
        vel.append(result.velocity_observed.value - result.velocity_real.value)
        acc.append(result.acceleration_observed.value - result.acceleration_real.value)
    expected = expected_error_std(3.0)
    assert np.std(np.concatenate(vel)) == pytest.approx(expected["velocity"], rel=0.05)
    assert np.std(np.concatenate(acc)) == pytest.approx(expected["acceleration"], rel=0.05)


def test_error_sweep_rows_grow_with_error():
    sweep = error_sweep("constant_velocity", errors=[0.0, 1.0, 3.0], n_runs=20, rng=0)
    assert list(sweep["error"]) == [0.0, 1.0, 3.0]
    assert (sweep["n_runs"] == 20).all()
    assert sweep.loc[0, "velocity_rmse"] == 0.0
    assert sweep["acceleration_rmse"].is_monotonic_increasing
    assert "acceleration_expected_std" in sweep.columns


def test_error_sweep_rejects_bad_input():
    with pytest.raises(InvalidArgument):
        error_sweep(errors=[], n_runs=5)
    with pytest.raises(InvalidArgument):
        error_sweep(errors=[1.0], n_runs=0)
    with pytest.raises(InvalidArgument):
        error_sweep(errors=[-1.0], n_runs=1)


def test_zoom_window():
    result = simulate(error=3, rng=9)
    window = zoom(result, 10, 12)
    assert np.array_equal(window.real.time, [10, 11, 12])
    assert np.array_equal(window.velocity_observed.time, [10, 11, 12])
    assert np.array_equal(window.acceleration_observed.time, [10, 11, 12])
    with pytest.raises(InvalidArgument):
        zoom(result, 12, 10)


def test_summaries_frame_labels_runs():
    frame = summaries_frame([simulate("constant_velocity", error=1, rng=1), simulate("constant_acceleration", error=2, rng=2)])
    assert list(frame["motion_kind"]) == ["constant_velocity", "constant_acceleration"]
    assert list(frame["error"]) == [1.0, 2.0]
