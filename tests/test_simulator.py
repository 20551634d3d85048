import numpy as np
import pytest

from tracking_error.errors import InvalidArgument
from tracking_error.simulator import MotionKind, real_position, simulate


def test_noiseless_observed_matches_real():
    for kind in MotionKind:
        result = simulate(kind, num_samples=60, error=0, rng=1)
        assert np.array_equal(result.observed.value, result.real.value)
        assert np.allclose(result.velocity_observed.value, result.velocity_real.value)
        assert np.allclose(result.acceleration_observed.value, result.acceleration_real.value)


def test_constant_velocity_derivatives():
    result = simulate(MotionKind.CONSTANT_VELOCITY, num_samples=60, error=3, rng=0)
    assert np.array_equal(result.time, np.arange(1, 61))
    assert np.allclose(result.real.value, np.arange(1, 61) * 20.0)
    assert np.allclose(result.velocity_real.value, 6.0)
    assert np.allclose(result.acceleration_real.value, 0.0)


def test_constant_acceleration_second_difference():
    unscaled = simulate("constant_acceleration", num_samples=60, error=0, velocity_scale=1.0)
    assert np.allclose(unscaled.real.value, np.arange(1, 61) ** 2)
    assert np.allclose(unscaled.acceleration_real.value, 2.0)

    # Default keeps the literal 0.3 velocity factor, which carries into acceleration.
    scaled = simulate("constant_acceleration", num_samples=60, error=0)
    assert np.allclose(scaled.acceleration_real.value, 0.6)


def test_derived_lengths():
    result = simulate(num_samples=60, rng=3)
    assert len(result.real) == len(result.observed) == 60
    assert len(result.velocity_real) == len(result.velocity_observed) == 59
    assert len(result.acceleration_real) == len(result.acceleration_observed) == 58


def test_two_samples_give_empty_acceleration():
    result = simulate(num_samples=2, error=1, rng=3)
    assert len(result.velocity_observed) == 1
    assert len(result.acceleration_observed) == 0


def test_invalid_arguments():
    with pytest.raises(InvalidArgument):
        simulate(num_samples=1)
    with pytest.raises(InvalidArgument):
        simulate(error=-1)
    with pytest.raises(InvalidArgument):
        simulate(error=float("nan"))
    with pytest.raises(InvalidArgument):
        simulate(num_samples=10.5)
    with pytest.raises(InvalidArgument):
        simulate("jerk")


def test_seeded_runs_are_reproducible():
    a = simulate(error=3, rng=123)
    b = simulate(error=3, rng=np.random.default_rng(123))
    assert np.array_equal(a.observed.value, b.observed.value)


def test_runs_are_independent():
    rng = np.random.default_rng(5)
    first = simulate(error=3, rng=rng)
    second = simulate(error=3, rng=rng)
    assert not np.array_equal(first.observed.value, second.observed.value)
    assert np.array_equal(first.real.value, second.real.value)


def test_noise_variance_matches_error():
    rng = np.random.default_rng(2024)
    noise = np.concatenate([simulate(error=3, rng=rng).noise for _ in range(500)])
    assert noise.var(ddof=1) == pytest.approx(9.0, rel=0.05)
    assert abs(noise.mean()) < 0.1


def test_to_frame_has_boundary_nans():
    frame = simulate(num_samples=10, error=1, rng=0).to_frame()
    assert list(frame.columns) == [
        "time",
        "real",
        "observed",
        "velocity_real",
        "velocity_observed",
        "acceleration_real",
        "acceleration_observed",
    ]
    assert len(frame) == 10
    assert frame["velocity_observed"].isna().tolist() == [True] + [False] * 9
    assert frame["acceleration_observed"].isna().sum() == 2
    assert frame["acceleration_observed"].iloc[:2].isna().all()


def test_motion_kind_parse():
    assert MotionKind.parse("CONSTANT_VELOCITY") is MotionKind.CONSTANT_VELOCITY
    assert MotionKind.parse("constant-acceleration") is MotionKind.CONSTANT_ACCELERATION
    assert np.allclose(real_position("constant_velocity", [1, 2], rate=5.0), [5.0, 10.0])


def test_negative_seed_rejected():
    with pytest.raises(InvalidArgument):
        simulate(error=1, rng=-1)
