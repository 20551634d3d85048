"""Synthetic tracking runs: real track, noisy observation, and their derivatives.

A run samples a real position profile on frames ``1..N``, adds independent
Gaussian measurement error to obtain the observed track, and differences both
tracks twice. Velocity carries the ``30/100`` unit factor used for the
frame-based demonstration; acceleration is differenced from velocity with no
further factor.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from numbers import Integral

import numpy as np
import pandas as pd

from .errors import InvalidArgument
from .series import DerivedSeries, TimeSeries

DEFAULT_NUM_SAMPLES = 60
DEFAULT_ERROR = 3.0
VELOCITY_RATE_CM_PER_FRAME = 20.0
# Applied to velocity only; acceleration gets no compensating factor.
VELOCITY_SCALE = 30 / 100

RngLike = np.random.Generator | int | None


class MotionKind(str, Enum):
    CONSTANT_VELOCITY = "constant_velocity"
    CONSTANT_ACCELERATION = "constant_acceleration"

    @classmethod
    def parse(cls, value: MotionKind | str) -> MotionKind:
        """Accept an enum member or its (case-insensitive) name/value."""

        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        for member in cls:
            if key in {member.value, member.name.lower()}:
                return member
        raise InvalidArgument(f"Unsupported motion kind: {value!r}")


@dataclass(frozen=True, eq=False)
class SimulationResult:
    motion_kind: MotionKind
    error: float
    velocity_scale: float
    real: TimeSeries
    observed: TimeSeries
    velocity_real: DerivedSeries
    velocity_observed: DerivedSeries
    acceleration_real: DerivedSeries
    acceleration_observed: DerivedSeries

    @property
    def time(self) -> np.ndarray:
        return self.real.time

    @property
    def num_samples(self) -> int:
        return len(self.real)

    @property
    def noise(self) -> np.ndarray:
        """Per-sample measurement error, ``observed - real``."""
        return self.observed.value - self.real.value

    def to_frame(self) -> pd.DataFrame:
        """
        Index-aligned table of all series on the full time axis.
        Velocity is NaN on the first frame and acceleration on the first two.
        """

        time = self.time
        return pd.DataFrame(
            {
                "time": time,
                "real": self.real.value,
                "observed": self.observed.value,
                "velocity_real": self.velocity_real.aligned(time),
                "velocity_observed": self.velocity_observed.aligned(time),
                "acceleration_real": self.acceleration_real.aligned(time),
                "acceleration_observed": self.acceleration_observed.aligned(time),
            }
        )


def real_position(
    motion_kind: MotionKind | str,
    time: np.ndarray,
    rate: float = VELOCITY_RATE_CM_PER_FRAME,
) -> np.ndarray:
    """Ground-truth position (cm) for the given regime on the frame axis."""

    kind = MotionKind.parse(motion_kind)
    t = np.asarray(time, dtype=float)
    if kind is MotionKind.CONSTANT_VELOCITY:
        return t * rate
    return t**2


def resolve_rng(rng: RngLike) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    if isinstance(rng, Integral) and rng < 0:
        raise InvalidArgument(f"seed must be a non-negative integer, got {rng}.")
    if rng is None or isinstance(rng, Integral):
        return np.random.default_rng(rng)
    raise InvalidArgument(f"rng must be a numpy Generator, an int seed or None, got {type(rng).__name__}.")


def _validate(num_samples: object, error: object) -> tuple[int, float]:
    if isinstance(num_samples, bool) or not isinstance(num_samples, Integral):
        raise InvalidArgument(f"num_samples must be an integer, got {num_samples!r}.")
    if num_samples < 2:
        raise InvalidArgument(f"num_samples must be at least 2 to take a difference, got {num_samples}.")
    try:
        sigma = float(error)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"error must be a real number, got {error!r}.") from exc
    if not math.isfinite(sigma) or sigma < 0:
        raise InvalidArgument(f"error must be a finite, non-negative standard deviation, got {error!r}.")
    return int(num_samples), sigma


def derive_result(
    motion_kind: MotionKind,
    error: float,
    real: TimeSeries,
    observed: TimeSeries,
    velocity_scale: float = VELOCITY_SCALE,
) -> SimulationResult:
    """Difference real and observed tracks into velocity and acceleration."""

    velocity_real = real.difference(scale=velocity_scale)
    velocity_observed = observed.difference(scale=velocity_scale)
    return SimulationResult(
        motion_kind=motion_kind,
        error=error,
        velocity_scale=velocity_scale,
        real=real,
        observed=observed,
        velocity_real=velocity_real,
        velocity_observed=velocity_observed,
        acceleration_real=velocity_real.difference(),
        acceleration_observed=velocity_observed.difference(),
    )


def simulate(
    motion_kind: MotionKind | str = MotionKind.CONSTANT_VELOCITY,
    num_samples: int = DEFAULT_NUM_SAMPLES,
    error: float = DEFAULT_ERROR,
    rng: RngLike = None,
    rate: float = VELOCITY_RATE_CM_PER_FRAME,
    velocity_scale: float = VELOCITY_SCALE,
) -> SimulationResult:
    """
    Run one simulation of a tracked object.

    Parameters
    ----------
    motion_kind:
        ``constant_velocity`` (position = frame * rate) or
        ``constant_acceleration`` (position = frame ** 2).
    num_samples:
        Number of frames, at least 2.
    error:
        Standard deviation of the Gaussian position error in cm; 0 disables noise.
    rng:
        Random source. Pass a seeded ``numpy.random.Generator`` or an int seed
        for reproducible runs; ``None`` draws fresh entropy.
    rate:
        Speed of the constant-velocity regime in cm/frame.
    velocity_scale:
        Factor applied to the position difference to express velocity in m/s.

    Returns
    -------
    SimulationResult
        Real/observed positions and their first and second differences.
    """

    kind = MotionKind.parse(motion_kind)
    n, sigma = _validate(num_samples, error)
    generator = resolve_rng(rng)

    time = np.arange(1, n + 1)
    real = real_position(kind, time, rate=rate)
    observed = real + generator.normal(0.0, sigma, size=n)
    logging.debug("Simulated %s run with %d frames (error=%s)", kind.value, n, sigma)

    return derive_result(
        kind,
        sigma,
        TimeSeries(time=time, value=real),
        TimeSeries(time=time, value=observed),
        velocity_scale=velocity_scale,
    )
