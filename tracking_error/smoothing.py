"""Position smoothing before differentiation.

Smoothing the observed track (Savitzky-Golay, or a centred moving average)
is the first remedy for noisy derivatives: velocities and accelerations are
recomputed from the smoothed positions while the real track is kept as is.
"""

from __future__ import annotations

import logging

import pandas as pd
from scipy.signal import savgol_filter

from .errors import InvalidArgument
from .series import TimeSeries
from .simulator import SimulationResult, derive_result

SMOOTHING_METHODS = {"savgol", "moving_average"}


def smooth_series(
    series: TimeSeries,
    window_length: int = 7,
    polyorder: int = 2,
    method: str = "savgol",
) -> TimeSeries:
    """Smooth a series with Savitzky-Golay or a centred moving average."""

    method = str(method).lower()
    if method not in SMOOTHING_METHODS:
        raise InvalidArgument(f"Unsupported smoothing method: {method}")
    if polyorder < 0:
        raise InvalidArgument(f"polyorder must be non-negative, got {polyorder}.")

    if window_length < 3 or len(series) < window_length:
        return series
    if window_length % 2 == 0:
        window_length -= 1
    if window_length < 3:
        return series

    if method == "savgol":
        poly = min(polyorder, window_length - 1)
        values = savgol_filter(series.value, window_length=window_length, polyorder=poly)
    else:
        values = pd.Series(series.value).rolling(window=window_length, center=True, min_periods=1).mean().to_numpy()
    return TimeSeries(time=series.time, value=values)


def smooth_result(
    result: SimulationResult,
    window_length: int = 7,
    polyorder: int = 2,
    method: str = "savgol",
) -> SimulationResult:
    """Recompute velocity and acceleration from the smoothed observed track."""

    smoothed = smooth_series(result.observed, window_length=window_length, polyorder=polyorder, method=method)
    if smoothed is result.observed:
        logging.warning(
            "Smoothing window %d not applicable to %d samples; derivatives left unsmoothed",
            window_length,
            len(result.observed),
        )
    return derive_result(
        result.motion_kind,
        result.error,
        result.real,
        smoothed,
        velocity_scale=result.velocity_scale,
    )
