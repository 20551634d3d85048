"""Simulation of video-tracking measurement error and its effect on derivatives.

This package generates synthetic real/observed position tracks, derives
velocity and acceleration by finite differences, and provides smoothing,
error analysis and plotting helpers to show how differentiation amplifies
position noise.
"""

from .errors import InvalidArgument
from .series import DerivedSeries, TimeSeries, first_difference
from .simulator import MotionKind, SimulationResult, simulate

__all__ = [
    "InvalidArgument",
    "DerivedSeries",
    "TimeSeries",
    "first_difference",
    "MotionKind",
    "SimulationResult",
    "simulate",
]
