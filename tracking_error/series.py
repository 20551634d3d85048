"""Time-indexed series and the bounded first difference.

A :class:`TimeSeries` holds aligned ``time``/``value`` arrays. Differencing it
yields a :class:`DerivedSeries` that is one sample shorter: the first sample
has no predecessor, so it is dropped instead of being carried as a NaN. The
NaN-padded view is only produced on request via :meth:`TimeSeries.aligned`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .errors import InvalidArgument


def _as_vector(values: Sequence[float], name: str, dtype=float) -> np.ndarray:
    arr = np.array(values, dtype=dtype)
    if arr.ndim != 1:
        raise InvalidArgument(f"{name} must be one-dimensional, got shape {arr.shape}.")
    if arr.dtype.kind not in "iuf":
        raise InvalidArgument(f"{name} must be numeric, got dtype {arr.dtype}.")
    return arr


def first_difference(
    values: Sequence[float],
    time: Sequence[float] | None = None,
    scale: float = 1.0,
) -> np.ndarray:
    """
    Return ``scale * (values[i] - values[i-1]) / (time[i] - time[i-1])`` for i >= 1.

    The output has ``len(values) - 1`` entries (empty for fewer than two
    values). When ``time`` is omitted the spacing is taken as 1.
    """

    vals = _as_vector(values, "values")
    if time is None:
        dt = np.ones(max(len(vals) - 1, 0), dtype=float)
    else:
        t = _as_vector(time, "time")
        if len(t) != len(vals):
            raise InvalidArgument(f"time and values must have the same length ({len(t)} vs {len(vals)}).")
        dt = np.diff(t)
        if np.any(dt <= 0):
            raise InvalidArgument("time must be strictly increasing to take a difference.")
    if len(vals) < 2:
        return np.empty(0, dtype=float)
    return scale * np.diff(vals) / dt


@dataclass(frozen=True, eq=False)
class TimeSeries:
    time: np.ndarray
    value: np.ndarray

    def __post_init__(self) -> None:
        time = _as_vector(self.time, "time", dtype=None)
        value = _as_vector(self.value, "value")
        if len(time) != len(value):
            raise InvalidArgument(f"time and value must have the same length ({len(time)} vs {len(value)}).")
        # Read-only: smoothed results reuse the real track of their source run.
        time.setflags(write=False)
        value.setflags(write=False)
        object.__setattr__(self, "time", time)
        object.__setattr__(self, "value", value)

    def __len__(self) -> int:
        return len(self.value)

    def difference(self, scale: float = 1.0) -> DerivedSeries:
        """First difference over time, stamped at the later time of each pair."""

        order = getattr(self, "order", 0) + 1
        return DerivedSeries(
            time=self.time[1:],
            value=first_difference(self.value, self.time, scale=scale),
            order=order,
        )

    def window(self, start: float, stop: float) -> TimeSeries:
        """Samples whose time lies in ``[start, stop]`` (inclusive)."""

        mask = (self.time >= start) & (self.time <= stop)
        return type(self)(**{**self._fields(), "time": self.time[mask], "value": self.value[mask]})

    def aligned(self, time: Sequence[float]) -> np.ndarray:
        """Values laid out on ``time``, with NaN wherever this series is undefined."""

        target = _as_vector(time, "time")
        out = np.full(len(target), np.nan)
        idx = np.searchsorted(target, self.time)
        hit = idx < len(target)
        hit[hit] = target[idx[hit]] == self.time[hit]
        out[idx[hit]] = self.value[hit]
        return out

    def _fields(self) -> dict:
        return {"time": self.time, "value": self.value}


@dataclass(frozen=True, eq=False)
class DerivedSeries(TimeSeries):
    """Result of differencing; ``order`` counts how many differences were taken."""

    order: int = 1

    def _fields(self) -> dict:
        return {"time": self.time, "value": self.value, "order": self.order}
