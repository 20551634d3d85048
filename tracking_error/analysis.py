"""Error summaries for simulated runs.

Quantifies how position error grows through each difference, both for a
single run and as a sweep over error levels averaged across repeated runs.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Sequence

import numpy as np
import pandas as pd

from .errors import InvalidArgument
from .simulator import (
    DEFAULT_NUM_SAMPLES,
    VELOCITY_SCALE,
    MotionKind,
    RngLike,
    SimulationResult,
    resolve_rng,
    simulate,
)

DEFAULT_SWEEP_ERRORS = (0.0, 0.1, 1.0, 2.0, 3.0)
SUMMARY_LEVELS = ("position", "velocity", "acceleration")


def _rmse(diff: np.ndarray) -> float:
    if diff.size == 0:
        return float("nan")
    return float(np.sqrt(np.mean(diff**2)))


def _std(diff: np.ndarray) -> float:
    if diff.size < 2:
        return float("nan")
    return float(np.std(diff, ddof=1))


def _ratio(num: float, den: float) -> float:
    if not den or math.isnan(den):
        return float("nan")
    return num / den


def error_summary(result: SimulationResult) -> Dict[str, float]:
    """RMSE and error spread of observed vs real for each derivative order."""

    diffs = {
        "position": result.observed.value - result.real.value,
        "velocity": result.velocity_observed.value - result.velocity_real.value,
        "acceleration": result.acceleration_observed.value - result.acceleration_real.value,
    }
    summary: Dict[str, float] = {}
    for level in SUMMARY_LEVELS:
        summary[f"{level}_rmse"] = _rmse(diffs[level])
        summary[f"{level}_error_std"] = _std(diffs[level])
    summary["velocity_amplification"] = _ratio(summary["velocity_error_std"], summary["position_error_std"])
    summary["acceleration_amplification"] = _ratio(summary["acceleration_error_std"], summary["position_error_std"])
    return summary


def expected_error_std(error: float, velocity_scale: float = VELOCITY_SCALE) -> Dict[str, float]:
    """
    Theoretical error spread for independent N(0, error) position noise.

    A first difference of unit-spaced samples has variance 2*error**2, the
    second difference 6*error**2; velocity_scale carries through to both.
    """

    if error < 0:
        raise InvalidArgument(f"error must be non-negative, got {error}.")
    return {
        "position": float(error),
        "velocity": abs(velocity_scale) * math.sqrt(2.0) * error,
        "acceleration": abs(velocity_scale) * math.sqrt(6.0) * error,
    }


def error_sweep(
    motion_kind: MotionKind | str = MotionKind.CONSTANT_VELOCITY,
    errors: Sequence[float] = DEFAULT_SWEEP_ERRORS,
    num_samples: int = DEFAULT_NUM_SAMPLES,
    n_runs: int = 200,
    rng: RngLike = None,
    velocity_scale: float = VELOCITY_SCALE,
) -> pd.DataFrame:
    """
    Repeat independent runs at each error level and average their summaries.
    Returns one row per error level with the mean metrics and the theoretical spread.
    """

    if n_runs < 1:
        raise InvalidArgument(f"n_runs must be at least 1, got {n_runs}.")
    errors = list(errors)
    if not errors:
        raise InvalidArgument("errors must contain at least one level.")

    kind = MotionKind.parse(motion_kind)
    generator = resolve_rng(rng)
    rows: List[dict] = []
    for error in errors:
        summaries = [
            error_summary(
                simulate(kind, num_samples=num_samples, error=error, rng=generator, velocity_scale=velocity_scale)
            )
            for _ in range(n_runs)
        ]
        frame = pd.DataFrame(summaries)
        row = {"motion_kind": kind.value, "error": float(error), "n_runs": n_runs}
        row.update(frame.mean(skipna=True).to_dict())
        for level, value in expected_error_std(float(error), velocity_scale).items():
            row[f"{level}_expected_std"] = value
        rows.append(row)
        logging.info(
            "Sweep %s error=%s: velocity RMSE %.3f, acceleration RMSE %.3f",
            kind.value,
            error,
            row["velocity_rmse"],
            row["acceleration_rmse"],
        )
    return pd.DataFrame(rows)


def zoom(result: SimulationResult, start: float = 10, stop: float = 12) -> SimulationResult:
    """Restrict every series of a run to frames ``start..stop`` inclusive."""

    if stop < start:
        raise InvalidArgument(f"zoom window is empty: start={start} > stop={stop}.")
    return SimulationResult(
        motion_kind=result.motion_kind,
        error=result.error,
        velocity_scale=result.velocity_scale,
        real=result.real.window(start, stop),
        observed=result.observed.window(start, stop),
        velocity_real=result.velocity_real.window(start, stop),
        velocity_observed=result.velocity_observed.window(start, stop),
        acceleration_real=result.acceleration_real.window(start, stop),
        acceleration_observed=result.acceleration_observed.window(start, stop),
    )


def summaries_frame(results: Iterable[SimulationResult]) -> pd.DataFrame:
    """One summary row per run, labelled with its regime and error level."""

    rows = []
    for result in results:
        row = {"motion_kind": result.motion_kind.value, "error": result.error}
        row.update(error_summary(result))
        rows.append(row)
    return pd.DataFrame(rows)
