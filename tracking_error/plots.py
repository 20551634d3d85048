"""Matplotlib views of simulated runs.

Each run is drawn as three stacked panels (position, velocity, acceleration)
with the real series as a grey line and the measured series as black points.
Axis ranges are fixed per regime so runs at different error levels can be
compared side by side.

Every plot function returns its figure. Saved or shown figures are closed;
otherwise the caller owns the open figure unless ``close=True`` is passed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Tuple

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure

from .analysis import SUMMARY_LEVELS, zoom
from .simulator import MotionKind, SimulationResult

PLOT_LIMITS: Dict[MotionKind, Dict[str, Tuple[float, float]]] = {
    MotionKind.CONSTANT_VELOCITY: {"velocity": (-8.0, 12.0), "acceleration": (-10.0, 10.0)},
    MotionKind.CONSTANT_ACCELERATION: {"velocity": (-5.0, 15.0), "acceleration": (-10.0, 10.0)},
}

REAL_STYLE = {"color": "grey", "lw": 2, "label": "Real"}
MEASURED_STYLE = {"color": "black", "marker": "o", "ms": 2.5, "ls": "none", "label": "Measured"}


def _finish(fig: Figure, output_path: Path | str | None, show: bool, close: bool) -> Figure:
    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=150)
    if show:
        plt.show()
    if close or output_path is not None or show:
        plt.close(fig)
    return fig


def plot_simulation(
    result: SimulationResult,
    output_path: Path | str | None = None,
    show: bool = False,
    close: bool = False,
) -> Figure:
    """Plot position, velocity and acceleration of a run, real vs measured."""

    limits = PLOT_LIMITS[result.motion_kind]
    fig, (ax_pos, ax_vel, ax_acc) = plt.subplots(3, 1, figsize=(5, 6), sharex=True)

    ax_pos.plot(result.real.time, result.real.value, **REAL_STYLE)
    if result.motion_kind is MotionKind.CONSTANT_ACCELERATION:
        ax_pos.plot(result.observed.time, result.observed.value, color="brown", lw=1)
    ax_pos.plot(result.observed.time, result.observed.value, **MEASURED_STYLE)
    ax_pos.set_ylim(0, float(result.real.value.max()))
    ax_pos.set_ylabel("Position (cm)")
    ax_pos.legend(loc="upper left", frameon=False)

    ax_vel.plot(result.velocity_observed.time, result.velocity_observed.value, color="orange", lw=1)
    ax_vel.plot(result.velocity_real.time, result.velocity_real.value, color="grey", lw=2)
    ax_vel.plot(result.velocity_observed.time, result.velocity_observed.value, **{**MEASURED_STYLE, "label": None})
    ax_vel.set_ylim(*limits["velocity"])
    ax_vel.set_ylabel("Velocity (m/s)")

    ax_acc.plot(result.acceleration_observed.time, result.acceleration_observed.value, color="red", lw=1)
    ax_acc.plot(result.acceleration_real.time, result.acceleration_real.value, color="grey", lw=2)
    ax_acc.plot(
        result.acceleration_observed.time, result.acceleration_observed.value, **{**MEASURED_STYLE, "label": None}
    )
    ax_acc.set_ylim(*limits["acceleration"])
    ax_acc.set_ylabel("Acceleration (m/s2)")
    ax_acc.set_xlabel("Time (frames)")

    for ax in (ax_pos, ax_vel, ax_acc):
        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)
    fig.suptitle(f"{result.motion_kind.value.replace('_', ' ')}, error = {result.error:g} cm", fontsize=9)
    fig.tight_layout()
    return _finish(fig, output_path, show, close)


def plot_zoom(
    result: SimulationResult,
    start: float = 10,
    stop: float = 12,
    output_path: Path | str | None = None,
    show: bool = False,
    close: bool = False,
) -> Figure:
    """Close-up of a few frames: the slope between noisy points is the velocity estimate."""

    window = zoom(result, start, stop)
    fig, ax = plt.subplots(figsize=(5, 3))
    ax.plot(window.real.time, window.real.value, **REAL_STYLE)
    ax.plot(window.observed.time, window.observed.value, color="black", lw=1)
    ax.plot(window.observed.time, window.observed.value, **{**MEASURED_STYLE, "ms": 5})
    ax.set_xlabel("Time (frames)")
    ax.set_ylabel("Position (cm)")
    ax.legend(loc="upper left", frameon=False)
    fig.tight_layout()
    return _finish(fig, output_path, show, close)


def plot_error_sweep(
    sweep: pd.DataFrame,
    output_path: Path | str | None = None,
    show: bool = False,
    close: bool = False,
) -> Figure:
    """RMSE vs position error for each derivative order, with the theoretical spread dashed."""

    fig, ax = plt.subplots(figsize=(5, 4))
    ordered = sweep.sort_values("error")
    for level in SUMMARY_LEVELS:
        line = ax.plot(ordered["error"], ordered[f"{level}_rmse"], marker="o", label=level)[0]
        expected = f"{level}_expected_std"
        if expected in ordered:
            ax.plot(ordered["error"], ordered[expected], ls="--", color=line.get_color())
    ax.set_xlabel("Position error SD (cm)")
    ax.set_ylabel("RMSE (observed - real)")
    title = ", ".join(sorted(set(ordered["motion_kind"]))) if "motion_kind" in ordered else "error sweep"
    ax.set_title(title.replace("_", " "))
    ax.legend()
    fig.tight_layout()
    return _finish(fig, output_path, show, close)
