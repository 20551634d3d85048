"""CLI entry point for the tracking-error demonstration.

Runs each configured motion regime, logs how much error reaches velocity and
acceleration, and optionally writes figures, smoothed comparisons, a zoomed
close-up and an error-level sweep.
"""

from __future__ import annotations

import argparse
import copy
import logging
import sys
from pathlib import Path
from typing import Dict, List, Sequence

from tracking_error.analysis import DEFAULT_SWEEP_ERRORS, error_summary, error_sweep, summaries_frame
from tracking_error.config import get_nested, load_config, motions_from_config
from tracking_error.errors import InvalidArgument
from tracking_error.io import export_run, save_dataframe
from tracking_error.simulator import (
    DEFAULT_ERROR,
    DEFAULT_NUM_SAMPLES,
    MotionKind,
    SimulationResult,
    resolve_rng,
    simulate,
)
from tracking_error.smoothing import smooth_result


def configure_logging(log_cfg: Dict[str, object]) -> None:
    """Configure root logger with a console handler and an optional file handler."""

    level_name = str(log_cfg.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s - %(levelname)s - %(message)s"
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(stream_handler)

    if log_cfg.get("filename"):
        log_dir = Path(str(log_cfg.get("dir", "logs")))
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / str(log_cfg["filename"])
        file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(file_handler)
        root.info("Logging to %s (level=%s)", log_path, level_name)


def _deep_update(dst: dict, src: dict) -> dict:
    for key, value in src.items():
        if isinstance(value, dict) and isinstance(dst.get(key), dict):
            _deep_update(dst[key], value)
        else:
            dst[key] = value
    return dst


def _overrides_from_args(args: argparse.Namespace) -> dict:
    """Only flags given on the command line override the config file."""

    simulation: dict = {}
    if args.motion:
        simulation["motions"] = list(args.motion)
    if args.num_samples is not None:
        simulation["num_samples"] = args.num_samples
    if args.error is not None:
        simulation["error"] = args.error
    if args.seed is not None:
        simulation["seed"] = args.seed

    output: dict = {}
    if args.output_dir is not None:
        output["dir"] = str(args.output_dir)
    if args.show:
        output["show"] = True
    if args.no_plots:
        output["save_plots"] = False

    overrides: dict = {}
    if simulation:
        overrides["simulation"] = simulation
    if output:
        overrides["output"] = output
    if args.sweep:
        overrides["sweep"] = {"enabled": True}
    return overrides


def _log_summary(label: str, result: SimulationResult) -> None:
    summary = error_summary(result)
    logging.info(
        "%s: RMSE position %.3f cm, velocity %.3f m/s, acceleration %.3f m/s2",
        label,
        summary["position_rmse"],
        summary["velocity_rmse"],
        summary["acceleration_rmse"],
    )


def main(config_path: str | Path | None = None, overrides: dict | None = None) -> List[SimulationResult]:
    cfg = copy.deepcopy(load_config(config_path))
    if overrides:
        cfg = _deep_update(cfg, overrides)

    configure_logging(cfg.get("logging", {}) or {})

    motions = [MotionKind.parse(m) for m in motions_from_config(cfg)]
    num_samples = get_nested(cfg, ["simulation", "num_samples"], DEFAULT_NUM_SAMPLES)
    error = get_nested(cfg, ["simulation", "error"], DEFAULT_ERROR)
    seed = get_nested(cfg, ["simulation", "seed"], None)
    rng = resolve_rng(seed)
    logging.info("Simulating %s with %s frames, error=%s cm (seed=%s)", [m.value for m in motions], num_samples, error, seed)

    output_cfg = cfg.get("output", {}) or {}
    output_dir = Path(str(output_cfg.get("dir", "output")))
    save_plots = bool(output_cfg.get("save_plots", True))
    save_tables = bool(output_cfg.get("save_tables", False))
    show = bool(output_cfg.get("show", False))
    figures_dir = output_dir / "figures"
    csv_dir = output_dir / "csv"

    smoothing_cfg = cfg.get("smoothing", {}) or {}
    zoom_cfg = cfg.get("zoom", {}) or {}
    sweep_cfg = cfg.get("sweep", {}) or {}

    if save_plots or show:
        from tracking_error import plots

    results: List[SimulationResult] = []
    for kind in motions:
        result = simulate(kind, num_samples=num_samples, error=error, rng=rng)
        results.append(result)
        _log_summary(f"{kind.value} (error={result.error:g})", result)
        tag = f"{kind.value}_error{result.error:g}"

        if save_tables:
            export_run(result, csv_dir / f"run_{tag}.csv")
        if save_plots or show:
            plots.plot_simulation(result, figures_dir / f"simulation_{tag}.png" if save_plots else None, show=show)
            if zoom_cfg.get("enabled", True):
                plots.plot_zoom(
                    result,
                    start=zoom_cfg.get("start", 10),
                    stop=zoom_cfg.get("stop", 12),
                    output_path=figures_dir / f"zoom_{tag}.png" if save_plots else None,
                    show=show,
                )

        if smoothing_cfg.get("enabled", False):
            smoothed = smooth_result(
                result,
                window_length=int(smoothing_cfg.get("window_length", 7)),
                polyorder=int(smoothing_cfg.get("polyorder", 2)),
                method=str(smoothing_cfg.get("method", "savgol")),
            )
            _log_summary(f"{kind.value} smoothed", smoothed)
            if save_plots or show:
                plots.plot_simulation(
                    smoothed, figures_dir / f"smoothed_{tag}.png" if save_plots else None, show=show
                )

    if save_tables and results:
        save_dataframe(summaries_frame(results), csv_dir / "summary.csv")

    if sweep_cfg.get("enabled", False):
        errors = sweep_cfg.get("errors", list(DEFAULT_SWEEP_ERRORS))
        n_runs = int(sweep_cfg.get("n_runs", 200))
        for kind in motions:
            sweep = error_sweep(kind, errors=errors, num_samples=num_samples, n_runs=n_runs, rng=rng)
            save_dataframe(sweep, csv_dir / f"sweep_{kind.value}.csv")
            if save_plots or show:
                plots.plot_error_sweep(
                    sweep, figures_dir / f"sweep_{kind.value}.png" if save_plots else None, show=show
                )

    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulate how position tracking error propagates to velocity and acceleration.")
    parser.add_argument("-c", "--config", default=None, help="Optional YAML config file.")
    parser.add_argument(
        "-m",
        "--motion",
        action="append",
        choices=[kind.value for kind in MotionKind],
        help="Motion regime to simulate; repeat for several (default: both).",
    )
    parser.add_argument("-n", "--num-samples", type=int, default=None, help=f"Number of frames (default {DEFAULT_NUM_SAMPLES}).")
    parser.add_argument("-e", "--error", type=float, default=None, help=f"Position error SD in cm (default {DEFAULT_ERROR:g}).")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible noise.")
    parser.add_argument("-o", "--output-dir", type=Path, default=None, help="Directory for figures and tables.")
    parser.add_argument("--show", action="store_true", help="Display figures interactively.")
    parser.add_argument("--no-plots", action="store_true", help="Skip writing figures.")
    parser.add_argument("--sweep", action="store_true", help="Also run the error-level sweep.")
    return parser


def run(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        main(args.config, _overrides_from_args(args))
    except InvalidArgument as exc:
        logging.error("Invalid simulation parameters: %s", exc)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(run())
