"""Output helpers: tabular export of runs and sweeps."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from .simulator import SimulationResult


def save_dataframe(df: pd.DataFrame, path: str | Path) -> Path:
    """Persist a DataFrame to CSV."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    logging.info("Saved %d rows to %s", len(df), path)
    return path


def export_run(result: SimulationResult, path: str | Path) -> Path:
    """Write the index-aligned series of a run, tagged with its regime and error level."""

    frame = result.to_frame()
    frame.insert(0, "motion_kind", result.motion_kind.value)
    frame.insert(1, "error", result.error)
    return save_dataframe(frame, path)
