"""Configuration helpers for the tracking-error demonstration.

Provides YAML loading, nested lookups with defaults, and the resolution of a
config dict into the simulation settings used by the CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import InvalidArgument

DEFAULT_MOTIONS = ["constant_velocity", "constant_acceleration"]


def load_config(path: str | Path | None) -> Dict[str, Any]:
    """Load a YAML configuration file; ``None`` yields an empty config."""

    if path is None:
        return {}
    with Path(path).open("r", encoding="utf-8") as fh:
        cfg = yaml.safe_load(fh) or {}
    if not isinstance(cfg, dict):
        raise InvalidArgument(f"Config {path} must contain a mapping at the top level.")
    return cfg


def get_nested(config: Dict[str, Any], keys: list[str], default: Any) -> Any:
    """Retrieve a nested value from a config dict with a default."""

    current: Any = config
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


def motions_from_config(config: Dict[str, Any]) -> list[str]:
    """Scenario list under simulation.motions, accepting a single string."""

    motions = get_nested(config, ["simulation", "motions"], DEFAULT_MOTIONS)
    if isinstance(motions, str):
        motions = [motions]
    if not motions:
        raise InvalidArgument("simulation.motions must name at least one motion kind.")
    return [str(m) for m in motions]
