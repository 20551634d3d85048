"""Exception types raised by the simulation helpers."""

from __future__ import annotations


class InvalidArgument(ValueError):
    """Raised when a run is requested with unusable parameters."""
