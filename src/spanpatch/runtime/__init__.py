"""Runtime services shared across spanpatch components."""

from . import telemetry

__all__ = ["telemetry"]
