"""Batch application of replacements on top of the segmented buffer."""

from .models import PatchData, PatchOutcome, Replacement
from .session import PatchSession, Source, apply_replacements

__all__ = [
    "PatchData",
    "PatchOutcome",
    "PatchSession",
    "Replacement",
    "Source",
    "apply_replacements",
]
