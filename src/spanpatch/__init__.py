"""Byte buffers that apply localized, touch-tracked range replacements."""

from .buffer import (
    NoCoveringSegmentError,
    ReplaceError,
    Segment,
    SegmentState,
    SegmentedBuffer,
    TouchConflictError,
    construct,
    flatten,
    replace_range,
    replace_range_unless_touched,
)
from .patches import PatchOutcome, PatchSession, Replacement, apply_replacements

__all__ = [
    "NoCoveringSegmentError",
    "PatchOutcome",
    "PatchSession",
    "ReplaceError",
    "Replacement",
    "Segment",
    "SegmentState",
    "SegmentedBuffer",
    "TouchConflictError",
    "apply_replacements",
    "construct",
    "flatten",
    "replace_range",
    "replace_range_unless_touched",
]

__version__ = "0.1.0"
