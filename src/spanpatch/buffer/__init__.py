"""Segmented byte buffer and its range-replacement primitives."""

from .errors import NoCoveringSegmentError, ReplaceError, TouchConflictError
from .locate import SegmentLocation, locate_end, locate_start
from .segment import Segment, SegmentState
from .segmented import (
    BytesLike,
    SegmentedBuffer,
    construct,
    find_segment,
    flatten,
    replace_range,
    replace_range_unless_touched,
)

__all__ = [
    "BytesLike",
    "NoCoveringSegmentError",
    "ReplaceError",
    "Segment",
    "SegmentLocation",
    "SegmentState",
    "SegmentedBuffer",
    "TouchConflictError",
    "construct",
    "find_segment",
    "flatten",
    "locate_end",
    "locate_start",
    "replace_range",
    "replace_range_unless_touched",
]
