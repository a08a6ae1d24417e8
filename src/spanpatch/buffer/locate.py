"""Logical offset to segment position conversion.

Every replacement step goes through these helpers so that logical offsets
(positions in the original input) and byte offsets inside a segment's payload
are never mixed up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .segment import Segment


@dataclass(frozen=True, slots=True)
class SegmentLocation:
    index: int
    offset: int  # byte offset into segments[index].data


def saturating_sub(left: int, right: int) -> int:
    return left - right if left > right else 0


def left_cut(segment: Segment, start: int) -> int:
    """Number of leading payload bytes that lie before ``start``."""

    return min(saturating_sub(start, segment.start), len(segment.data))


def right_cut(segment: Segment, end: int) -> int:
    """Payload offset where the part at/after ``end`` begins.

    An ``end`` at or past the segment's logical end keeps nothing; otherwise
    the offset never exceeds the last payload byte.
    """

    if end >= segment.end:
        return len(segment.data)
    return min(saturating_sub(end, segment.start), saturating_sub(len(segment.data), 1))


def locate_start(segments: Sequence[Segment], offset: int) -> Optional[SegmentLocation]:
    """Find the segment holding ``offset``: the last one starting at or before it."""

    if offset < 0:
        return None
    found: Optional[int] = None
    for index, segment in enumerate(segments):
        if segment.start > offset:
            break
        found = index
    if found is None:
        return None
    return SegmentLocation(found, left_cut(segments[found], offset))


def locate_end(
    segments: Sequence[Segment], offset: int, *, first: int = 0
) -> Optional[SegmentLocation]:
    """Find the first segment from ``first`` onwards whose range reaches ``offset``.

    ``None`` means ``offset`` lies past everything the buffer represents.
    """

    for index in range(first, len(segments)):
        segment = segments[index]
        if segment.end >= offset:
            return SegmentLocation(index, right_cut(segment, offset))
    return None


__all__ = [
    "SegmentLocation",
    "left_cut",
    "locate_end",
    "locate_start",
    "right_cut",
    "saturating_sub",
]
