"""Segment records making up a segmented buffer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class SegmentState(str, Enum):
    """Whether a segment still holds original input or came from a replacement."""

    UNTOUCHED = "untouched"
    TOUCHED = "touched"


@dataclass(frozen=True, slots=True)
class Segment:
    """Immutable run of bytes covering the logical range ``[start, end)``.

    ``end - start`` is measured in the coordinates of the original input, so
    it only matches ``len(data)`` for segments that were never replaced.
    """

    state: SegmentState
    start: int
    end: int
    data: bytes = b""

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid segment range [{self.start}, {self.end})")
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))

    @property
    def touched(self) -> bool:
        return self.state is SegmentState.TOUCHED

    def cut(self, start: int, end: int, data: bytes) -> "Segment":
        """Return a piece of this segment, keeping its state."""

        return replace(self, start=start, end=end, data=data)


__all__ = ["Segment", "SegmentState"]
