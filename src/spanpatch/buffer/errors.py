"""Errors raised by range replacement."""

from __future__ import annotations

from typing import Iterable

from .segment import Segment


class ReplaceError(RuntimeError):
    """Base class for rejected replacements. The buffer is left unmodified."""

    def __init__(self, message: str, *, start: int, end: int) -> None:
        super().__init__(message)
        self.start = start
        self.end = end


class NoCoveringSegmentError(ReplaceError):
    """Raised when no segment covers the start of the requested range."""

    def __init__(self, start: int, end: int) -> None:
        super().__init__(
            f"no segment covers the start of range [{start}, {end})",
            start=start,
            end=end,
        )


class TouchConflictError(ReplaceError):
    """Raised when a guarded replacement overlaps an already replaced segment."""

    def __init__(self, start: int, end: int, conflicts: Iterable[Segment]) -> None:
        conflicts_tuple = tuple(conflicts)
        spans = ", ".join(f"[{seg.start}, {seg.end})" for seg in conflicts_tuple)
        super().__init__(
            f"range [{start}, {end}) overlaps previously replaced segment(s) {spans}",
            start=start,
            end=end,
        )
        self.conflicts = conflicts_tuple


__all__ = ["NoCoveringSegmentError", "ReplaceError", "TouchConflictError"]
