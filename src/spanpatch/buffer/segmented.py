"""Segmented byte buffer with touch-tracked range replacement."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple, Union

from spanpatch.runtime import telemetry

from .errors import NoCoveringSegmentError, TouchConflictError
from .locate import SegmentLocation, locate_end, locate_start
from .segment import Segment, SegmentState

BytesLike = Union[bytes, bytearray, memoryview]


class SegmentedBuffer:
    """Byte content stored as an ordered list of immutable segments.

    Offsets passed to ``replace_range`` are logical: they always refer to
    positions in the input the buffer was built from, no matter how many
    replacements have been applied since. That is what lets independent
    patches computed against the same source be applied in any order.
    """

    def __init__(self, data: BytesLike = b"", *, name: str = "default") -> None:
        self.name = name
        payload = bytes(data)
        self._segments: List[Segment] = []
        if payload:
            self._segments.append(
                Segment(SegmentState.UNTOUCHED, 0, len(payload), payload)
            )

    @classmethod
    def from_text(
        cls, text: str, *, encoding: str = "utf-8", name: str = "default"
    ) -> "SegmentedBuffer":
        return cls(text.encode(encoding), name=name)

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return tuple(self._segments)

    @property
    def logical_end(self) -> int:
        """End of the furthest logical range currently represented."""

        return max((segment.end for segment in self._segments), default=0)

    def __len__(self) -> int:
        return sum(len(segment.data) for segment in self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(tuple(self._segments))

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __repr__(self) -> str:
        return (
            f"SegmentedBuffer(name={self.name!r}, segments={len(self._segments)}, "
            f"size={len(self)})"
        )

    def to_bytes(self) -> bytes:
        return b"".join(segment.data for segment in self._segments)

    def to_text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        return self.to_bytes().decode(encoding, errors)

    def touched_ranges(self) -> List[Tuple[int, int]]:
        """Logical ranges produced by replacements, adjacent ranges merged."""

        merged: List[Tuple[int, int]] = []
        for segment in self._segments:
            if not segment.touched:
                continue
            if merged and merged[-1][1] >= segment.start:
                merged[-1] = (merged[-1][0], max(merged[-1][1], segment.end))
            else:
                merged.append((segment.start, segment.end))
        return merged

    def is_touched(self, start: int, end: int) -> bool:
        """True when a guarded replacement of ``[start, end)`` would conflict."""

        if end == 0:
            return False
        head = locate_start(self._segments, start)
        if head is None:
            return False
        tail = locate_end(self._segments, end, first=head.index)
        return bool(_touched_between(self._segments, head.index, tail))

    def replace_range(
        self,
        start: int,
        end: int,
        data: BytesLike,
        reject_if_touched: bool = False,
    ) -> None:
        """Replace the logical range ``[start, end)`` with ``data``.

        Raises ``NoCoveringSegmentError`` when no segment holds ``start`` and,
        with ``reject_if_touched``, ``TouchConflictError`` when the range runs
        over a segment produced by an earlier replacement. Either way the
        buffer is left as it was.

        An ``end`` past the represented content extends the buffer. ``end == 0``
        is a no-op.
        """

        if end == 0:
            return
        if end < start:
            raise ValueError(f"range end {end} precedes start {start}")
        replacement = bytes(data)

        with telemetry.span(
            "buffer::replace_range",
            component="buffer",
            metadata={"buffer": self.name, "start": start, "end": end},
        ) as handle:
            segments = self._segments
            head = locate_start(segments, start)
            if head is None:
                handle.add_metadata("rejected", "no_covering_segment")
                telemetry.record_event(
                    "buffer.no_covering_segment",
                    level="warning",
                    data={"buffer": self.name, "start": start, "end": end},
                )
                raise NoCoveringSegmentError(start, end)

            tail = locate_end(segments, end, first=head.index)

            if reject_if_touched:
                conflicts = _touched_between(segments, head.index, tail)
                if conflicts:
                    handle.add_metadata("rejected", "touch_conflict")
                    telemetry.record_event(
                        "buffer.touch_conflict",
                        level="warning",
                        data={
                            "buffer": self.name,
                            "start": start,
                            "end": end,
                            "conflicts": len(conflicts),
                        },
                    )
                    raise TouchConflictError(start, end, conflicts)

            rebuilt: List[Segment] = list(segments[: head.index])

            first = segments[head.index]
            if head.offset:
                left = first.data[: head.offset]
                rebuilt.append(first.cut(first.start, min(start, first.end), left))

            rebuilt.append(Segment(SegmentState.TOUCHED, start, end, replacement))

            if tail is not None:
                closing = segments[tail.index]
                remainder = closing.data[tail.offset :]
                if remainder:
                    rebuilt.append(
                        closing.cut(max(end, closing.start), closing.end, remainder)
                    )
                rebuilt.extend(segments[tail.index + 1 :])
            else:
                handle.add_metadata("extended", True)

            self._segments = rebuilt
            handle.add_metadata("segments", len(rebuilt))

    def replace_range_unless_touched(
        self, start: int, end: int, data: BytesLike
    ) -> None:
        self.replace_range(start, end, data, reject_if_touched=True)


def _touched_between(
    segments: List[Segment], first: int, tail: Optional[SegmentLocation]
) -> List[Segment]:
    last = tail.index if tail is not None else len(segments) - 1
    return [segment for segment in segments[first : last + 1] if segment.touched]


def construct(data: BytesLike) -> SegmentedBuffer:
    return SegmentedBuffer(data)


def flatten(buffer: SegmentedBuffer) -> bytes:
    return buffer.to_bytes()


def replace_range(
    buffer: SegmentedBuffer,
    start: int,
    end: int,
    data: BytesLike,
    reject_if_touched: bool,
) -> None:
    buffer.replace_range(start, end, data, reject_if_touched)


def replace_range_unless_touched(
    buffer: SegmentedBuffer, start: int, end: int, data: BytesLike
) -> None:
    buffer.replace_range(start, end, data, reject_if_touched=True)


def find_segment(buffer: SegmentedBuffer, offset: int) -> Optional[Segment]:
    """Return the segment holding logical ``offset``, if any."""

    location = locate_start(buffer.segments, offset)
    return None if location is None else buffer.segments[location.index]


__all__ = [
    "BytesLike",
    "SegmentedBuffer",
    "construct",
    "find_segment",
    "flatten",
    "replace_range",
    "replace_range_unless_touched",
]
