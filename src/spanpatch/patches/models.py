"""Records describing replacements and their outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from spanpatch.buffer import ReplaceError

PatchData = Union[bytes, bytearray, memoryview, str]


def _as_bytes(data: PatchData) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


@dataclass(frozen=True, slots=True)
class Replacement:
    """Replace the logical range ``[start, end)`` of a source with ``data``.

    Text payloads are stored UTF-8 encoded.
    """

    start: int
    end: int
    data: bytes = b""

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError("start cannot be negative")
        if self.end < self.start:
            raise ValueError(f"end {self.end} precedes start {self.start}")
        object.__setattr__(self, "data", _as_bytes(self.data))

    @classmethod
    def insert(cls, at: int, data: PatchData) -> "Replacement":
        return cls(at, at, _as_bytes(data))

    @classmethod
    def delete(cls, start: int, end: int) -> "Replacement":
        return cls(start, end, b"")

    def overlaps(self, other: "Replacement") -> bool:
        return self.start < other.end and other.start < self.end


@dataclass(slots=True)
class PatchOutcome:
    replacement: Replacement
    applied: bool
    error: Optional[ReplaceError] = None

    @property
    def reason(self) -> str:
        return "" if self.error is None else str(self.error)


__all__ = ["PatchData", "PatchOutcome", "Replacement"]
