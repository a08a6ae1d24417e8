"""Apply batches of replacements to a single source."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple, Union

from spanpatch.buffer import BytesLike, ReplaceError, SegmentedBuffer
from spanpatch.runtime import telemetry

from .models import PatchOutcome, Replacement

Source = Union[BytesLike, str]


def _source_bytes(source: Source, encoding: str) -> bytes:
    if isinstance(source, str):
        return source.encode(encoding)
    return bytes(source)


class PatchSession:
    """Collects replacements against one source, recording which were rejected.

    Rejected replacements are kept as outcomes instead of being raised so a
    caller can apply every non-conflicting patch and report the rest.
    """

    def __init__(
        self,
        source: Source,
        *,
        reject_if_touched: bool = True,
        encoding: str = "utf-8",
        name: str = "patch",
    ) -> None:
        self.encoding = encoding
        self.reject_if_touched = reject_if_touched
        self.buffer = SegmentedBuffer(_source_bytes(source, encoding), name=name)
        self._outcomes: List[PatchOutcome] = []

    @property
    def outcomes(self) -> Tuple[PatchOutcome, ...]:
        return tuple(self._outcomes)

    @property
    def applied(self) -> Tuple[Replacement, ...]:
        return tuple(o.replacement for o in self._outcomes if o.applied)

    @property
    def rejected(self) -> Tuple[PatchOutcome, ...]:
        return tuple(o for o in self._outcomes if not o.applied)

    def apply(self, replacement: Replacement) -> PatchOutcome:
        try:
            self.buffer.replace_range(
                replacement.start,
                replacement.end,
                replacement.data,
                self.reject_if_touched,
            )
        except ReplaceError as exc:
            outcome = PatchOutcome(replacement, applied=False, error=exc)
        else:
            outcome = PatchOutcome(replacement, applied=True)
        self._outcomes.append(outcome)
        return outcome

    def apply_all(self, replacements: Iterable[Replacement]) -> List[PatchOutcome]:
        with telemetry.span(
            "patches::apply",
            component="patches",
            metadata={"buffer": self.buffer.name},
        ) as handle:
            outcomes = [self.apply(replacement) for replacement in replacements]
            handle.add_metadata("applied", sum(1 for o in outcomes if o.applied))
            handle.add_metadata("rejected", sum(1 for o in outcomes if not o.applied))
        return outcomes

    def finish(self) -> bytes:
        return self.buffer.to_bytes()

    def finish_text(self, encoding: Optional[str] = None) -> str:
        return self.buffer.to_text(encoding or self.encoding)


def apply_replacements(
    source: Source,
    replacements: Iterable[Replacement],
    *,
    reject_if_touched: bool = True,
    encoding: str = "utf-8",
) -> bytes:
    """Apply ``replacements`` in order and return the patched bytes.

    The first rejected replacement propagates its ``ReplaceError``.
    """

    buffer = SegmentedBuffer(_source_bytes(source, encoding))
    with telemetry.span("patches::apply_replacements", component="patches"):
        for replacement in replacements:
            buffer.replace_range(
                replacement.start, replacement.end, replacement.data, reject_if_touched
            )
    return buffer.to_bytes()


__all__ = ["PatchSession", "Source", "apply_replacements"]
