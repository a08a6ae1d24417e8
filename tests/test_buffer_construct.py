from __future__ import annotations

import pytest

from spanpatch.buffer import Segment, SegmentState, SegmentedBuffer, construct, flatten


@pytest.mark.parametrize(
    "source",
    [
        b"",
        b"a",
        b"foo bar baz",
        b"lorem\nipsum\ndolor",
        "héllo wörld ☃".encode("utf-8"),
        bytes(range(256)),
        b"\x00\x00\xff",
    ],
)
def test_flatten_round_trips_constructed_input(source: bytes) -> None:
    assert flatten(construct(source)) == source


def test_empty_input_has_no_segments() -> None:
    buffer = construct(b"")

    assert buffer.segments == ()
    assert len(buffer) == 0
    assert buffer.logical_end == 0


def test_non_empty_input_is_one_untouched_segment() -> None:
    buffer = construct(b"foo")

    assert buffer.segments == (Segment(SegmentState.UNTOUCHED, 0, 3, b"foo"),)
    assert buffer.touched_ranges() == []


def test_input_is_copied() -> None:
    source = bytearray(b"abc")
    buffer = SegmentedBuffer(source)
    source[0] = ord("z")

    assert buffer.to_bytes() == b"abc"


def test_text_helpers_use_encoding() -> None:
    buffer = SegmentedBuffer.from_text("café", name="menu")

    assert buffer.to_bytes() == b"caf\xc3\xa9"
    assert buffer.to_text() == "café"
    assert bytes(buffer) == b"caf\xc3\xa9"
    assert buffer.name == "menu"
    assert "menu" in repr(buffer)


def test_flatten_is_repeatable() -> None:
    buffer = construct(b"foo bar")
    buffer.replace_range(0, 3, b"baz")

    assert buffer.to_bytes() == buffer.to_bytes() == b"baz bar"
