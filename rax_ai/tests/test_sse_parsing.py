"""Line assembly and event translation for server-sent event bodies."""

from __future__ import annotations

import pytest

from rax_ai.base.streaming import (
    TERMINAL_CHUNK,
    LineBuffer,
    StreamChunk,
    accumulate_chunks,
    event_data,
    translate_payload,
)


def test_line_split_across_reads_is_held_back():
    buf = LineBuffer()
    assert buf.feed(b'data: {"choices":[{"delta":{"con') == []  # nosec B101
    assert buf.pending.startswith("data: ")  # nosec B101
    assert buf.feed(b'tent":"Hi"}}]}\ndata: [DO') == ['data: {"choices":[{"delta":{"content":"Hi"}}]}']  # nosec B101
    assert buf.feed(b"NE]\n") == ["data: [DONE]"]  # nosec B101
    assert buf.pending == ""  # nosec B101


def test_multiple_lines_in_one_read_and_crlf():
    buf = LineBuffer()
    lines = buf.feed(b"data: a\r\n\r\ndata: b\n: keep-alive\n")
    assert lines == ["data: a", "", "data: b", ": keep-alive"]  # nosec B101


def test_multibyte_utf8_split_across_reads():
    encoded = "data: café ☃\n".encode("utf-8")
    split = encoded.index(b"\xc3") + 1  # inside the two-byte sequence
    buf = LineBuffer()
    assert buf.feed(encoded[:split]) == []  # nosec B101
    assert buf.feed(encoded[split:]) == ["data: café ☃"]  # nosec B101


def test_close_returns_unterminated_remainder():
    buf = LineBuffer()
    buf.feed(b"data: partial")
    assert buf.close() == "data: partial"  # nosec B101
    assert buf.pending == ""  # nosec B101


def test_str_input_accepted():
    assert LineBuffer().feed("data: x\n") == ["data: x"]  # nosec B101


@pytest.mark.parametrize(
    "line,expected",
    [
        ("data: hello", "hello"),
        ("data:hello", "hello"),
        ("data:   [DONE]  ", "[DONE]"),
        ("event: message", None),
        (": comment", None),
        ("", None),
        ("id: 7", None),
    ],
)
def test_event_data(line, expected):
    assert event_data(line) == expected  # nosec B101


def test_translate_payload_variants():
    assert translate_payload("[DONE]") is TERMINAL_CHUNK  # nosec B101
    assert translate_payload('{"choices":[{"delta":{"content":"Hi"}}]}') == StreamChunk("Hi")  # nosec B101
    assert translate_payload('{"choices":[{"delta":{"role":"assistant"}}]}') is None  # nosec B101
    assert translate_payload('{"choices":[{"delta":{"content":""}}]}') is None  # nosec B101
    assert translate_payload('{"choices":[]}') is None  # nosec B101
    assert translate_payload("[1, 2]") is None  # nosec B101
    with pytest.raises(ValueError):
        translate_payload("{not json")


def test_accumulate_chunks_stops_at_terminal():
    chunks = [StreamChunk("Hel"), StreamChunk("lo"), TERMINAL_CHUNK, StreamChunk("ignored")]
    assert accumulate_chunks(chunks) == "Hello"  # nosec B101
