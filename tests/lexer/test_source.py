"""Tests for the rune source adapter.

The adapter is the only place that touches the underlying input, so these
tests pin down lookahead, sticky end of input, UTF-8 decoding, and error
propagation.
"""

from __future__ import annotations

import io

import pytest

from streamini.lexer.source import EOF, REPLACEMENT_CHAR, RuneSource


class CountingStream:
    """Binary stream that counts read() calls."""

    def __init__(self, data: bytes) -> None:
        self._buf = io.BytesIO(data)
        self.reads = 0

    def read(self, size: int = -1) -> bytes:
        self.reads += 1
        return self._buf.read(size)


class FailingStream:
    """Binary stream that raises after yielding its data."""

    def __init__(self, data: bytes, exc: Exception) -> None:
        self._buf = io.BytesIO(data)
        self._exc = exc

    def read(self, size: int = -1) -> bytes:
        chunk = self._buf.read(size)
        if not chunk:
            raise self._exc
        return chunk


def drain(src: RuneSource) -> str:
    out = []
    while char := src.next():
        out.append(char)
    return "".join(out)


class TestInputKinds:
    """Every supported input kind yields the same runes."""

    @pytest.mark.parametrize(
        "source",
        [
            "käkə-pō 😀",
            "käkə-pō 😀".encode(),
            bytearray("käkə-pō 😀".encode()),
            memoryview("käkə-pō 😀".encode()),
            io.StringIO("käkə-pō 😀"),
            io.BytesIO("käkə-pō 😀".encode()),
        ],
        ids=["str", "bytes", "bytearray", "memoryview", "text-stream", "binary-stream"],
    )
    def test_decodes_runes(self, source: object) -> None:
        assert drain(RuneSource(source)) == "käkə-pō 😀"

    def test_rejects_unreadable_input(self) -> None:
        with pytest.raises(TypeError, match="int"):
            RuneSource(42)


class TestLookahead:
    """peek() followed by next() returns the same rune once."""

    def test_peek_then_next(self) -> None:
        src = RuneSource("ab")
        assert src.peek() == "a"
        assert src.peek() == "a"
        assert src.next() == "a"
        assert src.next() == "b"
        assert src.next() == EOF

    def test_peek_does_not_reread_stream(self) -> None:
        stream = CountingStream(b"xy")
        src = RuneSource(stream)
        src.peek()
        src.next()
        assert stream.reads == 1

    def test_peek_at_end(self) -> None:
        src = RuneSource("a")
        src.next()
        assert src.peek() == EOF
        assert src.next() == EOF


class TestEndOfInput:
    """End of input is sticky."""

    def test_eof_is_sticky(self) -> None:
        stream = CountingStream(b"a")
        src = RuneSource(stream)
        assert src.next() == "a"
        assert src.next() == EOF
        reads = stream.reads

        for _ in range(5):
            assert src.next() == EOF
            assert src.peek() == EOF
        assert stream.reads == reads


class TestUtf8Decoding:
    """Byte input decoding, including invalid sequences."""

    @pytest.mark.parametrize("wrap", [bytes, io.BytesIO], ids=["bytes", "binary-stream"])
    def test_invalid_lead_byte(self, wrap) -> None:
        assert drain(RuneSource(wrap(b"a\xffb"))) == f"a{REPLACEMENT_CHAR}b"

    @pytest.mark.parametrize("wrap", [bytes, io.BytesIO], ids=["bytes", "binary-stream"])
    def test_invalid_continuation(self, wrap) -> None:
        # Only the lead byte is replaced; the byte after it is kept
        assert drain(RuneSource(wrap(b"\xe2ab c"))) == f"{REPLACEMENT_CHAR}ab c"

    @pytest.mark.parametrize("wrap", [bytes, io.BytesIO], ids=["bytes", "binary-stream"])
    def test_newline_after_bad_lead_byte(self, wrap) -> None:
        assert drain(RuneSource(wrap(b"\xe2\nx"))) == f"{REPLACEMENT_CHAR}\nx"

    @pytest.mark.parametrize("wrap", [bytes, io.BytesIO], ids=["bytes", "binary-stream"])
    def test_broken_sequence_then_valid_rune(self, wrap) -> None:
        # A three-byte prefix cut short by a new lead byte
        data = b"\xe2\x82\xc3\xa9"
        assert drain(RuneSource(wrap(data))) == f"{REPLACEMENT_CHAR}\u00e9"

    @pytest.mark.parametrize(
        "data",
        [b"\xed\xa0\x80", b"\xe0\x80\x80", b"\xf4\x90\x80\x80", b"\xc0\xaf"],
        ids=["surrogate", "overlong-3", "above-max", "overlong-2"],
    )
    def test_disallowed_sequences_match_codec(self, data: bytes) -> None:
        expected = data.decode("utf-8", "replace")
        assert drain(RuneSource(io.BytesIO(data))) == expected

    @pytest.mark.parametrize("wrap", [bytes, io.BytesIO], ids=["bytes", "binary-stream"])
    def test_truncated_sequence_at_end(self, wrap) -> None:
        assert drain(RuneSource(wrap(b"a\xe2\x82"))) == f"a{REPLACEMENT_CHAR}"

    def test_four_byte_sequence(self) -> None:
        assert drain(RuneSource(io.BytesIO("\U0001f600".encode()))) == "\U0001f600"


class TestErrorPropagation:
    """Stream errors are raised unchanged."""

    def test_next_raises_stream_error(self) -> None:
        src = RuneSource(FailingStream(b"a", OSError("disk gone")))
        assert src.next() == "a"
        with pytest.raises(OSError, match="disk gone"):
            src.next()

    def test_peek_defers_error_to_next(self) -> None:
        src = RuneSource(FailingStream(b"a", OSError("disk gone")))
        src.next()
        assert src.peek() == EOF
        with pytest.raises(OSError, match="disk gone"):
            src.next()
