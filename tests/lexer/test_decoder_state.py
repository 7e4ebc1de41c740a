"""Tests for decoder state handling.

Covers the dispatch loop, single-use sessions, prefix and buffer state
carried between elements, laziness, and debug logging.
"""

import io
import logging

import pytest

from streamini import DecodeError, Decoder, DecoderState, ParseError, ReaderConfig, TRUE


class CountingStream:
    """Binary stream that counts read() calls."""

    def __init__(self, data: bytes) -> None:
        self._buf = io.BytesIO(data)
        self.reads = 0

    def read(self, size: int = -1) -> bytes:
        self.reads += 1
        return self._buf.read(size)


class TestDispatch:
    """The handler table drives every transition."""

    def test_every_state_has_a_handler(self) -> None:
        """Each DecoderState is registered."""
        decoder = Decoder("")
        assert set(decoder._handlers) == set(DecoderState)

    def test_missing_handler_is_internal_error(self) -> None:
        """Reaching a state with no handler raises DecodeError."""
        decoder = Decoder("key")
        del decoder._handlers[DecoderState.KEY]

        with pytest.raises(DecodeError, match="KEY"):
            list(decoder.pairs())

    def test_decode_error_is_not_parse_error(self) -> None:
        """Internal failures are distinct from syntax errors."""
        assert not issubclass(DecodeError, ParseError)


class TestSession:
    """Decoders are single-use."""

    def test_second_decode_rejected(self) -> None:
        """Calling pairs() twice raises DecodeError."""
        decoder = Decoder("k = v")
        assert list(decoder.pairs()) == [("k", "v")]

        with pytest.raises(DecodeError, match="single-use"):
            list(decoder.pairs())

    def test_construction_reads_nothing(self) -> None:
        """No input is consumed until iteration starts."""
        stream = CountingStream(b"k = v")
        pairs = Decoder(stream).pairs()
        assert stream.reads == 0

        assert next(pairs) == ("k", "v")
        assert stream.reads > 0

    def test_pairs_are_yielded_incrementally(self) -> None:
        """The first pair is available before the rest of the input is read."""
        stream = CountingStream(b"a = 1\n" + b"b = 2\n" * 100)
        pairs = Decoder(stream).pairs()

        assert next(pairs) == ("a", "1")
        assert stream.reads < 20


class TestPrefixState:
    """Section prefix carried between elements."""

    def test_prefix_applies_until_next_header(self) -> None:
        """Every key after a header gets its prefix."""
        pairs = list(Decoder("[s]\na\nb = 1\n[t]\nc").pairs())
        assert pairs == [("s.a", TRUE), ("s.b", "1"), ("t.c", TRUE)]

    def test_header_replaces_prefix(self) -> None:
        """A second header does not nest inside the first."""
        pairs = list(Decoder("[a b]\n[c]\nk").pairs())
        assert pairs == [("c.k", TRUE)]

    def test_empty_header_resets_prefix(self) -> None:
        """[] returns to unprefixed keys."""
        pairs = list(Decoder("[a]\n[]\nk").pairs())
        assert pairs == [("k", TRUE)]


class TestBufferState:
    """The buffer never leaks between elements."""

    def test_value_does_not_leak_into_next_key(self) -> None:
        """Each key starts from an empty buffer."""
        pairs = list(Decoder('a = "xyz"\nb = `raw`\nc = plain\nd').pairs())
        assert pairs == [("a", "xyz"), ("b", "raw"), ("c", "plain"), ("d", TRUE)]

    def test_comment_between_pairs(self) -> None:
        """Comments leave no residue."""
        pairs = list(Decoder("a = 1 ; one\n# two\nb = 2").pairs())
        assert pairs == [("a", "1"), ("b", "2")]

    def test_config_resolved_at_construction(self) -> None:
        """The decoder copies what it needs from its config."""
        decoder = Decoder("[a]\nk", ReaderConfig(separator="/", flag_value="on"))
        assert list(decoder.pairs()) == [("a/k", "on")]


class TestLogging:
    """Debug logging around each decode."""

    def test_logs_start_and_finish(self, caplog: pytest.LogCaptureFixture) -> None:
        """A successful decode logs its start and the pair count."""
        caplog.set_level(logging.DEBUG, logger="streamini")
        list(Decoder("a = 1\nb = 2", source_file="app.ini").pairs())

        messages = [record.getMessage() for record in caplog.records]
        assert "decoding app.ini" in messages
        assert "decoded 2 values from app.ini" in messages

    def test_logs_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        """A failed decode logs the error before raising it."""
        caplog.set_level(logging.DEBUG, logger="streamini")
        with pytest.raises(ParseError):
            list(Decoder("= x").pairs())

        assert any(record.getMessage().startswith("decode failed") for record in caplog.records)
        assert all(record.name.startswith("streamini.") for record in caplog.records)
