"""State-machine decoder for INI input.

Consumes a rune stream one character at a time (with one rune of
lookahead), accumulates keys and values in a buffer, and reports each
completed (key, value) pair in document order.

Each state is a handler method returning the next DecoderState, or None
when input ended at a point where no token is pending. A single loop
dispatches handlers; there is no recursion and no backtracking.

Thread Safety:
Decoder instances are single-use. Create one per input stream.
All state is instance-local; the ReaderConfig it reads is immutable.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, NoReturn

from streamini.config import ReaderConfig, get_reader_config
from streamini.errors import DecodeError, IniError, ParseError
from streamini.lexer.charsets import NEWLINE, is_horizontal_space, is_space
from streamini.lexer.modes import DecoderState
from streamini.lexer.scanners import (
    ElementScannerMixin,
    EscapeScannerMixin,
    KeyScannerMixin,
    SectionScannerMixin,
    ValueScannerMixin,
)
from streamini.lexer.source import RuneSource
from streamini.stringbuilder import StringBuilder
from streamini.utils.logger import get_logger

logger = get_logger(__name__)


class Decoder(
    # Shared by section and value scanners, so it must come first
    EscapeScannerMixin,
    # Scanners (state handlers)
    ElementScannerMixin,
    SectionScannerMixin,
    KeyScannerMixin,
    ValueScannerMixin,
):
    """State-machine INI decoder.

    Usage:
            >>> decoder = Decoder("[core]\\nbare = true\\nflag")
            >>> list(decoder.pairs())
            [('core.bare', 'true'), ('core.flag', '1')]

    Thread Safety:
        Decoder instances are single-use. Create one per input stream.
        All state is instance-local; no shared mutable state.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_current",
        "_lineno",
        "_col",
        "_line_start",  # Last consumed rune was a line feed
        # Storage
        "_buffer",
        "_escaped_bytes",  # Pending \x escape bytes, decoded as a run
        "_prefix",  # Section prefix, prepended to every key
        "_key",  # Key awaiting its value
        "_emitted",
        # Configuration
        "_separator",
        "_casefold",
        "_flag_value",
        # Dispatch
        "_handlers",
        "_started",
    )

    def __init__(
        self,
        source: Any,
        config: ReaderConfig | None = None,
        *,
        source_file: str | None = None,
    ) -> None:
        """Initialize decoder for one input.

        Args:
            source: str, bytes-like object, or readable stream
            config: Reader configuration (uses the context config if None)
            source_file: Optional source file path for error messages
        """
        if config is None:
            config = get_reader_config()

        self._source = RuneSource(source)
        self._source_file = source_file
        self._current = ""
        self._lineno = 1
        self._col = 0
        self._line_start = False

        self._buffer = StringBuilder()
        self._escaped_bytes = bytearray()
        self._prefix = ""
        self._key = ""
        self._emitted: list[tuple[str, str]] = []

        self._separator = config.resolved_separator
        self._casefold: Callable[[str], str] | None = config.casefold
        self._flag_value = config.resolved_flag_value

        self._handlers: dict[DecoderState, Callable[[], DecoderState | None]] = {
            DecoderState.START: self._start,
            DecoderState.ELEMENT: self._read_element,
            DecoderState.COMMENT: self._read_comment,
            DecoderState.SECTION_OPEN: self._read_section_open,
            DecoderState.SUBSECTION: self._read_subsection,
            DecoderState.QUOTED_SUBSECTION: self._read_quoted_subsection,
            DecoderState.KEY: self._read_key,
            DecoderState.VALUE_SEPARATOR: self._read_value_separator,
            DecoderState.VALUE: self._read_value,
            DecoderState.STRING_VALUE: self._read_string_value,
            DecoderState.RAW_VALUE: self._read_raw_value,
        }
        self._started = False

    def pairs(self) -> Iterator[tuple[str, str]]:
        """Decode the input, yielding (key, value) pairs in document order.

        Yields:
            (key, value) tuples; keys include their section prefix

        Raises:
            ParseError: On the first syntax error. Pairs already yielded
                are not retracted.
            DecodeError: If the decoder is reused or reaches an unknown state.
        """
        if self._started:
            raise DecodeError("ini: decoder sessions are single-use")
        self._started = True

        logger.debug("decoding %s", self._source_file or "<stream>")
        count = 0
        state: DecoderState | None = DecoderState.START
        try:
            while state is not None:
                handler = self._handlers.get(state)
                if handler is None:
                    raise DecodeError(f"ini: no handler for decoder state {state!r}")
                state = handler()
                if self._emitted:
                    count += len(self._emitted)
                    yield from self._emitted
                    self._emitted.clear()
        except ParseError as err:
            logger.debug("decode failed: %s", err)
            raise
        logger.debug("decoded %d values from %s", count, self._source_file or "<stream>")

    # =========================================================================
    # Rune navigation helpers
    # =========================================================================

    def _next(self) -> str:
        """Consume the next rune and make it current.

        Updates line/column tracking. A line feed moves to column 1 of the
        next line, and the rune after it stays at column 1.

        Returns:
            The consumed rune, or "" at end of input.
        """
        char = self._source.next()
        self._current = char
        if char == NEWLINE:
            self._lineno += 1
            self._col = 1
            self._line_start = True
        elif char:
            if self._line_start:
                self._line_start = False
            else:
                self._col += 1
        return char

    def _peek(self) -> str:
        """Peek at the next rune without consuming it.

        Returns:
            Next rune or "" at end of input.
        """
        return self._source.peek()

    def _read_until(
        self,
        is_stop: Callable[[str], bool],
        *,
        buffer: bool = False,
        casefold: Callable[[str], str] | None = None,
    ) -> str:
        """Consume runes until one satisfies is_stop or input ends.

        Args:
            is_stop: Predicate for the terminating rune
            buffer: Write consumed runes (not the terminator) to the buffer
            casefold: Optional per-rune case function for buffered runes

        Returns:
            The terminating rune (now current), or "" at end of input.
        """
        out = self._buffer
        while True:
            char = self._next()
            if not char or is_stop(char):
                return char
            if buffer:
                out.append(casefold(char) if casefold is not None else char)

    def _skip_space(self, *, newlines: bool) -> str:
        """Skip whitespace starting at the current rune.

        Args:
            newlines: Skip all Unicode whitespace (True) or only spaces,
                tabs and carriage returns (False)

        Returns:
            The first non-space rune (now current), or "" at end of input.
        """
        is_ws = is_space if newlines else is_horizontal_space
        char = self._current
        while is_ws(char):
            char = self._next()
        return char

    def _fold(self, char: str) -> str:
        """Apply the configured case folding to an unquoted rune."""
        if self._casefold is None:
            return char
        return self._casefold(char)

    # =========================================================================
    # Output and errors
    # =========================================================================

    def _emit(self, key: str, value: str) -> None:
        """Queue a decoded pair for the dispatch loop to yield."""
        self._emitted.append((key, value))

    def _syntax_error(self, cause: IniError, description: str = "") -> ParseError:
        """Build a ParseError at the current position.

        An existing ParseError is returned as-is rather than wrapped again.
        """
        if isinstance(cause, ParseError):
            return cause
        return ParseError(
            cause,
            self._lineno,
            self._col,
            description,
            source_file=self._source_file,
        )

    def _fail(self, cause: IniError, description: str = "") -> NoReturn:
        """Raise a ParseError at the current position."""
        err = self._syntax_error(cause, description)
        if err is cause:
            raise err
        raise err from cause
