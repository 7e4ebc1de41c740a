"""Section header scanner mixin.

A section header replaces the key prefix. Unquoted whitespace splits the
header into segments, joined by the configured separator; quoted segments
are taken verbatim (after escape resolution) and are never case-folded:

    [remote "Origin"]   ->  prefix "remote.Origin."
    [a b c]             ->  prefix "a.b.c."
    []                  ->  no prefix
"""

from collections.abc import Callable
from typing import NoReturn

from streamini.errors import (
    BAD_NEWLINE,
    BadCharError,
    IniError,
    SectionRawStringError,
    UnclosedError,
    UnclosedSectionError,
)
from streamini.lexer.charsets import (
    ESCAPE,
    NEWLINE,
    QUOTE,
    RAW_QUOTE,
    SECTION_CLOSE,
    SECTION_END,
    SECTION_OPEN,
    STRING_STOP,
    is_space,
)
from streamini.lexer.modes import DecoderState
from streamini.stringbuilder import StringBuilder


class SectionScannerMixin:
    """Mixin providing the section header states.

    Ending the input anywhere inside a header is an error: the header would
    otherwise silently apply a partial prefix.

    """

    # These will be set by the Decoder class
    _current: str
    _buffer: StringBuilder
    _escaped_bytes: bytearray
    _prefix: str
    _separator: str
    _casefold: Callable[[str], str] | None

    def _next(self) -> str:
        """Consume next rune. Implemented by Decoder."""
        raise NotImplementedError

    def _peek(self) -> str:
        """Peek next rune. Implemented by Decoder."""
        raise NotImplementedError

    def _skip_space(self, *, newlines: bool) -> str:
        """Skip whitespace. Implemented by Decoder."""
        raise NotImplementedError

    def _read_until(self, is_stop, *, buffer=False, casefold=None) -> str:
        """Consume runes up to a terminator. Implemented by Decoder."""
        raise NotImplementedError

    def _fold(self, char: str) -> str:
        """Apply case folding. Implemented by Decoder."""
        raise NotImplementedError

    def _fail(self, cause: IniError, description: str = "") -> NoReturn:
        """Raise a ParseError at the current position. Implemented by Decoder."""
        raise NotImplementedError

    def _read_escape(self, eof_description: str) -> None:
        """Resolve an escape sequence. Implemented by EscapeScannerMixin."""
        raise NotImplementedError

    def _flush_escaped_bytes(self) -> None:
        """Write pending \\x bytes. Implemented by EscapeScannerMixin."""
        raise NotImplementedError

    def _fail_unclosed_section(self) -> NoReturn:
        self._fail(UnclosedSectionError(), "encountered EOF inside section name")

    def _read_section_open(self) -> DecoderState:
        """Consume the opening bracket."""
        if self._current != SECTION_OPEN:
            self._fail(BadCharError(self._current), "expected an opening bracket ('[')")
        if not self._next():
            self._fail_unclosed_section()
        return DecoderState.SUBSECTION

    def _add_prefix_separator(self) -> None:
        """Separate the previous segment from the next one.

        Nothing is written before the first segment, after a segment that
        already ends with the separator, or when the separator is disabled.
        """
        sep = self._separator
        if not sep or not self._buffer or self._buffer.endswith(sep):
            return
        self._buffer.append(sep)

    def _read_subsection(self) -> DecoderState | None:
        """Read one unquoted segment of a section header, or close it.

        Returns:
            ELEMENT once the header closes, QUOTED_SUBSECTION at a quote,
            otherwise SUBSECTION for the next segment.
        """
        self._add_prefix_separator()

        char = self._current
        if char == SECTION_CLOSE:
            # Replace the prefix wholesale
            self._prefix = self._buffer.build()
            if not self._next():
                return None
            return DecoderState.ELEMENT
        if char == RAW_QUOTE:
            self._fail(SectionRawStringError(), "raw strings are not allowed in section names")
        if char == QUOTE:
            return DecoderState.QUOTED_SUBSECTION
        if char in (" ", "\t"):
            if not self._skip_space(newlines=False):
                self._fail_unclosed_section()
            return DecoderState.SUBSECTION
        if char == NEWLINE:
            self._fail(BAD_NEWLINE, "section headings may not contain unquoted newlines")
        if is_space(char):
            self._fail(BadCharError(char), "expected section name")
        if not char:
            self._fail_unclosed_section()

        self._buffer.append(self._fold(char))
        if not self._read_until(SECTION_END.__contains__, buffer=True, casefold=self._casefold):
            self._fail_unclosed_section()
        return DecoderState.SUBSECTION

    def _read_quoted_subsection(self) -> DecoderState:
        """Read a double-quoted segment of a section header.

        A doubled quote ("") is a literal quote; backslash escapes work as
        in quoted values.
        """
        if self._escaped_bytes and self._peek() != ESCAPE:
            self._flush_escaped_bytes()
        char = self._read_until(STRING_STOP.__contains__, buffer=True)
        if not char:
            self._fail(UnclosedError(QUOTE), "encountered EOF inside quoted section name")

        if char == QUOTE:
            if self._peek() == QUOTE:
                self._buffer.append(QUOTE)
                self._next()
                return DecoderState.QUOTED_SUBSECTION
            if not self._next():
                self._fail_unclosed_section()
            return DecoderState.SUBSECTION

        self._read_escape("encountered EOF inside quoted section name")
        return DecoderState.QUOTED_SUBSECTION
