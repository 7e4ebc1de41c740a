"""Value scanner mixin.

Values come in three forms:
- plain: runs to the end of the line or a comment, trailing space trimmed
- quoted ("..."): backslash escapes, "" for a literal quote
- raw (`...`): verbatim, `` for a literal back-quote
"""

from typing import NoReturn

from streamini.errors import IniError, UnclosedError
from streamini.lexer.charsets import (
    ESCAPE,
    COMMENT_START,
    NEWLINE,
    QUOTE,
    RAW_QUOTE,
    STRING_STOP,
    VALUE_END,
    rstrip_space,
)
from streamini.lexer.modes import DecoderState
from streamini.stringbuilder import StringBuilder


class ValueScannerMixin:
    """Mixin providing the value states."""

    # These will be set by the Decoder class
    _current: str
    _buffer: StringBuilder
    _escaped_bytes: bytearray
    _key: str

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

    def _emit(self, key: str, value: str) -> None:
        """Queue a decoded pair. Implemented by Decoder."""
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

    def _read_value(self) -> DecoderState | None:
        """Read the value after =.

        Returns:
            STRING_VALUE or RAW_VALUE at an opening quote, COMMENT if a
            comment follows an empty value, otherwise ELEMENT.
        """
        char = self._skip_space(newlines=False)
        if not char:
            self._emit(self._key, "")
            return None
        if char == NEWLINE:
            self._emit(self._key, "")
            self._next()
            return DecoderState.ELEMENT
        if char == QUOTE:
            return DecoderState.STRING_VALUE
        if char == RAW_QUOTE:
            return DecoderState.RAW_VALUE
        if char in COMMENT_START:
            self._emit(self._key, "")
            return DecoderState.COMMENT

        self._buffer.append(char)
        # Stops at newline, comment, or end of input; ELEMENT handles each
        self._read_until(VALUE_END.__contains__, buffer=True)
        self._emit(self._key, rstrip_space(self._buffer.build()))
        return DecoderState.ELEMENT

    def _read_string_value(self) -> DecoderState:
        """Read the remainder of a double-quoted value."""
        if self._escaped_bytes and self._peek() != ESCAPE:
            self._flush_escaped_bytes()
        char = self._read_until(STRING_STOP.__contains__, buffer=True)
        if not char:
            self._fail(UnclosedError(QUOTE), "encountered EOF inside string")

        if char == QUOTE:
            if self._peek() == QUOTE:
                self._buffer.append(QUOTE)
                self._next()
                return DecoderState.STRING_VALUE
            self._emit(self._key, self._buffer.build())
            self._next()
            return DecoderState.ELEMENT

        self._read_escape("encountered EOF inside string")
        return DecoderState.STRING_VALUE

    def _read_raw_value(self) -> DecoderState:
        """Read the remainder of a back-quoted value. No escapes apply."""
        if not self._read_until(lambda char: char == RAW_QUOTE, buffer=True):
            self._fail(UnclosedError(RAW_QUOTE), "encountered EOF inside raw string")

        if self._peek() == RAW_QUOTE:
            self._buffer.append(RAW_QUOTE)
            self._next()
            return DecoderState.RAW_VALUE
        self._emit(self._key, self._buffer.build())
        self._next()
        return DecoderState.ELEMENT
