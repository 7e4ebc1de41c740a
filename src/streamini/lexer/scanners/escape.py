"""Escape sequence scanner mixin.

Shared by quoted values and quoted section names. The backslash has already
been consumed when these methods run.
"""

from typing import NoReturn

from streamini.errors import BadCharError, IniError, UnclosedError, UnexpectedEndError
from streamini.lexer.charsets import (
    HEX_ESCAPES,
    QUOTE,
    decode_escaped_bytes,
    decode_hex_code,
    hex_value,
    resolve_escape,
)
from streamini.stringbuilder import StringBuilder


class EscapeScannerMixin:
    """Mixin resolving backslash escapes into the buffer."""

    _buffer: StringBuilder
    _escaped_bytes: bytearray

    def _next(self) -> str:
        """Consume next rune. Implemented by Decoder."""
        raise NotImplementedError

    def _fail(self, cause: IniError, description: str = "") -> NoReturn:
        """Raise a ParseError at the current position. Implemented by Decoder."""
        raise NotImplementedError

    def _read_escape(self, eof_description: str) -> None:
        """Resolve the escape after a backslash and buffer the result.

        ``\\x`` takes 2 hex digits, ``\\u`` 4 and ``\\U`` 8. Single-letter
        escapes resolve through the escape table; any other rune stands
        for itself.

        ``\\x`` escapes name bytes, not characters: consecutive ones are
        held back and decoded together as UTF-8 by _flush_escaped_bytes().

        Args:
            eof_description: Error description if input ends after the backslash
        """
        char = self._next()
        if not char:
            self._fail(UnclosedError(QUOTE), eof_description)

        digits = HEX_ESCAPES.get(char)
        if digits == 2:
            self._escaped_bytes.append(self._read_hex_code(digits))
            return
        self._flush_escaped_bytes()
        if digits is None:
            self._buffer.append(resolve_escape(char))
            return
        self._buffer.append(decode_hex_code(self._read_hex_code(digits)))

    def _flush_escaped_bytes(self) -> None:
        """Write pending \\x bytes to the buffer."""
        if self._escaped_bytes:
            self._buffer.append(decode_escaped_bytes(bytes(self._escaped_bytes)))
            self._escaped_bytes.clear()

    def _read_hex_code(self, size: int) -> int:
        """Read exactly size hex digits and return their value."""
        result = 0
        for _ in range(size):
            char = self._next()
            if not char:
                self._fail(UnexpectedEndError(), "expected hex code")
            digit = hex_value(char)
            if digit is None:
                self._fail(BadCharError(char), "expected hex code")
            result = result << 4 | digit
        return result
