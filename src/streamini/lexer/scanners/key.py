"""Key scanner mixin."""

from collections.abc import Callable
from typing import NoReturn

from streamini.errors import BadCharError, EmptyKeyError, IniError
from streamini.lexer.charsets import (
    COMMENT_START,
    EQUALS,
    NEWLINE,
    QUOTE,
    RAW_QUOTE,
    is_key_end,
)
from streamini.lexer.modes import DecoderState
from streamini.stringbuilder import StringBuilder


class KeyScannerMixin:
    """Mixin providing the key and value-separator states.

    A key with no "= value" clause is a flag and is recorded with the
    configured flag value.

    """

    # These will be set by the Decoder class
    _current: str
    _buffer: StringBuilder
    _prefix: str
    _key: str
    _flag_value: str
    _casefold: Callable[[str], str] | None

    def _next(self) -> str:
        """Consume next rune. Implemented by Decoder."""
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

    def _emit(self, key: str, value: str) -> None:
        """Queue a decoded pair. Implemented by Decoder."""
        raise NotImplementedError

    def _fail(self, cause: IniError, description: str = "") -> NoReturn:
        """Raise a ParseError at the current position. Implemented by Decoder."""
        raise NotImplementedError

    def _read_key(self) -> DecoderState | None:
        """Buffer a key, prefixed by the current section.

        The current rune is the first rune of the key.
        """
        char = self._current
        if char == EQUALS:
            self._fail(EmptyKeyError(), "keys may not be blank")
        if char in (QUOTE, RAW_QUOTE):
            self._fail(BadCharError(char), "keys may not be quoted strings")

        self._buffer.append(self._prefix)
        self._buffer.append(self._fold(char))
        if not self._read_until(is_key_end, buffer=True, casefold=self._casefold):
            # Input ended right after the key
            self._emit(self._buffer.build(), self._flag_value)
            return None

        self._key = self._buffer.build()
        self._buffer.clear()
        return DecoderState.VALUE_SEPARATOR

    def _read_value_separator(self) -> DecoderState | None:
        """Expect =, a newline, or a comment after a key.

        Only spaces, tabs and carriage returns may sit between the key and
        what follows it.
        """
        char = self._skip_space(newlines=False)
        if not char:
            self._emit(self._key, self._flag_value)
            return None
        if char == NEWLINE:
            self._emit(self._key, self._flag_value)
            self._next()
            return DecoderState.ELEMENT
        if char == EQUALS:
            if not self._next():
                self._emit(self._key, "")
                return None
            return DecoderState.VALUE
        if char in COMMENT_START:
            self._emit(self._key, self._flag_value)
            return DecoderState.COMMENT
        self._fail(BadCharError(char), "expected either =, newline, or a comment")
