"""Rune source adapter.

Wraps any supported input and hands the decoder one Unicode character
(rune) at a time, with one rune of lookahead.

Supported inputs:
- str: read directly
- bytes, bytearray, memoryview: decoded as UTF-8 up front, then read as str
- text streams (``read(1)`` returns str): read directly, one character per call
- binary streams (``read(1)`` returns bytes): decoded as UTF-8 one byte at a time

Invalid UTF-8 becomes U+FFFD, one replacement per maximal invalid
subsequence; the byte that broke a sequence is decoded again on its own, so
a line feed after a bad lead byte is never lost.

End of input is reported as the empty string and is sticky: once seen, the
underlying stream is never read again. Anything the stream raises is
propagated unchanged.

Thread Safety:
RuneSource instances are single-use and owned by one decode session.

"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

# Substituted for byte runs that never form a complete UTF-8 encoding.
REPLACEMENT_CHAR = "\ufffd"

# Marker for input end, returned by next() and peek().
EOF = ""


def _utf8_lead(lead: int) -> tuple[int, int, int]:
    """Describe the sequence a UTF-8 lead byte starts.

    Returns:
        (width, low, high): the encoded length, and the allowed range of the
        first continuation byte. width is 0 for bytes that cannot start a
        sequence.
    """
    if lead < 0x80:
        return 1, 0, 0
    if 0xC2 <= lead <= 0xDF:
        return 2, 0x80, 0xBF
    if lead == 0xE0:
        return 3, 0xA0, 0xBF
    if lead == 0xED:
        # No surrogates
        return 3, 0x80, 0x9F
    if 0xE1 <= lead <= 0xEF:
        return 3, 0x80, 0xBF
    if lead == 0xF0:
        return 4, 0x90, 0xBF
    if lead == 0xF4:
        # Nothing above U+10FFFF
        return 4, 0x80, 0x8F
    if 0xF1 <= lead <= 0xF3:
        return 4, 0x80, 0xBF
    return 0, 0, 0


class RuneSource:
    """One-rune-at-a-time reader with a single lookahead slot.

    The lookahead slot holds either a rune or the exception raised while
    filling it. ``peek()`` followed by ``next()`` returns the same rune
    without reading the underlying input twice; an exception raised during
    ``peek()`` is held and re-raised by the following ``next()``.

    Usage:
            >>> src = RuneSource("ab")
            >>> src.peek(), src.next(), src.next(), src.next()
            ('a', 'a', 'b', '')

    """

    __slots__ = (
        "_read_rune",
        "_stream",
        "_pushback",  # Byte that ended an invalid sequence, decoded next
        "_eof",
        "_has_next",
        "_next_rune",
        "_next_error",
    )

    def __init__(self, source: Any) -> None:
        """Initialize from a string, bytes-like object, or readable stream.

        Args:
            source: Input to decode

        Raises:
            TypeError: If source is none of the supported input kinds
        """
        self._stream: Any = None
        self._pushback: int | None = None
        self._read_rune: Callable[[], str]
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = bytes(source).decode("utf-8", "replace")
        if isinstance(source, str):
            chars = iter(source)
            self._read_rune = lambda: next(chars, EOF)
        elif callable(getattr(source, "read", None)):
            self._stream = source
            self._read_rune = self._read_stream_rune
        else:
            raise TypeError(
                f"expected str, bytes, or a readable stream, got {type(source).__name__}"
            )

        self._eof = False

        # Lookahead slot
        self._has_next = False
        self._next_rune = EOF
        self._next_error: Exception | None = None

    def next(self) -> str:
        """Consume and return the next rune, or EOF ("") at end of input.

        Raises:
            Exception: Whatever the underlying stream raised, including an
                error deferred from a previous peek()
        """
        if self._eof:
            return EOF

        if self._has_next:
            self._has_next = False
            rune, error = self._next_rune, self._next_error
            self._next_rune, self._next_error = EOF, None
            if error is not None:
                raise error
        else:
            rune = self._read_rune()

        if rune == EOF:
            self._eof = True
        return rune

    def peek(self) -> str:
        """Return the next rune without consuming it.

        Returns EOF ("") at end of input and also when reading failed; the
        failure is raised by the next call to next().
        """
        if self._eof:
            return EOF
        if not self._has_next:
            self._has_next = True
            try:
                self._next_rune = self._read_rune()
            except Exception as exc:
                self._next_rune, self._next_error = EOF, exc
        return self._next_rune

    def _read_byte(self) -> int | None:
        """Read one byte from the wrapped binary stream (None at end)."""
        chunk = self._stream.read(1)
        if not chunk:
            return None
        return chunk[0]

    def _read_stream_rune(self) -> str:
        """Read one rune from the wrapped stream."""
        if self._pushback is None:
            chunk = self._stream.read(1)
            if not chunk:
                return EOF
            if isinstance(chunk, str):
                return chunk
            lead = chunk[0]
        else:
            lead, self._pushback = self._pushback, None

        width, low, high = _utf8_lead(lead)
        if width == 1:
            return chr(lead)
        if width == 0:
            return REPLACEMENT_CHAR

        data = bytearray((lead,))
        while len(data) < width:
            byte = self._read_byte()
            if byte is None:
                # Truncated sequence; input ends after the replacement
                return REPLACEMENT_CHAR
            if not low <= byte <= high:
                self._pushback = byte
                return REPLACEMENT_CHAR
            data.append(byte)
            low, high = 0x80, 0xBF
        return data.decode("utf-8")
