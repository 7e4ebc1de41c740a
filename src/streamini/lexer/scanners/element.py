"""Top-level element scanner mixin."""

from streamini.lexer.charsets import COMMENT_START, NEWLINE, SECTION_OPEN, is_space
from streamini.lexer.modes import DecoderState
from streamini.stringbuilder import StringBuilder


class ElementScannerMixin:
    """Mixin providing the start, element, and comment states.

    These states sit between tokens: nothing is buffered, so end of input
    here always finishes cleanly.

    """

    # These will be set by the Decoder class
    _current: str
    _buffer: StringBuilder

    def _next(self) -> str:
        """Consume next rune. Implemented by Decoder."""
        raise NotImplementedError

    def _skip_space(self, *, newlines: bool) -> str:
        """Skip whitespace. Implemented by Decoder."""
        raise NotImplementedError

    def _read_until(self, is_stop, *, buffer=False, casefold=None) -> str:
        """Consume runes up to a terminator. Implemented by Decoder."""
        raise NotImplementedError

    def _start(self) -> DecoderState | None:
        """Read the first rune of input."""
        if not self._next():
            return None
        return DecoderState.ELEMENT

    def _read_element(self) -> DecoderState | None:
        """Classify the current rune at the top level.

        Returns:
            SECTION_OPEN for [, COMMENT for # or ;, KEY for anything else
            that isn't whitespace.
        """
        self._buffer.clear()

        char = self._current
        if not char:
            return None
        if char == SECTION_OPEN:
            return DecoderState.SECTION_OPEN
        if char in COMMENT_START:
            return DecoderState.COMMENT
        if is_space(char):
            if not self._skip_space(newlines=True):
                return None
            return DecoderState.ELEMENT
        return DecoderState.KEY

    def _read_comment(self) -> DecoderState | None:
        """Discard runes through the end of the line."""
        if not self._read_until(lambda char: char == NEWLINE):
            return None
        return DecoderState.ELEMENT
