"""Exception classes for streamini.

Provides the structured syntax error raised by the decoder and the cause
types it carries.

A ParseError always wraps exactly one cause:
- BadCharError: a rune that is not allowed where it appeared
- UnclosedError: a quote or bracket opened but never closed
- UnclosedSectionError, SectionRawStringError, EmptyKeyError: named conditions
- UnexpectedEndError: input ended inside a token (truncated input)

I/O failures raised by the underlying stream are never wrapped.
"""

from __future__ import annotations

from streamini.location import SourceLocation

# Opening character -> expected closing character
BRACKET_PAIRS: dict[str, str] = {
    "{": "}",
    "(": ")",
    "[": "]",
    "<": ">",
}


class IniError(Exception):
    """Base exception for all streamini errors.

    Subclass this for specific error categories.
    """

    pass


class BadCharError(IniError):
    """An invalid character encountered during parsing.

    Usually found as the ``cause`` of a ParseError.
    """

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"ini: encountered invalid character {char!r}")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BadCharError):
            return type(self) is type(other) and self.char == other.char
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self), self.char))


class UnclosedError(IniError):
    """An unclosed quote or bracket.

    ``opening`` is the character that was opened; ``expecting`` is the
    character that would have closed it.
    """

    def __init__(self, opening: str, message: str | None = None) -> None:
        self.opening = opening
        super().__init__(message or f"ini: unclosed {opening}, expecting {self.expecting}")

    @property
    def expecting(self) -> str:
        """Closing character for this error's opening character."""
        return BRACKET_PAIRS.get(self.opening, self.opening)


class UnclosedSectionError(UnclosedError):
    """A section header was never closed."""

    def __init__(self) -> None:
        super().__init__("[", "ini: section missing closing ]")


class SectionRawStringError(IniError):
    """A raw string appeared in a section name."""

    def __init__(self) -> None:
        super().__init__("ini: raw string not accepted in section")


class EmptyKeyError(IniError):
    """A key with no characters."""

    def __init__(self) -> None:
        super().__init__("ini: key is empty")


class UnexpectedEndError(IniError):
    """Input ended before the current token was complete."""

    def __init__(self) -> None:
        super().__init__("ini: unexpected end of input")


class DecodeError(IniError):
    """Internal decoder failure.

    Raised when the decoder reaches a state it cannot handle. Seeing this
    means a bug in streamini, not in the input document.
    """

    pass


# Unquoted newline inside a section header
BAD_NEWLINE = BadCharError("\n")


class ParseError(IniError):
    """Syntax error in INI input.

    Raised when the decoder encounters syntax it does not understand.
    Carries the position at the moment of detection, the underlying cause,
    and a free-text description.
    """

    def __init__(
        self,
        cause: IniError,
        lineno: int,
        col_offset: int,
        description: str = "",
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error.

        Args:
            cause: Underlying error (BadCharError, UnclosedError, ...)
            lineno: Line number where error was detected (1-indexed)
            col_offset: Column where error was detected (1-indexed)
            description: Optional free-text description
            source_file: Path to source file (optional)
        """
        self.cause = cause
        self.lineno = lineno
        self.col_offset = col_offset
        self.description = description
        self.source_file = source_file
        super().__init__(self._format())

    def _format(self) -> str:
        prefix = "ini: "
        if self.source_file:
            prefix = f"ini: {self.source_file}: "
        message = f"{prefix}syntax error at {self.lineno}:{self.col_offset}: {self.cause}"
        if self.description:
            message += f" -- {self.description}"
        return message

    @property
    def location(self) -> SourceLocation:
        """Position of the error as a SourceLocation."""
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset,
            source_file=self.source_file,
        )

    def with_source_file(self, source_file: str | None) -> ParseError:
        """Return a copy of this error attributed to source_file."""
        err = ParseError(
            self.cause,
            self.lineno,
            self.col_offset,
            self.description,
            source_file=source_file,
        )
        err.__cause__ = self.cause
        return err


__all__ = [
    "BAD_NEWLINE",
    "BRACKET_PAIRS",
    "BadCharError",
    "DecodeError",
    "EmptyKeyError",
    "IniError",
    "ParseError",
    "SectionRawStringError",
    "UnclosedError",
    "UnclosedSectionError",
    "UnexpectedEndError",
]
