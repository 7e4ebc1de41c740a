"""Character sets and escape decoding for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from streamini.lexer.charsets import VALUE_END

    if char in VALUE_END:  # O(1) lookup
        ...
"""

import unicodedata

SECTION_OPEN = "["
SECTION_CLOSE = "]"
QUOTE = '"'
RAW_QUOTE = "`"
NEWLINE = "\n"
EQUALS = "="
ESCAPE = "\\"

COMMENT_START: frozenset[str] = frozenset("#;")

# Space, tab, and carriage return. Carriage returns are ignored outside of
# quoted and raw strings.
HORIZONTAL_WHITESPACE: frozenset[str] = frozenset(" \t\r")

# Latin-1 whitespace. Above U+00FF, space/line/paragraph separators complete
# the set (see is_space).
WHITESPACE: frozenset[str] = frozenset(" \t\n\v\f\r\x85\xa0")


def is_space(char: str) -> bool:
    """Check if character is Unicode whitespace.

    Covers the Latin-1 whitespace characters plus categories Zs, Zl and Zp.
    The empty string (end of input) is not whitespace.

    """
    if not char:
        return False
    if char in WHITESPACE:
        return True
    if char <= "\xff":
        return False
    return unicodedata.category(char) in ("Zs", "Zl", "Zp")


def is_horizontal_space(char: str) -> bool:
    """Check if character is a space, tab, or carriage return."""
    return char in HORIZONTAL_WHITESPACE


def is_key_end(char: str) -> bool:
    """Check if character terminates an unquoted key."""
    return char == EQUALS or char in COMMENT_START or is_space(char)


# Characters that end an unquoted section name segment
SECTION_END: frozenset[str] = frozenset(' \t\n"]')

# Characters that end an unquoted value
VALUE_END: frozenset[str] = frozenset("\n#;")

# Characters that interrupt a quoted string
STRING_STOP: frozenset[str] = frozenset(QUOTE + ESCAPE)

# Escape letter -> resolved character. Anything else escapes to itself.
ESCAPES: dict[str, str] = {
    "0": "\x00",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

# Extended escape letter -> number of hex digits that follow
HEX_ESCAPES: dict[str, int] = {
    "x": 2,
    "u": 4,
    "U": 8,
}

HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")


def resolve_escape(char: str) -> str:
    """Resolve the character following a backslash.

    Handles single-letter escapes only; hex escapes (``x``, ``u``, ``U``) are
    decoded by the caller, which has to read further digits.

    Example:
        >>> resolve_escape("t"), resolve_escape('"'), resolve_escape("j")
        ('\\t', '"', 'j')

    """
    return ESCAPES.get(char, char)


def hex_value(char: str) -> int | None:
    """Return the value of a hex digit (either case), or None if char isn't one."""
    if char in HEX_DIGITS:
        return int(char, 16)
    return None


def decode_hex_code(value: int) -> str:
    """Turn a decoded hex escape value into a character.

    Values outside the Unicode range (or surrogates) become U+FFFD.
    """
    if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
        return "\ufffd"
    return chr(value)


def decode_escaped_bytes(data: bytes) -> str:
    """Decode a run of ``\\x`` escape bytes.

    Valid UTF-8 sequences become the characters they encode. A byte that is
    not part of one stands for the code point of the same value.

    Example:
        >>> decode_escaped_bytes(b"\\xc3\\xa9"), decode_escaped_bytes(b"\\xc3a")
        ('é', 'Ãa')

    """
    parts = []
    while data:
        try:
            parts.append(data.decode("utf-8"))
            break
        except UnicodeDecodeError as err:
            parts.append(data[: err.start].decode("utf-8"))
            parts.append(chr(data[err.start]))
            data = data[err.start + 1 :]
    return "".join(parts)


def rstrip_space(text: str) -> str:
    """Strip trailing Unicode whitespace (as classified by is_space)."""
    end = len(text)
    while end and is_space(text[end - 1]):
        end -= 1
    return text[:end]
