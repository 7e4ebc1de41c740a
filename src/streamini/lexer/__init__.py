"""State-machine decoder for streamini.

This package turns a rune stream into (key, value) pairs.

Architecture:
lexer/
├── __init__.py          # Re-exports Decoder, DecoderState, RuneSource
├── core.py              # Decoder class (mixin composition + navigation)
├── modes.py             # DecoderState enum
├── source.py            # RuneSource (UTF-8 decoding, one-rune lookahead)
├── charsets.py          # Character classes and escape tables
└── scanners/            # State handlers
    ├── element.py       # Start, top-level elements, comments
    ├── section.py       # [section "headers"]
    ├── key.py           # Keys and the = separator
    ├── value.py         # Plain, "quoted", and `raw` values
    └── escape.py        # Backslash and hex escapes

Usage:
    >>> from streamini.lexer import Decoder
    >>> for key, value in Decoder("[a b]\\nk = v").pairs():
    ...     print(key, value)
    a.b.k v

"""

from streamini.lexer.core import Decoder
from streamini.lexer.modes import DecoderState
from streamini.lexer.source import RuneSource

__all__ = ["Decoder", "DecoderState", "RuneSource"]
