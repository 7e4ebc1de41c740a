"""Decoder states.

This module defines the finite state machine states for the decoder. Each
state names one handler on the Decoder; the handler consumes runes and
returns the next state, or None when decoding finished cleanly.
"""

from __future__ import annotations

from enum import Enum, auto


class DecoderState(Enum):
    """Decoder states.

    The decoder moves between states based on the current rune:
    - START: Prime the first rune
    - ELEMENT: Top level, between elements
    - SECTION_OPEN: At the opening [ of a section header
    - SUBSECTION: Inside [...], outside quotes
    - QUOTED_SUBSECTION: Inside "..." within a section header
    - KEY: At the first rune of a key
    - VALUE_SEPARATOR: After a key, expecting =, newline, or comment
    - VALUE: After =, before the value
    - STRING_VALUE: Inside a "..." value
    - RAW_VALUE: Inside a `...` value
    - COMMENT: After # or ;

    """

    START = auto()
    ELEMENT = auto()
    SECTION_OPEN = auto()
    SUBSECTION = auto()
    QUOTED_SUBSECTION = auto()
    KEY = auto()
    VALUE_SEPARATOR = auto()
    VALUE = auto()
    STRING_VALUE = auto()
    RAW_VALUE = auto()
    COMMENT = auto()
