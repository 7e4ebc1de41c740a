"""State handler mixins for the INI decoder.

Each mixin implements a group of DecoderState handlers.
"""

from streamini.lexer.scanners.element import ElementScannerMixin
from streamini.lexer.scanners.escape import EscapeScannerMixin
from streamini.lexer.scanners.key import KeyScannerMixin
from streamini.lexer.scanners.section import SectionScannerMixin
from streamini.lexer.scanners.value import ValueScannerMixin

__all__ = [
    "ElementScannerMixin",
    "EscapeScannerMixin",
    "KeyScannerMixin",
    "SectionScannerMixin",
    "ValueScannerMixin",
]
