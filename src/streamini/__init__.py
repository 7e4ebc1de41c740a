"""
streamini — Streaming INI decoder for Python

Decodes INI-family configuration text one character at a time: section
headers act as key prefixes, value-less keys are flags, and values may be
plain, "quoted" (with escapes) or `raw`. Zero runtime dependencies.

Quick Start:
    >>> from streamini import loads
    >>> values = loads('[remote "origin"]\\nurl = https://example.com\\nprune')
    >>> values.get("remote.origin.url")
    'https://example.com'
    >>> values.get("remote.origin.prune")
    '1'

Configuration:
    >>> from streamini import KeyCase, ReaderConfig, loads
    >>> loads("[Core]\\nEditor = vim", config=ReaderConfig(separator=":", casing=KeyCase.LOWER))
    {'core:editor': ['vim']}

Custom sinks:
    >>> from streamini import Reader
    >>> class Last(dict):
    ...     def add(self, key, value):
    ...         self[key] = value
    >>> sink = Last()
    >>> Reader().read("k = 1\\nk = 2", sink)
    >>> sink
    {'k': '2'}
"""

from __future__ import annotations

import os
from typing import IO, Any

from streamini.config import (
    DEFAULT_CONFIG,
    NONE,
    TRUE,
    KeyCase,
    ReaderConfig,
    get_reader_config,
    reader_config_context,
    reset_reader_config,
    set_reader_config,
)
from streamini.errors import (
    BAD_NEWLINE,
    BadCharError,
    DecodeError,
    EmptyKeyError,
    IniError,
    ParseError,
    SectionRawStringError,
    UnclosedError,
    UnclosedSectionError,
    UnexpectedEndError,
)
from streamini.lexer import Decoder, DecoderState, RuneSource
from streamini.location import SourceLocation
from streamini.reader import Reader
from streamini.values import Recorder, Values

__version__ = "0.1.0"


def read_ini(
    data: str | bytes,
    out: Values | None = None,
    *,
    config: ReaderConfig | None = None,
) -> Values:
    """Decode INI data into a Values mapping.

    Args:
        data: INI text, or UTF-8 encoded bytes
        out: Values to add to (a new Values is created if None)
        config: Reader configuration (uses the context config if None)

    Returns:
        out, with every decoded pair added

    Raises:
        ParseError: On the first syntax error. Nothing is returned.

    Example:
        >>> read_ini(b"a = 1\\na = 2")
        {'a': ['1', '2']}

    """
    if out is None:
        out = Values()
    Reader(config).read(data, out)
    return out


def loads(text: str, *, config: ReaderConfig | None = None) -> Values:
    """Decode an INI string.

    Args:
        text: INI source text
        config: Reader configuration (uses the context config if None)

    Returns:
        Values holding every decoded pair
    """
    return read_ini(text, config=config)


def load(
    fp: IO[Any],
    *,
    config: ReaderConfig | None = None,
    source_file: str | None = None,
) -> Values:
    """Decode an INI file object (text or binary).

    Binary files are decoded as UTF-8.

    Args:
        fp: Readable file object
        config: Reader configuration (uses the context config if None)
        source_file: Optional source file path for error messages

    Returns:
        Values holding every decoded pair
    """
    out = Values()
    Reader(config).read(fp, out, source_file=source_file)
    return out


def load_file(
    path: str | os.PathLike[str],
    *,
    config: ReaderConfig | None = None,
) -> Values:
    """Decode the INI file at path.

    The path is attached to any ParseError as ``source_file``.

    Args:
        path: Path of a UTF-8 encoded INI file
        config: Reader configuration (uses the context config if None)

    Returns:
        Values holding every decoded pair
    """
    source_file = os.fspath(path)
    with open(path, "rb") as fp:
        try:
            return load(fp, config=config)
        except ParseError as err:
            raise err.with_source_file(source_file) from err.cause


__all__ = [
    # Main API
    "load",
    "load_file",
    "loads",
    "read_ini",
    "Reader",
    "Values",
    "Recorder",
    # Configuration
    "DEFAULT_CONFIG",
    "KeyCase",
    "NONE",
    "ReaderConfig",
    "TRUE",
    "get_reader_config",
    "reader_config_context",
    "reset_reader_config",
    "set_reader_config",
    # Decoder
    "Decoder",
    "DecoderState",
    "RuneSource",
    "SourceLocation",
    # Errors
    "BAD_NEWLINE",
    "BadCharError",
    "DecodeError",
    "EmptyKeyError",
    "IniError",
    "ParseError",
    "SectionRawStringError",
    "UnclosedError",
    "UnclosedSectionError",
    "UnexpectedEndError",
    "__version__",
]
