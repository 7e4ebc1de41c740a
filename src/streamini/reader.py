"""Reader: a configured entry point to the decoder.

A Reader holds no decoding state. It binds an optional ReaderConfig and
starts a fresh Decoder for every call, so one Reader may be shared across
threads.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from streamini.config import ReaderConfig, get_reader_config
from streamini.lexer import Decoder
from streamini.values import Recorder


class Reader:
    """INI reader configuration.

    Usage:
            >>> from streamini import KeyCase, ReaderConfig, Values
            >>> reader = Reader(ReaderConfig(separator=":", casing=KeyCase.UPPER))
            >>> out = Values()
            >>> reader.read("[a b]\\nk = v", out)
            >>> out
            {'A:B:K': ['v']}

    """

    __slots__ = ("_config",)

    def __init__(self, config: ReaderConfig | None = None) -> None:
        """Initialize reader.

        Args:
            config: Reader configuration. None means "use the context
                configuration at the time of each read".
        """
        self._config = config

    @property
    def config(self) -> ReaderConfig:
        """The configuration the next read will use."""
        return self._config if self._config is not None else get_reader_config()

    def iter_pairs(
        self,
        source: Any,
        *,
        source_file: str | None = None,
    ) -> Iterator[tuple[str, str]]:
        """Decode source lazily, yielding (key, value) pairs in document order.

        Args:
            source: str, bytes-like object, or readable stream
            source_file: Optional source file path for error messages

        Raises:
            ParseError: From the iterator, at the first syntax error
        """
        return Decoder(source, self.config, source_file=source_file).pairs()

    def read(
        self,
        source: Any,
        dst: Recorder,
        *,
        source_file: str | None = None,
    ) -> None:
        """Decode source and record every pair in dst.

        On error, dst keeps whatever was recorded before the error; callers
        should discard it.

        Args:
            source: str, bytes-like object, or readable stream
            dst: Recorder receiving each (key, value) pair
            source_file: Optional source file path for error messages

        Raises:
            ParseError: On the first syntax error
        """
        add = dst.add
        for key, value in self.iter_pairs(source, source_file=source_file):
            add(key, value)
