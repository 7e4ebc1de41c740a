"""ContextVar-based reader configuration for streamini.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A Reader created without an explicit config reads the context config at the
start of each decode.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Defaults:
    Two defaults exist and are kept distinct:

    - ReaderConfig() (the zero configuration) lowercases unquoted key and
      section characters.
    - DEFAULT_CONFIG, used when a caller supplies no configuration at all, is
      case-sensitive.

Usage:
    from streamini.config import ReaderConfig, KeyCase, reader_config_context

    with reader_config_context(ReaderConfig(separator=":", casing=KeyCase.UPPER)):
        values = loads("[a b]\\nk = v")  # {"A:B:K": ["v"]}

"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class Sentinel(Enum):
    """Marker type for the NONE configuration value."""

    NONE = auto()


# Disables the separator, or forces an empty flag value.
NONE = Sentinel.NONE

DEFAULT_SEPARATOR = "."

# Value recorded for keys that have no "= value" clause.
TRUE = "1"


class KeyCase(Enum):
    """How unquoted key and section characters are cased.

    - LOWER: fold to lowercase (the zero-configuration default)
    - UPPER: fold to uppercase
    - CASE_SENSITIVE: leave as written

    Quoted and raw content is never folded.
    """

    LOWER = auto()
    UPPER = auto()
    CASE_SENSITIVE = auto()


# Runes whose case mapping is more than one rune (ß, İ) are kept as written.
def _lower(char: str) -> str:
    folded = char.lower()
    return folded if len(folded) == 1 else char


def _upper(char: str) -> str:
    folded = char.upper()
    return folded if len(folded) == 1 else char


@dataclass(frozen=True, slots=True)
class ReaderConfig:
    """Immutable reader configuration.

    Frozen dataclass ensures thread-safety (immutable after creation); one
    instance may be shared by any number of concurrent decodes.

    Attributes:
        separator: Inserted between section segments and between a section
            prefix and a key. Empty means ".", NONE means no separator.
        casing: Case folding applied to unquoted key and section characters.
        flag_value: Value recorded for keys with no value. Empty means "1",
            NONE means the empty string.

    """

    separator: str | Sentinel = DEFAULT_SEPARATOR
    casing: KeyCase = KeyCase.LOWER
    flag_value: str | Sentinel = TRUE

    @property
    def resolved_separator(self) -> str:
        """Separator string the decoder actually writes."""
        if self.separator is NONE:
            return ""
        return self.separator or DEFAULT_SEPARATOR

    @property
    def resolved_flag_value(self) -> str:
        """Value the decoder records for flag-style keys."""
        if self.flag_value is NONE:
            return ""
        return self.flag_value or TRUE

    @property
    def casefold(self) -> Callable[[str], str] | None:
        """Per-rune case function, or None when case-sensitive."""
        if self.casing is KeyCase.LOWER:
            return _lower
        if self.casing is KeyCase.UPPER:
            return _upper
        return None

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> ReaderConfig:
        """Create ReaderConfig from a mapping.

        Useful when reader options come from another configuration source
        (command-line flags, a TOML table, ...). Unknown keys are ignored.
        ``casing`` accepts a KeyCase, its name ("upper", "CASE_SENSITIVE"),
        its value, or None for the case-sensitive default.

        Example:
            >>> config = ReaderConfig.from_dict({"separator": ":", "casing": "upper"})
            >>> config.casing
            <KeyCase.UPPER: 2>

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "casing" in filtered:
            filtered["casing"] = _coerce_casing(filtered["casing"])
        return cls(**filtered)


def _coerce_casing(value: KeyCase | str | int | None) -> KeyCase:
    if isinstance(value, KeyCase):
        return value
    if value is None:
        return KeyCase.CASE_SENSITIVE
    if isinstance(value, int):
        return KeyCase(value)
    try:
        return KeyCase[value.strip().upper().replace("-", "_")]
    except KeyError:
        raise ValueError(f"unknown key casing: {value!r}") from None


# Used when a caller supplies no configuration.
DEFAULT_CONFIG: ReaderConfig = ReaderConfig(casing=KeyCase.CASE_SENSITIVE)

_reader_config: ContextVar[ReaderConfig] = ContextVar(
    "reader_config",
    default=DEFAULT_CONFIG,
)


def get_reader_config() -> ReaderConfig:
    """Get current reader configuration (thread-local).

    Returns:
        The active ReaderConfig for this thread/context.

    """
    return _reader_config.get()


def set_reader_config(config: ReaderConfig) -> None:
    """Set reader configuration for current context.

    Args:
        config: ReaderConfig instance to use for this context.

    """
    _reader_config.set(config)


def reset_reader_config() -> None:
    """Reset to DEFAULT_CONFIG for the current context."""
    _reader_config.set(DEFAULT_CONFIG)


@contextmanager
def reader_config_context(config: ReaderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: ReaderConfig to use within the context.

    Yields:
        None

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _reader_config.get()
    _reader_config.set(config)
    try:
        yield
    finally:
        _reader_config.set(previous)


__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_SEPARATOR",
    "KeyCase",
    "NONE",
    "ReaderConfig",
    "Sentinel",
    "TRUE",
    "get_reader_config",
    "reader_config_context",
    "reset_reader_config",
    "set_reader_config",
]
