"""Decoded INI values and the Recorder protocol.

The decoder does not own its output. It reports each (key, value) pair to a
Recorder, which decides whether repeated keys accumulate or replace. Values
is the default Recorder: every key maps to the list of values seen for it,
in document order.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class Recorder(Protocol):
    """Anything that can accept decoded INI values.

    ``add`` may be called several times with the same key. Exceptions raised
    by ``add`` abort the decode and propagate to the caller unchanged.
    """

    def add(self, key: str, value: str) -> None:
        """Record that key was observed with value."""
        ...


class Values(dict[str, list[str]]):
    """Multi-valued mapping of INI keys to their values.

    Usage:
            >>> values = Values()
            >>> values.add("remote.url", "a")
            >>> values.add("remote.url", "b")
            >>> values.get("remote.url")
            'a'
            >>> values.getlist("remote.url")
            ['a', 'b']

    """

    def add(self, key: str, value: str) -> None:
        """Append value to key's values, creating the list if needed."""
        self.setdefault(key, []).append(value)

    def set(self, key: str, value: str) -> None:
        """Replace key's values with a list holding only value."""
        self[key] = [value]

    def get(self, key: str, default: str = "") -> str:  # type: ignore[override]
        """Return the first value for key.

        Missing keys and keys with an empty value list return default.
        """
        values = super().get(key)
        if values:
            return values[0]
        return default

    def getlist(self, key: str) -> list[str]:
        """Return a copy of all values for key (empty if missing)."""
        return list(super().get(key) or ())

    def delete(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""
        self.pop(key, None)

    def contains(self, key: str) -> bool:
        """Existence check; the key may map to an empty list."""
        return key in self

    def copy_to(self, dst: Values | None = None) -> Values:
        """Append every key's values to dst and return it.

        A new Values is allocated when dst is None. Values already in dst
        come first.
        """
        if dst is None:
            dst = Values()
        for key, values in self.items():
            dst.setdefault(key, []).extend(values)
        return dst

    def matching(
        self,
        fn: Callable[[str, Sequence[str]], bool],
        dst: Values | None = None,
    ) -> Values:
        """Copy the keys for which fn(key, values) is true into dst.

        fn must not modify the values it receives.
        """
        if dst is None:
            dst = Values()
        for key, values in self.items():
            if fn(key, values):
                dst.setdefault(key, []).extend(values)
        return dst

    def with_prefix(self, prefix: str, dst: Values | None = None) -> Values:
        """Copy the keys starting with prefix into dst."""
        return self.matching(lambda key, _values: key.startswith(prefix), dst)


__all__ = ["Recorder", "Values"]
