"""StringBuilder for O(n) rune accumulation.

Appends to a list, joins once when a token completes: O(n) total vs O(n²)
for repeated string concatenation.

The decoder writes one rune at a time and needs to know the buffered length
and suffix (for section separators) without joining, so the builder keeps a
running character count alongside its parts.

Thread Safety:
StringBuilder instances are local to a single decode session.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Appends to a list, joins once at the end.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("sect").append("ion").append(".")
            >>> sb.endswith(".")
            True
            >>> sb.build()
            'section.'

    Thread Safety:
        Instance is local to each decode session.
        No shared mutable state.

    """

    __slots__ = ("_parts", "_length")

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []
        self._length = 0

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
            self._length += len(s)
        return self

    def endswith(self, suffix: str) -> bool:
        """Return True if the accumulated text ends with suffix.

        Only joins the trailing parts needed to cover suffix.
        """
        if not suffix:
            return True
        if len(suffix) > self._length:
            return False
        tail: list[str] = []
        covered = 0
        for part in reversed(self._parts):
            tail.append(part)
            covered += len(part)
            if covered >= len(suffix):
                break
        return "".join(reversed(tail)).endswith(suffix)

    def build(self) -> str:
        """Join all parts into final string.

        Returns:
            Concatenated string of all appended parts
        """
        if len(self._parts) > 1:
            # Collapse so repeated builds stay cheap
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""

    def clear(self) -> StringBuilder:
        """Clear all accumulated parts.

        Returns:
            self for method chaining
        """
        self._parts.clear()
        self._length = 0
        return self

    def __bool__(self) -> bool:
        """Return True if any characters have been appended."""
        return self._length > 0
