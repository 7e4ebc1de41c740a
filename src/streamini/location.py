"""Source location tracking for error messages.

Provides SourceLocation dataclass for positions in INI input.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a rune in INI input.

    Both lineno and col_offset are 1-indexed. A line feed belongs to the
    line it starts, so the position reported for a line feed is column 1 of
    the following line.

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column (1-indexed, counted in runes)
        source_file: Source file path (optional)

    Examples:
            >>> loc = SourceLocation(2, 5, "settings.ini")
            >>> str(loc)
            'settings.ini:2:5'

    """

    lineno: int
    col_offset: int
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.ini:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"
