"""Source location tracking for blocks.

Provides SourceLocation dataclass recording which source lines a block came from.
Used by the segmenter when emitting blocks and by serialization.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Line span of a block in its source text.

    All line numbers are 1-indexed. Single-line blocks leave end_lineno as None.

    Attributes:
        lineno: First source line of the block
        end_lineno: Last source line for multi-line blocks (optional)
        source_file: Source file path (optional, e.g. "steps/step-01.json")

    Examples:
            >>> loc = SourceLocation(lineno=3)
            >>> str(loc)
            '3'

            >>> loc = SourceLocation(3, 7, "steps/step-02.json")
            >>> str(loc)
            'steps/step-02.json:3-7'

    """

    lineno: int
    end_lineno: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for log messages.

        Returns:
            Formatted string like "file.json:3-7" or "3"
        """
        lines = str(self.lineno)
        if self.end_lineno is not None and self.end_lineno != self.lineno:
            lines = f"{self.lineno}-{self.end_lineno}"
        if self.source_file:
            return f"{self.source_file}:{lines}"
        return lines

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create an unknown/placeholder location.

        Use for nodes created synthetically or when location is unavailable.
        """
        return cls(lineno=0)
