"""Source files and line/column positions into them.

Lines are 1-based. Columns are 0-based offsets into their line, so a caret
drawn ``column`` spaces after the line prefix lands under the character.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SourceFile:
    """A named piece of source text."""

    path: str
    content: str
    _line_starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts = [0]
        for index, ch in enumerate(self.content):
            if ch == "\n":
                starts.append(index + 1)
        object.__setattr__(self, "_line_starts", tuple(starts))

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_content(self, line: int) -> str:
        """Return line *line* including its terminator, or ``""`` past the end."""
        if line < 1 or line > len(self._line_starts):
            return ""
        start = self._line_starts[line - 1]
        if line < len(self._line_starts):
            return self.content[start : self._line_starts[line]]
        return self.content[start:]

    def line_and_column(self, offset: int) -> tuple[int, int]:
        """Convert a character offset into ``(line, column)``."""
        if offset < 0 or offset > len(self.content):
            raise ValueError(f"Offset {offset} outside of {self.path}")
        index = bisect.bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index]

    def position(
        self,
        start: int,
        end: int | None = None,
        *,
        outer: SourcePosition | None = None,
    ) -> SourcePosition:
        """Build a position covering the half-open offset range ``[start, end)``."""
        start_line, start_column = self.line_and_column(start)
        end_line, end_column = self.line_and_column(start if end is None else end)
        return SourcePosition(
            source=self,
            start_line=start_line,
            start_column=start_column,
            end_line=end_line,
            end_column=end_column,
            outer=outer,
        )


@dataclass(frozen=True)
class SourcePosition:
    """A span in a source file, optionally inlined at an ``outer`` position.

    Invariant:
    - 1 <= start_line <= end_line
    - start_column <= end_column when the span sits on one line
    """

    source: SourceFile
    start_line: int
    start_column: int
    end_line: int
    end_column: int
    outer: SourcePosition | None = None

    def __post_init__(self) -> None:
        if self.start_line < 1 or self.start_column < 0 or self.end_column < 0:
            raise ValueError("SourcePosition lines start at 1 and columns at 0")
        if self.start_line > self.end_line:
            raise ValueError("SourcePosition invariant violated: start_line > end_line")
        if self.start_line == self.end_line and self.start_column > self.end_column:
            raise ValueError("SourcePosition invariant violated: start_column > end_column")

    @property
    def file(self) -> str:
        return self.source.path

    @property
    def line(self) -> int:
        return self.start_line

    @property
    def column(self) -> int:
        return self.start_column

    @property
    def is_single_line(self) -> bool:
        return self.start_line == self.end_line

    @property
    def line_content(self) -> str:
        """Content of the first line of the span, terminator included."""
        return self.source.line_content(self.start_line)

    def __str__(self) -> str:
        return f"{self.file}:{self.start_line}:{self.start_column + 1}"
