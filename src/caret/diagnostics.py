"""Diagnostic rendering with source excerpts and caret markers.

Turns a message and a source position into the block printed for the user::

    -- Error: <console> ----------------------------------------------------
    1:print(1 +)
               ^
               invalid syntax

The renderer never writes anything itself; callers get a ``RenderedBlock``
and decide where it goes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from caret.highlight import Colors, Highlighter, plain
from caret.positions import SourcePosition
from caret.utils import visible_width

MAX_OUTER_DEPTH = 64

INLINED_AT = "This location is in code that was inlined at {outer}:"


@dataclass(frozen=True)
class DiagnosticMessage:
    """A compiler message: body text, severity label and optional explanation."""

    text: str
    kind: str = "Error"
    explanation: str | None = None


@dataclass(frozen=True)
class RenderedBlock:
    """Printable lines of a diagnostic, header first."""

    header: list[str] = field(default_factory=list)
    body: list[str] = field(default_factory=list)

    @property
    def lines(self) -> list[str]:
        return [*self.header, *self.body]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def __str__(self) -> str:
        return self.text


class DiagnosticRenderer:
    """Formats diagnostics for a terminal ``page_width`` columns wide."""

    def __init__(
        self,
        page_width: int = 80,
        highlighter: Highlighter | None = None,
        colors: Colors | None = None,
    ) -> None:
        self.page_width = page_width
        self.highlighter = highlighter or plain
        self.colors = colors or Colors()

    # -- pieces -------------------------------------------------------------

    def header_line(self, kind: str, file: str | None, page_width: int) -> str:
        prefix = f"-- {kind}: {file} " if file is not None else f"-- {kind} "
        return prefix + "-" * max(page_width - visible_width(prefix), 0)

    def header(self, position: SourcePosition | None, kind: str, page_width: int | None = None) -> list[str]:
        """Header lines, preceded by the inline-expansion chain of ``position``."""
        width = self.page_width if page_width is None else page_width
        if position is None:
            return [self.colors.blue(self.header_line(kind, None, width))]

        chain = _outer_chain(position)
        lines: list[str] = []
        # deepest expansion site first, each one followed by the sentence
        # introducing the position it was inlined into
        for outer in reversed(chain[1:]):
            lines.append(self.header_line(kind, outer.file, width))
            lines.append(INLINED_AT.format(outer=outer))
            lines.append("-" * max(width, 0))
        lines.append(self.header_line(kind, position.file, width))
        return [self.colors.blue(line) for line in lines]

    def source_line(self, position: SourcePosition) -> tuple[str, int]:
        """Return the numbered excerpt line and the width of its ``"N:"`` prefix."""
        line_num = f"{position.line}:"
        content = position.line_content.rstrip("\r\n")
        return line_num + self.highlighter(content), len(line_num)

    def column_marker(self, position: SourcePosition, offset: int) -> str:
        whitespace = " " * (offset + position.start_column)
        if position.is_single_line:
            carets = "^" * max(1, position.end_column - position.start_column)
            return whitespace + self.colors.red(carets)
        return self.colors.red(whitespace + "^")

    def message_body(self, position: SourcePosition, text: str, offset: int, page_width: int | None = None) -> str:
        """Indent every line of ``text`` by the smallest padding any line allows."""
        width = self.page_width if page_width is None else page_width
        lines = text.splitlines()
        if not lines:
            return ""

        least_whitespace = min(
            min(max(0, width - offset - visible_width(line)), offset + position.start_column)
            for line in lines
        )
        return "\n".join(" " * least_whitespace + line for line in lines)

    # -- blocks -------------------------------------------------------------

    def render(
        self,
        message: DiagnosticMessage,
        position: SourcePosition | None,
        kind: str | None = None,
        page_width: int | None = None,
    ) -> RenderedBlock:
        """Render ``message`` at ``position``; ``None`` renders header and text only."""
        label = message.kind if kind is None else kind
        header = self.header(position, label, page_width)
        if position is None:
            return RenderedBlock(header=header, body=message.text.splitlines())

        src, offset = self.source_line(position)
        marker = self.column_marker(position, offset)
        err = self.message_body(position, message.text, offset, page_width)
        body = [src, marker]
        if err:
            body.extend(err.split("\n"))
        return RenderedBlock(header=header, body=body)

    def render_explanation(self, message: DiagnosticMessage) -> RenderedBlock:
        if not message.explanation:
            return RenderedBlock()
        banner = ["", self.colors.blue("Explanation"), self.colors.blue("===========")]
        return RenderedBlock(header=banner, body=message.explanation.split("\n"))


def _outer_chain(position: SourcePosition) -> list[SourcePosition]:
    """Follow ``outer`` links from ``position``, stopping on a repeat."""
    chain = [position]
    seen = {id(position)}
    current = position.outer
    while current is not None and id(current) not in seen and len(chain) < MAX_OUTER_DEPTH:
        chain.append(current)
        seen.add(id(current))
        current = current.outer
    return chain
