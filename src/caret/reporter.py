"""Console reporter writing rendered diagnostics to a text stream."""

from __future__ import annotations

import sys
import threading
from typing import TextIO

from caret.diagnostics import DiagnosticMessage, DiagnosticRenderer, RenderedBlock
from caret.positions import SourcePosition


def count_string(count: int, label: str) -> str:
    return f"{count} {label}{'' if count == 1 else 's'}"


class ConsoleReporter:
    """Renders diagnostics and writes them to ``writer``.

    Writes are serialized so several call sites may share one reporter.
    """

    def __init__(
        self,
        renderer: DiagnosticRenderer,
        writer: TextIO | None = None,
        *,
        explain: bool = False,
    ) -> None:
        self.renderer = renderer
        self.writer = writer if writer is not None else sys.stderr
        self.explain = explain
        self.error_count = 0
        self.warning_count = 0
        self._lock = threading.RLock()

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    def print_block(self, block: RenderedBlock) -> None:
        if not block.lines:
            return
        with self._lock:
            self.writer.write(block.text + "\n")
            self.writer.flush()

    def report(self, message: DiagnosticMessage, position: SourcePosition | None = None) -> None:
        block = self.renderer.render(message, position)
        with self._lock:
            kind = message.kind.lower()
            if kind == "error":
                self.error_count += 1
            elif kind == "warning":
                self.warning_count += 1
            self.print_block(block)
            if self.explain and message.explanation:
                self.print_explanation(message)

    def print_explanation(self, message: DiagnosticMessage) -> None:
        self.print_block(self.renderer.render_explanation(message))

    def summary(self) -> str:
        parts: list[str] = []
        colors = self.renderer.colors
        if self.warning_count > 0:
            parts.append(f"{count_string(self.warning_count, colors.yellow('warning'))} found")
        if self.error_count > 0:
            parts.append(f"{count_string(self.error_count, colors.red('error'))} found")
        return "\n".join(parts)

    def reset(self) -> None:
        self.error_count = 0
        self.warning_count = 0
