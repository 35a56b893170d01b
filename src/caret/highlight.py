"""Color helpers and the highlighter hook type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

# Maps raw text to the same text with embedded ANSI escape sequences.
Highlighter = Callable[[str], str]

# ── ANSI helpers ─────────────────────────────────────────────────────

_RED = "\x1b[31m"
_YELLOW = "\x1b[33m"
_BLUE = "\x1b[34m"
_RESET = "\x1b[0m"


def plain(text: str) -> str:
    """Identity highlighter."""
    return text


@dataclass(frozen=True)
class Colors:
    """Wraps text in ANSI colors, or leaves it alone when disabled."""

    enabled: bool = True

    def _paint(self, code: str, text: str) -> str:
        if not self.enabled or not text:
            return text
        return f"{code}{text}{_RESET}"

    def red(self, text: str) -> str:
        return self._paint(_RED, text)

    def yellow(self, text: str) -> str:
        return self._paint(_YELLOW, text)

    def blue(self, text: str) -> str:
        return self._paint(_BLUE, text)


NO_COLORS = Colors(enabled=False)
