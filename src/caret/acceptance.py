"""Submit-key handling: decide whether a buffer is ready to be submitted."""

from __future__ import annotations

from dataclasses import dataclass

from caret.tokens import CompletenessCheck
from caret.utils import is_whitespace_char


@dataclass(frozen=True)
class EditBuffer:
    """Line editor contents and cursor offset, read-only to the engines."""

    text: str
    cursor: int

    def __post_init__(self) -> None:
        if not 0 <= self.cursor <= len(self.text):
            raise ValueError(f"Cursor {self.cursor} outside of buffer of length {len(self.text)}")

    @property
    def cursor_is_at_end(self) -> bool:
        """True when only whitespace (or nothing) follows the cursor."""
        return all(is_whitespace_char(ch) for ch in self.text[self.cursor :])


@dataclass(frozen=True)
class Submit:
    """The buffer is complete; hand it to the evaluator."""


@dataclass(frozen=True)
class Continue:
    """Insert a new line and keep editing under ``prompt``."""

    prompt: str = ""


LineDecision = Submit | Continue


def decide_line(
    text: str,
    cursor: int,
    is_incomplete: CompletenessCheck,
    continuation_prompt: str = "",
) -> LineDecision:
    """Decide what the submit key does for ``text`` with the cursor at ``cursor``.

    Enter submits only when the cursor is at the end (ignoring trailing
    whitespace) and the input is complete.
    """
    buffer = EditBuffer(text, cursor)
    if not buffer.cursor_is_at_end or is_incomplete(buffer.text):
        return Continue(prompt=continuation_prompt)
    return Submit()
