"""Find the word under the cursor for a completion request."""

from __future__ import annotations

from dataclasses import dataclass

from caret.acceptance import EditBuffer
from caret.log import log_debug
from caret.tokens import Tokenizer


@dataclass(frozen=True)
class ParsedWord:
    """The word being completed and the cursor offset inside it."""

    word: str = ""
    word_cursor: int = 0

    @property
    def prefix(self) -> str:
        """Part of the word left of the cursor."""
        return self.word[: self.word_cursor]


EMPTY_WORD = ParsedWord()


def locate_word(text: str, cursor: int, tokenizer: Tokenizer) -> ParsedWord:
    """Return the identifier or keyword token touching ``cursor``.

    A cursor sitting right after a word still completes that word. When the
    cursor is in whitespace or punctuation, or the tokenizer fails, the
    result is the empty word.
    """
    buffer = EditBuffer(text, cursor)
    try:
        tokens = tokenizer.tokenize(buffer.text, suppress_diagnostics=True)
        for token in tokens:
            if token.is_completable and token.contains_inclusive(buffer.cursor):
                return ParsedWord(buffer.text[token.start : token.end], buffer.cursor - token.start)
    except Exception as e:
        log_debug(f"Completion tokenizer failed: {e}")
    return EMPTY_WORD
