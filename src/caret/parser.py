"""Line-editor parser combining line acceptance and completion lookup."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from caret.acceptance import Continue, LineDecision, Submit, decide_line
from caret.completion import locate_word
from caret.tokens import CompletenessCheck, Tokenizer


class ParseContext(Enum):
    ACCEPT_LINE = "accept-line"
    COMPLETE = "complete"
    SECONDARY_PROMPT = "secondary-prompt"


@dataclass(frozen=True)
class ParsedLine:
    """
    cursor: the cursor position within the line
    line: the unparsed line
    word: the current word being completed
    word_cursor: the cursor position within the current word
    """

    cursor: int
    line: str
    word: str = ""
    word_cursor: int = 0


class ReplLineParser:
    """Answers the line editor's parse requests for one language."""

    def __init__(
        self,
        tokenizer: Tokenizer,
        is_incomplete: CompletenessCheck,
        continuation_prompt: str = "",
    ) -> None:
        self._tokenizer = tokenizer
        self._is_incomplete = is_incomplete
        self._continuation_prompt = continuation_prompt

    def accept(self, line: str, cursor: int) -> LineDecision:
        return decide_line(line, cursor, self._is_incomplete, self._continuation_prompt)

    def complete(self, line: str, cursor: int) -> ParsedLine:
        parsed = locate_word(line, cursor, self._tokenizer)
        return ParsedLine(cursor, line, parsed.word, parsed.word_cursor)

    def parse(self, line: str, cursor: int, context: ParseContext) -> ParsedLine | Continue:
        match context:
            case ParseContext.ACCEPT_LINE:
                decision = self.accept(line, cursor)
                if isinstance(decision, Submit):
                    return ParsedLine(cursor, line)
                return decision
            case ParseContext.COMPLETE:
                return self.complete(line, cursor)
            case _:
                return Continue(prompt=self._continuation_prompt)
