"""prompt_toolkit front end for the line acceptance and completion engines.

``ReplTerminal`` owns a single prompt session for the lifetime of the REPL.
It provides:

- Multi-line input (Enter submits only complete input)
- Tab completion of the word under the cursor
- Syntax highlighting through an ANSI highlighter hook
- In-memory history
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import ANSI, StyleAndTextTuples, to_formatted_text
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.input import Input
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPressEvent
from prompt_toolkit.lexers import Lexer
from prompt_toolkit.output import Output

from caret.acceptance import LineDecision, Submit
from caret.highlight import Colors, Highlighter, plain
from caret.parser import ReplLineParser
from caret.settings import ReplSettings

# (text, word start offset, typed prefix) -> candidate words
CandidateSource = Callable[[str, int, str], Iterable[str]]


class EndOfSession(Exception):
    """The user asked to end the session (Ctrl-D on an empty prompt)."""


@dataclass
class SessionConfig:
    """Terminal handles, width and prompts for one REPL session."""

    page_width: int = 80
    prompt: str = "caret> "
    continuation_prompt: str = "     | "
    color: bool = True
    writer: TextIO = field(default_factory=lambda: sys.stdout)
    input: Input | None = None
    output: Output | None = None

    @classmethod
    def from_settings(
        cls,
        settings: ReplSettings,
        *,
        writer: TextIO | None = None,
        input: Input | None = None,
        output: Output | None = None,
    ) -> SessionConfig:
        return cls(
            page_width=settings.page_width,
            prompt=settings.prompt,
            continuation_prompt=settings.continuation_prompt,
            color=settings.color,
            writer=writer if writer is not None else sys.stdout,
            input=input,
            output=output,
        )

    @property
    def colors(self) -> Colors:
        return Colors(enabled=self.color)


class HighlightLexer(Lexer):
    """Feeds each buffer line through an ANSI highlighter."""

    def __init__(self, highlighter: Highlighter) -> None:
        self._highlighter = highlighter

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno >= len(lines):
                return []
            return to_formatted_text(ANSI(self._highlighter(lines[lineno])))

        return get_line


class TokenCompleter(Completer):
    """Completes the identifier or keyword touching the cursor."""

    def __init__(self, parser: ReplLineParser, candidates: CandidateSource) -> None:
        self._parser = parser
        self._candidates = candidates

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterable[Completion]:
        parsed = self._parser.complete(document.text, document.cursor_position)
        prefix = parsed.word[: parsed.word_cursor]
        word_start = parsed.cursor - parsed.word_cursor
        if not prefix and not document.text[:word_start].strip():
            return
        for name in sorted(set(self._candidates(document.text, word_start, prefix))):
            if name.startswith(prefix) and name != prefix:
                yield Completion(name, start_position=-parsed.word_cursor)


class ReplTerminal:
    """Reads complete inputs from the user, one prompt at a time."""

    def __init__(
        self,
        config: SessionConfig,
        parser: ReplLineParser,
        *,
        highlighter: Highlighter | None = None,
        candidates: CandidateSource | None = None,
    ) -> None:
        self.config = config
        self._parser = parser
        self._closed = False
        colors = config.colors
        self._prompt = ANSI(colors.blue(config.prompt))
        self._session: PromptSession[str] = PromptSession(
            multiline=True,
            prompt_continuation=ANSI(colors.blue(config.continuation_prompt)),
            completer=TokenCompleter(parser, candidates) if candidates is not None else None,
            complete_while_typing=False,
            lexer=HighlightLexer(highlighter or plain),
            history=InMemoryHistory(),
            key_bindings=self._key_bindings(),
            input=config.input,
            output=config.output,
        )

    def __enter__(self) -> ReplTerminal:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def handle_enter(self, buffer: Buffer) -> LineDecision:
        """Submit the buffer or break the line, as the parser decides."""
        decision = self._parser.accept(buffer.text, buffer.cursor_position)
        if isinstance(decision, Submit):
            buffer.validate_and_handle()
        else:
            buffer.insert_text("\n")
        return decision

    def _key_bindings(self) -> KeyBindings:
        bindings = KeyBindings()

        @bindings.add("enter")
        def _(event: KeyPressEvent) -> None:
            self.handle_enter(event.current_buffer)

        return bindings

    def read_line(self) -> str:
        """Block until the user submits complete input.

        Raises:
            EndOfSession: on Ctrl-D.
            KeyboardInterrupt: on Ctrl-C; the typed input is discarded.
        """
        if self._closed:
            raise RuntimeError("ReplTerminal is closed")
        try:
            return self._session.prompt(self._prompt)
        except EOFError:
            raise EndOfSession from None

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._session.output.flush()
