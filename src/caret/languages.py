"""Language collaborators backed by Pygments and the Python compiler.

Tokenizing and syntax coloring are delegated to Pygments lexers; this module
only maps their output onto the token model used by the engines.
"""

from __future__ import annotations

import codeop
from collections.abc import Iterator

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.token import Error, Keyword, Name, _TokenType

from caret.highlight import Highlighter, plain
from caret.tokens import Token, TokenClass, TokenizeError


def _lexer(language: str) -> Lexer:
    # keep offsets and newlines exactly as typed
    return get_lexer_by_name(language, stripnl=False, stripall=False, ensurenl=False)


def classify(token_type: _TokenType) -> TokenClass:
    if token_type in Name:
        return TokenClass.IDENTIFIER
    if token_type in Keyword:
        return TokenClass.KEYWORD
    return TokenClass.OTHER


class PygmentsTokenizer:
    """Tokenizer over any Pygments lexer, ``python`` by default."""

    def __init__(self, language: str = "python") -> None:
        self.language = language
        self._lexer = _lexer(language)

    def tokenize(self, text: str, *, suppress_diagnostics: bool = False) -> list[Token]:
        return list(self._tokens(text, suppress_diagnostics))

    def _tokens(self, text: str, suppress_diagnostics: bool) -> Iterator[Token]:
        for start, token_type, value in self._lexer.get_tokens_unprocessed(text):
            if not value:
                continue
            if token_type in Error and not suppress_diagnostics:
                raise TokenizeError(start, f"Unexpected {value!r}")
            yield Token(start, start + len(value), classify(token_type))


def pygments_highlighter(language: str = "python", *, enabled: bool = True) -> Highlighter:
    """Return a highlighter painting ``language`` source with ANSI colors."""
    if not enabled:
        return plain
    lexer = _lexer(language)
    formatter = TerminalFormatter()

    def highlighter(text: str) -> str:
        if not text:
            return text
        return highlight(text, lexer, formatter)

    return highlighter


def python_is_incomplete(text: str) -> bool:
    """True when ``text`` is a valid prefix of a Python statement.

    Invalid input is reported as complete so the evaluator can show the
    syntax error.
    """
    try:
        return codeop.compile_command(text, "<console>", "single") is None
    except (SyntaxError, OverflowError, ValueError):
        return False
