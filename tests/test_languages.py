"""Tests for caret.languages -- Pygments and codeop collaborators."""

from __future__ import annotations

import pytest

from caret.completion import ParsedWord, locate_word
from caret.highlight import plain
from caret.languages import PygmentsTokenizer, pygments_highlighter, python_is_incomplete
from caret.tokens import TokenClass, TokenizeError
from caret.utils import strip_color


class TestPygmentsTokenizer:
    """Token classes and offsets from the Python lexer."""

    def test_tokens_cover_text_contiguously(self) -> None:
        text = "x = foo(1, 'a')"
        tokens = PygmentsTokenizer().tokenize(text)
        assert tokens[0].start == 0
        assert tokens[-1].end == len(text)
        for left, right in zip(tokens, tokens[1:]):
            assert left.end == right.start

    def test_names_are_identifiers(self) -> None:
        tokens = PygmentsTokenizer().tokenize("spam")
        assert [(t.start, t.end, t.kind) for t in tokens] == [(0, 4, TokenClass.IDENTIFIER)]

    def test_keywords(self) -> None:
        tokens = PygmentsTokenizer().tokenize("import os")
        assert tokens[0].kind is TokenClass.KEYWORD
        assert (tokens[0].start, tokens[0].end) == (0, 6)

    def test_numbers_are_other(self) -> None:
        tokens = PygmentsTokenizer().tokenize("42")
        assert tokens[0].kind is TokenClass.OTHER

    def test_error_token_raises_when_reporting(self) -> None:
        with pytest.raises(TokenizeError):
            PygmentsTokenizer().tokenize("a $ b", suppress_diagnostics=False)

    def test_error_token_ignored_when_suppressed(self) -> None:
        tokens = PygmentsTokenizer().tokenize("a $ b", suppress_diagnostics=True)
        assert tokens[-1].end == 5

    def test_locate_word_with_python_lexer(self) -> None:
        assert locate_word("foo.ba", 6, PygmentsTokenizer()) == ParsedWord("ba", 2)
        assert locate_word("  ", 1, PygmentsTokenizer()) == ParsedWord("", 0)


class TestPygmentsHighlighter:
    def test_colors_keywords(self) -> None:
        highlighted = pygments_highlighter("python")("def f")
        assert "\x1b[" in highlighted
        assert strip_color(highlighted) == "def f"

    def test_disabled_is_plain(self) -> None:
        assert pygments_highlighter("python", enabled=False) is plain

    def test_empty_text(self) -> None:
        assert pygments_highlighter("python")("") == ""


class TestPythonIsIncomplete:
    def test_open_paren(self) -> None:
        assert python_is_incomplete("(1 + ")

    def test_block_header(self) -> None:
        assert python_is_incomplete("def f():")

    def test_complete_expression(self) -> None:
        assert not python_is_incomplete("1 + 2")

    def test_empty(self) -> None:
        assert not python_is_incomplete("")

    def test_invalid_input_counts_as_complete(self) -> None:
        assert not python_is_incomplete("1)")
