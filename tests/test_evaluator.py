"""Tests for caret.evaluator -- running console input and reporting failures."""

from __future__ import annotations

import io
import types

from caret.diagnostics import DiagnosticRenderer
from caret.evaluator import (
    CONSOLE,
    PythonEvaluator,
    check_source,
    console_filename,
    syntax_error_position,
    traceback_position,
)
from caret.highlight import NO_COLORS
from caret.positions import SourceFile
from caret.reporter import ConsoleReporter


def _evaluator(*, explain: bool = False) -> tuple[PythonEvaluator, io.StringIO]:
    out = io.StringIO()
    reporter = ConsoleReporter(DiagnosticRenderer(page_width=40, colors=NO_COLORS), out, explain=explain)
    return PythonEvaluator(reporter), out


class TestRun:
    """Successful and failing input."""

    def test_assignment_persists(self) -> None:
        evaluator, out = _evaluator()
        assert evaluator.run("x = 21 * 2")
        assert evaluator.run("y = x + 1")
        assert evaluator.namespace["y"] == 43
        assert out.getvalue() == ""

    def test_syntax_error_rendered_with_caret(self) -> None:
        evaluator, out = _evaluator()
        assert not evaluator.run("1)")
        lines = out.getvalue().split("\n")
        assert lines[0].startswith(f"-- Error: {CONSOLE} ")
        assert lines[1] == "1:1)"
        assert lines[2].index("^") == 3
        assert evaluator.reporter.error_count == 1

    def test_runtime_error_rendered(self) -> None:
        evaluator, out = _evaluator()
        assert not evaluator.run("1 / 0")
        text = out.getvalue()
        assert "ZeroDivisionError: division by zero" in text
        assert "1:1 / 0" in text
        assert "^" in text

    def test_runtime_error_explanation(self) -> None:
        evaluator, out = _evaluator(explain=True)
        evaluator.run("1 / 0")
        assert "Explanation" in out.getvalue()

    def test_error_in_called_function_points_at_console_frame(self) -> None:
        evaluator, out = _evaluator()
        evaluator.namespace["boom"] = lambda: {}["missing"]
        assert not evaluator.run("boom()")
        text = out.getvalue()
        assert "KeyError: 'missing'" in text
        assert "1:boom()" in text

    def test_non_ascii_line_carets_count_characters(self) -> None:
        evaluator, out = _evaluator()
        assert not evaluator.run('"ééééé" + 1\n')
        lines = out.getvalue().split("\n")
        assert lines[1] == '1:"ééééé" + 1'
        assert lines[2] == "  " + "^" * 11

    def test_error_in_function_from_earlier_input(self) -> None:
        evaluator, out = _evaluator()
        assert evaluator.run("def f():\n    return 1 / 0\n")
        assert not evaluator.run("if True:\n    pass\n    f()\n")
        lines = out.getvalue().split("\n")
        assert lines[1] == "2:    return 1 / 0"
        assert lines[2] == " " * 13 + "^^^^^"


class TestTracebackPosition:
    """Mapping a traceback frame back onto console input."""

    def _raise(self, filename: str, text: str) -> BaseException:
        try:
            exec(compile(text, filename, "exec"), {})
        except Exception as e:
            return e
        raise AssertionError("expected an exception")

    def test_columns_converted_from_bytes(self) -> None:
        source = SourceFile(CONSOLE, 'y = "ü" * "ü"\n')
        exc = self._raise(console_filename(7), source.content)
        position = traceback_position({console_filename(7): source}, exc)
        assert position is not None
        assert (position.start_line, position.start_column) == (1, 4)
        assert (position.end_line, position.end_column) == (1, 13)

    def test_frame_from_unknown_code(self) -> None:
        exc = self._raise("<elsewhere>", "1 / 0\n")
        assert traceback_position({console_filename(1): SourceFile(CONSOLE, "1 / 0\n")}, exc) is None

    def test_filenames_are_distinct(self) -> None:
        assert console_filename(1) != console_filename(2)


class TestSyntaxErrorPosition:
    def test_multi_line_error(self) -> None:
        source = SourceFile("a.py", "x = (\n")
        error = SyntaxError("'(' was never closed", ("a.py", 1, 5, "x = (\n", 1, 6))
        position = syntax_error_position(source, error)
        assert position is not None
        assert (position.start_line, position.start_column) == (1, 4)
        assert (position.end_line, position.end_column) == (1, 5)

    def test_missing_end_gives_one_column(self) -> None:
        source = SourceFile("a.py", "abc\n")
        error = SyntaxError("bad", ("a.py", 1, 2, "abc\n"))
        position = syntax_error_position(source, error)
        assert position is not None
        assert (position.start_column, position.end_column) == (1, 2)

    def test_no_line_number(self) -> None:
        source = SourceFile("a.py", "abc\n")
        assert syntax_error_position(source, SyntaxError("bad")) is None


class TestCandidates:
    """Completion candidates from the namespace."""

    def test_globals_include_keywords_builtins_and_names(self) -> None:
        evaluator, _ = _evaluator()
        evaluator.namespace["spam"] = 1
        names = set(evaluator.candidates("pri", 0, "pri"))
        assert {"print", "while", "spam"} <= names

    def test_attributes_after_dot(self) -> None:
        evaluator, _ = _evaluator()
        evaluator.namespace["foo"] = types.SimpleNamespace(bar=1, baz=2)
        names = set(evaluator.candidates("foo.ba", 4, "ba"))
        assert {"bar", "baz"} <= names
        assert "print" not in names

    def test_nested_attributes(self) -> None:
        evaluator, _ = _evaluator()
        evaluator.namespace["a"] = types.SimpleNamespace(b=types.SimpleNamespace(c=3))
        assert "c" in set(evaluator.candidates("a.b.", 4, ""))

    def test_unknown_object(self) -> None:
        evaluator, _ = _evaluator()
        assert list(evaluator.candidates("nope.", 5, "")) == []

    def test_failing_attribute_lookup(self) -> None:
        evaluator, _ = _evaluator()
        evaluator.namespace["foo"] = types.SimpleNamespace()
        assert list(evaluator.candidates("foo.missing.", 12, "")) == []


class TestCheckSource:
    def test_valid_file(self) -> None:
        evaluator, out = _evaluator()
        assert check_source(evaluator.reporter, "good.py", "def f():\n    return 1\n")
        assert out.getvalue() == ""

    def test_invalid_file(self) -> None:
        evaluator, out = _evaluator()
        assert not check_source(evaluator.reporter, "bad.py", "x = 1\ndef f(:\n    pass\n")
        lines = out.getvalue().split("\n")
        assert lines[0].startswith("-- Error: bad.py ")
        assert lines[1] == "2:def f(:"
