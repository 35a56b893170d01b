"""Python evaluation for the REPL, reporting failures as diagnostics."""

from __future__ import annotations

import builtins
import keyword
import re
import traceback
from collections.abc import Iterator, Mapping
from typing import Any

from caret.diagnostics import DiagnosticMessage
from caret.log import log_debug
from caret.positions import SourceFile, SourcePosition
from caret.reporter import ConsoleReporter

CONSOLE = "<console>"

_DOTTED_RE = re.compile(r"([A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)\.$")


def _explanation(exc: BaseException) -> str | None:
    doc = type(exc).__doc__
    return doc.strip() if doc else None


def syntax_error_position(source: SourceFile, error: SyntaxError) -> SourcePosition | None:
    """Map a ``SyntaxError``'s 1-based offsets onto a position in ``source``."""
    if error.lineno is None:
        return None
    start_line = error.lineno
    start_column = max((error.offset or 1) - 1, 0)
    end_line = error.end_lineno if error.end_lineno is not None else start_line
    end_offset = error.end_offset if error.end_offset is not None and error.end_offset > 0 else None
    end_column = end_offset - 1 if end_offset is not None else start_column + 1
    if end_line < start_line:
        end_line = start_line
    if end_line == start_line and end_column < start_column:
        end_column = start_column
    return SourcePosition(source, start_line, start_column, end_line, end_column)


def console_filename(index: int) -> str:
    """Code filename for the ``index``-th console input."""
    return f"<console#{index}>"


def _char_column(line: str, byte_offset: int) -> int:
    # frame columns are UTF-8 byte offsets into the line
    return len(line.encode()[:byte_offset].decode(errors="replace"))


def traceback_position(sources: Mapping[str, SourceFile], exc: BaseException) -> SourcePosition | None:
    """Position of the innermost frame of ``exc`` whose code came from ``sources``.

    ``sources`` maps code filenames to the text compiled under them.
    """
    frames = [frame for frame in traceback.extract_tb(exc.__traceback__) if frame.filename in sources]
    if not frames:
        return None
    frame = frames[-1]
    source = sources[frame.filename]
    if frame.lineno is None or frame.lineno > source.line_count:
        return None
    line = frame.lineno
    end_line = frame.end_lineno if frame.end_lineno is not None else line
    if frame.colno is not None and frame.end_colno is not None and end_line <= source.line_count:
        start_column = _char_column(source.line_content(line), frame.colno)
        end_column = _char_column(source.line_content(end_line), frame.end_colno)
    else:
        content = source.line_content(line).rstrip("\r\n")
        start_column = len(content) - len(content.lstrip())
        end_line, end_column = line, len(content)
    if end_line < line or (end_line == line and end_column < start_column):
        end_line, end_column = line, start_column
    return SourcePosition(source, line, start_column, end_line, end_column)


class PythonEvaluator:
    """Runs console input in a persistent namespace.

    Each input is compiled under its own filename and kept, so a failure
    inside a function defined by an earlier input points at that input.
    """

    def __init__(self, reporter: ConsoleReporter, namespace: dict[str, Any] | None = None) -> None:
        self.reporter = reporter
        self.namespace: dict[str, Any] = namespace if namespace is not None else {"__name__": "__console__"}
        self._sources: dict[str, SourceFile] = {}
        self._inputs = 0

    def run(self, text: str) -> bool:
        """Compile and execute ``text``; return False if a diagnostic was reported."""
        self._inputs += 1
        filename = console_filename(self._inputs)
        source = SourceFile(CONSOLE, text)
        try:
            code = compile(text, filename, "single")
        except (SyntaxError, OverflowError, ValueError) as e:
            self._report_compile_error(source, e)
            return False
        self._sources[filename] = source

        try:
            exec(code, self.namespace)
        except SystemExit:
            raise
        except BaseException as e:
            name = type(e).__name__
            detail = str(e)
            message = DiagnosticMessage(
                f"{name}: {detail}" if detail else name,
                kind="Error",
                explanation=_explanation(e),
            )
            self.reporter.report(message, traceback_position(self._sources, e))
            return False
        return True

    def _report_compile_error(self, source: SourceFile, error: Exception) -> None:
        if isinstance(error, SyntaxError):
            message = DiagnosticMessage(error.msg or str(error), kind="Error", explanation=_explanation(error))
            self.reporter.report(message, syntax_error_position(source, error))
        else:
            self.reporter.report(DiagnosticMessage(str(error), kind="Error"))

    # -- completion candidates ----------------------------------------------

    def candidates(self, text: str, word_start: int, prefix: str) -> Iterator[str]:
        """Names visible at ``word_start``: attributes after ``obj.``, else globals."""
        match = _DOTTED_RE.search(text[:word_start])
        if match is not None:
            yield from self._attributes(match.group(1))
            return
        yield from keyword.kwlist
        yield from dir(builtins)
        yield from self.namespace

    def _attributes(self, dotted: str) -> Iterator[str]:
        head, *rest = dotted.split(".")
        if head in self.namespace:
            obj = self.namespace[head]
        elif hasattr(builtins, head):
            obj = getattr(builtins, head)
        else:
            return
        try:
            for part in rest:
                obj = getattr(obj, part)
            names = dir(obj)
        except Exception as e:
            log_debug(f"Cannot list attributes of {dotted}: {e}")
            return
        yield from names


def check_source(reporter: ConsoleReporter, path: str, text: str) -> bool:
    """Compile a whole file; report and return False on a syntax error."""
    source = SourceFile(path, text)
    try:
        compile(text, path, "exec")
    except SyntaxError as e:
        message = DiagnosticMessage(e.msg or str(e), kind="Error", explanation=_explanation(e))
        reporter.report(message, syntax_error_position(source, e))
        return False
    except (OverflowError, ValueError) as e:
        reporter.report(DiagnosticMessage(str(e), kind="Error"))
        return False
    return True
