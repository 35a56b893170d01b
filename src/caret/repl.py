"""Read-evaluate-print loop wiring the terminal, evaluator and reporter."""

from __future__ import annotations

from typing import TextIO

from caret.diagnostics import DiagnosticRenderer
from caret.evaluator import PythonEvaluator
from caret.highlight import Colors
from caret.languages import PygmentsTokenizer, pygments_highlighter, python_is_incomplete
from caret.log import log_session_end, log_session_start
from caret.parser import ReplLineParser
from caret.reporter import ConsoleReporter
from caret.settings import ReplSettings
from caret.terminal import EndOfSession, ReplTerminal, SessionConfig

QUIT_COMMANDS = frozenset({":quit", ":q", ":exit"})


def build_renderer(settings: ReplSettings) -> DiagnosticRenderer:
    return DiagnosticRenderer(
        page_width=settings.page_width,
        highlighter=pygments_highlighter(settings.language, enabled=settings.color),
        colors=Colors(enabled=settings.color),
    )


def run_repl(
    settings: ReplSettings,
    *,
    config: SessionConfig | None = None,
    writer: TextIO | None = None,
) -> int:
    """Run the REPL until the user ends the session; return the input count."""
    config = config or SessionConfig.from_settings(settings, writer=writer)
    reporter = ConsoleReporter(build_renderer(settings), config.writer, explain=settings.explain)
    evaluator = PythonEvaluator(reporter)
    parser = ReplLineParser(
        PygmentsTokenizer(settings.language),
        python_is_incomplete,
        config.continuation_prompt,
    )

    submitted = 0
    log_session_start(settings.language, config.page_width)
    with ReplTerminal(
        config,
        parser,
        highlighter=pygments_highlighter(settings.language, enabled=config.color),
        candidates=evaluator.candidates,
    ) as terminal:
        while True:
            try:
                source = terminal.read_line()
            except KeyboardInterrupt:
                continue
            except EndOfSession:
                break
            if source.strip() in QUIT_COMMANDS:
                break
            if not source.strip():
                continue
            submitted += 1
            evaluator.run(source)
    log_session_end(submitted)
    return submitted
