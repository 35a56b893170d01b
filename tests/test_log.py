"""Tests for caret.log."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from caret.log import (
    is_debug_enabled,
    log_debug,
    log_info,
    log_session_end,
    log_session_start,
    log_warning,
    set_debug,
)
from caret.utils import strip_color


@pytest.fixture(autouse=True)
def _restore_debug() -> Iterator[None]:
    before = is_debug_enabled()
    yield
    set_debug(before)


class TestLogging:
    def test_info_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        log_info("hello")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[caret] hello" in strip_color(captured.err)

    def test_warning_details_indented(self, capsys: pytest.CaptureFixture[str]) -> None:
        log_warning("bad file", "line one\nline two")
        lines = strip_color(capsys.readouterr().err).splitlines()
        assert "bad file" in lines[0]
        assert lines[1] == "           line one"
        assert lines[2] == "           line two"

    def test_debug_silent_by_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        set_debug(False)
        log_debug("hidden")
        log_session_start("python", 80)
        assert capsys.readouterr().err == ""

    def test_debug_enabled(self, capsys: pytest.CaptureFixture[str]) -> None:
        set_debug(True)
        assert is_debug_enabled()
        log_session_end(3)
        assert "Session ended after 3 submitted inputs" in capsys.readouterr().err
