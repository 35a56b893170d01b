"""Colored console logging with timestamps.

Everything goes to stderr so log lines never interleave with REPL output
written to stdout.
"""

from __future__ import annotations

import os
import sys
from datetime import datetime

# ── ANSI helpers ─────────────────────────────────────────────────────

_YELLOW = "\033[33m"
_BLUE = "\033[34m"
_DIM = "\033[2m"
_RESET = "\033[0m"

_debug_enabled = bool(os.environ.get("CARET_DEBUG"))


def _timestamp() -> str:
    now = datetime.now()
    return f"[{now.strftime('%H:%M:%S')}]"


def _indent(text: str) -> str:
    return "\n".join(f"           {line}" for line in text.split("\n"))


def _emit(line: str) -> None:
    print(line, file=sys.stderr)


def set_debug(enabled: bool) -> None:
    global _debug_enabled
    _debug_enabled = enabled


def is_debug_enabled() -> bool:
    return _debug_enabled


# ── Public logging functions ─────────────────────────────────────────


def log_info(message: str) -> None:
    _emit(f"{_BLUE}{_timestamp()} [caret] {message}{_RESET}")


def log_warning(message: str, details: str | None = None) -> None:
    _emit(f"{_YELLOW}{_timestamp()} [caret] ⚠ {message}{_RESET}")
    if details:
        _emit(f"{_DIM}{_indent(details)}{_RESET}")


def log_debug(message: str) -> None:
    if not _debug_enabled:
        return
    _emit(f"{_DIM}{_timestamp()} [debug] {message}{_RESET}")


def log_session_start(language: str, page_width: int) -> None:
    log_debug(f"Session started (language={language}, page width={page_width})")


def log_session_end(submitted: int) -> None:
    log_debug(f"Session ended after {submitted} submitted inputs")
