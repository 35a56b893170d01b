"""ANSI stripping and printable width of diagnostic text.

Carets and message bodies are aligned by terminal cells, so widths are
measured after escape sequences are removed.
"""

from __future__ import annotations

import re

import grapheme
import wcwidth as _wcwidth

# SGR color sequences: ESC[ <digits and ;> m
_COLOR_RE = re.compile(r"\x1b\[[;\d]*m")

# CSI sequences and OSC 8 hyperlinks
_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]|\x1b\]8;;[^\x07]*\x07")


def strip_color(text: str) -> str:
    """Remove SGR color sequences (``ESC[...m``) from *text*.

    Idempotent: stripping twice gives the same result as stripping once.
    """
    return _COLOR_RE.sub("", text)


def strip_ansi(text: str) -> str:
    """Remove CSI and OSC 8 hyperlink sequences from *text*."""
    return _ESCAPE_RE.sub("", text)


def _cluster_width(cluster: str) -> int:
    # a tab advances the caret by one column, like any other character
    if cluster == "\t":
        return 1
    return max(_wcwidth.wcswidth(cluster), 0)


def visible_width(text: str) -> int:
    """Number of terminal cells *text* occupies once escapes are removed."""
    stripped = strip_ansi(text)
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)
    return sum(_cluster_width(g) for g in grapheme.graphemes(stripped))


def is_whitespace_char(char: str) -> bool:
    return char.isspace()
