"""caret: compiler-style diagnostics and line acceptance for interactive consoles."""

# Line acceptance
from caret.acceptance import Continue, EditBuffer, LineDecision, Submit, decide_line

# Completion
from caret.completion import EMPTY_WORD, ParsedWord, locate_word

# Diagnostics
from caret.diagnostics import DiagnosticMessage, DiagnosticRenderer, RenderedBlock

# Colors
from caret.highlight import Colors, Highlighter, plain

# Line-editor parser
from caret.parser import ParseContext, ParsedLine, ReplLineParser

# Positions
from caret.positions import SourceFile, SourcePosition

# Reporting
from caret.reporter import ConsoleReporter

# Settings
from caret.settings import ReplSettings, load_settings

# Tokens
from caret.tokens import CompletenessCheck, Token, TokenClass, Tokenizer, TokenizeError

# Utilities
from caret.utils import strip_ansi, strip_color, visible_width

__all__ = [
    # Line acceptance
    "Continue",
    "EditBuffer",
    "LineDecision",
    "Submit",
    "decide_line",
    # Completion
    "EMPTY_WORD",
    "ParsedWord",
    "locate_word",
    # Diagnostics
    "DiagnosticMessage",
    "DiagnosticRenderer",
    "RenderedBlock",
    # Colors
    "Colors",
    "Highlighter",
    "plain",
    # Parser
    "ParseContext",
    "ParsedLine",
    "ReplLineParser",
    # Positions
    "SourceFile",
    "SourcePosition",
    # Reporting
    "ConsoleReporter",
    # Settings
    "ReplSettings",
    "load_settings",
    # Tokens
    "CompletenessCheck",
    "Token",
    "TokenClass",
    "Tokenizer",
    "TokenizeError",
    # Utilities
    "strip_ansi",
    "strip_color",
    "visible_width",
]
