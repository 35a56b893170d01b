"""CLI entry point for caret. Uses Click for argument parsing."""

from __future__ import annotations

import os
import sys

import click
from pygments.util import ClassNotFound

from caret.evaluator import check_source
from caret.log import set_debug
from caret.reporter import ConsoleReporter
from caret.settings import ReplSettings, load_settings


def _settings(
    page_width: int | None,
    no_color: bool,
    explain: bool,
    language: str | None,
    debug: bool,
) -> ReplSettings:
    overrides = {
        "pageWidth": page_width,
        "color": False if no_color else None,
        "explain": True if explain else None,
        "language": language,
        "debug": True if debug else None,
    }
    settings = load_settings(os.getcwd(), overrides=overrides)
    set_debug(settings.debug)
    return settings


def _settings_options(fn):
    fn = click.option("--debug", is_flag=True, help="Log debug messages to stderr")(fn)
    fn = click.option("--language", default=None, help="Pygments lexer used for tokens and colors")(fn)
    fn = click.option("--explain", is_flag=True, help="Print explanations after diagnostics")(fn)
    fn = click.option("--no-color", is_flag=True, help="Disable ANSI colors")(fn)
    fn = click.option("--page-width", type=click.IntRange(min=0), default=None, help="Diagnostic width in columns")(fn)
    return fn


@click.group(invoke_without_command=True)
@click.pass_context
def main(ctx):
    """Interactive Python console with compiler-style diagnostics."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(repl)


@main.command()
@_settings_options
def repl(page_width=None, no_color=False, explain=False, language=None, debug=False):
    """Start the interactive console (Ctrl-D to leave)."""
    from caret.repl import run_repl

    settings = _settings(page_width, no_color, explain, language, debug)
    try:
        run_repl(settings)
    except ClassNotFound:
        raise click.BadParameter(f"Unknown language '{settings.language}'", param_hint="--language")


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False))
@_settings_options
def check(files, page_width, no_color, explain, language, debug):
    """Compile Python FILES and report syntax errors."""
    from caret.repl import build_renderer

    settings = _settings(page_width, no_color, explain, language, debug)
    try:
        renderer = build_renderer(settings)
    except ClassNotFound:
        raise click.BadParameter(f"Unknown language '{settings.language}'", param_hint="--language")

    reporter = ConsoleReporter(renderer, sys.stdout, explain=settings.explain)
    unreadable = False
    for path in files:
        try:
            with open(path, encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            click.echo(f"Cannot read {path}: {e}", err=True)
            unreadable = True
            continue
        check_source(reporter, path, text)

    summary = reporter.summary()
    if summary:
        click.echo(summary)
    if unreadable:
        sys.exit(2)
    if reporter.has_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
