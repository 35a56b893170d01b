"""Layered REPL settings with JSON files.

Precedence: CLI overrides > project settings > global settings > defaults.
Global settings live in ``$CARET_CONFIG_DIR/settings.json`` (``~/.caret`` by
default), project settings in ``<cwd>/.caret/settings.json``. Keys are
camelCase in the files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from caret.log import log_warning

CONFIG_DIR_NAME = ".caret"
SETTINGS_FILE_NAME = "settings.json"


@dataclass
class ReplSettings:
    """Everything the front end needs to know before the first prompt."""

    page_width: int = 80
    prompt: str = "caret> "
    continuation_prompt: str = "     | "
    color: bool = True
    language: str = "python"
    explain: bool = False
    debug: bool = False


# Settings field name -> JSON key
_JSON_KEYS = {
    "page_width": "pageWidth",
    "prompt": "prompt",
    "continuation_prompt": "continuationPrompt",
    "color": "color",
    "language": "language",
    "explain": "explain",
    "debug": "debug",
}


# --- Deep merge ---


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    None values in overrides are skipped. Nested dicts merge, everything
    else is replaced.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


# --- Files ---


def _default_config_dir() -> Path:
    return Path(os.environ.get("CARET_CONFIG_DIR", Path.home() / CONFIG_DIR_NAME))


def _load_settings_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        log_warning(f"Error reading settings from {path}", str(e))
        return {}
    if not isinstance(data, dict):
        log_warning(f"Ignoring settings in {path}: expected a JSON object")
        return {}
    return data


def settings_to_dict(settings: ReplSettings) -> dict[str, Any]:
    return {_JSON_KEYS[f.name]: getattr(settings, f.name) for f in fields(settings)}


def settings_from_dict(data: dict[str, Any]) -> ReplSettings:
    defaults = ReplSettings()
    values: dict[str, Any] = {}
    for f in fields(ReplSettings):
        value = data.get(_JSON_KEYS[f.name])
        default = getattr(defaults, f.name)
        if value is None:
            continue
        if not isinstance(value, type(default)) or (isinstance(value, bool) and not isinstance(default, bool)):
            log_warning(f"Ignoring setting {_JSON_KEYS[f.name]!r}: expected {type(default).__name__}")
            continue
        values[f.name] = value
    return ReplSettings(**values)


def load_settings(
    cwd: str | os.PathLike[str] | None = None,
    *,
    config_dir: str | os.PathLike[str] | None = None,
    overrides: dict[str, Any] | None = None,
) -> ReplSettings:
    """Resolve settings for a session started in ``cwd``.

    ``overrides`` uses camelCase keys, like the files; None values are
    ignored so unset CLI options fall through.
    """
    global_dir = Path(config_dir) if config_dir is not None else _default_config_dir()
    merged = _load_settings_file(global_dir / SETTINGS_FILE_NAME)
    if cwd is not None:
        project = _load_settings_file(Path(cwd) / CONFIG_DIR_NAME / SETTINGS_FILE_NAME)
        merged = deep_merge_settings(merged, project)
    merged = deep_merge_settings(merged, overrides or {})

    settings = settings_from_dict(merged)
    if os.environ.get("NO_COLOR"):
        settings.color = False
    return settings
