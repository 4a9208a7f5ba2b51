"""Persistent JSON config helpers.

Stores the patch theme name and an optional syntax style override.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

from platformdirs import user_config_dir

from .theme import PatchTheme, normalize_theme_name, resolve_theme

APP_NAME = "patchexplorer"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; write errors are ignored."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_stripped_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _save_stripped_string(key: str, value: str) -> None:
    stripped = str(value).strip()
    if not stripped:
        return
    config = load_config()
    config[key] = stripped
    save_config(config)


def load_theme_name() -> str | None:
    """Load persisted patch theme name, returning ``None`` when unset/invalid."""
    return _load_stripped_string("theme")


def save_theme_name(theme_name: str) -> None:
    _save_stripped_string("theme", theme_name)


def load_syntax_style() -> str | None:
    """Load the persisted Pygments style override, if any."""
    return _load_stripped_string("syntax_style")


def save_syntax_style(style: str) -> None:
    _save_stripped_string("syntax_style", style)


def load_patch_theme(*, no_color: bool = False) -> PatchTheme:
    """Resolve the configured theme with any syntax style override applied.

    Unknown theme names resolve to the default theme. The style override is
    not validated here; the highlighter falls back when Pygments lacks it.
    """
    theme = resolve_theme(normalize_theme_name(load_theme_name()), no_color=no_color)
    style = load_syntax_style()
    if style is None or no_color:
        return theme
    return replace(theme, syntax_style=style)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "load_patch_theme",
    "load_syntax_style",
    "load_theme_name",
    "save_config",
    "save_syntax_style",
    "save_theme_name",
]
