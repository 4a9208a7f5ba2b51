"""Patch theme definitions and selection helpers.

A theme is the explicit colour configuration handed to the renderer and the
syntax highlighter: text styles per row kind, the selection indicator, the
truecolor diff backgrounds, and the Pygments style name for code tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DiffBackground(Enum):
    """Background classification applied under syntax-coloured code."""

    NONE = "none"
    ADDITION = "addition"
    DELETION = "deletion"
    SELECTED = "selected"


@dataclass(frozen=True)
class PatchTheme:
    """SGR parameter palette used by the patch renderer."""

    name: str
    header: str
    hunk_marker: str
    default_text: str
    addition: str
    deletion: str
    included: str
    indicator: str
    indicator_glyph: str
    indicator_placeholder: str
    addition_bg: str
    deletion_bg: str
    selected_bg: str
    syntax_style: str
    fallback_syntax_style: str = "default"
    syntax_enabled: bool = True

    def background_params(self, background: DiffBackground) -> str:
        """Return background SGR params for a diff background class."""
        if background is DiffBackground.ADDITION:
            return self.addition_bg
        if background is DiffBackground.DELETION:
            return self.deletion_bg
        if background is DiffBackground.SELECTED:
            return self.selected_bg
        return ""


DEFAULT_THEME = PatchTheme(
    name="default",
    header="1",
    hunk_marker="36",
    default_text="",
    addition="32",
    deletion="31",
    included="42",
    indicator="36",
    indicator_glyph="▌",
    indicator_placeholder=" ",
    addition_bg="48;2;0;77;36",
    deletion_bg="48;2;77;0;24",
    selected_bg="48;2;60;60;60",
    syntax_style="dracula",
)

LIGHT_THEME = PatchTheme(
    name="light",
    header="1",
    hunk_marker="34",
    default_text="",
    addition="32",
    deletion="31",
    included="42",
    indicator="34",
    indicator_glyph="▌",
    indicator_placeholder=" ",
    addition_bg="48;2;218;251;225",
    deletion_bg="48;2;255;235;233",
    selected_bg="48;2;234;238;242",
    syntax_style="friendly",
)

PLAIN_THEME = PatchTheme(
    name="plain",
    header="",
    hunk_marker="",
    default_text="",
    addition="",
    deletion="",
    included="",
    indicator="",
    indicator_glyph="▌",
    indicator_placeholder=" ",
    addition_bg="",
    deletion_bg="",
    selected_bg="",
    syntax_style="default",
    syntax_enabled=False,
)

_THEMES: dict[str, PatchTheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    LIGHT_THEME.name: LIGHT_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> PatchTheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "DiffBackground",
    "PatchTheme",
    "DEFAULT_THEME",
    "LIGHT_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
