"""SGR escape helpers shared by the patch renderer and syntax highlighter.

Styles are carried around as bare SGR parameter strings (``"1"``, ``"38;2;1;2;3"``)
so independent layers can be merged into one escape per text run.
"""

from __future__ import annotations

import re

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
SGR_RESET = "\033[0m"


def join_params(*params: str) -> str:
    """Merge SGR parameter strings, dropping empty ones."""
    return ";".join(part for part in params if part)


def style_text(text: str, params: str) -> str:
    """Wrap ``text`` in one SGR sequence plus reset.

    Empty text or empty params pass through unchanged, so unstyled runs never
    carry escape bytes.
    """
    if not text or not params:
        return text
    return f"\033[{params}m{text}{SGR_RESET}"


def strip_ansi(text: str) -> str:
    """Return ``text`` with every ANSI escape sequence removed."""
    return ANSI_ESCAPE_RE.sub("", text)


def truecolor_fg(hex_color: str | None) -> str:
    """Return ``38;2;r;g;b`` params for a six-digit hex colour, else ``""``.

    Non-hex colour names (``ansired``, CSS ``var(...)``) are ignored.
    """
    if not hex_color:
        return ""
    value = hex_color.lstrip("#")
    if len(value) != 6:
        return ""
    try:
        red, green, blue = (int(value[i : i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return ""
    return f"38;2;{red};{green};{blue}"


__all__ = [
    "ANSI_ESCAPE_RE",
    "SGR_RESET",
    "join_params",
    "strip_ansi",
    "style_text",
    "truecolor_fg",
]
