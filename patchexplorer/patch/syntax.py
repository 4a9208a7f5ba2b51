"""Pygments-backed line highlighting composed with diff backgrounds.

Each token is emitted as one truecolor SGR run combining the style's
foreground, the requested diff background and text decorations. Lexer and
style misses degrade to plain-text lexing and the fallback style; tokenizer
failures degrade to background-only styling. Nothing here raises.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import PurePosixPath
from typing import Any

from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.style import StyleMeta
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from ..ansi import join_params, style_text, truecolor_fg
from ..theme import DEFAULT_THEME, DiffBackground, PatchTheme

logger = logging.getLogger(__name__)

NULL_DEVICE_PATH = "/dev/null"


@lru_cache(maxsize=32)
def _style_for_name(name: str, fallback: str) -> StyleMeta:
    """Return a Pygments style class, falling back when ``name`` is unknown."""
    try:
        return get_style_by_name(name)
    except ClassNotFound:
        logger.debug("syntax style %r not found, using %r", name, fallback)
    try:
        return get_style_by_name(fallback)
    except ClassNotFound:
        return get_style_by_name("default")


def _lexer_for_filename(filename: str) -> Lexer:
    """Match a lexer by filename pattern, falling back to plain text."""
    try:
        return get_lexer_for_filename(filename, stripnl=False, ensurenl=False)
    except ClassNotFound:
        logger.debug("no lexer matches %r, using plain text", filename)
    except Exception:
        logger.debug("lexer lookup failed for %r, using plain text", filename, exc_info=True)
    return TextLexer(stripnl=False, ensurenl=False)


def apply_background_only(text: str, background: DiffBackground, theme: PatchTheme = DEFAULT_THEME) -> str:
    """Wrap ``text`` in just the diff background, with no foreground styling."""
    return style_text(text, theme.background_params(background))


class SyntaxHighlighter:
    """Tokenize single lines of code and emit ANSI runs for one file type."""

    def __init__(self, filename: str, theme: PatchTheme = DEFAULT_THEME) -> None:
        self.filename = filename
        self.theme = theme
        self.lexer = _lexer_for_filename(filename)
        self.style = _style_for_name(theme.syntax_style, theme.fallback_syntax_style)

    def _token_params(self, token_type: Any, background: DiffBackground) -> str:
        """Build merged foreground/background/decoration SGR params for a token type."""
        while not self.style.styles_token(token_type) and token_type.parent is not None:
            token_type = token_type.parent
        entry = self.style.style_for_token(token_type)

        decorations: list[str] = []
        if entry["bold"]:
            decorations.append("1")
        if entry["italic"]:
            decorations.append("3")
        if entry["underline"]:
            decorations.append("4")
        return join_params(
            truecolor_fg(entry["color"]),
            self.theme.background_params(background),
            *decorations,
        )

    def _coalesced_tokens(self, code: str) -> list[tuple[Any, str]]:
        """Tokenize ``code`` and merge adjacent runs of the same token type."""
        merged: list[tuple[Any, str]] = []
        for token_type, value in self.lexer.get_tokens(code):
            if merged and merged[-1][0] is token_type:
                merged[-1] = (token_type, merged[-1][1] + value)
            else:
                merged.append((token_type, value))
        return merged

    def highlight_line_with_background(self, code: str, background: DiffBackground) -> str:
        """Highlight one line of code over a diff background class.

        Trailing line breaks are dropped from each token and tokens that end up
        empty are skipped. Any tokenizer failure falls back to
        :func:`apply_background_only` on the untouched string.
        """
        if not code:
            return apply_background_only(code, background, self.theme)

        # Lexers turn a lone carriage return into a line break, which would split the row.
        code = code.replace("\r", "")
        try:
            tokens = self._coalesced_tokens(code)
        except Exception:
            logger.debug("tokenizing failed for %s, using background only", self.filename, exc_info=True)
            return apply_background_only(code, background, self.theme)

        out: list[str] = []
        for token_type, value in tokens:
            text = value[:-1] if value.endswith("\n") else value
            if not text:
                continue
            out.append(style_text(text, self._token_params(token_type, background)))
        return "".join(out)

    def highlight_line(self, code: str) -> str:
        """Highlight one line of code with no diff background."""
        return self.highlight_line_with_background(code, DiffBackground.NONE)


def _strip_b_prefix(path: str) -> str:
    return path[2:] if path.startswith("b/") else path


def extract_filename_from_header(header: list[str] | tuple[str, ...]) -> str | None:
    """Recover the target file's base name from diff header rows.

    Prefers the first ``+++`` row that does not point at ``/dev/null``; falls
    back to the last path token of a ``diff --git a/... b/...`` row. Returns
    ``None`` when neither yields a name.
    """
    for line in header:
        if not line.startswith("+++ "):
            continue
        path = line[len("+++ ") :]
        if path == NULL_DEVICE_PATH:
            continue
        name = PurePosixPath(_strip_b_prefix(path)).name
        if name:
            return name

    for line in header:
        if not line.startswith("diff --git "):
            continue
        parts = line.split(" ")
        if len(parts) < 4:
            continue
        name = PurePosixPath(_strip_b_prefix(parts[-1])).name
        if name:
            return name

    return None


__all__ = [
    "DiffBackground",
    "NULL_DEVICE_PATH",
    "SyntaxHighlighter",
    "apply_background_only",
    "extract_filename_from_header",
]
