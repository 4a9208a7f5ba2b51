"""Patch model, syntax highlighting and rendering."""

from __future__ import annotations

from .format import FormatViewOptions, PatchPresenter, format_plain, format_range_plain, format_view
from .model import Hunk, Patch, PatchLine, PatchLineKind
from .syntax import DiffBackground, SyntaxHighlighter, apply_background_only, extract_filename_from_header

__all__ = [
    "DiffBackground",
    "FormatViewOptions",
    "Hunk",
    "Patch",
    "PatchLine",
    "PatchLineKind",
    "PatchPresenter",
    "SyntaxHighlighter",
    "apply_background_only",
    "extract_filename_from_header",
    "format_plain",
    "format_range_plain",
    "format_view",
]
