"""Render a :class:`Patch` as plain appliable text or styled terminal rows.

Styled rows layer three independent styles per run: the kind colour of the
row, the diff background under the code body, and a margin indicator for
range selections. Plain output carries no escape bytes at all.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..ansi import join_params, style_text
from ..theme import DEFAULT_THEME, DiffBackground, PatchTheme
from .model import Hunk, Patch, PatchLine, PatchLineKind
from .syntax import SyntaxHighlighter, extract_filename_from_header

NO_SELECTION = -1


@dataclass(frozen=True)
class FormatViewOptions:
    """Selection and inclusion state consumed by a styled render."""

    included_line_indices: frozenset[int] = field(default_factory=frozenset)
    selected_start_idx: int = NO_SELECTION
    selected_end_idx: int = NO_SELECTION
    line_select_mode: bool = False
    # Not used to pad rows: widths do not reliably match host-side wrapping.
    view_width: int = 0

    @classmethod
    def build(
        cls,
        included_line_indices: Iterable[int] | None = None,
        selected_start_idx: int = NO_SELECTION,
        selected_end_idx: int = NO_SELECTION,
        line_select_mode: bool = False,
        view_width: int = 0,
    ) -> FormatViewOptions:
        """Create options from any iterable of included indices."""
        return cls(
            included_line_indices=frozenset(included_line_indices or ()),
            selected_start_idx=selected_start_idx,
            selected_end_idx=selected_end_idx,
            line_select_mode=line_select_mode,
            view_width=view_width,
        )


_BACKGROUND_FOR_KIND = {
    PatchLineKind.ADDITION: DiffBackground.ADDITION,
    PatchLineKind.DELETION: DiffBackground.DELETION,
    PatchLineKind.CONTEXT: DiffBackground.NONE,
}


class PatchPresenter:
    """Walk a patch row by row and build its plain or styled text."""

    def __init__(
        self,
        patch: Patch,
        plain: bool,
        options: FormatViewOptions | None = None,
        highlighter: SyntaxHighlighter | None = None,
        theme: PatchTheme = DEFAULT_THEME,
    ) -> None:
        self.patch = patch
        self.plain = plain
        self.options = options or FormatViewOptions()
        self.highlighter = highlighter
        self.theme = theme

    def is_line_selected(self, line_idx: int) -> bool:
        start = self.options.selected_start_idx
        end = self.options.selected_end_idx
        if start < 0 or end < 0:
            return False
        return start <= line_idx <= end

    def selection_indicator(self, line_idx: int) -> str:
        """Return the margin cell for one row.

        Plain renders and line-select mode get no margin; the host view draws
        full-row highlight for line mode instead.
        """
        if self.plain or self.options.line_select_mode:
            return ""
        if self.is_line_selected(line_idx):
            return style_text(self.theme.indicator_glyph, self.theme.indicator)
        return self.theme.indicator_placeholder

    def format(self) -> str:
        if not self.patch.contains_changes():
            return ""

        out: list[str] = []
        line_idx = 0

        def append_row(text: str, indicator: str) -> None:
            nonlocal line_idx
            out.append(indicator + text + "\n")
            line_idx += 1

        for line in self.patch.header:
            # Header rows sit outside the selectable body: never show the glyph.
            indicator = "" if self.plain or self.options.line_select_mode else self.theme.indicator_placeholder
            append_row(self._format_header_line(line), indicator)

        for hunk in self.patch.hunks:
            append_row(self._format_hunk_header(hunk), self.selection_indicator(line_idx))
            for body_line in hunk.body_lines:
                append_row(self._format_body_line(body_line, line_idx), self.selection_indicator(line_idx))

        return "".join(out)

    def _format_header_line(self, line: str) -> str:
        if self.plain:
            return line
        return style_text(line, join_params(self.theme.default_text, self.theme.header))

    def _format_hunk_header(self, hunk: Hunk) -> str:
        if self.plain:
            return hunk.header_text()
        return style_text(hunk.header_start, self.theme.hunk_marker) + style_text(
            hunk.header_context,
            self.theme.default_text,
        )

    def _line_style(self, kind: PatchLineKind) -> str:
        if kind is PatchLineKind.ADDITION:
            return self.theme.addition
        if kind is PatchLineKind.DELETION:
            return self.theme.deletion
        return self.theme.default_text

    def _format_body_line(self, line: PatchLine, line_idx: int) -> str:
        """Style one body row: marker char, then the code body over its diff background."""
        content = line.content
        if self.plain:
            return content

        text_style = self._line_style(line.kind)
        included = line.is_change() and line_idx in self.options.included_line_indices
        first_char_style = join_params(text_style, self.theme.included) if included else text_style

        if len(content) < 2:
            return style_text(content, first_char_style)

        marker, code = content[:1], content[1:]
        background = _BACKGROUND_FOR_KIND[line.kind]
        if self.highlighter is not None:
            styled_code = self.highlighter.highlight_line_with_background(code, background)
        else:
            styled_code = style_text(code, join_params(text_style, self.theme.background_params(background)))
        return self._pad_to_width(style_text(marker, first_char_style) + styled_code, background)

    def _pad_to_width(self, line: str, background: DiffBackground) -> str:
        # Disabled until row layout accounts for host wrapping.
        return line


def format_plain(patch: Patch) -> str:
    """Return the whole patch as raw appliable text, or ``""`` without changes."""
    return PatchPresenter(patch, plain=True).format()


def format_range_plain(patch: Patch, start_idx: int, end_idx: int) -> str:
    """Return raw text of rows ``start_idx..end_idx`` inclusive, newline terminated."""
    lines = patch.lines()
    if start_idx < 0 or end_idx < start_idx or end_idx >= len(lines):
        raise ValueError(f"invalid row range {start_idx}..{end_idx} for {len(lines)} rows")
    return "".join(f"{line}\n" for line in lines[start_idx : end_idx + 1])


def highlighter_for_patch(patch: Patch, theme: PatchTheme = DEFAULT_THEME) -> SyntaxHighlighter | None:
    """Build a highlighter when the header names a file and the theme allows colour."""
    if not theme.syntax_enabled:
        return None
    filename = extract_filename_from_header(patch.header)
    if filename is None:
        return None
    return SyntaxHighlighter(filename, theme)


def format_view(
    patch: Patch,
    options: FormatViewOptions | None = None,
    theme: PatchTheme = DEFAULT_THEME,
) -> str:
    """Return the styled render of ``patch`` for display in a terminal view."""
    presenter = PatchPresenter(
        patch,
        plain=False,
        options=options,
        highlighter=highlighter_for_patch(patch, theme),
        theme=theme,
    )
    return presenter.format()


__all__ = [
    "FormatViewOptions",
    "NO_SELECTION",
    "PatchPresenter",
    "format_plain",
    "format_range_plain",
    "format_view",
    "highlighter_for_patch",
]
