"""Selection state over one patch snapshot.

Two visual modes: ``LINE`` selects a single body row and leaves the cue to the
host's full-row highlight; ``HUNK_OR_RANGE`` selects a contiguous row range and
is drawn with the margin indicator. Indices always address the flattened
rendered rows of the patch.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from ..patch.format import NO_SELECTION, FormatViewOptions, format_range_plain, format_view
from ..patch.model import Patch
from ..theme import DEFAULT_THEME, PatchTheme
from .viewport import calculate_origin


class SelectMode(Enum):
    """Visual selection mode."""

    LINE = "line"
    HUNK_OR_RANGE = "hunk_or_range"


class PatchExploringState:
    """Selected row range plus mode for one patch explorer session.

    Selection indices are validated against the patch body rows: selecting a
    header or ``@@`` row, or an index outside the patch, raises ``ValueError``.
    """

    def __init__(
        self,
        patch: Patch,
        selected_line_idx: int = NO_SELECTION,
        old_state: PatchExploringState | None = None,
    ) -> None:
        self.patch = patch
        self._body_rows = patch.body_line_indices()
        self._body_row_set = frozenset(self._body_rows)
        self._change_rows = patch.change_line_indices()
        self.select_mode = old_state.select_mode if old_state is not None else SelectMode.LINE
        self.range_start_idx = NO_SELECTION
        self.selected_line_idx = NO_SELECTION

        if not self._body_rows:
            return

        if selected_line_idx == NO_SELECTION and old_state is not None:
            selected_line_idx = self._nearest_body_row(old_state.selected_line_idx)
        if selected_line_idx == NO_SELECTION:
            selected_line_idx = self._change_rows[0] if self._change_rows else self._body_rows[0]

        if self.select_mode is SelectMode.HUNK_OR_RANGE and old_state is not None and old_state.selecting_hunk():
            self.select_hunk(self._hunk_for(selected_line_idx))
        else:
            self.select_line(selected_line_idx)

    def _nearest_body_row(self, idx: int) -> int:
        """Clamp a carried-over index onto the nearest body row of this patch."""
        if idx < 0:
            return NO_SELECTION
        for row in self._body_rows:
            if row >= idx:
                return row
        return self._body_rows[-1]

    def _require_body_row(self, idx: int) -> None:
        if idx not in self._body_row_set:
            raise ValueError(f"row {idx} is not a selectable patch body row")

    def _hunk_for(self, idx: int) -> int:
        hunk_idx = self.patch.hunk_index_for_line(idx)
        if hunk_idx is None:
            raise ValueError(f"row {idx} is not inside a hunk")
        return hunk_idx

    # Mode

    def set_line_select_mode(self) -> None:
        """Switch to line mode without moving the selection."""
        self.select_mode = SelectMode.LINE

    def set_range_select_mode(self) -> None:
        self.select_mode = SelectMode.HUNK_OR_RANGE

    def selecting_line(self) -> bool:
        return self.select_mode is SelectMode.LINE

    def selecting_range(self) -> bool:
        return self.select_mode is SelectMode.HUNK_OR_RANGE

    def selecting_hunk(self) -> bool:
        """Return whether the range covers exactly one hunk's body."""
        if not self.selecting_range() or self.range_start_idx < 0:
            return False
        hunk_idx = self.patch.hunk_index_for_line(self.range_start_idx)
        if hunk_idx is None:
            return False
        return self.patch.hunk_body_range(hunk_idx) == self.selected_view_range()

    # Selection

    def select_line(self, idx: int) -> None:
        """Select a single body row: start and end both become ``idx``."""
        self._require_body_row(idx)
        self.range_start_idx = idx
        self.selected_line_idx = idx

    def select_range(self, start_idx: int, end_idx: int) -> None:
        """Select body rows between two indices in range mode.

        The bounds may be given in either order.
        """
        self._require_body_row(start_idx)
        self._require_body_row(end_idx)
        self.select_mode = SelectMode.HUNK_OR_RANGE
        self.range_start_idx = start_idx
        self.selected_line_idx = end_idx

    def extend_range(self, idx: int) -> None:
        """Move the range end to ``idx``, keeping the current anchor."""
        anchor = self.range_start_idx if self.range_start_idx >= 0 else idx
        self.select_range(anchor, idx)

    def select_hunk(self, hunk_idx: int) -> None:
        """Select every body row of one hunk in range mode."""
        if not 0 <= hunk_idx < len(self.patch.hunks):
            raise ValueError(f"hunk {hunk_idx} out of range")
        start, end = self.patch.hunk_body_range(hunk_idx)
        if end < start:
            raise ValueError(f"hunk {hunk_idx} has no body rows")
        self.select_range(start, end)

    def toggle_select_hunk(self) -> None:
        """Flip between the current line and its enclosing hunk."""
        if self.selected_line_idx < 0:
            return
        if self.selecting_line():
            self.select_hunk(self._hunk_for(self.selected_line_idx))
            return
        start, _end = self.selected_view_range()
        self.set_line_select_mode()
        self.select_line(start)

    def current_hunk_index(self) -> int | None:
        if self.selected_line_idx < 0:
            return None
        return self.patch.hunk_index_for_line(self.selected_line_idx)

    def cycle_selection(self, forward: bool) -> None:
        """Step to the next/previous change row, or hunk in range mode.

        Stays put at either end.
        """
        if self.selected_line_idx < 0:
            return
        if self.selecting_range():
            hunk_idx = self.current_hunk_index()
            if hunk_idx is None:
                return
            step = 1 if forward else -1
            target = hunk_idx + step
            while 0 <= target < len(self.patch.hunks):
                start, end = self.patch.hunk_body_range(target)
                if end >= start:
                    self.select_hunk(target)
                    return
                target += step
            return

        current = self.selected_line_idx
        candidates = self._change_rows or self._body_rows
        if forward:
            target_row = next((row for row in candidates if row > current), None)
        else:
            target_row = next((row for row in reversed(candidates) if row < current), None)
        if target_row is not None:
            self.select_line(target_row)

    def select_top(self) -> None:
        if self._body_rows:
            self.set_line_select_mode()
            self.select_line(self._body_rows[0])

    def select_bottom(self) -> None:
        if self._body_rows:
            self.set_line_select_mode()
            self.select_line(self._body_rows[-1])

    def selected_view_range(self) -> tuple[int, int]:
        """Return ``(start, end)`` rows with ``start <= end``; ``(-1, -1)`` when empty."""
        if self.selected_line_idx < 0:
            return NO_SELECTION, NO_SELECTION
        if self.selecting_line():
            return self.selected_line_idx, self.selected_line_idx
        return (
            min(self.range_start_idx, self.selected_line_idx),
            max(self.range_start_idx, self.selected_line_idx),
        )

    # Rendering

    def plain_render_selected(self) -> str:
        """Return the selected rows as raw appliable diff text."""
        start, end = self.selected_view_range()
        if start < 0:
            return ""
        return format_range_plain(self.patch, start, end)

    def render_for_line_indices(
        self,
        included_line_indices: Iterable[int],
        focused: bool,
        view_width: int = 0,
        theme: PatchTheme = DEFAULT_THEME,
    ) -> str:
        """Render the styled patch, showing the selection only while focused."""
        start, end = self.selected_view_range() if focused else (NO_SELECTION, NO_SELECTION)
        options = FormatViewOptions.build(
            included_line_indices,
            selected_start_idx=start,
            selected_end_idx=end,
            line_select_mode=self.selecting_line(),
            view_width=view_width,
        )
        return format_view(self.patch, options, theme)

    def calculate_origin(self, current_origin: int, buffer_height: int, total_lines: int) -> int:
        start, end = self.selected_view_range()
        return calculate_origin(current_origin, buffer_height, total_lines, start, end)


__all__ = ["PatchExploringState", "SelectMode"]
