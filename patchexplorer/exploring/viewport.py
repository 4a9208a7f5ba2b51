"""Scroll-origin geometry for keeping a selected row range on screen."""

from __future__ import annotations

from dataclasses import dataclass


def max_origin(buffer_height: int, total_lines: int) -> int:
    """Return the largest scroll origin that still fills the view."""
    return max(0, total_lines - buffer_height)


def calculate_origin(
    current_origin: int,
    buffer_height: int,
    total_lines: int,
    start_idx: int,
    end_idx: int,
) -> int:
    """Return the minimally adjusted origin showing ``start_idx..end_idx``.

    The origin is unchanged when the range already lies inside
    ``[current_origin, current_origin + buffer_height)``. Otherwise it moves up
    just enough to reveal ``start_idx`` or down just enough to reveal
    ``end_idx``. The end row is where the cursor sits, so it wins when the
    range is taller than the view. The result is clamped to
    ``[0, max(0, total_lines - buffer_height)]``.
    """
    height = max(1, buffer_height)
    origin = current_origin
    if start_idx >= 0 and end_idx >= 0:
        if start_idx < origin:
            origin = start_idx
        if end_idx >= origin + height:
            origin = end_idx - height + 1
    return max(0, min(origin, max_origin(buffer_height, total_lines)))


@dataclass(frozen=True)
class CursorPlacement:
    """Host-view coordinates for a selection after scrolling."""

    origin: int
    cursor_row: int
    range_select_start: int


def cursor_placement(start_idx: int, end_idx: int, origin: int) -> CursorPlacement:
    """Place the cursor on the range end, relative to ``origin``."""
    return CursorPlacement(
        origin=origin,
        cursor_row=end_idx - origin,
        range_select_start=start_idx,
    )


__all__ = [
    "CursorPlacement",
    "calculate_origin",
    "cursor_placement",
    "max_origin",
]
