"""Patch explorer context: focus, search jumps and render driving under one lock.

The explorer never writes to a terminal. It computes the styled content and
the scroll/cursor coordinates, then stores them on an :class:`ExplorerView`
that the host reads when it composites the screen.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

from ..theme import DEFAULT_THEME, PatchTheme
from .state import PatchExploringState
from .viewport import cursor_placement

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ExplorerView:
    """Host-owned view record the explorer reads geometry from and writes into."""

    inner_height: int
    inner_width: int = 0
    origin_y: int = 0
    content: str = ""
    cursor_y: int = 0
    range_select_start: int = -1
    highlight: bool = False

    def view_lines_height(self) -> int:
        """Return rendered row count of the current content.

        Only ``\\n`` ends a row; form feeds and other Unicode separators inside
        code stay on their row.
        """
        rows = self.content.count("\n")
        if self.content and not self.content.endswith("\n"):
            rows += 1
        return rows


class FocusState:
    """Track focus and derive the host's full-row highlight signal."""

    def __init__(self) -> None:
        self.focused = False

    def highlight_for(self, state: PatchExploringState | None) -> bool:
        """Full-row highlight only applies to a focused explorer in line mode."""
        return state is not None and self.focused and state.selecting_line()


class RenderDriver:
    """Render explorer state into the view and keep the selection scrolled into sight."""

    def __init__(
        self,
        view: ExplorerView,
        get_included_line_indices: Callable[[], Iterable[int]],
        focus: FocusState,
        theme: PatchTheme = DEFAULT_THEME,
    ) -> None:
        self.view = view
        self.get_included_line_indices = get_included_line_indices
        self.focus = focus
        self.theme = theme

    def update_highlight(self, state: PatchExploringState | None) -> None:
        self.view.highlight = self.focus.highlight_for(state)

    def content_to_render(self, state: PatchExploringState | None) -> str:
        if state is None:
            return ""
        self.update_highlight(state)
        return state.render_for_line_indices(
            self.get_included_line_indices(),
            self.focus.focused,
            self.view.inner_width,
            self.theme,
        )

    def render(self, state: PatchExploringState | None) -> None:
        self.view.content = self.content_to_render(state)

    def focus_selection(self, state: PatchExploringState | None) -> None:
        """Scroll minimally so the selection is visible and place the cursor on its end."""
        if state is None:
            return
        new_origin = state.calculate_origin(
            self.view.origin_y,
            self.view.inner_height,
            self.view.view_lines_height(),
        )
        start_idx, end_idx = state.selected_view_range()
        placement = cursor_placement(start_idx, end_idx, new_origin)
        self.view.origin_y = placement.origin
        # The host always sees a range, even for a single line.
        self.view.range_select_start = placement.range_select_start
        self.view.cursor_y = placement.cursor_row

    def render_and_focus(self, state: PatchExploringState | None) -> None:
        self.render(state)
        self.focus_selection(state)


class SearchNavigator:
    """Apply search-result jumps: always a single line, never a range."""

    def __init__(self, driver: RenderDriver) -> None:
        self.driver = driver

    def navigate_to(self, state: PatchExploringState, selected_line_idx: int) -> bool:
        """Jump to a body row; hits on header, ``@@`` or missing rows are ignored.

        Returns whether the selection moved. Nothing is mutated for ignored hits.
        """
        if state.patch.line_at(selected_line_idx) is None:
            logger.debug("search jump to non-body row %d ignored", selected_line_idx)
            return False
        state.set_line_select_mode()
        state.select_line(selected_line_idx)
        self.driver.render_and_focus(state)
        return True


class PatchExplorer:
    """One explorer instance: selection state plus the lock serializing its use.

    Every public entry point takes the lock once for the whole
    mutation-and-render sequence. The lock is not reentrant; callbacks passed to
    :meth:`run_locked` must not call back into locked entry points.
    """

    def __init__(
        self,
        view: ExplorerView,
        get_included_line_indices: Callable[[], Iterable[int]] = frozenset,
        theme: PatchTheme = DEFAULT_THEME,
    ) -> None:
        self._lock = threading.Lock()
        self._state: PatchExploringState | None = None
        self.view = view
        self.focus = FocusState()
        self.driver = RenderDriver(view, get_included_line_indices, self.focus, theme)
        self.search = SearchNavigator(self.driver)

    @property
    def mutex(self) -> threading.Lock:
        return self._lock

    @property
    def state(self) -> PatchExploringState | None:
        return self._state

    def set_state(self, state: PatchExploringState | None) -> None:
        """Replace the selection state, e.g. for a new patch snapshot."""
        with self._lock:
            self._state = state

    def selecting_line(self) -> bool:
        with self._lock:
            return self._state is not None and self._state.selecting_line()

    def handle_focus(self) -> None:
        with self._lock:
            self.focus.focused = True
            self.driver.update_highlight(self._state)

    def handle_focus_lost(self) -> None:
        with self._lock:
            self.focus.focused = False
            self.view.highlight = False

    def content_to_render(self) -> str:
        with self._lock:
            return self.driver.content_to_render(self._state)

    def render(self) -> None:
        with self._lock:
            self.driver.render(self._state)

    def render_and_focus(self) -> None:
        with self._lock:
            self.driver.render_and_focus(self._state)

    def focus_selection(self) -> None:
        """Scroll the view to the current selection without re-rendering."""
        with self._lock:
            self.driver.focus_selection(self._state)

    def on_select_item(self, selected_line_idx: int) -> None:
        """Handle a search-result jump to ``selected_line_idx``."""
        with self._lock:
            if self._state is None:
                logger.debug("search jump to row %d ignored: no patch loaded", selected_line_idx)
                return
            self.search.navigate_to(self._state, selected_line_idx)

    def on_view_width_changed(self, inner_width: int | None = None) -> None:
        with self._lock:
            if self._state is None:
                return
            if inner_width is not None:
                self.view.inner_width = inner_width
            self.driver.render_and_focus(self._state)

    def run_locked(self, action: Callable[[PatchExploringState], T]) -> T | None:
        """Run an input handler's mutation, then re-render, all under the lock.

        Returns ``None`` without calling ``action`` when no patch is loaded.
        """
        with self._lock:
            if self._state is None:
                return None
            result = action(self._state)
            self.driver.render_and_focus(self._state)
            return result


__all__ = [
    "ExplorerView",
    "FocusState",
    "PatchExplorer",
    "RenderDriver",
    "SearchNavigator",
]
