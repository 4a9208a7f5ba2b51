"""Selection state, viewport geometry and the explorer context."""

from __future__ import annotations

from .explorer import ExplorerView, FocusState, PatchExplorer, RenderDriver, SearchNavigator
from .state import PatchExploringState, SelectMode
from .viewport import CursorPlacement, calculate_origin, cursor_placement

__all__ = [
    "CursorPlacement",
    "ExplorerView",
    "FocusState",
    "PatchExplorer",
    "PatchExploringState",
    "RenderDriver",
    "SearchNavigator",
    "SelectMode",
    "calculate_origin",
    "cursor_placement",
]
