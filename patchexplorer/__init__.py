"""Interactive patch explorer core.

Holds a selection over a parsed unified diff, renders it to styled terminal
text and keeps a scroll origin in step with the selection.
"""

from __future__ import annotations

from .exploring import ExplorerView, PatchExplorer, PatchExploringState, SelectMode
from .patch import Hunk, Patch, PatchLine, PatchLineKind, format_plain, format_range_plain, format_view

__all__ = [
    "ExplorerView",
    "Hunk",
    "Patch",
    "PatchExplorer",
    "PatchExploringState",
    "PatchLine",
    "PatchLineKind",
    "SelectMode",
    "format_plain",
    "format_range_plain",
    "format_view",
]
