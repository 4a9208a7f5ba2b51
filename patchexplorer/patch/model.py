"""Immutable in-memory representation of one file's parsed diff.

Rows are addressed by their index in the flattened rendered sequence: header
rows first, then for each hunk its ``@@`` row followed by its body rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PatchLineKind(Enum):
    """Diff classification of one hunk body line."""

    ADDITION = "addition"
    DELETION = "deletion"
    CONTEXT = "context"

    @classmethod
    def for_content(cls, content: str) -> PatchLineKind:
        """Derive kind from the leading diff marker of raw line content."""
        if content.startswith("+"):
            return cls.ADDITION
        if content.startswith("-"):
            return cls.DELETION
        return cls.CONTEXT


@dataclass(frozen=True)
class PatchLine:
    """One hunk body line, raw content including its marker character."""

    content: str
    kind: PatchLineKind

    @classmethod
    def from_content(cls, content: str) -> PatchLine:
        return cls(content=content, kind=PatchLineKind.for_content(content))

    def is_change(self) -> bool:
        return self.kind is not PatchLineKind.CONTEXT


@dataclass(frozen=True)
class Hunk:
    """One ``@@`` block: marker text, trailing context, ordered body lines."""

    header_start: str
    header_context: str = ""
    body_lines: tuple[PatchLine, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "body_lines", tuple(self.body_lines))

    def header_text(self) -> str:
        """Return the raw ``@@`` row as it appears in the diff."""
        return self.header_start + self.header_context

    def contains_changes(self) -> bool:
        return any(line.is_change() for line in self.body_lines)


@dataclass(frozen=True)
class Patch:
    """Parsed diff of one file: raw header rows plus ordered hunks."""

    header: tuple[str, ...] = ()
    hunks: tuple[Hunk, ...] = ()
    _hunk_starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Callers may pass lists; freeze them so the snapshot stays immutable.
        object.__setattr__(self, "header", tuple(self.header))
        hunks = tuple(self.hunks)
        object.__setattr__(self, "hunks", hunks)

        starts: list[int] = []
        row = len(self.header)
        for hunk in hunks:
            starts.append(row)
            row += 1 + len(hunk.body_lines)
        object.__setattr__(self, "_hunk_starts", tuple(starts))

    def contains_changes(self) -> bool:
        """Return whether any hunk holds an addition or deletion."""
        return any(hunk.contains_changes() for hunk in self.hunks)

    def line_count(self) -> int:
        return len(self.header) + sum(1 + len(hunk.body_lines) for hunk in self.hunks)

    def lines(self) -> list[str]:
        """Return the raw text of every rendered row in display order."""
        out = list(self.header)
        for hunk in self.hunks:
            out.append(hunk.header_text())
            out.extend(line.content for line in hunk.body_lines)
        return out

    def hunk_header_index(self, hunk_idx: int) -> int:
        """Return the row index of a hunk's ``@@`` row."""
        return self._hunk_starts[hunk_idx]

    def hunk_body_range(self, hunk_idx: int) -> tuple[int, int]:
        """Return inclusive ``(start, end)`` row indices of a hunk's body.

        A hunk without body rows yields ``end < start``.
        """
        header_row = self.hunk_header_index(hunk_idx)
        return header_row + 1, header_row + len(self.hunks[hunk_idx].body_lines)

    def hunk_index_for_line(self, idx: int) -> int | None:
        """Return the hunk owning row ``idx`` (its ``@@`` row or body), if any."""
        owner: int | None = None
        for hunk_idx, start in enumerate(self._hunk_starts):
            if start > idx:
                break
            owner = hunk_idx
        if owner is None:
            return None
        _start, end = self.hunk_body_range(owner)
        return owner if idx <= end else None

    def line_at(self, idx: int) -> PatchLine | None:
        """Return the body line at row ``idx``; ``None`` for header and ``@@`` rows."""
        hunk_idx = self.hunk_index_for_line(idx)
        if hunk_idx is None:
            return None
        offset = idx - self._hunk_starts[hunk_idx] - 1
        if offset < 0:
            return None
        return self.hunks[hunk_idx].body_lines[offset]

    def body_line_indices(self) -> list[int]:
        """Return row indices of all hunk body lines (the selectable rows)."""
        out: list[int] = []
        for hunk_idx in range(len(self.hunks)):
            start, end = self.hunk_body_range(hunk_idx)
            out.extend(range(start, end + 1))
        return out

    def change_line_indices(self) -> list[int]:
        """Return row indices of addition/deletion body lines."""
        out: list[int] = []
        for hunk_idx, hunk in enumerate(self.hunks):
            start, _end = self.hunk_body_range(hunk_idx)
            out.extend(start + offset for offset, line in enumerate(hunk.body_lines) if line.is_change())
        return out
