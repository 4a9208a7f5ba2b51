"""Tests for plain and styled patch rendering.

Checks raw range extraction, the selection margin in range vs line mode,
diff backgrounds under code, included-line tinting, and empty patches.
"""

from __future__ import annotations

import unittest

from patchexplorer.ansi import ANSI_ESCAPE_RE, strip_ansi
from patchexplorer.patch.format import (
    FormatViewOptions,
    format_plain,
    format_range_plain,
    format_view,
)
from patchexplorer.patch.model import Hunk, Patch, PatchLine, PatchLineKind
from patchexplorer.theme import DEFAULT_THEME, PLAIN_THEME

GLYPH = DEFAULT_THEME.indicator_glyph
ADDED_ROW = 4
REMOVED_ROW = 5


def _scenario_patch(header: list[str] | None = None) -> Patch:
    return Patch(
        header=header if header is not None else ["diff --git a/x.go b/x.go", "+++ b/x.go"],
        hunks=[
            Hunk(
                "@@ -1,2 +1,2 @@",
                " func main()",
                [
                    PatchLine(" ctx", PatchLineKind.CONTEXT),
                    PatchLine("+added", PatchLineKind.ADDITION),
                    PatchLine("-removed", PatchLineKind.DELETION),
                ],
            )
        ],
    )


def _context_only_patch() -> Patch:
    return Patch(
        header=["+++ b/x.go"],
        hunks=[Hunk("@@ -1,2 +1,2 @@", "", [PatchLine(" a", PatchLineKind.CONTEXT), PatchLine(" b", PatchLineKind.CONTEXT)])],
    )


def _rows(rendered: str) -> list[str]:
    rows = rendered.split("\n")
    assert rows[-1] == ""
    return rows[:-1]


class PlainFormatTests(unittest.TestCase):
    def test_range_plain_over_body_rows(self) -> None:
        self.assertEqual(format_range_plain(_scenario_patch(), 3, 5), " ctx\n+added\n-removed\n")

    def test_range_plain_single_row_has_no_escapes(self) -> None:
        rendered = format_range_plain(_scenario_patch(), ADDED_ROW, ADDED_ROW)

        self.assertEqual(rendered, "+added\n")
        self.assertIsNone(ANSI_ESCAPE_RE.search(rendered))

    def test_range_plain_rejects_invalid_ranges(self) -> None:
        with self.assertRaises(ValueError):
            format_range_plain(_scenario_patch(), 4, 3)
        with self.assertRaises(ValueError):
            format_range_plain(_scenario_patch(), 0, 6)

    def test_whole_patch_plain_is_raw_appliable_text(self) -> None:
        self.assertEqual(
            format_plain(_scenario_patch()),
            "diff --git a/x.go b/x.go\n+++ b/x.go\n@@ -1,2 +1,2 @@ func main()\n ctx\n+added\n-removed\n",
        )

    def test_context_only_patch_renders_empty_in_both_modes(self) -> None:
        patch = _context_only_patch()

        self.assertEqual(format_plain(patch), "")
        self.assertEqual(format_view(patch, FormatViewOptions.build(selected_start_idx=1, selected_end_idx=1)), "")


class StyledFormatTests(unittest.TestCase):
    def test_range_mode_marks_only_selected_row(self) -> None:
        options = FormatViewOptions.build(selected_start_idx=ADDED_ROW, selected_end_idx=ADDED_ROW)

        rows = _rows(format_view(_scenario_patch(), options))

        self.assertEqual(len(rows), 6)
        for idx, row in enumerate(rows):
            if idx == ADDED_ROW:
                self.assertTrue(strip_ansi(row).startswith(GLYPH))
            else:
                self.assertNotIn(GLYPH, row)
                self.assertTrue(row.startswith(DEFAULT_THEME.indicator_placeholder))

    def test_diff_backgrounds_follow_line_kind(self) -> None:
        options = FormatViewOptions.build(selected_start_idx=ADDED_ROW, selected_end_idx=ADDED_ROW)

        rows = _rows(format_view(_scenario_patch(), options))

        self.assertIn(DEFAULT_THEME.addition_bg, rows[ADDED_ROW])
        self.assertNotIn(DEFAULT_THEME.deletion_bg, rows[ADDED_ROW])
        self.assertIn(DEFAULT_THEME.deletion_bg, rows[REMOVED_ROW])
        self.assertNotIn(DEFAULT_THEME.addition_bg, rows[3])
        self.assertNotIn(DEFAULT_THEME.deletion_bg, rows[3])
        self.assertEqual(strip_ansi(rows[ADDED_ROW]), f"{GLYPH}+added")
        self.assertEqual(strip_ansi(rows[REMOVED_ROW]), " -removed")

    def test_range_spanning_rows_marks_closed_interval(self) -> None:
        options = FormatViewOptions.build(selected_start_idx=3, selected_end_idx=ADDED_ROW)

        rows = _rows(format_view(_scenario_patch(), options))

        marked = [idx for idx, row in enumerate(rows) if GLYPH in row]
        self.assertEqual(marked, [3, ADDED_ROW])

    def test_line_mode_never_draws_indicator(self) -> None:
        options = FormatViewOptions.build(
            selected_start_idx=3,
            selected_end_idx=REMOVED_ROW,
            line_select_mode=True,
        )

        rendered = format_view(_scenario_patch(), options)

        self.assertNotIn(GLYPH, rendered)
        rows = _rows(rendered)
        self.assertEqual(rows[0], "\033[1mdiff --git a/x.go b/x.go\033[0m")
        self.assertEqual(rows[2], "\033[36m@@ -1,2 +1,2 @@\033[0m func main()")

    def test_dev_null_header_disables_highlighting_but_keeps_backgrounds(self) -> None:
        patch = _scenario_patch(header=["+++ /dev/null"])
        options = FormatViewOptions.build(line_select_mode=True)

        rows = _rows(format_view(patch, options))

        # One header row shifts body rows up by one: ctx, added, removed at 2, 3, 4.
        self.assertEqual(rows[4], "\033[31m-\033[0m\033[31;48;2;77;0;24mremoved\033[0m")
        self.assertEqual(rows[3], "\033[32m+\033[0m\033[32;48;2;0;77;36madded\033[0m")
        self.assertEqual(rows[2], " ctx")

    def test_included_change_rows_get_tinted_marker(self) -> None:
        options = FormatViewOptions.build(included_line_indices=[3, ADDED_ROW], line_select_mode=True)

        rows = _rows(format_view(_scenario_patch(), options))

        self.assertTrue(rows[ADDED_ROW].startswith("\033[32;42m+\033[0m"))
        self.assertFalse(rows[3].startswith("\033[42m"))
        self.assertTrue(rows[REMOVED_ROW].startswith("\033[31m-\033[0m"))

    def test_single_character_rows_render_whole(self) -> None:
        patch = Patch(
            header=["+++ b/x.go"],
            hunks=[Hunk("@@ -1 +1,2 @@", "", [PatchLine("+", PatchLineKind.ADDITION), PatchLine("-y", PatchLineKind.DELETION)])],
        )

        rows = _rows(format_view(patch, FormatViewOptions.build(line_select_mode=True)))

        self.assertEqual(rows[2], "\033[32m+\033[0m")

    def test_plain_theme_line_mode_matches_plain_text(self) -> None:
        patch = _scenario_patch()
        options = FormatViewOptions.build(line_select_mode=True)

        self.assertEqual(format_view(patch, options, PLAIN_THEME), format_plain(patch))

    def test_carriage_return_in_code_keeps_one_row_per_index(self) -> None:
        for filename in ("notes.txt", "x.py"):
            with self.subTest(filename=filename):
                patch = Patch(
                    header=[f"+++ b/{filename}"],
                    hunks=[Hunk("@@ -1 +1 @@", "", [PatchLine("+a\rb", PatchLineKind.ADDITION)])],
                )

                rendered = format_view(patch, FormatViewOptions.build(line_select_mode=True))

                self.assertEqual(rendered.count("\n"), patch.line_count())
                self.assertEqual(strip_ansi(_rows(rendered)[2]), "+ab")

    def test_view_width_does_not_pad_rows(self) -> None:
        patch = _scenario_patch(header=["+++ /dev/null"])
        narrow = format_view(patch, FormatViewOptions.build(line_select_mode=True, view_width=10))
        wide = format_view(patch, FormatViewOptions.build(line_select_mode=True, view_width=200))

        self.assertEqual(narrow, wide)


if __name__ == "__main__":
    unittest.main()
