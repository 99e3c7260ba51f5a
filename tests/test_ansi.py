"""Regression tests for escape-aware width and clipping primitives.

These cases protect link column accounting and row clipping from
wide-character, tab, and escape-sequence regressions.
"""

import unittest

from linkpager import ansi as ansi_mod


class CharDisplayWidthTests(unittest.TestCase):
    def test_tab_advances_to_next_stop(self) -> None:
        self.assertEqual(ansi_mod.char_display_width("\t", 3), 5)
        self.assertEqual(ansi_mod.char_display_width("\t", 8), 8)

    def test_wide_combining_and_control_characters(self) -> None:
        self.assertEqual(ansi_mod.char_display_width("a", 0), 1)
        self.assertEqual(ansi_mod.char_display_width("界", 0), 2)
        self.assertEqual(ansi_mod.char_display_width("\u0301", 0), 0)
        self.assertEqual(ansi_mod.char_display_width("\x1b", 0), 0)


class DisplayWidthTests(unittest.TestCase):
    def test_escape_sequences_take_no_cells(self) -> None:
        self.assertEqual(ansi_mod.display_width("\x1b[31mred\x1b[0m"), 3)
        self.assertEqual(ansi_mod.display_width("\x1b]0;title\x07ok"), 2)

    def test_tabs_and_wide_characters(self) -> None:
        self.assertEqual(ansi_mod.display_width("a\tb"), 9)
        self.assertEqual(ansi_mod.display_width("日本"), 4)

    def test_start_column_shifts_tab_stops(self) -> None:
        self.assertEqual(ansi_mod.display_width("\t", start_col=6), 2)

    def test_strip_escapes_keeps_visible_text(self) -> None:
        text = "\x1b[1mbold\x1b[0m \x1b]0;title\x07x"
        self.assertEqual(ansi_mod.strip_escapes(text), "bold x")


class ClipAnsiLineTests(unittest.TestCase):
    def test_clip_preserves_leading_style(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("\x1b[31mabcdef\x1b[0m", 3), "\x1b[31mabc")

    def test_wide_character_that_does_not_fit_is_dropped(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("ab界", 3), "ab")

    def test_tabs_expand_to_spaces(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("a\tb", 20), "a" + " " * 7 + "b")

    def test_zero_width_yields_empty(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("abc", 0), "")


class StylingTests(unittest.TestCase):
    def test_selected_keeps_reverse_across_resets(self) -> None:
        self.assertEqual(ansi_mod.selected_with_ansi("a\x1b[0mb"), "\x1b[7ma\x1b[0;7mb\x1b[0m")

    def test_underline_is_added_to_existing_sgr(self) -> None:
        self.assertEqual(
            ansi_mod.underline_with_ansi("x\x1b[31my"),
            "\x1b[4mx\x1b[31;4my\x1b[24m",
        )

    def test_styling_empty_text_is_noop(self) -> None:
        self.assertEqual(ansi_mod.selected_with_ansi(""), "")
        self.assertEqual(ansi_mod.underline_with_ansi(""), "")


if __name__ == "__main__":
    unittest.main()
