from __future__ import annotations

import unittest
from dataclasses import fields

from envytui.ui_theme import (
    _COLOR_TAGS,
    UITheme,
    ANSI256_THEME,
    DEFAULT_THEME,
    PLAIN_THEME,
    available_theme_names,
    normalize_theme_name,
    resolve_theme,
)


class ThemeSelectionTests(unittest.TestCase):
    def test_names_and_aliases_resolve(self) -> None:
        self.assertEqual(available_theme_names(), ("default", "ansi256"))
        self.assertEqual(normalize_theme_name(" ANSI256 "), "ansi256")
        self.assertEqual(normalize_theme_name("256"), "ansi256")
        self.assertEqual(normalize_theme_name("truecolor"), "default")

    def test_unknown_or_missing_name_falls_back_to_default(self) -> None:
        self.assertEqual(normalize_theme_name(None), "default")
        self.assertEqual(normalize_theme_name("solarized"), "default")

    def test_no_color_always_selects_plain_palette(self) -> None:
        self.assertIs(resolve_theme("ansi256", no_color=True), PLAIN_THEME)
        self.assertIs(resolve_theme("ansi256"), ANSI256_THEME)
        self.assertIs(resolve_theme(None), DEFAULT_THEME)

    def test_mode_tints_are_distinct(self) -> None:
        for theme in (DEFAULT_THEME, ANSI256_THEME):
            with self.subTest(theme=theme.name):
                tints = {theme.color_for(tag) for tag in ("mode_integrated", "mode_hybrid", "mode_nvidia")}
                self.assertEqual(len(tints), 3)

    def test_every_palette_field_is_used_by_the_composer(self) -> None:
        structural = {"name", "reset", "border", "border_focused", "panel_title", "panel_title_focused"}
        structural |= {"selector", "selection", "key_hint"}

        self.assertEqual({field.name for field in fields(UITheme)}, structural | _COLOR_TAGS)

    def test_plain_theme_has_no_escapes(self) -> None:
        self.assertEqual(PLAIN_THEME.color_for("mode_nvidia"), "")
        self.assertEqual(PLAIN_THEME.reset, "")


if __name__ == "__main__":
    unittest.main()
