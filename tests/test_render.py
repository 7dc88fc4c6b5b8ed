"""Tests for the state-to-layout projection and frame composition."""

from __future__ import annotations

import unittest
from unittest import mock

from envytui.ansi import ANSI_ESCAPE_RE, display_width
from envytui.model import Action, ApplyResult, FailureKind, GpuInfo, Mode, OptionFlag, Panel
from envytui.render import (
    CONFIRM_FOOTER_HINTS,
    FOOTER_HINTS,
    REBOOT_PROMPT,
    compose_frame,
    compose_panel,
    frame_text,
    render,
    status_line,
)
from envytui.runtime.app import DashboardOptions, initial_state
from envytui.state import SelectionState
from envytui.ui_theme import DEFAULT_THEME, PLAIN_THEME


class RenderLayoutTests(unittest.TestCase):
    def test_render_is_idempotent(self) -> None:
        state = SelectionState(
            current_mode=Mode.NVIDIA,
            focused_panel=Panel.OPTION_LIST,
            option_states={OptionFlag.COOLBITS: True},
            option_index=1,
            last_result=ApplyResult.failure("denied", FailureKind.NON_ZERO_EXIT),
        )

        first = render(state)
        second = render(state)

        self.assertEqual(first, second)
        self.assertEqual(state.option_states, {OptionFlag.COOLBITS: True})

    def test_mode_panel_highlights_current_mode_and_marks_active(self) -> None:
        state = SelectionState(current_mode=Mode.HYBRID, active_mode=Mode.NVIDIA)

        layout = render(state)

        highlighted = [item.label for item in layout.mode_panel.items if item.highlighted]
        marked = [item.label for item in layout.mode_panel.items if item.marker]
        self.assertEqual(highlighted, ["Hybrid"])
        self.assertEqual(marked, ["Nvidia"])
        self.assertTrue(layout.mode_panel.focused)
        self.assertFalse(layout.option_panel.focused)

    def test_mode_colors_are_distinct_and_stable(self) -> None:
        layout = render(SelectionState())
        colors = [item.color for item in layout.mode_panel.items]

        self.assertEqual(colors, ["mode_integrated", "mode_hybrid", "mode_nvidia"])
        self.assertEqual(len(set(colors)), 3)

    def test_integrated_option_panel_has_no_highlight(self) -> None:
        layout = render(SelectionState(current_mode=Mode.INTEGRATED))

        self.assertEqual(len(layout.option_panel.items), 1)
        item = layout.option_panel.items[0]
        self.assertFalse(item.highlighted)
        self.assertFalse(item.selectable)
        self.assertIsNone(item.checked)

    def test_option_panel_reflects_toggles_and_values(self) -> None:
        state = SelectionState(
            current_mode=Mode.NVIDIA,
            focused_panel=Panel.OPTION_LIST,
            option_states={OptionFlag.COOLBITS: True},
            option_index=1,
            coolbits_value=24,
        )

        items = render(state).option_panel.items

        self.assertEqual([item.checked for item in items], [False, True])
        self.assertEqual([item.highlighted for item in items], [False, True])
        self.assertEqual(items[1].label, "Coolbits (value 24)")

    def test_rtd3_label_includes_level_name(self) -> None:
        state = SelectionState(current_mode=Mode.HYBRID, rtd3_level=1)

        item = render(state).option_panel.items[0]

        self.assertEqual(item.label, "RTD3 Power Management (level 1 - Coarse-grained)")

    def test_command_preview_uses_tool_prefix(self) -> None:
        state = SelectionState(current_mode=Mode.HYBRID, option_states={OptionFlag.RTD3: True})

        layout = render(state, tool_command=("pkexec", "envycontrol"))

        self.assertEqual(layout.command_preview, "pkexec envycontrol -s hybrid --rtd3 2")

    def test_header_shows_active_mode_and_gpu(self) -> None:
        unknown = render(SelectionState())
        known = render(
            SelectionState(
                active_mode=Mode.HYBRID,
                gpu_info=GpuInfo("RTX", "40", "10", "100"),
            )
        )

        self.assertEqual(unknown.active_mode_text, "Current Mode: Unknown")
        self.assertEqual(unknown.active_mode_color, "muted")
        self.assertEqual(unknown.gpu_text, "")
        self.assertEqual(known.active_mode_text, "Current Mode: Hybrid")
        self.assertEqual(known.active_mode_color, "mode_hybrid")
        self.assertEqual(known.gpu_text, "RTX | 40°C | 10 / 100 MiB")


class StatusLineTests(unittest.TestCase):
    def test_status_kinds(self) -> None:
        self.assertEqual(status_line(None).kind, "empty")
        self.assertEqual(status_line(None).text, "")

        ok = status_line(ApplyResult.success(Mode.NVIDIA, "Switched to nvidia mode."))
        self.assertEqual((ok.kind, ok.text), ("success", "Switched to nvidia mode."))

        failed = status_line(ApplyResult.failure("permission denied", args=["-s", "nvidia"]))
        self.assertEqual((failed.kind, failed.text), ("failure", "Failed to switch mode: permission denied"))

        reset_failed = status_line(ApplyResult.failure("nope", args=["--reset"], action=Action.RESET))
        self.assertEqual(reset_failed.text, "Failed to reset: nope")

        reboot_failed = status_line(ApplyResult.failure("no systemctl", FailureKind.SPAWN, action=Action.REBOOT))
        self.assertEqual(reboot_failed.text, "Failed to reboot: no systemctl")

    def test_wording_follows_recorded_action_not_argv(self) -> None:
        result = ApplyResult.failure("denied", args=["--reset"], action=Action.SWITCH)

        self.assertEqual(status_line(result).text, "Failed to switch mode: denied")

    def test_missing_tool_at_startup_is_shown_without_action_prefix(self) -> None:
        with mock.patch("envytui.runtime.app.is_tool_installed", return_value=False), mock.patch(
            "envytui.runtime.app.query_gpu_info", return_value=None
        ):
            state = initial_state(DashboardOptions())

        status = render(state).status

        self.assertEqual(status.kind, "failure")
        self.assertEqual(status.text, "envycontrol is not installed. Please install it first.")
        self.assertFalse(status.text.startswith("Failed to"))

    def test_reboot_prompt_replaces_status_and_footer(self) -> None:
        state = SelectionState(
            current_mode=Mode.NVIDIA,
            active_mode=Mode.NVIDIA,
            confirming_reboot=True,
            last_result=ApplyResult.success(Mode.NVIDIA, "Switched to nvidia mode."),
        )

        layout = render(state)

        self.assertEqual((layout.status.kind, layout.status.text), ("prompt", REBOOT_PROMPT))
        self.assertEqual(layout.footer, CONFIRM_FOOTER_HINTS)
        self.assertEqual(render(SelectionState()).footer, FOOTER_HINTS)

        text = "\n".join(compose_frame(layout, 90, 28, PLAIN_THEME, no_color=True))
        self.assertIn("Reboot now?", text)
        self.assertIn("y/Enter Reboot now", text)

    def test_busy_message_takes_precedence(self) -> None:
        status = status_line(ApplyResult.success(Mode.HYBRID, "done"), "Applying…")

        self.assertEqual((status.kind, status.text), ("busy", "Applying…"))


class ComposeFrameTests(unittest.TestCase):
    def test_frame_has_requested_height_and_width(self) -> None:
        layout = render(SelectionState(current_mode=Mode.NVIDIA, gpu_info=GpuInfo("RTX", "40", "10", "100")))

        rows = compose_frame(layout, 100, 30, DEFAULT_THEME, no_color=True)

        self.assertEqual(len(rows), 30)
        for row in rows:
            self.assertLessEqual(display_width(row), 100)

    def test_plain_theme_emits_no_escape_sequences(self) -> None:
        state = SelectionState(
            current_mode=Mode.HYBRID,
            focused_panel=Panel.OPTION_LIST,
            option_states={OptionFlag.RTD3: True},
            last_result=ApplyResult.failure("permission denied"),
        )

        rows = compose_frame(render(state), 90, 28, PLAIN_THEME, no_color=True)
        text = "\n".join(rows)

        self.assertIsNone(ANSI_ESCAPE_RE.search(text))
        self.assertIn("Graphics Mode", text)
        self.assertIn("▶ [✓] RTD3 Power Management", text)
        self.assertIn("Command: envycontrol -s hybrid --rtd3 2", text)
        self.assertIn("Failed to switch mode: permission denied", text)
        self.assertIn("Tab Switch Panel", text)

    def test_panel_rows_have_exact_width(self) -> None:
        layout = render(SelectionState(current_mode=Mode.NVIDIA))

        rows = compose_panel(layout.option_panel, 40, 12, DEFAULT_THEME)

        self.assertEqual(len(rows), 12)
        for row in rows:
            self.assertEqual(display_width(row), 40)
        self.assertTrue(ANSI_ESCAPE_RE.sub("", rows[0]).startswith("┌─ Options "))
        self.assertTrue(ANSI_ESCAPE_RE.sub("", rows[-1]).startswith("└"))

    def test_compose_frame_is_deterministic(self) -> None:
        layout = render(SelectionState(current_mode=Mode.HYBRID))

        first = compose_frame(layout, 80, 24, DEFAULT_THEME, no_color=True)
        second = compose_frame(layout, 80, 24, DEFAULT_THEME, no_color=True)

        self.assertEqual(first, second)

    def test_frame_text_clears_screen_first(self) -> None:
        self.assertEqual(frame_text(["a", "b"]), "\033[H\033[Ja\r\nb")


if __name__ == "__main__":
    unittest.main()
