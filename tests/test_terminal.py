"""Tests for terminal mode control sequences and init failures.

Verifies raw-mode lifecycle safety and the escape payloads written on
entering and leaving the dashboard.
"""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from envytui.terminal import TerminalController, TerminalInitError


def _tty_patches(saved_state=None):
    return (
        mock.patch("envytui.terminal.os.isatty", return_value=True),
        mock.patch("envytui.terminal.termios.tcgetattr", return_value=saved_state or [0]),
    )


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]
        isatty_patch, getattr_patch = _tty_patches(saved_state)

        with isatty_patch, getattr_patch, mock.patch("envytui.terminal.tty.setraw") as setraw_mock, mock.patch(
            "envytui.terminal.os.write"
        ) as write_mock, mock.patch("envytui.terminal.termios.tcsetattr") as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        isatty_patch, getattr_patch = _tty_patches()
        with isatty_patch, getattr_patch:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_non_tty_raises_init_error(self) -> None:
        with mock.patch("envytui.terminal.os.isatty", return_value=False):
            with self.assertRaises(TerminalInitError):
                TerminalController(stdin_fd=0, stdout_fd=1)

    def test_termios_failure_raises_init_error(self) -> None:
        with mock.patch("envytui.terminal.os.isatty", return_value=True), mock.patch(
            "envytui.terminal.termios.tcgetattr", side_effect=termios.error(25, "Inappropriate ioctl")
        ):
            with self.assertRaises(TerminalInitError) as ctx:
                TerminalController(stdin_fd=0, stdout_fd=1)

        self.assertIn("terminal attributes", str(ctx.exception))

    def test_raw_mode_failure_does_not_restore_unentered_screen(self) -> None:
        isatty_patch, getattr_patch = _tty_patches()
        with isatty_patch, getattr_patch:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch("envytui.terminal.tty.setraw", side_effect=termios.error(5, "I/O error")), mock.patch(
            "envytui.terminal.os.write"
        ) as write_mock:
            with self.assertRaises(TerminalInitError):
                with controller.raw_mode():
                    self.fail("body must not run")

        write_mock.assert_not_called()


if __name__ == "__main__":
    unittest.main()
