"""Tests for envycontrol argument construction.

Covers base tokens per mode, per-option flag tokens, and the reset command.
"""

from __future__ import annotations

import unittest

from envytui.commands import build_args, build_query_args, build_reset_args, describe_command
from envytui.model import Mode, OptionFlag


class BuildArgsTests(unittest.TestCase):
    def test_every_mode_without_options_yields_only_base_tokens(self) -> None:
        for mode in Mode.ordered():
            with self.subTest(mode=mode):
                self.assertEqual(build_args(mode, {}), ["-s", mode.token])

    def test_hybrid_with_rtd3_appends_flag_and_level(self) -> None:
        args = build_args(Mode.HYBRID, {OptionFlag.RTD3: True}, rtd3_level=3)

        self.assertEqual(args, ["-s", "hybrid", "--rtd3", "3"])

    def test_toggling_each_valid_option_adds_exactly_one_flag_token(self) -> None:
        for flag in OptionFlag:
            with self.subTest(flag=flag):
                base = build_args(flag.mode, {})
                enabled = build_args(flag.mode, {flag: True})
                disabled = build_args(flag.mode, {flag: False})

                self.assertEqual(enabled.count(flag.cli_flag), 1)
                self.assertEqual(enabled[: len(base)], base)
                self.assertEqual(disabled, base)

    def test_nvidia_options_are_independent_and_ordered(self) -> None:
        both = build_args(
            Mode.NVIDIA,
            {OptionFlag.FORCE_COMPOSITION_PIPELINE: True, OptionFlag.COOLBITS: True},
            coolbits_value=24,
        )
        coolbits_only = build_args(Mode.NVIDIA, {OptionFlag.COOLBITS: True}, coolbits_value=24)

        self.assertEqual(both, ["-s", "nvidia", "--force-comp", "--coolbits", "24"])
        self.assertEqual(coolbits_only, ["-s", "nvidia", "--coolbits", "24"])

    def test_flags_of_other_modes_are_ignored(self) -> None:
        stale = {OptionFlag.RTD3: True, OptionFlag.COOLBITS: True}

        self.assertEqual(build_args(Mode.INTEGRATED, stale), ["-s", "integrated"])
        self.assertEqual(build_args(Mode.HYBRID, {OptionFlag.COOLBITS: True}), ["-s", "hybrid"])

    def test_verbose_is_appended_last(self) -> None:
        args = build_args(Mode.HYBRID, {OptionFlag.RTD3: True}, verbose=True)

        self.assertEqual(args[-1], "--verbose")
        self.assertEqual(args[:-1], ["-s", "hybrid", "--rtd3", "2"])


class AuxiliaryCommandTests(unittest.TestCase):
    def test_reset_and_query_args_are_fixed(self) -> None:
        self.assertEqual(build_reset_args(), ["--reset"])
        self.assertEqual(build_reset_args(verbose=True), ["--reset", "--verbose"])
        self.assertEqual(build_query_args(), ["--query"])

    def test_describe_command_quotes_arguments(self) -> None:
        self.assertEqual(
            describe_command("envycontrol", ["-s", "hybrid"]),
            "envycontrol -s hybrid",
        )
        self.assertEqual(describe_command("/opt/my tools/envy", ["--reset"]), "'/opt/my tools/envy' --reset")


if __name__ == "__main__":
    unittest.main()
