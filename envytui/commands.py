"""Argument construction for the external ``envycontrol`` tool.

Everything here is pure: inputs map deterministically to argument lists and
nothing touches a process.
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping, Sequence

from .model import DEFAULT_COOLBITS_VALUE, DEFAULT_RTD3_LEVEL, Mode, OptionFlag

DEFAULT_TOOL = "envycontrol"
VERBOSE_FLAG = "--verbose"


def _enabled(option_states: Mapping[OptionFlag, bool], flag: OptionFlag) -> bool:
    return bool(option_states.get(flag, False))


def build_args(
    mode: Mode,
    option_states: Mapping[OptionFlag, bool],
    *,
    rtd3_level: int = DEFAULT_RTD3_LEVEL,
    coolbits_value: int = DEFAULT_COOLBITS_VALUE,
    verbose: bool = False,
) -> list[str]:
    """Return switch arguments for ``mode`` and its toggled options.

    Flags that belong to a different mode are ignored, so a stale mapping can
    never leak tokens into another mode's command.
    """
    args = ["-s", mode.token]
    if mode is Mode.INTEGRATED:
        pass
    elif mode is Mode.HYBRID:
        if _enabled(option_states, OptionFlag.RTD3):
            args += [OptionFlag.RTD3.cli_flag, str(rtd3_level)]
    elif mode is Mode.NVIDIA:
        if _enabled(option_states, OptionFlag.FORCE_COMPOSITION_PIPELINE):
            args.append(OptionFlag.FORCE_COMPOSITION_PIPELINE.cli_flag)
        if _enabled(option_states, OptionFlag.COOLBITS):
            args += [OptionFlag.COOLBITS.cli_flag, str(coolbits_value)]
    else:
        raise ValueError(f"unsupported mode: {mode!r}")

    if verbose:
        args.append(VERBOSE_FLAG)
    return args


def build_reset_args(*, verbose: bool = False) -> list[str]:
    """Return arguments that revert the tool's changes."""
    args = ["--reset"]
    if verbose:
        args.append(VERBOSE_FLAG)
    return args


def build_query_args() -> list[str]:
    return ["--query"]


def describe_command(tool: str, args: Sequence[str]) -> str:
    """Render ``tool args...`` as a copy-pasteable shell line."""
    return shlex.join([tool, *args])


__all__ = [
    "DEFAULT_TOOL",
    "VERBOSE_FLAG",
    "build_args",
    "build_query_args",
    "build_reset_args",
    "describe_command",
]
