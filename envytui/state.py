"""Selection state and its input-driven transitions.

``SelectionState`` is owned by the run loop and mutated in place. Navigation
in the option list only ever lands on flags valid for the highlighted mode,
so toggling a foreign flag cannot happen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from .commands import build_args, build_reset_args
from .model import (
    COOLBITS_PRESETS,
    DEFAULT_COOLBITS_VALUE,
    DEFAULT_RTD3_LEVEL,
    RTD3_LEVELS,
    Action,
    ApplyResult,
    GpuInfo,
    Mode,
    OptionFlag,
    Panel,
)


REBOOT_REMINDER = "Changes applied. Reboot for them to take effect."


class InputEvent(Enum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    SWITCH_PANEL = "switch_panel"
    TOGGLE_OPTION = "toggle_option"
    ADJUST_UP = "adjust_up"
    ADJUST_DOWN = "adjust_down"
    APPLY_SELECTION = "apply_selection"
    RESET = "reset"
    CONFIRM = "confirm"
    DECLINE = "decline"
    QUIT = "quit"


class Runner(Protocol):
    def run(self, args: list[str], mode: Mode | None = None) -> ApplyResult: ...

    def run_reset(self, args: list[str]) -> ApplyResult: ...

    def run_reboot(self) -> ApplyResult: ...


@dataclass
class SelectionState:
    current_mode: Mode = Mode.INTEGRATED
    focused_panel: Panel = Panel.MODE_LIST
    option_states: dict[OptionFlag, bool] = field(default_factory=dict)
    option_index: int = 0
    rtd3_level: int = DEFAULT_RTD3_LEVEL
    coolbits_value: int = DEFAULT_COOLBITS_VALUE
    active_mode: Mode | None = None
    last_result: ApplyResult | None = None
    gpu_info: GpuInfo | None = None
    verbose_tool: bool = False
    offer_reboot: bool = False
    confirming_reboot: bool = False
    busy_message: str = ""
    dirty: bool = True

    @property
    def available_options(self) -> tuple[OptionFlag, ...]:
        return OptionFlag.for_mode(self.current_mode)

    @property
    def highlighted_option(self) -> OptionFlag | None:
        options = self.available_options
        if not options:
            return None
        return options[self.option_index % len(options)]

    def is_enabled(self, flag: OptionFlag) -> bool:
        return bool(self.option_states.get(flag, False))

    def pending_args(self) -> list[str]:
        """Arguments the apply action would pass to the tool right now."""
        return build_args(
            self.current_mode,
            self.option_states,
            rtd3_level=self.rtd3_level,
            coolbits_value=self.coolbits_value,
            verbose=self.verbose_tool,
        )


def _cycle(index: int, delta: int, size: int) -> int:
    return (index + delta) % size


def select_mode(state: SelectionState, mode: Mode) -> None:
    """Highlight ``mode`` and drop every flag not valid for it."""
    if mode is state.current_mode:
        return
    state.current_mode = mode
    valid = set(OptionFlag.for_mode(mode))
    state.option_states = {flag: enabled for flag, enabled in state.option_states.items() if flag in valid}
    state.option_index = 0
    if not valid:
        state.focused_panel = Panel.MODE_LIST
    state.dirty = True


def move_selection(state: SelectionState, delta: int) -> None:
    if state.focused_panel is Panel.MODE_LIST:
        modes = Mode.ordered()
        index = modes.index(state.current_mode)
        select_mode(state, modes[_cycle(index, delta, len(modes))])
        return

    options = state.available_options
    if not options:
        return
    state.option_index = _cycle(state.option_index, delta, len(options))
    state.dirty = True


def switch_panel(state: SelectionState) -> None:
    if state.focused_panel is Panel.OPTION_LIST:
        state.focused_panel = Panel.MODE_LIST
        state.dirty = True
        return
    if not state.available_options:
        return
    state.focused_panel = Panel.OPTION_LIST
    state.option_index = state.option_index % len(state.available_options)
    state.dirty = True


def toggle_option(state: SelectionState) -> None:
    if state.focused_panel is not Panel.OPTION_LIST:
        return
    flag = state.highlighted_option
    if flag is None:
        return
    state.option_states[flag] = not state.is_enabled(flag)
    state.dirty = True


def adjust_option(state: SelectionState, delta: int) -> None:
    """Cycle the numeric value attached to the highlighted option."""
    if state.focused_panel is not Panel.OPTION_LIST:
        return
    flag = state.highlighted_option
    if flag is OptionFlag.RTD3:
        index = RTD3_LEVELS.index(state.rtd3_level) if state.rtd3_level in RTD3_LEVELS else 0
        state.rtd3_level = RTD3_LEVELS[_cycle(index, delta, len(RTD3_LEVELS))]
    elif flag is OptionFlag.COOLBITS:
        if state.coolbits_value in COOLBITS_PRESETS:
            index = COOLBITS_PRESETS.index(state.coolbits_value)
        else:
            index = -1 if delta > 0 else 0
        state.coolbits_value = COOLBITS_PRESETS[_cycle(index, delta, len(COOLBITS_PRESETS))]
    else:
        return
    state.dirty = True


def record_result(state: SelectionState, result: ApplyResult) -> None:
    state.last_result = result
    if result.ok and result.action is Action.SWITCH:
        state.active_mode = result.mode
    elif result.ok and result.action is Action.RESET:
        state.active_mode = None
    state.dirty = True


def apply_selection(state: SelectionState, runner: Runner) -> ApplyResult:
    result = runner.run(state.pending_args(), state.current_mode)
    record_result(state, result)
    if result.ok and state.offer_reboot:
        state.confirming_reboot = True
    return result


def reset_selection(state: SelectionState, runner: Runner) -> ApplyResult:
    result = runner.run_reset(build_reset_args(verbose=state.verbose_tool))
    record_result(state, result)
    return result


def confirm_reboot(state: SelectionState, runner: Runner) -> ApplyResult:
    state.confirming_reboot = False
    result = runner.run_reboot()
    record_result(state, result)
    return result


def decline_reboot(state: SelectionState) -> None:
    state.confirming_reboot = False
    record_result(state, ApplyResult.success(state.active_mode, REBOOT_REMINDER, action=Action.REBOOT))


def _apply_confirm_input(state: SelectionState, event: InputEvent, runner: Runner) -> bool:
    # Only the prompt answers and quit are live while the prompt is shown.
    if event is InputEvent.QUIT:
        return True
    if event is InputEvent.CONFIRM:
        confirm_reboot(state, runner)
    elif event is InputEvent.DECLINE:
        decline_reboot(state)
    return False


def apply_input(state: SelectionState, event: InputEvent, runner: Runner) -> bool:
    """Apply one input event; return ``True`` when the app should quit."""
    if state.confirming_reboot:
        return _apply_confirm_input(state, event, runner)
    if event is InputEvent.QUIT:
        return True
    if event is InputEvent.MOVE_UP:
        move_selection(state, -1)
    elif event is InputEvent.MOVE_DOWN:
        move_selection(state, 1)
    elif event is InputEvent.SWITCH_PANEL:
        switch_panel(state)
    elif event is InputEvent.TOGGLE_OPTION:
        toggle_option(state)
    elif event is InputEvent.ADJUST_UP:
        adjust_option(state, 1)
    elif event is InputEvent.ADJUST_DOWN:
        adjust_option(state, -1)
    elif event is InputEvent.APPLY_SELECTION:
        apply_selection(state, runner)
    elif event is InputEvent.RESET:
        reset_selection(state, runner)
    return False


__all__ = [
    "InputEvent",
    "REBOOT_REMINDER",
    "Runner",
    "SelectionState",
    "adjust_option",
    "apply_input",
    "apply_selection",
    "confirm_reboot",
    "decline_reboot",
    "move_selection",
    "record_result",
    "reset_selection",
    "select_mode",
    "switch_panel",
    "toggle_option",
]
