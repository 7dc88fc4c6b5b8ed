"""Pure projection of selection state into a layout description.

Nothing here mutates state or touches the terminal; the frame composer turns
the returned description into ANSI text.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..commands import DEFAULT_TOOL, describe_command
from ..model import RTD3_LEVEL_LABELS, Action, ApplyResult, Mode, OptionFlag, Panel
from ..state import SelectionState

APP_TITLE = "EnvyTUI"
MODE_PANEL_TITLE = "Graphics Mode"
OPTION_PANEL_TITLE = "Options"
ACTIVE_MARKER = "●"

STATUS_EMPTY = "empty"
STATUS_BUSY = "busy"
STATUS_SUCCESS = "success"
STATUS_FAILURE = "failure"
STATUS_PROMPT = "prompt"

REBOOT_PROMPT = "Mode switched. Reboot now?"
_FAILURE_PREFIXES: dict[Action, str] = {
    Action.SWITCH: "Failed to switch mode: ",
    Action.RESET: "Failed to reset: ",
    Action.REBOOT: "Failed to reboot: ",
    Action.STARTUP: "",
}

FOOTER_HINTS: tuple[tuple[str, str], ...] = (
    ("↑↓/jk", "Navigate"),
    ("Tab", "Switch Panel"),
    ("Enter", "Apply"),
    ("Space", "Toggle"),
    ("←→/hl", "Adjust"),
    ("r", "Reset"),
    ("q", "Quit"),
)
CONFIRM_FOOTER_HINTS: tuple[tuple[str, str], ...] = (
    ("y/Enter", "Reboot now"),
    ("n/Esc", "Later"),
)

_NO_OPTIONS_LABEL = "No additional options available"
_NO_OPTIONS_DESCRIPTION = "Integrated mode uses only the iGPU. The dGPU is powered off to save battery."


@dataclass(frozen=True)
class ItemLayout:
    """One row group inside a panel."""

    label: str
    description: str
    color: str
    highlighted: bool
    marker: str = ""
    checked: bool | None = None
    selectable: bool = True


@dataclass(frozen=True)
class PanelLayout:
    title: str
    focused: bool
    items: tuple[ItemLayout, ...]


@dataclass(frozen=True)
class StatusLine:
    kind: str
    text: str


@dataclass(frozen=True)
class LayoutDescription:
    title: str
    active_mode_text: str
    active_mode_color: str
    gpu_text: str
    mode_panel: PanelLayout
    option_panel: PanelLayout
    command_preview: str
    status: StatusLine
    footer: tuple[tuple[str, str], ...] = FOOTER_HINTS


def _option_label(state: SelectionState, flag: OptionFlag) -> str:
    if flag is OptionFlag.RTD3:
        level = state.rtd3_level
        return f"{flag.label} (level {level} - {RTD3_LEVEL_LABELS.get(level, 'custom')})"
    if flag is OptionFlag.COOLBITS:
        return f"{flag.label} (value {state.coolbits_value})"
    return flag.label


def _mode_panel(state: SelectionState) -> PanelLayout:
    items = tuple(
        ItemLayout(
            label=mode.label,
            description=mode.description,
            color=mode.color,
            highlighted=mode is state.current_mode,
            marker=ACTIVE_MARKER if mode is state.active_mode else "",
        )
        for mode in Mode.ordered()
    )
    return PanelLayout(MODE_PANEL_TITLE, state.focused_panel is Panel.MODE_LIST, items)


def _option_panel(state: SelectionState) -> PanelLayout:
    focused = state.focused_panel is Panel.OPTION_LIST
    highlighted = state.highlighted_option
    options = state.available_options
    if not options:
        info = ItemLayout(
            label=_NO_OPTIONS_LABEL,
            description=_NO_OPTIONS_DESCRIPTION,
            color="muted",
            highlighted=False,
            selectable=False,
        )
        return PanelLayout(OPTION_PANEL_TITLE, focused, (info,))

    items = tuple(
        ItemLayout(
            label=_option_label(state, flag),
            description=flag.description,
            color=state.current_mode.color,
            highlighted=flag is highlighted,
            checked=state.is_enabled(flag),
        )
        for flag in options
    )
    return PanelLayout(OPTION_PANEL_TITLE, focused, items)


def status_line(
    result: ApplyResult | None,
    busy_message: str = "",
    *,
    confirming_reboot: bool = False,
) -> StatusLine:
    """Project the last apply outcome (or an in-flight message) into a status row."""
    if busy_message:
        return StatusLine(STATUS_BUSY, busy_message)
    if confirming_reboot:
        return StatusLine(STATUS_PROMPT, REBOOT_PROMPT)
    if result is None:
        return StatusLine(STATUS_EMPTY, "")
    if result.ok:
        text = result.message or (f"Switched to {result.mode.token} mode." if result.mode else "Done.")
        return StatusLine(STATUS_SUCCESS, text)
    return StatusLine(STATUS_FAILURE, _FAILURE_PREFIXES[result.action] + result.message)


def render(state: SelectionState, *, tool_command: Sequence[str] = (DEFAULT_TOOL,)) -> LayoutDescription:
    """Build the layout for ``state``.

    ``tool_command`` is the program plus any prefix (e.g. ``pkexec``) shown in
    the command preview.
    """
    if state.active_mode is None:
        active_text = "Current Mode: Unknown"
        active_color = "muted"
    else:
        active_text = f"Current Mode: {state.active_mode.label}"
        active_color = state.active_mode.color

    command = [*tool_command, *state.pending_args()]
    return LayoutDescription(
        title=APP_TITLE,
        active_mode_text=active_text,
        active_mode_color=active_color,
        gpu_text=state.gpu_info.summary() if state.gpu_info is not None else "",
        mode_panel=_mode_panel(state),
        option_panel=_option_panel(state),
        command_preview=describe_command(command[0], command[1:]),
        status=status_line(state.last_result, state.busy_message, confirming_reboot=state.confirming_reboot),
        footer=CONFIRM_FOOTER_HINTS if state.confirming_reboot else FOOTER_HINTS,
    )


__all__ = [
    "CONFIRM_FOOTER_HINTS",
    "FOOTER_HINTS",
    "REBOOT_PROMPT",
    "ItemLayout",
    "LayoutDescription",
    "PanelLayout",
    "STATUS_BUSY",
    "STATUS_EMPTY",
    "STATUS_FAILURE",
    "STATUS_PROMPT",
    "STATUS_SUCCESS",
    "StatusLine",
    "render",
    "status_line",
]
