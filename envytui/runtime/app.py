"""Dashboard bootstrap: build runner and initial state, then run the loop."""

from __future__ import annotations

import logging
import shutil
import sys
from dataclasses import dataclass

from ..commands import DEFAULT_TOOL
from ..input import read_key
from ..model import DEFAULT_COOLBITS_VALUE, DEFAULT_RTD3_LEVEL, Action, ApplyResult, FailureKind, Mode
from ..process import DryRunRunner, ProcessRunner, is_tool_installed, query_gpu_info, query_mode
from ..render import compose_frame, render, write_frame
from ..state import SelectionState
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from .loop import RuntimeLoopCallbacks, run_main_loop

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardOptions:
    """Settings resolved from the command line."""

    tool: str = DEFAULT_TOOL
    use_pkexec: bool = False
    verbose_tool: bool = False
    timeout: float | None = None
    fallback_mode: Mode = Mode.INTEGRATED
    rtd3_level: int = DEFAULT_RTD3_LEVEL
    coolbits_value: int = DEFAULT_COOLBITS_VALUE
    theme: str | None = None
    no_color: bool = False
    style: str = "monokai"
    dry_run: bool = False
    detect: bool = True
    offer_reboot: bool = False


def build_runner(options: DashboardOptions) -> ProcessRunner:
    runner_cls = DryRunRunner if options.dry_run else ProcessRunner
    return runner_cls(options.tool, use_pkexec=options.use_pkexec, timeout=options.timeout)


def initial_state(options: DashboardOptions) -> SelectionState:
    """Create startup state, asking the tool for the configured mode when allowed."""
    state = SelectionState(
        current_mode=options.fallback_mode,
        rtd3_level=options.rtd3_level,
        coolbits_value=options.coolbits_value,
        verbose_tool=options.verbose_tool,
        offer_reboot=options.offer_reboot,
    )
    if not options.detect:
        return state

    if not options.dry_run and not is_tool_installed(options.tool):
        logger.warning("%s not found on PATH", options.tool)
        state.last_result = ApplyResult.failure(
            f"{options.tool} is not installed. Please install it first.",
            FailureKind.SPAWN,
            action=Action.STARTUP,
        )
    else:
        detected = query_mode(options.tool)
        if detected is not None:
            state.active_mode = detected
            state.current_mode = detected
    state.gpu_info = query_gpu_info()
    return state


def render_frame_rows(state: SelectionState, runner: ProcessRunner, options: DashboardOptions, width: int, height: int) -> list[str]:
    layout = render(state, tool_command=runner.command_for([]))
    theme = resolve_theme(options.theme, no_color=options.no_color)
    return compose_frame(layout, width, height, theme, style=options.style, no_color=options.no_color)


def run_dashboard(options: DashboardOptions) -> None:
    """Initialize runtime state, wire subsystems, and run the event loop.

    Raises ``TerminalInitError`` before any drawing if the terminal is unusable.
    """
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    runner = build_runner(options)
    state = initial_state(options)
    logger.info("starting dashboard (mode=%s, active=%s)", state.current_mode.token, state.active_mode)

    def draw(current: SelectionState) -> None:
        term = shutil.get_terminal_size((80, 24))
        write_frame(render_frame_rows(current, runner, options, term.columns, term.lines), stdout_fd)

    callbacks = RuntimeLoopCallbacks(
        read_key=lambda timeout_ms: read_key(stdin_fd, timeout_ms=timeout_ms),
        draw=draw,
    )
    run_main_loop(state, terminal, runner, callbacks)


def render_snapshot(options: DashboardOptions, width: int, height: int) -> str:
    """Render one frame for the initial state without touching the terminal."""
    runner = build_runner(options)
    state = initial_state(options)
    rows = render_frame_rows(state, runner, options, width, height)
    suffix = "\033[0m" if not options.no_color else ""
    return "\n".join(row + suffix for row in rows) + "\n"
