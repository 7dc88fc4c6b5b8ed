"""Main interactive event loop for the terminal UI.

Single-threaded: block on input, apply one event, redraw when dirty.
Apply and reset run the tool synchronously from here.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input import event_for_confirm_key, event_for_key
from ..state import InputEvent, Runner, SelectionState, apply_input

logger = logging.getLogger(__name__)

_BUSY_MESSAGES: dict[InputEvent, str] = {
    InputEvent.APPLY_SELECTION: "Applying…",
    InputEvent.RESET: "Resetting…",
    InputEvent.CONFIRM: "Rebooting…",
}


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    poll_timeout_ms: int = 250


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``.

    Keeping terminal I/O behind callbacks lets tests script keys and capture
    frames without a real TTY.
    """

    read_key: Callable[[int], str]
    draw: Callable[[SelectionState], None]
    terminal_size: Callable[[], tuple[int, int]] = lambda: tuple(shutil.get_terminal_size((80, 24)))
    event_for_key: Callable[[str], InputEvent | None] = event_for_key
    event_for_confirm_key: Callable[[str], InputEvent | None] = event_for_confirm_key


def run_main_loop(
    state: SelectionState,
    terminal,
    runner: Runner,
    callbacks: RuntimeLoopCallbacks,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
) -> None:
    """Run the interactive loop until a quit event arrives.

    Keys are handled one at a time in arrival order; nothing is coalesced.
    """
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        while True:
            size = callbacks.terminal_size()
            if size != last_size:
                last_size = size
                state.dirty = True
            if state.dirty:
                callbacks.draw(state)
                state.dirty = False

            key = callbacks.read_key(timing.poll_timeout_ms)
            lookup = callbacks.event_for_confirm_key if state.confirming_reboot else callbacks.event_for_key
            event = lookup(key)
            if event is None:
                continue
            logger.debug("key %r -> %s", key, event.value)

            busy = _BUSY_MESSAGES.get(event)
            if busy:
                # The subprocess blocks this thread; show progress first.
                state.busy_message = busy
                callbacks.draw(state)
            try:
                should_quit = apply_input(state, event, runner)
            finally:
                if busy:
                    state.busy_message = ""
                    state.dirty = True
            if should_quit:
                logger.info("quit requested")
                return
