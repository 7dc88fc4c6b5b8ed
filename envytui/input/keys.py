"""Key-token to input-event bindings."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..state import InputEvent


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single input event."""

    combos: tuple[str, ...]
    event: InputEvent


class KeyEventRegistry:
    """Small key-dispatch table with optional key normalization strategy."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else self._identity
        self._events: dict[str, InputEvent] = {}

    @staticmethod
    def _identity(key: str) -> str:
        return key

    def register_binding(self, binding: KeyBinding) -> KeyEventRegistry:
        """Register one binding, overwriting existing events for same combos."""
        for combo in binding.combos:
            self._events[self._normalize(combo)] = binding.event
        return self

    def register_bindings(self, *bindings: KeyBinding) -> KeyEventRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def event_for(self, key: str) -> InputEvent | None:
        if not key:
            return None
        return self._events.get(self._normalize(key))


DEFAULT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("UP", "k"), InputEvent.MOVE_UP),
    KeyBinding(("DOWN", "j"), InputEvent.MOVE_DOWN),
    KeyBinding(("TAB", "SHIFT_TAB"), InputEvent.SWITCH_PANEL),
    KeyBinding(("SPACE",), InputEvent.TOGGLE_OPTION),
    KeyBinding(("RIGHT", "l"), InputEvent.ADJUST_UP),
    KeyBinding(("LEFT", "h"), InputEvent.ADJUST_DOWN),
    KeyBinding(("ENTER",), InputEvent.APPLY_SELECTION),
    KeyBinding(("r",), InputEvent.RESET),
    KeyBinding(("q", "ESC", "CTRL_C"), InputEvent.QUIT),
)


def default_registry() -> KeyEventRegistry:
    return KeyEventRegistry().register_bindings(*DEFAULT_BINDINGS)


_DEFAULT_REGISTRY = default_registry()


def event_for_key(key: str) -> InputEvent | None:
    """Translate a decoded key token using the default bindings."""
    return _DEFAULT_REGISTRY.event_for(key)


# Active only while the post-apply reboot prompt is shown.
CONFIRM_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("y", "Y", "ENTER"), InputEvent.CONFIRM),
    KeyBinding(("n", "N", "ESC"), InputEvent.DECLINE),
    KeyBinding(("CTRL_C",), InputEvent.QUIT),
)

_CONFIRM_REGISTRY = KeyEventRegistry().register_bindings(*CONFIRM_BINDINGS)


def event_for_confirm_key(key: str) -> InputEvent | None:
    """Translate a key token while a yes/no prompt is open."""
    return _CONFIRM_REGISTRY.event_for(key)
