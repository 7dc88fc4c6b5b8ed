"""Input-layer public API for key decoding and event mapping.

Exports are split between low-level terminal decoding (`read_key`) and the
key-token to `InputEvent` bindings used by the runtime loop.
"""

from .keys import (
    CONFIRM_BINDINGS,
    DEFAULT_BINDINGS,
    KeyBinding,
    KeyEventRegistry,
    default_registry,
    event_for_confirm_key,
    event_for_key,
)
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "CONFIRM_BINDINGS",
    "DEFAULT_BINDINGS",
    "KeyBinding",
    "KeyEventRegistry",
    "default_registry",
    "event_for_confirm_key",
    "event_for_key",
]
