"""Core value types shared by state, command building, and rendering.

Modes and option flags are closed enums so every consumer matches them
exhaustively. ``ApplyResult`` records the outcome of one tool invocation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

RTD3_LEVELS: tuple[int, ...] = (0, 1, 2, 3)
RTD3_LEVEL_LABELS: dict[int, str] = {
    0: "Disabled",
    1: "Coarse-grained",
    2: "Fine-grained",
    3: "Fine-grained (Ampere+)",
}
DEFAULT_RTD3_LEVEL = 2

COOLBITS_PRESETS: tuple[int, ...] = (4, 8, 12, 24, 28, 31)
DEFAULT_COOLBITS_VALUE = 28


class Mode(Enum):
    """GPU operating mode, in display and cycling order."""

    INTEGRATED = "integrated"
    HYBRID = "hybrid"
    NVIDIA = "nvidia"

    @property
    def token(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def description(self) -> str:
        return _MODE_DESCRIPTIONS[self]

    @property
    def color(self) -> str:
        """Theme color tag used to tint this mode."""
        return f"mode_{self.value}"

    @classmethod
    def ordered(cls) -> tuple[Mode, ...]:
        return (cls.INTEGRATED, cls.HYBRID, cls.NVIDIA)


_MODE_DESCRIPTIONS: dict[Mode, str] = {
    Mode.INTEGRATED: "Use the Intel/AMD iGPU only. The Nvidia GPU is turned off to save power.",
    Mode.HYBRID: "PRIME render offload. The dGPU can power down when it is not in use.",
    Mode.NVIDIA: "Use the Nvidia dGPU exclusively. Higher performance, higher power draw.",
}


class OptionFlag(Enum):
    """Mode-scoped boolean option passed to the switching tool."""

    RTD3 = "rtd3"
    FORCE_COMPOSITION_PIPELINE = "force_comp"
    COOLBITS = "coolbits"

    @property
    def mode(self) -> Mode:
        return _FLAG_MODES[self]

    @property
    def label(self) -> str:
        return _FLAG_LABELS[self]

    @property
    def description(self) -> str:
        return _FLAG_DESCRIPTIONS[self]

    @property
    def cli_flag(self) -> str:
        return _FLAG_CLI[self]

    @property
    def has_value(self) -> bool:
        """Whether the flag carries a numeric value after its CLI token."""
        return self in {OptionFlag.RTD3, OptionFlag.COOLBITS}

    @classmethod
    def for_mode(cls, mode: Mode) -> tuple[OptionFlag, ...]:
        """Return flags valid for ``mode`` in display order."""
        return tuple(flag for flag in cls if _FLAG_MODES[flag] is mode)


_FLAG_MODES: dict[OptionFlag, Mode] = {
    OptionFlag.RTD3: Mode.HYBRID,
    OptionFlag.FORCE_COMPOSITION_PIPELINE: Mode.NVIDIA,
    OptionFlag.COOLBITS: Mode.NVIDIA,
}
_FLAG_LABELS: dict[OptionFlag, str] = {
    OptionFlag.RTD3: "RTD3 Power Management",
    OptionFlag.FORCE_COMPOSITION_PIPELINE: "Force Composition Pipeline",
    OptionFlag.COOLBITS: "Coolbits",
}
_FLAG_DESCRIPTIONS: dict[OptionFlag, str] = {
    OptionFlag.RTD3: "Let the dGPU enter a low-power state when idle.",
    OptionFlag.FORCE_COMPOSITION_PIPELINE: "Fixes screen tearing, may cost a little performance.",
    OptionFlag.COOLBITS: "Unlock overclocking, fan control and voltage settings.",
}
_FLAG_CLI: dict[OptionFlag, str] = {
    OptionFlag.RTD3: "--rtd3",
    OptionFlag.FORCE_COMPOSITION_PIPELINE: "--force-comp",
    OptionFlag.COOLBITS: "--coolbits",
}


class Panel(Enum):
    MODE_LIST = "modes"
    OPTION_LIST = "options"


class Action(Enum):
    """What produced an ``ApplyResult``; picks the status-line wording."""

    SWITCH = "switch"
    RESET = "reset"
    REBOOT = "reboot"
    STARTUP = "startup"


class FailureKind(Enum):
    """Why an invocation did not succeed."""

    SPAWN = "spawn"
    NON_ZERO_EXIT = "non_zero_exit"


@dataclass(frozen=True)
class ApplyResult:
    """Outcome of the last external command execution.

    ``mode`` is the mode that was requested (``None`` for a reset); it is
    never re-derived from tool output.
    """

    ok: bool
    message: str
    mode: Mode | None = None
    kind: FailureKind | None = None
    args: tuple[str, ...] = ()
    action: Action = Action.SWITCH

    @classmethod
    def success(
        cls,
        mode: Mode | None,
        message: str = "",
        args: tuple[str, ...] | list[str] = (),
        *,
        action: Action = Action.SWITCH,
    ) -> ApplyResult:
        return cls(ok=True, message=message, mode=mode, kind=None, args=tuple(args), action=action)

    @classmethod
    def failure(
        cls,
        message: str,
        kind: FailureKind = FailureKind.NON_ZERO_EXIT,
        args: tuple[str, ...] | list[str] = (),
        *,
        action: Action = Action.SWITCH,
    ) -> ApplyResult:
        return cls(ok=False, message=message, mode=None, kind=kind, args=tuple(args), action=action)


@dataclass(frozen=True)
class GpuInfo:
    """Snapshot of ``nvidia-smi`` fields shown in the header."""

    name: str
    temperature_c: str
    memory_used_mib: str
    memory_total_mib: str

    def summary(self) -> str:
        return (
            f"{self.name} | {self.temperature_c}°C | "
            f"{self.memory_used_mib} / {self.memory_total_mib} MiB"
        )


__all__ = [
    "Action",
    "ApplyResult",
    "COOLBITS_PRESETS",
    "DEFAULT_COOLBITS_VALUE",
    "DEFAULT_RTD3_LEVEL",
    "FailureKind",
    "GpuInfo",
    "Mode",
    "OptionFlag",
    "Panel",
    "RTD3_LEVELS",
    "RTD3_LEVEL_LABELS",
]
