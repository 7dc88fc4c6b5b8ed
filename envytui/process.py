"""Subprocess execution for the GPU-switching tool and GPU queries.

Every invocation resolves to an ``ApplyResult``; missing binaries, permission
errors, timeouts and non-zero exits are reported, never raised.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence

from .commands import DEFAULT_TOOL, build_query_args, describe_command
from .highlight import sanitize_terminal_text
from .model import Action, ApplyResult, FailureKind, GpuInfo, Mode

logger = logging.getLogger(__name__)

PKEXEC = "pkexec"
PROMPT_ANSWERS = "y\n" * 8
QUERY_TIMEOUT_SECONDS = 5.0
REBOOT_HINT = "Please reboot for changes to take effect."
REBOOT_COMMAND: tuple[str, ...] = ("systemctl", "reboot")
NVIDIA_SMI_ARGS: tuple[str, ...] = (
    "nvidia-smi",
    "--query-gpu=name,temperature.gpu,memory.used,memory.total",
    "--format=csv,noheader,nounits",
)


def _diagnostic(proc: subprocess.CompletedProcess[str]) -> str:
    """Pick the most useful captured output for a failed run."""
    for stream in (proc.stderr, proc.stdout):
        text = sanitize_terminal_text(stream or "").strip()
        if text:
            return text
    return f"exit status {proc.returncode}"


class ProcessRunner:
    """Runs ``envycontrol`` synchronously and folds the outcome into a result."""

    def __init__(
        self,
        tool: str = DEFAULT_TOOL,
        *,
        use_pkexec: bool = False,
        timeout: float | None = None,
        confirm_prompts: bool = True,
        reboot_command: Sequence[str] = REBOOT_COMMAND,
    ) -> None:
        self.tool = tool
        self.use_pkexec = use_pkexec
        self.timeout = timeout
        self.confirm_prompts = confirm_prompts
        self.reboot_command = tuple(reboot_command)

    def command_for(self, args: Sequence[str]) -> list[str]:
        """Return the full argv for ``args``, including the optional pkexec prefix."""
        command = [self.tool, *args]
        if self.use_pkexec:
            command.insert(0, PKEXEC)
        return command

    def describe(self, args: Sequence[str]) -> str:
        command = self.command_for(args)
        return describe_command(command[0], command[1:])

    def _execute(
        self,
        command: list[str],
        args: Sequence[str],
        action: Action,
        *,
        answer_prompts: bool,
    ) -> subprocess.CompletedProcess[str] | ApplyResult:
        logger.info("running %s", describe_command(command[0], command[1:]))
        try:
            return subprocess.run(
                command,
                input=PROMPT_ANSWERS if answer_prompts else None,
                stdin=None if answer_prompts else subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("%s timed out after %ss", command[0], self.timeout)
            return ApplyResult.failure(
                f"{command[0]} timed out after {self.timeout:g}s",
                FailureKind.SPAWN,
                args,
                action=action,
            )
        except OSError as exc:
            logger.warning("could not start %s: %s", command[0], exc)
            reason = exc.strerror or str(exc)
            return ApplyResult.failure(
                f"could not start {command[0]}: {reason}",
                FailureKind.SPAWN,
                args,
                action=action,
            )

    def _finish(
        self,
        outcome: subprocess.CompletedProcess[str] | ApplyResult,
        program: str,
        args: Sequence[str],
        mode: Mode | None,
        action: Action,
    ) -> ApplyResult:
        if isinstance(outcome, ApplyResult):
            return outcome

        if outcome.returncode == 0:
            logger.info("%s finished successfully", program)
            return ApplyResult.success(mode, _success_message(action, mode), args, action=action)

        diagnostic = _diagnostic(outcome)
        logger.warning("%s exited with status %d: %s", program, outcome.returncode, diagnostic)
        return ApplyResult.failure(diagnostic, FailureKind.NON_ZERO_EXIT, args, action=action)

    def run(self, args: Sequence[str], mode: Mode | None = None, *, action: Action = Action.SWITCH) -> ApplyResult:
        """Execute the tool with ``args``; ``mode`` is echoed back on success."""
        outcome = self._execute(self.command_for(args), args, action, answer_prompts=self.confirm_prompts)
        return self._finish(outcome, self.tool, args, mode, action)

    def run_reset(self, args: Sequence[str]) -> ApplyResult:
        return self.run(args, None, action=Action.RESET)

    def run_reboot(self) -> ApplyResult:
        """Ask the system to reboot; never goes through pkexec or the tool."""
        command = list(self.reboot_command)
        outcome = self._execute(command, command, Action.REBOOT, answer_prompts=False)
        return self._finish(outcome, command[0], command, None, Action.REBOOT)


class DryRunRunner(ProcessRunner):
    """Runner that records commands instead of spawning them."""

    def __init__(self, tool: str = DEFAULT_TOOL, **kwargs) -> None:
        super().__init__(tool, **kwargs)
        self.history: list[list[str]] = []

    def _record(self, command: list[str], args: Sequence[str], mode: Mode | None, action: Action) -> ApplyResult:
        self.history.append(command)
        text = describe_command(command[0], command[1:])
        logger.info("dry run: %s", text)
        return ApplyResult.success(mode, f"Dry run: {text}", args, action=action)

    def run(self, args: Sequence[str], mode: Mode | None = None, *, action: Action = Action.SWITCH) -> ApplyResult:
        return self._record(self.command_for(args), args, mode, action)

    def run_reboot(self) -> ApplyResult:
        command = list(self.reboot_command)
        return self._record(command, command, None, Action.REBOOT)


def _success_message(action: Action, mode: Mode | None) -> str:
    if action is Action.REBOOT:
        return "Reboot requested."
    if action is Action.RESET or mode is None:
        return f"Reset successful. {REBOOT_HINT}"
    return f"Switched to {mode.token} mode. {REBOOT_HINT}"


def is_tool_installed(tool: str = DEFAULT_TOOL) -> bool:
    return shutil.which(tool) is not None


def query_mode(tool: str = DEFAULT_TOOL, timeout: float = QUERY_TIMEOUT_SECONDS) -> Mode | None:
    """Ask the tool which mode is configured; ``None`` when unknown."""
    try:
        proc = subprocess.run(
            [tool, *build_query_args()],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.warning("mode query failed: %s", exc)
        return None
    if proc.returncode != 0:
        logger.info("mode query exited with status %d", proc.returncode)
        return None

    stdout = proc.stdout.lower()
    for mode in Mode.ordered():
        if mode.token in stdout:
            logger.info("tool reports %s mode", mode.token)
            return mode
    return None


def query_gpu_info(timeout: float = QUERY_TIMEOUT_SECONDS) -> GpuInfo | None:
    """Return the first GPU reported by ``nvidia-smi``, if it is available."""
    try:
        proc = subprocess.run(
            list(NVIDIA_SMI_ARGS),
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            stdin=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.debug("nvidia-smi unavailable: %s", exc)
        return None
    if proc.returncode != 0:
        return None

    first_line = proc.stdout.strip().splitlines()[:1]
    if not first_line:
        return None
    parts = [part.strip() for part in first_line[0].split(",")]
    if len(parts) < 4:
        return None
    return GpuInfo(
        name=sanitize_terminal_text(parts[0]),
        temperature_c=parts[1],
        memory_used_mib=parts[2],
        memory_total_mib=parts[3],
    )


__all__ = [
    "DryRunRunner",
    "ProcessRunner",
    "is_tool_installed",
    "query_gpu_info",
    "query_mode",
]
