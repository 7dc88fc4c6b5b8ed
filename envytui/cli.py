"""Command-line front door for envytui.

Parses CLI options into dashboard settings, configures logging, and then
dispatches into the interactive runtime (or prints a single frame).
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from .commands import DEFAULT_TOOL
from .highlight import DEFAULT_STYLE
from .log_setup import configure_logging
from .model import DEFAULT_COOLBITS_VALUE, DEFAULT_RTD3_LEVEL, RTD3_LEVELS, Mode
from .runtime.app import DashboardOptions, render_snapshot, run_dashboard
from .terminal import TerminalInitError
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)

EXIT_TERMINAL_INIT_FAILURE = 1


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def _coolbits_value(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if not 0 <= parsed <= 255:
        raise argparse.ArgumentTypeError("coolbits value must be between 0 and 255")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="envytui",
        description="Terminal dashboard for switching GPU modes with envycontrol.",
    )
    parser.add_argument("--tool", default=DEFAULT_TOOL, help="GPU switching tool to invoke (default: envycontrol).")
    parser.add_argument("--pkexec", action="store_true", help="Run the tool through pkexec for elevated privileges.")
    parser.add_argument("--verbose-tool", action="store_true", help="Pass --verbose to the tool.")
    parser.add_argument("--timeout", type=_positive_float, default=None, help="Kill the tool after this many seconds.")
    parser.add_argument(
        "--mode",
        choices=[mode.token for mode in Mode.ordered()],
        default=Mode.INTEGRATED.token,
        help="Mode highlighted at startup when the current mode cannot be detected.",
    )
    parser.add_argument(
        "--rtd3-level",
        type=int,
        choices=RTD3_LEVELS,
        default=DEFAULT_RTD3_LEVEL,
        help="Initial RTD3 level used when RTD3 is enabled.",
    )
    parser.add_argument(
        "--coolbits-value",
        type=_coolbits_value,
        default=DEFAULT_COOLBITS_VALUE,
        help="Initial Coolbits value used when Coolbits is enabled.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for the command preview.")
    parser.add_argument("--dry-run", action="store_true", help="Show commands instead of running them.")
    parser.add_argument("--no-detect", action="store_true", help="Skip querying the current mode at startup.")
    parser.add_argument(
        "--offer-reboot",
        action="store_true",
        help="After a successful switch, ask whether to reboot now (runs systemctl reboot).",
    )
    parser.add_argument("--render", action="store_true", help="Print one frame of the dashboard and exit.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Column width for --render output.")
    parser.add_argument("--height", type=_positive_int, default=None, help="Row count for --render output.")
    parser.add_argument("--log-file", type=Path, default=None, help="Append diagnostic logs to this file.")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level (needs --log-file).")
    return parser


def options_from_args(args: argparse.Namespace) -> DashboardOptions:
    return DashboardOptions(
        tool=args.tool,
        use_pkexec=args.pkexec,
        verbose_tool=args.verbose_tool,
        timeout=args.timeout,
        fallback_mode=Mode(args.mode),
        rtd3_level=args.rtd3_level,
        coolbits_value=args.coolbits_value,
        theme=args.theme,
        no_color=args.no_color,
        style=args.style,
        dry_run=args.dry_run,
        detect=not args.no_detect,
        offer_reboot=args.offer_reboot,
    )


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and launch the dashboard.

    Returns the process exit status: 0 on normal quit, 1 when the terminal
    cannot be initialized.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_file, debug=args.debug)
    options = options_from_args(args)

    if args.render:
        term = shutil.get_terminal_size((80, 24))
        width = args.width if args.width is not None else term.columns
        height = args.height if args.height is not None else term.lines
        sys.stdout.write(render_snapshot(options, width, height))
        return 0

    try:
        run_dashboard(options)
    except TerminalInitError as exc:
        logger.error("terminal initialization failed: %s", exc)
        print(f"envytui: {exc}", file=sys.stderr)
        return EXIT_TERMINAL_INIT_FAILURE
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
