"""Command-preview highlighting and sanitizing of captured tool output.

Pygments is imported on first use so ``--help`` and the non-rendering code
paths never load it. Tool output shown on the status line is stripped of
escape sequences and has its remaining control bytes made visible.
"""

from __future__ import annotations

import re
from functools import lru_cache

DEFAULT_STYLE = "monokai"

_ANSI_ESCAPE_RE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")
# C0 controls except tab, newline and CR; DEL; C1 controls.
_UNSAFE_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE_RE.sub("", text)


def sanitize_terminal_text(source: str) -> str:
    """Make captured output safe to print inside the dashboard.

    Control bytes that survive escape stripping are rendered as ``\\xNN`` so
    they cannot ring the bell or move the cursor.
    """
    return _UNSAFE_CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", strip_ansi(source))


@lru_cache(maxsize=None)
def _resolve_style(style: str) -> str:
    from pygments.styles import get_style_by_name
    from pygments.util import ClassNotFound

    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


@lru_cache(maxsize=None)
def _terminal_formatter(style: str):
    from pygments.formatters import TerminalFormatter

    return TerminalFormatter(style=style)


@lru_cache(maxsize=1)
def _bash_lexer():
    from pygments.lexers import BashLexer

    return BashLexer()


def pygments_highlight(command: str, style: str = DEFAULT_STYLE) -> str:
    from pygments import highlight

    formatter = _terminal_formatter(_resolve_style(style))
    # TerminalFormatter always ends its output with a newline.
    return highlight(command, _bash_lexer(), formatter).rstrip("\n")


def colorize_command(command: str, style: str = DEFAULT_STYLE, *, no_color: bool = False) -> str:
    """Return ``command`` colored for the terminal, or unchanged when disabled."""
    if no_color or not command:
        return command
    return pygments_highlight(command, style)


__all__ = [
    "DEFAULT_STYLE",
    "colorize_command",
    "pygments_highlight",
    "sanitize_terminal_text",
    "strip_ansi",
]
