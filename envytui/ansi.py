"""Width-aware helpers for styled terminal rows.

Frame rows carry SGR escape sequences. These helpers measure and cut rows by
visible cells so panel borders stay aligned under colors and wide glyphs.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Cells taken by ``ch`` when drawn at column ``col``."""
    if ch == "\t":
        return TAB_STOP - col % TAB_STOP
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def _segments(text: str) -> Iterator[tuple[str, bool]]:
    """Yield ``(chunk, is_escape)`` pairs: whole escape sequences or single characters."""
    pos = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        for ch in text[pos : match.start()]:
            yield ch, False
        yield match.group(0), True
        pos = match.end()
    for ch in text[pos:]:
        yield ch, False


def display_width(text: str) -> int:
    col = 0
    for chunk, is_escape in _segments(text):
        if not is_escape:
            col += char_display_width(chunk, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut a styled row down to ``max_cols`` cells.

    Escape sequences ahead of the cut are kept so styling carries through.
    A wide glyph that would straddle the edge is dropped, and tabs become
    spaces.
    """
    if max_cols <= 0:
        return ""

    kept: list[str] = []
    col = 0
    for chunk, is_escape in _segments(text):
        if is_escape:
            kept.append(chunk)
            continue
        width = char_display_width(chunk, col)
        if col + width > max_cols:
            break
        kept.append(" " * width if chunk == "\t" else chunk)
        col += width
    return "".join(kept)


def fit_ansi_line(text: str, width: int, reset: str = "") -> str:
    """Clip ``text`` to ``width`` columns and right-pad it with spaces."""
    clipped = clip_ansi_line(text, width)
    used = display_width(clipped)
    suffix = reset if reset and "\x1b" in clipped else ""
    return clipped + suffix + " " * max(0, width - used)


def center_ansi_line(text: str, width: int, reset: str = "") -> str:
    used = display_width(text)
    if used >= width:
        return fit_ansi_line(text, width, reset)
    left = (width - used) // 2
    return fit_ansi_line(" " * left + text, width, reset)


def wrap_plain_text(text: str, width: int) -> list[str]:
    """Greedy word wrap for unstyled text; long words are hard-split."""
    if width <= 0:
        return []
    lines: list[str] = []
    current = ""
    for word in text.split():
        while display_width(word) > width:
            if current:
                lines.append(current)
                current = ""
            head = clip_ansi_line(word, width) or word[0]
            lines.append(head)
            word = word[len(head):]
        if not word:
            continue
        candidate = f"{current} {word}" if current else word
        if display_width(candidate) <= width:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


__all__ = [
    "ANSI_ESCAPE_RE",
    "center_ansi_line",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "fit_ansi_line",
    "wrap_plain_text",
]
