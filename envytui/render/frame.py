"""Frame composition for the dashboard.

Turns a ``LayoutDescription`` into a full-screen ANSI frame. Composition is
side-effect free; only ``write_frame`` touches the output descriptor.
"""

from __future__ import annotations

import os
import sys

from ..ansi import center_ansi_line, clip_ansi_line, display_width, fit_ansi_line, wrap_plain_text
from ..highlight import DEFAULT_STYLE, colorize_command
from ..ui_theme import UITheme
from .layout import (
    STATUS_BUSY,
    STATUS_FAILURE,
    STATUS_PROMPT,
    STATUS_SUCCESS,
    ItemLayout,
    LayoutDescription,
    PanelLayout,
    StatusLine,
)

CLEAR_SCREEN = "\033[H\033[J"
SELECTOR_FOCUSED = "▶ "
SELECTOR_UNFOCUSED = "› "
CHECKBOX_ON = "[✓] "
CHECKBOX_OFF = "[ ] "
MIN_PANEL_WIDTH = 12
# Rows below the panels: separator, command preview, status, footer.
_BOTTOM_ROWS = 4


def _styled(text: str, style: str, theme: UITheme) -> str:
    if not style or not text:
        return text
    return f"{style}{text}{theme.reset}"


def _with_background(text: str, background: str, theme: UITheme) -> str:
    """Apply a background without losing it at inner resets."""
    if not background or not theme.reset:
        return text
    return background + text.replace(theme.reset, theme.reset + background) + theme.reset


def _item_rows(item: ItemLayout, panel: PanelLayout, inner_width: int, theme: UITheme) -> list[str]:
    if item.highlighted:
        selector = SELECTOR_FOCUSED if panel.focused else SELECTOR_UNFOCUSED
    else:
        selector = "  "
    head = _styled(selector, theme.selector, theme)
    if item.checked is not None:
        checkbox = CHECKBOX_ON if item.checked else CHECKBOX_OFF
        head += _styled(checkbox, theme.success if item.checked else theme.muted, theme)

    label_style = theme.color_for(item.color) if item.highlighted or not item.selectable else theme.text
    head += _styled(item.label, label_style, theme)
    if item.marker:
        head += " " + _styled(item.marker, theme.success, theme)

    indent = " " * 4
    rows = [fit_ansi_line(head, inner_width, theme.reset)]
    for line in wrap_plain_text(item.description, max(1, inner_width - len(indent))):
        rows.append(fit_ansi_line(indent + _styled(line, theme.muted, theme), inner_width, theme.reset))

    if item.highlighted and panel.focused:
        rows = [_with_background(row, theme.selection, theme) for row in rows]
    return rows


def compose_panel(panel: PanelLayout, width: int, height: int, theme: UITheme) -> list[str]:
    """Return ``height`` rows, each exactly ``width`` columns, for one bordered panel."""
    width = max(MIN_PANEL_WIDTH, width)
    height = max(2, height)
    inner_width = width - 4
    border_style = theme.border_focused if panel.focused else theme.border
    title_style = theme.panel_title_focused if panel.focused else theme.panel_title

    title = clip_ansi_line(f" {panel.title} ", max(0, width - 4))
    top_fill = "─" * max(0, width - 3 - display_width(title))
    top = _styled("┌─", border_style, theme) + _styled(title, title_style, theme) + _styled(top_fill + "┐", border_style, theme)
    bottom = _styled("└" + "─" * (width - 2) + "┘", border_style, theme)
    side = _styled("│", border_style, theme)

    body: list[str] = [" " * inner_width]
    for item in panel.items:
        body.extend(_item_rows(item, panel, inner_width, theme))
        body.append(" " * inner_width)

    inner_height = height - 2
    body = body[:inner_height]
    body.extend([" " * inner_width] * (inner_height - len(body)))

    rows = [top]
    rows.extend(f"{side} {row} {side}" for row in body)
    rows.append(bottom)
    return rows


def _header_rows(layout: LayoutDescription, width: int, theme: UITheme) -> list[str]:
    rows = [
        "",
        center_ansi_line(_styled(layout.title, theme.title, theme), width, theme.reset),
        center_ansi_line(
            _styled(layout.active_mode_text, theme.color_for(layout.active_mode_color), theme),
            width,
            theme.reset,
        ),
    ]
    if layout.gpu_text:
        rows.append(center_ansi_line(_styled(layout.gpu_text, theme.muted, theme), width, theme.reset))
    rows.append(_styled("─" * width, theme.border, theme))
    return rows


def _status_row(status: StatusLine, width: int, theme: UITheme) -> str:
    style = {
        STATUS_SUCCESS: theme.success,
        STATUS_FAILURE: theme.error,
        STATUS_BUSY: theme.warning,
        STATUS_PROMPT: theme.warning,
    }.get(status.kind, theme.muted)
    # Tool diagnostics can span several lines; the status row shows them joined.
    text = " ".join(status.text.split())
    return fit_ansi_line(" " + _styled(text, style, theme), width, theme.reset)


def _footer_row(hints: tuple[tuple[str, str], ...], width: int, theme: UITheme) -> str:
    parts = [
        _styled(f" {key} ", theme.key_hint, theme) + _styled(f"{action} ", theme.muted, theme)
        for key, action in hints
    ]
    return center_ansi_line(_styled("│", theme.border, theme).join(parts), width, theme.reset)


def compose_frame(
    layout: LayoutDescription,
    width: int,
    height: int,
    theme: UITheme,
    *,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> list[str]:
    """Return exactly ``height`` screen rows for ``layout``."""
    width = max(2 * MIN_PANEL_WIDTH, width)
    height = max(1, height)

    rows = _header_rows(layout, width, theme)
    panel_height = max(4, height - len(rows) - _BOTTOM_ROWS)
    left_width = width // 2
    right_width = width - left_width
    left = compose_panel(layout.mode_panel, left_width, panel_height, theme)
    right = compose_panel(layout.option_panel, right_width, panel_height, theme)
    rows.extend(left_row + right_row for left_row, right_row in zip(left, right))

    preview = colorize_command(layout.command_preview, style, no_color=no_color)
    rows.append(fit_ansi_line(" " + _styled("Command:", theme.muted, theme) + " " + preview, width, theme.reset))
    rows.append(_status_row(layout.status, width, theme))
    rows.append(_styled("─" * width, theme.border, theme))
    rows.append(_footer_row(layout.footer, width, theme))

    rows = rows[:height]
    rows.extend([""] * (height - len(rows)))
    return rows


def frame_text(rows: list[str]) -> str:
    return CLEAR_SCREEN + "\r\n".join(rows)


def write_frame(rows: list[str], fd: int | None = None) -> None:
    target = sys.stdout.fileno() if fd is None else fd
    os.write(target, frame_text(rows).encode("utf-8", errors="replace"))


__all__ = [
    "compose_frame",
    "compose_panel",
    "frame_text",
    "write_frame",
]
