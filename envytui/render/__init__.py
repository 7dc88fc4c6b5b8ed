"""Rendering for the dashboard.

``render`` projects selection state into a layout description without side
effects; ``compose_frame`` and ``write_frame`` turn it into terminal output.
"""

from __future__ import annotations

from .frame import compose_frame, compose_panel, frame_text, write_frame
from .layout import (
    CONFIRM_FOOTER_HINTS,
    FOOTER_HINTS,
    REBOOT_PROMPT,
    ItemLayout,
    LayoutDescription,
    PanelLayout,
    StatusLine,
    render,
    status_line,
)

__all__ = [
    "CONFIRM_FOOTER_HINTS",
    "FOOTER_HINTS",
    "REBOOT_PROMPT",
    "ItemLayout",
    "LayoutDescription",
    "PanelLayout",
    "StatusLine",
    "compose_frame",
    "compose_panel",
    "frame_text",
    "render",
    "status_line",
    "write_frame",
]
