"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the dashboard chrome and mode tints. The Pygments
style used for the command preview remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the frame composer."""

    name: str
    reset: str
    title: str
    text: str
    muted: str
    border: str
    border_focused: str
    panel_title: str
    panel_title_focused: str
    selector: str
    selection: str
    success: str
    error: str
    warning: str
    key_hint: str
    mode_integrated: str
    mode_hybrid: str
    mode_nvidia: str

    def color_for(self, tag: str) -> str:
        """Return the escape for a color tag such as ``mode_hybrid``."""
        return getattr(self, tag, "") if tag in _COLOR_TAGS else ""


_COLOR_TAGS = frozenset(
    {
        "title",
        "text",
        "muted",
        "success",
        "error",
        "warning",
        "mode_integrated",
        "mode_hybrid",
        "mode_nvidia",
    }
)


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    title="\033[1;38;2;139;92;246m",
    text="\033[38;2;220;220;230m",
    muted="\033[38;2;100;100;120m",
    border="\033[38;2;60;60;80m",
    border_focused="\033[38;2;139;92;246m",
    panel_title="\033[38;2;100;100;120m",
    panel_title_focused="\033[1;38;2;139;92;246m",
    selector="\033[38;2;139;92;246m",
    selection="\033[48;2;40;40;60m",
    success="\033[38;2;34;197;94m",
    error="\033[38;2;239;68;68m",
    warning="\033[38;2;234;179;8m",
    key_hint="\033[1;38;2;139;92;246m",
    mode_integrated="\033[38;2;59;130;246m",
    mode_hybrid="\033[38;2;16;185;129m",
    mode_nvidia="\033[38;2;118;185;0m",
)

ANSI256_THEME = UITheme(
    name="ansi256",
    reset="\033[0m",
    title="\033[1;38;5;141m",
    text="\033[38;5;252m",
    muted="\033[2;38;5;250m",
    border="\033[38;5;240m",
    border_focused="\033[38;5;141m",
    panel_title="\033[2;38;5;250m",
    panel_title_focused="\033[1;38;5;141m",
    selector="\033[38;5;141m",
    selection="\033[48;5;236m",
    success="\033[38;5;42m",
    error="\033[38;5;203m",
    warning="\033[38;5;220m",
    key_hint="\033[1;38;5;141m",
    mode_integrated="\033[38;5;33m",
    mode_hybrid="\033[38;5;36m",
    mode_nvidia="\033[38;5;112m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    title="",
    text="",
    muted="",
    border="",
    border_focused="",
    panel_title="",
    panel_title_focused="",
    selector="",
    selection="",
    success="",
    error="",
    warning="",
    key_hint="",
    mode_integrated="",
    mode_hybrid="",
    mode_nvidia="",
)

_THEMES: dict[str, UITheme] = {theme.name: theme for theme in (DEFAULT_THEME, ANSI256_THEME)}

# Extra spellings accepted on the command line.
_THEME_ALIASES = {
    "truecolor": DEFAULT_THEME.name,
    "24bit": DEFAULT_THEME.name,
    "256": ANSI256_THEME.name,
    "256color": ANSI256_THEME.name,
}


def available_theme_names() -> tuple[str, ...]:
    """Theme names shown in ``--help``; the plain palette is reached via ``--no-color``."""
    return tuple(_THEMES)


def normalize_theme_name(name: str | None) -> str:
    """Map a user-supplied theme name or alias onto a known theme; unknown names get the default."""
    key = (name or "").strip().lower()
    key = _THEME_ALIASES.get(key, key)
    return key if key in _THEMES else DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Pick the palette for the frame composer; ``no_color`` always wins."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "ANSI256_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
