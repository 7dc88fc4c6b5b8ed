"""Public runtime orchestration entry points.

This package groups the interactive bootstrap (`run_dashboard`) and the
lower-level event loop contracts used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .app import DashboardOptions
    from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming


def run_dashboard(*args, **kwargs):
    """Lazily import dashboard entrypoint to avoid bootstrap work on import."""
    from .app import run_dashboard as _run_dashboard

    return _run_dashboard(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name in {"RuntimeLoopCallbacks", "RuntimeLoopTiming"}:
        from . import loop as _loop

        return getattr(_loop, name)
    if name == "DashboardOptions":
        from . import app as _app

        return _app.DashboardOptions
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "DashboardOptions",
    "run_dashboard",
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
    "run_main_loop",
]
