"""Runtime wiring around the pager controller.

Groups the interactive bootstrap (`run_pager`), the event loop contracts used
by tests, and the config/logging/terminal helpers the CLI composes.
"""

from __future__ import annotations

from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop


def run_pager(*args, **kwargs):
    """Lazily import the bootstrap so config-only callers skip tty imports."""
    from .app import run_pager as _run_pager

    return _run_pager(*args, **kwargs)


__all__ = [
    "run_pager",
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
    "run_main_loop",
]
