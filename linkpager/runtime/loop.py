"""Main interactive event loop for the pager.

Coordinates resize bookkeeping, status expiry, rendering, and key dispatch.
This loop is intentionally wiring-heavy; pager logic lives in the controller.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass

from ..controller import Frame, PagerController
from ..input import keys
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    idle_poll_ms: int = 500
    status_poll_ms: int = 200


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected I/O used by ``run_main_loop``.

    Keeping terminal reads and writes callback-driven lets tests feed key
    tokens and capture frames without a real tty.
    """

    read_key: Callable[[int, int | None], str]
    render_frame: Callable[[Frame, int], None]
    terminal_size: Callable[[], os.terminal_size]


def run_main_loop(
    controller: PagerController,
    terminal: TerminalController,
    keyboard_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the pager until the controller reports it is finished.

    Each iteration adopts the current terminal size, drops expired status
    messages, renders when something changed, then waits for one key.
    """
    last_columns = -1
    with terminal.raw_mode():
        while True:
            size = callbacks.terminal_size()
            controller.resize(size.lines)
            controller.clear_expired_status()
            if controller.dirty or size.columns != last_columns:
                callbacks.render_frame(controller.frame(), size.columns)
                controller.dirty = False
                last_columns = size.columns

            timeout_ms = timing.status_poll_ms if controller.status_message else timing.idle_poll_ms
            key = callbacks.read_key(keyboard_fd, timeout_ms)
            if key == keys.EOF:
                logger.warning("keyboard tty closed; leaving the pager")
                break
            if not key:
                continue
            if controller.handle_key(key):
                logger.debug("quit requested with %s", key)
                break
