"""Pager bootstrap: scan input, wire collaborators, run the event loop."""

from __future__ import annotations

import logging
import os
import sys

from ..controller import PagerConfig, PagerController
from ..document import scan_document
from ..input import read_key
from ..opener import launch_opener
from ..render import render_frame
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .terminal import TerminalController, open_keyboard_tty

logger = logging.getLogger(__name__)


def _write_through(content: str | bytes) -> None:
    if isinstance(content, str):
        sys.stdout.write(content)
        sys.stdout.flush()
        return
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        # Text-only stream: bytes that are not UTF-8 cannot survive here.
        sys.stdout.write(content.decode("utf-8", errors="replace"))
        sys.stdout.flush()
        return
    sys.stdout.flush()
    buffer.write(content)
    buffer.flush()


def run_pager(content: str | bytes, config: PagerConfig, nopager: bool = False) -> None:
    """Page ``content`` interactively, or write it through when not on a tty."""
    if nopager or not os.isatty(sys.stdout.fileno()):
        _write_through(content)
        return

    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")

    document = scan_document(content)
    logger.info("paging %d lines with %d links", document.line_count, document.link_count)

    keyboard_fd = open_keyboard_tty()
    try:
        terminal = TerminalController(keyboard_fd, sys.stdout.fileno())
        controller = PagerController(
            document,
            config,
            launch_opener,
            term_rows=terminal.size().lines,
        )
        callbacks = RuntimeLoopCallbacks(
            read_key=read_key,
            render_frame=render_frame,
            terminal_size=terminal.size,
        )
        try:
            run_main_loop(controller, terminal, keyboard_fd, RuntimeLoopTiming(), callbacks)
        except KeyboardInterrupt:
            logger.info("interrupted")
    finally:
        os.close(keyboard_fd)
    logger.info("pager closed")
