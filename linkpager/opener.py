"""Opener launch helper for selected hyperlink targets.

Spawns the configured opener with the link target as its only argument and
does not wait for it. Returns an error message string instead of raising for
UI-friendly handling.
"""

from __future__ import annotations

import logging
import subprocess

from .controller import OpenRequest

logger = logging.getLogger(__name__)


def launch_opener(request: OpenRequest) -> str | None:
    program = request.program.strip()
    if not program:
        return "Cannot open link: opener is empty."
    try:
        process = subprocess.Popen(
            [program, request.target],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        return f"Failed to run opener {program}: {exc}"
    logger.debug("spawned opener pid=%s for %s", process.pid, request.target)
    return None
