"""Frame rendering for the terminal pager.

Turns a controller ``Frame`` into one fully composed ANSI screen: document
rows, the search panel while searching, and a reverse-video status row.
Composition is side-effect free; only ``render_frame`` writes to the tty.
"""

from __future__ import annotations

import os
import sys

from .ansi import (
    SGR_RESET,
    clip_ansi_line,
    display_width,
    selected_with_ansi,
    underline_with_ansi,
)
from .controller import Frame
from .document import Line, Link

SEARCH_SEPARATOR_CHAR = "━"
SEARCH_PROMPT = "Search: "
QUERY_CURSOR = "\033[7m \033[27m"


def render_line(line: Line, width: int, highlighted: Link | None = None) -> str:
    """Render one document line clipped to ``width`` columns.

    Link segments are underlined; segments of ``highlighted`` are shown in
    reverse video. The producer's own escape sequences are kept.
    """
    highlighted_idx = highlighted.index if highlighted is not None else None
    parts: list[str] = []
    for segment in line.segments:
        if segment.link is None:
            parts.append(segment.text)
        elif segment.link == highlighted_idx:
            parts.append(selected_with_ansi(segment.text))
        else:
            parts.append(underline_with_ansi(segment.text))
    text = clip_ansi_line("".join(parts), width)
    if "\033" in text:
        text += SGR_RESET
    return text


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    """Lay out a status row with ``right_text`` flush against the right edge."""
    usable = max(1, width - 1)
    right_width = display_width(right_text)
    if usable <= right_width:
        return right_text[-usable:]
    left_limit = max(0, usable - right_width - 1)
    left = clip_ansi_line(left_text, left_limit)
    gap = " " * (usable - display_width(left) - right_width)
    return f"{left}{gap}{right_text}"


def _status_position(frame: Frame) -> str:
    if frame.searching:
        if frame.match_cursor is None:
            return f"0/{frame.match_count} matches"
        return f"match {frame.match_cursor + 1}/{frame.match_count}"
    if frame.link_count == 0:
        return "no links"
    if frame.selected is None:
        return f"{frame.link_count} links"
    return f"link {frame.selected.index + 1}/{frame.link_count}"


def _search_panel_rows(frame: Frame, width: int) -> list[str]:
    rows: list[str] = []
    if frame.search_rows >= 2:
        rows.append(f"\033[2m{SEARCH_SEPARATOR_CHAR * width}\033[0m")
    match_rows = max(0, frame.search_rows - 2)
    for _, line in frame.match_window[:match_rows]:
        rows.append(render_line(line, width, frame.highlighted))
    while len(rows) < frame.search_rows - 1:
        rows.append("")
    prompt = clip_ansi_line(f"{SEARCH_PROMPT}{frame.query}", max(0, width - 1))
    rows.append(prompt + QUERY_CURSOR)
    return rows


def compose_frame(frame: Frame, width: int) -> str:
    """Compose the full screen for ``frame`` at terminal ``width``."""
    width = max(1, width)
    out: list[str] = ["\033[H\033[J"]

    for row in range(frame.document_rows):
        if row < len(frame.rows):
            _, line = frame.rows[row]
            out.append(render_line(line, width, frame.highlighted))
        out.append("\r\n")

    if frame.searching:
        for panel_row in _search_panel_rows(frame, width):
            out.append(panel_row)
            out.append("\r\n")

    right = f"{_status_position(frame)}  {frame.percent:3d}%"
    status = build_status_line(frame.status_message, width, right)
    out.append("\033[7m")
    out.append(status)
    out.append(SGR_RESET)
    return "".join(out)


def render_frame(frame: Frame, width: int, fd: int | None = None) -> None:
    """Write the composed frame to ``fd`` (stdout by default)."""
    target_fd = sys.stdout.fileno() if fd is None else fd
    os.write(target_fd, compose_frame(frame, width).encode("utf-8", errors="replace"))
