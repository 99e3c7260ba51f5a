"""Escape-aware text measurement and clipping utilities.

Measures display cells and clips styled lines while leaving escape sequences
untouched. Every escape sequence the pager passes through counts zero cells.
"""

from __future__ import annotations

import re
import unicodedata

# CSI sequences, non-hyperlink OSC strings (BEL or ST terminated), and
# two-byte ESC sequences, in that order of preference.
ESCAPE_SEQUENCE_RE = re.compile(
    r"\x1b\[[0-9;?<=>]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b[@-Z\\-_]"
)
SGR_RESET = "\033[0m"
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks and other control
    characters consume no columns, and East Asian wide/fullwidth characters
    consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.category(ch) == "Cc":
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str, start_col: int = 0) -> int:
    """Return how many cells ``text`` advances the cursor from ``start_col``."""
    col = start_col
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ESCAPE_SEQUENCE_RE.match(text, i)
            if match:
                i = match.end()
                continue
        col += char_display_width(text[i], col)
        i += 1
    return col - start_col


def strip_escapes(text: str) -> str:
    """Drop every recognized escape sequence, keeping only visible text."""
    return ESCAPE_SEQUENCE_RE.sub("", text)


def clip_ansi_line(text: str, max_cols: int, start_col: int = 0) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal
    cells; ``start_col`` is the column the text starts at, for tab stops.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = start_col
    limit = start_col + max_cols
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ESCAPE_SEQUENCE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > limit:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace(SGR_RESET, "\033[0;7m") + SGR_RESET


def underline_with_ansi(text: str) -> str:
    """Underline ``text`` while keeping the producer's own SGR styling."""
    if not text:
        return text

    out: list[str] = ["\033[4m"]
    idx = 0
    while idx < len(text):
        if text[idx] == "\x1b":
            match = ESCAPE_SEQUENCE_RE.match(text, idx)
            if match is not None:
                seq = match.group(0)
                if seq.startswith("\x1b[") and seq.endswith("m"):
                    params = seq[2:-1]
                    out.append(f"\033[{params};4m" if params else "\033[4m")
                else:
                    out.append(seq)
                idx = match.end()
                continue
        out.append(text[idx])
        idx += 1

    out.append("\033[24m")
    return "".join(out)
