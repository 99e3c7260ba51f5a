"""OSC 8 hyperlink scanner.

Splits raw pager input into lines of styled segments and records every
hyperlink it finds. Only the hyperlink start/end sequence is interpreted;
every other escape sequence is kept verbatim in the segment text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from ..ansi import display_width, strip_escapes
from .model import Document, Line, Link, Position, Segment

logger = logging.getLogger(__name__)

# ESC ] 8 ; params ; target ST, with ST being ESC \ or BEL. A marker cut off by
# end of input still counts; its target runs to the end.
_TOKEN_RE = re.compile(
    r"(?P<newline>\r?\n)"
    r"|\x1b\]8;(?P<params>[^;\x07\x1b\n]*);(?P<target>[^\x07\x1b\n]*)(?:\x07|\x1b\\|\Z)"
)


@dataclass
class _OpenLink:
    index: int
    target: str
    params: str
    start: Position
    text_parts: list[str] = field(default_factory=list)


class HyperlinkScanner:
    """Single-pass builder turning input text into a :class:`Document`."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self._lines: list[Line] = []
        self._links: list[Link] = []
        self._segments: list[Segment] = []
        self._column = 0
        self._line_started = False
        self._open: _OpenLink | None = None

    def scan(self, data: str | bytes) -> Document:
        """Scan the complete input and return the finished document."""
        self._reset()
        text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
        pos = 0
        for match in _TOKEN_RE.finditer(text):
            self._feed_text(text[pos : match.start()])
            if match.group("newline") is not None:
                self._end_line()
            else:
                self._set_hyperlink(match.group("target"), match.group("params"))
            pos = match.end()
        self._feed_text(text[pos:])
        if self._line_started:
            self._end_line()

        document = Document(lines=tuple(self._lines), links=tuple(self._links))
        logger.debug("scanned %d lines with %d links", document.line_count, document.link_count)
        self._reset()
        return document

    def _current_position(self) -> Position:
        return Position(len(self._lines), self._column)

    def _feed_text(self, chunk: str) -> None:
        if not chunk:
            return
        self._line_started = True
        link = self._open.index if self._open is not None else None
        if self._segments and self._segments[-1].link == link:
            previous = self._segments.pop()
            self._segments.append(Segment(previous.text + chunk, link))
        else:
            self._segments.append(Segment(chunk, link))
        if self._open is not None:
            self._open.text_parts.append(chunk)
        self._column += display_width(chunk, self._column)

    def _set_hyperlink(self, target: str, params: str) -> None:
        # A new start marker implicitly ends the link that is still open.
        self._close_link()
        if not target:
            return
        self._line_started = True
        self._open = _OpenLink(
            index=len(self._links),
            target=target,
            params=params,
            start=self._current_position(),
        )

    def _close_link(self) -> None:
        pending = self._open
        if pending is None:
            return
        self._open = None
        self._links.append(
            Link(
                index=pending.index,
                target=pending.target,
                start=pending.start,
                end=self._current_position(),
                text=strip_escapes("".join(pending.text_parts)),
                params=pending.params,
            )
        )

    def _end_line(self) -> None:
        # Links never span lines: whatever is open stops at the line break.
        self._close_link()
        self._lines.append(Line(tuple(self._segments)))
        self._segments = []
        self._column = 0
        self._line_started = False


def scan_document(data: str | bytes) -> Document:
    """Build a :class:`Document` from the full pager input."""
    return HyperlinkScanner().scan(data)
