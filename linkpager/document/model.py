"""Immutable datatypes for a scanned, link-annotated document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from ..ansi import display_width, strip_escapes


class Position(NamedTuple):
    """Line index plus display-cell column; orders in document order."""

    line: int
    column: int


@dataclass(frozen=True)
class Link:
    """One hyperlink discovered in the input.

    ``end`` is exclusive and always on the same line as ``start``. ``text`` is
    the visible text the link covered, with escape sequences removed.
    """

    index: int
    target: str
    start: Position
    end: Position
    text: str = ""
    params: str = ""

    @property
    def line(self) -> int:
        return self.start.line

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class Segment:
    """Run of display text with one style.

    ``link`` is an index into ``Document.links`` for link segments and
    ``None`` for plain text.
    """

    text: str
    link: int | None = None

    @property
    def style(self) -> str:
        return "plain" if self.link is None else "link"


@dataclass(frozen=True)
class Line:
    """One input row as an ordered tuple of segments."""

    segments: tuple[Segment, ...] = ()

    @property
    def text(self) -> str:
        return "".join(segment.text for segment in self.segments)

    @property
    def plain_text(self) -> str:
        return strip_escapes(self.text)

    @property
    def width(self) -> int:
        return display_width(self.text)

    def link_indices(self) -> tuple[int, ...]:
        """Return indices of links with segments on this line, in order."""
        seen: list[int] = []
        for segment in self.segments:
            if segment.link is not None and segment.link not in seen:
                seen.append(segment.link)
        return tuple(seen)


@dataclass(frozen=True)
class Document:
    """Scanner output: lines plus links in discovery order.

    Built once from the full input and never mutated afterwards.
    """

    lines: tuple[Line, ...] = ()
    links: tuple[Link, ...] = ()

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def link_count(self) -> int:
        return len(self.links)

    def link_line(self, index: int) -> int:
        """Return the line index holding link ``index``."""
        return self.links[index].line


__all__ = [
    "Document",
    "Line",
    "Link",
    "Position",
    "Segment",
]
