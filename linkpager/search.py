"""Transient link search overlay.

A ``SearchOverlay`` lives only while the pager is in search mode. It filters
the document's links by substring, keeps its own cursor over the surviving
matches, and on commit/cancel writes the outcome back to the ``LinkIndex``.
"""

from __future__ import annotations

import logging

from .document import Document, Link
from .navigation import LinkIndex

logger = logging.getLogger(__name__)


def link_matches(link: Link, query: str, ignore_case: bool = False) -> bool:
    """Return whether ``query`` occurs in the link's target or visible text.

    Matching is case-sensitive unless ``ignore_case`` is set, in which case
    both sides are compared casefolded.
    """
    if not query:
        return True
    if ignore_case:
        folded = query.casefold()
        return folded in link.target.casefold() or folded in link.text.casefold()
    return query in link.target or query in link.text


def filter_links(document: Document, query: str, ignore_case: bool = False) -> list[int]:
    """Return indices of matching links, preserving document order."""
    return [link.index for link in document.links if link_matches(link, query, ignore_case)]


class SearchOverlay:
    """Query, filtered matches, and a match cursor for one search session."""

    def __init__(
        self,
        document: Document,
        link_index: LinkIndex,
        ignore_case: bool = False,
    ) -> None:
        self.document = document
        self.link_index = link_index
        self.ignore_case = ignore_case
        self.pre_search_selection = link_index.selected
        self.query = ""
        self.matches: list[int] = filter_links(document, "", ignore_case)
        self.match_cursor: int | None = None
        if self.matches:
            self.match_cursor = 0
            if self.pre_search_selection in self.matches:
                self.match_cursor = self.matches.index(self.pre_search_selection)

    @property
    def candidate(self) -> int | None:
        """Link index under the match cursor, if any."""
        if self.match_cursor is None:
            return None
        return self.matches[self.match_cursor]

    def type_char(self, char: str) -> None:
        """Append typed text to the query and refilter."""
        if not char:
            return
        self.query += char
        self._refilter()

    def backspace(self) -> None:
        """Delete the last query character and refilter."""
        if not self.query:
            return
        self.query = self.query[:-1]
        self._refilter()

    def _refilter(self) -> None:
        previous = self.candidate
        self.matches = filter_links(self.document, self.query, self.ignore_case)
        if not self.matches:
            self.match_cursor = None
        elif previous in self.matches:
            self.match_cursor = self.matches.index(previous)
        else:
            self.match_cursor = 0

    def advance(self) -> bool:
        """Move to the next match; stays put on the last one."""
        if self.match_cursor is None or self.match_cursor >= len(self.matches) - 1:
            return False
        self.match_cursor += 1
        return True

    def retreat(self) -> bool:
        """Move to the previous match; stays put on the first one."""
        if self.match_cursor is None or self.match_cursor <= 0:
            return False
        self.match_cursor -= 1
        return True

    def commit(self) -> int | None:
        """Select the candidate link and return the resulting selection."""
        candidate = self.candidate
        if candidate is not None:
            self.link_index.select(candidate)
            logger.debug("search %r committed to link %d", self.query, candidate)
        return self.link_index.selected

    def cancel(self) -> int | None:
        """Restore the selection that was active when search started."""
        self.link_index.select(self.pre_search_selection)
        return self.link_index.selected
