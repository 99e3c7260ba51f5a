"""Link selection cursor.

This module has no UI concerns. It only tracks which link of a document is
selected and how next/previous stepping moves that selection.
"""

from __future__ import annotations


class LinkIndex:
    """Selection over ``link_count`` links in discovery order.

    Stepping never wraps around: ``next`` stops at the last link and
    ``previous`` at the first. Every operation returns whether the selection
    changed, and all of them are no-ops when there are no links.
    """

    def __init__(self, link_count: int, selected: int | None = None) -> None:
        self.link_count = max(0, link_count)
        self.selected: int | None = None
        self.select(selected)

    @property
    def is_empty(self) -> bool:
        return self.link_count == 0

    def select(self, index: int | None) -> bool:
        """Set selection directly; ``None`` clears it, out-of-range is ignored."""
        if index is not None and not 0 <= index < self.link_count:
            return False
        if index == self.selected:
            return False
        self.selected = index
        return True

    def next(self) -> bool:
        """Move to the following link, or to the first one when unselected."""
        if self.is_empty:
            return False
        if self.selected is None:
            return self.select(0)
        return self.select(min(self.selected + 1, self.link_count - 1))

    def previous(self) -> bool:
        """Move to the preceding link, or to the last one when unselected."""
        if self.is_empty:
            return False
        if self.selected is None:
            return self.select(self.link_count - 1)
        return self.select(max(self.selected - 1, 0))

    def first(self) -> bool:
        return self.select(0) if not self.is_empty else False

    def last(self) -> bool:
        return self.select(self.link_count - 1) if not self.is_empty else False
