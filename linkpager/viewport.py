"""Vertical viewport over document lines."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class Viewport:
    """Visible window of ``height`` rows starting at ``top_line``.

    ``top_line`` always stays within ``[0, max(0, total_lines - height)]``.
    """

    total_lines: int
    height: int = 1
    top_line: int = 0

    def __post_init__(self) -> None:
        self.total_lines = max(0, self.total_lines)
        self.height = max(1, self.height)
        self.clamp()

    @property
    def max_top_line(self) -> int:
        return max(0, self.total_lines - self.height)

    def clamp(self) -> None:
        self.top_line = max(0, min(self.top_line, self.max_top_line))

    def resize(self, height: int) -> None:
        """Apply a new row count and re-clamp the top line."""
        self.height = max(1, height)
        self.clamp()

    def ensure_visible(self, line_index: int, height: int | None = None) -> bool:
        """Scroll the minimum amount needed to show ``line_index``.

        Returns whether ``top_line`` changed.
        """
        if height is not None:
            self.height = max(1, height)
        previous = self.top_line
        if line_index < self.top_line:
            self.top_line = line_index
        elif line_index > self.top_line + self.height - 1:
            self.top_line = line_index - self.height + 1
        self.clamp()
        return self.top_line != previous

    def scroll(self, delta: int) -> bool:
        """Move the window by ``delta`` lines; returns whether it moved."""
        previous = self.top_line
        self.top_line += delta
        self.clamp()
        return self.top_line != previous

    def page_step(self) -> int:
        # Keep two rows of overlap between pages.
        return max(1, self.height - 2)

    def page_forward(self) -> bool:
        return self.scroll(self.page_step())

    def page_backward(self) -> bool:
        return self.scroll(-self.page_step())

    def visible_range(self) -> range:
        """Line indices currently on screen."""
        return range(self.top_line, min(self.total_lines, self.top_line + self.height))

    def percent(self) -> int:
        """Scroll position as a whole percentage of the scrollable range."""
        if self.top_line == 0 or self.total_lines < self.height:
            return 0
        if self.top_line >= self.max_top_line:
            return 100
        return math.floor(self.top_line / self.max_top_line * 100)
