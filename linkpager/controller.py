"""Pager state machine.

The controller owns the document, the link selection, the viewport and the
optional search overlay. It consumes key tokens one at a time, asks the
opener collaborator to open links, and exposes a ``Frame`` for rendering.
It never touches the terminal or the environment itself.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from .document import Document, Line, Link
from .input import KeyBinding, KeyRegistry, is_printable_key, keys
from .navigation import LinkIndex
from .search import SearchOverlay
from .viewport import Viewport

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 4.0
SEARCH_PANEL_MAX_MATCHES = 10
# Separator row above the matches plus the query row below them.
SEARCH_PANEL_CHROME_ROWS = 2
STATUS_ROWS = 1
NO_OPENER_MESSAGE = "No opener configured: set LINKPAGER_OPENER or pass --opener."


@dataclass(frozen=True)
class PagerConfig:
    """Environment-derived settings, resolved before the controller exists."""

    opener: str | None = None
    open_first: bool = False
    goto_last: bool = False
    ignore_case: bool = False


@dataclass(frozen=True)
class OpenRequest:
    """Ask the opener collaborator to run ``program`` with ``target``."""

    program: str
    target: str


# Returns an error message when the opener could not be started.
OpenerLauncher = Callable[[OpenRequest], str | None]


@dataclass(frozen=True)
class Frame:
    """Everything the renderer needs for one screen."""

    rows: tuple[tuple[int, Line], ...]
    document_rows: int
    search_rows: int
    selected: Link | None
    highlighted: Link | None
    searching: bool = False
    query: str = ""
    match_count: int = 0
    match_cursor: int | None = None
    match_window: tuple[tuple[Link, Line], ...] = ()
    status_message: str = ""
    percent: int = 0
    link_count: int = 0


class PagerController:
    """Normal/searching state machine over one immutable document.

    ``search`` is ``None`` in normal mode and holds the active overlay while
    searching, so a query cannot exist outside search mode.
    """

    def __init__(
        self,
        document: Document,
        config: PagerConfig,
        launch_opener: OpenerLauncher,
        term_rows: int = 24,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.document = document
        self.config = config
        self._launch_opener = launch_opener
        self._clock = clock
        self.term_rows = max(STATUS_ROWS + 1, term_rows)
        self.link_index = LinkIndex(document.link_count)
        self.search: SearchOverlay | None = None
        self.viewport = Viewport(document.line_count, height=self.document_rows())
        self.finished = False
        self.dirty = True
        self.status_message = ""
        self.status_message_until = 0.0

        self._normal_keys = KeyRegistry().bind(
            KeyBinding(("n",), self._next_link),
            KeyBinding(("N",), self._previous_link),
            KeyBinding(("/",), self._begin_search),
            KeyBinding(keys.ENTER_KEYS, self._open_selected),
            KeyBinding(("q", keys.CTRL_C), self._quit),
            KeyBinding((keys.UP,), lambda: self._scroll(-1)),
            KeyBinding((keys.DOWN,), lambda: self._scroll(1)),
            KeyBinding((" ", "f", keys.PAGE_DOWN), self._page_forward),
            KeyBinding(("b", keys.PAGE_UP), self._page_backward),
            KeyBinding((keys.HOME,), lambda: self._scroll(-self.document.line_count)),
            KeyBinding((keys.END,), lambda: self._scroll(self.document.line_count)),
        )
        self._search_keys = KeyRegistry(fallback=self._search_type).bind(
            KeyBinding((keys.BACKSPACE,), self._search_backspace),
            KeyBinding((keys.UP,), self._search_retreat),
            KeyBinding((keys.DOWN,), self._search_advance),
            KeyBinding(keys.ENTER_KEYS, self._commit_search),
            KeyBinding((keys.ESC,), self._cancel_search),
            KeyBinding((keys.CTRL_C,), self._quit),
        )

        if config.open_first and self.link_index.first():
            self._follow_selection()
            self._open_selected()
        if config.goto_last and self.link_index.last():
            self._follow_selection()

    @property
    def mode(self) -> str:
        return "normal" if self.search is None else "searching"

    @property
    def selected_link(self) -> Link | None:
        selected = self.link_index.selected
        return None if selected is None else self.document.links[selected]

    def search_rows(self) -> int:
        """Rows taken by the search panel, zero outside search mode."""
        if self.search is None:
            return 0
        chrome = SEARCH_PANEL_CHROME_ROWS
        rows = min(
            SEARCH_PANEL_MAX_MATCHES + chrome,
            (self.term_rows - STATUS_ROWS) // 2,
            len(self.search.matches) + chrome,
        )
        return max(1, rows)

    def document_rows(self) -> int:
        """Rows left for document lines; zero when the search panel fills the screen."""
        return max(0, self.term_rows - STATUS_ROWS - self.search_rows())

    def resize(self, term_rows: int) -> None:
        """Adopt a new terminal height."""
        term_rows = max(STATUS_ROWS + 1, term_rows)
        if term_rows == self.term_rows:
            return
        self.term_rows = term_rows
        self._relayout()
        self.dirty = True

    def _relayout(self) -> None:
        self.viewport.resize(self.document_rows())

    def _follow_line(self, line: int | None) -> None:
        self._relayout()
        if line is not None:
            self.viewport.ensure_visible(line)

    def _follow_selection(self) -> None:
        selected = self.link_index.selected
        self._follow_line(None if selected is None else self.document.link_line(selected))

    def _follow_candidate(self) -> None:
        candidate = self.search.candidate if self.search is not None else None
        self._follow_line(None if candidate is None else self.document.link_line(candidate))

    def handle_key(self, key: str) -> bool:
        """Process one key token; return ``True`` when the pager should exit."""
        if self.finished:
            return True
        registry = self._normal_keys if self.search is None else self._search_keys
        result = registry.dispatch(key)
        if result is None:
            return False
        self._relayout()
        self.dirty = True
        return bool(result)

    def set_status_message(self, message: str) -> None:
        """Show ``message`` on the status row for a short interval."""
        self.status_message = message
        self.status_message_until = self._clock() + STATUS_MESSAGE_SECONDS
        self.dirty = True

    def clear_expired_status(self, now: float | None = None) -> bool:
        """Drop an expired status message; returns whether one was dropped."""
        if not self.status_message:
            return False
        if now is None:
            now = self._clock()
        if now < self.status_message_until:
            return False
        self.status_message = ""
        self.status_message_until = 0.0
        self.dirty = True
        return True

    def _quit(self) -> bool:
        self.finished = True
        return True

    def _next_link(self) -> bool:
        if self.link_index.next():
            self._follow_selection()
        return False

    def _previous_link(self) -> bool:
        if self.link_index.previous():
            self._follow_selection()
        return False

    def _scroll(self, delta: int) -> bool:
        self.viewport.scroll(delta)
        return False

    def _page_forward(self) -> bool:
        self.viewport.page_forward()
        return False

    def _page_backward(self) -> bool:
        self.viewport.page_backward()
        return False

    def _open_selected(self) -> bool:
        link = self.selected_link
        if link is None:
            return False
        if not self.config.opener:
            logger.warning("cannot open %s: no opener configured", link.target)
            self.set_status_message(NO_OPENER_MESSAGE)
            return False
        request = OpenRequest(program=self.config.opener, target=link.target)
        logger.info("opening %s with %s", request.target, request.program)
        error = self._launch_opener(request)
        if error:
            logger.warning("opener failed: %s", error)
            self.set_status_message(error)
        return False

    def _begin_search(self) -> bool:
        self.search = SearchOverlay(self.document, self.link_index, ignore_case=self.config.ignore_case)
        self._follow_candidate()
        return False

    def _search_type(self, key: str) -> bool | None:
        if self.search is None or not is_printable_key(key):
            return None
        self.search.type_char(key)
        self._follow_candidate()
        return False

    def _search_backspace(self) -> bool:
        assert self.search is not None
        self.search.backspace()
        self._follow_candidate()
        return False

    def _search_advance(self) -> bool:
        assert self.search is not None
        self.search.advance()
        self._follow_candidate()
        return False

    def _search_retreat(self) -> bool:
        assert self.search is not None
        self.search.retreat()
        self._follow_candidate()
        return False

    def _commit_search(self) -> bool:
        assert self.search is not None
        self.search.commit()
        self.search = None
        self._follow_selection()
        return False

    def _cancel_search(self) -> bool:
        assert self.search is not None
        self.search.cancel()
        self.search = None
        self._follow_selection()
        return False

    def _match_window(self, rows: int) -> tuple[tuple[Link, Line], ...]:
        search = self.search
        if search is None or rows <= 0 or not search.matches:
            return ()
        cursor = search.match_cursor or 0
        first = max(0, cursor - (rows - 1))
        window: list[tuple[Link, Line]] = []
        for link_idx in search.matches[first : first + rows]:
            link = self.document.links[link_idx]
            window.append((link, self.document.lines[link.line]))
        return tuple(window)

    def frame(self) -> Frame:
        """Snapshot the current state for the renderer."""
        self._relayout()
        search_rows = self.search_rows()
        document_rows = self.document_rows()
        rows = tuple((idx, self.document.lines[idx]) for idx in self.viewport.visible_range()[:document_rows])
        selected = self.selected_link
        if self.search is None:
            return Frame(
                rows=rows,
                document_rows=document_rows,
                search_rows=0,
                selected=selected,
                highlighted=selected,
                status_message=self.status_message,
                percent=self.viewport.percent(),
                link_count=self.document.link_count,
            )

        candidate = self.search.candidate
        highlighted = None if candidate is None else self.document.links[candidate]
        return Frame(
            rows=rows,
            document_rows=document_rows,
            search_rows=search_rows,
            selected=selected,
            highlighted=highlighted,
            searching=True,
            query=self.search.query,
            match_count=len(self.search.matches),
            match_cursor=self.search.match_cursor,
            match_window=self._match_window(search_rows - SEARCH_PANEL_CHROME_ROWS),
            status_message=self.status_message,
            percent=self.viewport.percent(),
            link_count=self.document.link_count,
        )
