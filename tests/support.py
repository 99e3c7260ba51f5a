"""Shared builders for pager tests."""

from __future__ import annotations

from linkpager.controller import OpenRequest, PagerConfig, PagerController
from linkpager.document import Document, scan_document


def osc8(target: str, text: str, terminator: str = "\x1b\\") -> str:
    """Wrap ``text`` in an OSC 8 hyperlink to ``target``."""
    return f"\x1b]8;;{target}{terminator}{text}\x1b]8;;{terminator}"


def numbered_links(count: int, lines_between: int = 0) -> str:
    """Input with ``count`` links, one per line, plus optional filler lines."""
    out: list[str] = []
    for idx in range(count):
        out.append(f"row {idx} " + osc8(f"file://host/src/{idx}.py#{idx + 1}", f"LINK{idx}") + "\n")
        out.extend(f"filler {idx}.{n}\n" for n in range(lines_between))
    return "".join(out)


class RecordingOpener:
    """Opener collaborator that records requests instead of spawning."""

    def __init__(self, error: str | None = None) -> None:
        self.requests: list[OpenRequest] = []
        self.error = error

    def __call__(self, request: OpenRequest) -> str | None:
        self.requests.append(request)
        return self.error


def make_controller(
    text: str,
    config: PagerConfig | None = None,
    opener: RecordingOpener | None = None,
    term_rows: int = 24,
    clock=None,
) -> tuple[PagerController, RecordingOpener, Document]:
    document = scan_document(text)
    opener = RecordingOpener() if opener is None else opener
    kwargs = {} if clock is None else {"clock": clock}
    controller = PagerController(
        document,
        PagerConfig(opener="/usr/bin/opener") if config is None else config,
        opener,
        term_rows=term_rows,
        **kwargs,
    )
    return controller, opener, document
