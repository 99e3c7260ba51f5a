"""Public package surface for linkpager.

Exports ``main`` for programmatic CLI invocation plus the core pager types.
The terminal runtime lives in ``linkpager.runtime``.
"""

from __future__ import annotations

from .controller import Frame, OpenRequest, PagerConfig, PagerController
from .document import Document, Line, Link, Segment, scan_document


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "Document",
    "Frame",
    "Line",
    "Link",
    "OpenRequest",
    "PagerConfig",
    "PagerController",
    "Segment",
    "main",
    "scan_document",
]
