"""Link-annotated document model and the scanner that builds it.

This package contains non-UI primitives only:
- segment/line/link/document datatypes
- the OSC 8 hyperlink scanner producing a ``Document`` from raw input
"""

from __future__ import annotations

from .model import Document, Line, Link, Position, Segment
from .scanner import HyperlinkScanner, scan_document

__all__ = [
    "Document",
    "HyperlinkScanner",
    "Line",
    "Link",
    "Position",
    "Segment",
    "scan_document",
]
