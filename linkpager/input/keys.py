"""Key tokens and the key-combo registry used for dispatch.

Tokens are plain strings: printable characters stand for themselves and named
keys use the upper-case constants below.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
HOME = "HOME"
END = "END"
PAGE_UP = "PAGE_UP"
PAGE_DOWN = "PAGE_DOWN"
ENTER_CR = "ENTER_CR"
ENTER_LF = "ENTER_LF"
ESC = "ESC"
TAB = "TAB"
BACKSPACE = "BACKSPACE"
CTRL_C = "CTRL_C"
# The keyboard tty reached end of file.
EOF = "EOF"

ENTER_KEYS: tuple[str, ...] = (ENTER_CR, ENTER_LF)

KeyHandler = Callable[[], bool | None]


def is_printable_key(key: str) -> bool:
    """Return whether ``key`` is a single printable character token."""
    return len(key) == 1 and key.isprintable()


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single action callback."""

    keys: tuple[str, ...]
    handler: KeyHandler


class KeyRegistry:
    """Small key-dispatch table for one pager mode.

    An optional ``fallback`` receives any key without an explicit binding;
    printable-character input in search mode is routed that way.
    """

    def __init__(self, fallback: Callable[[str], bool | None] | None = None) -> None:
        self._fallback = fallback
        self._handlers: dict[str, KeyHandler] = {}

    def bind(self, *bindings: KeyBinding) -> KeyRegistry:
        """Register bindings, overwriting earlier handlers for the same keys."""
        for binding in bindings:
            for key in binding.keys:
                self._handlers[key] = binding.handler
        return self

    def bound_keys(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def dispatch(self, key: str) -> bool | None:
        """Invoke the handler for ``key``; ``None`` means the key was ignored."""
        handler = self._handlers.get(key)
        if handler is not None:
            return handler()
        if self._fallback is not None:
            return self._fallback(key)
        return None
