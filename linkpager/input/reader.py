"""Low-level terminal input decoding.

Reads raw bytes from the keyboard tty and translates them into normalized key
tokens. Handles ESC-sequence timing and multi-byte UTF-8 characters.
"""

from __future__ import annotations

import os
import select

from . import keys

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": keys.CTRL_C,
    b"\x08": keys.BACKSPACE,
    b"\x7f": keys.BACKSPACE,
    b"\t": keys.TAB,
    b"\r": keys.ENTER_CR,
    b"\n": keys.ENTER_LF,
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": keys.UP,
    b"B": keys.DOWN,
    b"C": keys.RIGHT,
    b"D": keys.LEFT,
    b"H": keys.HOME,
    b"F": keys.END,
}

_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": keys.HOME,
    b"4": keys.END,
    b"5": keys.PAGE_UP,
    b"6": keys.PAGE_DOWN,
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_sequence_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8_char(fd: int, lead: bytes) -> str:
    data = lead
    for _ in range(_utf8_sequence_length(lead[0]) - 1):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return data.decode("utf-8", errors="replace")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key press from ``fd`` and return its token.

    Returns ``""`` when ``timeout_ms`` elapses without input and ``EOF`` when
    the tty is closed. Unrecognized escape sequences decode to ``ESC``.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return keys.EOF

    control = _CONTROL_KEYS.get(ch)
    if control is not None:
        return control

    if ch != b"\x1b":
        return _read_utf8_char(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return keys.ESC
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return keys.ESC
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return keys.ESC
    final = _CSI_FINAL_KEYS.get(seq)
    if final is not None:
        return final
    if seq in _CSI_TILDE_KEYS:
        terminator = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if terminator == b"~":
            return _CSI_TILDE_KEYS[seq]
    return keys.ESC
