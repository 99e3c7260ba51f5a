"""Input-layer public API for key decoding and dispatch.

Exports are split between low-level terminal decoding (`read_key`) and the
token constants plus registry the controller dispatches with.
"""

from . import keys
from .keys import KeyBinding, KeyRegistry, is_printable_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "keys",
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyBinding",
    "KeyRegistry",
    "is_printable_key",
]
