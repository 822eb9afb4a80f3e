"""Input-layer public API for key decoding and dispatch.

``read_key`` turns raw tty bytes into key events; ``KeyMap`` maps those
events onto session actions.
"""

from .keymap import KeyMap
from .reader import ESCAPE, READ_TIMEOUT_MS, Key, KeyEvent, ctrl_key, read_byte, read_key

__all__ = [
    "ESCAPE",
    "READ_TIMEOUT_MS",
    "Key",
    "KeyEvent",
    "KeyMap",
    "ctrl_key",
    "read_byte",
    "read_key",
]
