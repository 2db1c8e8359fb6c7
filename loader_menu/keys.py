"""Keycodes understood by the menu engine.

Keys travel through the engine as one-character strings. The control
keys below are the only distinguished values; everything else is a
printable character matched against alias tables.
"""

from __future__ import annotations

from typing import Optional

KEY_BACKSPACE = "\x08"
KEY_ENTER = "\r"
KEY_DELETE = "\x7f"
KEY_ESCAPE = "\x1b"

# Terminals disagree on what Enter produces.
_ALIASED_KEYS = {
    "\n": KEY_ENTER,
}

KEY_NAMES = {
    KEY_BACKSPACE: "Backspace",
    KEY_ENTER: "Enter",
    KEY_DELETE: "Delete",
    KEY_ESCAPE: "Esc",
}


def normalize_key(key: Optional[str]) -> Optional[str]:
    if key is None or key == "":
        return None
    return _ALIASED_KEYS.get(key, key)


def is_back_key(key: Optional[str]) -> bool:
    return key in (KEY_BACKSPACE, KEY_DELETE)


def describe_key(key: Optional[str]) -> str:
    """Readable name for log messages."""
    if key is None:
        return "<none>"
    if key in KEY_NAMES:
        return KEY_NAMES[key]
    if key.isprintable():
        return repr(key)
    return f"0x{ord(key[0]):02x}"
