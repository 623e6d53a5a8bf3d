"""Keyboard input helpers.

Translates raw `readchar` key strings into KeyEvent values for the picker
session. Letters are never navigation keys here: every printable character
goes to the search query.
"""

from __future__ import annotations

import readchar

from .types import Key, KeyEvent

SHIFT_TAB = "\x1b[Z"
ALT_ENTER = ("\x1b\r", "\x1b\n")

_NAVIGATION = {
    readchar.key.UP: Key.UP,
    readchar.key.DOWN: Key.DOWN,
    readchar.key.LEFT: Key.LEFT,
    readchar.key.RIGHT: Key.RIGHT,
    readchar.key.PAGE_UP: Key.PAGE_UP,
    readchar.key.PAGE_DOWN: Key.PAGE_DOWN,
    "\x1b[5~": Key.PAGE_UP,
    "\x1b[6~": Key.PAGE_DOWN,
    readchar.key.TAB: Key.TAB,
    SHIFT_TAB: Key.SHIFT_TAB,
}


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_modified_enter(key: str) -> bool:
    """Check if key is Alt+Enter (the terminal stand-in for Ctrl+Enter)."""
    return key in ALT_ENTER


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations)."""
    return key in (readchar.key.ESC, "\x1b", "\x1b\x1b")


def is_backspace(key: str) -> bool:
    """Check if key is backspace (handles terminal variations)."""
    return key in (readchar.key.BACKSPACE, "\x7f", "\b")


def is_space(key: str) -> bool:
    return key == " "


def is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def decode_key(key: str) -> KeyEvent | None:
    """Map a raw readchar key to a KeyEvent, or None if it means nothing here."""
    if key in _NAVIGATION:
        return KeyEvent(_NAVIGATION[key])
    if is_modified_enter(key):
        return KeyEvent(Key.ENTER, ctrl=True)
    if is_enter(key):
        return KeyEvent(Key.ENTER)
    if is_escape(key):
        return KeyEvent(Key.ESCAPE)
    if is_backspace(key):
        return KeyEvent(Key.BACKSPACE)
    if is_space(key):
        return KeyEvent(Key.SPACE, char=" ")
    if is_printable(key):
        return KeyEvent.char_key(key)
    return None
