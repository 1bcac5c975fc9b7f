"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class Key(Enum):
    """Abstract key events understood by the editor."""
    CHAR = "char"
    ENTER = "enter"
    BACKSPACE = "backspace"
    DELETE = "delete"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    SAVE = "save"
    QUIT = "quit"
    ESCAPE = "escape"
    NONE = "none"


@dataclass
class KeyEvent:
    """A decoded keyboard event."""
    key: Key
    value: bytes = b""  # Bytes to insert, for CHAR events
    raw: str = ""  # The token the event was decoded from


# curtsies key names (lowercased, without angle brackets)
_NAMED_KEYS = {
    'up': Key.UP,
    'down': Key.DOWN,
    'left': Key.LEFT,
    'right': Key.RIGHT,
    'pageup': Key.PAGE_UP,
    'page_up': Key.PAGE_UP,
    'pagedown': Key.PAGE_DOWN,
    'page_down': Key.PAGE_DOWN,
    'home': Key.HOME,
    'end': Key.END,
    'delete': Key.DELETE,
    'backspace': Key.BACKSPACE,
    'enter': Key.ENTER,
    'esc': Key.ESCAPE,
    'escape': Key.ESCAPE,
}

_CTRL_KEYS = {
    'q': Key.QUIT,
    's': Key.SAVE,
    'h': Key.BACKSPACE,
    'j': Key.ENTER,
    'm': Key.ENTER,
}


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get the next key event, or None if nothing arrived in time."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token or a raw character into a KeyEvent."""
        key_str = str(key)

        # curtsies-style names like '<UP>', '<Ctrl-q>', '<PAGEDOWN>'
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            name = key_str[1:-1]
            if name.lower().startswith('ctrl-') and len(name) == 6:
                return self._ctrl_event(name[-1].lower(), key_str)
            lower = name.lower()
            if lower in ('space', 'spacebar', 'spc'):
                return KeyEvent(Key.CHAR, b' ', key_str)
            if lower == 'tab':
                return KeyEvent(Key.CHAR, b'\t', key_str)
            if lower in _NAMED_KEYS:
                return KeyEvent(_NAMED_KEYS[lower], raw=key_str)
            # Modified or unknown keys do nothing
            return KeyEvent(Key.NONE, raw=key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if o == 0x1b:
                return KeyEvent(Key.ESCAPE, raw=key_str)
            if o == 0x7f:
                return KeyEvent(Key.BACKSPACE, raw=key_str)
            if o == 0x09:
                return KeyEvent(Key.CHAR, b'\t', key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                return self._ctrl_event(chr(ord('a') + o - 1), key_str)
            if o < 32:
                return KeyEvent(Key.NONE, raw=key_str)

        if not key_str:
            return KeyEvent(Key.NONE, raw=key_str)
        return KeyEvent(Key.CHAR, key_str.encode('utf-8'), key_str)

    @staticmethod
    def _ctrl_event(letter: str, raw: str) -> KeyEvent:
        return KeyEvent(_CTRL_KEYS.get(letter, Key.NONE), raw=raw)
