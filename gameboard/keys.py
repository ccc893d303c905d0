"""
Gameboard — gameboard/keys.py
Decoded key events handed to listeners.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyKind(Enum):
    CHAR = "char"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    TAB = "tab"
    DELETE = "delete"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    INSERT = "insert"
    FUNCTION = "function"   # F1..F12, number holds the index
    CTRL = "ctrl"           # Ctrl+<char>
    ALT = "alt"             # Alt+<char>


@dataclass(frozen=True)
class Key:
    kind: KeyKind
    char: Optional[str] = None
    number: Optional[int] = None

    @classmethod
    def of(cls, char: str) -> "Key":
        """A printable character key."""
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")
        return cls(KeyKind.CHAR, char=char)

    @classmethod
    def ctrl(cls, char: str) -> "Key":
        return cls(KeyKind.CTRL, char=char.lower())

    @classmethod
    def alt(cls, char: str) -> "Key":
        return cls(KeyKind.ALT, char=char)

    @classmethod
    def function(cls, number: int) -> "Key":
        return cls(KeyKind.FUNCTION, number=number)

    def is_char(self, char: str) -> bool:
        return self.kind is KeyKind.CHAR and self.char == char

    def __str__(self) -> str:
        if self.kind is KeyKind.CHAR:
            return self.char or ""
        if self.kind is KeyKind.FUNCTION:
            return f"F{self.number}"
        if self.kind in (KeyKind.CTRL, KeyKind.ALT):
            return f"{self.kind.value.capitalize()}+{self.char}"
        return self.kind.value


UP = Key(KeyKind.UP)
DOWN = Key(KeyKind.DOWN)
LEFT = Key(KeyKind.LEFT)
RIGHT = Key(KeyKind.RIGHT)
ENTER = Key(KeyKind.ENTER)
ESCAPE = Key(KeyKind.ESCAPE)
BACKSPACE = Key(KeyKind.BACKSPACE)
TAB = Key(KeyKind.TAB)
DELETE = Key(KeyKind.DELETE)
HOME = Key(KeyKind.HOME)
END = Key(KeyKind.END)
PAGE_UP = Key(KeyKind.PAGE_UP)
PAGE_DOWN = Key(KeyKind.PAGE_DOWN)
INSERT = Key(KeyKind.INSERT)


def as_key(value) -> Key:
    """Accept a Key or a one-character string."""
    if isinstance(value, Key):
        return value
    if isinstance(value, str):
        return Key.of(value)
    raise TypeError(f"Cannot interpret {value!r} as a key")
