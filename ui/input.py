"""
Gameboard — ui/input.py
Key sources: turn backend input into gameboard.keys.Key values.

Every source exposes read_key(), which blocks until a key is available
and returns None once the input is exhausted.
"""

from __future__ import annotations
from collections import deque
from typing import Deque, Dict, Iterable, Iterator, Optional, TextIO, Union

import tcod

from gameboard import keys
from gameboard.keys import Key, as_key


class IterableKeySource:
    """Replays a fixed sequence of keys. Useful for scripted play and tests."""

    def __init__(self, items: Iterable[Union[Key, str]]):
        self._items: Iterator[Union[Key, str]] = iter(items)
        self.reads = 0

    def read_key(self) -> Optional[Key]:
        self.reads += 1
        item = next(self._items, None)
        return None if item is None else as_key(item)


# ============================================================
# ANSI STREAMS
# ============================================================

_CSI_FINAL: Dict[str, Key] = {
    "A": keys.UP,
    "B": keys.DOWN,
    "C": keys.RIGHT,
    "D": keys.LEFT,
    "H": keys.HOME,
    "F": keys.END,
    "P": Key.function(1),
    "Q": Key.function(2),
    "R": Key.function(3),
    "S": Key.function(4),
}

_CSI_TILDE: Dict[str, Key] = {
    "1": keys.HOME,
    "2": keys.INSERT,
    "3": keys.DELETE,
    "4": keys.END,
    "5": keys.PAGE_UP,
    "6": keys.PAGE_DOWN,
    "15": Key.function(5),
    "17": Key.function(6),
    "18": Key.function(7),
    "19": Key.function(8),
    "20": Key.function(9),
    "21": Key.function(10),
    "23": Key.function(11),
    "24": Key.function(12),
}


class StreamKeySource:
    """
    Decodes keys from a text stream such as stdin in raw mode.

    Reads block, so a lone ESC is only recognised as Escape when it is
    followed by end of input or by something that cannot start an escape
    sequence; ESC followed by a printable character reads as Alt+char.
    """

    def __init__(self, stream: TextIO):
        self.stream = stream
        self._pending: Deque[str] = deque()

    def _getch(self) -> str:
        if self._pending:
            return self._pending.popleft()
        return self.stream.read(1)

    def read_key(self) -> Optional[Key]:
        ch = self._getch()
        if ch == "":
            return None
        if ch == "\x1b":
            return self._read_escape()
        return self._plain(ch)

    @staticmethod
    def _plain(ch: str) -> Key:
        if ch in ("\r", "\n"):
            return keys.ENTER
        if ch == "\t":
            return keys.TAB
        if ch in ("\x7f", "\x08"):
            return keys.BACKSPACE
        if "\x01" <= ch <= "\x1a":
            return Key.ctrl(chr(ord(ch) + 0x60))
        return Key.of(ch)

    def _read_escape(self) -> Key:
        ch = self._getch()
        if ch == "":
            return keys.ESCAPE
        if ch == "\x1b":
            self._pending.append(ch)
            return keys.ESCAPE
        if ch == "O":
            final = self._getch()
            return _CSI_FINAL.get(final, keys.ESCAPE)
        if ch == "[":
            params = ""
            while True:
                c = self._getch()
                if c == "":
                    return keys.ESCAPE
                if c.isdigit() or c == ";":
                    params += c
                    continue
                if c == "~":
                    return _CSI_TILDE.get(params.split(";")[0], keys.ESCAPE)
                return _CSI_FINAL.get(c, keys.ESCAPE)
        if ch.isprintable():
            return Key.alt(ch)
        self._pending.append(ch)
        return keys.ESCAPE


# ============================================================
# TCOD EVENTS
# ============================================================

_SPECIAL_SYMS: Dict[tcod.event.KeySym, Key] = {
    tcod.event.KeySym.UP: keys.UP,
    tcod.event.KeySym.DOWN: keys.DOWN,
    tcod.event.KeySym.LEFT: keys.LEFT,
    tcod.event.KeySym.RIGHT: keys.RIGHT,
    tcod.event.KeySym.RETURN: keys.ENTER,
    tcod.event.KeySym.KP_ENTER: keys.ENTER,
    tcod.event.KeySym.ESCAPE: keys.ESCAPE,
    tcod.event.KeySym.BACKSPACE: keys.BACKSPACE,
    tcod.event.KeySym.TAB: keys.TAB,
    tcod.event.KeySym.DELETE: keys.DELETE,
    tcod.event.KeySym.HOME: keys.HOME,
    tcod.event.KeySym.END: keys.END,
    tcod.event.KeySym.PAGEUP: keys.PAGE_UP,
    tcod.event.KeySym.PAGEDOWN: keys.PAGE_DOWN,
    tcod.event.KeySym.INSERT: keys.INSERT,
}

_FUNCTION_SYMS: Dict[tcod.event.KeySym, int] = {
    getattr(tcod.event.KeySym, f"F{n}"): n for n in range(1, 13)
}


def key_from_event(event: tcod.event.Event) -> Optional[Key]:
    """
    Map one tcod event to a Key, or None if it carries no key.

    Printable characters arrive as TextInput events (with shift and keyboard
    layout applied); KeyDown only contributes keys that have no text.
    """
    if isinstance(event, tcod.event.TextInput):
        return Key.of(event.text[0]) if event.text else None

    if not isinstance(event, tcod.event.KeyDown):
        return None

    if event.sym in _SPECIAL_SYMS:
        return _SPECIAL_SYMS[event.sym]
    if event.sym in _FUNCTION_SYMS:
        return Key.function(_FUNCTION_SYMS[event.sym])

    code = int(event.sym)
    if 0x20 < code < 0x7F:
        if event.mod & tcod.event.Modifier.CTRL:
            return Key.ctrl(chr(code))
        if event.mod & tcod.event.Modifier.ALT:
            return Key.alt(chr(code))
    return None


class TcodKeySource:
    """Waits on the tcod event queue. A window close ends the input."""

    def __init__(self, context: Optional[tcod.context.Context] = None):
        self.context = context
        self._queue: Deque[Key] = deque()
        self._closed = False

    def feed(self, event: tcod.event.Event) -> None:
        """Queue one event's key. A Quit event closes the source."""
        if isinstance(event, tcod.event.Quit):
            self._closed = True
            return
        key = key_from_event(event)
        if key is not None:
            self._queue.append(key)

    def read_key(self) -> Optional[Key]:
        while not self._queue:
            if self._closed:
                return None
            for event in tcod.event.wait():
                if self.context is not None:
                    self.context.convert_event(event)
                self.feed(event)
                if self._closed:
                    break
        return self._queue.popleft()
