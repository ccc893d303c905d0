"""
Gameboard — ui/renderer.py
Output sinks: positioned text runs onto a tcod console or an ANSI terminal.
===========================================================================
Version:     0.2
Stack:       Python 3.11+ | tcod
Status:      Backend adapters for gameboard.game.Game.

Both renderers implement the OutputSink protocol:

    write(x, y, text, fg=None, bg=None)
    flush()

Colors of None fall back to the renderer defaults, so a cell losing its
highlight gets its background reset instead of keeping the old one.
"""

from __future__ import annotations
from typing import List, Optional, TextIO, Tuple

import tcod

from gameboard.text import graphemes, str_width

Color = Tuple[int, int, int]

DEFAULT_FG: Color = (255, 255, 255)
DEFAULT_BG: Color = (0, 0, 0)


class ConsoleRenderer:
    """
    Manages the tcod root console.

    A console tile holds one code point, so wide glyphs are followed by a
    blank tile and combining marks are dropped. That keeps the tile count of
    every run equal to its display width.
    """
    def __init__(self, width: int, height: int, title: str = "Gameboard",
                 fg: Color = DEFAULT_FG, bg: Color = DEFAULT_BG):
        self.width = width
        self.height = height
        self.title = title
        self.default_fg = fg
        self.default_bg = bg
        self.root_console = tcod.console.Console(width, height)
        self.context: Optional[tcod.context.Context] = None
        self.presented = 0

    def clear(self) -> None:
        """Clear the console to the default colors."""
        self.root_console.clear(fg=self.default_fg, bg=self.default_bg)

    @staticmethod
    def tiles(text: str) -> str:
        out: List[str] = []
        for cluster in graphemes(text):
            w = str_width(cluster)
            if w == 0:
                continue
            out.append(cluster[0])
            if w == 2:
                out.append(" ")
        return "".join(out)

    def write(self, x: int, y: int, text: str,
              fg: Optional[Color] = None, bg: Optional[Color] = None) -> None:
        if not (0 <= y < self.height) or x >= self.width:
            return
        self.root_console.print(
            x,
            y,
            self.tiles(text),
            fg=fg if fg is not None else self.default_fg,
            bg=bg if bg is not None else self.default_bg,
        )

    def flush(self) -> None:
        """Present the console if a context is attached."""
        if self.context is not None:
            self.present(self.context)

    def present(self, context: tcod.context.Context) -> None:
        """Present the current console to the screen."""
        context.present(self.root_console)
        self.presented += 1

    def text_at(self, x: int, y: int, length: int) -> str:
        """Read back `length` tiles starting at (x, y)."""
        return "".join(chr(c) for c in self.root_console.ch[y, x:x + length])


CSI = "\x1b["


def _sgr(fg: Optional[Color], bg: Optional[Color]) -> str:
    parts = []
    if fg is not None:
        parts.append("38;2;%d;%d;%d" % fg)
    if bg is not None:
        parts.append("48;2;%d;%d;%d" % bg)
    return f"{CSI}{';'.join(parts)}m" if parts else ""


class AnsiRenderer:
    """
    Writes escape sequences to a text stream (normally stdout in raw mode).
    Positions are zero-based here and converted to the terminal's 1-based
    coordinates on output.
    """
    def __init__(self, stream: TextIO, alternate_screen: bool = False):
        self.stream = stream
        self.alternate_screen = alternate_screen
        self._opened = False

    def open(self) -> "AnsiRenderer":
        if self.alternate_screen:
            self.stream.write(f"{CSI}?1049h")
        self.stream.write(f"{CSI}?25l{CSI}2J")
        self.stream.flush()
        self._opened = True
        return self

    def close(self) -> None:
        if not self._opened:
            return
        self.stream.write(f"{CSI}0m{CSI}?25h")
        if self.alternate_screen:
            self.stream.write(f"{CSI}?1049l")
        self.stream.flush()
        self._opened = False

    def __enter__(self) -> "AnsiRenderer":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def write(self, x: int, y: int, text: str,
              fg: Optional[Color] = None, bg: Optional[Color] = None) -> None:
        style = _sgr(fg, bg)
        reset = f"{CSI}0m" if style else ""
        self.stream.write(f"{CSI}{y + 1};{x + 1}H{style}{text}{reset}")

    def flush(self) -> None:
        self.stream.flush()
