"""
Gameboard — gameboard/cell.py
Board cell: displayable content plus redraw bookkeeping.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple

from gameboard.text import BLANK

Color = Tuple[int, int, int]
Style = Tuple[str, Optional[Color], Optional[Color]]


@dataclass
class Cell:
    """
    One addressable board position.

    The cell remembers what it looked like at the last flush. It is dirty
    while its current value differs from that snapshot, so writing a value
    and then writing the old one back leaves nothing to redraw.
    """
    content: str = BLANK
    fg: Optional[Color] = None
    bg: Optional[Color] = None

    _flushed: Optional[Style] = field(default=None, init=False, repr=False, compare=False)
    _forced: bool = field(default=False, init=False, repr=False, compare=False)

    @property
    def style(self) -> Style:
        return (self.content, self.fg, self.bg)

    @property
    def dirty(self) -> bool:
        return self._forced or self._flushed != self.style

    def assign(self, content: str, fg: Optional[Color] = None, bg: Optional[Color] = None) -> bool:
        """Replace content and colors. Returns True if the cell is now dirty."""
        self.content = content
        self.fg = fg
        self.bg = bg
        return self.dirty

    def touch(self) -> None:
        """Force a redraw even though the value did not change."""
        self._forced = True

    def mark_clean(self) -> None:
        self._flushed = self.style
        self._forced = False
