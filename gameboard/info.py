"""
Gameboard — gameboard/info.py
Information area: a framed text panel docked to one side of the board.
"""

from __future__ import annotations
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from gameboard import chars
from gameboard.config import InfoDef
from gameboard.errors import ConfigError, LifecycleError
from gameboard.text import fit

Rect = Tuple[int, int, int, int]


class InfoLayout(Enum):
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


class Info:
    """
    `size` is the panel's inner thickness: its width when docked left or
    right, its height when docked above or below. The other dimension
    follows the board's frame.
    """

    def __init__(self, size: int, layout: InfoLayout = InfoLayout.RIGHT, lines: Sequence[str] = ()):
        if size < 1:
            raise ConfigError(f"Info area size must be positive, got {size}")
        self.size = size
        self.layout = InfoLayout(layout)
        self._lines: List[str] = list(lines)
        self._rect: Optional[Rect] = None
        self._dirty = True

    @classmethod
    def from_def(cls, defn: InfoDef) -> "Info":
        return cls(defn.size, InfoLayout(defn.layout), defn.lines)

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def rect(self) -> Optional[Rect]:
        return self._rect

    def place(self, board_rect: Rect) -> Rect:
        """Compute the panel rectangle next to `board_rect` (x, y, w, h)."""
        bx, by, bw, bh = board_rect
        thickness = self.size + 2
        if self.layout is InfoLayout.LEFT:
            rect = (bx - thickness, by, thickness, bh)
        elif self.layout is InfoLayout.RIGHT:
            rect = (bx + bw, by, thickness, bh)
        elif self.layout is InfoLayout.TOP:
            rect = (bx, by - thickness, bw, thickness)
        else:
            rect = (bx, by + bh, bw, thickness)

        x, y, w, h = rect
        if x < 0 or y < 0:
            raise ConfigError(
                f"No room for a {self.layout.value} info area: move the board origin away from the edge"
            )
        if w < 3 or h < 3:
            raise ConfigError("Board is too small to carry an info area on that side")
        self._rect = rect
        self._dirty = True
        return rect

    def update(self, lines: Sequence[str]) -> None:
        lines = list(lines)
        if lines != self._lines:
            self._lines = lines
            self._dirty = True

    def _require_rect(self) -> Rect:
        if self._rect is None:
            raise LifecycleError("Info area has not been placed")
        return self._rect

    def draw_frame(self, sink) -> None:
        x, y, w, h = self._require_rect()
        inner = w - 2
        sink.write(x, y, chars.DOUBLE_TOP_LEFT + chars.DOUBLE_HOR_LINE * inner + chars.DOUBLE_TOP_RIGHT)
        for row in range(1, h - 1):
            sink.write(x, y + row, chars.DOUBLE_VERT_LINE)
            sink.write(x + w - 1, y + row, chars.DOUBLE_VERT_LINE)
        sink.write(x, y + h - 1, chars.DOUBLE_BOTTOM_LEFT + chars.DOUBLE_HOR_LINE * inner + chars.DOUBLE_BOTTOM_RIGHT)

    def draw_text(self, sink) -> None:
        x, y, w, h = self._require_rect()
        for row in range(h - 2):
            line = self._lines[row] if row < len(self._lines) else ""
            sink.write(x + 1, y + 1 + row, fit(line, w - 2))
        self._dirty = False

    def render_full(self, sink) -> None:
        self.draw_frame(sink)
        self.draw_text(sink)

    def flush(self, sink) -> bool:
        if not self._dirty:
            return False
        self.draw_text(sink)
        return True
