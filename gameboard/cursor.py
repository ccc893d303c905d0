"""
Gameboard — gameboard/cursor.py
Simple board cursor.

Handles the four base movements and marks the current cell with a
background color. Games that need richer selection logic can skip the
cursor entirely and track the selection in their listener.
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, Optional, Tuple

from gameboard import keys
from gameboard.cell import Color
from gameboard.config import CursorDef
from gameboard.errors import LifecycleError
from gameboard.keys import Key


class Direction(Enum):
    LEFT = (0, -1)
    RIGHT = (0, 1)
    UP = (-1, 0)
    DOWN = (1, 0)


DEFAULT_KEY_MAP: Dict[Key, Direction] = {
    keys.LEFT: Direction.LEFT,
    keys.RIGHT: Direction.RIGHT,
    keys.UP: Direction.UP,
    keys.DOWN: Direction.DOWN,
    Key.of("a"): Direction.LEFT,
    Key.of("d"): Direction.RIGHT,
    Key.of("w"): Direction.UP,
    Key.of("s"): Direction.DOWN,
}


class Cursor:
    def __init__(
        self,
        position: Tuple[int, int] = (0, 0),
        color: Color = (0, 0, 200),
        wrap_around: bool = True,
        key_map: Optional[Dict[Key, Direction]] = None,
    ):
        self._position = tuple(position)
        self.color = color
        self.wrap_around = wrap_around
        self.key_map = DEFAULT_KEY_MAP if key_map is None else key_map
        self._board = None

    @classmethod
    def from_def(cls, defn: CursorDef) -> "Cursor":
        return cls((defn.row, defn.col), defn.color, defn.wrap_around)

    @property
    def position(self) -> Tuple[int, int]:
        return self._position

    def attach(self, board) -> None:
        """Bind to a board and highlight the start cell. Raises OutOfBounds for a bad start."""
        board.set_highlight(self._position, self.color)
        self._board = board

    def direction_for(self, key: Key) -> Optional[Direction]:
        return self.key_map.get(key)

    def move_to(self, position: Tuple[int, int]) -> None:
        if self._board is None:
            raise LifecycleError("Cursor is not attached to a board")
        self._board.set_highlight(position, self.color)
        self._position = tuple(position)

    def move(self, direction: Direction) -> Optional[Tuple[int, int]]:
        """
        Step one cell in `direction`.

        Returns the new position, or None when the cursor sits at an edge
        and wrap-around is off.
        """
        if self._board is None:
            raise LifecycleError("Cursor is not attached to a board")
        rows, columns = self._board.rows, self._board.columns
        dr, dc = direction.value
        row, col = self._position[0] + dr, self._position[1] + dc

        if not (0 <= row < rows and 0 <= col < columns):
            if not self.wrap_around:
                return None
            row %= rows
            col %= columns

        self.move_to((row, col))
        return self._position
