"""
Gameboard — gameboard/board.py
Board: cell grid, terminal geometry and redraw planning.
========================================================
Version:     0.2
Stack:       Python 3.11+ | numpy
Status:      Core rendering model.

Geometry
--------
Cell (r, c) starts at

    x = origin.x + c * (cell_width + b)
    y = origin.y + r * (cell_height + b)

where b is 1 with borders and 0 without. With borders, single-line
separators fill the gaps between cells and a double-line frame surrounds
the grid one column/row outside the cell area.

Redraw planning
---------------
Mutations go through set_cell() only. Each changed coordinate is kept in a
set, so several writes to the same cell in one input pass cost one redraw.
take_dirty() drains that set. Borders are never part of it: they are drawn
by render_full() alone.
"""

from __future__ import annotations
from typing import List, NamedTuple, Optional, Protocol, Sequence, Set, Tuple, Union

import numpy as np

from gameboard import chars
from gameboard.cell import Cell, Color
from gameboard.config import BoardDef, validate_board
from gameboard.errors import ConfigError, OutOfBounds
from gameboard.text import BLANK, graphemes, layout_cell

Coord = Tuple[int, int]


class OutputSink(Protocol):
    """Anything that can place a run of text at a terminal position."""

    def write(self, x: int, y: int, text: str,
              fg: Optional[Color] = None, bg: Optional[Color] = None) -> None: ...

    def flush(self) -> None: ...


class CellUpdate(NamedTuple):
    row: int
    col: int
    content: str
    position: Tuple[int, int]


class Board:
    """
    Grid of cells with fixed geometry.

    A new board owes a full repaint: the first flush() draws borders and
    every cell. After that, take_dirty() reports only cells whose content
    changed since the previous drain.
    """

    def __init__(
        self,
        rows: int,
        columns: int,
        cell_width: int = 1,
        cell_height: int = 1,
        border: bool = False,
        default_content: Optional[str] = None,
        origin: Optional[Tuple[int, int]] = None,
    ):
        geometry = validate_board(
            rows=rows,
            columns=columns,
            cell_width=cell_width,
            cell_height=cell_height,
            border=border,
            default_content=default_content,
            origin=origin,
        )
        self._rows = geometry.rows
        self._columns = geometry.columns
        self._cell_width = geometry.cell_width
        self._cell_height = geometry.cell_height
        self._border = geometry.border
        self._origin = geometry.resolved_origin
        self.default_content = BLANK if geometry.default_content is None else geometry.default_content

        self._grid: List[List[Cell]] = [
            [Cell(self.default_content) for _ in range(self._columns)]
            for _ in range(self._rows)
        ]
        for row in self._grid:
            for cell in row:
                cell.mark_clean()
        self._dirty: Set[Coord] = set()
        self._full_redraw = True
        self._highlight: Optional[Coord] = None
        self._highlight_bg: Optional[Color] = None

    @classmethod
    def from_def(cls, defn: BoardDef) -> "Board":
        return cls(
            defn.rows,
            defn.columns,
            defn.cell_width,
            defn.cell_height,
            defn.border,
            defn.default_content,
            defn.origin,
        )

    # ------------------------------------------------------------------
    # Geometry (read-only after construction)
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def cell_width(self) -> int:
        return self._cell_width

    @property
    def cell_height(self) -> int:
        return self._cell_height

    @property
    def border(self) -> bool:
        return self._border

    @property
    def origin(self) -> Tuple[int, int]:
        return self._origin

    @property
    def border_width(self) -> int:
        return 1 if self._border else 0

    @property
    def extent(self) -> Tuple[int, int]:
        """Width and height of the cell area in terminal columns/rows."""
        b = self.border_width
        w = self._columns * self._cell_width + (self._columns - 1) * b
        h = self._rows * self._cell_height + (self._rows - 1) * b
        return (w, h)

    @property
    def frame_rect(self) -> Tuple[int, int, int, int]:
        """(x, y, width, height) of everything the board draws, frame included."""
        w, h = self.extent
        b = self.border_width
        return (self._origin[0] - b, self._origin[1] - b, w + 2 * b, h + 2 * b)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._rows and 0 <= col < self._columns

    def _check(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col, self._rows, self._columns)

    def terminal_position(self, row: int, col: int) -> Tuple[int, int]:
        self._check(row, col)
        b = self.border_width
        x = self._origin[0] + col * (self._cell_width + b)
        y = self._origin[1] + row * (self._cell_height + b)
        return (x, y)

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def get_cell(self, row: int, col: int) -> str:
        self._check(row, col)
        return self._grid[row][col].content

    def cell_at(self, row: int, col: int) -> Cell:
        """The Cell object itself. Mutate it through set_cell() only."""
        self._check(row, col)
        return self._grid[row][col]

    def set_cell(self, row: int, col: int, content: str,
                 fg: Optional[Color] = None, bg: Optional[Color] = None) -> None:
        """
        Replace a cell's content and colors. fg and bg describe the whole
        style: leaving them out resets the cell to the terminal default colors.
        """
        self._check(row, col)
        if not isinstance(content, str):
            raise TypeError(f"Cell content must be str, not {type(content).__name__}")
        if self._grid[row][col].assign(content, fg, bg):
            self._dirty.add((row, col))
        else:
            self._dirty.discard((row, col))

    def fill(self, cells: Union[str, Sequence[str]]) -> None:
        """
        Set every cell from a row-major sequence of contents.

        A plain string is split into glyphs, one per cell, which is handy for
        boards of 1x1 cells.
        """
        if isinstance(cells, str):
            cells = graphemes(cells)
        if len(cells) != self._rows * self._columns:
            raise ConfigError(
                f"Expected {self._rows * self._columns} cells, got {len(cells)}"
            )
        for i, content in enumerate(cells):
            self.set_cell(i // self._columns, i % self._columns, content)

    def to_array(self) -> np.ndarray:
        """Snapshot of the cell contents as a (rows, columns) object array."""
        arr = np.empty((self._rows, self._columns), dtype=object)
        for r, row in enumerate(self._grid):
            for c, cell in enumerate(row):
                arr[r, c] = cell.content
        return arr

    # ------------------------------------------------------------------
    # Highlight (used by the cursor)
    # ------------------------------------------------------------------

    @property
    def highlight(self) -> Optional[Coord]:
        return self._highlight

    def set_highlight(self, position: Coord, bg: Color) -> None:
        row, col = position
        self._check(row, col)
        self.clear_highlight()
        self._highlight = (row, col)
        self._highlight_bg = bg
        self._touch(row, col)

    def clear_highlight(self) -> None:
        if self._highlight is not None:
            self._touch(*self._highlight)
        self._highlight = None
        self._highlight_bg = None

    def _touch(self, row: int, col: int) -> None:
        self._grid[row][col].touch()
        self._dirty.add((row, col))

    # ------------------------------------------------------------------
    # Redraw
    # ------------------------------------------------------------------

    @property
    def has_updates(self) -> bool:
        return self._full_redraw or bool(self._dirty)

    @property
    def needs_full_redraw(self) -> bool:
        return self._full_redraw

    def invalidate(self) -> None:
        """Schedule a full repaint, e.g. after something was drawn over the board."""
        self._full_redraw = True

    def take_dirty(self) -> List[CellUpdate]:
        """Drain the dirty set in row-major order."""
        pending, self._dirty = sorted(self._dirty), set()
        updates = []
        for row, col in pending:
            cell = self._grid[row][col]
            cell.mark_clean()
            updates.append(CellUpdate(row, col, cell.content, self.terminal_position(row, col)))
        return updates

    def draw_cell(self, sink: OutputSink, row: int, col: int) -> None:
        cell = self.cell_at(row, col)
        x, y = self.terminal_position(row, col)
        bg = self._highlight_bg if self._highlight == (row, col) else cell.bg
        for i, line in enumerate(layout_cell(cell.content, self._cell_width, self._cell_height)):
            sink.write(x, y + i, line, cell.fg, bg)

    def flush(self, sink: OutputSink) -> int:
        """Draw every dirty cell (or everything, if a full repaint is owed). Returns how many cells were drawn."""
        if self._full_redraw:
            self.render_full(sink)
            return self._rows * self._columns
        updates = self.take_dirty()
        for update in updates:
            self.draw_cell(sink, update.row, update.col)
        return len(updates)

    def render_full(self, sink: OutputSink) -> None:
        """Draw borders and every cell regardless of dirtiness, then clear the dirty set."""
        self.draw_border(sink)
        for row in range(self._rows):
            for col in range(self._columns):
                self.draw_cell(sink, row, col)
                self._grid[row][col].mark_clean()
        self._dirty.clear()
        self._full_redraw = False

    def draw_border(self, sink: OutputSink) -> None:
        if not self._border:
            return
        fx, fy, fw, fh = self.frame_rect
        for h in range(fh):
            run_start = None
            run: List[str] = []
            for w in range(fw + 1):
                ch = self._border_char(w, h, fw, fh) if w < fw else None
                if ch is None:
                    if run:
                        sink.write(fx + run_start, fy + h, "".join(run))
                    run_start, run = None, []
                else:
                    if run_start is None:
                        run_start = w
                    run.append(ch)

    def _border_char(self, w: int, h: int, fw: int, fh: int) -> Optional[str]:
        """Glyph at frame-local (w, h), or None inside a cell."""
        h_sep = h % (self._cell_height + 1) == 0
        v_sep = w % (self._cell_width + 1) == 0
        last_w, last_h = fw - 1, fh - 1

        if h == 0:
            if w == 0:
                return chars.DOUBLE_TOP_LEFT
            if w == last_w:
                return chars.DOUBLE_TOP_RIGHT
            return chars.DOUBLE_JOIN_TOP if v_sep else chars.DOUBLE_HOR_LINE
        if h == last_h:
            if w == 0:
                return chars.DOUBLE_BOTTOM_LEFT
            if w == last_w:
                return chars.DOUBLE_BOTTOM_RIGHT
            return chars.DOUBLE_JOIN_BOTTOM if v_sep else chars.DOUBLE_HOR_LINE
        if w == 0:
            return chars.DOUBLE_JOIN_LEFT if h_sep else chars.DOUBLE_VERT_LINE
        if w == last_w:
            return chars.DOUBLE_JOIN_RIGHT if h_sep else chars.DOUBLE_VERT_LINE
        if h_sep and v_sep:
            return chars.SINGLE_CROSS
        if h_sep:
            return chars.SINGLE_HOR_LINE
        if v_sep:
            return chars.SINGLE_VERT_LINE
        return None
