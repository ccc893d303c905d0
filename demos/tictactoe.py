"""
Gameboard — demos/tictactoe.py
Two-player tic-tac-toe built on the engine: the listener owns the rules,
the engine owns drawing and key routing.
"""

from __future__ import annotations
from typing import Optional

import numpy as np

from gameboard import keys
from gameboard.board import Board, OutputSink
from gameboard.cursor import Cursor
from gameboard.config import LayoutDef, get_layout
from gameboard.game import Game, GameHandle, InputListener, KeySource
from gameboard.info import Info
from gameboard.keys import Key

# 5x3 cell art, written row by row
MARK_ART = {
    "X": " \\ /   X   / \\ ",
    "O": " ┌─┐  │ │  └─┘ ",
}
MARK_COLORS = {
    "X": (255, 90, 90),
    "O": (90, 200, 255),
}
EMPTY = " "

MARK_KEYS = (keys.ENTER, Key.of(" "))


def winner(grid: np.ndarray, art: str) -> bool:
    """True if `art` fills a full row, column or diagonal of `grid`."""
    hits = grid == art
    return bool(
        hits.all(axis=0).any()
        or hits.all(axis=1).any()
        or np.diag(hits).all()
        or np.diag(np.fliplr(hits)).all()
    )


class TicTacToe(InputListener):
    def __init__(self):
        self.player = "X"
        self.result: Optional[str] = None   # "X", "O" or "draw"
        self.cursor = (1, 1)
        self.exit = False

    @property
    def finished(self) -> bool:
        return self.result is not None

    def status_lines(self):
        if self.result == "draw":
            status = " Draw"
        elif self.result is not None:
            status = f" {self.result} wins"
        else:
            status = f" {self.player} to move"
        return [
            "",
            " Tic-tac-toe",
            "",
            status,
            "",
            " Arrows/wasd: move",
            " Space/Enter: mark",
            " r: restart",
            " q: quit",
        ]

    def handle_key(self, key: Key, game: GameHandle) -> None:
        if key.is_char("q") or key == keys.ESCAPE:
            self.exit = True
            game.stop()
        elif key.is_char("r"):
            self.restart(game)
        elif key in MARK_KEYS and not self.finished:
            self.place(game)

    def cursor_moved(self, position, game: GameHandle) -> None:
        self.cursor = position

    def place(self, game: GameHandle) -> None:
        row, col = game.cursor or self.cursor
        if game.get_cell(row, col) != EMPTY:
            return
        game.set_cell(row, col, MARK_ART[self.player], fg=MARK_COLORS[self.player])

        grid = game.board.to_array()
        if winner(grid, MARK_ART[self.player]):
            self.result = self.player
        elif not (grid == EMPTY).any():
            self.result = "draw"
        else:
            self.player = "O" if self.player == "X" else "X"

        game.update_info(self.status_lines())
        if self.finished:
            headline = "|^|Draw!" if self.result == "draw" else f"|^|{self.result} wins!"
            game.show_message([headline, "", "|^|r: replay", "|^|q: quit"])

    def restart(self, game: GameHandle) -> None:
        board = game.board
        for row in range(board.rows):
            for col in range(board.columns):
                game.set_cell(row, col, EMPTY)
        self.player = "X"
        self.result = None
        game.hide_message()
        game.update_info(self.status_lines())


def build_game(key_source: KeySource, output: OutputSink,
               layout: Optional[LayoutDef] = None) -> tuple[Game, TicTacToe]:
    """Create and initialize a tic-tac-toe game from the bundled layout."""
    if layout is None:
        layout = get_layout("tictactoe")
    app = TicTacToe()
    board = Board.from_def(layout.board)
    cursor = Cursor.from_def(layout.cursor) if layout.cursor else None
    info = Info.from_def(layout.info) if layout.info else None

    game = Game(key_source, output, app)
    game.init(board, cursor, info)
    if cursor is not None:
        app.cursor = cursor.position
    return game, app
