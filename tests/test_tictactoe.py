"""
Gameboard — tests/test_tictactoe.py
Scripted games of the bundled tic-tac-toe demo.
"""

import numpy as np

from demos.tictactoe import EMPTY, MARK_ART, TicTacToe, build_game, winner
from gameboard.keys import ESCAPE
from ui.input import IterableKeySource
from ui.renderer import ConsoleRenderer

STEP = {(-1, 0): "w", (1, 0): "s", (0, -1): "a", (0, 1): "d"}


def script(targets, start=(1, 1)):
    """Keys that walk the cursor to each target in turn and mark it."""
    out = []
    row, col = start
    for target_row, target_col in targets:
        while row != target_row:
            dr = 1 if target_row > row else -1
            out.append(STEP[(dr, 0)])
            row += dr
        while col != target_col:
            dc = 1 if target_col > col else -1
            out.append(STEP[(0, dc)])
            col += dc
        out.append(" ")
    return out


def play(items):
    renderer = ConsoleRenderer(44, 15)
    source = IterableKeySource(items)
    game, app = build_game(source, renderer)
    game.start()
    return game, app, renderer


def test_winner_detection():
    x = MARK_ART["X"]
    grid = np.full((3, 3), EMPTY, dtype=object)
    assert not winner(grid, x)
    grid[0, 2] = grid[1, 1] = grid[2, 0] = x
    assert winner(grid, x)
    grid = np.full((3, 3), EMPTY, dtype=object)
    grid[:, 1] = x
    assert winner(grid, x)
    assert not winner(grid, MARK_ART["O"])


def test_script_walks_the_cursor():
    assert script([(1, 1), (0, 2)]) == [" ", "w", "d", " "]


def test_x_wins_on_the_diagonal():
    keys = [" ", "a", " ", "w", " ", "d", " ", "s", "s", "d", " ", "q"]
    game, app, renderer = play(keys)
    assert app.result == "X"
    assert app.exit
    assert game.message_open
    assert game.get_cell(2, 2) == MARK_ART["X"]
    assert game.get_cell(1, 0) == MARK_ART["O"]
    assert renderer.text_at(5, 4, 9) == " X wins! "
    assert renderer.text_at(20, 4, 7) == " X wins"


def test_marks_are_drawn_as_cell_art():
    game, app, renderer = play([" ", "q"])
    assert renderer.text_at(7, 5, 5) == " \\ / "
    assert renderer.text_at(7, 6, 5) == "  X  "
    assert app.player == "O"


def test_occupied_cell_cannot_be_marked_again():
    game, app, _ = play([" ", " ", "q"])
    assert app.player == "O"
    assert game.get_cell(1, 1) == MARK_ART["X"]


def test_restart_clears_board_and_dialog():
    keys = [" ", "a", " ", "w", " ", "d", " ", "s", "s", "d", " ", "r", "q"]
    game, app, renderer = play(keys)
    assert app.result is None
    assert app.player == "X"
    assert not game.message_open
    assert (game.board.to_array() == EMPTY).all()
    assert renderer.text_at(5, 4, 9) == "─┼─────┼─"


def test_full_board_without_line_is_a_draw():
    moves = [(0, 0), (0, 1), (0, 2), (1, 1), (1, 0), (1, 2), (2, 1), (2, 0), (2, 2)]
    game, app, renderer = play(script(moves) + ["q"])
    assert app.result == "draw"
    assert game.message_open
    assert " Draw" in app.status_lines()


def test_quit_with_escape():
    _, app, _ = play([ESCAPE, " "])
    assert app.exit
    assert app.player == "X"


def test_listener_starts_on_layout_cursor():
    app = TicTacToe()
    assert app.cursor == (1, 1)
    assert not app.finished
