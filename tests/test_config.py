import pytest

from gameboard import config
from gameboard.board import Board
from gameboard.config import BoardDef, get_layout, load_layout, validate_board
from gameboard.errors import ConfigError

def test_load_tictactoe_layout():
    layout = get_layout("tictactoe")
    assert layout.board.rows == 3
    assert layout.board.cell_width == 5
    assert layout.board.border is True
    assert layout.board.resolved_origin == (1, 1)
    assert layout.cursor.wrap_around is True
    assert layout.info.layout == "right"
    assert " q: quit" in layout.info.lines

def test_load_scoreboard_layout():
    layout = get_layout("scoreboard")
    assert layout.cursor is None
    assert layout.board.resolved_origin == (2, 1)
    board = Board.from_def(layout.board)
    assert board.get_cell(0, 11) == "."
    assert board.terminal_position(0, 11) == (13, 1)

def test_layouts_are_cached():
    assert get_layout("tictactoe") is get_layout("tictactoe")
    assert "tictactoe" in config._LAYOUT_CACHE

def test_missing_layout_file():
    with pytest.raises(FileNotFoundError):
        get_layout("no_such_layout")

def test_malformed_toml(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("[board\nrows = 3\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_layout(path)

def test_invalid_layout_values(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("[board]\nrows = 0\ncolumns = 3\n", encoding="utf-8")
    with pytest.raises(ConfigError) as info:
        load_layout(path)
    assert "board.rows" in str(info.value)

def test_unknown_keys_are_rejected(tmp_path):
    path = tmp_path / "extra.toml"
    path.write_text("[board]\nrows = 2\ncolumns = 2\ncolour = 'red'\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_layout(path)

def test_board_def_is_frozen():
    defn = validate_board(rows=2, columns=2)
    with pytest.raises(Exception):
        defn.rows = 4

def test_bordered_board_origin_rule():
    with pytest.raises(ConfigError):
        validate_board(rows=2, columns=2, border=True, origin=(0, 3))
    assert BoardDef(rows=2, columns=2, border=True, origin=(1, 1)).resolved_origin == (1, 1)
