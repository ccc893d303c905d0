"""
Gameboard — gameboard/game.py
Main game object: lifecycle, blocking input loop and listener dispatch.
========================================================================
Version:     0.2
Stack:       Python 3.11+ | logging
Status:      Core event loop.

One iteration of Game.start():

    1. read one key from the key source (the only blocking point)
    2. route it: cursor movement keys move the cursor and fire
       cursor_moved(), everything else goes to handle_key()
    3. flush changed cells (or the open dialog) and the info area
    4. leave the loop if stop() was called during step 2

The listener never holds the Game itself. Each callback receives a
GameHandle that is closed as soon as the callback returns.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Iterable, Optional, Protocol, Sequence, Tuple, Union

from gameboard.board import Board, OutputSink
from gameboard.cell import Color
from gameboard.cursor import Cursor
from gameboard.dialog import MessageDialog
from gameboard.errors import AlreadyInitialized, GameIOError, LifecycleError, NotInitialized
from gameboard.info import Info
from gameboard.keys import Key, as_key

logger = logging.getLogger("gameboard.game")

Position = Tuple[int, int]

# (row, col, content) or (row, col, content, fg, bg)
CellChange = Union[Tuple[int, int, str], Tuple[int, int, str, Optional[Color], Optional[Color]]]


class GameState(Enum):
    CREATED = "created"
    INITIALIZED = "initialized"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


class KeySource(Protocol):
    def read_key(self) -> Optional[Key]:
        """Block until a key is available. None means the input is exhausted."""
        ...


class InputListener(ABC):
    """
    Base class for host applications.
    Override handle_key(); override cursor_moved() if the game uses a Cursor.
    """

    @abstractmethod
    def handle_key(self, key: Key, game: "GameHandle") -> None:
        ...

    def cursor_moved(self, position: Position, game: "GameHandle") -> None:
        pass


class GameHandle:
    """
    What a listener may do with the game during one callback.
    Using the handle after the callback returned raises LifecycleError.
    """

    __slots__ = ("_game", "_open")

    def __init__(self, game: "Game"):
        self._game = game
        self._open = True

    def close(self) -> None:
        self._open = False

    @property
    def _live(self) -> "Game":
        if not self._open:
            raise LifecycleError("Game handle used outside of its listener callback")
        return self._game

    @property
    def state(self) -> GameState:
        return self._live.state

    @property
    def board(self) -> Board:
        return self._live.board

    def get_cell(self, row: int, col: int) -> str:
        return self._live.get_cell(row, col)

    def set_cell(self, row: int, col: int, content: str,
                 fg: Optional[Color] = None, bg: Optional[Color] = None) -> None:
        self._live.set_cell(row, col, content, fg, bg)

    def update_cells(self, updates: Iterable[CellChange]) -> None:
        self._live.update_cells(updates)

    @property
    def cursor(self) -> Optional[Position]:
        return self._live.cursor_position

    def set_cursor(self, position: Position) -> None:
        self._live.set_cursor(position)

    def stop(self) -> None:
        self._live.stop()

    def pause(self, resume_key: Union[Key, str]) -> None:
        self._live.pause(resume_key)

    def resume(self) -> None:
        self._live.resume()

    def show_message(self, lines: Sequence[str]) -> None:
        self._live.show_message(lines)

    def hide_message(self) -> None:
        self._live.hide_message()

    def update_info(self, lines: Sequence[str]) -> None:
        self._live.update_info(lines)


class Game:
    """
    Owns the board, the I/O handles and the listener for one game session.
    """

    def __init__(self, key_source: KeySource, output: OutputSink, listener: InputListener):
        self._keys = key_source
        self._output = output
        self._listener = listener

        self._board: Optional[Board] = None
        self._cursor: Optional[Cursor] = None
        self._info: Optional[Info] = None
        self._dialog: Optional[MessageDialog] = None
        self._dialog_drawn = False

        self._state = GameState.CREATED
        self._running = False
        self._resume_key: Optional[Key] = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def running(self) -> bool:
        return self._running

    @property
    def board(self) -> Board:
        return self._require_board()

    @property
    def info(self) -> Optional[Info]:
        return self._info

    @property
    def cursor_position(self) -> Optional[Position]:
        return self._cursor.position if self._cursor is not None else None

    @property
    def message_open(self) -> bool:
        return self._dialog is not None

    def _require_board(self) -> Board:
        if self._board is None:
            raise NotInitialized("Game has no board; call init() first")
        return self._board

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(self, board: Board, cursor: Union[Cursor, Position, None] = None,
             info: Optional[Info] = None) -> None:
        """
        Attach the board (and optional cursor and info area) and draw the
        initial screen. Can be called once per Game.
        """
        if self._state is not GameState.CREATED:
            raise AlreadyInitialized("Game was already initialized")

        if cursor is not None and not isinstance(cursor, Cursor):
            cursor = Cursor(cursor)
        if cursor is not None:
            cursor.attach(board)
        if info is not None:
            info.place(board.frame_rect)

        self._board = board
        self._cursor = cursor
        self._info = info
        self._guard_io(self._render_all)

        self._state = GameState.INITIALIZED
        logger.debug("Game initialized with a %dx%d board", board.rows, board.columns)

    def start(self) -> None:
        """
        Run the input loop until stop() is called or the key source is
        exhausted. Both are normal termination.
        """
        if self._state is GameState.CREATED:
            raise NotInitialized("Cannot start a game before init()")
        if self._state in (GameState.RUNNING, GameState.PAUSED):
            raise LifecycleError("Game is already running")

        self._state = GameState.RUNNING
        self._running = True
        logger.debug("Game loop started")
        try:
            while self._running:
                key = self._guard_io(self._keys.read_key)
                if key is None:
                    logger.debug("Key source exhausted, stopping")
                    break
                self._dispatch(key)
                self._guard_io(self._refresh)
        except GameIOError as exc:
            logger.error("Game loop aborted by I/O failure: %s", exc)
            raise
        finally:
            self._running = False
            self._resume_key = None
            self._state = GameState.STOPPED
            logger.debug("Game loop stopped")

    def stop(self) -> None:
        """Leave the loop after the current iteration. No effect unless running."""
        if self._state in (GameState.RUNNING, GameState.PAUSED):
            self._running = False

    def pause(self, resume_key: Union[Key, str]) -> None:
        """Ignore every key except `resume_key`, which still reaches handle_key()."""
        if self._state is not GameState.RUNNING:
            raise LifecycleError(f"Can only pause a running game (state: {self._state.value})")
        self._resume_key = as_key(resume_key)
        self._state = GameState.PAUSED

    def resume(self) -> None:
        if self._state is not GameState.PAUSED:
            raise LifecycleError(f"Can only resume a paused game (state: {self._state.value})")
        self._resume_key = None
        self._state = GameState.RUNNING

    # ------------------------------------------------------------------
    # Board forwarding
    # ------------------------------------------------------------------

    def get_cell(self, row: int, col: int) -> str:
        return self._require_board().get_cell(row, col)

    def set_cell(self, row: int, col: int, content: str,
                 fg: Optional[Color] = None, bg: Optional[Color] = None) -> None:
        self._require_board().set_cell(row, col, content, fg, bg)

    def update_cells(self, updates: Iterable[CellChange]) -> None:
        """
        Apply several set_cell() calls. Each update is (row, col, content) or
        (row, col, content, fg, bg); colors left out reset to the terminal
        default, as with set_cell().
        """
        board = self._require_board()
        for row, col, content, *colors in updates:
            board.set_cell(row, col, content, *colors)

    def set_cursor(self, position: Position) -> None:
        board = self._require_board()
        if self._cursor is None:
            cursor = Cursor(position)
            cursor.attach(board)
            self._cursor = cursor
        else:
            self._cursor.move_to(position)

    # ------------------------------------------------------------------
    # Message dialog and info area
    # ------------------------------------------------------------------

    def show_message(self, lines: Sequence[str]) -> None:
        """
        Open a modal dialog over the board. Cell changes made while it is
        open are kept and shown once hide_message() is called. Replacing an
        open dialog repaints the board under it first.
        """
        board = self._require_board()
        dialog = MessageDialog(lines)
        if self._dialog is not None:
            board.invalidate()
        self._dialog = dialog
        self._dialog_drawn = False

    def hide_message(self) -> None:
        if self._dialog is None:
            return
        self._dialog = None
        self._require_board().invalidate()

    def update_info(self, lines: Sequence[str]) -> None:
        if self._info is None:
            raise LifecycleError("Game was initialized without an info area")
        self._info.update(lines)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _dispatch(self, key: Key) -> None:
        if self._state is GameState.PAUSED:
            if key == self._resume_key:
                self._call(self._listener.handle_key, key)
            return

        if self._cursor is not None and self._dialog is None:
            direction = self._cursor.direction_for(key)
            if direction is not None:
                position = self._cursor.move(direction)
                if position is not None:
                    self._call(self._listener.cursor_moved, position)
                return

        self._call(self._listener.handle_key, key)

    def _call(self, callback: Callable, arg) -> None:
        handle = GameHandle(self)
        try:
            callback(arg, handle)
        finally:
            handle.close()

    def _render_all(self) -> None:
        board = self._require_board()
        board.render_full(self._output)
        if self._info is not None:
            self._info.render_full(self._output)
        self._output.flush()

    def _refresh(self) -> None:
        board = self._require_board()
        if self._dialog is not None:
            if not self._dialog_drawn:
                if board.needs_full_redraw:
                    board.flush(self._output)
                self._dialog.draw(self._output, board.frame_rect)
                self._dialog_drawn = True
        else:
            board.flush(self._output)
        if self._info is not None:
            self._info.flush(self._output)
        self._output.flush()

    def _guard_io(self, fn: Callable[[], object]):
        try:
            return fn()
        except GameIOError:
            raise
        except OSError as exc:
            raise GameIOError(f"Terminal I/O failed: {exc}") from exc
