"""
Gameboard — gameboard/errors.py
Error hierarchy shared by the board, the game loop and the I/O adapters.
"""

from __future__ import annotations


class GameboardError(Exception):
    """Base class for every error raised by the engine."""


class ConfigError(GameboardError, ValueError):
    """Invalid board geometry or layout definition. No object is produced."""


class OutOfBounds(GameboardError, IndexError):
    """A cell coordinate outside the board."""

    def __init__(self, row: int, col: int, rows: int, columns: int):
        super().__init__(
            f"Cell ({row}, {col}) is outside the {rows}x{columns} board"
        )
        self.row = row
        self.col = col


class LifecycleError(GameboardError, RuntimeError):
    """Game API used in a state that does not allow it."""


class NotInitialized(LifecycleError):
    pass


class AlreadyInitialized(LifecycleError):
    pass


class GameIOError(GameboardError, OSError):
    """Reading keys or writing to the screen failed. Fatal to the running loop."""
