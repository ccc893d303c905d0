"""
Gameboard — run.py
Plays the tic-tac-toe demo in a tcod terminal window.
"""

import logging
import sys
from pathlib import Path

# Ensure we can import the gameboard packages
project_root = Path(__file__).parent.resolve()
sys.path.insert(0, str(project_root))

import tcod

from demos.tictactoe import build_game
from ui.input import TcodKeySource
from ui.renderer import ConsoleRenderer

def main():
    logging.basicConfig(level=logging.WARNING)
    renderer = ConsoleRenderer(width=44, height=15, title="Gameboard Tic-tac-toe")
    with tcod.context.new_terminal(
        renderer.width,
        renderer.height,
        title=renderer.title,
        vsync=True,
    ) as context:
        renderer.context = context
        renderer.clear()
        game, _ = build_game(TcodKeySource(context), renderer)
        game.start()

if __name__ == "__main__":
    main()
