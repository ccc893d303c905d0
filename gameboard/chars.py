"""
Gameboard — gameboard/chars.py
Box-drawing glyphs. The frame around a board or panel uses double lines,
separators between cells use single lines.
"""

DOUBLE_HOR_LINE = "═"
DOUBLE_VERT_LINE = "║"
DOUBLE_TOP_LEFT = "╔"
DOUBLE_TOP_RIGHT = "╗"
DOUBLE_BOTTOM_LEFT = "╚"
DOUBLE_BOTTOM_RIGHT = "╝"

# Frame edges meeting a single-line separator
DOUBLE_JOIN_LEFT = "╟"
DOUBLE_JOIN_RIGHT = "╢"
DOUBLE_JOIN_TOP = "╤"
DOUBLE_JOIN_BOTTOM = "╧"

SINGLE_HOR_LINE = "─"
SINGLE_VERT_LINE = "│"
SINGLE_CROSS = "┼"
