"""
Gameboard — gameboard/dialog.py
Modal message dialog drawn over the board.

Text alignment is chosen per line by prefix:
    "|^|"  centered
    "|>|"  right-aligned
    otherwise left-aligned
"""

from __future__ import annotations
from typing import List, Sequence, Tuple

from gameboard import chars
from gameboard.text import fit, str_width

ALIGN_CENTER = "|^|"
ALIGN_RIGHT = "|>|"

# board frame + margin + dialog frame + margin, on both sides
_BOARD_MARGIN = 8

Run = Tuple[int, int, str]


def split_alignment(line: str) -> Tuple[str, str]:
    if line.startswith(ALIGN_CENTER):
        return line[len(ALIGN_CENTER):], "^"
    if line.startswith(ALIGN_RIGHT):
        return line[len(ALIGN_RIGHT):], ">"
    return line, "<"


class MessageDialog:
    def __init__(self, lines: Sequence[str]):
        if not lines:
            raise ValueError("A message dialog needs at least one line")
        self.lines = list(lines)

    def size(self, board_rect: Tuple[int, int, int, int]) -> Tuple[int, int]:
        """
        Outer (width, height) of the dialog for a board of the given rect.
        The dialog never grows past the board.
        """
        _, _, bw, bh = board_rect
        longest = max(str_width(split_alignment(line)[0]) for line in self.lines)
        inner_w = max(1, min(longest, bw - _BOARD_MARGIN))
        inner_h = max(1, min(len(self.lines), bh - _BOARD_MARGIN))
        return min(inner_w + 4, bw), min(inner_h + 4, bh)

    def layout(self, board_rect: Tuple[int, int, int, int]) -> List[Run]:
        """
        Positioned text runs for the dialog, centered on the board.

        Padding goes first when the board is small, then trailing lines. On a
        board too small for a frame only the text is shown.
        """
        bx, by, bw, bh = board_rect
        w, h = self.size(board_rect)
        x = bx + (bw - w) // 2
        y = by + (bh - h) // 2

        if w < 2 or h < 2:
            return [
                (x, y + i, fit(text, w, align))
                for i, (text, align) in enumerate(map(split_alignment, self.lines[:h]))
            ]

        hpad = 1 if w >= 5 else 0
        vpad = 1 if h >= 5 else 0
        text_w = w - 2 - 2 * hpad
        margin = " " * hpad
        blank = chars.DOUBLE_VERT_LINE + " " * (w - 2) + chars.DOUBLE_VERT_LINE

        rows = [blank] * vpad
        for line in self.lines[:h - 2 - 2 * vpad]:
            text, align = split_alignment(line)
            rows.append(
                f"{chars.DOUBLE_VERT_LINE}{margin}{fit(text, text_w, align)}{margin}{chars.DOUBLE_VERT_LINE}"
            )
        rows += [blank] * (h - 2 - len(rows))

        runs: List[Run] = [
            (x, y, chars.DOUBLE_TOP_LEFT + chars.DOUBLE_HOR_LINE * (w - 2) + chars.DOUBLE_TOP_RIGHT),
        ]
        runs += [(x, y + 1 + i, row) for i, row in enumerate(rows)]
        runs.append((x, y + h - 1, chars.DOUBLE_BOTTOM_LEFT + chars.DOUBLE_HOR_LINE * (w - 2) + chars.DOUBLE_BOTTOM_RIGHT))
        return runs

    def draw(self, sink, board_rect: Tuple[int, int, int, int]) -> None:
        for x, y, text in self.layout(board_rect):
            sink.write(x, y, text)
