"""
Gameboard — gameboard/text.py
Display-width measurement and cell-content layout.
==================================================
Every width used by the board (dirty checks, cell layout, dialog and info
clipping) goes through char_width(), so a glyph occupies the same number of
terminal columns wherever it is measured:

    East Asian Wide / Fullwidth  -> 2 columns
    combining marks, format and control characters -> 0 columns
    everything else              -> 1 column
"""

from __future__ import annotations

import unicodedata
from typing import List

BLANK = " "


def char_width(ch: str) -> int:
    """Return the number of terminal columns a single code point occupies."""
    o = ord(ch)

    # Fast path for ASCII
    if 0x20 <= o <= 0x7E:
        return 1
    if o < 0x20 or 0x7F <= o < 0xA0:
        return 0

    if unicodedata.east_asian_width(ch) in ("W", "F"):
        return 2

    cat = unicodedata.category(ch)
    if cat.startswith("M") or cat == "Cf":
        return 0
    return 1


def str_width(text: str) -> int:
    """Return the display width of a string in terminal columns."""
    return sum(char_width(ch) for ch in text)


def graphemes(text: str) -> List[str]:
    """
    Split text into user-perceived characters.

    Zero-width code points (combining marks, joiners, variation selectors)
    stay attached to the preceding base character so a cluster like "g̈" is
    never torn apart when cell content is wrapped.
    """
    clusters: List[str] = []
    for ch in text:
        if clusters and char_width(ch) == 0:
            clusters[-1] += ch
        else:
            clusters.append(ch)
    return clusters


def fit(text: str, width: int, align: str = "<") -> str:
    """
    Clip or pad text to exactly `width` columns.

    align is one of "<", "^", ">" (left, center, right).
    A wide glyph that would straddle the right edge is dropped and replaced
    by padding.
    """
    out = []
    used = 0
    for cluster in graphemes(text):
        w = str_width(cluster)
        if used + w > width:
            break
        out.append(cluster)
        used += w
    clipped = "".join(out)
    pad = width - used
    if align == "^":
        left = pad // 2
        return BLANK * left + clipped + BLANK * (pad - left)
    if align == ">":
        return BLANK * pad + clipped
    return clipped + BLANK * pad


def layout_cell(content: str, width: int, height: int) -> List[str]:
    """
    Lay cell content out as `height` rows of exactly `width` columns.

    A single glyph fills the whole cell (as many copies as fit per row).
    Longer content is written row by row; surplus content is dropped and
    missing rows are blank.
    """
    clusters = graphemes(content)
    if len(clusters) == 1:
        glyph = clusters[0]
        w = str_width(glyph)
        if w == 0:
            return [BLANK * width for _ in range(height)]
        return [fit(glyph * (width // w), width) for _ in range(height)]

    rows: List[str] = []
    current: List[str] = []
    used = 0
    for cluster in clusters:
        w = str_width(cluster)
        if w > width:
            continue
        if used + w > width:
            rows.append("".join(current) + BLANK * (width - used))
            if len(rows) == height:
                return rows
            current, used = [], 0
        current.append(cluster)
        used += w
    if current or not rows:
        rows.append("".join(current) + BLANK * (width - used))
    while len(rows) < height:
        rows.append(BLANK * width)
    return rows[:height]
