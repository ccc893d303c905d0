"""
Display-width rules and cell layout in gameboard/text.py.
"""
from gameboard.text import char_width, fit, graphemes, layout_cell, str_width

def test_char_width_classes():
    assert char_width("a") == 1
    assert char_width("中") == 2
    assert char_width("\u0301") == 0   # combining acute
    assert char_width("\x07") == 0
    assert char_width("═") == 1

def test_str_width_counts_columns_not_code_points():
    assert str_width("e\u0301") == 1
    assert str_width("中文") == 4
    assert len("e\u0301") == 2

def test_graphemes_keep_combining_marks_attached():
    assert graphemes("g\u0308x") == ["g\u0308", "x"]
    assert graphemes("") == []

def test_fit_pads_and_clips():
    assert fit("ab", 4) == "ab  "
    assert fit("abcdef", 3) == "abc"
    assert fit("ab", 6, "^") == "  ab  "
    assert fit("ab", 5, ">") == "   ab"
    # Wide glyph that would straddle the edge is replaced by padding
    assert fit("a中", 2) == "a "

def test_layout_single_glyph_fills_cell():
    assert layout_cell("#", 3, 2) == ["###", "###"]
    assert layout_cell("中", 3, 1) == ["中 "]

def test_layout_wraps_content_by_rows():
    assert layout_cell("abcdef", 3, 2) == ["abc", "def"]
    assert layout_cell("abcd", 3, 3) == ["abc", "d  ", "   "]
    assert layout_cell("abcdefgh", 3, 2) == ["abc", "def"]

def test_layout_keeps_rows_aligned_with_wide_glyphs():
    rows = layout_cell("a中b", 2, 3)
    assert rows == ["a ", "中", "b "]
    assert all(str_width(r) == 2 for r in rows)

def test_layout_empty_content_is_blank():
    assert layout_cell("", 2, 2) == ["  ", "  "]
