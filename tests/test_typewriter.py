"""Tests for the overtype decoder."""

import io

from overstrike.model import Cell
from overstrike.typewriter import Typewriter, decode_stream


def cells(t, line=0):
    return [(c.character, c.bold, c.underline) for c in t.document.lines[line]]


def test_new_typewriter_has_one_empty_line():
    t = Typewriter()
    assert t.document.lines == [[]]
    assert t.document.cursor.line_index == 0
    assert t.document.cursor.column == 0


def test_plain_text_appends_cells():
    t = Typewriter()
    t.feed("a b_")
    assert cells(t) == [
        ('a', False, False),
        (' ', False, False),
        ('b', False, False),
        ('_', False, False),
    ]
    assert t.document.cursor.column == 4


def test_double_strike_makes_bold():
    t = Typewriter()
    t.feed("x\bx")
    assert cells(t) == [('x', True, False)]


def test_underscore_after_character_underlines():
    t = Typewriter()
    t.feed("x\b_")
    assert cells(t) == [('x', False, True)]


def test_underscore_before_character_underlines():
    t = Typewriter()
    t.feed("_\bx")
    assert cells(t) == [('x', False, True)]


def test_underscore_struck_twice_is_bold_underscore():
    t = Typewriter()
    t.feed("_\b_")
    assert cells(t) == [('_', True, False)]


def test_bold_and_underline_combine():
    t = Typewriter()
    t.feed("_\bx\bx")
    assert cells(t) == [('x', True, True)]


def test_unrelated_overstrike_keeps_last_glyph_and_flags():
    t = Typewriter()
    t.feed("a\ba\bb")
    assert cells(t) == [('b', True, False)]

    t = Typewriter()
    t.feed("_\ba\bc")
    assert cells(t) == [('c', False, True)]


def test_backspace_at_column_zero_is_ignored():
    t = Typewriter()
    t.feed("\b\b\ba")
    assert cells(t) == [('a', False, False)]
    assert t.document.cursor.column == 1


def test_backspace_does_not_touch_cells():
    t = Typewriter()
    t.feed("ab\b\b")
    assert cells(t) == [('a', False, False), ('b', False, False)]
    assert t.document.cursor.column == 0


def test_carriage_return_overtypes_from_start_of_line():
    t = Typewriter()
    t.feed("abc\rabc")
    assert len(t.document) == 1
    assert cells(t) == [('a', True, False), ('b', True, False), ('c', True, False)]


def test_carriage_return_then_underscores_underline_whole_line():
    t = Typewriter()
    t.feed("word\r____")
    assert [c.underline for c in t.document.lines[0]] == [True] * 4
    assert t.document.text() == "word"


def test_overtype_past_end_after_return_extends_line():
    t = Typewriter()
    t.feed("ab\rxyz")
    assert cells(t) == [('x', False, False), ('y', False, False), ('z', False, False)]


def test_line_feed_starts_new_line():
    t = Typewriter()
    t.feed("ab\ncd\n")
    assert len(t.document) == 3
    assert t.document.text() == "ab\ncd\n"
    assert t.document.cursor.line_index == 2
    assert t.document.cursor.column == 0


def test_backspace_does_not_cross_line_boundary():
    t = Typewriter()
    t.feed("ab\n\bx")
    assert t.document.text() == "ab\nx"


def test_other_control_characters_are_dropped():
    t = Typewriter()
    t.feed("a\x00\x07\x1b\x7f\tb\x0c")
    assert t.document.text() == "ab"
    assert t.document.cursor.column == 2


def test_non_ascii_characters_are_printable():
    t = Typewriter()
    t.feed("ø\bø é")
    assert cells(t) == [('ø', True, False), (' ', False, False), ('é', False, False)]


def test_document_cells_are_cell_instances():
    t = Typewriter()
    t.append('q')
    assert t.document.lines[0][0] == Cell('q', False, False)


def test_decode_stream_reads_in_chunks():
    text = "B\bBo\bol\bld\bd\n_\bu_\bn\n" * 50
    t = decode_stream(io.StringIO(text), chunk_size=7)

    expected = Typewriter()
    expected.feed(text)
    assert t.document == expected.document


def test_decode_stream_empty_input():
    t = decode_stream(io.StringIO(""))
    assert t.document.lines == [[]]
