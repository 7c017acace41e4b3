import pytest
from hypothesis import given, strategies as st

from proctext.layout import (
    NEWLINE,
    NEWLINE_WIDTH,
    FindState,
    SimpleTextBuffer,
    TextBuffer,
    find_charpos,
    locate_coord,
)


def _line_start(text, n):
    return text.rfind("\n", 0, n) + 1


def test_text_buffer_is_abstract():
    with pytest.raises(TypeError):
        TextBuffer()


@pytest.mark.parametrize("width,height", [(0.0, 1.0), (-1.0, 1.0), (1.0, 0.0)])
def test_simple_buffer_rejects_bad_metrics(width, height):
    with pytest.raises(ValueError):
        SimpleTextBuffer("abc", width, height)


def test_char_at_and_length():
    buf = SimpleTextBuffer("ab\ncd", 1.0, 1.0)
    assert len(buf) == len("ab\ncd")
    assert [buf.char_at(i) for i in range(len(buf))] == list("ab\ncd")
    with pytest.raises(IndexError):
        buf.char_at(len(buf))
    with pytest.raises(IndexError):
        buf.char_at(-1)


def test_insert_and_delete():
    buf = SimpleTextBuffer("hello", 1.0, 1.0)
    assert buf.insert_chars(2, "XY") is True
    assert buf.text == "heXYllo"
    buf.delete_chars(2, 2)
    assert buf.text == "hello"
    with pytest.raises(IndexError):
        buf.insert_chars(len("hello") + 1, "z")
    with pytest.raises(IndexError):
        buf.delete_chars(3, 10)


@given(st.text(alphabet="ab\n ", max_size=20), st.text(alphabet="xy\n", max_size=5), st.data())
def test_insert_then_delete_round_trip(text, extra, data):
    buf = SimpleTextBuffer(text, 1.0, 1.0)
    pos = data.draw(st.integers(0, len(text)))
    buf.insert_chars(pos, extra)
    assert buf.text == text[:pos] + extra + text[pos:]
    buf.delete_chars(pos, len(extra))
    assert buf.text == text


def test_layout_row_counts_newline_but_not_its_width():
    buf = SimpleTextBuffer("abc\nde", 2.0, 3.0)
    first = buf.layout_row(0)
    assert first.num_chars == len("abc\n")
    assert first.x1 == len("abc") * 2.0
    assert first.ymax - first.ymin == 3.0
    assert first.baseline_y_delta == 3.0
    second = buf.layout_row(len("abc\n"))
    assert second.num_chars == len("de")
    assert second.x1 == len("de") * 2.0


def test_char_width_of_newline():
    buf = SimpleTextBuffer("a\nb", 2.0, 1.0)
    assert buf.char_width(0, 0) == 2.0
    assert buf.char_width(0, 1) == NEWLINE_WIDTH


def test_locate_coord_rounds_to_nearest_boundary():
    text = "hello"
    w = 2.0
    buf = SimpleTextBuffer(text, w, 1.0)
    for k in range(len(text)):
        assert locate_coord(buf, k * w + 0.25 * w, 0.5) == k
        assert locate_coord(buf, k * w + 0.75 * w, 0.5) == k + 1


def test_locate_coord_empty_buffer():
    buf = SimpleTextBuffer("", 1.0, 1.0)
    assert locate_coord(buf, 5.0, 5.0) == len(buf)


def test_locate_coord_rows():
    text = "ab\ncd\nef"
    buf = SimpleTextBuffer(text, 1.0, 1.0)
    # before the start of the second row
    assert locate_coord(buf, -1.0, 1.5) == text.index("c")
    # past the end of a row ending in a newline lands on the newline
    assert locate_coord(buf, 10.0, 1.5) == text.index("\n", text.index("c"))
    # past the end of the last row lands after the last character
    assert locate_coord(buf, 10.0, 2.5) == len(text)
    # below all text
    assert locate_coord(buf, 0.0, 100.0) == len(text)
    # above the first row
    assert locate_coord(buf, 1.0, -1.0) == 0


def test_find_charpos_single_line_end():
    text = "abcd"
    buf = SimpleTextBuffer(text, 2.0, 1.0)
    found = find_charpos(buf, len(text), True)
    assert found == FindState(x=len(text) * 2.0, y=0.0, height=1.0,
                              first_char=0, length=len(text), prev_first=0)


def test_find_charpos_after_trailing_newline():
    text = "ab\n"
    buf = SimpleTextBuffer(text, 1.0, 1.0)
    found = find_charpos(buf, len(text), False)
    assert found.first_char == len(text)
    assert found.length == 0
    assert found.prev_first == 0
    assert found.x == 0.0


def test_find_charpos_row_length():
    text = "abc\nde"
    buf = SimpleTextBuffer(text, 1.0, 1.0)
    assert find_charpos(buf, 1, False).length == len("abc\n")
    last = find_charpos(buf, len(text), False)
    assert last.first_char == text.index("d")
    assert last.length == len("de")