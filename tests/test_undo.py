import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from proctext.layout import SimpleTextBuffer
from proctext.undo import UNDO_CHAR_COUNT, UNDO_STATE_COUNT, UndoRecord, UndoState


def _insert(state, buf, where, text):
    buf.insert_chars(where, text)
    state.make_insert(where, len(text))


def _delete(state, buf, where, length):
    state.make_delete(buf, where, length)
    buf.delete_chars(where, length)


def test_default_capacities():
    state = UndoState()
    assert state.state_count == UNDO_STATE_COUNT == 99
    assert state.char_count == UNDO_CHAR_COUNT == 999
    assert state.undo_point == 0
    assert state.redo_point == 99


def test_invalid_capacities():
    with pytest.raises(ValueError):
        UndoState(0, 10)
    with pytest.raises(ValueError):
        UndoState(10, -1)


def test_undo_redo_insert():
    buf = SimpleTextBuffer("abc")
    state = UndoState()
    _insert(state, buf, 3, "d")
    assert buf.text == "abcd"
    assert state.undo(buf) == 3
    assert buf.text == "abc"
    assert state.redo(buf) == 4
    assert buf.text == "abcd"


def test_undo_redo_delete():
    buf = SimpleTextBuffer("abc")
    state = UndoState()
    _delete(state, buf, 1, 1)
    assert buf.text == "ac"
    assert state.undo(buf) == 2
    assert buf.text == "abc"
    assert state.redo(buf) == 1
    assert buf.text == "ac"


def test_undo_replace():
    buf = SimpleTextBuffer("abc")
    state = UndoState()
    state.make_replace(buf, 0, 1, 1)
    buf.delete_chars(0, 1)
    buf.insert_chars(0, "X")
    assert buf.text == "Xbc"
    assert state.undo(buf) == 1
    assert buf.text == "abc"
    state.redo(buf)
    assert buf.text == "Xbc"


def test_nothing_to_undo_or_redo():
    buf = SimpleTextBuffer("abc")
    state = UndoState()
    assert state.undo(buf) is None
    assert state.redo(buf) is None
    assert buf.text == "abc"


def test_new_edit_flushes_redo():
    buf = SimpleTextBuffer("")
    state = UndoState()
    _insert(state, buf, 0, "a")
    state.undo(buf)
    assert state.redo_point == state.state_count - 1
    _insert(state, buf, 0, "b")
    assert state.redo_point == state.state_count
    assert state.redo(buf) is None
    assert buf.text == "b"


def test_record_limit_discards_oldest():
    buf = SimpleTextBuffer("")
    state = UndoState(state_count=3, char_count=50)
    for i, ch in enumerate("abcde"):
        _insert(state, buf, i, ch)
    assert state.undo_point == 3
    for _ in range(3):
        assert state.undo(buf) is not None
    assert state.undo(buf) is None
    assert buf.text == "ab"


def test_too_many_chars_empties_history():
    buf = SimpleTextBuffer("abcdef")
    state = UndoState(state_count=10, char_count=4)
    _insert(state, buf, 0, "x")
    assert state.create_undo(0, 5, 0) is None
    assert state.undo_point == 0
    assert state.undo_char_point == 0


def test_char_limit_discards_oldest_chars():
    buf = SimpleTextBuffer("abcdef")
    state = UndoState(state_count=10, char_count=4)
    _delete(state, buf, 0, 2)
    _delete(state, buf, 0, 2)
    _delete(state, buf, 0, 2)
    assert buf.text == ""
    assert state.undo_point == 2
    assert state.undo_char_point <= state.char_count
    state.undo(buf)
    state.undo(buf)
    assert buf.text == "cdef"
    assert state.undo(buf) is None


def test_create_undo_returns_storage_index():
    state = UndoState()
    assert state.create_undo(0, 0, 3) is None
    first = state.create_undo(0, 2, 0)
    second = state.create_undo(0, 3, 0)
    assert first == 0
    assert second == first + 2
    assert state.undo_char_point == 5
    assert state.records[1] == UndoRecord(where=0, insert_length=2, delete_length=0, char_storage=0)


def test_discard_undo_shifts_records():
    buf = SimpleTextBuffer("abcd")
    state = UndoState()
    state.make_delete(buf, 0, 2)
    state.make_delete(buf, 2, 2)
    state.discard_undo()
    assert state.undo_point == 1
    assert state.undo_char_point == 2
    assert state.records[0].char_storage == 0
    assert state.records[0].where == 2
    assert state.chars[0:2] == ["c", "d"]


def test_clear_resets_history():
    buf = SimpleTextBuffer("")
    state = UndoState()
    _insert(state, buf, 0, "abc")
    state.undo(buf)
    _insert(state, buf, 0, "z")
    state.clear()
    assert state.undo_point == 0
    assert state.undo_char_point == 0
    assert state.redo_point == state.state_count
    assert state.redo_char_point == state.char_count
    assert state.undo(buf) is None


_ops = st.lists(
    st.tuples(
        st.booleans(),
        st.floats(min_value=0.0, max_value=1.0),
        st.text(alphabet="abcxyz\n", min_size=1, max_size=5),
    ),
    max_size=20,
)


@settings(max_examples=60, deadline=None)
@given(start=st.text(alphabet="abc\n", max_size=10), ops=_ops)
def test_undo_all_then_redo_all_round_trip(start, ops):
    buf = SimpleTextBuffer(start)
    state = UndoState()
    count = 0
    for is_insert, frac, text in ops:
        n = len(buf)
        if is_insert or n == 0:
            _insert(state, buf, int(frac * n), text)
        else:
            where = min(int(frac * n), n - 1)
            length = min(len(text), n - where)
            _delete(state, buf, where, length)
        count += 1
    final = buf.text
    for _ in range(count):
        assert state.undo(buf) is not None
    assert buf.text == start
    assert state.undo(buf) is None
    for _ in range(count):
        assert state.redo(buf) is not None
    assert buf.text == final
    assert state.redo(buf) is None