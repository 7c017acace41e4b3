"""Keyboard and mouse editing of a text buffer: cursor, selection, insert mode and undo."""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum

from .layout import NEWLINE, NEWLINE_WIDTH, TextBuffer, find_charpos, locate_coord
from .undo import UndoState

__all__ = [
    "Key",
    "TextEditState",
    "move_word_left",
    "move_word_right",
]

_KEY_BASE = 0x200000


class Key(IntEnum):
    """Editing keys. Combine a movement key with ``SHIFT`` to extend the selection."""

    LEFT = _KEY_BASE
    RIGHT = _KEY_BASE + 1
    UP = _KEY_BASE + 2
    DOWN = _KEY_BASE + 3
    LINESTART = _KEY_BASE + 4
    LINEEND = _KEY_BASE + 5
    TEXTSTART = _KEY_BASE + 6
    TEXTEND = _KEY_BASE + 7
    DELETE = _KEY_BASE + 8
    BACKSPACE = _KEY_BASE + 9
    UNDO = _KEY_BASE + 10
    REDO = _KEY_BASE + 11
    WORDLEFT = _KEY_BASE + 12
    WORDRIGHT = _KEY_BASE + 13
    PGUP = _KEY_BASE + 14
    PGDOWN = _KEY_BASE + 15
    INSERT = _KEY_BASE + 16
    SHIFT = 0x400000


_UNSHIFTABLE = {Key.UNDO, Key.REDO, Key.INSERT}


def _is_word_boundary(buffer: TextBuffer, idx: int) -> bool:
    if idx <= 0:
        return True
    return buffer.char_at(idx - 1).isspace() and not buffer.char_at(idx).isspace()


def move_word_left(buffer: TextBuffer, c: int) -> int:
    """Position of the start of the word before ``c``; always moves at least one character."""
    c -= 1
    while c >= 0 and not _is_word_boundary(buffer, c):
        c -= 1
    return max(c, 0)


def move_word_right(buffer: TextBuffer, c: int) -> int:
    """Position of the start of the word after ``c``; always moves at least one character."""
    length = len(buffer)
    c += 1
    while c < length and not _is_word_boundary(buffer, c):
        c += 1
    return min(c, length)


def _key_to_char(key: int | str) -> str | None:
    if isinstance(key, str):
        if len(key) != 1:
            raise ValueError(f"expected a single character, got {key!r}")
        return key
    if 0 < key < _KEY_BASE:
        return chr(key)
    return None


class TextEditState:
    """Cursor, selection and undo history of one text field.

    The text itself lives in a :class:`TextBuffer` passed to each call.
    ``select_start`` may be greater than ``select_end``; equal values mean
    there is no selection.
    """

    def __init__(self, single_line: bool = False) -> None:
        self.undostate = UndoState()
        self.clear(single_line)

    def clear(self, single_line: bool = False) -> None:
        """Reset cursor, selection, modes and undo history."""
        self.undostate.clear()
        self.select_start = 0
        self.select_end = 0
        self.cursor = 0
        self.has_preferred_x = False
        self.preferred_x = 0.0
        self.cursor_at_end_of_line = False
        self.initialized = True
        self.single_line = bool(single_line)
        self.insert_mode = False
        self.row_count_per_page = 0

    def has_selection(self) -> bool:
        """True if some text is selected."""
        return self.select_start != self.select_end

    def clamp(self, buffer: TextBuffer) -> None:
        """Bring cursor and selection back inside the buffer after it changed."""
        n = len(buffer)
        if self.has_selection():
            self.select_start = min(self.select_start, n)
            self.select_end = min(self.select_end, n)
            if self.select_start == self.select_end:
                self.cursor = self.select_start
        self.cursor = min(self.cursor, n)

    # Mouse

    def _row_y(self, buffer: TextBuffer, y: float) -> float:
        if self.single_line:
            return buffer.layout_row(0).ymin
        return y

    def click(self, buffer: TextBuffer, x: float, y: float) -> None:
        """Mouse down: move the cursor to (x, y) and drop the selection."""
        y = self._row_y(buffer, y)
        self.cursor = locate_coord(buffer, x, y)
        self.select_start = self.cursor
        self.select_end = self.cursor
        self.has_preferred_x = False

    def drag(self, buffer: TextBuffer, x: float, y: float) -> None:
        """Mouse drag: move the cursor and the selection end to (x, y)."""
        y = self._row_y(buffer, y)
        if self.select_start == self.select_end:
            self.select_start = self.cursor
        p = locate_coord(buffer, x, y)
        self.cursor = p
        self.select_end = p

    # Editing primitives

    def _delete(self, buffer: TextBuffer, where: int, length: int) -> None:
        self.undostate.make_delete(buffer, where, length)
        buffer.delete_chars(where, length)
        self.has_preferred_x = False

    def _delete_selection(self, buffer: TextBuffer) -> None:
        self.clamp(buffer)
        if not self.has_selection():
            return
        if self.select_start < self.select_end:
            self._delete(buffer, self.select_start, self.select_end - self.select_start)
            self.select_end = self.cursor = self.select_start
        else:
            self._delete(buffer, self.select_end, self.select_start - self.select_end)
            self.select_start = self.cursor = self.select_end
        self.has_preferred_x = False

    def _sort_selection(self) -> None:
        if self.select_end < self.select_start:
            self.select_start, self.select_end = self.select_end, self.select_start

    def _move_to_first(self) -> None:
        if self.has_selection():
            self._sort_selection()
            self.cursor = self.select_start
            self.select_end = self.select_start
            self.has_preferred_x = False

    def _move_to_last(self, buffer: TextBuffer) -> None:
        if self.has_selection():
            self._sort_selection()
            self.clamp(buffer)
            self.cursor = self.select_end
            self.select_start = self.select_end
            self.has_preferred_x = False

    def _prep_selection_at_cursor(self) -> None:
        if not self.has_selection():
            self.select_start = self.select_end = self.cursor
        else:
            self.cursor = self.select_end

    def cut(self, buffer: TextBuffer) -> bool:
        """Delete the selection; return True if there was one."""
        if self.has_selection():
            self._delete_selection(buffer)
            self.has_preferred_x = False
            return True
        return False

    def paste(self, buffer: TextBuffer, text: Iterable[str]) -> bool:
        """Insert ``text`` at the cursor, replacing the selection; return True on success."""
        chars = list(text)
        self.clamp(buffer)
        self._delete_selection(buffer)
        if buffer.insert_chars(self.cursor, chars):
            self.undostate.make_insert(self.cursor, len(chars))
            self.cursor += len(chars)
            self.has_preferred_x = False
            return True
        return False

    def _type_char(self, buffer: TextBuffer, ch: str) -> None:
        if ch == NEWLINE and self.single_line:
            return
        if self.insert_mode and not self.has_selection() and self.cursor < len(buffer):
            self.undostate.make_replace(buffer, self.cursor, 1, 1)
            buffer.delete_chars(self.cursor, 1)
            if buffer.insert_chars(self.cursor, [ch]):
                self.cursor += 1
                self.has_preferred_x = False
        else:
            self._delete_selection(buffer)
            if buffer.insert_chars(self.cursor, [ch]):
                self.undostate.make_insert(self.cursor, 1)
                self.cursor += 1
                self.has_preferred_x = False

    # Keyboard

    def key(self, buffer: TextBuffer, key: int | str) -> None:
        """Process one keyboard input: a character to type or a :class:`Key` code."""
        ch = _key_to_char(key)
        if ch is not None:
            self._type_char(buffer, ch)
            return
        if key < _KEY_BASE:
            return

        shifted = bool(key & Key.SHIFT)
        try:
            base = Key(key & ~Key.SHIFT)
        except ValueError:
            return
        if shifted and base in _UNSHIFTABLE:
            return

        if base is Key.INSERT:
            self.insert_mode = not self.insert_mode
        elif base is Key.UNDO:
            cursor = self.undostate.undo(buffer)
            if cursor is not None:
                self.cursor = cursor
            self.has_preferred_x = False
        elif base is Key.REDO:
            cursor = self.undostate.redo(buffer)
            if cursor is not None:
                self.cursor = cursor
            self.has_preferred_x = False
        elif base is Key.LEFT:
            self._key_left(buffer, shifted)
        elif base is Key.RIGHT:
            self._key_right(buffer, shifted)
        elif base is Key.WORDLEFT:
            self._key_word(buffer, shifted, move_word_left, left=True)
        elif base is Key.WORDRIGHT:
            self._key_word(buffer, shifted, move_word_right, left=False)
        elif base in (Key.DOWN, Key.PGDOWN):
            self._key_down(buffer, key, shifted, base is Key.PGDOWN)
        elif base in (Key.UP, Key.PGUP):
            self._key_up(buffer, key, shifted, base is Key.PGUP)
        elif base is Key.DELETE:
            if self.has_selection():
                self._delete_selection(buffer)
            elif self.cursor < len(buffer):
                self._delete(buffer, self.cursor, 1)
            self.has_preferred_x = False
        elif base is Key.BACKSPACE:
            if self.has_selection():
                self._delete_selection(buffer)
            else:
                self.clamp(buffer)
                if self.cursor > 0:
                    self._delete(buffer, self.cursor - 1, 1)
                    self.cursor -= 1
            self.has_preferred_x = False
        elif base is Key.TEXTSTART:
            if shifted:
                self._prep_selection_at_cursor()
                self.cursor = self.select_end = 0
            else:
                self.cursor = self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif base is Key.TEXTEND:
            if shifted:
                self._prep_selection_at_cursor()
                self.cursor = self.select_end = len(buffer)
            else:
                self.cursor = len(buffer)
                self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif base is Key.LINESTART:
            self.clamp(buffer)
            if shifted:
                self._prep_selection_at_cursor()
            else:
                self._move_to_first()
            if self.single_line:
                self.cursor = 0
            else:
                while self.cursor > 0 and buffer.char_at(self.cursor - 1) != NEWLINE:
                    self.cursor -= 1
            if shifted:
                self.select_end = self.cursor
            self.has_preferred_x = False
        elif base is Key.LINEEND:
            n = len(buffer)
            self.clamp(buffer)
            if shifted:
                self._prep_selection_at_cursor()
            else:
                self._move_to_first()
            if self.single_line:
                self.cursor = n
            else:
                while self.cursor < n and buffer.char_at(self.cursor) != NEWLINE:
                    self.cursor += 1
            if shifted:
                self.select_end = self.cursor
            self.has_preferred_x = False

    def _key_left(self, buffer: TextBuffer, shifted: bool) -> None:
        if shifted:
            self.clamp(buffer)
            self._prep_selection_at_cursor()
            if self.select_end > 0:
                self.select_end -= 1
            self.cursor = self.select_end
        elif self.has_selection():
            self._move_to_first()
        elif self.cursor > 0:
            self.cursor -= 1
        self.has_preferred_x = False

    def _key_right(self, buffer: TextBuffer, shifted: bool) -> None:
        if shifted:
            self._prep_selection_at_cursor()
            self.select_end += 1
            self.clamp(buffer)
            self.cursor = self.select_end
        else:
            if self.has_selection():
                self._move_to_last(buffer)
            else:
                self.cursor += 1
            self.clamp(buffer)
        self.has_preferred_x = False

    def _key_word(self, buffer: TextBuffer, shifted: bool, move, left: bool) -> None:
        if shifted:
            if not self.has_selection():
                self._prep_selection_at_cursor()
            self.cursor = move(buffer, self.cursor)
            self.select_end = self.cursor
            self.clamp(buffer)
        elif self.has_selection():
            if left:
                self._move_to_first()
            else:
                self._move_to_last(buffer)
        else:
            self.cursor = move(buffer, self.cursor)
            self.clamp(buffer)

    def _advance_in_row(self, buffer: TextBuffer, start: int, goal_x: float) -> int:
        """Number of rows-worth advance: returns the row's character count after moving."""
        self.cursor = start
        row = buffer.layout_row(start)
        x = row.x0
        for i in range(row.num_chars):
            dx = buffer.char_width(start, i)
            if dx == NEWLINE_WIDTH:
                break
            x += dx
            if x > goal_x:
                break
            self.cursor += 1
        self.clamp(buffer)
        return row.num_chars

    def _key_down(self, buffer: TextBuffer, key: int, shifted: bool, is_page: bool) -> None:
        if not is_page and self.single_line:
            self.key(buffer, Key.RIGHT | (key & Key.SHIFT))
            return
        if shifted:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_last(buffer)

        self.clamp(buffer)
        find = find_charpos(buffer, self.cursor, self.single_line)
        row_count = self.row_count_per_page if is_page else 1

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            start = find.first_char + find.length
            if find.length == 0:
                break
            # On the last line, going down does not jump to the line end.
            if buffer.char_at(start - 1) != NEWLINE:
                break
            num_chars = self._advance_in_row(buffer, start, goal_x)
            self.has_preferred_x = True
            self.preferred_x = goal_x
            if shifted:
                self.select_end = self.cursor
            find.first_char = start
            find.length = num_chars

    def _key_up(self, buffer: TextBuffer, key: int, shifted: bool, is_page: bool) -> None:
        if not is_page and self.single_line:
            self.key(buffer, Key.LEFT | (key & Key.SHIFT))
            return
        if shifted:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_first()

        self.clamp(buffer)
        find = find_charpos(buffer, self.cursor, self.single_line)
        row_count = self.row_count_per_page if is_page else 1

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            if find.prev_first == find.first_char:
                break
            self._advance_in_row(buffer, find.prev_first, goal_x)
            self.has_preferred_x = True
            self.preferred_x = goal_x
            if shifted:
                self.select_end = self.cursor
            prev_scan = find.prev_first - 1 if find.prev_first > 0 else 0
            while prev_scan > 0 and buffer.char_at(prev_scan - 1) != NEWLINE:
                prev_scan -= 1
            find.first_char = find.prev_first
            find.prev_first = prev_scan