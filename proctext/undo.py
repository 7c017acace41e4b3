"""Bounded undo/redo history for a text buffer.

Undo and redo records share one fixed-size record array: undo records grow
upward from the start, redo records grow downward from the end. Characters
that must be restored are kept in one fixed-size character store, laid out
the same way.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .layout import TextBuffer

__all__ = [
    "UNDO_CHAR_COUNT",
    "UNDO_STATE_COUNT",
    "UndoRecord",
    "UndoState",
]

UNDO_STATE_COUNT = 99
UNDO_CHAR_COUNT = 999


@dataclass
class UndoRecord:
    """One edit: at ``where``, delete ``delete_length`` characters, then insert
    ``insert_length`` characters kept at ``char_storage`` (-1 when none are kept)."""

    where: int = 0
    insert_length: int = 0
    delete_length: int = 0
    char_storage: int = -1


class UndoState:
    """Undo and redo history with a fixed number of records and characters."""

    def __init__(self, state_count: int = UNDO_STATE_COUNT, char_count: int = UNDO_CHAR_COUNT) -> None:
        if state_count < 1:
            raise ValueError("state_count must be at least 1")
        if char_count < 0:
            raise ValueError("char_count must not be negative")
        self.state_count = state_count
        self.char_count = char_count
        self.records: list[UndoRecord] = [UndoRecord() for _ in range(state_count)]
        self.chars: list[str] = [""] * char_count
        self.undo_point = 0
        self.redo_point = state_count
        self.undo_char_point = 0
        self.redo_char_point = char_count

    def clear(self) -> None:
        """Forget all undo and redo history."""
        self.undo_point = 0
        self.undo_char_point = 0
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def flush_redo(self) -> None:
        """Drop every redo record."""
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def discard_undo(self) -> None:
        """Drop the oldest undo record, freeing its characters."""
        if self.undo_point <= 0:
            return
        first = self.records[0]
        if first.char_storage >= 0:
            n = first.insert_length
            self.undo_char_point -= n
            self.chars[0:self.undo_char_point] = self.chars[n:n + self.undo_char_point]
            for rec in self.records[:self.undo_point]:
                if rec.char_storage >= 0:
                    rec.char_storage -= n
        self.undo_point -= 1
        self.records[0:self.undo_point] = [
            replace(rec) for rec in self.records[1:self.undo_point + 1]
        ]

    def discard_redo(self) -> None:
        """Drop the oldest redo record, freeing its characters."""
        k = self.state_count - 1
        if self.redo_point > k:
            return
        oldest = self.records[k]
        if oldest.char_storage >= 0:
            n = oldest.insert_length
            self.redo_char_point += n
            self.chars[self.redo_char_point:self.char_count] = self.chars[
                self.redo_char_point - n:self.char_count - n
            ]
            for rec in self.records[self.redo_point:k]:
                if rec.char_storage >= 0:
                    rec.char_storage += n
        start = self.redo_point
        self.records[start + 1:self.state_count] = [
            replace(rec) for rec in self.records[start:self.state_count - 1]
        ]
        self.redo_point += 1

    def _create_record(self, numchars: int) -> UndoRecord | None:
        self.flush_redo()
        if self.undo_point == self.state_count:
            self.discard_undo()
        if numchars > self.char_count:
            self.undo_point = 0
            self.undo_char_point = 0
            return None
        while self.undo_char_point + numchars > self.char_count:
            self.discard_undo()
        rec = self.records[self.undo_point]
        self.undo_point += 1
        return rec

    def create_undo(self, pos: int, insert_len: int, delete_len: int) -> int | None:
        """Push a new undo record and discard all redo history.

        Returns the index in ``chars`` where the ``insert_len`` characters to
        restore must be written, or None when there are none to keep (or
        they cannot fit at all, in which case the undo history is emptied).
        """
        rec = self._create_record(insert_len)
        if rec is None:
            return None
        rec.where = pos
        rec.insert_length = insert_len
        rec.delete_length = delete_len
        if insert_len == 0:
            rec.char_storage = -1
            return None
        rec.char_storage = self.undo_char_point
        self.undo_char_point += insert_len
        return rec.char_storage

    def make_insert(self, where: int, length: int) -> None:
        """Record that ``length`` characters are being inserted at ``where``."""
        self.create_undo(where, 0, length)

    def _save(self, start: int | None, buffer: TextBuffer, where: int, length: int) -> None:
        if start is not None:
            self.chars[start:start + length] = [buffer.char_at(where + i) for i in range(length)]

    def make_delete(self, buffer: TextBuffer, where: int, length: int) -> None:
        """Record, before it happens, the deletion of ``length`` characters at ``where``."""
        start = self.create_undo(where, length, 0)
        self._save(start, buffer, where, length)

    def make_replace(self, buffer: TextBuffer, where: int, old_length: int, new_length: int) -> None:
        """Record, before it happens, replacing ``old_length`` characters with ``new_length``."""
        start = self.create_undo(where, old_length, new_length)
        self._save(start, buffer, where, old_length)

    def undo(self, buffer: TextBuffer) -> int | None:
        """Revert the latest edit in ``buffer``; return the new cursor, or None."""
        if self.undo_point == 0:
            return None
        u = replace(self.records[self.undo_point - 1])
        r = self.records[self.redo_point - 1]
        r.char_storage = -1
        r.insert_length = u.delete_length
        r.delete_length = u.insert_length
        r.where = u.where

        if u.delete_length:
            if self.undo_char_point + u.delete_length >= self.char_count:
                r.insert_length = 0
            else:
                while self.undo_char_point + u.delete_length > self.redo_char_point:
                    if self.redo_point == self.state_count:
                        return None
                    self.discard_redo()
                r = self.records[self.redo_point - 1]
                r.char_storage = self.redo_char_point - u.delete_length
                self.redo_char_point = r.char_storage
                self._save(r.char_storage, buffer, u.where, u.delete_length)
            buffer.delete_chars(u.where, u.delete_length)

        if u.insert_length:
            stored = self.chars[u.char_storage:u.char_storage + u.insert_length]
            buffer.insert_chars(u.where, stored)
            self.undo_char_point -= u.insert_length

        cursor = u.where + u.insert_length
        self.undo_point -= 1
        self.redo_point -= 1
        return cursor

    def redo(self, buffer: TextBuffer) -> int | None:
        """Reapply the latest undone edit in ``buffer``; return the new cursor, or None."""
        if self.redo_point == self.state_count:
            return None
        u = self.records[self.undo_point]
        r = replace(self.records[self.redo_point])

        u.delete_length = r.insert_length
        u.insert_length = r.delete_length
        u.where = r.where
        u.char_storage = -1

        if r.delete_length:
            if self.undo_char_point + u.insert_length > self.redo_char_point:
                u.insert_length = 0
                u.delete_length = 0
            else:
                u.char_storage = self.undo_char_point
                self.undo_char_point += u.insert_length
                self._save(u.char_storage, buffer, u.where, u.insert_length)
            buffer.delete_chars(r.where, r.delete_length)

        if r.insert_length:
            stored = self.chars[r.char_storage:r.char_storage + r.insert_length]
            buffer.insert_chars(r.where, stored)
            self.redo_char_point += r.insert_length

        cursor = r.where + r.insert_length
        self.undo_point += 1
        self.redo_point += 1
        return cursor