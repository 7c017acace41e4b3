"""Text buffers and row layout queries used to place the cursor in edited text."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

__all__ = [
    "NEWLINE",
    "NEWLINE_WIDTH",
    "FindState",
    "SimpleTextBuffer",
    "TextBuffer",
    "TextRow",
    "find_charpos",
    "locate_coord",
]

NEWLINE = "\n"
# Width reported for a newline character; cursor movement stops on it.
NEWLINE_WIDTH = -1.0


@dataclass(frozen=True)
class TextRow:
    """Layout of one displayed row of characters."""

    x0: float = 0.0
    x1: float = 0.0
    baseline_y_delta: float = 0.0
    ymin: float = 0.0
    ymax: float = 0.0
    num_chars: int = 0


@dataclass
class FindState:
    """Position of a character, with the extent of its row and the previous row's start."""

    x: float = 0.0
    y: float = 0.0
    height: float = 0.0
    first_char: int = 0
    length: int = 0
    prev_first: int = 0


class TextBuffer(ABC):
    """The string being edited, together with its layout."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of characters in the buffer."""

    @abstractmethod
    def char_at(self, index: int) -> str:
        """The character at ``index``."""

    @abstractmethod
    def delete_chars(self, index: int, count: int) -> None:
        """Remove ``count`` characters starting at ``index``."""

    @abstractmethod
    def insert_chars(self, index: int, chars: Iterable[str]) -> bool:
        """Insert ``chars`` at ``index``; return False if they do not fit."""

    @abstractmethod
    def layout_row(self, start: int) -> TextRow:
        """Lay out the row of characters beginning at ``start``."""

    @abstractmethod
    def char_width(self, line_start: int, index: int) -> float:
        """Advance of the ``index``-th character of the row starting at ``line_start``."""


class SimpleTextBuffer(TextBuffer):
    """A monospaced buffer that breaks rows only at newlines."""

    def __init__(self, text: str = "", glyph_width: float = 1.0, line_height: float = 1.0) -> None:
        if glyph_width <= 0.0:
            raise ValueError("glyph_width must be positive")
        if line_height <= 0.0:
            raise ValueError("line_height must be positive")
        self._chars: list[str] = list(text)
        self.glyph_width = glyph_width
        self.line_height = line_height

    @property
    def text(self) -> str:
        """The current contents as a string."""
        return "".join(self._chars)

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self._chars)

    def char_at(self, index: int) -> str:
        if not 0 <= index < len(self._chars):
            raise IndexError(f"character index {index} out of range")
        return self._chars[index]

    def delete_chars(self, index: int, count: int) -> None:
        if count < 0:
            raise ValueError("count must not be negative")
        if index < 0 or index + count > len(self._chars):
            raise IndexError(f"cannot delete {count} characters at {index}")
        del self._chars[index:index + count]

    def insert_chars(self, index: int, chars: Iterable[str]) -> bool:
        if not 0 <= index <= len(self._chars):
            raise IndexError(f"insert position {index} out of range")
        self._chars[index:index] = list(chars)
        return True

    def layout_row(self, start: int) -> TextRow:
        if not 0 <= start <= len(self._chars):
            raise IndexError(f"row start {start} out of range")
        end = start
        while end < len(self._chars) and self._chars[end] != NEWLINE:
            end += 1
        visible = end - start
        num_chars = visible + 1 if end < len(self._chars) else visible
        return TextRow(
            x0=0.0,
            x1=visible * self.glyph_width,
            baseline_y_delta=self.line_height,
            ymin=0.0,
            ymax=self.line_height,
            num_chars=num_chars,
        )

    def char_width(self, line_start: int, index: int) -> float:
        if self.char_at(line_start + index) == NEWLINE:
            return NEWLINE_WIDTH
        return self.glyph_width


def locate_coord(buffer: TextBuffer, x: float, y: float) -> int:
    """Index of the character position nearest to the display point (x, y)."""
    n = len(buffer)
    base_y = 0.0
    i = 0
    row = TextRow()

    while i < n:
        row = buffer.layout_row(i)
        if row.num_chars <= 0:
            return n
        if i == 0 and y < base_y + row.ymin:
            return 0
        if y < base_y + row.ymax:
            break
        i += row.num_chars
        base_y += row.baseline_y_delta

    if i >= n:
        return n

    if x < row.x0:
        return i

    if x < row.x1:
        prev_x = row.x0
        for k in range(row.num_chars):
            w = buffer.char_width(i, k)
            if x < prev_x + w:
                return i + k if x < prev_x + w / 2 else i + k + 1
            prev_x += w

    last = i + row.num_chars - 1
    if buffer.char_at(last) == NEWLINE:
        return last
    return i + row.num_chars


def find_charpos(buffer: TextBuffer, n: int, single_line: bool) -> FindState:
    """Locate character ``n``: its x/y, its row, and where the previous row starts."""
    z = len(buffer)

    if n == z and single_line:
        row = buffer.layout_row(0)
        return FindState(
            x=row.x1,
            y=0.0,
            height=row.ymax - row.ymin,
            first_char=0,
            length=z,
            prev_first=0,
        )

    y = 0.0
    prev_start = 0
    i = 0
    while True:
        row = buffer.layout_row(i)
        num_chars = row.num_chars
        if n < i + num_chars:
            break
        if i + num_chars == z and z > 0 and buffer.char_at(z - 1) != NEWLINE:
            break
        if num_chars <= 0 and i < z:
            raise ValueError(f"layout returned an empty row at {i}")
        prev_start = i
        i += num_chars
        y += row.baseline_y_delta
        if i == z:
            num_chars = 0
            break

    first = i
    x = row.x0
    for k in range(n - first):
        x += buffer.char_width(first, k)

    return FindState(
        x=x,
        y=y,
        height=row.ymax - row.ymin,
        first_char=first,
        length=num_chars,
        prev_first=prev_start,
    )