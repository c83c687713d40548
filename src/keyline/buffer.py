"""Editable text buffer with a codepoint cursor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from keyline.text import is_punctuation_char, is_whitespace_char

LINE_SEPARATOR = "\n"


@dataclass(frozen=True)
class BufferState:
    """Snapshot of the buffer content and cursor."""

    text: str = ""
    cursor: int = 0


class EditorBuffer:
    """The in-progress line being composed.

    ``cursor`` is an offset into ``text`` counted in codepoints and always
    satisfies ``0 <= cursor <= len(text)``. Every operation returns the
    resulting :class:`BufferState` and never raises. Operations that change
    the text call ``on_change`` with the new text; cursor-only moves do not.
    """

    def __init__(
        self,
        value: str = "",
        on_change: Callable[[str], None] | None = None,
    ) -> None:
        self._text = value
        self._cursor = len(value)
        self.on_change = on_change

    # -- Accessors -----------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def state(self) -> BufferState:
        return BufferState(text=self._text, cursor=self._cursor)

    @property
    def is_empty(self) -> bool:
        return not self._text

    @property
    def lines(self) -> list[str]:
        return self._text.split(LINE_SEPARATOR)

    @property
    def line_count(self) -> int:
        return self._text.count(LINE_SEPARATOR) + 1

    @property
    def cursor_line(self) -> int:
        """Index of the logical line holding the cursor."""
        return self._text.count(LINE_SEPARATOR, 0, self._cursor)

    @property
    def cursor_column(self) -> int:
        """Codepoint offset of the cursor within its logical line."""
        return self._cursor - self._line_start()

    def _line_start(self, pos: int | None = None) -> int:
        pos = self._cursor if pos is None else pos
        return self._text.rfind(LINE_SEPARATOR, 0, pos) + 1

    def _line_end(self, pos: int | None = None) -> int:
        pos = self._cursor if pos is None else pos
        end = self._text.find(LINE_SEPARATOR, pos)
        return len(self._text) if end == -1 else end

    # -- Internal mutation ---------------------------------------------------

    def _replace(self, text: str, cursor: int) -> BufferState:
        changed = text != self._text
        self._text = text
        self._cursor = max(0, min(cursor, len(text)))
        if changed and self.on_change:
            self.on_change(text)
        return self.state

    def _move_to(self, cursor: int) -> BufferState:
        self._cursor = max(0, min(cursor, len(self._text)))
        return self.state

    # -- Editing -------------------------------------------------------------

    def insert(self, text: str) -> BufferState:
        """Insert text at the cursor and advance past it in one step."""
        if not text:
            return self.state
        before = self._text[: self._cursor]
        after = self._text[self._cursor :]
        return self._replace(before + text + after, self._cursor + len(text))

    def delete_backward(self) -> BufferState:
        if self._cursor == 0:
            return self.state
        return self._replace(
            self._text[: self._cursor - 1] + self._text[self._cursor :],
            self._cursor - 1,
        )

    def delete_forward(self) -> BufferState:
        if self._cursor >= len(self._text):
            return self.state
        return self._replace(
            self._text[: self._cursor] + self._text[self._cursor + 1 :],
            self._cursor,
        )

    def delete_word_backward(self) -> BufferState:
        """Delete the word before the cursor.

        Trailing whitespace is skipped first, then either a run of
        punctuation or a run of word characters is removed. At the start of
        a line this joins with the previous line.
        """
        if self._cursor == 0:
            return self.state
        if self._cursor == self._line_start():
            return self.delete_backward()

        start = self._line_start()
        new_col = self._cursor
        while new_col > start and is_whitespace_char(self._text[new_col - 1]):
            new_col -= 1

        if new_col > start:
            if is_punctuation_char(self._text[new_col - 1]):
                while new_col > start and is_punctuation_char(self._text[new_col - 1]):
                    new_col -= 1
            else:
                while (
                    new_col > start
                    and not is_whitespace_char(self._text[new_col - 1])
                    and not is_punctuation_char(self._text[new_col - 1])
                ):
                    new_col -= 1

        return self._replace(self._text[:new_col] + self._text[self._cursor :], new_col)

    def delete_to_line_start(self) -> BufferState:
        start = self._line_start()
        if self._cursor == start:
            # At start of line - merge with previous line
            return self.delete_backward()
        return self._replace(self._text[:start] + self._text[self._cursor :], start)

    def delete_to_line_end(self) -> BufferState:
        end = self._line_end()
        if self._cursor == end:
            # At end of line - merge with next line
            return self.delete_forward()
        return self._replace(self._text[: self._cursor] + self._text[end:], self._cursor)

    def clear(self) -> BufferState:
        return self._replace("", 0)

    def set_whole(self, value: str) -> BufferState:
        """Replace the content and place the cursor at its end."""
        return self._replace(value, len(value))

    # -- Cursor movement -----------------------------------------------------

    def move_left(self) -> BufferState:
        return self._move_to(self._cursor - 1)

    def move_right(self) -> BufferState:
        return self._move_to(self._cursor + 1)

    def move_line_start(self) -> BufferState:
        return self._move_to(self._line_start())

    def move_line_end(self) -> BufferState:
        return self._move_to(self._line_end())

    def move_up(self) -> BufferState:
        """Move to the previous logical line, keeping the column where possible."""
        start = self._line_start()
        if start == 0:
            return self.state
        column = self._cursor - start
        prev_start = self._line_start(start - 1)
        prev_len = (start - 1) - prev_start
        return self._move_to(prev_start + min(column, prev_len))

    def move_down(self) -> BufferState:
        """Move to the next logical line, keeping the column where possible."""
        end = self._line_end()
        if end >= len(self._text):
            return self.state
        column = self._cursor - self._line_start()
        next_start = end + 1
        next_len = self._line_end(next_start) - next_start
        return self._move_to(next_start + min(column, next_len))
