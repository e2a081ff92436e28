"""Single-line text buffer with a grapheme-aware cursor."""

from __future__ import annotations

from pi.readline.utils import first_grapheme, graphemes, is_whitespace_char, last_grapheme


class LineBuffer:
    """The line being edited and the cursor offset into it.

    ``cursor`` is a ``str`` index in ``[0, len(text)]``. Movement and
    deletion step over whole grapheme clusters so combined characters and
    emoji sequences are never split.
    """

    def __init__(self, text: str = "") -> None:
        self._text: str = text
        self._cursor: int = len(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def length(self) -> int:
        return len(self._text)

    @property
    def at_end(self) -> bool:
        return self._cursor == len(self._text)

    @property
    def before_cursor(self) -> str:
        return self._text[: self._cursor]

    @property
    def after_cursor(self) -> str:
        return self._text[self._cursor :]

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"LineBuffer(text={self._text!r}, cursor={self._cursor})"

    # -- editing ------------------------------------------------------------

    def append(self, s: str) -> None:
        self._text += s
        self._cursor = len(self._text)

    def insert_at_cursor(self, s: str) -> None:
        """Splice *s* in at the cursor and move the cursor past it."""
        if self.at_end:
            self.append(s)
            return
        self._text = self._text[: self._cursor] + s + self._text[self._cursor :]
        self._cursor += len(s)

    def delete_before_cursor(self) -> str:
        """Remove the grapheme before the cursor and return it."""
        if self._cursor == 0:
            return ""
        removed = last_grapheme(self.before_cursor) or self._text[self._cursor - 1]
        start = self._cursor - len(removed)
        self._text = self._text[:start] + self._text[self._cursor :]
        self._cursor = start
        return removed

    def delete_word_before_cursor(self) -> str:
        """Remove whitespace then one word before the cursor; return it."""
        if self._cursor == 0:
            return ""
        parts = graphemes(self.before_cursor)
        start = self._cursor

        while parts and is_whitespace_char(parts[-1]):
            start -= len(parts.pop())
        while parts and not is_whitespace_char(parts[-1]):
            start -= len(parts.pop())

        removed = self._text[start : self._cursor]
        self._text = self._text[:start] + self._text[self._cursor :]
        self._cursor = start
        return removed

    def set_whole(self, s: str) -> None:
        self._text = s
        self._cursor = len(s)

    def reset(self) -> None:
        self._text = ""
        self._cursor = 0

    # -- cursor movement ----------------------------------------------------

    def move_cursor(self, delta: int) -> bool:
        """Move the cursor by *delta* grapheme clusters, clamping at both ends.

        Returns whether the cursor position changed.
        """
        old = self._cursor
        pos = self._cursor
        while delta > 0 and pos < len(self._text):
            g = first_grapheme(self._text[pos:])
            pos += len(g) or 1
            delta -= 1
        while delta < 0 and pos > 0:
            g = last_grapheme(self._text[:pos])
            pos -= len(g) or 1
            delta += 1
        self._cursor = pos
        return pos != old

    def move_to_start(self) -> bool:
        old = self._cursor
        self._cursor = 0
        return old != 0

    def move_to_end(self) -> bool:
        old = self._cursor
        self._cursor = len(self._text)
        return old != self._cursor
