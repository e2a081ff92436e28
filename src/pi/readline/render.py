"""Render diffs: the escape sequences that bring the terminal line in sync.

Every method returns the text to write; nothing is written here. Control
characters are drawn in caret form (``^I`` for Tab, ``^[`` for ESC) so every
character in the buffer occupies columns the cursor math can count. Column
distances are measured with :func:`visible_width` over that displayed form,
which equals the grapheme count for ordinary text.
"""

from __future__ import annotations

from pi.readline.line_buffer import LineBuffer
from pi.readline.utils import visible_width

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

CLEAR_TO_END = "\x1b[K"
_CURSOR_LEFT_FMT = "\x1b[{}D"
_CURSOR_RIGHT_FMT = "\x1b[{}C"


def cursor_left(columns: int) -> str:
    return _CURSOR_LEFT_FMT.format(columns) if columns > 0 else ""


def cursor_right(columns: int) -> str:
    return _CURSOR_RIGHT_FMT.format(columns) if columns > 0 else ""


def _display_char(ch: str) -> str:
    cp = ord(ch)
    if cp < 0x20 or cp == 0x7F:
        return "^" + chr(cp ^ 0x40)
    if 0x80 <= cp <= 0x9F:
        return f"\\{cp:o}"
    return ch


def display(text: str) -> str:
    """Return *text* as drawn on the terminal, with controls in caret form."""
    if text.isprintable():
        return text
    return "".join(_display_char(ch) for ch in text)


def display_width(text: str) -> int:
    return visible_width(display(text))


class Renderer:
    """Computes terminal output for mutations of a :class:`LineBuffer`."""

    def __init__(self, buffer: LineBuffer, prefix: str = "") -> None:
        self.buffer = buffer
        self.prefix = prefix

    def clear_current_line(self, text: str | None = None) -> str:
        """Blank out the prompt plus *text* (default: the buffer text)."""
        if text is None:
            text = self.buffer.text
        width = visible_width(self.prefix) + display_width(text) + 1
        return "\r" + " " * width

    def replace_line(self, old_text: str) -> str:
        """Redraw the whole line after the buffer text was replaced."""
        out = self.clear_current_line(old_text) + "\r" + self.prefix + display(self.buffer.text)
        return out + cursor_left(display_width(self.buffer.after_cursor))

    def insert(self, old_cursor: int) -> str:
        """Output for text inserted at *old_cursor*."""
        tail = self.buffer.text[old_cursor:]
        if self.buffer.at_end:
            return display(tail)
        return CLEAR_TO_END + display(tail) + cursor_left(display_width(self.buffer.after_cursor))

    def backspace(self, removed: str, at_end: bool) -> str:
        """Output for *removed* having been deleted before the cursor."""
        if not removed:
            return ""
        back = cursor_left(display_width(removed))
        if at_end:
            return back + CLEAR_TO_END
        tail = self.buffer.after_cursor
        return back + CLEAR_TO_END + display(tail) + cursor_left(display_width(tail))

    def move(self, old_cursor: int) -> str:
        """Output for a cursor move from *old_cursor* to the buffer cursor."""
        text = self.buffer.text
        new_cursor = self.buffer.cursor
        if new_cursor > old_cursor:
            return cursor_right(display_width(text[old_cursor:new_cursor]))
        if new_cursor < old_cursor:
            return cursor_left(display_width(text[new_cursor:old_cursor]))
        return ""

    def commit(self) -> str:
        return "\n"
