"""In-memory history of committed lines with a browsing cursor."""

from __future__ import annotations

from typing import Iterator


class History:
    """Committed lines, oldest first, plus a navigation cursor.

    The cursor ranges over ``[0, size]``; ``cursor == size`` means the user
    is editing a fresh line rather than browsing. ``previous`` clamps at the
    oldest entry while ``next`` past the newest entry hands back the live
    line that was being edited.
    """

    def __init__(self, max_size: int | None = None) -> None:
        self._entries: list[str] = []
        self._cursor: int = 0
        self._max_size = max_size

    @property
    def size(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def browsing(self) -> bool:
        return self._cursor < len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def record(self, line: str) -> None:
        """Append *line* (ignored when empty) and stop browsing."""
        if not line:
            return
        self._entries.append(line)
        if self._max_size is not None and len(self._entries) > self._max_size:
            del self._entries[: len(self._entries) - self._max_size]
        self._cursor = len(self._entries)

    def get(self, index: int | None = None) -> str | None:
        """Return the entry at *index* (default: the cursor), or ``None``."""
        if index is None:
            index = self._cursor
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def previous(self) -> str:
        if self._cursor <= 0:
            return self.get(0) or ""
        self._cursor -= 1
        return self._entries[self._cursor]

    def next(self, live: str = "") -> str:
        """Step towards the newest entry.

        Past the newest entry the cursor stays put and *live*, the line
        being edited, is returned instead.
        """
        if self._cursor + 1 >= len(self._entries):
            return live
        self._cursor += 1
        return self._entries[self._cursor]

    def clear(self) -> None:
        self._entries.clear()
        self._cursor = 0
