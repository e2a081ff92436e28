"""Terminal collaborators: byte source, byte sink and raw-mode control.

The edit session only talks to the ``ByteSource``, ``ByteSink`` and
``TerminalControl`` protocols. ``FdSource``, ``FdSink`` and
``TermiosControl`` implement them on top of file descriptors, and
``RawMode`` scopes a raw-mode acquisition so the previous terminal
attributes are restored on every exit path.
"""

from __future__ import annotations

import logging
import os
import select
import sys
from typing import Any, Protocol

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class ByteSource(Protocol):
    """Where keystrokes come from."""

    def poll(self, timeout: float) -> bool:
        """Wait up to *timeout* seconds; return whether input is ready."""
        ...

    def read_chunk(self, max_bytes: int) -> bytes:
        """Read up to *max_bytes*. An empty result means end of input."""
        ...


class ByteSink(Protocol):
    """Where rendering output goes."""

    def write(self, data: str) -> None: ...


class TerminalControl(Protocol):
    """Switches the terminal in and out of raw mode."""

    def enter_raw_mode(self) -> Any | None:
        """Enter raw mode and return a token for the previous mode.

        Returns ``None`` when raw mode is not supported.
        """
        ...

    def restore_mode(self, token: Any) -> None: ...


# ---------------------------------------------------------------------------
# RawMode scope
# ---------------------------------------------------------------------------


class RawMode:
    """Scoped raw-mode acquisition.

    Re-entrant: only the outermost ``with`` block enters raw mode and
    restores the exact attributes captured on entry.
    """

    def __init__(self, control: TerminalControl) -> None:
        self._control = control
        self._depth: int = 0
        self._token: Any | None = None

    @property
    def active(self) -> bool:
        """Whether raw mode is currently held by this scope."""
        return self._token is not None

    def __enter__(self) -> RawMode:
        if self._depth == 0:
            self._token = self._control.enter_raw_mode()
            if self._token is None:
                logger.debug("Raw mode unavailable, using canonical input")
            else:
                logger.debug("Entered raw mode")
        self._depth += 1
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._depth -= 1
        if self._depth > 0 or self._token is None:
            return
        token, self._token = self._token, None
        self._control.restore_mode(token)
        logger.debug("Restored terminal mode")


# ---------------------------------------------------------------------------
# termios implementation
# ---------------------------------------------------------------------------


class TermiosControl:
    """Raw mode via :mod:`termios`: no echo, no line buffering.

    Equivalent to ``stty -echo -icanon min 1 time 0``; output processing is
    left alone so ``\\n`` still returns the carriage.
    """

    def __init__(self, fd: int | None = None) -> None:
        self._fd = sys.stdin.fileno() if fd is None else fd

    def enter_raw_mode(self) -> list | None:
        if sys.platform == "win32" or not os.isatty(self._fd):
            return None

        import termios
        import tty

        try:
            original = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd, termios.TCSADRAIN)
        except termios.error as exc:
            logger.debug("Could not enter raw mode on fd %d: %s", self._fd, exc)
            return None
        return original

    def restore_mode(self, token: list) -> None:
        import termios

        termios.tcsetattr(self._fd, termios.TCSADRAIN, token)


# ---------------------------------------------------------------------------
# File-descriptor source and sink
# ---------------------------------------------------------------------------


class FdSource:
    """Reads keystrokes from a file descriptor (stdin by default)."""

    def __init__(self, fd: int | None = None) -> None:
        self._fd = sys.stdin.fileno() if fd is None else fd

    def poll(self, timeout: float) -> bool:
        ready, _, _ = select.select([self._fd], [], [], timeout)
        return bool(ready)

    def read_chunk(self, max_bytes: int) -> bytes:
        return os.read(self._fd, max_bytes)


class FdSink:
    """Writes UTF-8 output to a file descriptor (stdout by default).

    When *write_log* is set every write is also appended to that file.
    """

    def __init__(self, fd: int | None = None, *, write_log: str = "") -> None:
        self._fd = sys.stdout.fileno() if fd is None else fd
        self._write_log_path = write_log

    def write(self, data: str) -> None:
        if not data:
            return
        view = memoryview(data.encode("utf-8"))
        while view:
            written = os.write(self._fd, view)
            view = view[written:]

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a", encoding="utf-8") as f:
                    f.write(data)
            except OSError as exc:
                logger.debug("Could not append to write log %s: %s", self._write_log_path, exc)
