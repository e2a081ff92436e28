"""In-memory terminal collaborators for testing.

``ScriptedSource`` replays a fixed list of reads, ``RecordingSink``
captures everything written and ``FakeControl`` records raw-mode
transitions, so an ``EditSession`` can run end to end without a tty.
"""

from __future__ import annotations

from collections import deque

from pi.readline.config import ReadlineConfig
from pi.readline.session import EditSession

# Raw escape codes for key sequences
KEY_UP = b"\x1b[A"
KEY_DOWN = b"\x1b[B"
KEY_RIGHT = b"\x1b[C"
KEY_LEFT = b"\x1b[D"
KEY_BACKSPACE = b"\x7f"
KEY_ENTER = b"\n"


class ScriptedSource:
    """Byte source that returns each scripted chunk from one read.

    ``None`` entries simulate a poll timeout. When the script runs out the
    source reports end of input.
    """

    def __init__(self, chunks: list[bytes | None] | None = None) -> None:
        self._chunks: deque[bytes | None] = deque(chunks or [])
        self.polls: list[float] = []
        self.reads: int = 0

    def push(self, *chunks: bytes | None) -> None:
        self._chunks.extend(chunks)

    def poll(self, timeout: float) -> bool:
        self.polls.append(timeout)
        if self._chunks and self._chunks[0] is None:
            self._chunks.popleft()
            return False
        return True

    def read_chunk(self, max_bytes: int) -> bytes:
        self.reads += 1
        while self._chunks and self._chunks[0] is None:
            self._chunks.popleft()
        if not self._chunks:
            return b""
        chunk = self._chunks.popleft()
        assert chunk is not None
        if len(chunk) > max_bytes:
            self._chunks.appendleft(chunk[max_bytes:])
            chunk = chunk[:max_bytes]
        return chunk


class RecordingSink:
    """Byte sink that records every write."""

    def __init__(self) -> None:
        self._buffer: list[str] = []

    def write(self, data: str) -> None:
        self._buffer.append(data)

    @property
    def output(self) -> str:
        """Return everything written as a single string."""
        return "".join(self._buffer)

    @property
    def writes(self) -> list[str]:
        return list(self._buffer)

    def clear(self) -> None:
        self._buffer.clear()


class FakeControl:
    """Terminal control that records enter/restore calls."""

    def __init__(self, supported: bool = True) -> None:
        self.supported = supported
        self.entered: int = 0
        self.restored: list[object] = []
        self.raw: bool = False

    def enter_raw_mode(self) -> object | None:
        if not self.supported:
            return None
        self.entered += 1
        self.raw = True
        return {"mode": "cooked", "n": self.entered}

    def restore_mode(self, token: object) -> None:
        self.restored.append(token)
        self.raw = False


def make_session(
    chunks: list[bytes | None] | None = None,
    *,
    raw: bool = True,
    config: ReadlineConfig | None = None,
) -> tuple[EditSession, ScriptedSource, RecordingSink, FakeControl]:
    source = ScriptedSource(chunks)
    sink = RecordingSink()
    control = FakeControl(supported=raw)
    session = EditSession(source, sink, control, config=config or ReadlineConfig())
    return session, source, sink, control


def keys(*parts: bytes | str) -> list[bytes | None]:
    """Turn each part into a separate read."""
    return [p.encode("utf-8") if isinstance(p, str) else p for p in parts]
