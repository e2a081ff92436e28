"""EditSession: the read/decode/dispatch/render loop.

The session waits on a :class:`ByteSource`, decodes what arrives into
tokens, dispatches each token through the key map and writes the staged
render output to a :class:`ByteSink` until a commit ends the line.
"""

from __future__ import annotations

import codecs
import logging
from collections import deque

from pi.readline.actions import InsertLiteral, Signal, apply
from pi.readline.config import ReadlineConfig
from pi.readline.history import History
from pi.readline.input_decoder import InputDecoder, is_escape_sequence
from pi.readline.keymap import Binding, KeyMap
from pi.readline.line_buffer import LineBuffer
from pi.readline.render import Renderer
from pi.readline.terminal import (
    ByteSink,
    ByteSource,
    FdSink,
    FdSource,
    RawMode,
    TermiosControl,
    TerminalControl,
)

logger = logging.getLogger(__name__)


class EditSession:
    """Interactive line editor over a byte source and sink.

    Use as a context manager to hold raw mode across several
    ``read_line`` calls; otherwise each call acquires and restores raw mode
    on its own.
    """

    def __init__(
        self,
        source: ByteSource | None = None,
        sink: ByteSink | None = None,
        control: TerminalControl | None = None,
        *,
        config: ReadlineConfig | None = None,
        keymap: KeyMap | None = None,
        history: History | None = None,
    ) -> None:
        self.config = config if config is not None else ReadlineConfig.from_env()
        self.source: ByteSource = source if source is not None else FdSource()
        self.sink: ByteSink = sink if sink is not None else FdSink(write_log=self.config.write_log)
        self.keymap = keymap if keymap is not None else KeyMap()
        self.history = history if history is not None else History(self.config.history_size)

        self.buffer = LineBuffer()
        self.renderer = Renderer(self.buffer)
        # Text removed by the last run of consecutive word deletions.
        self.killed: str = ""
        self.pending_output: str = ""
        self.last_action: str | None = None

        self._raw_mode = RawMode(control if control is not None else TermiosControl())
        self._decoder = InputDecoder(self.keymap)
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        # Tokens decoded but not yet dispatched, carried over between lines.
        self._queued: deque[str] = deque()
        self._canonical_buffer: str = ""

    # -- context manager ----------------------------------------------------

    def __enter__(self) -> EditSession:
        self._raw_mode.__enter__()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._raw_mode.__exit__(*exc_info)

    # -- properties ---------------------------------------------------------

    @property
    def prefix(self) -> str:
        return self.renderer.prefix

    @property
    def line(self) -> str:
        return self.buffer.text

    # -- public API ---------------------------------------------------------

    def read_line(self, prefix: str = "") -> str | None:
        """Read one line of input, showing *prefix* as the prompt.

        Returns the committed line without its newline, or ``None`` when the
        source reports end of input.
        """
        with self._raw_mode:
            if not self._raw_mode.active:
                return self._read_canonical(prefix)
            return self._read_raw(prefix)

    def add_mapping(self, trigger: str, action: Binding) -> None:
        self.keymap.bind(trigger, action)

    def add_history(self, line: str) -> None:
        self.history.record(line)

    def get_history(self, index: int | None = None) -> str | None:
        return self.history.get(index)

    def clear_history(self) -> None:
        self.history.clear()

    # -- raw mode loop ------------------------------------------------------

    def _read_raw(self, prefix: str) -> str | None:
        self.buffer.reset()
        self.renderer.prefix = prefix
        self.last_action = None
        self.sink.write(prefix)

        while True:
            while self._queued:
                if self._dispatch(self._queued.popleft()) is Signal.DONE:
                    return self.buffer.text

            held = bool(self._decoder.pending)
            timeout = self.config.escape_timeout if held else self.config.wait_timeout
            if not self.source.poll(timeout):
                if held:
                    self._queued.extend(self._decoder.flush())
                continue

            data = self.source.read_chunk(self.config.chunk_size)
            if not data:
                logger.debug("End of input while reading a line")
                self._decoder.clear()
                self._utf8.reset()
                return None

            self._queued.extend(self._decoder.feed(self._utf8.decode(data)))

    def _dispatch(self, token: str) -> Signal:
        action = self.keymap.lookup(token)
        if action is None:
            if is_escape_sequence(token):
                logger.debug("Ignoring unbound escape sequence %r", token)
                return Signal.CONTINUE
            action = InsertLiteral(token)

        self.pending_output = token
        signal = apply(action, self)
        if signal is not Signal.CONTINUE_SILENT and self.pending_output:
            self.sink.write(self.pending_output)
        self.pending_output = ""
        return signal

    # -- canonical fallback -------------------------------------------------

    def _read_canonical(self, prefix: str) -> str | None:
        while "\n" not in self._canonical_buffer:
            data = self.source.read_chunk(self.config.chunk_size)
            if not data:
                break
            self._canonical_buffer += self._utf8.decode(data)

        if not self._canonical_buffer:
            return None

        line, _, self._canonical_buffer = self._canonical_buffer.partition("\n")
        if line.endswith("\r"):
            line = line[:-1]
        self.sink.write(prefix + line + "\n")
        return line


_default_session: EditSession | None = None


def get_session() -> EditSession:
    """Return the process-wide session used by :func:`readline`."""
    global _default_session
    if _default_session is None:
        _default_session = EditSession()
    return _default_session


def readline(prefix: str = "") -> str | None:
    """Read a line from stdin with editing and history."""
    return get_session().read_line(prefix)
