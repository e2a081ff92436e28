"""InputDecoder splits raw terminal input into dispatchable tokens.

Terminal reads can return partial chunks: an arrow key may arrive as
``ESC`` in one read and ``[A`` in the next, and pasted text can carry
several keys in a single read. The decoder accumulates input across reads
and emits one token per registered trigger, per complete escape sequence,
or per run of literal text. Anything that could still grow into a trigger
or escape sequence is held until more input arrives or ``flush`` is
called.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

logger = logging.getLogger(__name__)

ESC = "\x1b"

_SGR_MOUSE_RE = re.compile(r"^<\d+;\d+;\d+[Mm]$")


def _is_complete_sequence(data: str) -> str:
    """Check if a string is a complete escape sequence or needs more data.

    Returns 'complete', 'incomplete', or 'not-escape'.
    """
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    after_esc = data[1:]

    # CSI sequences: ESC [
    if after_esc.startswith("["):
        if after_esc.startswith("[M"):
            return "complete" if len(data) >= 6 else "incomplete"
        return _is_complete_csi_sequence(data)

    # OSC (ESC ]), DCS (ESC P) and APC (ESC _) end with ST; OSC also with BEL
    if after_esc.startswith("]"):
        if data.endswith(f"{ESC}\\") or data.endswith("\x07"):
            return "complete"
        return "incomplete"

    if after_esc.startswith(("P", "_")):
        return "complete" if data.endswith(f"{ESC}\\") else "incomplete"

    # SS3 sequences: ESC O
    if after_esc.startswith("O"):
        return "complete" if len(after_esc) >= 2 else "incomplete"

    # Meta key sequences: ESC followed by a single character
    return "complete"


def _is_complete_csi_sequence(data: str) -> str:
    if len(data) < 3:
        return "incomplete"

    payload = data[2:]
    last_char = payload[-1]

    if 0x40 <= ord(last_char) <= 0x7E:
        if payload.startswith("<"):
            return "complete" if _SGR_MOUSE_RE.match(payload) else "incomplete"
        return "complete"

    return "incomplete"


def is_escape_sequence(data: str) -> bool:
    """Whether *data* is exactly one complete terminal escape sequence."""
    return _is_complete_sequence(data) == "complete"


def _escape_sequence_end(data: str) -> int:
    """Length of the complete escape sequence at the start of *data*, or 0."""
    for end in range(2, len(data) + 1):
        if _is_complete_sequence(data[:end]) == "complete":
            return end
    return 0


class InputDecoder:
    """Accumulates decoded input and splits it into tokens.

    *triggers* is re-read on every ``feed`` so bindings added between reads
    take effect immediately; pass a key map or any iterable of strings.
    """

    def __init__(self, triggers: Iterable[str] = ()) -> None:
        self._triggers = triggers
        self._buffer: str = ""

    @property
    def pending(self) -> str:
        """Input held back because it may be the start of a longer sequence."""
        return self._buffer

    def feed(self, data: str) -> list[str]:
        """Add *data* and return every token that is now complete."""
        self._buffer += data
        tokens, self._buffer = self._extract(self._buffer)
        return tokens

    def flush(self) -> list[str]:
        """Release held input as one literal token."""
        if not self._buffer:
            return []
        logger.debug("Flushing held input %r", self._buffer)
        tokens = [self._buffer]
        self._buffer = ""
        return tokens

    def clear(self) -> None:
        self._buffer = ""

    # -- private ------------------------------------------------------------

    def _extract(self, buffer: str) -> tuple[list[str], str]:
        """Split *buffer* into complete tokens.

        Returns (tokens, remainder).
        """
        triggers = list(self._triggers)
        starts = {t[0] for t in triggers}
        tokens: list[str] = []
        pos = 0

        while pos < len(buffer):
            remaining = buffer[pos:]

            if any(len(t) > len(remaining) and t.startswith(remaining) for t in triggers):
                return tokens, remaining

            match = max(
                (t for t in triggers if remaining.startswith(t)),
                key=len,
                default="",
            )
            if match:
                tokens.append(match)
                pos += len(match)
                continue

            if remaining.startswith(ESC):
                end = _escape_sequence_end(remaining)
                if not end:
                    return tokens, remaining
                tokens.append(remaining[:end])
                pos += end
                continue

            end = 1
            while end < len(remaining) and remaining[end] != ESC and remaining[end] not in starts:
                end += 1
            tokens.append(remaining[:end])
            pos += end

        return tokens, ""
